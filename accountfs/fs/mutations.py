"""
ACCOUNTFS - Mutation Executor

Bridges directory create/remove at the top level to account
creation/deletion through external commands.
"""

import logging

from accountfs.core.errors import (
    AlreadyExistsError,
    IOFailureError,
    NotFoundError,
    PermissionDeniedError,
)
from accountfs.fs.paths import is_top_level, is_valid_token
from accountfs.infrastructure.accounts import AccountDatabase
from accountfs.infrastructure.process import ProcessRunner

logger = logging.getLogger(__name__)

CREATE_COMMAND = "adduser"
DELETE_COMMAND = "userdel"


def create_args(name: str) -> list:
    """Non-interactive, passwordless creation with an empty GECOS field."""
    return ["--disabled-password", "--gecos", "", name]


def delete_args(name: str) -> list:
    """Deletion that also removes the home directory tree."""
    return ["--remove", name]


class MutationExecutor:
    """Answers mkdir and rmdir."""

    def __init__(self, accounts: AccountDatabase, runner: ProcessRunner):
        self._accounts = accounts
        self._runner = runner

    def _account_name(self, path: str) -> str:
        # Only "/<name>" may be mutated; root and nested paths never
        if not is_top_level(path):
            raise PermissionDeniedError(path)
        name = path[1:]
        if not is_valid_token(name):
            raise NotFoundError(path)
        return name

    def mkdir(self, path: str, mode: int = 0o755) -> None:
        """
        Create the account named by path. The mode is ignored.

        Raises:
            PermissionDeniedError: For root or nested paths
            AlreadyExistsError: If the account exists
            IOFailureError: If the creation command fails
        """
        name = self._account_name(path)
        if self._accounts.lookup(name) is not None:
            raise AlreadyExistsError(path)

        logger.info(f"Creating account {name!r}")
        if not self._runner.run(CREATE_COMMAND, create_args(name)):
            raise IOFailureError(path, f"{CREATE_COMMAND} failed for {name!r}")

    def rmdir(self, path: str) -> None:
        """
        Delete the account named by path together with its home directory.

        Raises:
            PermissionDeniedError: For root or anything inside an account directory
            NotFoundError: If the account does not exist
            IOFailureError: If the deletion command fails
        """
        name = self._account_name(path)
        if self._accounts.lookup(name) is None:
            raise NotFoundError(path)

        logger.info(f"Deleting account {name!r}")
        if not self._runner.run(DELETE_COMMAND, delete_args(name)):
            raise IOFailureError(path, f"{DELETE_COMMAND} failed for {name!r}")
