"""
ACCOUNTFS - Directory Lister

Enumerates the root (accounts with an interactive shell) and account
directories (their field files).
"""

import logging
from typing import List

from accountfs.core.errors import NotFoundError
from accountfs.core.types import ACCOUNT_FIELDS, AccountDir, Root
from accountfs.fs.paths import resolve
from accountfs.infrastructure.accounts import AccountDatabase

logger = logging.getLogger(__name__)


def is_interactive_shell(shell: str) -> bool:
    """Heuristic: the login shell path ends in "sh"."""
    return len(shell) >= 2 and shell.endswith("sh")


class DirectoryLister:
    """Answers readdir."""

    def __init__(self, accounts: AccountDatabase):
        self._accounts = accounts

    def readdir(self, path: str) -> List[str]:
        """
        List the entries of a directory, starting with "." and "..".

        Accounts hidden from the root listing remain reachable by name.

        Raises:
            NotFoundError: If path is not an existing directory
        """
        entity = resolve(path)
        entries = [".", ".."]

        if isinstance(entity, Root):
            with self._accounts.iterate() as records:
                entries.extend(r.name for r in records if is_interactive_shell(r.shell))
            logger.debug(f"readdir /: {len(entries) - 2} accounts")
            return entries

        if isinstance(entity, AccountDir):
            if self._accounts.lookup(entity.name) is None:
                raise NotFoundError(path)
            entries.extend(field.value for field in ACCOUNT_FIELDS)
            return entries

        raise NotFoundError(path)
