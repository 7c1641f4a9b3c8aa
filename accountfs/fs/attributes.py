"""
ACCOUNTFS - Attribute Provider

Computes synthetic stat data for a path on every call.
"""

import logging
import os
import time
from typing import Callable, Optional, Tuple

from accountfs.core.errors import NotFoundError
from accountfs.core.types import AccountDir, AccountFile, EntryKind, Root, SyntheticStat
from accountfs.fs.paths import resolve
from accountfs.infrastructure.accounts import AccountDatabase

logger = logging.getLogger(__name__)

DIR_MODE = 0o755
FILE_MODE = 0o644

# Reported for every account file regardless of its content length.
FILE_SIZE = 256


def process_identity() -> Tuple[int, int]:
    """uid/gid of the running process, owner of the mount root."""
    return os.getuid(), os.getgid()


class AttributeProvider:
    """Answers getattr for the root, account directories and account files."""

    def __init__(
        self,
        accounts: AccountDatabase,
        clock: Callable[[], float] = time.time,
        identity: Optional[Callable[[], Tuple[int, int]]] = None,
    ):
        """
        Initialize attribute provider.

        Args:
            accounts: Account database queried on every call
            clock: Source of the timestamps put on every entry
            identity: Returns (uid, gid) owning the root
        """
        self._accounts = accounts
        self._clock = clock
        self._identity = identity or process_identity

    def getattr(self, path: str) -> SyntheticStat:
        """
        Compute metadata for path.

        The field name of an account file is validated before the account
        is looked up, so an unknown field is NotFound even for an
        existing account.

        Raises:
            NotFoundError: If the path does not resolve
        """
        entity = resolve(path)
        now = self._clock()

        if isinstance(entity, Root):
            uid, gid = self._identity()
            return SyntheticStat(EntryKind.DIRECTORY, DIR_MODE, uid, gid, 0, 2, now)

        record = self._accounts.lookup(entity.name)
        if record is None:
            logger.debug(f"getattr {path}: no account {entity.name!r}")
            raise NotFoundError(path)

        if isinstance(entity, AccountDir):
            return SyntheticStat(
                EntryKind.DIRECTORY, DIR_MODE, record.uid, record.gid, 0, 2, now
            )

        assert isinstance(entity, AccountFile)
        return SyntheticStat(
            EntryKind.REGULAR, FILE_MODE, record.uid, record.gid, FILE_SIZE, 1, now
        )
