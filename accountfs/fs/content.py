"""
ACCOUNTFS - Content Provider

Synthesizes the content of account files and serves byte ranges of it.
"""

import logging
import os

from accountfs.core.errors import NotFoundError
from accountfs.core.types import AccountField, AccountFile, AccountRecord
from accountfs.fs.paths import resolve
from accountfs.infrastructure.accounts import AccountDatabase

logger = logging.getLogger(__name__)


def render(record: AccountRecord, field: AccountField) -> bytes:
    """
    Render one field of an account as file content.

    A single trailing newline, if present, is stripped.
    """
    if field is AccountField.ID:
        text = str(record.uid)
    elif field is AccountField.HOME:
        text = record.home
    else:
        text = record.shell

    if text.endswith("\n"):
        text = text[:-1]
    return os.fsencode(text)


class ContentProvider:
    """Answers read for account files."""

    def __init__(self, accounts: AccountDatabase):
        self._accounts = accounts

    def read(self, path: str, size: int, offset: int) -> bytes:
        """
        Read up to size bytes starting at offset.

        Returns:
            The requested slice; empty once offset reaches the end

        Raises:
            NotFoundError: If path is not an existing account file
        """
        entity = resolve(path)
        if not isinstance(entity, AccountFile):
            raise NotFoundError(path)

        record = self._accounts.lookup(entity.name)
        if record is None:
            raise NotFoundError(path)

        content = render(record, entity.field)
        if offset >= len(content):
            return b""

        size = min(size, len(content) - offset)
        return content[offset : offset + size]
