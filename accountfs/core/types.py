"""
ACCOUNTFS - Core Types

Common types and dataclasses used throughout the application.
"""

import stat
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Union


@dataclass(frozen=True)
class AccountRecord:
    """Snapshot of one row of the OS account database."""

    name: str
    uid: int
    gid: int
    home: str
    shell: str


class AccountField(Enum):
    """Files exposed under an account directory."""

    ID = "id"
    HOME = "home"
    SHELL = "shell"


# Listing order under an account directory
ACCOUNT_FIELDS = (AccountField.ID, AccountField.HOME, AccountField.SHELL)


@dataclass(frozen=True)
class Root:
    """The mount root."""


@dataclass(frozen=True)
class AccountDir:
    """Directory named after an account."""

    name: str


@dataclass(frozen=True)
class AccountFile:
    """One of the field files inside an account directory."""

    name: str
    field: AccountField


PathEntity = Union[Root, AccountDir, AccountFile]


class EntryKind(Enum):
    """Kinds of synthetic filesystem entries."""

    DIRECTORY = "directory"
    REGULAR = "regular"


@dataclass
class SyntheticStat:
    """
    Metadata computed on demand for a path.

    Timestamps are wall-clock at call time, never persisted.
    """

    kind: EntryKind
    mode: int  # Permission bits only (e.g. 0o755)
    uid: int
    gid: int
    size: int
    nlink: int
    timestamp: float

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to the stat dictionary fusepy expects from getattr.

        Returns:
            Dictionary with st_* keys
        """
        type_bits = stat.S_IFDIR if self.kind is EntryKind.DIRECTORY else stat.S_IFREG
        return {
            "st_mode": type_bits | self.mode,
            "st_uid": self.uid,
            "st_gid": self.gid,
            "st_size": self.size,
            "st_nlink": self.nlink,
            "st_atime": self.timestamp,
            "st_mtime": self.timestamp,
            "st_ctime": self.timestamp,
        }
