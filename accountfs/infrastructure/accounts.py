"""
ACCOUNTFS - Account Database Abstraction

Provides abstraction layer over the OS account database.
This allows mocking in tests and keeps pwd access in one place.
"""

import pwd
from contextlib import contextmanager
from typing import Dict, Iterable, Iterator, Optional, Protocol

from accountfs.core.types import AccountRecord


class AccountDatabase(Protocol):
    """Protocol for read access to the account database."""

    def lookup(self, name: str) -> Optional[AccountRecord]:
        """Look up one account by name, None if it does not exist."""
        ...

    def iterate(self):
        """
        Context manager opening iteration state over all accounts.

        Yields an iterator of AccountRecord; iteration state is closed
        when the context exits.
        """
        ...


def _record_from_pwd(entry: pwd.struct_passwd) -> AccountRecord:
    return AccountRecord(
        name=entry.pw_name,
        uid=entry.pw_uid,
        gid=entry.pw_gid,
        home=entry.pw_dir,
        shell=entry.pw_shell,
    )


class PwdAccountDatabase:
    """Real account database backed by the pwd module."""

    def lookup(self, name: str) -> Optional[AccountRecord]:
        try:
            return _record_from_pwd(pwd.getpwnam(name))
        except KeyError:
            return None
        except ValueError:
            # Embedded NUL or unencodable name
            return None

    @contextmanager
    def iterate(self) -> Iterator[Iterator[AccountRecord]]:
        # getpwall() opens, walks and closes the passwd iteration in one call
        entries = pwd.getpwall()
        yield (_record_from_pwd(entry) for entry in entries)


class MockAccountDatabase:
    """In-memory account database for testing."""

    def __init__(self, records: Optional[Iterable[AccountRecord]] = None):
        self._records: Dict[str, AccountRecord] = {}
        self.lookup_calls: list[str] = []
        self.open_iterations = 0
        self.iterations_started = 0
        for record in records or []:
            self.add(record)

    def add(self, record: AccountRecord) -> None:
        self._records[record.name] = record

    def remove(self, name: str) -> None:
        self._records.pop(name, None)

    def lookup(self, name: str) -> Optional[AccountRecord]:
        self.lookup_calls.append(name)
        return self._records.get(name)

    @contextmanager
    def iterate(self) -> Iterator[Iterator[AccountRecord]]:
        self.open_iterations += 1
        self.iterations_started += 1
        try:
            yield iter(list(self._records.values()))
        finally:
            self.open_iterations -= 1
