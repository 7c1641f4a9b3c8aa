"""
ACCOUNTFS - Filesystem Operations

Bundles the five filesystem operations behind one object that is built
once and handed to the FUSE adapter by reference.
"""

import time
from typing import Any, Callable, Dict, List, Optional, Tuple

from accountfs.fs.attributes import AttributeProvider
from accountfs.fs.content import ContentProvider
from accountfs.fs.listing import DirectoryLister
from accountfs.fs.mutations import MutationExecutor
from accountfs.infrastructure.accounts import AccountDatabase
from accountfs.infrastructure.process import ProcessRunner


class AccountFsOperations:
    """The set of operations served by the filesystem."""

    def __init__(
        self,
        attributes: AttributeProvider,
        lister: DirectoryLister,
        content: ContentProvider,
        mutations: MutationExecutor,
    ):
        self.attributes = attributes
        self.lister = lister
        self.content = content
        self.mutations = mutations

    @classmethod
    def build(
        cls,
        accounts: AccountDatabase,
        runner: ProcessRunner,
        clock: Callable[[], float] = time.time,
        identity: Optional[Callable[[], Tuple[int, int]]] = None,
    ) -> "AccountFsOperations":
        """
        Wire all operations to one account database and process runner.

        Args:
            accounts: Account database used by every operation
            runner: Runs the account creation/deletion commands
            clock: Timestamp source for getattr
            identity: Returns (uid, gid) owning the root

        Returns:
            AccountFsOperations instance
        """
        return cls(
            attributes=AttributeProvider(accounts, clock=clock, identity=identity),
            lister=DirectoryLister(accounts),
            content=ContentProvider(accounts),
            mutations=MutationExecutor(accounts, runner),
        )

    def getattr(self, path: str) -> Dict[str, Any]:
        return self.attributes.getattr(path).to_dict()

    def readdir(self, path: str) -> List[str]:
        return self.lister.readdir(path)

    def read(self, path: str, size: int, offset: int) -> bytes:
        return self.content.read(path, size, offset)

    def mkdir(self, path: str, mode: int) -> None:
        self.mutations.mkdir(path, mode)

    def rmdir(self, path: str) -> None:
        self.mutations.rmdir(path)
