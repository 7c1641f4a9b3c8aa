"""
Unit tests for the mutation executor.
"""

import pytest
from accountfs.core.errors import (
    AlreadyExistsError,
    IOFailureError,
    NotFoundError,
    PermissionDeniedError,
)
from accountfs.core.types import AccountRecord
from accountfs.fs.attributes import AttributeProvider
from accountfs.fs.mutations import MutationExecutor
from accountfs.infrastructure.accounts import MockAccountDatabase
from accountfs.infrastructure.process import MockProcessRunner

ALICE = AccountRecord("alice", 1000, 1000, "/home/alice", "/bin/bash")


@pytest.fixture
def accounts():
    return MockAccountDatabase([ALICE])


def account_commands(accounts):
    """Runner whose successful commands update the mock database."""

    def apply(program, args):
        name = args[-1]
        if program == "adduser":
            accounts.add(AccountRecord(name, 1001, 1001, f"/home/{name}", "/bin/sh"))
        elif program == "userdel":
            accounts.remove(name)

    return apply


class TestCreate:
    """Tests for mkdir."""

    def test_create_runs_adduser(self, accounts):
        runner = MockProcessRunner()
        MutationExecutor(accounts, runner).mkdir("/bob", 0o755)

        assert runner.get_call_history() == [
            ("adduser", ["--disabled-password", "--gecos", "", "bob"])
        ]

    def test_created_account_is_visible(self, accounts):
        runner = MockProcessRunner(side_effect=account_commands(accounts))
        MutationExecutor(accounts, runner).mkdir("/bob")

        st = AttributeProvider(accounts).getattr("/bob")
        assert st.uid == 1001

    def test_existing_account_already_exists(self, accounts):
        runner = MockProcessRunner()

        with pytest.raises(AlreadyExistsError):
            MutationExecutor(accounts, runner).mkdir("/alice")
        assert runner.get_call_history() == []

    def test_command_failure_is_io_failure(self, accounts):
        runner = MockProcessRunner(exit_codes={"adduser": 1})

        with pytest.raises(IOFailureError):
            MutationExecutor(accounts, runner).mkdir("/bob")

    def test_root_permission_denied(self, accounts):
        runner = MockProcessRunner()

        with pytest.raises(PermissionDeniedError):
            MutationExecutor(accounts, runner).mkdir("/")
        assert runner.get_call_history() == []

    @pytest.mark.parametrize("path", ["/alice/notes", "/bob/id", "/a/b/c", "//"])
    def test_nested_permission_denied(self, accounts, path):
        runner = MockProcessRunner()

        with pytest.raises(PermissionDeniedError):
            MutationExecutor(accounts, runner).mkdir(path)
        assert runner.get_call_history() == []

    def test_overlong_name_not_found(self, accounts):
        runner = MockProcessRunner()

        with pytest.raises(NotFoundError):
            MutationExecutor(accounts, runner).mkdir("/" + "b" * 256)
        assert runner.get_call_history() == []


class TestDelete:
    """Tests for rmdir."""

    def test_delete_runs_userdel(self, accounts):
        runner = MockProcessRunner()
        MutationExecutor(accounts, runner).rmdir("/alice")

        assert runner.get_call_history() == [("userdel", ["--remove", "alice"])]

    def test_deleted_account_disappears(self, accounts):
        runner = MockProcessRunner(side_effect=account_commands(accounts))
        MutationExecutor(accounts, runner).rmdir("/alice")

        with pytest.raises(NotFoundError):
            AttributeProvider(accounts).getattr("/alice")

    def test_missing_account_not_found(self, accounts):
        runner = MockProcessRunner()

        with pytest.raises(NotFoundError):
            MutationExecutor(accounts, runner).rmdir("/bob")
        assert runner.get_call_history() == []

    def test_command_failure_is_io_failure(self, accounts):
        runner = MockProcessRunner(exit_codes={"userdel": 6})

        with pytest.raises(IOFailureError):
            MutationExecutor(accounts, runner).rmdir("/alice")

    @pytest.mark.parametrize("path", ["/alice/shell", "/bob/shell", "/alice/x/y", "/alice/"])
    def test_nested_always_permission_denied(self, accounts, path):
        runner = MockProcessRunner()

        with pytest.raises(PermissionDeniedError):
            MutationExecutor(accounts, runner).rmdir(path)
        assert runner.get_call_history() == []
        assert accounts.lookup_calls == []

    def test_root_permission_denied(self, accounts):
        with pytest.raises(PermissionDeniedError):
            MutationExecutor(accounts, MockProcessRunner()).rmdir("/")
