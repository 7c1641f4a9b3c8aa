"""
Unit tests for the content provider.
"""

import pytest
from accountfs.core.errors import NotFoundError
from accountfs.core.types import AccountField, AccountRecord
from accountfs.fs.content import ContentProvider, render
from accountfs.infrastructure.accounts import MockAccountDatabase

ALICE = AccountRecord("alice", 1000, 1000, "/home/alice", "/bin/bash")


@pytest.fixture
def accounts():
    return MockAccountDatabase([ALICE])


@pytest.fixture
def content(accounts):
    return ContentProvider(accounts)


class TestRender:
    """Tests for field rendering."""

    def test_id_is_decimal_uid(self):
        assert render(ALICE, AccountField.ID) == b"1000"

    def test_home(self):
        assert render(ALICE, AccountField.HOME) == b"/home/alice"

    def test_shell(self):
        assert render(ALICE, AccountField.SHELL) == b"/bin/bash"

    def test_strips_one_trailing_newline(self):
        record = AccountRecord("x", 1, 1, "/home/x\n\n", "/bin/sh\n")
        assert render(record, AccountField.SHELL) == b"/bin/sh"
        assert render(record, AccountField.HOME) == b"/home/x\n"

    def test_empty_shell(self):
        record = AccountRecord("x", 1, 1, "/", "")
        assert render(record, AccountField.SHELL) == b""


class TestRead:
    """Tests for byte-range reads."""

    def test_read_whole_shell(self, content):
        assert content.read("/alice/shell", 4096, 0) == b"/bin/bash"

    def test_read_id(self, content):
        assert content.read("/alice/id", 4096, 0) == b"1000"

    def test_read_with_offset(self, content):
        assert content.read("/alice/home", 4096, 6) == b"alice"

    def test_read_clamps_size(self, content):
        assert content.read("/alice/shell", 4, 5) == b"bash"

    def test_read_partial(self, content):
        assert content.read("/alice/shell", 4, 0) == b"/bin"

    def test_offset_at_end_is_empty(self, content):
        assert content.read("/alice/shell", 10, len("/bin/bash")) == b""

    def test_offset_past_end_is_empty(self, content):
        assert content.read("/alice/shell", 10, 1000) == b""

    def test_missing_account(self, content):
        with pytest.raises(NotFoundError):
            content.read("/bob/shell", 10, 0)

    def test_unknown_field(self, content):
        with pytest.raises(NotFoundError):
            content.read("/alice/password", 10, 0)

    def test_directory_not_readable(self, content):
        with pytest.raises(NotFoundError):
            content.read("/alice", 10, 0)

    def test_reads_live_data(self, accounts, content):
        content.read("/alice/shell", 100, 0)
        accounts.add(AccountRecord("alice", 1000, 1000, "/home/alice", "/bin/zsh"))

        assert content.read("/alice/shell", 100, 0) == b"/bin/zsh"
