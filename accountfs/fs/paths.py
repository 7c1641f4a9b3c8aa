"""
ACCOUNTFS - Path Resolver

Turns an incoming path into a PathEntity.

Grammar:
    /                  -> Root
    /<name>            -> AccountDir(name)
    /<name>/<field>    -> AccountFile(name, field), field in {id, home, shell}

Anything else (deeper paths, empty or overlong segments, unknown field
names) raises NotFoundError. Resolution never consults the account
database.
"""

import os
from typing import Tuple

from accountfs.core.errors import NotFoundError
from accountfs.core.types import AccountDir, AccountField, AccountFile, PathEntity, Root

SEPARATOR = "/"
MAX_TOKEN_BYTES = 255


def is_valid_token(token: str) -> bool:
    """
    Check that a name or field token is usable as-is.

    Tokens must be non-empty, free of NUL and at most MAX_TOKEN_BYTES
    long in the filesystem encoding. Overlong tokens are rejected, never
    shortened.
    """
    if not token:
        return False
    try:
        encoded = os.fsencode(token)
    except UnicodeEncodeError:
        return False
    return len(encoded) <= MAX_TOKEN_BYTES and b"\0" not in encoded


def split_segments(path: str) -> Tuple[str, ...]:
    """
    Split an absolute path into its raw segments.

    Args:
        path: Path as received from the FUSE host

    Returns:
        Tuple of segments; empty for the root

    Raises:
        NotFoundError: If the path is not absolute
    """
    if not path.startswith(SEPARATOR):
        raise NotFoundError(path)
    if path == SEPARATOR:
        return ()
    return tuple(path[1:].split(SEPARATOR))


def is_top_level(path: str) -> bool:
    """True if path is a bare top-level segment like "/alice"."""
    return len(path) > 1 and path.startswith(SEPARATOR) and SEPARATOR not in path[1:]


def resolve(path: str) -> PathEntity:
    """
    Resolve a path into a PathEntity.

    Raises:
        NotFoundError: If the path does not match the grammar
    """
    segments = split_segments(path)
    if not segments:
        return Root()

    if len(segments) > 2 or not all(is_valid_token(s) for s in segments):
        raise NotFoundError(path)

    name = segments[0]
    if len(segments) == 1:
        return AccountDir(name)

    try:
        field = AccountField(segments[1])
    except ValueError:
        raise NotFoundError(path) from None
    return AccountFile(name, field)
