"""
ACCOUNTFS - FUSE Adapter

Exposes AccountFsOperations through fusepy's Operations interface.
Only getattr, readdir, read, mkdir and rmdir are overridden; every other
callback keeps the fusepy default.
"""

import errno
import functools
import logging

from fuse import FuseOSError, Operations

from accountfs.core.errors import AccountFsError
from accountfs.fs.operations import AccountFsOperations

logger = logging.getLogger(__name__)


def _translate_errors(method):
    """Report AccountFsError as its errno and anything unexpected as EIO."""

    @functools.wraps(method)
    def wrapper(self, path, *args, **kwargs):
        try:
            return method(self, path, *args, **kwargs)
        except AccountFsError as e:
            logger.debug(f"{method.__name__} {path}: {type(e).__name__}")
            raise FuseOSError(e.errno if e.errno is not None else errno.EIO) from e
        except FuseOSError:
            raise
        except Exception as e:
            logger.error(f"Unexpected error in {method.__name__} {path}: {e}", exc_info=True)
            raise FuseOSError(errno.EIO) from e

    return wrapper


class AccountFuse(Operations):
    """fusepy adapter over AccountFsOperations."""

    def __init__(self, operations: AccountFsOperations):
        self._ops = operations

    @_translate_errors
    def getattr(self, path, fh=None):
        return self._ops.getattr(path)

    @_translate_errors
    def readdir(self, path, fh):
        return self._ops.readdir(path)

    @_translate_errors
    def read(self, path, size, offset, fh):
        return self._ops.read(path, size, offset)

    @_translate_errors
    def mkdir(self, path, mode):
        self._ops.mkdir(path, mode)
        return 0

    @_translate_errors
    def rmdir(self, path):
        self._ops.rmdir(path)
        return 0
