"""
ACCOUNTFS - Mount Worker

Runs the blocking fusepy loop on a dedicated background thread.
"""

import logging
import os
import sys
import threading
from contextlib import contextmanager
from typing import Any, Callable, Optional

from fuse import FUSE

from accountfs.fs.adapter import AccountFuse
from accountfs.fs.operations import AccountFsOperations
from accountfs.infrastructure.process import ProcessRunner

logger = logging.getLogger(__name__)


@contextmanager
def discard_stderr():
    """
    Point file descriptor 2 at the null device for the duration.

    libfuse writes its diagnostics straight to fd 2, so sys.stderr
    replacement is not enough. The original descriptor is restored on exit.
    """
    sys.stderr.flush()
    saved = os.dup(2)
    devnull = os.open(os.devnull, os.O_WRONLY)
    try:
        os.dup2(devnull, 2)
    finally:
        os.close(devnull)
    try:
        yield
    finally:
        sys.stderr.flush()
        os.dup2(saved, 2)
        os.close(saved)


class MountWorker:
    """
    Owns the thread that serves the filesystem.

    Mount options enabling host-side permission checks and automatic
    unmount on process exit are always set.
    """

    def __init__(
        self,
        operations: AccountFsOperations,
        mount_point: str,
        runner: ProcessRunner,
        fsname: str = "kubsh",
        unmount_command: str = "fusermount",
        stop_timeout: float = 5.0,
        fuse_factory: Optional[Callable[..., Any]] = None,
        suppress_diagnostics: bool = True,
    ):
        """
        Initialize mount worker.

        Args:
            operations: Operations served by the filesystem
            mount_point: Directory to mount on
            runner: Process runner used to unmount on stop
            fsname: Filesystem name shown in the mount table
            unmount_command: Program invoked as "<command> -u <mount_point>"
            stop_timeout: Seconds to wait for the thread on stop
            fuse_factory: Replaces fuse.FUSE (for tests)
            suppress_diagnostics: Discard fd 2 while the loop runs
        """
        self._operations = operations
        self._mount_point = mount_point
        self._runner = runner
        self._fsname = fsname
        self._unmount_command = unmount_command
        self._stop_timeout = stop_timeout
        self._fuse_factory = fuse_factory or FUSE
        self._suppress_diagnostics = suppress_diagnostics

        self._lock = threading.Lock()
        self._thread: Optional[threading.Thread] = None
        self._stop_requested = threading.Event()

    @property
    def mount_point(self) -> str:
        return self._mount_point

    def start(self) -> None:
        """Start the mount thread (no-op if already running)."""
        with self._lock:
            if self._thread is not None and self._thread.is_alive():
                return

            self._stop_requested.clear()
            self._thread = threading.Thread(
                target=self._run, name="accountfs-mount", daemon=True
            )
            self._thread.start()
        logger.info(f"Mounting account filesystem at {self._mount_point}")

    def stop(self) -> None:
        """Unmount and wait for the mount thread to exit."""
        with self._lock:
            thread = self._thread
            if thread is None:
                return
            self._stop_requested.set()

        if thread.is_alive():
            if not self._runner.run(self._unmount_command, ["-u", self._mount_point]):
                logger.warning(f"Unmounting {self._mount_point} failed")
            thread.join(timeout=self._stop_timeout)
            if thread.is_alive():
                logger.warning("Mount thread did not exit within timeout")
                return

        with self._lock:
            if self._thread is thread:
                self._thread = None
        logger.info(f"Account filesystem at {self._mount_point} stopped")

    def is_running(self) -> bool:
        with self._lock:
            return self._thread is not None and self._thread.is_alive()

    def is_stop_requested(self) -> bool:
        return self._stop_requested.is_set()

    def _run(self) -> None:
        fs = AccountFuse(self._operations)
        try:
            if self._suppress_diagnostics:
                with discard_stderr():
                    self._serve(fs)
            else:
                self._serve(fs)
        except Exception as e:
            logger.error(f"Mount loop at {self._mount_point} failed: {e}", exc_info=True)
            return

        if not self._stop_requested.is_set():
            logger.warning(f"Mount loop at {self._mount_point} returned unexpectedly")

    def _serve(self, fs: AccountFuse) -> None:
        # Blocks until the filesystem is unmounted
        self._fuse_factory(
            fs,
            self._mount_point,
            foreground=True,
            nothreads=True,
            default_permissions=True,
            auto_unmount=True,
            fsname=self._fsname,
        )

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
