"""
ACCOUNTFS - Entry Point

Mounts the account filesystem and serves it until SIGINT/SIGTERM.
"""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from accountfs.config.settings import AppConfig
from accountfs.core.errors import ConfigurationError
from accountfs.core.shutdown import ShutdownCoordinator
from accountfs.fs.mount import MountWorker
from accountfs.fs.operations import AccountFsOperations
from accountfs.infrastructure.accounts import PwdAccountDatabase
from accountfs.infrastructure.process import SubprocessRunner

logger = logging.getLogger("accountfs")


def configure_logging(config: AppConfig) -> None:
    """
    Send logs to stdout or the configured file.

    stderr is unusable while mounted: fd 2 is pointed at the null device.
    """
    if config.log_file:
        handler: logging.Handler = logging.FileHandler(config.log_file)
    else:
        handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(config.numeric_log_level)


def build_worker(config: AppConfig) -> MountWorker:
    """Wire the filesystem against the real account database."""
    runner = SubprocessRunner()
    operations = AccountFsOperations.build(PwdAccountDatabase(), runner)
    return MountWorker(
        operations,
        config.mount_point,
        runner,
        fsname=config.fsname,
        unmount_command=config.unmount_command,
        stop_timeout=config.stop_timeout,
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="accountfs",
        description="Expose the system account database as a FUSE filesystem.",
    )
    parser.add_argument("--config", help="YAML or JSON configuration file")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)

    try:
        config = AppConfig.load(args.config)
        config.validate()
    except (ConfigurationError, ValueError) as e:
        print(f"accountfs: invalid configuration: {e}")
        return 2

    configure_logging(config)
    os.makedirs(config.mount_point, exist_ok=True)

    with ShutdownCoordinator() as coordinator:
        coordinator.install_signal_handlers()
        worker = build_worker(config)
        coordinator.register(worker)
        worker.start()
        while not coordinator.wait_for_shutdown(timeout=1.0):
            if not worker.is_running():
                logger.error(f"Mount at {config.mount_point} is no longer served, exiting")
                return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
