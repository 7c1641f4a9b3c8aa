"""
ACCOUNTFS - External Process Runner

Runs account-management commands and reports only whether they succeeded.
"""

import logging
import subprocess
from typing import Callable, Dict, List, Optional, Protocol, Sequence, Tuple

logger = logging.getLogger(__name__)


class ProcessRunner(Protocol):
    """Protocol for running an external program to completion."""

    def run(self, program: str, args: Sequence[str]) -> bool:
        """
        Run program with args, blocking until it exits.

        Returns:
            True if and only if the exit status is zero
        """
        ...


class SubprocessRunner:
    """Real process runner using subprocess. No timeout is applied."""

    def run(self, program: str, args: Sequence[str]) -> bool:
        argv = [program, *args]
        try:
            result = subprocess.run(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except OSError as e:
            logger.warning(f"Could not run {program}: {e}")
            return False

        if result.returncode != 0:
            logger.warning(f"{program} exited with status {result.returncode}")
            return False
        return True


class MockProcessRunner:
    """Mock process runner for testing."""

    def __init__(
        self,
        exit_codes: Optional[Dict[str, int]] = None,
        side_effect: Optional[Callable[[str, Sequence[str]], None]] = None,
    ):
        self._exit_codes = exit_codes or {}
        self._side_effect = side_effect
        self._call_history: List[Tuple[str, List[str]]] = []

    def run(self, program: str, args: Sequence[str]) -> bool:
        self._call_history.append((program, list(args)))
        exit_code = self._exit_codes.get(program, 0)
        if exit_code == 0 and self._side_effect is not None:
            self._side_effect(program, args)
        return exit_code == 0

    def get_call_history(self) -> List[Tuple[str, List[str]]]:
        """Get history of program invocations for testing."""
        return self._call_history
