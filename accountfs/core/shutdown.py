"""
ACCOUNTFS - Shutdown Coordinator

Stops the mount worker and any other registered component when the
process is asked to exit.
"""

import logging
import signal
import threading
from typing import Iterable, List, Optional, Protocol

logger = logging.getLogger(__name__)


class Stoppable(Protocol):
    """Protocol for components that can be stopped."""

    def stop(self) -> None:
        """Stop the component and release resources."""
        ...


class ShutdownCoordinator:
    """
    Coordinates shutdown of application components.

    Components are stopped in reverse registration order and a failure
    in one component does not prevent the others from stopping.
    """

    def __init__(self):
        self._components: List[Stoppable] = []
        self._shutdown_event = threading.Event()
        self._lock = threading.Lock()

    def register(self, component: Stoppable) -> None:
        """
        Register a component for shutdown.

        Args:
            component: Component to register
        """
        with self._lock:
            self._components.append(component)
            logger.debug(f"Registered component for shutdown: {type(component).__name__}")

    def is_shutdown_requested(self) -> bool:
        """Check if shutdown has been requested."""
        return self._shutdown_event.is_set()

    def wait_for_shutdown(self, timeout: Optional[float] = None) -> bool:
        """
        Block until shutdown is requested.

        Args:
            timeout: Maximum time to wait in seconds (None = wait forever)

        Returns:
            True if shutdown was requested, False if timeout occurred
        """
        return self._shutdown_event.wait(timeout)

    def request_shutdown(self) -> None:
        """Request shutdown without stopping anything yet."""
        logger.info("Shutdown requested")
        self._shutdown_event.set()

    def install_signal_handlers(
        self, signals: Iterable[int] = (signal.SIGINT, signal.SIGTERM)
    ) -> None:
        """
        Route the given signals to request_shutdown().

        Must be called from the main thread.
        """
        for signum in signals:
            signal.signal(signum, self._on_signal)

    def _on_signal(self, signum, frame) -> None:
        logger.info(f"Received signal {signum}")
        self.request_shutdown()

    def shutdown(self) -> None:
        """
        Stop all registered components (LIFO).

        Errors are logged and do not prevent remaining components from stopping.
        """
        logger.info("Starting shutdown sequence")
        self.request_shutdown()

        with self._lock:
            for component in reversed(self._components):
                component_name = type(component).__name__
                try:
                    logger.debug(f"Stopping {component_name}...")
                    component.stop()
                    logger.debug(f"{component_name} stopped")
                except Exception as e:
                    logger.error(f"Error stopping {component_name}: {e}", exc_info=True)

        logger.info("Shutdown sequence complete")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.shutdown()
        return False
