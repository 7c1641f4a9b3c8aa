"""
Unit tests for shutdown coordinator.
"""

import signal
import threading
import time

from accountfs.core.shutdown import ShutdownCoordinator


class MockComponent:
    """Mock component for testing."""

    def __init__(self, name: str = "mock"):
        self.name = name
        self.stopped = False

    def stop(self):
        self.stopped = True


class FailingComponent:
    """Component that raises exception on stop."""

    def __init__(self):
        self.stop_attempted = False

    def stop(self):
        self.stop_attempted = True
        raise RuntimeError("Stop failed")


class TestShutdownCoordinator:
    """Tests for ShutdownCoordinator."""

    def test_shutdown_stops_registered_components(self):
        coordinator = ShutdownCoordinator()
        comp1 = MockComponent("comp1")
        comp2 = MockComponent("comp2")
        coordinator.register(comp1)
        coordinator.register(comp2)

        coordinator.shutdown()

        assert comp1.stopped
        assert comp2.stopped

    def test_shutdown_reverse_order(self):
        coordinator = ShutdownCoordinator()
        stop_order = []

        class OrderedComponent:
            def __init__(self, name):
                self.name = name

            def stop(self):
                stop_order.append(self.name)

        for name in ("first", "second", "third"):
            coordinator.register(OrderedComponent(name))

        coordinator.shutdown()

        assert stop_order == ["third", "second", "first"]

    def test_shutdown_error_doesnt_prevent_others(self):
        coordinator = ShutdownCoordinator()
        comp1 = MockComponent("comp1")
        failing = FailingComponent()
        comp2 = MockComponent("comp2")
        coordinator.register(comp1)
        coordinator.register(failing)
        coordinator.register(comp2)

        coordinator.shutdown()

        assert comp1.stopped
        assert failing.stop_attempted
        assert comp2.stopped

    def test_request_shutdown(self):
        coordinator = ShutdownCoordinator()
        assert not coordinator.is_shutdown_requested()

        coordinator.request_shutdown()

        assert coordinator.is_shutdown_requested()

    def test_wait_for_shutdown_timeout(self):
        coordinator = ShutdownCoordinator()
        assert not coordinator.wait_for_shutdown(timeout=0.1)

    def test_wait_for_shutdown_triggered(self):
        coordinator = ShutdownCoordinator()

        def trigger_shutdown():
            time.sleep(0.1)
            coordinator.request_shutdown()

        thread = threading.Thread(target=trigger_shutdown)
        thread.start()

        assert coordinator.wait_for_shutdown(timeout=1.0)
        thread.join()

    def test_signal_requests_shutdown(self):
        coordinator = ShutdownCoordinator()
        previous = signal.getsignal(signal.SIGUSR1)
        try:
            coordinator.install_signal_handlers([signal.SIGUSR1])
            signal.raise_signal(signal.SIGUSR1)
            assert coordinator.wait_for_shutdown(timeout=1.0)
        finally:
            signal.signal(signal.SIGUSR1, previous)

    def test_context_manager(self):
        component = MockComponent()

        with ShutdownCoordinator() as coordinator:
            coordinator.register(component)

        assert component.stopped
