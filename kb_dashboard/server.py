import contextlib
import logging
import signal
import threading
from typing import Iterator

import uvicorn

from kb_dashboard.api.main import create_app
from kb_dashboard.environment import Environment

logger = logging.getLogger(__name__)

# Seconds in-flight requests get to finish after SIGINT/SIGTERM
GRACEFUL_SHUTDOWN_TIMEOUT = 5
HANDLED_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class DashboardServer(uvicorn.Server):
    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        """
        Route SIGINT/SIGTERM to a graceful shutdown for the duration of the server run.

        The previous handlers are restored afterwards but the caught signal is not raised again,
        so a signal-initiated shutdown returns normally and the process exits 0.
        """
        # signal handlers can only be installed from the main thread
        if threading.current_thread() is not threading.main_thread():
            yield
            return
        original_handlers = {sig: signal.signal(sig, self.handle_exit) for sig in HANDLED_SIGNALS}
        try:
            yield
        finally:
            for sig, handler in original_handlers.items():
                signal.signal(sig, handler)

    def handle_exit(self, sig, frame) -> None:
        try:
            name = signal.Signals(sig).name
        except ValueError:
            name = str(sig)
        logger.info(f"signal caught: {name}")
        super().handle_exit(sig, frame)


def serve(env: Environment) -> None:
    """Serve the dashboard on the configured bind address until a shutdown signal arrives."""
    app = create_app(env)
    config = uvicorn.Config(
        app,
        host=env.bind.host,
        port=env.bind.port,
        log_config=None,
        access_log=env.debug,
        timeout_graceful_shutdown=GRACEFUL_SHUTDOWN_TIMEOUT,
    )
    server = DashboardServer(config)
    logger.info(f"listening at {env.bind}")
    try:
        server.run()
    except SystemExit as e:
        # uvicorn exits the process itself when it can't bind
        if e.code:
            raise RuntimeError(f"Server at {env.bind} stopped with exit status {e.code}") from e
    logger.info("server stopped")
