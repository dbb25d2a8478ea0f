# app/core/log_setup.py
"""
Logging setup. Modules log through `logging.getLogger(__name__)`; application
lifecycle messages go to the "uvicorn.error" logger so they show up next to
the server's own output.
"""
import logging

HANDLER_NAME = "app"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger once (idempotent)."""
    root = logging.getLogger()
    if not any(h.get_name() == HANDLER_NAME for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.set_name(HANDLER_NAME)
        root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
