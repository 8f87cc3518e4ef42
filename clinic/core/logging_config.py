import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install a single stream handler on the root logger"""
    root = logging.getLogger()
    root.setLevel(level.upper())

    if not any(getattr(h, "_clinic_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._clinic_handler = True
        root.addHandler(handler)

    # One line per request is too noisy at INFO
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
