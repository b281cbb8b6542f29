import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Attach a single stream handler to the ``app`` logger hierarchy.

    Safe to call more than once: the handler is only installed the first time,
    later calls just adjust the level.
    """
    root = logging.getLogger("app")
    root.setLevel(level.upper())
    if not any(getattr(h, "_app_handler", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._app_handler = True
        root.addHandler(handler)
