import logging

from rich.logging import RichHandler

_configured = False


def configure_logging(level: str = "INFO") -> None:
    """Route the ``storefront`` loggers through rich, once per process."""
    global _configured
    root = logging.getLogger("storefront")
    root.setLevel(level)
    if _configured:
        return
    handler = RichHandler(rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    _configured = True
