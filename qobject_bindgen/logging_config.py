"""Logging setup shared by every qobject_bindgen module.

Modules obtain their logger through :func:`get_logger`; the command line
entry point calls :func:`configure_logging` once to attach a handler.
"""

import logging

from rich.logging import RichHandler

PACKAGE_LOGGER = "qobject_bindgen"

DEFAULT_FORMAT = "%(levelname)s:%(name)s:%(message)s"


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the package logger.

    Args:
        name: Usually ``__name__`` of the calling module.

    Returns:
        The logger instance.
    """
    if name != PACKAGE_LOGGER and not name.startswith(PACKAGE_LOGGER + "."):
        name = f"{PACKAGE_LOGGER}.{name}"
    return logging.getLogger(name)


def configure_logging(
    level: int | str = logging.WARNING, rich: bool = True, fmt: str | None = None
) -> None:
    """Attach a handler to the package logger.

    Calling this more than once only updates the level.

    Args:
        level: Logging level (int or level name).
        rich: Use a ``RichHandler`` instead of a plain stream handler.
        fmt: Format string for the plain handler.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    if not logger.handlers:
        if rich:
            handler: logging.Handler = RichHandler(
                show_path=False, rich_tracebacks=True
            )
            handler.setFormatter(logging.Formatter("%(message)s"))
        else:
            handler = logging.StreamHandler()
            handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level)
