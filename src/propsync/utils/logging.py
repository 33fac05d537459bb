from __future__ import annotations
import logging
import reprlib
from functools import wraps
from typing import Any, Callable

_short = reprlib.Repr()
_short.maxstring = 80
_short.maxother = 80

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Console logging for the CLI: DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def log_calls(logger_name: str | None = None) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
    """Decorator logging calls and results at DEBUG; errors are logged and re-raised."""

    def _decorator(func: Callable[..., Any]) -> Callable[..., Any]:
        logger = logging.getLogger(logger_name or func.__module__)

        @wraps(func)
        def _wrapper(*args: Any, **kwargs: Any) -> Any:
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("Calling %s args=%s kwargs=%s", func.__name__, _short.repr(args), _short.repr(kwargs))
            try:
                result = func(*args, **kwargs)
            except Exception as e:
                logger.exception("Error in %s: %s", func.__name__, e)
                raise
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("%s returned %s", func.__name__, _short.repr(result))
            return result

        return _wrapper

    return _decorator
