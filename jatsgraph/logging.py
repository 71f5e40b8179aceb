"""Logging helpers.

Conversion diagnostics often carry nodes and coverage-gap records, so the
logger returned by `setup_logging` pretty-prints structured messages:
pydantic models are dumped as indented JSON and other containers through
`pprint.pformat`.
"""

import inspect
import logging
from pprint import pformat
from typing import Any

from pydantic import BaseModel

LOG_FORMAT = "%(asctime)s - %(name)s:%(lineno)d - %(levelname)s - %(message)s"


class PprintLogger:
    """A logger wrapper that pretty-prints structured messages."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _format_message(self, msg: Any, pprint: bool = True) -> str:
        if not pprint or isinstance(msg, str):
            return str(msg)
        if isinstance(msg, BaseModel):
            return msg.model_dump_json(indent=2)
        return pformat(msg, width=120)

    def _log(self, level: int, msg: Any, args: tuple, pprint: bool, kwargs: dict) -> None:
        if not self._logger.isEnabledFor(level):
            return
        # stacklevel=3 skips this helper and the public method
        self._logger.log(level, self._format_message(msg, pprint=pprint), *args, stacklevel=3, **kwargs)

    def debug(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._log(logging.DEBUG, msg, args, pprint, kwargs)

    def info(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._log(logging.INFO, msg, args, pprint, kwargs)

    def warning(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._log(logging.WARNING, msg, args, pprint, kwargs)

    def error(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._log(logging.ERROR, msg, args, pprint, kwargs)

    def exception(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, msg, args, pprint, kwargs)

    def __getattr__(self, name: str) -> Any:
        """Delegate any other attributes to the underlying logger."""
        return getattr(self._logger, name)


def setup_logging(level: int | str | None = None, name: str | None = None) -> PprintLogger:
    """Return a PprintLogger for the calling module.

    The logger is named after the caller's module unless `name` is given.
    A stream handler is attached once; `level` is applied only when given,
    so library modules inherit whatever the application configured.
    """
    if name is None:
        frame = inspect.currentframe().f_back  # type: ignore[union-attr]
        name = frame.f_globals.get("__name__", "jatsgraph")  # type: ignore[union-attr]
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    root = logging.getLogger("jatsgraph")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return PprintLogger(logger)
