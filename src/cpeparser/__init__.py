from __future__ import annotations

import logging
from typing import Any


# source: https://stackoverflow.com/questions/2183233/how-to-add-a-custom-loglevel-to-pythons-logging-facility/35804945#35804945
def _addLoggingLevel(levelName: str, levelNum: int, methodName: str | None = None) -> None:
    """
    Adds a new logging level to the `logging` module and the currently
    configured logging class.

    `levelName` becomes an attribute of the `logging` module with the value
    `levelNum`. `methodName` becomes a convenience method for both `logging`
    itself and the class returned by `logging.getLoggerClass()`. If
    `methodName` is not specified, `levelName.lower()` is used.

    Returns early if the level or method name is already registered.
    """
    if not methodName:
        methodName = levelName.lower()

    if hasattr(logging, levelName) or hasattr(logging, methodName) or hasattr(logging.getLoggerClass(), methodName):
        return

    def logForLevel(self: logging.Logger, message: str, *args: Any, **kwargs: Any) -> None:
        if self.isEnabledFor(levelNum):
            self._log(levelNum, message, args, **kwargs)

    def logToRoot(message: str, *args: Any, **kwargs: Any) -> None:
        logging.log(levelNum, message, *args, **kwargs)

    logging.addLevelName(levelNum, levelName)
    setattr(logging, levelName, levelNum)
    setattr(logging.getLoggerClass(), methodName, logForLevel)
    setattr(logging, methodName, logToRoot)


# note: this needs to be made available to the rest of the application and tests
_addLoggingLevel("TRACE", logging.DEBUG - 5)

from cpeparser.builder import CpeBuilder  # noqa: E402
from cpeparser.cpe import Cpe  # noqa: E402
from cpeparser.exceptions import CpeEncodingError, CpeError, CpeParsingError, CpeValidationError  # noqa: E402
from cpeparser.parser import parse  # noqa: E402
from cpeparser.relation import Relation  # noqa: E402
from cpeparser.values import LogicalValue, Part  # noqa: E402

__all__ = [
    "Cpe",
    "CpeBuilder",
    "CpeEncodingError",
    "CpeError",
    "CpeParsingError",
    "CpeValidationError",
    "LogicalValue",
    "Part",
    "Relation",
    "parse",
]
