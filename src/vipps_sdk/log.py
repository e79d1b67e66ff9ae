"""Leveled logging port used by :class:`vipps_sdk.client.ApiClient`.

The API client never talks to a logging backend directly; it hands one record
per request to a :class:`Logger`. Three sinks ship with the package:

* :class:`StdlibLogger` forwards to a standard :mod:`logging` logger (default).
* :class:`StdOutLogger` prints ``info: message: key: value`` lines.
* :class:`NopLogger` discards everything.

Wrapping another logging library only requires implementing ``info`` and
``error``.
"""

from __future__ import annotations

import logging
import sys
from abc import ABC, abstractmethod
from typing import Any, Dict, NamedTuple, TextIO


class LogArgument(NamedTuple):
    """Key-value pair carrying contextual information for a log record."""

    key: str
    value: Any


def new_arg(key: str, value: Any) -> LogArgument:
    return LogArgument(key, value)


class Logger(ABC):
    """Basic leveled logging interface.

    ``context`` is whatever the caller passed to the API client for this
    request, usually ``None``. Implementations must accept ``None``.
    """

    @abstractmethod
    def info(
        self,
        context: Dict[str, Any] | None,
        message: str,
        *arguments: LogArgument,
    ) -> None:
        """Log an informational message."""

    @abstractmethod
    def error(
        self,
        context: Dict[str, Any] | None,
        message: str,
        *arguments: LogArgument,
    ) -> None:
        """Log an error message."""


class NopLogger(Logger):
    def info(
        self,
        context: Dict[str, Any] | None,
        message: str,
        *arguments: LogArgument,
    ) -> None:
        pass

    def error(
        self,
        context: Dict[str, Any] | None,
        message: str,
        *arguments: LogArgument,
    ) -> None:
        pass


def _format(message: str, arguments: tuple[LogArgument, ...]) -> str:
    if not arguments:
        return message
    rendered = ", ".join(f"{a.key}: {a.value}" for a in arguments)
    return f"{message}: {rendered}"


class StdOutLogger(Logger):
    """Writes one line per record to ``stream`` (stdout by default)."""

    def __init__(self, stream: TextIO | None = None, *, timestamps: bool = True) -> None:
        # Unregistered logger: not reachable from logging.getLogger, no parent.
        self._logger = logging.Logger(f"{__name__}.stdout", logging.INFO)
        handler = logging.StreamHandler(stream or sys.stdout)
        fmt = "%(asctime)s %(message)s" if timestamps else "%(message)s"
        handler.setFormatter(logging.Formatter(fmt, datefmt="%Y/%m/%d %H:%M:%S"))
        self._logger.addHandler(handler)

    def info(
        self,
        context: Dict[str, Any] | None,
        message: str,
        *arguments: LogArgument,
    ) -> None:
        self._logger.info(_format("info: " + message, arguments))

    def error(
        self,
        context: Dict[str, Any] | None,
        message: str,
        *arguments: LogArgument,
    ) -> None:
        self._logger.error(_format("error: " + message, arguments))


class StdlibLogger(Logger):
    """Adapter onto a :class:`logging.Logger`.

    Arguments are rendered into the message and also passed as ``extra`` so
    structured handlers can pick them up.
    """

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("vipps_sdk")

    def info(
        self,
        context: Dict[str, Any] | None,
        message: str,
        *arguments: LogArgument,
    ) -> None:
        self._logger.info(
            "%s", _format(message, arguments), extra=_extra(context, arguments)
        )

    def error(
        self,
        context: Dict[str, Any] | None,
        message: str,
        *arguments: LogArgument,
    ) -> None:
        self._logger.error(
            "%s", _format(message, arguments), extra=_extra(context, arguments)
        )


def _extra(
    context: Dict[str, Any] | None, arguments: tuple[LogArgument, ...]
) -> Dict[str, Any]:
    return {
        "vipps_context": context or {},
        "vipps_args": {a.key: a.value for a in arguments},
    }
