"""Exception types shared by every Vipps API surface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Generic, List, Sequence, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError


class VippsError(Exception):
    """Base class for errors raised by this package."""


class ConfigError(VippsError):
    """Raised when the supplied configuration is invalid."""


class HTTPResponseError(VippsError):
    """A response arrived with a status outside 200-299.

    Carries the raw body so that a surface-specific translator can decode it.
    """

    def __init__(self, body: bytes, status: int) -> None:
        super().__init__(f"request failed with status: {status}")
        self.body = body
        self.status = status


class UnexpectedResponseError(VippsError):
    """Non-2xx response whose body is not the expected error envelope."""

    def __init__(self, body: bytes, status: int) -> None:
        super().__init__(
            f"vipps: unexpected response with status {status}: "
            f"{body.decode('utf-8', errors='replace')}"
        )
        self.body = body
        self.status = status


class DecodeError(VippsError):
    """A 2xx response body could not be decoded into the requested type."""


class TokenError(VippsError):
    """The access token could not be obtained."""

    def __init__(
        self,
        message: str,
        status: int | None = None,
        body: bytes | None = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.body = body


EntryT = TypeVar("EntryT", bound=BaseModel)


class APIErrors(VippsError, ABC, Generic[EntryT]):
    """Ordered list of problems reported by a Vipps API in one response.

    Subclasses set ``entry_model`` and implement :meth:`render_entry`.
    """

    entry_model: ClassVar[Type[BaseModel]]

    def __init__(self, errors: Sequence[EntryT], status: int | None = None) -> None:
        self.errors: List[EntryT] = list(errors)
        self.status = status
        super().__init__(self._render())

    def __len__(self) -> int:
        return len(self.errors)

    def __iter__(self):
        return iter(self.errors)

    def __getitem__(self, index: int) -> EntryT:
        return self.errors[index]

    @abstractmethod
    def render_entry(self, entry: EntryT) -> str:
        """Render one entry for the exception message."""

    def _render(self) -> str:
        parts = ["vipps:"]
        if len(self.errors) > 1:
            parts.append("multiple errors:")
        parts.extend(self.render_entry(e) for e in self.errors)
        return " ".join(parts)


class ErrorTranslator:
    """Turns an :class:`HTTPResponseError` into a surface-specific error.

    Any other exception is returned unchanged. A body that does not decode as
    a JSON array of ``error_cls.entry_model`` yields an
    :class:`UnexpectedResponseError` carrying the original body and status.
    """

    def __init__(self, error_cls: Type[APIErrors]) -> None:
        self._error_cls = error_cls
        self._adapter: TypeAdapter = TypeAdapter(List[error_cls.entry_model])

    def translate(self, err: BaseException) -> BaseException:
        if not isinstance(err, HTTPResponseError):
            return err
        try:
            entries = self._adapter.validate_json(err.body)
        except ValidationError:
            return UnexpectedResponseError(body=err.body, status=err.status)
        return self._error_cls(entries, status=err.status)
