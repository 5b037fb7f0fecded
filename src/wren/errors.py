"""Wren exception hierarchy and fault attribution.

Shared across strategies, the build orchestrator, the store, and the page
server so every module raises and catches the same types.

Every failure of user-supplied strategy code carries an ``ErrorCause``.
The engine never inspects or alters it; the serving layer uses it to pick
a 4xx or 5xx status without knowing which strategy failed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wren.config import EngineConfig


class CauseKind(Enum):
    """Which side of the connection caused a generation failure."""

    CLIENT = "client"
    SERVER = "server"


@dataclass(frozen=True, slots=True)
class ErrorCause:
    """Fault attribution attached to every generation failure.

    ``status`` is an optional suggestion for the HTTP status; when absent
    the serving layer picks its default for the kind::

        raise GenerationError("no such post", ErrorCause.client(404))
    """

    kind: CauseKind
    status: int | None = None

    @classmethod
    def client(cls, status: int | None = None) -> ErrorCause:
        return cls(CauseKind.CLIENT, status)

    @classmethod
    def server(cls, status: int | None = None) -> ErrorCause:
        return cls(CauseKind.SERVER, status)

    @property
    def is_client(self) -> bool:
        return self.kind is CauseKind.CLIENT

    def http_status(self, client_default: int = 400, server_default: int = 500) -> int:
        """Status code for this cause, falling back to the kind's default."""
        if self.status is not None:
            return self.status
        return client_default if self.is_client else server_default

    def __str__(self) -> str:
        if self.status is not None:
            return f"{self.kind.value} ({self.status})"
        return self.kind.value


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when route or engine configuration is invalid.

    Typically raised while strategies are built and registered, before any
    build or request traffic.
    """


class GenerationError(WrenError):
    """Raised by user strategy functions to report a failure with a cause.

    Any other exception escaping a strategy function is treated as a
    server-caused failure.
    """

    def __init__(self, message: str, cause: ErrorCause | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.cause = cause or ErrorCause.server()

    @classmethod
    def client(cls, message: str, status: int | None = None) -> GenerationError:
        return cls(message, ErrorCause.client(status))

    @classmethod
    def server(cls, message: str, status: int | None = None) -> GenerationError:
        return cls(message, ErrorCause.server(status))


class TemplateFeatureNotEnabled(WrenError):  # noqa: N818
    """A strategy operation was invoked on a route that did not configure it."""

    def __init__(self, path: str, feature: str) -> None:
        super().__init__(f"Route {path!r} does not enable the {feature!r} feature.")
        self.path = path
        self.feature = feature


class RenderFnFailed(WrenError):  # noqa: N818
    """A configured strategy function failed.

    Attributes:
        stage: Which operation failed (``"get_build_state"``, ...).
        path: Root of the route the function belongs to.
        cause: Fault attribution supplied by the function.
        message: The function's error message.
    """

    def __init__(self, stage: str, path: str, cause: ErrorCause, message: str) -> None:
        super().__init__(f"{stage} failed for route {path!r} [{cause}]: {message}")
        self.stage = stage
        self.path = path
        self.cause = cause
        self.message = message


class BothStatesDefined(WrenError):  # noqa: N818
    """Build and request state both exist and nothing reconciles them."""

    def __init__(self, path: str = "") -> None:
        where = f" for {path!r}" if path else ""
        super().__init__(
            f"Both build and request state were generated{where}, "
            "but no state amalgamation function is registered."
        )
        self.path = path


class HTTPError(WrenError):
    """A serving outcome that maps directly to an HTTP status code."""

    def __init__(self, status: int, detail: str = "") -> None:
        super().__init__(f"{status}: {detail}" if detail else str(status))
        self.status = status
        self.detail = detail


class NotFound(HTTPError):  # noqa: N818
    """404 — no route or cached page exists for the requested path."""

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


def status_for(exc: BaseException, config: EngineConfig | None = None) -> int:
    """Pick the HTTP status a serving layer should answer with for *exc*.

    ``RenderFnFailed`` uses its cause, ``HTTPError`` its own status.
    Everything else is an internal error.
    """
    if isinstance(exc, RenderFnFailed):
        if config is None:
            return exc.cause.http_status()
        return exc.cause.http_status(config.client_error_status, config.server_error_status)
    if isinstance(exc, HTTPError):
        return exc.status
    if config is not None:
        return config.server_error_status
    return 500
