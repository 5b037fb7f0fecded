"""Tests for wren.errors — exception hierarchy, causes, and status mapping."""

import pytest

from wren.config import EngineConfig
from wren.errors import (
    BothStatesDefined,
    CauseKind,
    ConfigurationError,
    ErrorCause,
    GenerationError,
    HTTPError,
    NotFound,
    RenderFnFailed,
    TemplateFeatureNotEnabled,
    WrenError,
    status_for,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls",
        [
            ConfigurationError,
            GenerationError,
            TemplateFeatureNotEnabled,
            RenderFnFailed,
            BothStatesDefined,
            HTTPError,
        ],
    )
    def test_is_wren_error(self, cls: type) -> None:
        assert issubclass(cls, WrenError)

    def test_not_found_is_http_error(self) -> None:
        assert issubclass(NotFound, HTTPError)


class TestErrorCause:
    def test_client(self) -> None:
        cause = ErrorCause.client(404)
        assert cause.kind is CauseKind.CLIENT
        assert cause.status == 404
        assert cause.is_client is True

    def test_server_default_status(self) -> None:
        cause = ErrorCause.server()
        assert cause.is_client is False
        assert cause.status is None
        assert cause.http_status() == 500

    def test_client_default_status(self) -> None:
        assert ErrorCause.client().http_status() == 400

    def test_explicit_status_wins(self) -> None:
        assert ErrorCause.client(410).http_status(client_default=422) == 410

    def test_custom_defaults(self) -> None:
        assert ErrorCause.server().http_status(server_default=503) == 503

    def test_str(self) -> None:
        assert str(ErrorCause.client(404)) == "client (404)"
        assert str(ErrorCause.server()) == "server"

    def test_frozen(self) -> None:
        cause = ErrorCause.client()
        with pytest.raises(AttributeError):
            cause.status = 500  # type: ignore[misc]


class TestGenerationError:
    def test_defaults_to_server(self) -> None:
        err = GenerationError("boom")
        assert err.message == "boom"
        assert err.cause == ErrorCause.server()

    def test_client_constructor(self) -> None:
        err = GenerationError.client("no such post", 404)
        assert err.cause == ErrorCause.client(404)
        assert str(err) == "no such post"


class TestTemplateFeatureNotEnabled:
    def test_attributes(self) -> None:
        err = TemplateFeatureNotEnabled("blog", "build_state")
        assert err.path == "blog"
        assert err.feature == "build_state"
        assert "build_state" in str(err)
        assert "'blog'" in str(err)


class TestRenderFnFailed:
    def test_attributes(self) -> None:
        cause = ErrorCause.client(403)
        err = RenderFnFailed("get_request_state", "admin", cause, "forbidden")
        assert err.stage == "get_request_state"
        assert err.path == "admin"
        assert err.cause is cause
        assert err.message == "forbidden"

    def test_message(self) -> None:
        err = RenderFnFailed("get_build_state", "blog", ErrorCause.server(), "db down")
        assert str(err) == "get_build_state failed for route 'blog' [server]: db down"


class TestBothStatesDefined:
    def test_with_path(self) -> None:
        err = BothStatesDefined("blog/a")
        assert err.path == "blog/a"
        assert "'blog/a'" in str(err)

    def test_without_path(self) -> None:
        assert "amalgamation" in str(BothStatesDefined())


class TestHTTPError:
    def test_str_with_detail(self) -> None:
        assert str(HTTPError(status=410, detail="Gone for good")) == "410: Gone for good"

    def test_str_without_detail(self) -> None:
        assert str(HTTPError(status=500)) == "500"

    def test_not_found_defaults(self) -> None:
        err = NotFound()
        assert err.status == 404
        assert err.detail == "Not Found"


class TestStatusFor:
    def test_client_cause(self) -> None:
        err = RenderFnFailed("get_request_state", "p", ErrorCause.client(), "bad")
        assert status_for(err) == 400

    def test_server_cause(self) -> None:
        err = RenderFnFailed("get_build_state", "p", ErrorCause.server(), "bad")
        assert status_for(err) == 500

    def test_cause_status(self) -> None:
        err = RenderFnFailed("get_request_state", "p", ErrorCause.client(401), "login")
        assert status_for(err) == 401

    def test_config_defaults(self) -> None:
        config = EngineConfig(client_error_status=422, server_error_status=503)
        client = RenderFnFailed("s", "p", ErrorCause.client(), "m")
        server = RenderFnFailed("s", "p", ErrorCause.server(), "m")
        assert status_for(client, config) == 422
        assert status_for(server, config) == 503

    def test_http_error(self) -> None:
        assert status_for(NotFound()) == 404

    def test_other_errors_are_internal(self) -> None:
        assert status_for(BothStatesDefined()) == 500
        assert status_for(ValueError("x")) == 500
        assert status_for(ValueError("x"), EngineConfig(server_error_status=502)) == 502
