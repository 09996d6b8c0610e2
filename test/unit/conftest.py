"""Test fixtures for robyn-ws-params unit tests."""

from dataclasses import dataclass, field

import pytest

from wsparams.core.simple_request import SimpleRequest
from wsparams.models.definition import Action, Context


# -----------------------------------------------------------------------------
# Mock classes for Robyn Request
# -----------------------------------------------------------------------------


@dataclass
class MockHeaders:
    """Mock Headers object for Robyn Request."""

    _data: dict = field(default_factory=dict)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._data.get(key, default)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


@dataclass
class MockQueryParams:
    """Mock QueryParams object for Robyn Request."""

    _data: dict[str, list[str]] = field(default_factory=dict)

    def get_all(self, key: str) -> list[str] | None:
        return self._data.get(key)


@dataclass
class MockUrl:
    """Mock Url object for Robyn Request."""

    path: str = "/"


@dataclass
class MockRequest:
    """Mock Request object for Robyn."""

    query_params: MockQueryParams = field(default_factory=MockQueryParams)
    form_data: dict[str, str] = field(default_factory=dict)
    files: dict[str, bytes] = field(default_factory=dict)
    headers: MockHeaders = field(default_factory=MockHeaders)
    method: str = "GET"
    url: MockUrl = field(default_factory=MockUrl)


# -----------------------------------------------------------------------------
# Web service definition fixtures
# -----------------------------------------------------------------------------


def _handler(request, response) -> None:
    """No-op request handler."""


@pytest.fixture
def ws_context() -> Context:
    """Context declaring my_controller/my_action with every kind of parameter."""
    context = Context()
    controller = context.create_controller("my_controller")
    action = (
        controller.create_action("my_action")
        .set_description("Action Description")
        .set_post(True)
        .set_since("5.2")
        .set_handler(_handler)
    )
    action.create_param("required_param").set_required(True)

    action.create_param("a_string")
    action.create_param("a_boolean")
    action.create_param("a_number")
    action.create_param("a_enum")
    action.create_param("a_date")
    action.create_param("a_datetime")

    action.create_param("a_required_string").set_required(True)
    action.create_param("a_required_boolean").set_required(True)
    action.create_param("a_required_number").set_required(True)
    action.create_param("a_required_enum").set_required(True)
    action.create_param("a_required_multi_param").set_required(True)

    action.create_param("has_default_string").set_default_value("the_default_string")
    action.create_param("has_default_number").set_default_value("10")
    action.create_param("has_default_boolean").set_default_value("true")

    action.create_param("has_possible_values").set_possible_values("foo", "bar")

    action.create_param("new_param").set_deprecated_key("deprecated_param")
    action.create_param("new_param_with_default_value").set_deprecated_key(
        "deprecated_new_param_with_default_value"
    ).set_default_value("the_default_string")

    controller.done()
    return context


@pytest.fixture
def my_action(ws_context: Context) -> Action:
    return ws_context.controller("my_controller").action("my_action")


@pytest.fixture
def under_test(my_action: Action) -> SimpleRequest:
    """In-memory request bound to my_action."""
    return SimpleRequest().set_action(my_action)


@pytest.fixture
def make_mock_request():
    """Factory fixture to create mock Robyn requests."""

    def _make(
        query: dict[str, list[str]] | None = None,
        form: dict[str, str] | None = None,
        files: dict[str, bytes] | None = None,
        headers: dict[str, str] | None = None,
        method: str = "GET",
        path: str = "/",
    ) -> MockRequest:
        return MockRequest(
            query_params=MockQueryParams(query or {}),
            form_data=form or {},
            files=files or {},
            headers=MockHeaders(headers or {}),
            method=method,
            url=MockUrl(path),
        )

    return _make
