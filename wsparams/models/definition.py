"""Web service definitions: controllers, their actions and action parameters.

Definitions are declared through fluent builders and frozen when the
controller is done::

    context = Context()
    controller = context.create_controller("api/issues")
    action = controller.create_action("search").set_handler(search)
    action.create_param("statuses").set_possible_values("OPEN", "CLOSED")
    action.create_param("ps").set_default_value(100)
    controller.done()

    context.controller("api/issues").action("search").param("ps").default_value  # "100"
"""

from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

from wsparams.core.coercion import BOOLEAN_POSSIBLE_VALUES
from wsparams.core.dates import format_date, format_datetime
from wsparams.core.errors import DefinitionError
from wsparams.core.logger import LogIcon, logger

RequestHandler = Callable[..., Any]


def to_text(value: Any) -> str | None:
    """Render a declared value the way requests must send it. Dates use the accepted formats."""
    match value:
        case None:
            return None
        case datetime():
            return format_datetime(value)
        case date():
            return format_date(value)
        case _:
            return str(value)


class Param(BaseModel):
    """Declared parameter of an action."""

    model_config = ConfigDict(frozen=True)

    key: str
    deprecated_key: str | None = None
    description: str | None = None
    example_value: str | None = None
    since: str | None = None
    deprecated_since: str | None = None
    required: bool = False
    default_value: str | None = None
    possible_values: tuple[str, ...] | None = None


class Action(BaseModel):
    """Single web service operation with its declared parameters."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    key: str
    path: str
    description: str | None = None
    since: str | None = None
    deprecated_since: str | None = None
    post: bool = False
    internal: bool = False
    handler: RequestHandler
    params: dict[str, Param] = Field(default_factory=dict)

    def param(self, key: str) -> Param | None:
        return self.params.get(key)


class Controller(BaseModel):
    """Group of actions served under a common path."""

    model_config = ConfigDict(frozen=True)

    path: str
    description: str | None = None
    since: str | None = None
    actions: dict[str, Action] = Field(default_factory=dict)

    def action(self, key: str) -> Action | None:
        return self.actions.get(key)


class NewParam:
    """Builder of a Param."""

    def __init__(self, key: str) -> None:
        self._key = key
        self._deprecated_key: str | None = None
        self._description: str | None = None
        self._example_value: str | None = None
        self._since: str | None = None
        self._deprecated_since: str | None = None
        self._required = False
        self._default_value: str | None = None
        self._possible_values: tuple[str, ...] | None = None

    @property
    def key(self) -> str:
        return self._key

    def set_deprecated_key(self, deprecated_key: str | None) -> Self:
        """Legacy key still accepted as an alias of this parameter."""
        self._deprecated_key = deprecated_key
        return self

    def set_description(self, description: str | None) -> Self:
        self._description = description
        return self

    def set_example_value(self, example_value: Any) -> Self:
        self._example_value = to_text(example_value)
        return self

    def set_since(self, since: str | None) -> Self:
        self._since = since
        return self

    def set_deprecated_since(self, deprecated_since: str | None) -> Self:
        self._deprecated_since = deprecated_since
        return self

    def set_required(self, required: bool) -> Self:
        self._required = required
        return self

    def set_default_value(self, default_value: Any) -> Self:
        """Default returned when the request has no value. Stored as text."""
        self._default_value = to_text(default_value)
        return self

    def set_possible_values(self, *values: Any) -> Self:
        """Restrict accepted values. Accepts varargs or a single iterable, keeps declared order."""
        if len(values) == 1 and isinstance(values[0], Iterable) and not isinstance(values[0], str):
            values = tuple(values[0])
        if not values:
            self._possible_values = None
            return self
        self._possible_values = tuple(dict.fromkeys(str(value) for value in values))
        return self

    def set_boolean_possible_values(self) -> Self:
        return self.set_possible_values(*BOOLEAN_POSSIBLE_VALUES)

    def build(self) -> Param:
        return Param(
            key=self._key,
            deprecated_key=self._deprecated_key,
            description=self._description,
            example_value=self._example_value,
            since=self._since,
            deprecated_since=self._deprecated_since,
            required=self._required,
            default_value=self._default_value,
            possible_values=self._possible_values,
        )


class NewAction:
    """Builder of an Action."""

    def __init__(self, key: str) -> None:
        self._key = key
        self._description: str | None = None
        self._since: str | None = None
        self._deprecated_since: str | None = None
        self._post = False
        self._internal = False
        self._handler: RequestHandler | None = None
        self._params: dict[str, NewParam] = {}

    @property
    def key(self) -> str:
        return self._key

    def set_description(self, description: str | None) -> Self:
        self._description = description
        return self

    def set_since(self, since: str | None) -> Self:
        self._since = since
        return self

    def set_deprecated_since(self, deprecated_since: str | None) -> Self:
        self._deprecated_since = deprecated_since
        return self

    def set_post(self, post: bool) -> Self:
        self._post = post
        return self

    def set_internal(self, internal: bool) -> Self:
        self._internal = internal
        return self

    def set_handler(self, handler: RequestHandler) -> Self:
        self._handler = handler
        return self

    def create_param(self, key: str) -> NewParam:
        if key in self._params:
            raise DefinitionError(f"The parameter '{key}' is defined multiple times in the action '{self._key}'")
        param = NewParam(key)
        self._params[key] = param
        return param

    def build(self, controller_path: str) -> Action:
        path = f"{controller_path}/{self._key}"
        if self._handler is None:
            raise DefinitionError(f"RequestHandler is not set on action '{path}'")
        return Action(
            key=self._key,
            path=path,
            description=self._description,
            since=self._since,
            deprecated_since=self._deprecated_since,
            post=self._post,
            internal=self._internal,
            handler=self._handler,
            params={key: param.build() for key, param in self._params.items()},
        )


class NewController:
    """Builder of a Controller, registered in its context by done()."""

    def __init__(self, context: "Context", path: str) -> None:
        if not path:
            raise DefinitionError("WS controller path must not be empty")
        if path.startswith("/") or path.endswith("/"):
            raise DefinitionError(f"WS controller path must not start or end with slash: {path}")
        self._context = context
        self._path = path
        self._description: str | None = None
        self._since: str | None = None
        self._actions: dict[str, NewAction] = {}

    @property
    def path(self) -> str:
        return self._path

    def set_description(self, description: str | None) -> Self:
        self._description = description
        return self

    def set_since(self, since: str | None) -> Self:
        self._since = since
        return self

    def create_action(self, key: str) -> NewAction:
        if key in self._actions:
            raise DefinitionError(f"The action '{key}' is defined multiple times in the web service '{self._path}'")
        action = NewAction(key)
        self._actions[key] = action
        return action

    def done(self) -> Controller:
        if not self._actions:
            raise DefinitionError(f"At least one action must be declared in the web service '{self._path}'")
        controller = Controller(
            path=self._path,
            description=self._description,
            since=self._since,
            actions={key: action.build(self._path) for key, action in self._actions.items()},
        )
        self._context.register(controller)
        return controller


class Context:
    """Registry of the web services exposed by an application."""

    def __init__(self) -> None:
        self._controllers: dict[str, Controller] = {}

    def create_controller(self, path: str) -> NewController:
        return NewController(self, path)

    def register(self, controller: Controller) -> Self:
        """Register a finalized controller. Returns self for chaining."""
        if controller.path in self._controllers:
            raise DefinitionError(f"The web service '{controller.path}' is defined multiple times")
        self._controllers[controller.path] = controller
        logger.debug(
            f"Registered web service: {controller.path}",
            icon=LogIcon.REGISTRY,
            actions=len(controller.actions),
        )
        return self

    def controller(self, path: str) -> Controller | None:
        return self._controllers.get(path)

    @property
    def controllers(self) -> list[Controller]:
        return list(self._controllers.values())
