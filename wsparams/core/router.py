"""Router binding handlers to action definitions, with typed parameter injection and error responses."""

import inspect
from collections.abc import Callable
from functools import wraps
from typing import Any

import orjson
from pydantic import BaseModel
from robyn import Request, Response, SubRouter, status_codes
from robyn.robyn import HttpMethod

from wsparams.core.errors import DefinitionError, ParamError, ParamValidationError
from wsparams.core.logger import LogIcon, logger
from wsparams.core.request import Request as WsRequest
from wsparams.core.robyn_request import RobynRequest
from wsparams.models.definition import Action


def parse_endpoint_signature(sig: inspect.Signature) -> set[str]:
    """Parse function signature for parameters expecting a web service request."""
    ws_params: set[str] = set()

    for name, param in sig.parameters.items():
        annotation = param.annotation
        match annotation:
            case type() if issubclass(annotation, WsRequest):
                ws_params.add(name)

    return ws_params


def parse_error_response(error: ParamError) -> Response:
    """Convert a parameter fault to a JSON error response."""
    description = orjson.dumps({"errors": [{"msg": error.message}]}).decode()

    match error:
        case ParamValidationError():
            logger.warning("Invalid request parameter", icon=LogIcon.FORBIDDEN, key=error.key, msg=error.message)
            status_code = error.status_code
        case _:
            logger.error("Parameter access bug", icon=LogIcon.ERROR, key=error.key, msg=error.message)
            status_code = status_codes.HTTP_500_INTERNAL_SERVER_ERROR

    return Response(
        status_code=status_code,
        headers={"content-type": "application/json"},
        description=description,
    )


def parse_response(result: Any) -> Response:
    """Convert handler result to Response."""
    match result:
        case Response():
            return result
        case BaseModel():
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={"content-type": "application/json"},
                description=result.model_dump_json(),
            )
        case dict() | list():
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={"content-type": "application/json"},
                description=orjson.dumps(result).decode(),
            )
        case _:
            return Response(
                status_code=status_codes.HTTP_200_OK,
                headers={},
                description=str(result),
            )


def wrap_handler(handler: Callable, action: Action | None) -> Callable:
    """Wrap an async handler so it receives requests bound to ``action``."""
    sig = inspect.signature(handler)
    ws_params = parse_endpoint_signature(sig)
    has_request_param = "request" in sig.parameters

    if ws_params and action is None:
        raise DefinitionError(f"Handler '{handler.__name__}' reads request parameters but no action is declared")

    @wraps(handler)
    async def wrapped_handler(request: Request, **h_kwargs):
        if ws_params:
            ws_request = RobynRequest(request, action)
            for name in ws_params:
                h_kwargs[name] = ws_request

        # Pass request to handler only if it declared it
        if has_request_param:
            h_kwargs["request"] = request

        try:
            result = await handler(**h_kwargs)
        except ParamError as ex:
            return parse_error_response(ex)
        return parse_response(result)

    # Build signature: always include request for Robyn injection
    new_params = [inspect.Parameter("request", inspect.Parameter.POSITIONAL_OR_KEYWORD, annotation=Request)]
    for name, param in sig.parameters.items():
        if name == "request" or name in ws_params:
            continue
        new_params.append(param)

    wrapped_handler.__signature__ = sig.replace(parameters=new_params)  # type: ignore[attr-defined]
    return wrapped_handler


HTTP_METHODS = (
    HttpMethod.GET,
    HttpMethod.POST,
    HttpMethod.PUT,
    HttpMethod.DELETE,
    HttpMethod.PATCH,
    HttpMethod.HEAD,
    HttpMethod.OPTIONS,
    HttpMethod.TRACE,
    HttpMethod.CONNECT,
)


def _create_method_wrapper(original_method: Callable) -> Callable:
    @wraps(original_method)
    def method_wrapper(*args, action: Action | None = None, **kwargs) -> Callable:
        decorator = original_method(*args, **kwargs)

        def handler_decorator(handler: Callable) -> Callable:
            wrapped_handler = wrap_handler(handler, action)
            if action is not None:
                logger.debug(f"Bound handler to action: {action.path}", icon=LogIcon.ADAPTER)
            return decorator(wrapped_handler)

        return handler_decorator

    return method_wrapper


class Router(SubRouter):
    """SubRouter whose method decorators accept ``action=`` and inject bound requests."""

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._wrap_methods()

    def _wrap_methods(self) -> None:
        """Wrap HTTP methods with parameter binding logic."""
        for method in HTTP_METHODS:
            method_name = str(method).split(".")[-1].lower()
            if hasattr(self, method_name):
                original_method = getattr(self, method_name)
                setattr(self, method_name, _create_method_wrapper(original_method))
