"""In-memory request, for tests and for calling actions without HTTP."""

from collections.abc import Iterable
from typing import BinaryIO, Self

from wsparams.core.request import ValidatingRequest
from wsparams.core.settings import settings
from wsparams.models.core import Part
from wsparams.models.definition import Action


class SimpleRequest(ValidatingRequest):
    """ValidatingRequest backed by plain dicts."""

    def __init__(
        self,
        action: Action | None = None,
        method: str = "GET",
        media_type: str | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(action)
        self._method = method
        self._media_type = media_type or settings.DEFAULT_MEDIA_TYPE
        self._path = path
        self._params: dict[str, str] = {}
        self._multi_params: dict[str, list[str]] = {}
        self._parts: dict[str, Part] = {}

    @property
    def method(self) -> str:
        return self._method

    @property
    def media_type(self) -> str:
        return self._media_type

    @property
    def path(self) -> str | None:
        return self._path

    def set_param(self, key: str, value: str | None) -> Self:
        """Store a value. None leaves any previous value in place."""
        if value is not None:
            self._params[key] = value
        return self

    def set_multi_param(self, key: str, values: Iterable[str]) -> Self:
        self._multi_params.setdefault(key, []).extend(values)
        return self

    def set_part(self, key: str, input_stream: BinaryIO, file_name: str) -> Self:
        self._parts[key] = Part(input_stream, file_name)
        return self

    def has_param(self, key: str) -> bool:
        return key in self._params

    def _read_param(self, key: str) -> str | None:
        return self._params.get(key)

    def _read_multi_param(self, key: str) -> list[str]:
        return list(self._multi_params.get(key, []))

    def _read_part(self, key: str) -> Part | None:
        return self._parts.get(key)
