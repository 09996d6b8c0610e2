"""ValidatingRequest reading the parameters of a Robyn request."""

from io import BytesIO

from robyn import Request as HttpRequest

from wsparams.core.request import ValidatingRequest
from wsparams.core.settings import settings
from wsparams.models.core import Part
from wsparams.models.definition import Action


class RobynRequest(ValidatingRequest):
    """Parameters from the query string first, then form data. Parts from uploaded files."""

    def __init__(self, request: HttpRequest, action: Action | None = None) -> None:
        super().__init__(action)
        self._request = request

    @property
    def method(self) -> str:
        return str(self._request.method)

    @property
    def media_type(self) -> str:
        accept = self._request.headers.get("accept")
        if accept:
            media_range = accept.split(",")[0].split(";")[0].strip()
            if media_range and media_range != "*/*":
                return media_range
        return settings.DEFAULT_MEDIA_TYPE

    @property
    def path(self) -> str | None:
        url = getattr(self._request, "url", None)
        return getattr(url, "path", None)

    def has_param(self, key: str) -> bool:
        return self._read_param(key) is not None

    def _query_values(self, key: str) -> list[str]:
        query_params = getattr(self._request, "query_params", None)
        if query_params is None:
            return []
        return list(query_params.get_all(key) or [])

    def _form_data(self) -> dict[str, str]:
        return getattr(self._request, "form_data", None) or {}

    def _read_param(self, key: str) -> str | None:
        values = self._query_values(key)
        if values:
            return values[0]
        return self._form_data().get(key)

    def _read_multi_param(self, key: str) -> list[str]:
        values = self._query_values(key)
        form_value = self._form_data().get(key)
        if form_value is not None:
            values.append(form_value)
        return values

    def _read_part(self, key: str) -> Part | None:
        files = getattr(self._request, "files", None) or {}
        data = files.get(key)
        if data is None:
            return None
        if isinstance(data, str):
            data = data.encode(settings.INPUT_STREAM_ENCODING)
        return Part(BytesIO(bytes(data)), key)
