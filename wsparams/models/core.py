"""Core models for request parameter handling."""

from typing import BinaryIO


class Part:
    """Binary upload carried by a multipart/form-data request."""

    __slots__ = ("_input_stream", "_file_name")

    def __init__(self, input_stream: BinaryIO, file_name: str) -> None:
        self._input_stream = input_stream
        self._file_name = file_name

    @property
    def input_stream(self) -> BinaryIO:
        """Stream owned by the request. Not closed by readers."""
        return self._input_stream

    @property
    def file_name(self) -> str:
        return self._file_name

    def __repr__(self) -> str:
        return f"Part(file_name={self._file_name!r})"
