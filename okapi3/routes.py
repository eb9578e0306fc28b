"""Route descriptions: HTTP method, URI template and the parameters it names."""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

_ADD_OPERATION_PREFIX = "okapi_add_operation_for_"

_ROUTE_ATTRIBUTES = frozenset(
    {"get", "put", "post", "delete", "options", "head", "trace", "connect", "patch", "route"}
)

_MEDIA_SHORTHANDS: dict[str, str] = {
    "any": "*/*",
    "binary": "application/octet-stream",
    "bytes": "application/octet-stream",
    "json": "application/json",
    "msgpack": "application/msgpack",
    "form": "application/x-www-form-urlencoded",
    "formdata": "multipart/form-data",
    "pdf": "application/pdf",
    "javascript": "application/javascript",
    "js": "application/javascript",
    "wasm": "application/wasm",
    "zip": "application/zip",
    "gzip": "application/gzip",
    "html": "text/html",
    "plain": "text/plain",
    "text": "text/plain",
    "txt": "text/plain",
    "xml": "text/xml",
    "css": "text/css",
    "csv": "text/csv",
    "markdown": "text/markdown",
    "png": "image/png",
    "gif": "image/gif",
    "jpeg": "image/jpeg",
    "jpg": "image/jpeg",
    "svg": "image/svg+xml",
    "webp": "image/webp",
    "icon": "image/x-icon",
    "ico": "image/x-icon",
}

_MEDIA_WORD = r"[A-Za-z0-9!#$&^_.+\-*]+"
_MEDIA_TYPE_RE = re.compile(
    rf"^({_MEDIA_WORD})/({_MEDIA_WORD})((?:\s*;\s*{_MEDIA_WORD}=(?:{_MEDIA_WORD}|\"[^\"]*\"))*)\s*$"
)


class RouteError(ValueError):
    """Raised when a route description cannot be understood."""


class HttpMethod(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"
    TRACE = "TRACE"
    CONNECT = "CONNECT"
    PATCH = "PATCH"


def _method_from(value: Any) -> HttpMethod:
    if isinstance(value, HttpMethod):
        return value
    try:
        return HttpMethod(str(value).upper())
    except ValueError:
        raise RouteError(f"Unknown HTTP method: '{value}'") from None


def _split_uri(uri: str) -> tuple[str, str | None]:
    if not isinstance(uri, str) or not uri.startswith("/"):
        raise RouteError(f"Invalid route URI '{uri}': it must start with '/'")
    if "#" in uri or any(ch.isspace() or ord(ch) < 0x20 for ch in uri):
        raise RouteError(f"Invalid route URI '{uri}': unexpected character")
    path, sep, query = uri.partition("?")
    return path, (query if sep else None)


def _media_type_from(value: str) -> str:
    text = value.strip()
    shorthand = _MEDIA_SHORTHANDS.get(text.lower())
    if shorthand is not None:
        return shorthand
    if _MEDIA_TYPE_RE.match(text):
        return text
    raise RouteError(f"Unknown media type: '{value}'")


def _is_single(segment: str) -> bool:
    return segment.startswith("<") and segment.endswith(">") and not segment.endswith("..>")


def _is_multi(segment: str) -> bool:
    return segment.startswith("<") and segment.endswith("..>")


def trim_angle_brackets(text: str) -> str:
    """Strip one pair of surrounding angle brackets, if present."""
    if text.startswith("<") and text.endswith(">"):
        return text[1:-1]
    return text


def add_operation_fn_name(route_fn_name: str) -> str:
    """Name of the generated function that documents the route function."""
    return f"{_ADD_OPERATION_PREFIX}{route_fn_name}_"


@dataclass(frozen=True)
class Route:
    """A route: its method, path, optional query template, format and data parameter."""

    method: HttpMethod
    path: str
    query: str | None = None
    media_type: str | None = None
    data_param: str | None = None

    @classmethod
    def parse(
        cls,
        method: HttpMethod | str,
        uri: str,
        data: str | None = None,
        format: str | None = None,
    ) -> Route:
        """Build a route from its method, URI template, data parameter and format."""
        path, query = _split_uri(uri)
        return cls(
            method=_method_from(method),
            path=path,
            query=query,
            media_type=None if format is None else _media_type_from(format),
            data_param=None if data is None else trim_angle_brackets(data),
        )

    @classmethod
    def from_attribute(
        cls,
        name: str,
        args: Sequence[Any] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> Route:
        """Build a route from a route attribute such as `get("/user", data="<user>")`.

        For `route`, the first positional argument is the method and `path` is named.
        Unknown named arguments are ignored.
        """
        kwargs = dict(kwargs or {})
        if name not in _ROUTE_ATTRIBUTES:
            raise RouteError(f"Could not find route attribute: '{name}'")
        if not args:
            raise RouteError("Too few items: Expected at least 1")
        if name == "route":
            method = _method_from(args[0])
            if "path" not in kwargs:
                raise RouteError("Missing field `path`")
            uri = kwargs["path"]
        else:
            method = _method_from(name)
            uri = args[0]
        return cls.parse(method, uri, data=kwargs.get("data"), format=kwargs.get("format"))

    def _segments(self) -> list[str]:
        return [s for s in self.path.split("/") if s]

    def _query_items(self) -> list[str]:
        return [] if self.query is None else self.query.split("&")

    def path_params(self) -> list[str]:
        """Names of single-segment path parameters, e.g. `<id>`."""
        return [s[1:-1] for s in self._segments() if _is_single(s)]

    def path_multi_param(self) -> str | None:
        """Name of the first multi-segment path parameter, e.g. `<path..>`."""
        return next((s[1:-3] for s in self._segments() if _is_multi(s)), None)

    def query_params(self) -> list[str]:
        """Names of single query parameters, e.g. `<name>`."""
        return [s[1:-1] for s in self._query_items() if _is_single(s)]

    def query_multi_params(self) -> list[str]:
        """Names of multi query parameters, e.g. `<post..>`."""
        return [s[1:-3] for s in self._query_items() if _is_multi(s)]