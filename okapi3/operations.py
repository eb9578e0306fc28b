"""Turn documented route functions into OpenAPI operations."""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .docs import get_title_and_desc_from_doc
from .openapi3 import Operation
from .routes import HttpMethod, Route, RouteError

_KNOWN_FIELDS = frozenset({"skip", "tag"})


@dataclass
class OpenApiAttribute:
    """Options given to the documentation attribute: `skip` and any number of `tag`s."""

    skip: bool = False
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_args(
        cls, args: Sequence[str] = (), kwargs: Mapping[str, Any] | None = None
    ) -> OpenApiAttribute:
        """Read flags such as `skip` and named options such as `tag="Users"`.

        `tag` may be a single string or a list of strings.
        """
        skip = False
        tags: list[str] = []
        for flag in args:
            if flag != "skip":
                raise ValueError(f"Unknown field: `{flag}`")
            skip = True
        for name, value in (kwargs or {}).items():
            if name not in _KNOWN_FIELDS:
                raise ValueError(f"Unknown field: `{name}`")
            if name == "skip":
                if not isinstance(value, bool):
                    raise ValueError("Unexpected type for `skip`: expected a bool")
                skip = value
            else:
                values = [value] if isinstance(value, str) else list(value)
                if not all(isinstance(tag, str) for tag in values):
                    raise ValueError("Unexpected type for `tag`: expected a string")
                tags.extend(values)
        return cls(skip=skip, tags=tags)


@dataclass
class ArgumentKinds:
    """Where each argument of a route function gets its value from."""

    path_params: list[str] = field(default_factory=list)
    path_multi_param: str | None = None
    query_params: list[str] = field(default_factory=list)
    query_multi_params: list[str] = field(default_factory=list)
    data_param: str | None = None
    request_guards: list[str] = field(default_factory=list)


def _lookup(name: str, available: set[str], what: str) -> str:
    if name not in available:
        raise RouteError(f"Could not find argument {name} matching {what}.")
    return name


def classify_arguments(route: Route, arg_names: Iterable[str]) -> ArgumentKinds:
    """Sort the function's arguments into path, query, data and request-guard arguments.

    Arguments not named by the route are request guards, listed in name order.
    """
    names = list(arg_names)
    available = set(names)
    kinds = ArgumentKinds(
        path_params=[_lookup(a, available, "path param") for a in route.path_params()],
    )
    multi = route.path_multi_param()
    if multi is not None:
        kinds.path_multi_param = _lookup(multi, available, "multi path param")
    kinds.query_params = [_lookup(a, available, "query param") for a in route.query_params()]
    kinds.query_multi_params = [
        _lookup(a, available, "multi query param") for a in route.query_multi_params()
    ]
    if route.data_param is not None:
        kinds.data_param = _lookup(route.data_param, available, "data param")

    used = {
        *kinds.path_params,
        *kinds.query_params,
        *kinds.query_multi_params,
        *(p for p in (kinds.path_multi_param, kinds.data_param) if p is not None),
    }
    kinds.request_guards = sorted(available - used)
    return kinds


def openapi_path(route: Route) -> str:
    """The route path written as an OpenAPI template: `<id>` and `<path..>` become `{...}`."""
    return route.path.replace("<", "{").replace("..>", "}").replace(">", "}")


def to_pascal_case(method: HttpMethod | str) -> str:
    """Method name with a capital first letter and the rest lower case."""
    text = method.value if isinstance(method, HttpMethod) else str(method)
    return text[:1].upper() + text[1:].lower()


def build_operation(
    route: Route,
    op_id: str,
    doc_lines: Iterable[str] | str = (),
    tags: Iterable[str] = (),
) -> tuple[str, HttpMethod, Operation]:
    """Return `(path, method, operation)` for a documented route function."""
    title, description = get_title_and_desc_from_doc(doc_lines)
    operation = Operation(
        operation_id=op_id,
        summary=title,
        description=description,
        tags=list(tags),
    )
    return openapi_path(route), route.method, operation


def operation_id(fn_path: str | Sequence[str]) -> str:
    """Operation id of a function path: its segments joined with `_`."""
    segments = fn_path.split("::") if isinstance(fn_path, str) else list(fn_path)
    return "_".join(segment.strip() for segment in segments)