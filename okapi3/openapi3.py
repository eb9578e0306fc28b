"""OpenAPI 3.0 document model with conversion to and from JSON-compatible dicts."""

from __future__ import annotations

import copy
import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, ClassVar, Union

Object = dict[str, Any]
SecurityRequirement = dict[str, list[str]]
SchemaObject = dict[str, Any]


# ---------------------------------------------------------------- helpers


def _mapping(data: Any, owner: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{owner}: expected an object, got {type(data).__name__}")
    return data


def _require(data: Mapping[str, Any], key: str, owner: str) -> Any:
    if key not in data:
        raise ValueError(f"{owner}: missing field '{key}'")
    return data[key]


def _require_str(data: Mapping[str, Any], key: str, owner: str) -> str:
    value = _require(data, key, owner)
    if not isinstance(value, str):
        raise ValueError(f"{owner}: field '{key}' must be a string")
    return value


def _json(value: Any) -> Any:
    return copy.deepcopy(value)


def _extensions(data: Mapping[str, Any], known: set[str] | frozenset[str]) -> Object:
    return {k: _json(v) for k, v in data.items() if k not in known}


def _map_from(data: Any, decode: Callable[[Any], Any], owner: str) -> dict[str, Any]:
    return {str(k): decode(v) for k, v in _mapping(data, owner).items()}


def _map_to(mapping: Mapping[str, Any]) -> dict[str, Any]:
    return {k: v.to_dict() for k, v in mapping.items()}


def _opt(data: Mapping[str, Any], key: str, decode: Callable[[Any], Any]) -> Any:
    value = data.get(key)
    return None if value is None else decode(value)


def _put(out: dict[str, Any], key: str, value: Any, encode: Callable[[Any], Any] | None = None) -> None:
    if value is not None:
        out[key] = encode(value) if encode else value


def _put_map(out: dict[str, Any], key: str, mapping: Mapping[str, Any], raw: bool = False) -> None:
    if mapping:
        out[key] = _json(dict(mapping)) if raw else _map_to(mapping)


def _put_true(out: dict[str, Any], key: str, flag: bool) -> None:
    if flag:
        out[key] = True


def _ref_or(cls: Any) -> Callable[[Any], Any]:
    def decode(data: Any) -> Any:
        if isinstance(data, Mapping) and isinstance(data.get("$ref"), str):
            return Ref.from_dict(data)
        return cls.from_dict(data)

    return decode


def _split_extensions(data: Mapping[str, Any]) -> tuple[dict[str, Any], Object]:
    entries: dict[str, Any] = {}
    extensions: Object = {}
    for key, value in data.items():
        if key.startswith("x-"):
            extensions[key] = _json(value)
        else:
            entries[key] = value
    return entries, extensions


# ---------------------------------------------------------------- basic objects


@dataclass
class Ref:
    """A JSON reference (`$ref`) to another part of the document."""

    reference: str

    def to_dict(self) -> dict[str, Any]:
        return {"$ref": self.reference}

    @classmethod
    def from_dict(cls, data: Any) -> Ref:
        return cls(_require_str(_mapping(data, "Ref"), "$ref", "Ref"))


class ParameterStyle(str, Enum):
    MATRIX = "matrix"
    LABEL = "label"
    FORM = "form"
    SIMPLE = "simple"
    SPACE_DELIMITED = "spaceDelimited"
    PIPE_DELIMITED = "pipeDelimited"
    DEEP_OBJECT = "deepObject"


@dataclass
class ExternalDocs:
    url: str = ""
    description: str | None = None
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset({"description", "url"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "description", self.description)
        out["url"] = self.url
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ExternalDocs:
        d = _mapping(data, "ExternalDocs")
        return cls(
            url=_require_str(d, "url", "ExternalDocs"),
            description=d.get("description"),
            extensions=_extensions(d, cls._KEYS),
        )


@dataclass
class Contact:
    name: str | None = None
    url: str | None = None
    email: str | None = None
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset({"name", "url", "email"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "name", self.name)
        _put(out, "url", self.url)
        _put(out, "email", self.email)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Contact:
        d = _mapping(data, "Contact")
        return cls(
            name=d.get("name"),
            url=d.get("url"),
            email=d.get("email"),
            extensions=_extensions(d, cls._KEYS),
        )


@dataclass
class License:
    name: str = ""
    url: str | None = None
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset({"name", "url"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        _put(out, "url", self.url)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> License:
        d = _mapping(data, "License")
        return cls(
            name=_require_str(d, "name", "License"),
            url=d.get("url"),
            extensions=_extensions(d, cls._KEYS),
        )


@dataclass
class Info:
    title: str = ""
    version: str = ""
    description: str | None = None
    terms_of_service: str | None = None
    contact: Contact | None = None
    license: License | None = None
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {"title", "description", "termsOfService", "contact", "license", "version"}
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"title": self.title}
        _put(out, "description", self.description)
        _put(out, "termsOfService", self.terms_of_service)
        _put(out, "contact", self.contact, Contact.to_dict)
        _put(out, "license", self.license, License.to_dict)
        out["version"] = self.version
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Info:
        d = _mapping(data, "Info")
        return cls(
            title=_require_str(d, "title", "Info"),
            version=_require_str(d, "version", "Info"),
            description=d.get("description"),
            terms_of_service=d.get("termsOfService"),
            contact=_opt(d, "contact", Contact.from_dict),
            license=_opt(d, "license", License.from_dict),
            extensions=_extensions(d, cls._KEYS),
        )


@dataclass
class ServerVariable:
    default: str = ""
    enumeration: list[str] | None = None
    description: str | None = None
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset({"enum", "default", "description"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "enum", self.enumeration, list)
        out["default"] = self.default
        _put(out, "description", self.description)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ServerVariable:
        d = _mapping(data, "ServerVariable")
        return cls(
            default=_require_str(d, "default", "ServerVariable"),
            enumeration=_opt(d, "enum", list),
            description=d.get("description"),
            extensions=_extensions(d, cls._KEYS),
        )


@dataclass
class Server:
    url: str = ""
    description: str | None = None
    variables: dict[str, ServerVariable] = field(default_factory=dict)
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset({"url", "description", "variables"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"url": self.url}
        _put(out, "description", self.description)
        _put_map(out, "variables", self.variables)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Server:
        d = _mapping(data, "Server")
        return cls(
            url=_require_str(d, "url", "Server"),
            description=d.get("description"),
            variables=_map_from(d.get("variables") or {}, ServerVariable.from_dict, "Server.variables"),
            extensions=_extensions(d, cls._KEYS),
        )


def _servers_from(data: Any) -> list[Server]:
    return [Server.from_dict(item) for item in data]


@dataclass
class Example:
    """An example given either inline (`value`) or by URL (`external_value`)."""

    value: Any = None
    external_value: str | None = None
    summary: str | None = None
    description: str | None = None
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset({"summary", "description", "value", "externalValue"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "summary", self.summary)
        _put(out, "description", self.description)
        if self.external_value is not None:
            out["externalValue"] = self.external_value
        else:
            out["value"] = _json(self.value)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Example:
        d = _mapping(data, "Example")
        if "externalValue" in d:
            value, external = None, _require_str(d, "externalValue", "Example")
        elif "value" in d:
            value, external = _json(d["value"]), None
        else:
            raise ValueError("Example: needs either 'value' or 'externalValue'")
        return cls(
            value=value,
            external_value=external,
            summary=d.get("summary"),
            description=d.get("description"),
            extensions=_extensions(d, cls._KEYS),
        )


def _examples_from(data: Any) -> dict[str, Example]:
    return _map_from(data, Example.from_dict, "examples")


@dataclass
class Encoding:
    content_type: str | None = None
    headers: dict[str, Union[Header, Ref]] = field(default_factory=dict)
    style: str | None = None
    explode: bool | None = None
    allow_reserved: bool = False
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {"contentType", "headers", "style", "explode", "allowReserved"}
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "contentType", self.content_type)
        _put_map(out, "headers", self.headers)
        _put(out, "style", self.style)
        _put(out, "explode", self.explode)
        _put_true(out, "allowReserved", self.allow_reserved)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Encoding:
        d = _mapping(data, "Encoding")
        return cls(
            content_type=d.get("contentType"),
            headers=_map_from(d.get("headers") or {}, _ref_or(Header), "Encoding.headers"),
            style=d.get("style"),
            explode=d.get("explode"),
            allow_reserved=bool(d.get("allowReserved", False)),
            extensions=_extensions(d, cls._KEYS),
        )


@dataclass
class MediaType:
    schema: SchemaObject | None = None
    example: Any = None
    examples: dict[str, Example] | None = None
    encoding: dict[str, Encoding] = field(default_factory=dict)
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset({"schema", "example", "examples", "encoding"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "schema", self.schema, _json)
        _put(out, "example", self.example, _json)
        _put(out, "examples", self.examples, _map_to)
        _put_map(out, "encoding", self.encoding)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> MediaType:
        d = _mapping(data, "MediaType")
        return cls(
            schema=_opt(d, "schema", lambda s: _json(dict(_mapping(s, "schema")))),
            example=_opt(d, "example", _json),
            examples=_opt(d, "examples", _examples_from),
            encoding=_map_from(d.get("encoding") or {}, Encoding.from_dict, "MediaType.encoding"),
            extensions=_extensions(d, cls._KEYS),
        )


def _content_from(data: Any) -> dict[str, MediaType]:
    return _map_from(data, MediaType.from_dict, "content")


# ---------------------------------------------------------------- parameters


@dataclass
class SchemaValue:
    """Parameter or header described by a schema."""

    schema: SchemaObject = field(default_factory=dict)
    style: ParameterStyle | None = None
    explode: bool | None = None
    allow_reserved: bool = False
    example: Any = None
    examples: dict[str, Example] | None = None

    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {"style", "explode", "allow_reserved", "schema", "example", "examples"}
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "style", self.style, lambda s: ParameterStyle(s).value)
        _put(out, "explode", self.explode)
        _put_true(out, "allow_reserved", self.allow_reserved)
        out["schema"] = _json(self.schema)
        _put(out, "example", self.example, _json)
        _put(out, "examples", self.examples, _map_to)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> SchemaValue:
        d = _mapping(data, "SchemaValue")
        return cls(
            schema=_json(dict(_mapping(_require(d, "schema", "SchemaValue"), "schema"))),
            style=_opt(d, "style", ParameterStyle),
            explode=d.get("explode"),
            allow_reserved=bool(d.get("allow_reserved", False)),
            example=_opt(d, "example", _json),
            examples=_opt(d, "examples", _examples_from),
        )


@dataclass
class ContentValue:
    """Parameter or header described by media-type content."""

    content: dict[str, MediaType] = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset({"content"})

    def to_dict(self) -> dict[str, Any]:
        return {"content": _map_to(self.content)}

    @classmethod
    def from_dict(cls, data: Any) -> ContentValue:
        d = _mapping(data, "ContentValue")
        return cls(content=_content_from(_require(d, "content", "ContentValue")))


ParameterValue = Union[SchemaValue, ContentValue]


def _parameter_value_from(d: Mapping[str, Any], owner: str) -> ParameterValue:
    if "schema" in d:
        return SchemaValue.from_dict(d)
    if "content" in d:
        return ContentValue.from_dict(d)
    raise ValueError(f"{owner}: needs either 'schema' or 'content'")


@dataclass
class Parameter:
    name: str
    location: str
    value: ParameterValue
    description: str | None = None
    required: bool = False
    deprecated: bool = False
    allow_empty_value: bool = False
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {"name", "in", "description", "required", "deprecated", "allowEmptyValue"}
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "in": self.location}
        _put(out, "description", self.description)
        _put_true(out, "required", self.required)
        _put_true(out, "deprecated", self.deprecated)
        _put_true(out, "allowEmptyValue", self.allow_empty_value)
        out.update(self.value.to_dict())
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Parameter:
        d = _mapping(data, "Parameter")
        value = _parameter_value_from(d, "Parameter")
        return cls(
            name=_require_str(d, "name", "Parameter"),
            location=_require_str(d, "in", "Parameter"),
            value=value,
            description=d.get("description"),
            required=bool(d.get("required", False)),
            deprecated=bool(d.get("deprecated", False)),
            allow_empty_value=bool(d.get("allowEmptyValue", False)),
            extensions=_extensions(d, cls._KEYS | value._KEYS),
        )


@dataclass
class Header:
    value: ParameterValue
    description: str | None = None
    required: bool = False
    deprecated: bool = False
    allow_empty_value: bool = False
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {"description", "required", "deprecated", "allowEmptyValue"}
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "description", self.description)
        _put_true(out, "required", self.required)
        _put_true(out, "deprecated", self.deprecated)
        _put_true(out, "allowEmptyValue", self.allow_empty_value)
        out.update(self.value.to_dict())
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Header:
        d = _mapping(data, "Header")
        value = _parameter_value_from(d, "Header")
        return cls(
            value=value,
            description=d.get("description"),
            required=bool(d.get("required", False)),
            deprecated=bool(d.get("deprecated", False)),
            allow_empty_value=bool(d.get("allowEmptyValue", False)),
            extensions=_extensions(d, cls._KEYS | value._KEYS),
        )


@dataclass
class RequestBody:
    content: dict[str, MediaType] = field(default_factory=dict)
    description: str | None = None
    required: bool = False
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset({"description", "content", "required"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "description", self.description)
        out["content"] = _map_to(self.content)
        _put_true(out, "required", self.required)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> RequestBody:
        d = _mapping(data, "RequestBody")
        return cls(
            content=_content_from(_require(d, "content", "RequestBody")),
            description=d.get("description"),
            required=bool(d.get("required", False)),
            extensions=_extensions(d, cls._KEYS),
        )


@dataclass
class Link:
    operation_ref: str | None = None
    operation_id: str | None = None
    parameters: dict[str, Any] = field(default_factory=dict)
    request_body: Any = None
    description: str | None = None
    server: Server | None = None
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {"operationRef", "operationId", "parameters", "requestBody", "description", "server"}
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "operationRef", self.operation_ref)
        _put(out, "operationId", self.operation_id)
        _put_map(out, "parameters", self.parameters, raw=True)
        _put(out, "requestBody", self.request_body, _json)
        _put(out, "description", self.description)
        _put(out, "server", self.server, Server.to_dict)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Link:
        d = _mapping(data, "Link")
        return cls(
            operation_ref=d.get("operationRef"),
            operation_id=d.get("operationId"),
            parameters=_map_from(d.get("parameters") or {}, _json, "Link.parameters"),
            request_body=_opt(d, "requestBody", _json),
            description=d.get("description"),
            server=_opt(d, "server", Server.from_dict),
            extensions=_extensions(d, cls._KEYS),
        )


# ---------------------------------------------------------------- responses and operations


@dataclass
class Response:
    description: str = ""
    headers: dict[str, Union[Header, Ref]] = field(default_factory=dict)
    content: dict[str, MediaType] = field(default_factory=dict)
    links: dict[str, Union[Link, Ref]] = field(default_factory=dict)
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset({"description", "headers", "content", "links"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"description": self.description}
        _put_map(out, "headers", self.headers)
        _put_map(out, "content", self.content)
        _put_map(out, "links", self.links)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Response:
        d = _mapping(data, "Response")
        return cls(
            description=_require_str(d, "description", "Response"),
            headers=_map_from(d.get("headers") or {}, _ref_or(Header), "Response.headers"),
            content=_content_from(d.get("content") or {}),
            links=_map_from(d.get("links") or {}, _ref_or(Link), "Response.links"),
            extensions=_extensions(d, cls._KEYS),
        )


@dataclass
class Responses:
    """Responses by status code; keys starting with `x-` are extensions."""

    default: Union[Response, Ref, None] = None
    responses: dict[str, Union[Response, Ref]] = field(default_factory=dict)
    extensions: Object = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "default", self.default, lambda r: r.to_dict())
        out.update(_map_to(self.responses))
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Responses:
        d = _mapping(data, "Responses")
        rest = {k: v for k, v in d.items() if k != "default"}
        entries, extensions = _split_extensions(rest)
        return cls(
            default=_opt(d, "default", _ref_or(Response)),
            responses=_map_from(entries, _ref_or(Response), "Responses"),
            extensions=extensions,
        )


@dataclass
class Operation:
    responses: Responses = field(default_factory=Responses)
    tags: list[str] = field(default_factory=list)
    summary: str | None = None
    description: str | None = None
    external_docs: ExternalDocs | None = None
    operation_id: str | None = None
    parameters: list[Union[Parameter, Ref]] = field(default_factory=list)
    request_body: Union[RequestBody, Ref, None] = None
    callbacks: dict[str, Union[Callback, Ref]] = field(default_factory=dict)
    deprecated: bool = False
    security: list[SecurityRequirement] | None = None
    servers: list[Server] | None = None
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {
            "tags", "summary", "description", "externalDocs", "operationId", "parameters",
            "requestBody", "responses", "callbacks", "deprecated", "security", "servers",
        }
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.tags:
            out["tags"] = list(self.tags)
        _put(out, "summary", self.summary)
        _put(out, "description", self.description)
        _put(out, "externalDocs", self.external_docs, ExternalDocs.to_dict)
        _put(out, "operationId", self.operation_id)
        if self.parameters:
            out["parameters"] = [p.to_dict() for p in self.parameters]
        _put(out, "requestBody", self.request_body, lambda r: r.to_dict())
        out["responses"] = self.responses.to_dict()
        _put_map(out, "callbacks", self.callbacks)
        _put_true(out, "deprecated", self.deprecated)
        _put(out, "security", self.security, _json)
        _put(out, "servers", self.servers, lambda s: [x.to_dict() for x in s])
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Operation:
        d = _mapping(data, "Operation")
        return cls(
            responses=Responses.from_dict(_require(d, "responses", "Operation")),
            tags=list(d.get("tags") or []),
            summary=d.get("summary"),
            description=d.get("description"),
            external_docs=_opt(d, "externalDocs", ExternalDocs.from_dict),
            operation_id=d.get("operationId"),
            parameters=[_ref_or(Parameter)(p) for p in d.get("parameters") or []],
            request_body=_opt(d, "requestBody", _ref_or(RequestBody)),
            callbacks=_map_from(d.get("callbacks") or {}, _ref_or(Callback), "Operation.callbacks"),
            deprecated=bool(d.get("deprecated", False)),
            security=_opt(d, "security", _json),
            servers=_opt(d, "servers", _servers_from),
            extensions=_extensions(d, cls._KEYS),
        )


_METHODS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


@dataclass
class PathItem:
    reference: str | None = None
    summary: str | None = None
    description: str | None = None
    get: Operation | None = None
    put: Operation | None = None
    post: Operation | None = None
    delete: Operation | None = None
    options: Operation | None = None
    head: Operation | None = None
    patch: Operation | None = None
    trace: Operation | None = None
    servers: list[Server] | None = None
    parameters: list[Union[Parameter, Ref]] = field(default_factory=list)
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {"$ref", "summary", "description", "servers", "parameters", *_METHODS}
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "$ref", self.reference)
        _put(out, "summary", self.summary)
        _put(out, "description", self.description)
        for method in _METHODS:
            _put(out, method, getattr(self, method), Operation.to_dict)
        _put(out, "servers", self.servers, lambda s: [x.to_dict() for x in s])
        if self.parameters:
            out["parameters"] = [p.to_dict() for p in self.parameters]
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> PathItem:
        d = _mapping(data, "PathItem")
        operations = {m: _opt(d, m, Operation.from_dict) for m in _METHODS}
        return cls(
            reference=d.get("$ref"),
            summary=d.get("summary"),
            description=d.get("description"),
            servers=_opt(d, "servers", _servers_from),
            parameters=[_ref_or(Parameter)(p) for p in d.get("parameters") or []],
            extensions=_extensions(d, cls._KEYS),
            **operations,
        )


@dataclass
class Callback:
    """Path items by expression; keys starting with `x-` are extensions."""

    callbacks: dict[str, PathItem] = field(default_factory=dict)
    extensions: Object = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out = _map_to(self.callbacks)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Callback:
        entries, extensions = _split_extensions(_mapping(data, "Callback"))
        return cls(
            callbacks=_map_from(entries, PathItem.from_dict, "Callback"),
            extensions=extensions,
        )


# ---------------------------------------------------------------- security


@dataclass
class ImplicitFlow:
    authorization_url: str
    refresh_url: str | None = None
    scopes: dict[str, str] = field(default_factory=dict)
    extensions: Object = field(default_factory=dict)

    KIND: ClassVar[str] = "implicit"
    _KEYS: ClassVar[frozenset[str]] = frozenset({"authorizationUrl", "refreshUrl", "scopes"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"authorizationUrl": self.authorization_url}
        _put(out, "refreshUrl", self.refresh_url)
        out["scopes"] = dict(self.scopes)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ImplicitFlow:
        d = _mapping(data, "ImplicitFlow")
        return cls(
            authorization_url=_require_str(d, "authorizationUrl", "ImplicitFlow"),
            refresh_url=d.get("refreshUrl"),
            scopes=dict(_mapping(_require(d, "scopes", "ImplicitFlow"), "scopes")),
            extensions=_extensions(d, cls._KEYS),
        )


@dataclass
class PasswordFlow:
    token_url: str
    refresh_url: str | None = None
    scopes: dict[str, str] = field(default_factory=dict)
    extensions: Object = field(default_factory=dict)

    KIND: ClassVar[str] = "password"
    _KEYS: ClassVar[frozenset[str]] = frozenset({"tokenUrl", "refreshUrl", "scopes"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"tokenUrl": self.token_url}
        _put(out, "refreshUrl", self.refresh_url)
        out["scopes"] = dict(self.scopes)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> PasswordFlow:
        d = _mapping(data, "PasswordFlow")
        return cls(
            token_url=_require_str(d, "tokenUrl", "PasswordFlow"),
            refresh_url=d.get("refreshUrl"),
            scopes=dict(_mapping(_require(d, "scopes", "PasswordFlow"), "scopes")),
            extensions=_extensions(d, cls._KEYS),
        )


@dataclass
class ClientCredentialsFlow:
    token_url: str
    refresh_url: str | None = None
    scopes: dict[str, str] = field(default_factory=dict)
    extensions: Object = field(default_factory=dict)

    KIND: ClassVar[str] = "clientCredentials"
    _KEYS: ClassVar[frozenset[str]] = frozenset({"tokenUrl", "refreshUrl", "scopes"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"tokenUrl": self.token_url}
        _put(out, "refreshUrl", self.refresh_url)
        out["scopes"] = dict(self.scopes)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> ClientCredentialsFlow:
        d = _mapping(data, "ClientCredentialsFlow")
        return cls(
            token_url=_require_str(d, "tokenUrl", "ClientCredentialsFlow"),
            refresh_url=d.get("refreshUrl"),
            scopes=dict(_mapping(_require(d, "scopes", "ClientCredentialsFlow"), "scopes")),
            extensions=_extensions(d, cls._KEYS),
        )


@dataclass
class AuthorizationCodeFlow:
    authorization_url: str
    token_url: str
    refresh_url: str | None = None
    scopes: dict[str, str] = field(default_factory=dict)
    extensions: Object = field(default_factory=dict)

    KIND: ClassVar[str] = "authorizationCode"
    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {"authorizationUrl", "tokenUrl", "refreshUrl", "scopes"}
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "authorizationUrl": self.authorization_url,
            "tokenUrl": self.token_url,
        }
        _put(out, "refreshUrl", self.refresh_url)
        out["scopes"] = dict(self.scopes)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> AuthorizationCodeFlow:
        d = _mapping(data, "AuthorizationCodeFlow")
        return cls(
            authorization_url=_require_str(d, "authorizationUrl", "AuthorizationCodeFlow"),
            token_url=_require_str(d, "tokenUrl", "AuthorizationCodeFlow"),
            refresh_url=d.get("refreshUrl"),
            scopes=dict(_mapping(_require(d, "scopes", "AuthorizationCodeFlow"), "scopes")),
            extensions=_extensions(d, cls._KEYS),
        )


OAuthFlow = Union[ImplicitFlow, PasswordFlow, ClientCredentialsFlow, AuthorizationCodeFlow]

_FLOWS: dict[str, Any] = {
    flow.KIND: flow
    for flow in (ImplicitFlow, PasswordFlow, ClientCredentialsFlow, AuthorizationCodeFlow)
}


def _flow_from(data: Any) -> OAuthFlow:
    d = _mapping(data, "flows")
    if len(d) != 1:
        raise ValueError("flows: expected exactly one flow")
    ((kind, body),) = d.items()
    try:
        flow_cls = _FLOWS[kind]
    except KeyError:
        raise ValueError(f"flows: unknown flow '{kind}'") from None
    return flow_cls.from_dict(body)


@dataclass
class ApiKeyScheme:
    name: str
    location: str

    TYPE: ClassVar[str] = "apiKey"
    _KEYS: ClassVar[frozenset[str]] = frozenset({"type", "name", "in"})

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.TYPE, "name": self.name, "in": self.location}

    @classmethod
    def from_dict(cls, data: Any) -> ApiKeyScheme:
        d = _mapping(data, "ApiKeyScheme")
        return cls(
            name=_require_str(d, "name", "ApiKeyScheme"),
            location=_require_str(d, "in", "ApiKeyScheme"),
        )


@dataclass
class HttpScheme:
    scheme: str
    bearer_format: str | None = None

    TYPE: ClassVar[str] = "http"
    _KEYS: ClassVar[frozenset[str]] = frozenset({"type", "scheme", "bearerFormat"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"type": self.TYPE, "scheme": self.scheme}
        _put(out, "bearerFormat", self.bearer_format)
        return out

    @classmethod
    def from_dict(cls, data: Any) -> HttpScheme:
        d = _mapping(data, "HttpScheme")
        return cls(
            scheme=_require_str(d, "scheme", "HttpScheme"),
            bearer_format=d.get("bearerFormat"),
        )


@dataclass
class OAuth2Scheme:
    flows: OAuthFlow

    TYPE: ClassVar[str] = "oauth2"
    _KEYS: ClassVar[frozenset[str]] = frozenset({"type", "flows"})

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.TYPE, "flows": {self.flows.KIND: self.flows.to_dict()}}

    @classmethod
    def from_dict(cls, data: Any) -> OAuth2Scheme:
        d = _mapping(data, "OAuth2Scheme")
        return cls(flows=_flow_from(_require(d, "flows", "OAuth2Scheme")))


@dataclass
class OpenIdConnectScheme:
    open_id_connect_url: str

    TYPE: ClassVar[str] = "openIdConnect"
    _KEYS: ClassVar[frozenset[str]] = frozenset({"type", "openIdConnectUrl"})

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.TYPE, "openIdConnectUrl": self.open_id_connect_url}

    @classmethod
    def from_dict(cls, data: Any) -> OpenIdConnectScheme:
        d = _mapping(data, "OpenIdConnectScheme")
        return cls(
            open_id_connect_url=_require_str(d, "openIdConnectUrl", "OpenIdConnectScheme")
        )


SecuritySchemeData = Union[ApiKeyScheme, HttpScheme, OAuth2Scheme, OpenIdConnectScheme]

_SCHEME_TYPES: dict[str, Any] = {
    kind.TYPE: kind for kind in (ApiKeyScheme, HttpScheme, OAuth2Scheme, OpenIdConnectScheme)
}


@dataclass
class SecurityScheme:
    data: SecuritySchemeData
    description: str | None = None
    extensions: Object = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put(out, "description", self.description)
        out.update(self.data.to_dict())
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> SecurityScheme:
        d = _mapping(data, "SecurityScheme")
        kind = _require(d, "type", "SecurityScheme")
        try:
            scheme_cls = _SCHEME_TYPES[kind]
        except (KeyError, TypeError):
            raise ValueError(f"SecurityScheme: unknown type {kind!r}") from None
        return cls(
            data=scheme_cls.from_dict(d),
            description=d.get("description"),
            extensions=_extensions(d, scheme_cls._KEYS | {"description"}),
        )


# ---------------------------------------------------------------- document


@dataclass
class Tag:
    name: str = ""
    description: str | None = None
    external_docs: ExternalDocs | None = None
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset({"name", "description", "externalDocs"})

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name}
        _put(out, "description", self.description)
        _put(out, "externalDocs", self.external_docs, ExternalDocs.to_dict)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Tag:
        d = _mapping(data, "Tag")
        return cls(
            name=_require_str(d, "name", "Tag"),
            description=d.get("description"),
            external_docs=_opt(d, "externalDocs", ExternalDocs.from_dict),
            extensions=_extensions(d, cls._KEYS),
        )


_COMPONENT_FIELDS: tuple[tuple[str, str, Any], ...] = (
    ("responses", "responses", Response),
    ("parameters", "parameters", Parameter),
    ("examples", "examples", Example),
    ("request_bodies", "requestBodies", RequestBody),
    ("headers", "headers", Header),
    ("security_schemes", "securitySchemes", SecurityScheme),
    ("links", "links", Link),
    ("callbacks", "callbacks", Callback),
)


@dataclass
class Components:
    schemas: dict[str, SchemaObject] = field(default_factory=dict)
    responses: dict[str, Union[Response, Ref]] = field(default_factory=dict)
    parameters: dict[str, Union[Parameter, Ref]] = field(default_factory=dict)
    examples: dict[str, Union[Example, Ref]] = field(default_factory=dict)
    request_bodies: dict[str, Union[RequestBody, Ref]] = field(default_factory=dict)
    headers: dict[str, Union[Header, Ref]] = field(default_factory=dict)
    security_schemes: dict[str, Union[SecurityScheme, Ref]] = field(default_factory=dict)
    links: dict[str, Union[Link, Ref]] = field(default_factory=dict)
    callbacks: dict[str, Union[Callback, Ref]] = field(default_factory=dict)
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {"schemas", *(key for _, key, _ in _COMPONENT_FIELDS)}
    )

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        _put_map(out, "schemas", self.schemas, raw=True)
        for attr, key, _ in _COMPONENT_FIELDS:
            _put_map(out, key, getattr(self, attr))
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> Components:
        d = _mapping(data, "Components")
        maps = {
            attr: _map_from(d.get(key) or {}, _ref_or(item_cls), f"Components.{key}")
            for attr, key, item_cls in _COMPONENT_FIELDS
        }
        return cls(
            schemas=_map_from(
                d.get("schemas") or {},
                lambda s: _json(dict(_mapping(s, "schema"))),
                "Components.schemas",
            ),
            extensions=_extensions(d, cls._KEYS),
            **maps,
        )


@dataclass
class OpenApi:
    """A whole OpenAPI document."""

    openapi: str = ""
    info: Info = field(default_factory=Info)
    servers: list[Server] = field(default_factory=list)
    paths: dict[str, PathItem] = field(default_factory=dict)
    components: Components | None = None
    security: list[SecurityRequirement] = field(default_factory=list)
    tags: list[Tag] = field(default_factory=list)
    external_docs: ExternalDocs | None = None
    extensions: Object = field(default_factory=dict)

    _KEYS: ClassVar[frozenset[str]] = frozenset(
        {"openapi", "info", "servers", "paths", "components", "security", "tags", "externalDocs"}
    )

    @classmethod
    def new(cls) -> OpenApi:
        """Return an empty document carrying the default OpenAPI version."""
        return cls(openapi=cls.default_version())

    @staticmethod
    def default_version() -> str:
        return "3.0.0"

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"openapi": self.openapi, "info": self.info.to_dict()}
        if self.servers:
            out["servers"] = [s.to_dict() for s in self.servers]
        out["paths"] = _map_to(self.paths)
        _put(out, "components", self.components, Components.to_dict)
        if self.security:
            out["security"] = _json(self.security)
        if self.tags:
            out["tags"] = [t.to_dict() for t in self.tags]
        _put(out, "externalDocs", self.external_docs, ExternalDocs.to_dict)
        out.update(_json(self.extensions))
        return out

    @classmethod
    def from_dict(cls, data: Any) -> OpenApi:
        d = _mapping(data, "OpenApi")
        return cls(
            openapi=_require_str(d, "openapi", "OpenApi"),
            info=Info.from_dict(_require(d, "info", "OpenApi")),
            servers=_servers_from(d.get("servers") or []),
            paths=_map_from(_require(d, "paths", "OpenApi"), PathItem.from_dict, "OpenApi.paths"),
            components=_opt(d, "components", Components.from_dict),
            security=_json(list(d.get("security") or [])),
            tags=[Tag.from_dict(t) for t in d.get("tags") or []],
            external_docs=_opt(d, "externalDocs", ExternalDocs.from_dict),
            extensions=_extensions(d, cls._KEYS),
        )

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_json(cls, text: str | bytes) -> OpenApi:
        return cls.from_dict(json.loads(text))