"""Merge several OpenAPI documents into one."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable, MutableMapping, Mapping, MutableSequence, Sequence
from typing import Any, TypeVar

from .openapi3 import Components, Info, OpenApi, PathItem, Responses, Tag

logger = logging.getLogger(__name__)

T = TypeVar("T")

_OPERATIONS = ("get", "put", "post", "delete", "options", "head", "patch", "trace")


class MergeError(Exception):
    """Raised when two documents cannot be merged."""

    def __init__(self, msg: str) -> None:
        super().__init__(msg)
        self.msg = msg

    def __str__(self) -> str:
        return self.msg


def merge_spec_list(spec_list: Iterable[tuple[Any, OpenApi]]) -> OpenApi:
    """Merge `(path_prefix, spec)` pairs into one new document."""
    merged = OpenApi.new()
    for path_prefix, spec in spec_list:
        merge_specs(merged, path_prefix, spec)
    return merged


def merge_specs(s1: OpenApi, path_prefix: Any, s2: OpenApi) -> None:
    """Merge `s2` into `s1`, mounting the paths of `s2` under `path_prefix`."""
    if s1.openapi != s2.openapi:
        raise MergeError("OpenAPI specs version do not match.")
    merge_spec_info(s1.info, s2.info)
    merge_vec(s1.servers, s2.servers)
    merge_paths(s1.paths, path_prefix, s2.paths)
    s1.components = merge_components(s1.components, s2.components)
    # Requirement lists are appended whole; their inner maps are not merged.
    merge_vec(s1.security, s2.security)
    s1.tags = merge_tags(s1.tags, s2.tags)
    s1.external_docs = merge_option(s1.external_docs, s2.external_docs)
    merge_map(s1.extensions, s2.extensions, "extensions")


def merge_spec_info(s1: Info, s2: Info) -> None:
    """Fill the gaps in `s1` from `s2`."""
    s1.title = merge_string(s1.title, s2.title)
    s1.description = merge_opt_string(s1.description, s2.description)
    s1.terms_of_service = merge_opt_string(s1.terms_of_service, s2.terms_of_service)
    s1.contact = merge_option(s1.contact, s2.contact)
    s1.license = merge_option(s1.license, s2.license)
    s1.version = merge_string(s1.version, s2.version)
    merge_map(s1.extensions, s2.extensions, "extensions")


def merge_paths(
    s1: MutableMapping[str, PathItem], path_prefix: Any, s2: Mapping[str, PathItem]
) -> None:
    """Add the paths of `s2` under `path_prefix`; items on the same path are merged."""
    for key, value in s2.items():
        if key.startswith("/"):
            new_key = f"{path_prefix}{key}"
        else:
            logger.error("All routes should have a leading '/' but non found in `%s`.", key)
            new_key = f"{path_prefix}/{key}"
        if new_key in s1:
            merge_path_item(s1[new_key], value)
        else:
            s1[new_key] = copy.deepcopy(value)


def merge_path_item(s1: PathItem, s2: PathItem) -> None:
    """Merge the operations and fields of `s2` into `s1`, keeping what `s1` has."""
    s1.reference = merge_opt_string(s1.reference, s2.reference)
    s1.summary = merge_opt_string(s1.summary, s2.summary)
    s1.description = merge_opt_string(s1.description, s2.description)
    for method in _OPERATIONS:
        setattr(s1, method, merge_option(getattr(s1, method), getattr(s2, method)))
    s1.servers = merge_option(s1.servers, s2.servers)
    merge_vec(s1.parameters, s2.parameters)
    merge_map(s1.extensions, s2.extensions, "extensions")


def merge_components(s1: Components | None, s2: Components | None) -> Components | None:
    """Return the merge of two optional component sets."""
    if s1 is None:
        return copy.deepcopy(s2)
    if s2 is None:
        return s1
    for name in (
        "schemas",
        "responses",
        "parameters",
        "examples",
        "request_bodies",
        "headers",
        "security_schemes",
        "links",
        "callbacks",
        "extensions",
    ):
        merge_map(getattr(s1, name), getattr(s2, name), name)
    return s1


def _add_tag(tags: dict[str, Tag], tag: Tag) -> None:
    if tag.name in tags:
        merge_tag(tags[tag.name], tag)
    else:
        tags[tag.name] = copy.deepcopy(tag)


def merge_tags(s1: Sequence[Tag], s2: Sequence[Tag]) -> list[Tag]:
    """Return the tags of both lists, merged by name, in first-seen order."""
    by_name: dict[str, Tag] = {}
    for tag in (*s1, *s2):
        _add_tag(by_name, tag)
    return list(by_name.values())


def merge_tag(s1: Tag, s2: Tag) -> None:
    """Merge `s2` into `s1`; both must have the same name."""
    if s1.name != s2.name:
        raise MergeError("Tried to merge Tags with different names.")
    s1.description = merge_opt_string(s1.description, s2.description)
    s1.external_docs = merge_option(s1.external_docs, s2.external_docs)
    merge_map(s1.extensions, s2.extensions, "extensions")


def merge_responses(s1: Responses, s2: Responses) -> None:
    """Merge the responses of `s2` into `s1`, keeping what `s1` has."""
    s1.default = merge_option(s1.default, s2.default)
    merge_map(s1.responses, s2.responses, "responses")
    merge_map(s1.extensions, s2.extensions, "extensions")


def merge_string(s1: str, s2: str) -> str:
    """Return `s1`, or `s2` when `s1` is empty."""
    return s2 if not s1 else s1


def merge_opt_string(s1: str | None, s2: str | None) -> str | None:
    """Return whichever string is set, preferring a non-empty `s1`."""
    if s1 is None:
        return s2
    if s2 is not None:
        return merge_string(s1, s2)
    return s1


def merge_option(s1: T | None, s2: T | None) -> T | None:
    """Return `s1`, or a copy of `s2` when `s1` is None."""
    if s1 is None:
        return copy.deepcopy(s2)
    return s1


def merge_map(s1: MutableMapping[str, T], s2: Mapping[str, T], name: str) -> None:
    """Add the entries of `s2` missing from `s1`; conflicting keys keep `s1` and warn."""
    for key, value in s2.items():
        if key in s1:
            current = s1[key]
            if value != current:
                logger.warning(
                    "Found conflicting %s keys while merging, they have the same name "
                    "but different values for `%s`:\n%r\n%r",
                    name,
                    key,
                    current,
                    value,
                )
        else:
            s1[key] = copy.deepcopy(value)


def merge_vec(s1: MutableSequence[T], s2: Iterable[T]) -> None:
    """Append copies of the items of `s2` to `s1`."""
    s1.extend(copy.deepcopy(value) for value in s2)