"""Derive an operation summary and description from documentation lines."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import dropwhile


def _none_if_empty(text: str) -> str | None:
    return text or None


def _merge_description_lines(doc: str) -> str | None:
    paragraphs = (part.strip().replace("\n", " ") for part in doc.strip().split("\n\n"))
    return _none_if_empty("\n\n".join(p for p in paragraphs if p))


def _get_doc(doc_lines: Iterable[str]) -> str | None:
    lines = (line.strip() for chunk in doc_lines for line in chunk.split("\n"))
    return _none_if_empty("\n".join(dropwhile(lambda line: not line, lines)))


def get_title_and_desc_from_doc(doc_lines: Iterable[str] | str) -> tuple[str | None, str | None]:
    """Return `(title, description)`; a first line starting with `#` is the title."""
    if isinstance(doc_lines, str):
        doc_lines = [doc_lines]
    doc = _get_doc(doc_lines)
    if doc is None:
        return None, None
    if doc.startswith("#"):
        first, sep, rest = doc.partition("\n")
        title = first.lstrip("#").strip()
        description = _merge_description_lines(rest) if sep else None
        return _none_if_empty(title), description
    return None, _merge_description_lines(doc)