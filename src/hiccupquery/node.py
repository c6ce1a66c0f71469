"""Shape handling for hiccup-style element trees.

An element is a list (or tuple) ``[tag, attrs?, *children]``. Children are
elements, plain values, or collections of elements such as the list a
comprehension produces inside a component.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .errors import generate_error_message


class InvalidNodeShape(ValueError):
    """Raised when a list looks like an element but has no usable tag."""

    code: str
    value: Any

    def __init__(self, code: str, value: Any) -> None:
        self.code = code
        self.value = value
        super().__init__(generate_error_message(code, repr(value)))


# Shapes a tree value can take
class Shape:
    NODE: str = "node"  # ["div", {...}, ...]
    COLLECTION: str = "collection"  # [["li"], ["li"]], generators, ...
    SCALAR: str = "scalar"  # text, numbers, callbacks, None


def _is_sequence(value: Any) -> bool:
    # Strings and mappings are iterable but are plain values in a tree
    if isinstance(value, (str, bytes, bytearray, Mapping)):
        return False
    return isinstance(value, Iterable)


def classify(value: Any) -> str:
    """Return the Shape of a tree value."""
    if isinstance(value, (list, tuple)):
        if not value:
            return Shape.COLLECTION
        head = value[0]
        if isinstance(head, str):
            return Shape.NODE
        if isinstance(head, Mapping):
            raise InvalidNodeShape("missing-tag", value)
        if callable(head):
            return Shape.NODE
        # [["li", x] if keep else None for ...] leaves None holes between elements
        if head is None or _is_sequence(head):
            return Shape.COLLECTION
        raise InvalidNodeShape("invalid-tag", head)
    if _is_sequence(value):
        return Shape.COLLECTION
    return Shape.SCALAR


def split_node(node: list[Any] | tuple[Any, ...]) -> tuple[Any, Mapping[str, Any], list[Any]]:
    """Split an element into its tag, attribute mapping and children."""
    tag = node[0]
    if len(node) > 1 and isinstance(node[1], Mapping):
        return tag, node[1], list(node[2:])
    return tag, {}, list(node[1:])


def class_tokens(value: Any) -> list[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    # Reagent-style class lists: ["a", "b"]
    return [str(c) for c in value if c]


def expand_tag(tag: Any, attrs: Mapping[str, Any]) -> tuple[Any, frozenset[str]]:
    """Return the canonical tag and the effective class set of an element.

    ``"li.foo.bar"`` with ``{"class": "baz"}`` gives ``("li", {"foo", "bar", "baz"})``.
    Component functions are their own canonical tag.
    """
    if isinstance(tag, str):
        name, *shorthand = tag.split(".")
        classes = {c for c in shorthand if c}
    else:
        name = tag
        classes = set()
    classes.update(class_tokens(attrs.get("class")))
    return name, frozenset(classes)


def same_tag(expected: Any, actual: Any) -> bool:
    """Tag names compare by value, component functions by identity."""
    if isinstance(expected, str) and isinstance(actual, str):
        return expected == actual
    return expected is actual


def all_elems(root: Any) -> list[Any]:
    """
    Flatten a tree into all of its elements, in depth-first pre-order.

    Collections are walked transparently and plain values are dropped, so
    ``all_elems("text") == []``.
    """
    results: list[Any] = []
    _collect_elems(root, results)
    return results


def _collect_elems(value: Any, results: list[Any]) -> None:
    shape = classify(value)
    if shape == Shape.NODE:
        results.append(value)
        _, _, children = split_node(value)
        for child in children:
            _collect_elems(child, results)
    elif shape == Shape.COLLECTION:
        for item in value:
            _collect_elems(item, results)
