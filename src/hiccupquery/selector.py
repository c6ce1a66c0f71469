# Selector implementation for hiccupquery
# Supports the compact elem.class:attr grammar for querying element trees

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from .node import Shape, all_elems, class_tokens, classify, expand_tag, same_tag, split_node


class Selector:
    """Normalized match criteria for one step of a path.

    Fields:
        elem: Canonical tag to require, or None to match any tag
        classes: Classes that must all be present on the element
        attr: Attribute to return instead of the element's children
        attr_vals: Attribute values that must all match exactly, or None
    """

    __slots__ = ("attr", "attr_vals", "classes", "elem")

    elem: Any
    classes: frozenset[str]
    attr: str | None
    attr_vals: Mapping[str, Any] | None

    def __init__(
        self,
        elem: Any = None,
        classes: Any = (),
        attr: str | None = None,
        attr_vals: Mapping[str, Any] | None = None,
    ) -> None:
        object.__setattr__(self, "elem", None if elem == "" else elem)
        object.__setattr__(self, "classes", frozenset(class_tokens(classes)))
        object.__setattr__(self, "attr", attr or None)
        object.__setattr__(self, "attr_vals", None if attr_vals is None else MappingProxyType(dict(attr_vals)))

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Selector is immutable, cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Selector is immutable, cannot delete {name!r}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Selector):
            return NotImplemented
        return (
            self.elem == other.elem
            and self.classes == other.classes
            and self.attr == other.attr
            and _plain(self.attr_vals) == _plain(other.attr_vals)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        parts = ["Selector("]
        fields: list[str] = []
        if self.elem is not None:
            fields.append(f"elem={self.elem!r}")
        if self.classes:
            fields.append(f"classes={sorted(self.classes)!r}")
        if self.attr is not None:
            fields.append(f"attr={self.attr!r}")
        if self.attr_vals is not None:
            fields.append(f"attr_vals={dict(self.attr_vals)!r}")
        parts.append(", ".join(fields))
        parts.append(")")
        return "".join(parts)

    def with_attr_vals(self, attr_vals: Mapping[str, Any] | None) -> Selector:
        """Return a copy of this selector with attr_vals replaced."""
        return Selector(self.elem, self.classes, self.attr, attr_vals)


def _plain(attr_vals: Mapping[str, Any] | None) -> dict[str, Any] | None:
    return None if attr_vals is None else dict(attr_vals)


# Keys accepted for attr_vals in structured selectors
_ATTR_VALS_KEYS: tuple[str, ...] = ("attr_vals", "attr-vals", "attrVals")


def parse_token(text: str) -> Selector:
    """Parse a compact ``elem.class1.class2:attr`` token.

    Every part is optional: ``".selected"`` matches any element with that
    class, ``":href"`` returns the href of any element, ``""`` matches anything.
    """
    head, _, attr = text.partition(":")
    elem, *classes = head.split(".")
    return Selector(elem=elem, classes=[c for c in classes if c], attr=attr)


def _from_mapping(data: Mapping[str, Any]) -> Selector:
    attr_vals = None
    for key in _ATTR_VALS_KEYS:
        if data.get(key) is not None:
            attr_vals = data[key]
            break
    return Selector(
        elem=data.get("elem"),
        classes=data.get("classes") or (),
        attr=data.get("attr"),
        attr_vals=attr_vals,
    )


def to_selector(token: Any) -> Selector:
    """
    Normalize anything usable as a path step into a Selector.

    Accepts, in order: a Selector, a compact string token, a mapping with
    elem/classes/attr/attr_vals keys, a ``(token, attr_vals)`` pair, or a
    component function. Anything else is the selector that matches every
    element; this function never raises.
    """
    if isinstance(token, Selector):
        return token
    if isinstance(token, str):
        return parse_token(token)
    if isinstance(token, Mapping):
        return _from_mapping(token)
    if isinstance(token, (list, tuple)) and len(token) == 2 and isinstance(token[1], Mapping):
        return to_selector(token[0]).with_attr_vals(token[1])
    if callable(token):
        return Selector(elem=token)
    return Selector()


class SelectorMatcher:
    """Matches selectors against tree values."""

    __slots__ = ()

    def match_step(self, value: Any, selector: Selector) -> list[Any]:
        """Apply one selector to a tree value.

        Collections are matched item by item and the results concatenated.
        A matching element yields its children, or a single attribute value
        when the selector has ``attr`` (None if the attribute is missing).
        """
        results: list[Any] = []
        self._match_into(value, selector, results)
        return results

    def _match_into(self, value: Any, selector: Selector, results: list[Any]) -> None:
        shape = classify(value)

        if shape == Shape.COLLECTION:
            for item in value:
                self._match_into(item, selector, results)
            return

        if shape == Shape.SCALAR:
            return

        # shape == Shape.NODE
        tag, attrs, children = split_node(value)
        if not self._matches_element(tag, attrs, selector):
            return
        # attr projection takes precedence; attr_vals only filter children
        if selector.attr is not None:
            results.append(attrs.get(selector.attr))
            return
        if not self._matches_attr_vals(attrs, selector):
            return
        results.extend(children)

    def matches(self, value: Any, selector: Selector) -> bool:
        """Check if a single element satisfies a selector's tag, class and attr_vals constraints."""
        if classify(value) != Shape.NODE:
            return False
        tag, attrs, _ = split_node(value)
        return self._matches_element(tag, attrs, selector) and self._matches_attr_vals(attrs, selector)

    def _matches_element(self, tag: Any, attrs: Mapping[str, Any], selector: Selector) -> bool:
        canonical, classes = expand_tag(tag, attrs)

        if selector.elem is not None and not same_tag(selector.elem, canonical):
            return False

        return selector.classes <= classes

    def _matches_attr_vals(self, attrs: Mapping[str, Any], selector: Selector) -> bool:
        if not selector.attr_vals:
            return True
        for name, expected in selector.attr_vals.items():
            if name not in attrs or not _same_value(attrs[name], expected):
                return False
        return True


_NUMBER_TYPES: tuple[type, ...] = (bool, int, float, complex)


def _same_value(actual: Any, expected: Any) -> bool:
    # No numeric coercion: True != 1, 1.0 != 1
    if isinstance(actual, _NUMBER_TYPES) and isinstance(expected, _NUMBER_TYPES):
        if type(actual) is not type(expected):
            return False
    return bool(actual == expected)


# Global matcher instance
_matcher: SelectorMatcher = SelectorMatcher()


def query(root: Any, *path: Any) -> list[Any]:
    """
    Walk a path of selectors down from root.

    Every step is applied to each result of the previous step, so
    ``query(tree, "ul", "li", "p")`` returns the contents of the ``p``
    elements directly inside the ``li`` children of a ``ul`` tree.

    Args:
        root: An element, a collection of elements, or any tree value
        *path: Selector tokens, pairs, mappings or Selector objects

    Returns:
        A list of results in document order; ``[root]`` when path is empty
    """
    results: list[Any] = [root]
    for step in path:
        selector = to_selector(step)
        results = [item for value in results for item in _matcher.match_step(value, selector)]
    return results


def find(root: Any, *path: Any) -> list[Any]:
    """
    Like query(), but the first step may match an element anywhere in the tree.

    Args:
        root: An element, a collection of elements, or any tree value
        *path: Selector tokens, pairs, mappings or Selector objects

    Returns:
        A list of results in document order
    """
    return query(all_elems(root), *path)


def query_one(root: Any, *path: Any, default: Any = None) -> Any:
    """Return the first result of query(), or default if there is none."""
    results = query(root, *path)
    return results[0] if results else default


def matches(value: Any, token: Any) -> bool:
    """
    Check if a value is an element matching a selector token.

    Args:
        value: The tree value to check
        token: Anything to_selector() accepts

    Returns:
        True if the element matches, False otherwise
    """
    return _matcher.matches(value, to_selector(token))
