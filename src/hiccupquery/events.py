"""Mock DOM events for driving callbacks pulled out of a tree."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any


class MockObject(SimpleNamespace):
    """Namespace that also allows ``obj["name"]`` lookups, like a JS object."""

    def __getitem__(self, name: str) -> Any:
        try:
            return getattr(self, name)
        except AttributeError:
            raise KeyError(name) from None


def mock_change_event(value: Any, attr_name: str = "value") -> MockObject:
    """
    Build a stand-in for an on-change event.

    The returned event has a single ``target`` whose ``attr_name`` field is
    ``value``, so a handler reading ``event.target.value`` (or
    ``event["target"]["value"]``) sees the given value.
    """
    target = MockObject(**{attr_name: value})
    return MockObject(target=target)
