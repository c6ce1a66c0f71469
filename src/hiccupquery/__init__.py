from .events import mock_change_event
from .node import InvalidNodeShape, Shape, all_elems, classify
from .selector import Selector, SelectorMatcher, find, matches, parse_token, query, query_one, to_selector

__all__ = [
    "InvalidNodeShape",
    "Selector",
    "SelectorMatcher",
    "Shape",
    "all_elems",
    "classify",
    "find",
    "matches",
    "mock_change_event",
    "parse_token",
    "query",
    "query_one",
    "to_selector",
]
