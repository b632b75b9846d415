"""
Case-insensitive search over node names and properties with circular navigation.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from ..tree.model import Node

logger = logging.getLogger(__name__)

NAME = "name"
PROPERTY = "property"
NEXT = "next"
PREV = "prev"


@dataclass(frozen=True)
class SearchMatch:
    node_id: str
    match_type: str
    match_text: str


def find_matches(root: Node | None, term: str, *, include_hidden: bool = False) -> list[SearchMatch]:
    """
    One match per node at most: the name is checked first, then properties in order
    (key or value), stopping at the first hit. Pre-order, so results follow the tree.
    """
    if root is None or not term:
        return []
    needle = term.lower()
    nodes = root.iter_all() if include_hidden else root.iter_visible()
    matches: list[SearchMatch] = []
    for node in nodes:
        if needle in node.name.lower():
            matches.append(SearchMatch(node.id, NAME, node.name))
            continue
        for key, value in node.properties.items():
            if needle in key.lower() or needle in value.lower():
                matches.append(SearchMatch(node.id, PROPERTY, f"{key}: {value}"))
                break
    return matches


class SearchIndex:
    """Current term, its matches and the selected match."""

    def __init__(self, *, include_hidden: bool = False) -> None:
        self.include_hidden = include_hidden
        self.term = ""
        self.matches: list[SearchMatch] = []
        self.current_index = 0

    def search(self, root: Node | None, term: str) -> list[SearchMatch]:
        """Rescan for term. A new term resets the selection to the first match."""
        term = term or ""
        if term != self.term:
            self.current_index = 0
        self.term = term
        self.matches = find_matches(root, term, include_hidden=self.include_hidden)
        if self.current_index >= len(self.matches):
            self.current_index = 0
        logger.debug("Search %r: %d matches", term, len(self.matches))
        return self.matches

    def clear(self) -> None:
        self.term = ""
        self.matches = []
        self.current_index = 0

    @property
    def current(self) -> SearchMatch | None:
        if not self.matches:
            return None
        return self.matches[self.current_index]

    def navigate(self, direction: str) -> SearchMatch | None:
        """Step to the next/previous match, wrapping around."""
        if direction not in (NEXT, PREV):
            raise ValueError(f"direction must be {NEXT!r} or {PREV!r}, got {direction!r}")
        if not self.matches:
            return None
        step = 1 if direction == NEXT else -1
        self.current_index = (self.current_index + step) % len(self.matches)
        return self.matches[self.current_index]
