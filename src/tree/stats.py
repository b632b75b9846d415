"""
Aggregate tree statistics for the info panel: totals, depth, nodes per level, LayoutOverflow warnings.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .model import BuildResult

logger = logging.getLogger(__name__)

LAYOUT_OVERFLOW = "LayoutOverflow"


@dataclass
class TreeStats:
    total_nodes: int = 0
    total_edges: int = 0
    max_depth: int = 0
    nodes_per_level: list[dict[str, Any]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalNodes": self.total_nodes,
            "totalEdges": self.total_edges,
            "maxDepth": self.max_depth,
            "nodesPerLevel": [dict(row) for row in self.nodes_per_level],
            "warnings": list(self.warnings),
        }


def tree_stats(
    result: BuildResult,
    *,
    max_nodes_per_level: int | None = None,
    max_depth: int | None = None,
) -> TreeStats:
    """
    Compute stats over the whole generation (hidden nodes included).
    Levels wider than max_nodes_per_level or trees deeper than max_depth add a
    LayoutOverflow warning; the tree is still laid out in full.
    """
    if result.is_empty:
        return TreeStats()

    stats = TreeStats(
        total_nodes=len(result.nodes),
        total_edges=len(result.edges),
        max_depth=max(n.level for n in result.nodes),
    )
    for level in sorted(result.levels):
        nodes = result.levels[level]
        stats.nodes_per_level.append(
            {"level": level, "count": len(nodes), "names": [n.name for n in nodes]}
        )
        if max_nodes_per_level is not None and len(nodes) > max_nodes_per_level:
            stats.warnings.append(
                f"{LAYOUT_OVERFLOW}: level {level} has {len(nodes)} nodes (limit {max_nodes_per_level})"
            )
    if max_depth is not None and stats.max_depth > max_depth:
        stats.warnings.append(
            f"{LAYOUT_OVERFLOW}: depth {stats.max_depth} exceeds {max_depth}"
        )
    for w in stats.warnings:
        logger.warning("%s", w)
    return stats
