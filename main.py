#!/usr/bin/env python3
"""
Root entry: YAML/JSON document -> canonical tree -> layout -> HTML (and optionally PNG / XMind).
Supports --watch (rebuild on change, debounced), --collapse-all, --search and --stats.
"""
from __future__ import annotations

import argparse
import json
import logging
import re
import sys
import time
from pathlib import Path

_ROOT = Path(__file__).resolve().parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from src.config import (
    load_env,
    get_output_dir,
    get_debounce_seconds,
    get_max_nodes_per_level,
    get_max_depth,
    get_viewport_size,
)
from src.document import DocumentLoadError, RebuildDebouncer, load_document
from src.layout import render_tree_to_html, render_tree_to_png, build_xmind
from src.viewer import COLLAPSE, TreeViewer

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)

WATCH_POLL_SECONDS = 0.1


def _safe_output_name(name: str) -> str:
    """Turn a document stem into a filesystem-safe output name."""
    s = re.sub(r'[/\\:*?"<>|]', "", name)
    s = s.strip() or "tree"
    s = re.sub(r"\s+", "_", s)
    return s[:200]


def _export(viewer: TreeViewer, out_dir: Path, name: str, args: argparse.Namespace) -> int:
    """Write the selected outputs for the viewer's current state; returns 0 or 1."""
    stats = viewer.stats(
        max_nodes_per_level=get_max_nodes_per_level(),
        max_depth=get_max_depth(),
    )
    visible, total = viewer.node_count()
    logger.info(
        "Tree: %d nodes (%d visible), %d edges, %d levels",
        total, visible, stats.total_edges, stats.max_depth + 1 if total else 0,
    )
    if args.stats:
        print(json.dumps(stats.to_dict(), ensure_ascii=False, indent=2))

    matched: list[str] = []
    if args.search:
        matches = viewer.search(args.search)
        matched = [m.node_id for m in matches]
        logger.info("Search %r: %d match(es)", args.search, len(matches))
        for m in matches:
            logger.info("  %s [%s] %s", m.node_id, m.match_type, m.match_text)

    status = 0
    out_dir.mkdir(parents=True, exist_ok=True)
    if args.html:
        try:
            path = render_tree_to_html(
                viewer.layout,
                out_dir / f"{name}.html",
                title=name,
                stats=stats.to_dict(),
                matched=matched,
            )
            logger.info("HTML: %s", path)
        except OSError as e:
            logger.error("HTML export failed: %s", e)
            status = 1
    if args.png:
        try:
            path = render_tree_to_png(viewer.layout, out_dir / f"{name}.png")
            logger.info("PNG: %s", path.name)
        except Exception as e:
            logger.warning("PNG export failed: %s", e)
    if args.xmind:
        try:
            path = build_xmind(viewer.root, out_dir / f"{name}.xmind", sheet_title=name)
            logger.info("XMind: %s", path.name)
        except Exception as e:
            logger.warning("XMind export failed: %s", e)
    return status


def _run_once(viewer: TreeViewer, document_path: Path, out_dir: Path, args: argparse.Namespace) -> int:
    """Load, build, lay out and export one document."""
    t0 = time.perf_counter()
    try:
        document = load_document(document_path)
    except (FileNotFoundError, DocumentLoadError) as e:
        logger.error("%s", e)
        return 1
    viewer.rebuild(document)
    if viewer.root is None:
        logger.error("Document %s is empty; nothing to draw.", document_path.name)
        return 1
    if args.collapse_all:
        viewer.toggle_all(COLLAPSE)
    status = _export(viewer, out_dir, _safe_output_name(document_path.stem), args)
    logger.info("Done in %.2fs", time.perf_counter() - t0)
    return status


def _run_watch(viewer: TreeViewer, document_path: Path, out_dir: Path, args: argparse.Namespace) -> int:
    """Rebuild whenever the document changes, after a quiet period. Ctrl+C stops."""
    debouncer = RebuildDebouncer(get_debounce_seconds())
    last_mtime: float | None = None
    logger.info("Watching %s (debounce %.0f ms)", document_path, debouncer.delay * 1000)
    try:
        while True:
            try:
                mtime = document_path.stat().st_mtime
            except FileNotFoundError:
                mtime = None
            if mtime is not None and mtime != last_mtime:
                last_mtime = mtime
                debouncer.submit(document_path)
            ready, path = debouncer.poll()
            if ready:
                _run_once(viewer, path, out_dir, args)
            time.sleep(WATCH_POLL_SECONDS)
    except KeyboardInterrupt:
        logger.info("Stopped watching")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Render a YAML/JSON document as a collapsible node-link tree (HTML, PNG, XMind)."
    )
    parser.add_argument("document", help="Path to a .yaml/.yml/.json document")
    parser.add_argument(
        "--out",
        metavar="DIR",
        default=None,
        help="Output directory (default: OUTPUT_DIR or ./output)",
    )
    parser.add_argument(
        "--no-html",
        dest="html",
        action="store_false",
        help="Skip the interactive HTML page",
    )
    parser.add_argument("--png", action="store_true", help="Also write a PNG snapshot")
    parser.add_argument("--xmind", action="store_true", help="Also export the tree to DOCUMENT.xmind (mind map)")
    parser.add_argument(
        "--collapse-all",
        action="store_true",
        help="Render with every child list collapsed (root only)",
    )
    parser.add_argument("--search", metavar="TERM", default=None, help="Highlight nodes matching TERM")
    parser.add_argument("--stats", action="store_true", help="Print tree statistics as JSON")
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Keep running and rebuild when the document changes",
    )
    args = parser.parse_args(argv)

    load_env()
    document_path = Path(args.document)
    out_dir = Path(args.out) if args.out else get_output_dir()
    viewer = TreeViewer(viewport=get_viewport_size())

    if args.watch:
        return _run_watch(viewer, document_path, out_dir, args)
    return _run_once(viewer, document_path, out_dir, args)


if __name__ == "__main__":
    sys.exit(main())
