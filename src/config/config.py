"""
Load .env from project root; expose OUTPUT_DIR, REBUILD_DEBOUNCE_MS, layout warning limits and viewport size.
Call load_env() before using in main or other modules.
"""
from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 300
DEFAULT_MAX_NODES_PER_LEVEL = 200
DEFAULT_MAX_DEPTH = 12
DEFAULT_VIEWPORT = (1280, 800)


def _project_root() -> Path:
    """Project root (directory containing src/)."""
    p = Path(__file__).resolve()
    # src/config/config.py -> two levels up
    for _ in range(3):
        p = p.parent
        if (p / "src").is_dir() and (p / "main.py").is_file():
            return p
    return Path.cwd()


def load_env() -> None:
    """Load env vars from project root .env if present."""
    root = _project_root()
    env_file = root / ".env"
    if not env_file.is_file():
        return
    for line in env_file.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        k, _, v = line.partition("=")
        k, v = k.strip(), v.strip().strip("'\"")
        if k and v:
            os.environ.setdefault(k, v)


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r (not an integer), using %d", name, raw, default)
        return default
    if value < 0:
        logger.warning("Ignoring %s=%r (negative), using %d", name, raw, default)
        return default
    return value


def get_output_dir() -> Path:
    """Where HTML/PNG/XMind exports go; default <project_root>/output."""
    load_env()
    out = os.environ.get("OUTPUT_DIR")
    if out:
        return Path(out)
    return _project_root() / "output"


def get_debounce_seconds() -> float:
    """Quiet period before a changed document is rebuilt (REBUILD_DEBOUNCE_MS)."""
    load_env()
    return _int_env("REBUILD_DEBOUNCE_MS", DEFAULT_DEBOUNCE_MS) / 1000.0


def get_max_nodes_per_level() -> int:
    """Level width above which tree stats report a LayoutOverflow warning."""
    load_env()
    return _int_env("MAX_NODES_PER_LEVEL", DEFAULT_MAX_NODES_PER_LEVEL)


def get_max_depth() -> int:
    """Tree depth above which tree stats report a LayoutOverflow warning."""
    load_env()
    return _int_env("MAX_TREE_DEPTH", DEFAULT_MAX_DEPTH)


def get_viewport_size() -> tuple[int, int]:
    """Camera viewport (VIEWPORT_WIDTH, VIEWPORT_HEIGHT); default 1280x800."""
    load_env()
    width = _int_env("VIEWPORT_WIDTH", DEFAULT_VIEWPORT[0]) or DEFAULT_VIEWPORT[0]
    height = _int_env("VIEWPORT_HEIGHT", DEFAULT_VIEWPORT[1]) or DEFAULT_VIEWPORT[1]
    return width, height
