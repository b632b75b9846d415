"""Config: load .env, expose OUTPUT_DIR, REBUILD_DEBOUNCE_MS, layout limits, viewport size."""
from .config import (
    load_env,
    get_output_dir,
    get_debounce_seconds,
    get_max_nodes_per_level,
    get_max_depth,
    get_viewport_size,
)

__all__ = [
    "load_env",
    "get_output_dir",
    "get_debounce_seconds",
    "get_max_nodes_per_level",
    "get_max_depth",
    "get_viewport_size",
]
