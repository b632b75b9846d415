"""
Pan/zoom transform over laid-out node positions. Owns no tree state.

A transform maps world (x, y) to screen as (tx + x * k, ty + y * k).
"""
from __future__ import annotations

from dataclasses import dataclass

MIN_SCALE = 0.1
MAX_SCALE = 3.0
ZOOM_IN_FACTOR = 1.3
ZOOM_OUT_FACTOR = 0.7
FIT_PADDING = 40

RESET_OFFSET_X = 100
RESET_SCALE = 0.5
FOCUS_SCALE = 0.8

ZOOM_DURATION_MS = 300
ACTUAL_SIZE_DURATION_MS = 500
FOCUS_DURATION_MS = 750


@dataclass(frozen=True)
class Transform:
    x: float = 0.0
    y: float = 0.0
    k: float = 1.0

    def apply(self, px: float, py: float) -> tuple[float, float]:
        return self.x + px * self.k, self.y + py * self.k

    def invert(self, sx: float, sy: float) -> tuple[float, float]:
        return (sx - self.x) / self.k, (sy - self.y) / self.k


@dataclass(frozen=True)
class CameraMove:
    target: Transform
    duration_ms: int


def _clamp_scale(k: float) -> float:
    return max(MIN_SCALE, min(MAX_SCALE, k))


class Camera:
    def __init__(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self.transform = self._home()

    def _home(self) -> Transform:
        return Transform(RESET_OFFSET_X, self.height / 2, RESET_SCALE)

    def _move(self, target: Transform, duration_ms: int) -> CameraMove:
        self.transform = target
        return CameraMove(target, duration_ms)

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def scale_by(self, factor: float, duration_ms: int = ZOOM_DURATION_MS) -> CameraMove:
        """Zoom about the viewport center, clamped to the scale extent."""
        t = self.transform
        k = _clamp_scale(t.k * factor)
        cx, cy = self.width / 2, self.height / 2
        wx, wy = t.invert(cx, cy)
        return self._move(Transform(cx - wx * k, cy - wy * k, k), duration_ms)

    def zoom_in(self) -> CameraMove:
        return self.scale_by(ZOOM_IN_FACTOR)

    def zoom_out(self) -> CameraMove:
        return self.scale_by(ZOOM_OUT_FACTOR)

    def zoom_to_fit(
        self, bounds: tuple[float, float, float, float], padding: float = FIT_PADDING
    ) -> CameraMove | None:
        """Fit (min_x, min_y, max_x, max_y) into the viewport; None for empty bounds."""
        min_x, min_y, max_x, max_y = bounds
        dx, dy = max_x - min_x, max_y - min_y
        if dx <= 0 or dy <= 0 or not self.width or not self.height:
            return None
        k = _clamp_scale(min((self.width - padding * 2) / dx, (self.height - padding * 2) / dy))
        tx = self.width / 2 - (min_x + dx / 2) * k
        ty = self.height / 2 - (min_y + dy / 2) * k
        return self._move(Transform(tx, ty, k), FOCUS_DURATION_MS)

    def actual_size(self) -> CameraMove:
        return self._move(Transform(self.width / 2, self.height / 2, 1.0), ACTUAL_SIZE_DURATION_MS)

    def reset(self) -> CameraMove:
        return self._move(self._home(), FOCUS_DURATION_MS)

    def focus(self, x: float, y: float) -> CameraMove:
        """Put world point (x, y) a third of the way across, vertically centered."""
        k = FOCUS_SCALE
        return self._move(
            Transform(self.width / 3 - x * k, self.height / 2 - y * k, k), FOCUS_DURATION_MS
        )
