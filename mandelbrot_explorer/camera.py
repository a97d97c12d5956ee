"""Viewport state and the screen-to-world mapping."""

from __future__ import annotations

from dataclasses import dataclass, replace

from .config import BASE_DEPTH, MIN_ZOOM, SPEED, THRESHOLD
from .input_state import InputSnapshot
from .kernel import Color, color_at, pixel_to_world


@dataclass(frozen=True)
class Camera:
    """Immutable view of the fractal plane.

    ``update`` returns the next camera; workers share one instance read-only.
    """

    x: float
    y: float
    screen_width: int
    screen_height: int
    max_depth: int
    depth_inc: int = 0
    zoom: float = 1.0

    def __post_init__(self) -> None:
        if self.screen_width < 1 or self.screen_height < 1:
            raise ValueError(
                f"screen must be at least 1x1, got {self.screen_width}x{self.screen_height}"
            )
        if self.zoom <= 0:
            raise ValueError(f"zoom must be positive, got {self.zoom}")

    @classmethod
    def initial(cls, screen_width: int, screen_height: int, max_depth: int = BASE_DEPTH) -> "Camera":
        return cls(0.0, 0.0, screen_width, screen_height, max_depth)

    @property
    def view(self) -> tuple[float, float, float, int, int, int]:
        """Scalar arguments expected by the compiled kernels."""
        return (
            float(self.x),
            float(self.y),
            float(self.zoom),
            int(self.screen_width),
            int(self.screen_height),
            int(self.max_depth),
        )

    def update(self, current_input: InputSnapshot, elapsed: float) -> "Camera":
        """Advance the camera by ``elapsed`` seconds of held input."""
        x, y, zoom, depth_inc = self.x, self.y, self.zoom, self.depth_inc

        # Pan step shrinks as zoom grows.
        pan = SPEED * elapsed / self.zoom
        if current_input.up:
            y -= pan
        if current_input.left:
            x -= pan
        if current_input.down:
            y += pan
        if current_input.right:
            x += pan

        if current_input.zoom_in:
            zoom += SPEED * elapsed * zoom
            depth_inc += 1
        if current_input.zoom_out and depth_inc > 0:
            zoom = max(zoom - SPEED * elapsed * zoom, MIN_ZOOM)
            depth_inc -= 1

        return replace(
            self,
            x=x,
            y=y,
            zoom=zoom,
            depth_inc=depth_inc,
            max_depth=BASE_DEPTH + depth_inc // THRESHOLD,
        )

    def screen_origin_in_world(self) -> tuple[float, float]:
        return self.x - 1.0 / self.zoom, self.y - 1.0 / self.zoom

    def screen_to_world(self, screen_x: int, screen_y: int) -> tuple[float, float]:
        cam_x, cam_y, zoom, width, height, _ = self.view
        return pixel_to_world(int(screen_x), int(screen_y), cam_x, cam_y, zoom, width, height)

    def color_at_pixel(self, screen_x: int, screen_y: int) -> Color:
        return color_at(self.screen_to_world(screen_x, screen_y), self.max_depth)
