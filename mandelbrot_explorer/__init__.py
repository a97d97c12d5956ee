"""Interactive Mandelbrot explorer with an adaptive quadtree renderer."""

from .camera import Camera
from .input_state import InputSnapshot
from .kernel import BLACK, Color, color_at
from .quadtree import ColoredRect, FrameRenderError, render_frame, render_tile, split_tile

__all__ = [
    "BLACK",
    "Camera",
    "Color",
    "ColoredRect",
    "FrameRenderError",
    "InputSnapshot",
    "color_at",
    "render_frame",
    "render_tile",
    "split_tile",
]
