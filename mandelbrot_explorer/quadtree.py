"""Adaptive quadtree renderer (Mariani-Silver style boundary tracing).

A tile whose sampled border is one colour is filled in a single rectangle;
anything else is split into four quadrants and traced again. Only the root
tile fans out to the worker pool.
"""

from __future__ import annotations

import concurrent.futures
from typing import NamedTuple, Optional

from .camera import Camera
from .config import N_WORKERS
from .kernel import Color, edges_uniform


class ColoredRect(NamedTuple):
    x: int
    y: int
    width: int
    height: int
    color: Color

    @property
    def area(self) -> int:
        return self.width * self.height


class FrameRenderError(RuntimeError):
    """The worker pool could not produce a frame; the frame is dropped."""


def split_tile(x: int, y: int, w: int, h: int) -> list[tuple[int, int, int, int]]:
    """
    Quadrants in top-left, top-right, bottom-left, bottom-right order.
    The left/top halves take the odd pixel. Empty quadrants are dropped, so a
    1-pixel-wide tile yields only its top and bottom halves.
    """
    left_w = w // 2 + w % 2
    right_w = w // 2
    top_h = h // 2 + h % 2
    bottom_h = h // 2

    quadrants = [
        (x, y, left_w, top_h),
        (x + left_w, y, right_w, top_h),
        (x, y + top_h, left_w, bottom_h),
        (x + left_w, y + top_h, right_w, bottom_h),
    ]
    return [q for q in quadrants if q[2] > 0 and q[3] > 0]


def _trace(camera, x, y, w, h):
    """Returns the fill rectangle for a uniform tile, or None if it must split."""
    origin_color = camera.color_at_pixel(x, y)
    if w <= 1 and h <= 1:
        return ColoredRect(x, y, 1, 1, origin_color)

    if edges_uniform(x, y, w, h, *origin_color, *camera.view):
        return ColoredRect(x, y, w, h, origin_color)
    return None


def render_tile(camera: Camera, x: int, y: int, w: int, h: int) -> list[ColoredRect]:
    filled = _trace(camera, x, y, w, h)
    if filled is not None:
        return [filled]

    result = []
    for qx, qy, qw, qh in split_tile(x, y, w, h):
        result.extend(render_tile(camera, qx, qy, qw, qh))
    return result


def _fan_out(camera, quadrants, executor):
    # The calling thread takes the last quadrant while the pool runs the rest.
    *dispatched, local = quadrants
    try:
        futures = [executor.submit(render_tile, camera, *q) for q in dispatched]
        local_result = render_tile(camera, *local)
        results = [future.result() for future in futures]
    except (RuntimeError, MemoryError) as exc:
        raise FrameRenderError(f"root tile dispatch failed: {exc}") from exc

    results.append(local_result)
    return [rect for part in results for rect in part]


def render_frame(
    camera: Camera,
    executor: Optional[concurrent.futures.Executor] = None,
    parallel: bool = True,
) -> list[ColoredRect]:
    """
    Renders the whole screen. With ``parallel`` the root quadrants are
    dispatched to ``executor`` (a fresh pool of N_WORKERS threads when None);
    the output is identical to the serial render either way.
    """
    width, height = camera.screen_width, camera.screen_height
    if not parallel:
        return render_tile(camera, 0, 0, width, height)

    filled = _trace(camera, 0, 0, width, height)
    if filled is not None:
        return [filled]

    quadrants = split_tile(0, 0, width, height)
    if executor is not None:
        return _fan_out(camera, quadrants, executor)

    with concurrent.futures.ThreadPoolExecutor(max_workers=N_WORKERS) as pool:
        return _fan_out(camera, quadrants, pool)
