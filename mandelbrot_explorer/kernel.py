"""Compiled escape-time kernels.

Pure scalar arithmetic compiled with numba. ``nogil`` lets the root-level
quadrants run concurrently on the worker pool. ``fastmath`` stays off: serial
and threaded renders must produce identical colours.
"""

import math
from typing import NamedTuple

from numba import jit

from .config import ESCAPE_RADIUS_SQ


class Color(NamedTuple):
    r: int
    g: int
    b: int


BLACK = Color(0, 0, 0)

LOG_2 = math.log(2.0)


# --- COORDINATE TRANSFORM ---
@jit(nopython=True, nogil=True)
def pixel_to_world(screen_x, screen_y, cam_x, cam_y, zoom, screen_width, screen_height):
    origin_x = cam_x - 1.0 / zoom
    origin_y = cam_y - 1.0 / zoom
    # A one-pixel axis has no span to divide; its only pixel maps to the origin.
    span_x = max(screen_width - 1, 1)
    span_y = max(screen_height - 1, 1)
    world_x = 2.0 * screen_x / (zoom * span_x) + origin_x
    world_y = 2.0 * screen_y / (zoom * span_y) + origin_y
    if screen_width > screen_height:
        world_y = world_y * (screen_height / screen_width)
    return world_x, world_y


# --- ESCAPE TIME ---
@jit(nopython=True, nogil=True)
def _channel(value):
    # Negative intensities saturate to zero before wrapping into [0, 255).
    if value <= 0.0:
        return 0
    return int(value) % 255


@jit(nopython=True, nogil=True)
def escape_color(x0, y0, max_depth):
    """
    Iterates z <- z*z + c for c = (x0, y0) and returns an (r, g, b) triple.
    Points that never leave the radius-2 disk within max_depth steps are black.
    """
    x2 = 0.0
    y2 = 0.0
    x = 0.0
    y = 0.0
    iteration = 0
    while x2 + y2 <= ESCAPE_RADIUS_SQ and iteration < max_depth:
        y = 2.0 * x * y + y0
        x = x2 - y2 + x0
        x2 = x * x
        y2 = y * y
        iteration += 1

    if iteration == max_depth:
        return 0, 0, 0

    # Smoothed count: removes the banding of the raw integer iteration.
    nsmooth = iteration + 1 - math.log(math.log(x2 + y2)) / LOG_2
    return (
        _channel(3.0 * nsmooth + 4.0),
        _channel(nsmooth + 2.0),
        _channel(nsmooth * nsmooth + 5.0 * nsmooth + 20.0),
    )


@jit(nopython=True, nogil=True)
def pixel_color(screen_x, screen_y, cam_x, cam_y, zoom, screen_width, screen_height, max_depth):
    wx, wy = pixel_to_world(screen_x, screen_y, cam_x, cam_y, zoom, screen_width, screen_height)
    return escape_color(wx, wy, max_depth)


# --- BOUNDARY SCAN ---
@jit(nopython=True, nogil=True)
def edges_uniform(x, y, w, h, origin_r, origin_g, origin_b,
                  cam_x, cam_y, zoom, screen_width, screen_height, max_depth):
    """
    Samples the tile border and reports whether it is a single colour equal
    to the origin colour. Bottom and right samples sit one pixel past the tile.
    """
    origin = (origin_r, origin_g, origin_b)

    # 1. Top and bottom rows
    for i in range(x, x + w):
        top = pixel_color(i, y, cam_x, cam_y, zoom, screen_width, screen_height, max_depth)
        bottom = pixel_color(i, y + h, cam_x, cam_y, zoom, screen_width, screen_height, max_depth)
        if top != bottom or top != origin:
            return False

    # 2. Left and right columns
    for j in range(y, y + h):
        left = pixel_color(x, j, cam_x, cam_y, zoom, screen_width, screen_height, max_depth)
        right = pixel_color(x + w, j, cam_x, cam_y, zoom, screen_width, screen_height, max_depth)
        if left != right or left != origin:
            return False

    return True


def color_at(world_coordinate, max_depth):
    x0, y0 = world_coordinate
    return Color(*escape_color(float(x0), float(y0), int(max_depth)))
