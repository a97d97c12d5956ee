"""Per-frame input record produced by the engine and read by the camera."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InputSnapshot:
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    zoom_in: bool = False
    zoom_out: bool = False
    exit: bool = False
