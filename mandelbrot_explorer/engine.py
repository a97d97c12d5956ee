"""pygame front end: window, key polling, frame pacing and presentation."""

from __future__ import annotations

import concurrent.futures
import time
from argparse import ArgumentParser
from dataclasses import replace

import pygame

from . import config
from .camera import Camera
from .config import HEIGHT, HUD_FONT_SIZE, HUD_POSITION, N_WORKERS, TARGET_FPS, WIDTH, log, warn
from .input_state import InputSnapshot
from .quadtree import FrameRenderError, render_frame

# Held keys map onto InputSnapshot fields.
KEY_BINDINGS = {
    pygame.K_w: "up",
    pygame.K_s: "down",
    pygame.K_a: "left",
    pygame.K_d: "right",
    pygame.K_o: "zoom_in",
    pygame.K_p: "zoom_out",
}


def apply_event(snapshot: InputSnapshot, event) -> InputSnapshot:
    if event.type == pygame.QUIT:
        return replace(snapshot, exit=True)
    if event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return replace(snapshot, exit=True)
        field = KEY_BINDINGS.get(event.key)
        if field is not None:
            return replace(snapshot, **{field: True})
    elif event.type == pygame.KEYUP:
        field = KEY_BINDINGS.get(event.key)
        if field is not None:
            return replace(snapshot, **{field: False})
    return snapshot


def poll_input(snapshot: InputSnapshot, events) -> InputSnapshot:
    for event in events:
        snapshot = apply_event(snapshot, event)
    return snapshot


def present_rects(surface, rects):
    for rect in rects:
        surface.fill(rect.color, (rect.x, rect.y, rect.width, rect.height))


class Engine:
    """Owns the window and the worker pool; use as a context manager."""

    def __init__(self, width=WIDTH, height=HEIGHT, workers=N_WORKERS, fps=TARGET_FPS):
        self.camera = Camera.initial(width, height)
        self.current_input = InputSnapshot()
        self.fps = fps
        self.workers = workers
        self.screen = None
        self.font = None
        self.clock = None
        self.executor = None

    def __enter__(self):
        pygame.init()
        self.screen = pygame.display.set_mode((self.camera.screen_width, self.camera.screen_height))
        pygame.display.set_caption("Mandelbrot")
        self.font = pygame.font.Font(None, HUD_FONT_SIZE)
        self.clock = pygame.time.Clock()
        self.executor = concurrent.futures.ThreadPoolExecutor(max_workers=self.workers)
        return self

    def __exit__(self, exc_type, exc, tb):
        if self.executor is not None:
            self.executor.shutdown(wait=True)
            self.executor = None
        pygame.quit()
        return False

    def run(self):
        elapsed = 0.0
        self.clock.tick()
        while not self.current_input.exit:
            self.current_input = poll_input(self.current_input, pygame.event.get())
            self.camera = self.camera.update(self.current_input, elapsed)
            self.render()
            elapsed = self.clock.tick(self.fps) / 1000.0

    def render(self):
        start = time.perf_counter()
        try:
            rects = render_frame(self.camera, executor=self.executor)
        except FrameRenderError as exc:
            # Keep the last presented frame; the next frame renders from scratch.
            warn(f"Frame dropped: {exc}")
            return

        self.screen.fill((0, 0, 0))
        present_rects(self.screen, rects)
        self.draw_hud()
        pygame.display.flip()
        log(f"Render: {time.perf_counter() - start:.4f}s | Tiles: {len(rects)} | "
            f"Zoom: {self.camera.zoom:.2f}x | Depth: {self.camera.max_depth}")

    def draw_hud(self):
        text = self.font.render(f"ZOOM: {self.camera.zoom:.2f}", True, (255, 255, 255))
        self.screen.blit(text, HUD_POSITION)


def build_parser():
    parser = ArgumentParser(description="Interactive Mandelbrot explorer (WASD pan, O/P zoom, Esc quit).")

    parser.add_argument('--width', type=int, dest='width', default=WIDTH,
                        help='window width in pixels', metavar='WIDTH')
    parser.add_argument('--height', type=int, dest='height', default=HEIGHT,
                        help='window height in pixels', metavar='HEIGHT')
    parser.add_argument('--workers', type=int, dest='workers', default=N_WORKERS,
                        help='threads used for the root-level tiles', metavar='WORKERS')
    parser.add_argument('--fps', type=int, dest='fps', default=TARGET_FPS,
                        help='frame rate cap', metavar='FPS')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='print per-frame render diagnostics')
    return parser


def parse_args(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    for name in ('width', 'height', 'workers', 'fps'):
        if getattr(args, name) < 1:
            parser.error(f"--{name} must be at least 1")
    return args


def main(argv=None):
    args = parse_args(argv)
    config.VERBOSE = args.verbose
    log(f"Window {args.width}x{args.height} | Workers: {args.workers} | FPS cap: {args.fps}")
    with Engine(args.width, args.height, args.workers, args.fps) as engine:
        engine.run()


if __name__ == "__main__":
    main()
