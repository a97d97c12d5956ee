import os
import time
from argparse import ArgumentParser

import matplotlib

matplotlib.use("Agg")

import matplotlib.patches as patches
import matplotlib.pyplot as plt
from matplotlib.collections import PatchCollection
import numpy as np

from . import config
from .camera import Camera
from .config import BASE_DEPTH, BLOCK_OUTLINE_MIN, THRESHOLD, log
from .quadtree import render_frame


def rasterize(rects, width, height):
    """
    Paints the rectangles into an RGB buffer of shape (height, width, 3).
    """
    img_buffer = np.zeros((height, width, 3), dtype=np.uint8)
    for rect in rects:
        img_buffer[rect.y:rect.y + rect.height, rect.x:rect.x + rect.width] = rect.color
    return img_buffer


def save_frame(path, image, rects=None, show_blocks=False):
    if not show_blocks or rects is None:
        plt.imsave(path, image)
        return

    fig = _borderless_figure(image)
    outlines = [patches.Rectangle((rect.x, rect.y), rect.width, rect.height)
                for rect in rects
                if rect.width > BLOCK_OUTLINE_MIN or rect.height > BLOCK_OUTLINE_MIN]
    fig.axes[0].add_collection(PatchCollection(outlines, linewidths=0.5, edgecolors="r",
                                               facecolors="none", alpha=0.6))
    fig.savefig(path)
    plt.close(fig)


def _borderless_figure(image, dpi=100):
    """One axes filling the whole canvas, one figure pixel per image pixel."""
    height, width = image.shape[:2]
    fig = plt.figure(figsize=(width / dpi, height / dpi), dpi=dpi)
    ax = fig.add_axes((0, 0, 1, 1))
    ax.set_axis_off()
    ax.imshow(image, interpolation="nearest")
    return fig


def zoom_sequence(x, y, width, height, start_zoom, end_zoom, frames, depth_inc=0):
    """
    Cameras on a geometric zoom path; each frame counts as one zoom step.
    """
    cameras = []
    for i, zoom in enumerate(np.geomspace(start_zoom, end_zoom, frames)):
        steps = depth_inc + i
        cameras.append(Camera(x, y, width, height, BASE_DEPTH + steps // THRESHOLD,
                              depth_inc=steps, zoom=float(zoom)))
    return cameras


def build_parser():
    parser = ArgumentParser(description="Render Mandelbrot frames headlessly and time the quadtree renderer.")

    parser.add_argument('--width', type=int, default=700, help='frame width in pixels')
    parser.add_argument('--height', type=int, default=700, help='frame height in pixels')
    parser.add_argument('--x', type=float, default=-0.5, help='world x of the pan centre')
    parser.add_argument('--y', type=float, default=0.0, help='world y of the pan centre')
    parser.add_argument('--start-zoom', type=float, dest='start_zoom', default=1.0)
    parser.add_argument('--end-zoom', type=float, dest='end_zoom', default=1.0)
    parser.add_argument('--frames', type=int, default=1, help='number of frames to render')
    parser.add_argument('--depth-inc', type=int, dest='depth_inc', default=0,
                        help='zoom steps already taken (raises the iteration budget)')
    parser.add_argument('--output-dir', dest='output_dir', default='frames_quadtree')
    parser.add_argument('--show-blocks', dest='show_blocks', action='store_true',
                        help='outline the uniformly filled tiles in red')
    parser.add_argument('--serial', action='store_true', help='disable the root-level worker pool')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def parse_args(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    for name in ('width', 'height', 'frames'):
        if getattr(args, name) < 1:
            parser.error(f"--{name.replace('_', '-')} must be at least 1")
    if args.start_zoom <= 0 or args.end_zoom <= 0:
        parser.error("zoom levels must be positive")
    if args.depth_inc < 0:
        parser.error("--depth-inc must not be negative")
    return args


def main(argv=None):
    args = parse_args(argv)
    config.VERBOSE = args.verbose

    print(f"Starting Quadtree Render: {args.frames} frames at {args.width}x{args.height}.")
    print(f"Center: {args.x} + {args.y}i")

    # Numba compiles on first call; keep that out of the timings.
    print("Compiling JIT functions (Warmup)...")
    render_frame(Camera.initial(16, 16), parallel=False)
    print("-" * 40)

    os.makedirs(args.output_dir, exist_ok=True)

    cameras = zoom_sequence(args.x, args.y, args.width, args.height,
                            args.start_zoom, args.end_zoom, args.frames, args.depth_inc)
    total_time = 0
    for i, camera in enumerate(cameras):
        print(f"Frame {i+1}/{args.frames} | Zoom: {camera.zoom:.1f}x ...", end=" ", flush=True)

        start = time.time()
        rects = render_frame(camera, parallel=not args.serial)
        duration = time.time() - start
        total_time += duration

        print(f"Time: {duration:.4f}s | Tiles: {len(rects)}")
        log(f"  depth {camera.max_depth}, largest tile {max(r.area for r in rects)} px")

        image = rasterize(rects, camera.screen_width, camera.screen_height)
        save_frame(os.path.join(args.output_dir, f"frame_{i:03d}.png"), image, rects, args.show_blocks)

    print("-" * 40)
    print(f"Total Time: {total_time:.4f}s")
    print(f"Frames saved to {args.output_dir}/")


if __name__ == "__main__":
    main()
