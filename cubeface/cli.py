"""
cli.py — Convert equirectangular panoramas to six cube-face images.

For each input image the tool produces six files:
    {prefix}_0  back      {prefix}_3  right
    {prefix}_1  left      {prefix}_4  top
    {prefix}_2  front     {prefix}_5  bottom

By default the prefix is the input path without its extension, so output
files are written next to the input image.

Usage:
    tocubemap <panorama.jpg> [<panorama2.jpg> ...]
    tocubemap --edge auto --policy nearest --format tif pano.jpg

Dependencies: Pillow, numpy
"""

import argparse
import logging
import math
import os
import sys
import time
import traceback

from .faces import Face
from .imageio import FORMATS, JPEG_QUALITY, load_panorama, save_faces
from .pipeline import DEFAULT_EDGE, convert
from .sampler import Policy


def parse_edge(value: str):
    if value == 'auto':
        return value
    try:
        edge = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid edge: {value!r}") from None
    if edge <= 0:
        raise argparse.ArgumentTypeError(f"edge must be positive: {edge}")
    return edge


def auto_edge(width: int) -> int:
    """Face size matching the panorama resolution: round(W / π)."""
    return max(round(width / math.pi), 1)


# ── Main processing ───────────────────────────────────────────────────────────

def process_image(img_path: str, args: argparse.Namespace, prefix: str | None = None) -> bool:
    img_path = os.path.abspath(img_path)
    if prefix is None:
        prefix = os.path.splitext(img_path)[0]

    print(f"\nProcessing: {img_path}")

    img_np = load_panorama(img_path)
    H, W = img_np.shape[:2]
    edge = auto_edge(W) if args.edge == 'auto' else args.edge
    print(f"Source:     {W} × {H} px")
    print(f"Face size:  {edge} × {edge} px ({args.policy}, {args.workers or os.cpu_count()} workers)")

    print("  Projecting … ", end='', flush=True)
    started = time.perf_counter()
    faces = convert(img_np, edge, Policy(args.policy), parallelism=args.workers)
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    print(f"done ({elapsed_ms:.0f} ms)")
    del img_np

    print("  Saving … ", end='', flush=True)
    paths = save_faces(faces, prefix, quality=args.quality, fmt=args.format)
    del faces
    print("done")

    for face, path in zip(Face, paths):
        print(f"  [{face.name.lower()}] → {os.path.basename(path)}")
    print(f"Done: {os.path.basename(prefix)}_{{0..5}}{FORMATS[args.format][0]}\n")
    return True


# ── CLI ───────────────────────────────────────────────────────────────────────

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='tocubemap',
        description='Convert equirectangular panoramas to six cube-face images.',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            'Faces are numbered 0..5: back, left, front, right, top, bottom.\n'
            'Output files are written next to each input image unless -o is given.'
        ),
    )
    parser.add_argument('images', nargs='+', help='Equirectangular image path(s)')
    parser.add_argument('-o', '--output', metavar='PREFIX',
                        help='output prefix (single input only)')
    parser.add_argument('--edge', type=parse_edge, default=DEFAULT_EDGE,
                        help=f"face size in pixels, or 'auto' for round(W / π) "
                             f"(default: {DEFAULT_EDGE})")
    parser.add_argument('--policy', choices=[p.value for p in Policy],
                        default=Policy.BILINEAR.value, help='resampling (default: bilinear)')
    parser.add_argument('--workers', type=int, default=None,
                        help='worker threads (default: CPU count)')
    parser.add_argument('--quality', type=int, default=JPEG_QUALITY,
                        help=f'JPEG quality (default: {JPEG_QUALITY})')
    parser.add_argument('--format', choices=sorted(FORMATS), default='jpg',
                        help='output format (default: jpg)')
    parser.add_argument('-v', '--verbose', action='store_true', help='debug logging')
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.output and len(args.images) > 1:
        parser.error('-o/--output needs exactly one input image')
    if args.workers is not None and args.workers <= 0:
        parser.error('--workers must be positive')

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(asctime)s %(name)s %(levelname)s: %(message)s')
    else:
        logging.basicConfig(level=logging.WARNING, format='%(levelname)s: %(message)s')

    failed = 0
    for path in args.images:
        if not os.path.isfile(path):
            print(f"ERROR: file not found: {path}", file=sys.stderr)
            failed += 1
            continue
        try:
            if not process_image(path, args, prefix=args.output):
                failed += 1
        except Exception as exc:
            print(f"\nERROR processing {path}: {exc}", file=sys.stderr)
            traceback.print_exc()
            failed += 1

    return 1 if failed else 0


if __name__ == '__main__':
    sys.exit(main())
