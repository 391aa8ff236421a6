"""CLI entry point for valuenoise."""

import argparse
import logging
from pathlib import Path

from rich.logging import RichHandler

from . import generate_texture
from .config import (
    DEFAULT_GRID_LEN, DEFAULT_OUTPUT_LEN, DEFAULT_SEED, ConfigurationError,
)
from .easing import Ease
from .files import save_png, save_wav
from .signal import Noise1D
from .textures import PRESETS, render_textures

logger = logging.getLogger("valuenoise")


def _build_parser():
    parser = argparse.ArgumentParser(
        prog="valuenoise",
        description="Generate seeded value noise textures and signals"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable debug logging"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    signal = sub.add_parser("signal", help="Generate a 1D noise signal")
    signal.add_argument(
        "--seed", "-s", type=int, default=DEFAULT_SEED,
        help=f"Lattice seed (default: {DEFAULT_SEED})"
    )
    signal.add_argument(
        "--grid-len", type=int, default=DEFAULT_GRID_LEN,
        help=f"Number of lattice nodes (default: {DEFAULT_GRID_LEN})"
    )
    signal.add_argument(
        "--output-len", type=int, default=DEFAULT_OUTPUT_LEN,
        help=f"Number of output samples (default: {DEFAULT_OUTPUT_LEN})"
    )
    signal.add_argument(
        "--ease", "-e", default=Ease.LINEAR.value,
        choices=[law.value for law in Ease],
        help="Easing law between lattice nodes (default: linear)"
    )
    signal.add_argument("--wav", help="Write the signal as 32-bit float WAV")
    signal.add_argument("--png", help="Write a plot of the signal")
    signal.add_argument("--grid-png", help="Write a plot of the lattice")

    texture = sub.add_parser("texture", help="Generate a 2D noise texture")
    texture.add_argument("preset", choices=sorted(PRESETS))
    texture.add_argument(
        "--seed", "-s", type=int, default=DEFAULT_SEED,
        help=f"Lattice seed (default: {DEFAULT_SEED})"
    )
    texture.add_argument("--width", "-W", type=int, default=None,
                         help="Output width in pixels")
    texture.add_argument("--height", "-H", type=int, default=None,
                         help="Output height in pixels")
    texture.add_argument("--scale-x", type=int, default=None,
                         help="Lattice cells along x")
    texture.add_argument("--scale-y", type=int, default=None,
                         help="Lattice cells along y")
    texture.add_argument(
        "--output", "-o", default="noise.png",
        help="Output file path (default: noise.png)"
    )

    gallery = sub.add_parser("gallery", help="Render every demo texture")
    gallery.add_argument(
        "--out-dir", "-d", default=".",
        help="Directory for the PNG files (default: current directory)"
    )
    gallery.add_argument(
        "--seed", "-s", type=int, default=DEFAULT_SEED,
        help=f"Lattice seed (default: {DEFAULT_SEED})"
    )
    return parser


def _configure_logging(verbose):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler()],
    )


def _run_signal(args):
    noise = Noise1D(args.seed, args.grid_len, args.output_len, args.ease)
    if args.wav:
        save_wav(args.wav, noise.output)
    if args.png:
        save_png(args.png, noise.output)
    if args.grid_png:
        save_png(args.grid_png, noise.grid)
    if not (args.wav or args.png or args.grid_png):
        logger.warning("No output requested; use --wav, --png or --grid-png")
    print(f"Generated {noise!r}")


def _run_texture(args):
    kwargs = {}
    for name in ("width", "height", "scale_x", "scale_y"):
        value = getattr(args, name)
        if value is not None:
            kwargs[name] = value

    image = generate_texture(args.preset, seed=args.seed, **kwargs)

    output = Path(args.output)
    output.parent.mkdir(parents=True, exist_ok=True)
    image.save(str(output))
    print(f"Saved {args.preset} texture "
          f"({image.size[0]}x{image.size[1]}) to {output}")


def _run_gallery(args):
    paths = render_textures(args.out_dir, seed=args.seed)
    print(f"Saved {len(paths)} textures to {args.out_dir}")


COMMANDS = {
    "signal": _run_signal,
    "texture": _run_texture,
    "gallery": _run_gallery,
}


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    try:
        COMMANDS[args.command](args)
    except ConfigurationError as exc:
        parser.error(str(exc))
    return 0


if __name__ == "__main__":
    main()
