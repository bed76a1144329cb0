import os
import sys
import logging
import argparse
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..models.errors import PPMBlurError
from ..pipeline.blur_pipeline import blur_file

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ppm-blur",
        description="Smooth a P3 PPM image with a fixed 5x5 Gaussian kernel.",
        add_help=False,
    )
    parser.add_argument("input", help="Input .ppm (P3) path")
    parser.add_argument("output", help="Output .ppm (P3) path")
    return parser


def log_level() -> int:
    """LOG_LEVEL from the environment, INFO if unknown, never above ERROR."""
    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").strip().upper())
    if not isinstance(level, int):
        level = logging.INFO
    # Fatal errors are reported at ERROR and must always be shown.
    return min(level, logging.ERROR)


def main(argv=None) -> int:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )
    logging.getLogger().setLevel(log_level())

    if argv is None:
        argv = sys.argv[1:]
    # "--" makes every argument a path, so "-h" or "-in.ppm" count as positionals.
    # A wrong argument count exits with status 2 via argparse.
    args = build_parser().parse_args(["--", *argv])

    try:
        blur_file(args.input, args.output)
    except PPMBlurError as err:
        logger.error(f"Error: {err}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
