"""
Command-line entry point: `tflite-metadump <model.tflite>`.
"""

import argparse
import sys
from typing import List, Optional

from ..core.errors import MetadumpError, UsageError
from ..core.inspector import dump_model_file
from ..utils.logging import LogManager


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> None:
        raise UsageError(message)


def make_parser() -> argparse.ArgumentParser:
    p = _ArgumentParser(prog="tflite-metadump",
                        description="Print the metadata embedded in a TensorFlow Lite model")
    p.add_argument("model", help="Path to the .tflite model file")
    return p


def main(argv: Optional[List[str]] = None) -> int:
    parser = make_parser()
    try:
        ns = parser.parse_args(argv)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"error: {e}", file=sys.stderr)
        return 2

    try:
        logger = LogManager().logger
    except (ValueError, OSError) as e:
        print(f"error: failed to load configuration: {e}", file=sys.stderr)
        return 1

    try:
        logger.debug(f"Dumping metadata of '{ns.model}'")
        dump_model_file(ns.model, sys.stdout)
    except MetadumpError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
