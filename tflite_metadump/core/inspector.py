"""
Runs the three dump stages in order: locate the metadata payload, decode it,
render it.
"""

import io
import logging
import sys
from pathlib import Path
from typing import Any, Optional, TextIO, Union

from ..config.manager import ConfigManager
from ..utils.common import format_file_size, read_binary_file
from .decoder import decode_model_metadata
from .locator import locate_metadata, open_model
from .renderer import MetadataRenderer

logger = logging.getLogger(__name__)


def dump_model_metadata(data: Any, out: Optional[TextIO] = None,
                        anchor_display_budget: Optional[int] = None) -> None:
    """Write the metadata report for the model held in `data` to `out`.

    The report is built in full before anything is written, so a fatal
    error leaves `out` untouched.

    Args:
        data: The complete model file contents.
        out: Destination stream; defaults to stdout.
        anchor_display_budget: Overrides the configured anchor display budget.

    Raises:
        MetadumpError: For any fatal decoding or lookup failure.
    """
    if anchor_display_budget is None:
        anchor_display_budget = ConfigManager().config.anchor_display_budget

    model = open_model(data)
    payload = locate_metadata(model)
    metadata = decode_model_metadata(payload)

    report = io.StringIO()
    MetadataRenderer(report, anchor_display_budget).render(metadata)
    (out or sys.stdout).write(report.getvalue())


def dump_model_file(path: Union[str, Path], out: Optional[TextIO] = None) -> None:
    """Read the model at `path` and write its metadata report to `out`."""
    data = read_binary_file(path)
    logger.debug(f"Read {format_file_size(len(data))} from '{path}'")
    dump_model_metadata(data, out)
