"""
Handler for `DETECTOR_METADATA` custom metadata (MediaPipe object detector options).
"""

from typing import TYPE_CHECKING, Any

from ...core.base import BaseCustomMetadataHandler
from ...core.decoder import decode_detector_options
from ...core.renderer import truncated_listing
from ...schema.detector import ObjectDetectorOptions

if TYPE_CHECKING:
    from ...core.renderer import MetadataRenderer


class DetectorMetadataHandler(BaseCustomMetadataHandler[ObjectDetectorOptions]):
    """Renders detector options, truncating long fixed-anchor lists."""

    name = "DETECTOR_METADATA"

    def decode(self, data: Any) -> ObjectDetectorOptions:
        return decode_detector_options(data)

    def render(self, decoded: ObjectDetectorOptions, renderer: 'MetadataRenderer', depth: int) -> None:
        line = renderer.writer.line
        if decoded.min_parser_version is not None:
            line(depth, f"min_parser_version: {decoded.min_parser_version}")
        if decoded.tensors_decoding_options is not None:
            line(depth, f"tensors_decoding_options: {decoded.tensors_decoding_options!r}")

        ssd = decoded.ssd_anchors_options
        if ssd is None:
            return
        line(depth, "ssd_anchor_options:")
        fixed = ssd.fixed_anchors_schema
        if fixed is None:
            return
        line(depth + 1, "fixed_anchors_schema:")
        anchors = fixed.anchors
        if anchors is None:
            return

        # Models can carry thousands of anchors.
        line(depth + 2, f"{len(anchors)} anchors")
        head, omitted, tail = truncated_listing(len(anchors), renderer.anchor_display_budget)
        for i in head:
            line(depth + 2, f"- {anchors[i]!r}")
        if omitted is not None:
            line(depth + 2, f"- ...{omitted} more")
        for i in tail:
            line(depth + 2, f"- {anchors[i]!r}")
