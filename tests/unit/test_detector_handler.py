import io

import pytest

from tflite_metadump.core.renderer import MetadataRenderer
from tflite_metadump.implementations.custom_metadata import DetectorMetadataHandler
from tflite_metadump.schema.detector import ObjectDetectorOptions, TensorsDecodingOptions

ANCHOR_INDENT = " " * 10


def detector_model(fb, **options):
    payload = fb.metadata(subgraph_metadata=[{
        "custom_metadata": [{"name": "DETECTOR_METADATA", "data": fb.detector(**options)}],
    }])
    return fb.model_with_metadata(payload)


def anchor_lines(report):
    return [line[len(ANCHOR_INDENT):] for line in report.splitlines()
            if line.startswith(ANCHOR_INDENT + "- ")]


def anchor_line(i):
    return f"- FixedAnchor(x_center={float(i)}, y_center=0.5, width=0.25, height=0.125)"


def test_full_detector_section(fb, render_text):
    detector = fb.detector(
        min_parser_version="1.0.0",
        tensors_decoding_options={"num_classes": 90, "num_boxes": 2, "num_coords": 4,
                                  "x_scale": 10.0, "y_scale": 10.0, "w_scale": 5.0, "h_scale": 5.0,
                                  "sigmoid_score": True},
        ssd_anchors_options={"fixed_anchors_schema": {"anchors": fb.anchors(2)}},
    )
    payload = fb.metadata(subgraph_metadata=[{"custom_metadata": [{"name": "DETECTOR_METADATA", "data": detector}]}])
    report = render_text(fb.model_with_metadata(payload))
    assert report.endswith(
        "  - 1 custom metadata entries\n"
        "    - name: DETECTOR_METADATA\n"
        f"      {len(detector)} bytes\n"
        "      min_parser_version: 1.0.0\n"
        "      tensors_decoding_options: TensorsDecodingOptions(num_classes=90, num_boxes=2, num_coords=4, "
        "keypoint_coord_offset=0, num_keypoints=0, num_values_per_keypoint=0, x_scale=10.0, y_scale=10.0, "
        "w_scale=5.0, h_scale=5.0, apply_exponential_on_box_size=False, sigmoid_score=True)\n"
        "      ssd_anchor_options:\n"
        "        fixed_anchors_schema:\n"
        "          2 anchors\n"
        f"          {anchor_line(0)}\n"
        f"          {anchor_line(1)}\n"
    )


def test_few_anchors_are_all_listed(fb, render_text):
    report = render_text(detector_model(fb, ssd_anchors_options={"fixed_anchors_schema": {"anchors": fb.anchors(10)}}))
    assert "10 anchors" in report
    assert anchor_lines(report) == [anchor_line(i) for i in range(10)]
    assert "more" not in report


def test_many_anchors_are_truncated(fb, render_text):
    report = render_text(detector_model(fb, ssd_anchors_options={"fixed_anchors_schema": {"anchors": fb.anchors(100)}}))
    assert "          100 anchors\n" in report
    expected = ([anchor_line(i) for i in range(12)] + ["- ...76 more"]
                + [anchor_line(i) for i in range(87, 100)])
    assert anchor_lines(report) == expected


def test_anchor_budget_can_be_changed(fb, render_text):
    report = render_text(detector_model(fb, ssd_anchors_options={"fixed_anchors_schema": {"anchors": fb.anchors(10)}}),
                         budget=4)
    expected = [anchor_line(0), anchor_line(1), "- ...6 more",
                anchor_line(7), anchor_line(8), anchor_line(9)]
    assert anchor_lines(report) == expected


def test_empty_anchor_list(fb, render_text):
    report = render_text(detector_model(fb, ssd_anchors_options={"fixed_anchors_schema": {"anchors": []}}))
    assert report.endswith("        fixed_anchors_schema:\n          0 anchors\n")


@pytest.mark.parametrize("options, tail", [
    ({}, None),
    ({"ssd_anchors_options": {}}, "      ssd_anchor_options:\n"),
    ({"ssd_anchors_options": {"fixed_anchors_schema": {}}}, "        fixed_anchors_schema:\n"),
])
def test_missing_detector_sections_stop_output(fb, render_text, options, tail):
    report = render_text(detector_model(fb, **options))
    if tail is None:
        assert report.splitlines()[-1].endswith(" bytes")
    else:
        assert report.endswith(tail)


def test_handler_renders_directly(fb):
    out = io.StringIO()
    renderer = MetadataRenderer(out)
    DetectorMetadataHandler().handle(fb.detector(min_parser_version="2.0"), renderer, 0)
    assert out.getvalue() == "min_parser_version: 2.0\n"


def test_handler_reports_decode_errors_inline():
    out = io.StringIO()
    DetectorMetadataHandler().handle(memoryview(b""), MetadataRenderer(out), 1)
    assert out.getvalue() == "  decoding error: buffer of 0 bytes is too small to hold a root offset\n"


def test_tensors_decoding_options_defaults(fb):
    data = fb.detector(tensors_decoding_options={})
    options = ObjectDetectorOptions.root(data).tensors_decoding_options
    assert isinstance(options, TensorsDecodingOptions)
    assert options.num_classes == 0
    assert options.sigmoid_score is False
