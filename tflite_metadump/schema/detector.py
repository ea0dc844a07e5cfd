"""
Accessors for the MediaPipe object detector metadata schema
(`object_detector_metadata_schema.fbs`, root type
`mediapipe.tasks.ObjectDetectorOptions`, file identifier "V001").
"""

from flatbuffers import number_types as N

from .base import ScalarField, StringField, Struct, StructVectorField, Table, TableField

FILE_IDENTIFIER = b"V001"


class FixedAnchor(Struct):
    LAYOUT = (('x_center', 'f'), ('y_center', 'f'), ('width', 'f'), ('height', 'f'))
    SIZE = 16


class FixedAnchorsSchema(Table):
    anchors = StructVectorField(4, FixedAnchor)


class SsdAnchorsOptions(Table):
    fixed_anchors_schema = TableField(4, FixedAnchorsSchema)


class TensorsDecodingOptions(Table):
    num_classes = ScalarField(4, N.Int32Flags)
    num_boxes = ScalarField(6, N.Int32Flags)
    num_coords = ScalarField(8, N.Int32Flags)
    keypoint_coord_offset = ScalarField(10, N.Int32Flags)
    num_keypoints = ScalarField(12, N.Int32Flags)
    num_values_per_keypoint = ScalarField(14, N.Int32Flags)
    x_scale = ScalarField(16, N.Float32Flags, 0.0)
    y_scale = ScalarField(18, N.Float32Flags, 0.0)
    w_scale = ScalarField(20, N.Float32Flags, 0.0)
    h_scale = ScalarField(22, N.Float32Flags, 0.0)
    apply_exponential_on_box_size = ScalarField(24, N.BoolFlags, False)
    sigmoid_score = ScalarField(26, N.BoolFlags, False)


class ObjectDetectorOptions(Table):
    min_parser_version = StringField(4)
    tensors_decoding_options = TableField(6, TensorsDecodingOptions)
    ssd_anchors_options = TableField(8, SsdAnchorsOptions)
