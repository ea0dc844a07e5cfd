"""
Accessors for the TensorFlow Lite metadata schema (`metadata_schema.fbs`,
root type `tflite.ModelMetadata`, file identifier "M001").
"""

from enum import IntEnum

from flatbuffers import number_types as N

from .base import (ByteVectorField, NumericVectorField, ScalarField, StringField,
                   StringVectorField, Table, TableField, TableVectorField, UnionField)

FILE_IDENTIFIER = b"M001"


class AssociatedFileType(IntEnum):
    UNKNOWN = 0
    DESCRIPTIONS = 1
    TENSOR_AXIS_LABELS = 2
    TENSOR_VALUE_LABELS = 3
    TENSOR_AXIS_SCORE_CALIBRATION = 4
    VOCABULARY = 5
    SCANN_INDEX_FILE = 6


class ColorSpaceType(IntEnum):
    UNKNOWN = 0
    RGB = 1
    GRAYSCALE = 2


class BoundingBoxType(IntEnum):
    UNKNOWN = 0
    BOUNDARIES = 1
    UPPER_LEFT = 2
    CENTER = 3


class CoordinateType(IntEnum):
    RATIO = 0
    PIXEL = 1


class ScoreTransformationType(IntEnum):
    IDENTITY = 0
    LOG = 1
    INVERSE_LOGISTIC = 2


class ContentProperties(IntEnum):
    NONE = 0
    FeatureProperties = 1
    ImageProperties = 2
    BoundingBoxProperties = 3
    AudioProperties = 4


class ProcessUnitOptions(IntEnum):
    NONE = 0
    NormalizationOptions = 1
    ScoreCalibrationOptions = 2
    ScoreThresholdingOptions = 3
    BertTokenizerOptions = 4
    SentencePieceTokenizerOptions = 5
    RegexTokenizerOptions = 6


class AssociatedFile(Table):
    name = StringField(4)
    description = StringField(6)
    type = ScalarField(8, N.Int8Flags, AssociatedFileType.UNKNOWN, AssociatedFileType)
    locale = StringField(10)
    version = StringField(12)


class FeatureProperties(Table):
    pass


class ImageSize(Table):
    width = ScalarField(4, N.Uint32Flags)
    height = ScalarField(6, N.Uint32Flags)


class ImageProperties(Table):
    color_space = ScalarField(4, N.Int8Flags, ColorSpaceType.UNKNOWN, ColorSpaceType)
    default_size = TableField(6, ImageSize)


class BoundingBoxProperties(Table):
    index = NumericVectorField(4, N.Uint32Flags)
    type = ScalarField(6, N.Int8Flags, BoundingBoxType.UNKNOWN, BoundingBoxType)
    coordinate_type = ScalarField(8, N.Int8Flags, CoordinateType.RATIO, CoordinateType)


class AudioProperties(Table):
    sample_rate = ScalarField(4, N.Uint32Flags)
    channels = ScalarField(6, N.Uint32Flags)


class ValueRange(Table):
    min = ScalarField(4, N.Int32Flags)
    max = ScalarField(6, N.Int32Flags)


class Content(Table):
    content_properties_type = ScalarField(4, N.Uint8Flags, ContentProperties.NONE,
                                          ContentProperties, in_repr=False)
    content_properties = UnionField(6, 'content_properties_type', {
        ContentProperties.FeatureProperties: FeatureProperties,
        ContentProperties.ImageProperties: ImageProperties,
        ContentProperties.BoundingBoxProperties: BoundingBoxProperties,
        ContentProperties.AudioProperties: AudioProperties,
    })
    range = TableField(8, ValueRange)


class NormalizationOptions(Table):
    mean = NumericVectorField(4, N.Float32Flags)
    std = NumericVectorField(6, N.Float32Flags)


class ScoreCalibrationOptions(Table):
    score_transformation = ScalarField(4, N.Int8Flags, ScoreTransformationType.IDENTITY,
                                       ScoreTransformationType)
    default_score = ScalarField(6, N.Float32Flags, 0.0)


class ScoreThresholdingOptions(Table):
    global_score_threshold = ScalarField(4, N.Float32Flags, 0.0)


class BertTokenizerOptions(Table):
    vocab_file = TableVectorField(4, AssociatedFile)


class SentencePieceTokenizerOptions(Table):
    sentencePiece_model = TableVectorField(4, AssociatedFile)
    vocab_file = TableVectorField(6, AssociatedFile)


class RegexTokenizerOptions(Table):
    delim_regex_pattern = StringField(4)
    vocab_file = TableVectorField(6, AssociatedFile)


# Closed set of process-unit variants; every tag maps to exactly one table.
PROCESS_UNIT_OPTION_TABLES = {
    ProcessUnitOptions.NormalizationOptions: NormalizationOptions,
    ProcessUnitOptions.ScoreCalibrationOptions: ScoreCalibrationOptions,
    ProcessUnitOptions.ScoreThresholdingOptions: ScoreThresholdingOptions,
    ProcessUnitOptions.BertTokenizerOptions: BertTokenizerOptions,
    ProcessUnitOptions.SentencePieceTokenizerOptions: SentencePieceTokenizerOptions,
    ProcessUnitOptions.RegexTokenizerOptions: RegexTokenizerOptions,
}


class ProcessUnit(Table):
    options_type = ScalarField(4, N.Uint8Flags, ProcessUnitOptions.NONE,
                               ProcessUnitOptions, in_repr=False)
    options = UnionField(6, 'options_type', PROCESS_UNIT_OPTION_TABLES)


class Stats(Table):
    max = NumericVectorField(4, N.Float32Flags)
    min = NumericVectorField(6, N.Float32Flags)


class TensorGroup(Table):
    name = StringField(4)
    tensor_names = StringVectorField(6)


class TensorMetadata(Table):
    name = StringField(4)
    description = StringField(6)
    dimension_names = StringVectorField(8)
    content = TableField(10, Content)
    process_units = TableVectorField(12, ProcessUnit)
    stats = TableField(14, Stats)
    associated_files = TableVectorField(16, AssociatedFile)


class CustomMetadata(Table):
    name = StringField(4)
    data = ByteVectorField(6)


class SubGraphMetadata(Table):
    name = StringField(4)
    description = StringField(6)
    input_tensor_metadata = TableVectorField(8, TensorMetadata)
    output_tensor_metadata = TableVectorField(10, TensorMetadata)
    associated_files = TableVectorField(12, AssociatedFile)
    input_process_units = TableVectorField(14, ProcessUnit)
    output_process_units = TableVectorField(16, ProcessUnit)
    input_tensor_groups = TableVectorField(18, TensorGroup)
    output_tensor_groups = TableVectorField(20, TensorGroup)
    custom_metadata = TableVectorField(22, CustomMetadata)


class ModelMetadata(Table):
    name = StringField(4)
    description = StringField(6)
    version = StringField(8)
    subgraph_metadata = TableVectorField(10, SubGraphMetadata)
    author = StringField(12)
    license = StringField(14)
    associated_files = TableVectorField(16, AssociatedFile)
    min_parser_version = StringField(18)
