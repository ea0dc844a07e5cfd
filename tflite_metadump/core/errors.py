"""
Exception types raised while dumping model metadata.

Every error the tool reports derives from `MetadumpError`. All of them are
fatal to a run except `CustomSubDecodeError`, which the renderer catches and
prints inline next to the custom metadata entry that failed.
"""


class MetadumpError(Exception):
    """Base class for all errors reported by tflite-metadump."""


class UsageError(MetadumpError):
    """The command line did not name exactly one model file."""


class ModelReadError(MetadumpError):
    """The model file could not be read."""


class RootDecodeError(MetadumpError):
    """The file is not a readable TensorFlow Lite model."""


class NoMetadataEntries(MetadumpError):
    def __init__(self, message: str = "model contains no metadata entries"):
        super().__init__(message)


class MetadataEntryNotFound(MetadumpError):
    def __init__(self, name: str):
        super().__init__(f"model contains no `{name}` entry")
        self.name = name


class NoBufferList(MetadumpError):
    def __init__(self, message: str = "model contains no buffer list"):
        super().__init__(message)


class MetadataDecodeError(MetadumpError):
    """The metadata payload is not a valid metadata tree."""


MalformedMetadata = MetadataDecodeError


class CustomSubDecodeError(MetadumpError):
    """A custom metadata blob does not match the schema its name tag implies."""
