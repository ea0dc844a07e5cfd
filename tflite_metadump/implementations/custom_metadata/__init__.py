from .detector import DetectorMetadataHandler
from .factory import CustomMetadataFactory

__all__ = ['DetectorMetadataHandler', 'CustomMetadataFactory']
