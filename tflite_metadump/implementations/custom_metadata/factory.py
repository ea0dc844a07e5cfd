"""
Factory mapping custom metadata names to their handlers.
"""

from typing import Dict, List, Optional, Type

from ...core.base import BaseCustomMetadataHandler
from .detector import DetectorMetadataHandler


class CustomMetadataFactory:
    """Factory class for custom metadata handlers, keyed by exact entry name."""

    _implementations: Dict[str, Type[BaseCustomMetadataHandler]] = {
        DetectorMetadataHandler.name: DetectorMetadataHandler,
    }

    @classmethod
    def create_handler(cls, name: Optional[str]) -> Optional[BaseCustomMetadataHandler]:
        """Create the handler for `name`, or None when the name is not recognized."""
        implementation = cls.get_implementation(name)
        if implementation is None:
            return None
        return implementation()

    @classmethod
    def get_implementation(cls, name: Optional[str]) -> Optional[Type[BaseCustomMetadataHandler]]:
        """Get the handler class for a name (case-sensitive)."""
        if name is None:
            return None
        return cls._implementations.get(name)

    @classmethod
    def get_supported_names(cls) -> List[str]:
        """Get list of recognized custom metadata names."""
        return list(cls._implementations.keys())
