"""
Base classes implementing the Template Method pattern for custom metadata handlers.
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .errors import CustomSubDecodeError

if TYPE_CHECKING:
    from .renderer import MetadataRenderer

T = TypeVar('T')  # Decoded form of a custom metadata blob


class BaseCustomMetadataHandler(ABC, Generic[T]):
    """Base class for decoders of name-tagged custom metadata blobs."""

    #: Custom metadata name this handler is registered under.
    name: str = ''

    def handle(self, data: Any, renderer: 'MetadataRenderer', depth: int) -> None:
        """Decode `data` and render it at `depth`.

        A blob that does not decode is reported as a single inline line so
        the rest of the report is still produced.
        """
        try:
            decoded = self.decode(data)
        except CustomSubDecodeError as e:
            renderer.writer.line(depth, f"decoding error: {e}")
            return
        self.render(decoded, renderer, depth)

    @abstractmethod
    def decode(self, data: Any) -> T:
        """Decode a blob, raising CustomSubDecodeError if it is malformed."""
        pass

    @abstractmethod
    def render(self, decoded: T, renderer: 'MetadataRenderer', depth: int) -> None:
        """Write the decoded blob to the report."""
        pass
