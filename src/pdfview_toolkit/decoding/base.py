"""
Module: decoding.base

Purpose:
    Abstract interface for page decoding backends.
    The layout engine only ever talks to a PageDecoder, so it never
    depends on a particular PDF library.

Key Classes:
    - PageHandle: An open page and its size
    - PageDecoder: Abstract base class for decoding backends
    - PageOpenError: A page could not be opened
    - DisposedError: An object was used after dispose()

Dependencies:
    - PIL: Render target type
    - pdfview_toolkit.core.models: Size, PageBounds

Used By:
    - decoding.pymupdf_backend: Concrete backend
    - decoding.handle_cache: Single open page guard
    - layout.engine: Measurement and rendering
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional

from PIL import Image

from pdfview_toolkit.core.models import Size, PageBounds


class PageOpenError(Exception):
    """A page could not be opened by the decoder."""

    def __init__(self, index: int, message: Optional[str] = None) -> None:
        self.index = index
        super().__init__(message or f"Cannot open page {index}")


class DisposedError(Exception):
    """Object was used after dispose()."""
    pass


@dataclass(frozen=True)
class PageHandle:
    """
    An open page owned by a decoder.

    Attributes:
        index: Document page index
        width: Page width in points
        height: Page height in points
        native: Backend page object (opaque to callers)
    """

    index: int
    width: int
    height: int
    native: Any = field(default=None, repr=False, compare=False)

    @property
    def size(self) -> Size:
        """Page size as a Size value."""
        return Size(self.width, self.height)


class PageDecoder(ABC):
    """
    Abstract interface for a page decoding backend.

    One concrete subclass exists per underlying PDF library. A decoder
    owns the open document; handles it returns must be closed with
    close_page() and the decoder itself with close().
    """

    @property
    @abstractmethod
    def page_count(self) -> int:
        """Number of pages in the underlying document."""

    @abstractmethod
    def open_page(self, index: int) -> PageHandle:
        """
        Open a page.

        Args:
            index: Document page index

        Returns:
            PageHandle for the page

        Raises:
            PageOpenError: If the page cannot be opened
        """

    @abstractmethod
    def close_page(self, handle: PageHandle) -> None:
        """Release a handle returned by open_page()."""

    @abstractmethod
    def render_into(self, handle: PageHandle, target: Image.Image, bounds: PageBounds) -> None:
        """
        Draw a page into a region of a target image.

        The page is stretched to exactly fill bounds.

        Args:
            handle: Open page to draw
            target: Image to draw into (modified in place)
            bounds: Region of target to fill

        Raises:
            PageOpenError: If the page cannot be rendered
        """

    @abstractmethod
    def close(self) -> None:
        """Close the document and free resources."""

    def __enter__(self) -> "PageDecoder":
        """Context manager entry."""
        return self

    def __exit__(self, *args) -> None:
        """Context manager exit - close resources."""
        self.close()
