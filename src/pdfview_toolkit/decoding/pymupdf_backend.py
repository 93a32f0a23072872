"""
Module: decoding.pymupdf_backend

Purpose:
    PageDecoder implementation backed by PyMuPDF. Measures pages in
    points and rasterizes them into Pillow images.

Key Classes:
    - PyMuPDFDecoder: Decoder over an open fitz.Document

Dependencies:
    - fitz (PyMuPDF): PDF decoding and rasterization
    - PIL.Image: Render targets

Used By:
    - sources.document_source: Every source builds one of these
    - tests/decoding: Backend tests
"""

from __future__ import annotations

import logging
from typing import Optional

import fitz
from PIL import Image

from pdfview_toolkit.core.models import PageBounds

from .base import PageDecoder, PageHandle, PageOpenError

logger = logging.getLogger(__name__)


class PyMuPDFDecoder(PageDecoder):
    """
    Decoder over a PyMuPDF document.

    Page sizes are the page rectangle in PDF points, rounded to whole
    points. Rendering builds a new transform for every call, so a
    decoder can be shared by callers that serialize their access.

    Example:
        >>> with PyMuPDFDecoder(fitz.open("book.pdf")) as decoder:
        ...     handle = decoder.open_page(0)
        ...     (handle.width, handle.height)
        (595, 842)
    """

    def __init__(self, document: fitz.Document, *, name: Optional[str] = None) -> None:
        """
        Initialize decoder.

        Args:
            document: Open PyMuPDF document (ownership is taken)
            name: Optional label used in log messages
        """
        self._doc: Optional[fitz.Document] = document
        self._name = name or getattr(document, "name", "") or "<memory>"

    @property
    def name(self) -> str:
        """Label for log messages."""
        return self._name

    @property
    def page_count(self) -> int:
        """Number of pages, 0 once closed."""
        if self._doc is None:
            return 0
        return self._doc.page_count

    @property
    def needs_password(self) -> bool:
        """True if the document is encrypted and not yet authenticated."""
        return self._doc is not None and bool(self._doc.needs_pass) and self._doc.is_encrypted

    def authenticate(self, password: str) -> bool:
        """
        Unlock an encrypted document.

        Returns:
            True if the password was accepted
        """
        if self._doc is None:
            return False
        return bool(self._doc.authenticate(password))

    def open_page(self, index: int) -> PageHandle:
        """Open a page and measure it."""
        if self._doc is None:
            raise PageOpenError(index, f"Cannot open page {index}: document is closed")
        if self.needs_password:
            raise PageOpenError(index, f"Cannot open page {index}: document is password protected")
        if not 0 <= index < self._doc.page_count:
            raise PageOpenError(
                index,
                f"Page number {index} is out of range [0, {self._doc.page_count - 1}]",
            )

        try:
            page = self._doc.load_page(index)
            rect = page.rect
        except (RuntimeError, ValueError) as e:
            raise PageOpenError(index, f"Cannot open page {index}: {e}") from e

        logger.debug(f"Opened page {index} of {self._name}: {rect.width}x{rect.height}pt")
        return PageHandle(
            index=index,
            width=int(round(rect.width)),
            height=int(round(rect.height)),
            native=page,
        )

    def close_page(self, handle: PageHandle) -> None:
        """Drop a page handle; PyMuPDF frees the page with its last reference."""
        logger.debug(f"Closed page {handle.index} of {self._name}")

    def render_into(self, handle: PageHandle, target: Image.Image, bounds: PageBounds) -> None:
        """Rasterize a page and paste it into bounds."""
        if handle.native is None or handle.width <= 0 or handle.height <= 0:
            raise PageOpenError(handle.index, f"Cannot render page {handle.index}: empty page")

        page = handle.native
        scale_x = bounds.width / page.rect.width
        scale_y = bounds.height / page.rect.height
        matrix = fitz.Matrix(scale_x, scale_y)

        try:
            pix = page.get_pixmap(matrix=matrix, alpha=False, colorspace=fitz.csRGB)
        except (RuntimeError, ValueError) as e:
            raise PageOpenError(handle.index, f"Cannot render page {handle.index}: {e}") from e

        image = Image.frombytes("RGB", (pix.width, pix.height), pix.samples)
        del pix

        # Pixmap dimensions are rounded outward by MuPDF
        if image.size != (bounds.width, bounds.height):
            image = image.resize((bounds.width, bounds.height))

        target.paste(image, (bounds.left, bounds.top))

    def close(self) -> None:
        """Close the document."""
        if self._doc is not None:
            self._doc.close()
            self._doc = None
            logger.debug(f"Closed document {self._name}")
