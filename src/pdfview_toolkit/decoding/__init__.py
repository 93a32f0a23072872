"""
Module: decoding

Purpose:
    Page decoding abstractions. Isolates the layout engine from the PDF
    library that actually opens, measures and rasterizes pages.

Key Classes:
    - PageDecoder: Abstract decoding backend
    - PyMuPDFDecoder: PyMuPDF backend
    - PageHandleCache: Single open page guard

Dependencies:
    - fitz (PyMuPDF): Concrete backend
    - PIL: Render targets

Used By:
    - layout.engine
    - sources.document_source
"""

from .base import PageDecoder, PageHandle, PageOpenError, DisposedError
from .handle_cache import PageHandleCache
from .pymupdf_backend import PyMuPDFDecoder

__all__ = [
    "PageDecoder",
    "PageHandle",
    "PageOpenError",
    "DisposedError",
    "PageHandleCache",
    "PyMuPDFDecoder",
]
