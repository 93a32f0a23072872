"""
Module: document

Purpose:
    Open a document for viewing.
    Source → Decoder → Handle cache → Layout engine

Key Functions:
    - open_document(): Main entry point

Key Classes:
    - DocumentOpenError: Exception for open failures

Dependencies:
    - pdfview_toolkit.sources: Document sources
    - pdfview_toolkit.layout: PageLayoutEngine, LayoutConfig

Used By:
    - Viewer applications embedding the toolkit
"""

from __future__ import annotations

import logging
import time
from typing import Optional

from pdfview_toolkit.core.models import Size

from .layout import LayoutConfig, PageLayoutEngine
from .sources import DocumentSource, SourceError

logger = logging.getLogger(__name__)


class DocumentOpenError(Exception):
    """Error opening a document for viewing."""
    pass


def open_document(
    source: DocumentSource,
    view_size: Size,
    config: Optional[LayoutConfig] = None,
) -> PageLayoutEngine:
    """
    Open a document and lay it out for a view.

    Args:
        source: Where to read the document from
        view_size: Initial view size in pixels
        config: Layout configuration, defaults to LayoutConfig()

    Returns:
        A ready PageLayoutEngine. Call dispose() when done with it.

    Raises:
        DocumentOpenError: If the source cannot be opened

    Example:
        >>> engine = open_document(
        ...     FileSource("manual.pdf"),
        ...     Size(1080, 1920),
        ...     LayoutConfig(spacing_px=10, auto_spacing=True),
        ... )
        >>> engine.page_count
        12
    """
    start_time = time.perf_counter()

    try:
        decoder = source.create_decoder()
    except SourceError as e:
        raise DocumentOpenError(f"Failed to open document: {e}") from e

    try:
        engine = PageLayoutEngine(decoder, view_size, config)
    except Exception:
        decoder.close()
        raise

    elapsed = time.perf_counter() - start_time
    logger.info(f"Opened document with {engine.page_count} pages in {elapsed:.3f}s")
    return engine
