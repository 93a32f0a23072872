"""
Module: layout.engine

Purpose:
    Turn per-page original sizes into a scrollable document geometry:
    scaled page sizes, spacing, offsets along the scroll axis and the
    total document length. Answers every geometry query the viewer's
    render and scroll loop needs.

Algorithm:
    1. Measure every user page once at load (through the handle cache)
       and track the widest and tallest original page.
    2. On every relayout:
       a. Scale every page with a PageSizeCalculator
       b. With auto spacing, give each page the leftover view length
          as padding, plus the fixed gap for all but the last page
       c. Sum lengths and spacing into the document length
       d. Accumulate offsets. Auto spacing splits each page's padding
          evenly before and after it.
    3. Queries multiply the cached geometry by a zoom factor, so zoom
       changes never need a relayout.

Key Classes:
    - PageLayoutEngine: Layout state and geometry queries
    - LayoutState: Engine lifecycle state
    - PageRenderingError: A user page could not be opened or drawn

Dependencies:
    - PIL.Image: Render targets
    - layout.calculator: PageSizeCalculator
    - decoding: PageDecoder, PageHandleCache

Used By:
    - pdfview_toolkit.document: open_document()
"""

from __future__ import annotations

import logging
from bisect import bisect_right
from enum import Enum
from typing import Dict, FrozenSet, List, Optional, Set

from PIL import Image

from pdfview_toolkit.core.models import (
    PageBounds,
    ScaledSize,
    Size,
    ZERO_SCALED_SIZE,
    ZERO_SIZE,
)
from pdfview_toolkit.decoding import (
    DisposedError,
    PageDecoder,
    PageHandle,
    PageHandleCache,
    PageOpenError,
)

from .calculator import PageSizeCalculator
from .config import LayoutConfig

logger = logging.getLogger(__name__)


class LayoutState(Enum):
    """Lifecycle of a PageLayoutEngine."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    DISPOSED = "disposed"


class PageRenderingError(Exception):
    """A user page could not be opened or rendered."""

    def __init__(self, user_page: int, message: Optional[str] = None) -> None:
        self.user_page = user_page
        super().__init__(message or f"Cannot render page {user_page}")


class PageLayoutEngine:
    """
    Layout of one open document.

    Built once per document, recalculated on every view size change,
    disposed exactly once. All indices taken by query methods are user
    pages; the user page map is only consulted by document_page().

    Zoom factors must be >= 0: scaled_page_size() raises ValueError for a
    negative zoom, and the other zoomed queries assume a non-negative one.

    Not thread-safe: callers must serialize access.

    Example:
        >>> # decoder holds two 600x800 pages
        >>> engine = PageLayoutEngine(decoder, Size(300, 500), LayoutConfig(spacing_px=10))
        >>> engine.page_size(0)
        ScaledSize(width=300.0, height=400.0)
        >>> engine.page_offset(1)
        410.0
        >>> engine.page_at_offset(420.0)
        1
        >>> engine.dispose()
    """

    def __init__(
        self,
        decoder: PageDecoder,
        view_size: Size,
        config: Optional[LayoutConfig] = None,
    ) -> None:
        """
        Measure every page and run the first layout.

        Args:
            decoder: Open decoder (ownership is taken; closed by dispose())
            view_size: Initial view size
            config: Layout configuration, defaults to LayoutConfig()
        """
        self._config = config or LayoutConfig()
        self._cache = PageHandleCache(decoder)
        self._state = LayoutState.UNINITIALIZED

        self._user_pages = self._config.user_pages
        self._page_count = 0
        self._original_sizes: List[Size] = []
        self._failed_pages: Set[int] = set()
        self._original_max_width_size = ZERO_SIZE
        self._original_max_height_size = ZERO_SIZE

        self._view_size = view_size
        self._page_sizes: List[ScaledSize] = []
        self._page_spacing: List[float] = []
        self._page_offsets: List[float] = []
        self._page_thresholds: List[float] = []
        self._max_width_size = ZERO_SCALED_SIZE
        self._max_height_size = ZERO_SCALED_SIZE
        self._document_length = 0.0

        self._setup(view_size)

    # ─────────────────────────────────────────────────────────────────────────
    # Properties
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def state(self) -> LayoutState:
        """Lifecycle state; the one member still readable after dispose()."""
        return self._state

    @property
    def config(self) -> LayoutConfig:
        self._ensure_not_disposed()
        return self._config

    @property
    def is_vertical(self) -> bool:
        self._ensure_not_disposed()
        return self._config.is_vertical

    @property
    def page_count(self) -> int:
        """Number of user pages."""
        self._ensure_not_disposed()
        return self._page_count

    @property
    def view_size(self) -> Size:
        """View size of the last relayout."""
        self._ensure_not_disposed()
        return self._view_size

    @property
    def failed_pages(self) -> FrozenSet[int]:
        """User pages that could not be measured at load time."""
        self._ensure_not_disposed()
        return frozenset(self._failed_pages)

    # ─────────────────────────────────────────────────────────────────────────
    # Setup and relayout
    # ─────────────────────────────────────────────────────────────────────────

    def _setup(self, view_size: Size) -> None:
        if self._config.has_user_pages:
            self._page_count = len(self._user_pages)
        else:
            self._page_count = self._cache.decoder.page_count

        measured: Dict[int, Optional[Size]] = {}
        for user_page in range(self._page_count):
            page_size = self._measure(user_page, measured)
            if page_size.width > self._original_max_width_size.width:
                self._original_max_width_size = page_size
            if page_size.height > self._original_max_height_size.height:
                self._original_max_height_size = page_size
            self._original_sizes.append(page_size)

        self.recalculate(view_size)
        self._state = LayoutState.READY

        if self._failed_pages:
            logger.warning(
                f"Layout loaded with {len(self._failed_pages)} unreadable pages: "
                f"{sorted(self._failed_pages)}"
            )
        logger.info(
            f"Layout ready: {self._page_count} pages, "
            f"{len(measured)} distinct document pages measured"
        )

    def _measure(self, user_page: int, measured: Dict[int, Optional[Size]]) -> Size:
        """Original size of a user page; ZERO_SIZE if it cannot be opened."""
        doc_page = self._document_page(user_page)
        if doc_page is None:
            logger.warning(f"User page {user_page} maps to no document page")
            self._failed_pages.add(user_page)
            return ZERO_SIZE

        # Repeated document pages are measured once
        if doc_page not in measured:
            try:
                measured[doc_page] = self._cache.acquire(doc_page).size
            except PageOpenError as e:
                logger.warning(f"Cannot measure page {user_page} (document page {doc_page}): {e}")
                measured[doc_page] = None

        page_size = measured[doc_page]
        if page_size is None:
            self._failed_pages.add(user_page)
            return ZERO_SIZE
        return page_size

    def recalculate(self, view_size: Size) -> None:
        """
        Recompute sizes, spacing, offsets and document length.

        Call after the view size changes. Original sizes are kept.

        Args:
            view_size: New view size

        Raises:
            DisposedError: If the engine has been disposed
        """
        self._ensure_not_disposed()

        config = self._config
        calculator = PageSizeCalculator(
            config.fit_policy,
            self._original_max_width_size,
            self._original_max_height_size,
            view_size,
            config.fit_each_page,
        )
        page_sizes = [calculator.calculate(size) for size in self._original_sizes]

        if config.auto_spacing:
            page_spacing = self._auto_spacing(page_sizes, view_size)
        else:
            page_spacing = [float(config.spacing_px)] * len(page_sizes)

        document_length = self._document_length_for(page_sizes, page_spacing)
        page_offsets = self._offsets_for(page_sizes, page_spacing)
        page_thresholds = [
            offset - spacing / 2 for offset, spacing in zip(page_offsets, page_spacing)
        ]

        # Swap everything in together
        (
            self._view_size,
            self._page_sizes,
            self._page_spacing,
            self._page_offsets,
            self._page_thresholds,
            self._document_length,
            self._max_width_size,
            self._max_height_size,
        ) = (
            view_size,
            page_sizes,
            page_spacing,
            page_offsets,
            page_thresholds,
            document_length,
            calculator.optimal_max_width_size,
            calculator.optimal_max_height_size,
        )

        logger.debug(
            f"Relayout for view {view_size.width}x{view_size.height}: "
            f"{len(page_sizes)} pages, length {document_length:.1f}"
        )

    def _auto_spacing(self, page_sizes: List[ScaledSize], view_size: Size) -> List[float]:
        vertical = self._config.is_vertical
        view_length = view_size.height if vertical else view_size.width
        last = len(page_sizes) - 1

        spacing: List[float] = []
        for i, page_size in enumerate(page_sizes):
            page_spacing = max(0.0, view_length - page_size.length(vertical))
            if i < last:
                page_spacing += self._config.spacing_px
            spacing.append(page_spacing)
        return spacing

    def _document_length_for(self, page_sizes: List[ScaledSize], page_spacing: List[float]) -> float:
        vertical = self._config.is_vertical
        last = len(page_sizes) - 1

        length = 0.0
        for i, page_size in enumerate(page_sizes):
            length += page_size.length(vertical)
            if self._config.auto_spacing:
                length += page_spacing[i]
            elif i < last:
                length += self._config.spacing_px
        return length

    def _offsets_for(self, page_sizes: List[ScaledSize], page_spacing: List[float]) -> List[float]:
        vertical = self._config.is_vertical
        fixed = self._config.spacing_px
        last = len(page_sizes) - 1

        offsets: List[float] = []
        offset = 0.0
        for i, page_size in enumerate(page_sizes):
            size = page_size.length(vertical)
            if self._config.auto_spacing:
                offset += page_spacing[i] / 2
                # Only pages before the last carry the fixed gap in their spacing
                if i == 0 and last > 0:
                    offset -= fixed / 2
                elif i == last and last > 0:
                    offset += fixed / 2
                offsets.append(offset)
                offset += size + page_spacing[i] / 2
            else:
                offsets.append(offset)
                offset += size + fixed
        return offsets

    # ─────────────────────────────────────────────────────────────────────────
    # Page mapping
    # ─────────────────────────────────────────────────────────────────────────

    def document_page(self, user_page: int) -> Optional[int]:
        """
        Translate a user page to a document page.

        Args:
            user_page: User-facing page index

        Returns:
            Document page index, or None if there is no such page
        """
        self._ensure_not_disposed()
        return self._document_page(user_page)

    def _document_page(self, user_page: int) -> Optional[int]:
        doc_page = user_page
        if self._user_pages is not None:
            if user_page < 0 or user_page >= len(self._user_pages):
                return None
            doc_page = self._user_pages[user_page]

        if doc_page < 0 or user_page < 0 or user_page >= self._page_count:
            return None
        return doc_page

    def determine_valid_page_number_from(self, user_page: int) -> int:
        """
        Clamp a requested page into [0, last user page].

        Example:
            >>> engine.determine_valid_page_number_from(-2)
            0
        """
        self._ensure_not_disposed()
        if user_page <= 0:
            return 0
        if user_page >= self._page_count:
            return max(self._page_count - 1, 0)
        return user_page

    # ─────────────────────────────────────────────────────────────────────────
    # Geometry queries
    # ─────────────────────────────────────────────────────────────────────────

    def original_page_size(self, user_page: int) -> Size:
        """Size reported by the decoder, ZERO_SIZE if invalid or unreadable."""
        if self.document_page(user_page) is None:
            return ZERO_SIZE
        return self._original_sizes[user_page]

    def page_size(self, user_page: int) -> ScaledSize:
        """Scaled size at zoom 1."""
        if self.document_page(user_page) is None:
            return ZERO_SCALED_SIZE
        return self._page_sizes[user_page]

    def scaled_page_size(self, user_page: int, zoom: float = 1.0) -> ScaledSize:
        return self.page_size(user_page).scale(zoom)

    def page_length(self, user_page: int, zoom: float = 1.0) -> float:
        """Page height when scrolling vertically, width when horizontally."""
        return self.page_size(user_page).length(self.is_vertical) * zoom

    def page_spacing(self, user_page: int, zoom: float = 1.0) -> float:
        """Spacing assigned to a page (auto spacing or the fixed gap)."""
        if self.document_page(user_page) is None:
            return 0.0
        return self._page_spacing[user_page] * zoom

    def trailing_spacing(self, user_page: int, zoom: float = 1.0) -> float:
        """Space between the end of a page and the start of the next (or the document end)."""
        if self.document_page(user_page) is None:
            return 0.0
        if self._config.auto_spacing:
            return self._page_spacing[user_page] / 2 * zoom
        if user_page == self._page_count - 1:
            return 0.0
        return self._config.spacing_px * zoom

    def page_offset(self, user_page: int, zoom: float = 1.0) -> float:
        """Start of a page along the scroll axis (Y if vertical, X if horizontal)."""
        if self.document_page(user_page) is None:
            return 0.0
        return self._page_offsets[user_page] * zoom

    def secondary_offset(self, user_page: int, zoom: float = 1.0) -> float:
        """Offset across the scroll axis that centers a page against the widest page."""
        if self.document_page(user_page) is None:
            return 0.0
        vertical = self.is_vertical
        max_cross = self.max_page_size().cross_length(vertical)
        return zoom * (max_cross - self._page_sizes[user_page].cross_length(vertical)) / 2

    def max_page_size(self) -> ScaledSize:
        """
        Largest scaled page across the scroll axis.

        Returns the widest page when scrolling vertically and the tallest
        page when scrolling horizontally.
        """
        self._ensure_not_disposed()
        return self._max_width_size if self.is_vertical else self._max_height_size

    def max_page_width(self) -> float:
        return self.max_page_size().width

    def max_page_height(self) -> float:
        return self.max_page_size().height

    def doc_length(self, zoom: float = 1.0) -> float:
        """Total document extent along the scroll axis."""
        self._ensure_not_disposed()
        return self._document_length * zoom

    def page_at_offset(self, offset: float, zoom: float = 1.0) -> int:
        """
        Find the user page shown at a scroll offset.

        Returns the last page whose start, less half its spacing, is at
        or before offset. Offsets before the first page give 0.

        Args:
            offset: Scroll position along the scroll axis
            zoom: Zoom factor the offset was measured at

        Returns:
            User page index
        """
        self._ensure_not_disposed()
        if self._page_count == 0 or zoom <= 0:
            return 0
        index = bisect_right(self._page_thresholds, offset, key=lambda t: t * zoom) - 1
        return max(index, 0)

    # ─────────────────────────────────────────────────────────────────────────
    # Pages
    # ─────────────────────────────────────────────────────────────────────────

    def open_page(self, user_page: int) -> PageHandle:
        """
        Open a user page through the handle cache.

        Raises:
            PageRenderingError: If the page does not exist or cannot be opened
            DisposedError: If the engine has been disposed
        """
        doc_page = self.document_page(user_page)
        if doc_page is None:
            raise PageRenderingError(user_page, f"No such page: {user_page}")
        try:
            return self._cache.acquire(doc_page)
        except PageOpenError as e:
            raise PageRenderingError(user_page, f"Cannot open page {user_page}: {e}") from e

    def page_has_error(self, user_page: int) -> bool:
        """True if a user page cannot be opened."""
        self._ensure_not_disposed()
        if user_page in self._failed_pages:
            return True
        try:
            self.open_page(user_page)
        except PageRenderingError:
            return True
        return False

    def render_page(self, target: Image.Image, user_page: int, bounds: PageBounds) -> None:
        """
        Draw a user page into a region of target.

        Args:
            target: Image to draw into (modified in place)
            user_page: User-facing page index
            bounds: Region of target to fill

        Raises:
            PageRenderingError: If the page cannot be opened or drawn
            DisposedError: If the engine has been disposed
            ValueError: If bounds do not lie inside target
        """
        handle = self.open_page(user_page)
        if not bounds.fits_in(target):
            raise ValueError(f"{bounds!r} exceeds target of size {target.size}")
        try:
            self._cache.decoder.render_into(handle, target, bounds)
        except PageOpenError as e:
            raise PageRenderingError(user_page, f"Cannot render page {user_page}: {e}") from e

    # ─────────────────────────────────────────────────────────────────────────
    # Lifecycle
    # ─────────────────────────────────────────────────────────────────────────

    def dispose(self) -> None:
        """Close the open page and the decoder. Later queries raise DisposedError."""
        if self._state is LayoutState.DISPOSED:
            logger.debug("Layout engine already disposed")
            return
        self._state = LayoutState.DISPOSED
        self._user_pages = None
        self._cache.dispose()
        logger.info("Layout engine disposed")

    def _ensure_not_disposed(self) -> None:
        if self._state is LayoutState.DISPOSED:
            raise DisposedError("Layout engine has been disposed")
