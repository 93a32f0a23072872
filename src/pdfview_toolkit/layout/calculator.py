"""
Module: layout.calculator

Purpose:
    Scale original page sizes into the view under a FitPolicy.

Algorithm:
    Two modes:
    1. fit_each_page: every page is fitted against the view on its own.
    2. Shared frame: the widest and tallest pages are fitted against the
       view once, giving one width ratio and one height ratio. Every
       other page is scaled by those ratios so pages line up, even if
       some end up smaller than the view.

    Scaled heights (or widths, when fitting by height) are floored to
    whole units.

Key Classes:
    - PageSizeCalculator: Stateless scaler for one view size

Dependencies:
    - layout.config: FitPolicy
    - core.models: Size, ScaledSize

Used By:
    - layout.engine: Recalculated on every relayout
"""

from __future__ import annotations

import math

from pdfview_toolkit.core.models import Size, ScaledSize, ZERO_SCALED_SIZE

from .config import FitPolicy


class PageSizeCalculator:
    """
    Scales pages for a given view size.

    Attributes:
        optimal_max_width_size: Scaled size of the widest original page
        optimal_max_height_size: Scaled size of the tallest original page

    Example:
        >>> calc = PageSizeCalculator(
        ...     FitPolicy.WIDTH, Size(600, 800), Size(600, 800),
        ...     view_size=Size(300, 500), fit_each_page=False,
        ... )
        >>> calc.calculate(Size(600, 800))
        ScaledSize(width=300.0, height=400.0)
    """

    def __init__(
        self,
        fit_policy: FitPolicy,
        original_max_width_size: Size,
        original_max_height_size: Size,
        view_size: Size,
        fit_each_page: bool,
    ) -> None:
        self.fit_policy = fit_policy
        self.original_max_width_size = original_max_width_size
        self.original_max_height_size = original_max_height_size
        self.view_size = view_size
        self.fit_each_page = fit_each_page

        self._width_ratio = 0.0
        self._height_ratio = 0.0
        self.optimal_max_width_size = ZERO_SCALED_SIZE
        self.optimal_max_height_size = ZERO_SCALED_SIZE
        self._calculate_max_pages()

    def calculate(self, page_size: Size) -> ScaledSize:
        """
        Scale one page.

        Args:
            page_size: Original page size

        Returns:
            Scaled size, or (0, 0) for a page with a zero dimension
        """
        if page_size.width <= 0 or page_size.height <= 0:
            return ZERO_SCALED_SIZE

        if self.fit_each_page:
            max_width = float(self.view_size.width)
            max_height = float(self.view_size.height)
        else:
            max_width = page_size.width * self._width_ratio
            max_height = page_size.height * self._height_ratio

        if self.fit_policy is FitPolicy.HEIGHT:
            return _fit_height(page_size, max_height)
        if self.fit_policy is FitPolicy.BOTH:
            return _fit_both(page_size, max_width, max_height)
        return _fit_width(page_size, max_width)

    def _calculate_max_pages(self) -> None:
        max_w = self.original_max_width_size
        max_h = self.original_max_height_size
        view = self.view_size

        # Empty document, or every page failed to load
        if max_w.is_empty or max_h.is_empty:
            return

        if self.fit_policy is FitPolicy.HEIGHT:
            self.optimal_max_height_size = _fit_height(max_h, view.height)
            self._height_ratio = self.optimal_max_height_size.height / max_h.height
            self.optimal_max_width_size = _fit_height(max_w, max_w.height * self._height_ratio)
        elif self.fit_policy is FitPolicy.BOTH:
            local_max_width = _fit_both(max_w, view.width, view.height)
            local_width_ratio = local_max_width.width / max_w.width
            self.optimal_max_height_size = _fit_both(
                max_h, max_h.width * local_width_ratio, view.height
            )
            self._height_ratio = self.optimal_max_height_size.height / max_h.height
            self.optimal_max_width_size = _fit_both(
                max_w, view.width, max_w.height * self._height_ratio
            )
            self._width_ratio = self.optimal_max_width_size.width / max_w.width
        else:
            self.optimal_max_width_size = _fit_width(max_w, view.width)
            self._width_ratio = self.optimal_max_width_size.width / max_w.width
            self.optimal_max_height_size = _fit_width(max_h, max_h.width * self._width_ratio)


def _fit_width(page_size: Size, max_width: float) -> ScaledSize:
    ratio = page_size.width / page_size.height
    return ScaledSize(float(max_width), float(math.floor(max_width / ratio)))


def _fit_height(page_size: Size, max_height: float) -> ScaledSize:
    ratio = page_size.height / page_size.width
    return ScaledSize(float(math.floor(max_height / ratio)), float(max_height))


def _fit_both(page_size: Size, max_width: float, max_height: float) -> ScaledSize:
    ratio = page_size.width / page_size.height
    width = float(max_width)
    height = float(math.floor(max_width / ratio))
    if height > max_height:
        height = float(max_height)
        width = float(math.floor(max_height * ratio))
    return ScaledSize(width, height)
