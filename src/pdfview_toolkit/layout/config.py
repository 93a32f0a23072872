"""
Module: layout.config

Purpose:
    Configuration for the page layout engine.
    Defines the fit policy, scroll direction and page spacing.

Key Classes:
    - FitPolicy: How a page is scaled into the view
    - LayoutConfig: Immutable layout configuration

Dependencies:
    - dataclasses (std)
    - enum (std)

Used By:
    - layout.calculator: Page scaling
    - layout.engine: Offsets and spacing
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple


class FitPolicy(Enum):
    """Rule for scaling a page into the view. Aspect ratio is always kept."""

    WIDTH = "width"
    HEIGHT = "height"
    BOTH = "both"


DEFAULT_FIT_POLICY = FitPolicy.WIDTH
DEFAULT_SPACING_PX = 0


@dataclass(frozen=True)
class LayoutConfig:
    """
    Configuration for page layout (immutable).

    Attributes:
        fit_policy: Scale pages by width, by height, or to fit both
        is_vertical: True to scroll vertically, False for horizontal
        spacing_px: Fixed gap between consecutive pages
        auto_spacing: Pad pages smaller than the view so each one can
            sit centered in the viewport
        fit_each_page: Fit every page on its own; otherwise the largest
            page fits and the others share its scale
        user_pages: Document page indices to display, in order. May
            repeat pages. None shows every page once.

    Example:
        >>> config = LayoutConfig(fit_policy=FitPolicy.BOTH, spacing_px=10)
        >>> config.has_user_pages
        False
    """

    fit_policy: FitPolicy = DEFAULT_FIT_POLICY
    is_vertical: bool = True
    spacing_px: int = DEFAULT_SPACING_PX
    auto_spacing: bool = False
    fit_each_page: bool = False
    user_pages: Optional[Tuple[int, ...]] = None

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not isinstance(self.fit_policy, FitPolicy):
            raise ValueError(f"fit_policy must be a FitPolicy: {self.fit_policy!r}")
        if self.spacing_px < 0:
            raise ValueError(f"spacing_px must be non-negative: {self.spacing_px}")
        if self.user_pages is not None and not isinstance(self.user_pages, tuple):
            object.__setattr__(self, "user_pages", _as_page_tuple(self.user_pages))

    @property
    def has_user_pages(self) -> bool:
        """True if a user page map is set."""
        return self.user_pages is not None


def _as_page_tuple(pages: Sequence[int]) -> Tuple[int, ...]:
    return tuple(int(p) for p in pages)
