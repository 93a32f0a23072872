"""
Module: geometry

Purpose:
    Value types for page geometry. Integer sizes come from the decoder,
    floating-point sizes come out of the layout pass, and PageBounds
    describes where a page is drawn inside a render target.

Key Classes:
    - Size: Original page size in whole units
    - ScaledSize: Page size after fitting into the view
    - PageBounds: Target rectangle for rendering

Dependencies:
    - dataclasses (std)
    - PIL.Image (TYPE_CHECKING only)

Used By:
    - decoding: Page handles report a Size, rendering takes PageBounds
    - layout.calculator: Size -> ScaledSize
    - layout.engine: Geometry queries
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from PIL import Image


@dataclass(frozen=True, slots=True)
class Size:
    """
    Original page size as reported by the decoder.

    Attributes:
        width: Width in points (>= 0)
        height: Height in points (>= 0)

    Example:
        >>> Size(595, 842).is_empty
        False
    """

    width: int
    height: int

    def __post_init__(self) -> None:
        """Validate size on construction."""
        if self.width < 0:
            raise ValueError(f"width must be >= 0: {self.width}")
        if self.height < 0:
            raise ValueError(f"height must be >= 0: {self.height}")

    @property
    def is_empty(self) -> bool:
        """True if either dimension is zero."""
        return self.width == 0 or self.height == 0


@dataclass(frozen=True, slots=True)
class ScaledSize:
    """
    Page size after fitting into the view.

    Attributes:
        width: Scaled width (>= 0)
        height: Scaled height (>= 0)

    Example:
        >>> ScaledSize(100.0, 50.0).scale(2)
        ScaledSize(width=200.0, height=100.0)
    """

    width: float
    height: float

    def __post_init__(self) -> None:
        """Validate size on construction."""
        if self.width < 0:
            raise ValueError(f"width must be >= 0: {self.width}")
        if self.height < 0:
            raise ValueError(f"height must be >= 0: {self.height}")

    def scale(self, zoom: float) -> ScaledSize:
        """Multiply both dimensions by zoom (must be >= 0)."""
        if zoom < 0:
            raise ValueError(f"zoom must be >= 0: {zoom}")
        return ScaledSize(self.width * zoom, self.height * zoom)

    def length(self, vertical: bool) -> float:
        """Extent along the scroll axis (height if vertical, else width)."""
        return self.height if vertical else self.width

    def cross_length(self, vertical: bool) -> float:
        """Extent across the scroll axis."""
        return self.width if vertical else self.height


ZERO_SIZE = Size(0, 0)
ZERO_SCALED_SIZE = ScaledSize(0.0, 0.0)


@dataclass(frozen=True, slots=True)
class PageBounds:
    """
    Pixel rectangle inside a render target.

    The region is [left, right) x [top, bottom), matching PIL's box
    convention.

    Invariants:
        - left >= 0, top >= 0
        - right > left
        - bottom > top

    Example:
        >>> bounds = PageBounds(left=10, top=20, right=110, bottom=220)
        >>> bounds.width, bounds.height
        (100, 200)
    """

    left: int
    top: int
    right: int
    bottom: int

    def __post_init__(self) -> None:
        """Validate bounds on construction."""
        if self.left < 0:
            raise ValueError(f"left must be >= 0: {self.left}")
        if self.top < 0:
            raise ValueError(f"top must be >= 0: {self.top}")
        if self.right <= self.left:
            raise ValueError(f"right must be > left: {self.right} <= {self.left}")
        if self.bottom <= self.top:
            raise ValueError(f"bottom must be > top: {self.bottom} <= {self.top}")

    @property
    def width(self) -> int:
        """Width of the region in pixels."""
        return self.right - self.left

    @property
    def height(self) -> int:
        """Height of the region in pixels."""
        return self.bottom - self.top

    def as_tuple(self) -> tuple[int, int, int, int]:
        """Get as (left, top, right, bottom) tuple for PIL."""
        return (self.left, self.top, self.right, self.bottom)

    def fits_in(self, image: Image.Image) -> bool:
        """True if the region lies entirely inside the image."""
        return self.right <= image.width and self.bottom <= image.height

    def __repr__(self) -> str:
        """Concise representation for debugging."""
        return f"PageBounds({self.left}, {self.top}, {self.right}, {self.bottom})"
