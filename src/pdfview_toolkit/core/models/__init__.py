"""
Core Models Package

Immutable value types shared by the decoding and layout layers.

All models in this package are frozen dataclasses, so geometry handed
out by the layout engine can never be mutated by a caller.
"""

from .geometry import Size, ScaledSize, PageBounds, ZERO_SIZE, ZERO_SCALED_SIZE

__all__ = [
    "Size",
    "ScaledSize",
    "PageBounds",
    "ZERO_SIZE",
    "ZERO_SCALED_SIZE",
]
