"""
pdfview_toolkit Core Package

Shared value types used by every other layer of the toolkit.

**CONVENTIONS:**

1. **Immutable Geometry**
   - Sizes and bounds are frozen dataclasses
   - A relayout produces new values, it never edits old ones

2. **Two Size Types**
   - `Size`: integer, as reported by the decoder (original page size)
   - `ScaledSize`: float, as produced by the layout pass

3. **Validated on Construction**
   - Negative dimensions raise ValueError immediately
"""

from .models import Size, ScaledSize, PageBounds

__all__ = [
    "Size",
    "ScaledSize",
    "PageBounds",
]
