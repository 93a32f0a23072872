"""
Module: layout

Purpose:
    Page layout for the document viewer.
    Converts original page sizes into scaled sizes, spacing, offsets
    and a total document length along the scroll axis.

Key Classes:
    - LayoutConfig: Configuration for page layout
    - FitPolicy: Width, height or contain-fit scaling
    - PageSizeCalculator: Scales one page into the view
    - PageLayoutEngine: Layout state and geometry queries

Dependencies:
    - pdfview_toolkit.decoding: Page measurement and rendering
    - pdfview_toolkit.core.models: Size, ScaledSize

Used By:
    - pdfview_toolkit.document: open_document()
"""

from .config import FitPolicy, LayoutConfig
from .calculator import PageSizeCalculator
from .engine import LayoutState, PageLayoutEngine, PageRenderingError

__all__ = [
    # Config
    "FitPolicy",
    "LayoutConfig",
    # Calculation
    "PageSizeCalculator",
    # Engine
    "LayoutState",
    "PageLayoutEngine",
    "PageRenderingError",
]
