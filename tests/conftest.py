import pytest
import sys
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple

import fitz
from PIL import Image

# Add src to sys.path so we can import pdfview_toolkit
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from pdfview_toolkit.core.models import PageBounds  # noqa: E402
from pdfview_toolkit.decoding import PageDecoder, PageHandle, PageOpenError  # noqa: E402


class FakeDecoder(PageDecoder):
    """In-memory decoder that records every call made to it."""

    def __init__(
        self,
        sizes: Sequence[Tuple[int, int]],
        *,
        broken: Iterable[int] = (),
        render_broken: Iterable[int] = (),
        fill: Tuple[int, int, int] = (255, 0, 0),
    ) -> None:
        self.sizes = list(sizes)
        self.broken = set(broken)
        self.render_broken = set(render_broken)
        self.fill = fill
        self.opened: List[int] = []
        self.closed_pages: List[int] = []
        self.rendered: List[Tuple[int, PageBounds]] = []
        self.close_count = 0

    @property
    def page_count(self) -> int:
        return len(self.sizes)

    def open_page(self, index: int) -> PageHandle:
        self.opened.append(index)
        if index in self.broken or not 0 <= index < len(self.sizes):
            raise PageOpenError(index)
        width, height = self.sizes[index]
        return PageHandle(index=index, width=width, height=height)

    def close_page(self, handle: PageHandle) -> None:
        self.closed_pages.append(handle.index)

    def render_into(self, handle: PageHandle, target: Image.Image, bounds: PageBounds) -> None:
        if handle.index in self.render_broken:
            raise PageOpenError(handle.index, f"Cannot render page {handle.index}")
        self.rendered.append((handle.index, bounds))
        target.paste(self.fill, bounds.as_tuple())

    def close(self) -> None:
        self.close_count += 1


# Common test fixtures
@pytest.fixture
def fake_decoder_cls():
    """Return the FakeDecoder class."""
    return FakeDecoder


@pytest.fixture
def a4_decoder():
    """Decoder with five portrait A4 pages (in points)."""
    return FakeDecoder([(595, 842)] * 5)


@pytest.fixture
def mixed_decoder():
    """Decoder with pages of different sizes and orientations."""
    return FakeDecoder([(600, 800), (800, 600), (300, 400), (1200, 900), (600, 800)])


def _build_pdf(page_sizes: Sequence[Tuple[float, float]]) -> bytes:
    doc = fitz.open()
    for width, height in page_sizes:
        page = doc.new_page(width=width, height=height)
        page.draw_rect(page.rect, color=(0, 0, 0), fill=(0, 0, 1))
    data = doc.tobytes()
    doc.close()
    return data


@pytest.fixture
def pdf_bytes_factory():
    """Build a PDF in memory with one page per (width, height) entry."""
    return _build_pdf


@pytest.fixture
def sample_pdf(tmp_path: Path) -> Path:
    """Three-page PDF on disk: portrait, landscape, portrait."""
    pdf_path = tmp_path / "sample.pdf"
    pdf_path.write_bytes(_build_pdf([(595, 842), (842, 595), (300, 400)]))
    return pdf_path
