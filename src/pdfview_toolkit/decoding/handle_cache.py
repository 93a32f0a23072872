"""
Module: decoding.handle_cache

Purpose:
    Keep at most one page handle open at a time. Opening a different
    page closes the current one first.

Key Classes:
    - PageHandleCache: Single-slot page handle guard

Dependencies:
    - decoding.base: PageDecoder, PageHandle, DisposedError

Used By:
    - layout.engine: All measurement and rendering go through here
"""

from __future__ import annotations

import logging
from typing import Optional

from .base import DisposedError, PageDecoder, PageHandle

logger = logging.getLogger(__name__)


class PageHandleCache:
    """
    Single-slot cache over a decoder's page handles.

    Every acquire() either reuses the open handle or closes it and opens
    the requested one, so no handle leaks as long as dispose() is called.

    Example:
        >>> cache = PageHandleCache(decoder)
        >>> a = cache.acquire(3)
        >>> cache.acquire(3) is a
        True
        >>> cache.dispose()
    """

    def __init__(self, decoder: PageDecoder) -> None:
        self._decoder = decoder
        self._current: Optional[PageHandle] = None
        self._disposed = False

    @property
    def decoder(self) -> PageDecoder:
        return self._decoder

    @property
    def current_index(self) -> Optional[int]:
        """Document index of the open handle, or None."""
        return self._current.index if self._current is not None else None

    @property
    def is_disposed(self) -> bool:
        return self._disposed

    def acquire(self, document_index: int) -> PageHandle:
        """
        Get an open handle for a document page.

        Args:
            document_index: Decoder page index

        Returns:
            Open PageHandle

        Raises:
            DisposedError: If dispose() has been called
            PageOpenError: If the decoder cannot open the page. The
                previously open handle has already been closed.
        """
        if self._disposed:
            raise DisposedError("Page handle cache has been disposed")

        if self._current is not None and self._current.index == document_index:
            return self._current

        self._release_current()
        self._current = self._decoder.open_page(document_index)
        return self._current

    def dispose(self) -> None:
        """Close the open handle and the decoder. Safe to call twice."""
        if self._disposed:
            return
        self._disposed = True
        try:
            self._release_current()
        finally:
            self._decoder.close()

    def _release_current(self) -> None:
        if self._current is None:
            return
        handle, self._current = self._current, None
        self._decoder.close_page(handle)
