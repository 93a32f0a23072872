"""
Tests for decoding.handle_cache

Test Coverage:
- acquire(): reuse of the open handle, replace-and-close
- acquire(): failure leaves the slot empty
- dispose(): closes handle and decoder, safe to repeat
"""

import pytest

from pdfview_toolkit.decoding import DisposedError, PageHandleCache, PageOpenError


@pytest.fixture
def decoder(fake_decoder_cls):
    return fake_decoder_cls([(600, 800), (800, 600), (300, 400)], broken={2})


def test_acquire_when_same_page_then_reuses_handle(decoder):
    """Acquiring the open page again does not reopen it."""
    cache = PageHandleCache(decoder)

    first = cache.acquire(0)
    second = cache.acquire(0)

    assert second is first
    assert decoder.opened == [0]
    assert cache.current_index == 0


def test_acquire_when_other_page_then_closes_previous(decoder):
    """Only one handle is open at a time."""
    cache = PageHandleCache(decoder)

    cache.acquire(0)
    handle = cache.acquire(1)

    assert handle.index == 1
    assert (handle.width, handle.height) == (800, 600)
    assert decoder.closed_pages == [0]
    assert cache.current_index == 1


def test_acquire_when_open_fails_then_slot_empty(decoder):
    """A failed open closes the old handle and leaves nothing open."""
    cache = PageHandleCache(decoder)
    cache.acquire(0)

    with pytest.raises(PageOpenError):
        cache.acquire(2)

    assert decoder.closed_pages == [0]
    assert cache.current_index is None


def test_dispose_when_handle_open_then_closes_handle_and_decoder(decoder):
    cache = PageHandleCache(decoder)
    cache.acquire(1)

    cache.dispose()

    assert decoder.closed_pages == [1]
    assert decoder.close_count == 1
    assert cache.is_disposed
    assert cache.current_index is None


def test_dispose_when_called_twice_then_no_error(decoder):
    cache = PageHandleCache(decoder)

    cache.dispose()
    cache.dispose()

    assert decoder.close_count == 1


def test_acquire_when_disposed_then_raises(decoder):
    cache = PageHandleCache(decoder)
    cache.dispose()

    with pytest.raises(DisposedError):
        cache.acquire(0)
