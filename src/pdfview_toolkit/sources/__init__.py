"""
Module: sources

Purpose:
    Places a document can be opened from. Every source produces a
    PageDecoder for the layout engine.

Key Classes:
    - DocumentSource: Abstract source
    - FileSource, ByteArraySource, InputStreamSource, UriSource, AssetSource
    - SourceError: Source could not be opened
"""

from .document_source import (
    AssetSource,
    ByteArraySource,
    DocumentSource,
    FileSource,
    InputStreamSource,
    SourceError,
    UriSource,
)

__all__ = [
    "DocumentSource",
    "FileSource",
    "ByteArraySource",
    "InputStreamSource",
    "UriSource",
    "AssetSource",
    "SourceError",
]
