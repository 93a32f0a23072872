"""
Module: sources.document_source

Purpose:
    Open a document from wherever it lives (file path, bytes in
    memory, binary stream, file:// URI or a package resource) into a
    PageDecoder.

Key Classes:
    - DocumentSource: Abstract base class for sources
    - FileSource: Document on disk
    - ByteArraySource: Document already in memory
    - InputStreamSource: Document read from a binary stream
    - UriSource: Document behind a file:// URI
    - AssetSource: Document bundled inside a Python package
    - SourceError: A source could not be read or opened

Dependencies:
    - fitz (PyMuPDF): Opening documents
    - importlib.resources (std): Package assets

Used By:
    - pdfview_toolkit.document: open_document()
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from importlib import resources
from pathlib import Path
from typing import BinaryIO, Union
from urllib.parse import urlparse
from urllib.request import url2pathname

import fitz

from pdfview_toolkit.decoding import PageDecoder, PyMuPDFDecoder

logger = logging.getLogger(__name__)

PDF_FILETYPE = "pdf"


class SourceError(Exception):
    """Document source could not be read or opened."""
    pass


class DocumentSource(ABC):
    """
    Abstract interface for a place a document can be opened from.

    Each call to create_decoder() opens the document afresh; the caller
    owns the returned decoder.
    """

    @abstractmethod
    def create_decoder(self) -> PageDecoder:
        """
        Open the document.

        Returns:
            A decoder over the opened document

        Raises:
            SourceError: If the document cannot be read or parsed
        """


def _open_bytes(data: bytes, name: str) -> PyMuPDFDecoder:
    if not data:
        raise SourceError(f"Empty document: {name}")
    try:
        document = fitz.open(stream=data, filetype=PDF_FILETYPE)
    except (RuntimeError, ValueError) as e:
        raise SourceError(f"Cannot open document {name}: {e}") from e
    logger.info(f"Opened {name} ({document.page_count} pages)")
    return PyMuPDFDecoder(document, name=name)


class FileSource(DocumentSource):
    """
    Document stored in a file.

    Example:
        >>> decoder = FileSource(Path("manual.pdf")).create_decoder()
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def create_decoder(self) -> PageDecoder:
        if not self.path.is_file():
            raise SourceError(f"Document not found: {self.path}")
        try:
            document = fitz.open(str(self.path))
        except (RuntimeError, ValueError) as e:
            raise SourceError(f"Cannot open document {self.path}: {e}") from e
        logger.info(f"Opened {self.path} ({document.page_count} pages)")
        return PyMuPDFDecoder(document, name=str(self.path))


class ByteArraySource(DocumentSource):
    """Document held in memory."""

    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)

    def create_decoder(self) -> PageDecoder:
        return _open_bytes(self.data, "<bytes>")


class InputStreamSource(DocumentSource):
    """
    Document read from a binary stream.

    The stream is read to the end and closed by create_decoder(), so
    a source can only be opened once.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self.stream = stream

    def create_decoder(self) -> PageDecoder:
        try:
            with self.stream:
                data = self.stream.read()
        except (OSError, ValueError) as e:
            raise SourceError(f"Cannot read document stream: {e}") from e
        return _open_bytes(data, "<stream>")


class UriSource(DocumentSource):
    """
    Document addressed by a URI. Only file:// URIs are supported.

    Example:
        >>> UriSource(Path("manual.pdf").resolve().as_uri()).create_decoder()
    """

    def __init__(self, uri: str) -> None:
        self.uri = uri

    def create_decoder(self) -> PageDecoder:
        parsed = urlparse(self.uri)
        if parsed.scheme != "file":
            raise SourceError(f"Unsupported URI scheme {parsed.scheme!r}: {self.uri}")
        path = Path(url2pathname(parsed.path))
        return FileSource(path).create_decoder()


class AssetSource(DocumentSource):
    """
    Document bundled as a resource of an importable package.

    Example:
        >>> AssetSource("myapp.assets", "help.pdf").create_decoder()
    """

    def __init__(self, package: str, asset_name: str) -> None:
        self.package = package
        self.asset_name = asset_name

    def create_decoder(self) -> PageDecoder:
        name = f"{self.package}/{self.asset_name}"
        try:
            data = resources.files(self.package).joinpath(self.asset_name).read_bytes()
        except (ModuleNotFoundError, FileNotFoundError, OSError) as e:
            raise SourceError(f"Cannot read asset {name}: {e}") from e
        return _open_bytes(data, name)
