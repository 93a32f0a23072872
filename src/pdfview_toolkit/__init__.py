"""Top-level package for pdfview_toolkit.

Provides subpackages:
- pdfview_toolkit.layout – page sizing, spacing, offsets and scroll lookups
- pdfview_toolkit.decoding – page decoder interface and the PyMuPDF backend
- pdfview_toolkit.sources – file, bytes, stream, URI and asset sources
- pdfview_toolkit.document – open_document() entry point
"""

def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        try:
            content = pyproject.read_text()
            for line in content.splitlines():
                if line.strip().startswith("version"):
                    # Parse: version = "0.1.0"
                    return line.split("=")[1].strip().strip('"').strip("'")
        except OSError:
            pass

    try:
        from importlib.metadata import PackageNotFoundError, version as pkg_version
        return pkg_version("pdfview-toolkit")
    except PackageNotFoundError:
        return "0.0.0"

__version__ = _get_version()
__copyright__ = "Copyright 2026 The pdfview-toolkit Authors Licensed under the MIT License"
__all__: list[str] = ["__version__"]
