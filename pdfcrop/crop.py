"""
Reading page 1 geometry from a PDF and writing its CropBox.

Everything works on in-memory bytes; nothing touches the disk here.
"""

import io
import logging

from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.errors import PdfReadError
from PyPDF2.generic import RectangleObject

from pdfcrop.cords import PageGeometry, CropBox, box_corners
from pdfcrop.errors import LoadError, PageAccessError

logger = logging.getLogger(__name__)

OUTPUT_FILENAME = "cropped-pdf.pdf"
PDF_MIME_TYPE = "application/pdf"
PDF_FILETYPES = [("PDF Files", "*.pdf")]

# PyPDF2 reports broken document structure (missing /Pages, /Kids,
# /MediaBox ...) with plain Python errors rather than PdfReadError.
MALFORMED_ERRORS = (PdfReadError, KeyError, IndexError, ValueError, TypeError, AttributeError)


def _open(source_bytes):
    try:
        reader = PdfReader(io.BytesIO(source_bytes))
        page_count = len(reader.pages)
    except MALFORMED_ERRORS as e:
        raise LoadError() from e
    if page_count == 0:
        raise PageAccessError()
    return reader


def read_page_geometry(source_bytes):
    """Size of the first page's MediaBox, in PDF points."""
    reader = _open(source_bytes)
    try:
        mediabox = reader.pages[0].mediabox
        return PageGeometry(float(mediabox.width), float(mediabox.height))
    except MALFORMED_ERRORS as e:
        raise LoadError() from e


def read_crop_box(source_bytes):
    """The first page's effective CropBox (falls back to the MediaBox)."""
    reader = _open(source_bytes)
    try:
        cropbox = reader.pages[0].cropbox
        x0, y0 = cropbox.lower_left
        x1, y1 = cropbox.upper_right
    except MALFORMED_ERRORS as e:
        raise LoadError() from e
    return CropBox(float(x0), float(y0), float(x1) - float(x0), float(y1) - float(y0))


def apply_crop(source_bytes, crop_box):
    """
    Sets the CropBox of the first page to crop_box and returns the new
    document as bytes.

    The whole document is cloned (pages, resources, metadata, outline);
    only page 1's /CropBox changes. Other pages are left alone.
    Raises LoadError for unreadable input and PageAccessError when the
    document has no pages. Nothing is returned on failure.
    """
    reader = _open(source_bytes)
    lower_left, upper_right = box_corners(crop_box)
    try:
        writer = PdfWriter()
        writer.clone_document_from_reader(reader)
        info = reader.metadata
        if info:
            # The clone does not carry /Info over. Indexing resolves
            # indirect values; add_metadata wants strings.
            writer.add_metadata({key: info[key] for key in info if isinstance(info[key], (str, bytes))})
        writer.pages[0].cropbox = RectangleObject(lower_left + upper_right)
        buffer = io.BytesIO()
        writer.write(buffer)
    except MALFORMED_ERRORS as e:
        raise LoadError() from e
    output = buffer.getvalue()
    logger.info(
        "Cropped page 1 to (%.2f, %.2f)-(%.2f, %.2f), %d bytes",
        lower_left[0], lower_left[1], upper_right[0], upper_right[1], len(output),
    )
    return output
