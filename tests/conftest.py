"""
Pytest configuration and shared PDF fixtures.
"""
import io

import pytest
from PyPDF2 import PdfWriter


def make_pdf(*sizes, title=None):
    """Build an in-memory PDF with one blank page per (width, height)."""
    writer = PdfWriter()
    for width, height in sizes:
        writer.add_blank_page(width=width, height=height)
    if title:
        writer.add_metadata({"/Title": title})
    buffer = io.BytesIO()
    writer.write(buffer)
    return buffer.getvalue()


@pytest.fixture
def letter_pdf():
    """Single US Letter page (612 x 792 points)."""
    return make_pdf((612, 792))


@pytest.fixture
def two_page_pdf():
    return make_pdf((612, 792), (300, 400), title="Two pages")


@pytest.fixture
def empty_pdf():
    """Well-formed PDF with no pages."""
    return make_pdf()


@pytest.fixture
def letter_path(tmp_path, letter_pdf):
    path = tmp_path / "letter.pdf"
    path.write_bytes(letter_pdf)
    return path
