"""
Coordinate helpers for turning a drag on the preview into a PDF crop box.

Screen space: pixels, origin at the top-left of the rendered preview,
y grows downward.
Document space: PDF points, origin at the bottom-left of the page,
y grows upward.
"""

from collections import namedtuple

Point = namedtuple("Point", "x y")
ScreenRect = namedtuple("ScreenRect", "x y width height")
PageGeometry = namedtuple("PageGeometry", "width height")
CropBox = namedtuple("CropBox", "x y width height")


def normalize_drag(anchor, current):
    """
    Returns the rectangle spanned by the drag anchor and the current
    pointer position, whatever the drag direction.
    The top-left corner is the minimum of both points on each axis.
    """
    return ScreenRect(
        x=min(anchor.x, current.x),
        y=min(anchor.y, current.y),
        width=abs(current.x - anchor.x),
        height=abs(current.y - anchor.y),
    )


def is_degenerate(rect):
    return rect is None or rect.width <= 0 or rect.height <= 0


def scale_rect(rect, factor):
    return ScreenRect(rect.x * factor, rect.y * factor, rect.width * factor, rect.height * factor)


def to_document_space(rect, viewport_width, page):
    """
    Converts a screen rectangle into a crop box in PDF points.

    viewport_width is the width in pixels the page is currently rendered
    at, in the same pixel space as rect. The preview is scaled uniformly,
    so a single factor k = page.width / viewport_width covers both axes.

    Canvas y is top-down and PDF y is bottom-up, so the box's lower edge
    comes from the rectangle's bottom edge (rect.y + rect.height).
    A zero-width or zero-height rect gives a zero-area box.
    """
    if viewport_width <= 0:
        raise ValueError(f"Viewport width must be positive, got {viewport_width}")
    k = page.width / viewport_width
    return CropBox(
        x=rect.x * k,
        y=page.height - (rect.y + rect.height) * k,
        width=rect.width * k,
        height=rect.height * k,
    )


def box_corners(box):
    # (lower_left, upper_right), as stored in a /CropBox array
    return (box.x, box.y), (box.x + box.width, box.y + box.height)
