"""
Drag-to-select state for the crop overlay.

    IDLE --arm--> ARMED --press--> DRAGGING --release--> SELECTED
                                      ^  |move                |
                                      |__|     press (redo)   |
                                      ^______________________/

reset() returns to IDLE from anywhere; take() hands over the finished
rectangle and leaves crop mode.
The rect exists only while DRAGGING or SELECTED, the anchor only while
DRAGGING.
"""

from pdfcrop.cords import Point, normalize_drag, is_degenerate, scale_rect
from pdfcrop.errors import NoSelectionError, SelectionStateError

IDLE = "idle"
ARMED = "armed"
DRAGGING = "dragging"
SELECTED = "selected"


class CropSelection:
    def __init__(self):
        self.state = IDLE
        self.anchor = None
        self.rect = None

    @property
    def active(self):
        """True while crop mode is on."""
        return self.state != IDLE

    @property
    def has_selection(self):
        return self.state == SELECTED and not is_degenerate(self.rect)

    def arm(self):
        if self.state != IDLE:
            raise SelectionStateError(f"Cannot start cropping while {self.state}")
        self.state = ARMED
        self.anchor = None
        self.rect = None

    def press(self, point):
        if self.state not in (ARMED, SELECTED):
            return False
        self.anchor = Point(*point)
        self.rect = normalize_drag(self.anchor, self.anchor)
        self.state = DRAGGING
        return True

    def move(self, point):
        if self.state != DRAGGING:
            return False
        # Always measured from the anchor, never from the previous rect.
        self.rect = normalize_drag(self.anchor, Point(*point))
        return True

    def release(self, point=None):
        """
        Ends the drag. Pointer-up passes its position as a last move;
        pointer-leave passes nothing and keeps the last rect.
        """
        if self.state != DRAGGING:
            return False
        if point is not None:
            self.move(point)
        self.anchor = None
        self.state = SELECTED
        return True

    def take(self):
        """
        Returns the finished rectangle and leaves crop mode.
        Raises NoSelectionError when there is nothing usable to crop to.
        """
        if not self.has_selection:
            raise NoSelectionError()
        rect = self.rect
        self.reset()
        return rect

    def rescale(self, factor):
        if self.rect is not None:
            self.rect = scale_rect(self.rect, factor)
        if self.anchor is not None:
            self.anchor = Point(self.anchor.x * factor, self.anchor.y * factor)

    def reset(self):
        self.state = IDLE
        self.anchor = None
        self.rect = None
