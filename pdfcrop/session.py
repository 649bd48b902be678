"""
One crop session: the loaded PDF, the zoom level, the pending selection
and the cropped output waiting to be downloaded.

Cropping is split in three so a UI can run the slow part elsewhere:
begin_crop() runs on the UI thread and leaves the selected state at once,
run_crop() does the PDF work, finish_crop() commits the result back on
the UI thread. A result that arrives after another file was opened is
dropped.
"""

import asyncio
import logging
from collections import namedtuple
from pathlib import Path

from pdfcrop.cords import to_document_space
from pdfcrop.crop import OUTPUT_FILENAME, PDF_MIME_TYPE, apply_crop, read_page_geometry
from pdfcrop.errors import CropError, NoArtifactError, NoDocumentError, SelectionStateError
from pdfcrop.selection import CropSelection

logger = logging.getLogger(__name__)

DEFAULT_ZOOM = 1.0
ZOOM_STEP = 0.1
MIN_ZOOM = 0.1

CropJob = namedtuple("CropJob", "file_id source crop_box")
Download = namedtuple("Download", "filename mime_type data")


class CropSession:
    def __init__(self):
        self.source = None
        self.name = None
        self.file_id = 0
        self.zoom = DEFAULT_ZOOM
        self.selection = CropSelection()
        self.artifact = None
        self.in_flight = False
        self._geometry = None

    # Loading

    def load(self, data, name=None):
        self.file_id += 1
        self.source = bytes(data)
        self.name = name
        self._geometry = None
        self.selection.reset()
        self.artifact = None
        logger.info("Loaded %s (%d bytes)", name or "document", len(self.source))

    def load_path(self, path):
        path = Path(path)
        self.load(path.read_bytes(), name=path.name)

    def open_path(self, path):
        """
        Loads a file and checks its first page can be read.
        An OSError leaves the current file untouched; a file that loads
        but is not a usable PDF is closed again before the error is raised.
        """
        self.load_path(path)
        try:
            return self.page_geometry()
        except CropError:
            self.close()
            raise

    def close(self):
        self.file_id += 1
        self.source = None
        self.name = None
        self._geometry = None
        self.selection.reset()
        self.artifact = None

    @property
    def loaded(self):
        return self.source is not None

    def page_geometry(self):
        """First page size in PDF points, read once per file."""
        if not self.loaded:
            raise NoDocumentError()
        if self._geometry is None:
            self._geometry = read_page_geometry(self.source)
        return self._geometry

    # Crop mode

    def start_crop(self):
        if not self.loaded:
            raise NoDocumentError()
        if self.in_flight:
            raise SelectionStateError("A crop is already in progress")
        self.selection.arm()
        self.artifact = None

    def drag_start(self, point):
        return self.selection.press(point)

    def drag_move(self, point):
        return self.selection.move(point)

    def drag_end(self, point=None):
        return self.selection.release(point)

    def cancel(self):
        self.selection.reset()
        self.artifact = None

    # Applying

    def begin_crop(self, viewport_width):
        if self.in_flight:
            raise SelectionStateError("A crop is already in progress")
        rect = self.selection.take()
        try:
            crop_box = to_document_space(rect, viewport_width, self.page_geometry())
        except Exception:
            self.selection.arm()
            raise
        self.in_flight = True
        return CropJob(self.file_id, self.source, crop_box)

    @staticmethod
    def run_crop(job):
        return apply_crop(job.source, job.crop_box)

    def finish_crop(self, job, output=None, error=None):
        """
        Commits the outcome of run_crop. Returns True when the output was
        stored, False when it belonged to a file that is no longer open.
        Errors are re-raised after crop mode is re-armed.
        """
        self.in_flight = False
        if job.file_id != self.file_id:
            logger.info("Discarding crop result for a file that is no longer open")
            return False
        if error is not None:
            if not self.selection.active:
                self.selection.arm()
            raise error
        self.artifact = output
        return True

    async def confirm_crop(self, viewport_width):
        job = self.begin_crop(viewport_width)
        try:
            output = await asyncio.to_thread(self.run_crop, job)
        except Exception as e:
            return self.finish_crop(job, error=e)
        return self.finish_crop(job, output=output)

    # Zoom

    def zoom_in(self):
        self._set_zoom(self.zoom + ZOOM_STEP)

    def zoom_out(self):
        self._set_zoom(max(MIN_ZOOM, self.zoom - ZOOM_STEP))

    def _set_zoom(self, zoom):
        zoom = round(zoom, 6)
        if zoom == self.zoom:
            return
        # The preview is re-rendered at the new zoom; keep the overlay on
        # the same part of the page.
        self.selection.rescale(zoom / self.zoom)
        logger.debug("Zoom %.2f -> %.2f", self.zoom, zoom)
        self.zoom = zoom

    # Output

    def download_bytes(self):
        if self.artifact is None:
            raise NoArtifactError()
        return self.artifact

    def download(self):
        """The cropped PDF with its default filename and MIME type."""
        return Download(OUTPUT_FILENAME, PDF_MIME_TYPE, self.download_bytes())

    def save_artifact(self, path):
        data = self.download().data
        Path(path).write_bytes(data)
        return len(data)

    # Button state

    @property
    def can_start_crop(self):
        return self.loaded and not self.selection.active and not self.in_flight

    @property
    def can_apply_crop(self):
        return self.selection.has_selection and not self.in_flight

    @property
    def can_cancel(self):
        return self.selection.active

    @property
    def can_download(self):
        return self.artifact is not None
