#!/usr/bin/env python3
"""
PDF Crop Tool

Modes of operation:
  1. Interactive:
       pdfcrop [input.pdf]
     • Opens a window showing the first page (asks for a file if none given).
     • Start Crop, then click & drag over the page to select the area to keep.
     • Apply Crop writes the selection as page 1's CropBox; Download saves
       the result (default name cropped-pdf.pdf).

  2. Headless:
       pdfcrop input.pdf output.pdf x y width height
     • Sets page 1's CropBox to the given box and saves output.pdf.
     • x, y is the bottom-left corner. All values are in PDF points.
"""

import logging
import sys
from pathlib import Path

from pdfcrop.crop import apply_crop, read_crop_box
from pdfcrop.cords import CropBox, is_degenerate
from pdfcrop.errors import CropError, NoSelectionError

USAGE = """Usage:
  To crop interactively:
      pdfcrop [input.pdf]
  To crop page 1 to a box given in PDF points:
      pdfcrop input.pdf output.pdf x y width height"""


def crop_file(input_pdf, output_pdf, crop_box):
    """
    Crops page 1 of input_pdf to crop_box and saves the result to
    output_pdf. Returns the CropBox read back from the written file.
    """
    if is_degenerate(crop_box):
        raise NoSelectionError("Crop width and height must be greater than zero.")
    output = apply_crop(Path(input_pdf).read_bytes(), crop_box)
    Path(output_pdf).write_bytes(output)
    return read_crop_box(output)


def run_gui(input_pdf=None):
    # tkinter is only needed for the interactive mode
    from pdfcrop.viewer import CropViewer
    viewer = CropViewer(input_pdf)
    if input_pdf is None:
        viewer.on_open()
    viewer.run()


def main(argv=None):
    args = sys.argv[1:] if argv is None else argv
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")
    if len(args) <= 1:
        run_gui(args[0] if args else None)
        return 0
    if len(args) != 6:
        print(USAGE)
        return 1
    input_pdf, output_pdf = args[0], args[1]
    try:
        crop_box = CropBox(*(float(value) for value in args[2:]))
    except ValueError:
        print("Crop box values must be numbers (e.g., 36 72 300 400).")
        return 1
    try:
        written = crop_file(input_pdf, output_pdf, crop_box)
    except CropError as e:
        print(e.message)
        return 1
    except OSError as e:
        print(f"Could not process {input_pdf}: {e.strerror}")
        return 1
    print("Crop box in PDF points:")
    print(f"  Bottom-left: ({written.x:.2f}, {written.y:.2f})")
    print(f"  Width: {written.width:.2f}, Height: {written.height:.2f}")
    print(f"Cropped PDF saved to {output_pdf}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
