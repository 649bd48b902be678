"""
tkinter front end: shows the first page of a PDF, lets you drag a crop
rectangle over it and saves the cropped copy.
"""

import logging
import tkinter as tk
from concurrent.futures import ThreadPoolExecutor
from tkinter import filedialog, messagebox

import fitz  # PyMuPDF

from pdfcrop.cords import Point
from pdfcrop.crop import PDF_FILETYPES
from pdfcrop.errors import CropError
from pdfcrop.session import CropSession

logger = logging.getLogger(__name__)

INSTRUCTIONS = "Click and drag on the PDF to select crop area"
OUTLINE_COLOR = "red"
OUTLINE_WIDTH = 2
POLL_MS = 50


class CropViewer:
    def __init__(self, pdf_path=None):
        self.session = CropSession()
        self.executor = ThreadPoolExecutor(max_workers=1)
        self.pending = None
        self.tk_img = None
        self.image_width = 0
        self.image_height = 0
        self.rect_id = None
        self.init_gui()
        if pdf_path:
            self.open_path(pdf_path)

    def init_gui(self):
        self.root = tk.Tk()
        self.root.title("PDF Crop Tool")
        self.toolbar = tk.Frame(self.root)
        self.toolbar.pack(fill=tk.X)
        self.open_button = tk.Button(self.toolbar, text="Open...", command=self.on_open)
        self.start_button = tk.Button(self.toolbar, text="Start Crop", command=self.on_start_crop)
        self.apply_button = tk.Button(self.toolbar, text="Apply Crop", command=self.on_apply_crop)
        self.cancel_button = tk.Button(self.toolbar, text="Cancel", command=self.on_cancel)
        self.download_button = tk.Button(self.toolbar, text="Download", command=self.on_download)
        self.zoom_in_button = tk.Button(self.toolbar, text="Zoom In", command=self.on_zoom_in)
        self.zoom_out_button = tk.Button(self.toolbar, text="Zoom Out", command=self.on_zoom_out)
        for button in (self.open_button, self.start_button, self.apply_button,
                       self.cancel_button, self.download_button):
            button.pack(side=tk.LEFT, padx=(6, 0), pady=4)
        self.zoom_out_button.pack(side=tk.RIGHT, padx=(0, 6))
        self.zoom_in_button.pack(side=tk.RIGHT, padx=(0, 2))

        self.status_var = tk.StringVar()
        tk.Label(self.root, textvariable=self.status_var, anchor=tk.W).pack(fill=tk.X, padx=6)

        frame = tk.Frame(self.root)
        frame.pack(fill=tk.BOTH, expand=True)
        self.canvas = tk.Canvas(frame, cursor="cross", highlightthickness=0, width=640, height=720)
        xscroll = tk.Scrollbar(frame, orient=tk.HORIZONTAL, command=self.canvas.xview)
        yscroll = tk.Scrollbar(frame, orient=tk.VERTICAL, command=self.canvas.yview)
        self.canvas.config(xscrollcommand=xscroll.set, yscrollcommand=yscroll.set)
        xscroll.pack(side=tk.BOTTOM, fill=tk.X)
        yscroll.pack(side=tk.RIGHT, fill=tk.Y)
        self.canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        self.canvas.bind("<ButtonPress-1>", self.on_button_press)
        self.canvas.bind("<B1-Motion>", self.on_mouse_drag)
        self.canvas.bind("<ButtonRelease-1>", self.on_button_release)
        self.canvas.bind("<Leave>", self.on_mouse_leave)
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)
        self.refresh_controls()

    def run(self):
        self.root.mainloop()

    # Rendering

    def render_page(self):
        self.canvas.delete("all")
        self.rect_id = None
        if not self.session.loaded:
            self.tk_img = None
            self.image_width = self.image_height = 0
            return
        doc = fitz.open(stream=self.session.source, filetype="pdf")
        try:
            page = doc[0]
            # Show the whole MediaBox, unrotated, so pixels map straight
            # onto PDF points.
            page.set_rotation(0)
            page.set_cropbox(page.mediabox)
            matrix = fitz.Matrix(self.session.zoom, self.session.zoom)
            pix = page.get_pixmap(matrix=matrix)
        finally:
            doc.close()
        self.tk_img = tk.PhotoImage(data=pix.tobytes("ppm"))
        self.image_width = pix.width
        self.image_height = pix.height
        self.canvas.create_image(0, 0, anchor=tk.NW, image=self.tk_img, tags="page")
        self.canvas.config(scrollregion=(0, 0, pix.width, pix.height))
        self.draw_selection()

    def draw_selection(self):
        rect = self.session.selection.rect
        if rect is None:
            if self.rect_id:
                self.canvas.delete(self.rect_id)
                self.rect_id = None
            return
        coords = (rect.x, rect.y, rect.x + rect.width, rect.y + rect.height)
        if self.rect_id:
            self.canvas.coords(self.rect_id, *coords)
        else:
            self.rect_id = self.canvas.create_rectangle(*coords, outline=OUTLINE_COLOR, width=OUTLINE_WIDTH)
        self.canvas.tag_raise(self.rect_id)

    def refresh_controls(self):
        session = self.session
        self.set_enabled(self.start_button, session.can_start_crop)
        self.set_enabled(self.apply_button, session.can_apply_crop)
        self.set_enabled(self.cancel_button, session.can_cancel)
        self.set_enabled(self.download_button, session.can_download)
        if session.selection.active:
            self.status_var.set(INSTRUCTIONS)
        elif session.loaded:
            self.status_var.set(f"{session.name or 'Document'}  (zoom {session.zoom:.0%})")
        else:
            self.status_var.set("Open a PDF file to begin")

    @staticmethod
    def set_enabled(button, enabled):
        button.config(state=tk.NORMAL if enabled else tk.DISABLED)

    def show_error(self, error):
        logger.warning("%s", error.message)
        messagebox.showerror("PDF Crop Tool", error.message, parent=self.root)

    # File handling

    def on_open(self):
        path = filedialog.askopenfilename(title="Select PDF", filetypes=PDF_FILETYPES, parent=self.root)
        if path:
            self.open_path(path)

    def open_path(self, path):
        try:
            self.session.open_path(path)
        except OSError as e:
            self.show_error(CropError(f"Could not open {path}: {e.strerror}"))
            return
        except CropError as e:
            self.show_error(e)
        self.render_page()
        self.refresh_controls()

    # Crop mode

    def on_start_crop(self):
        try:
            self.session.start_crop()
        except CropError as e:
            self.show_error(e)
        self.draw_selection()
        self.refresh_controls()

    def on_cancel(self):
        self.session.cancel()
        self.draw_selection()
        self.refresh_controls()

    def to_page_point(self, event):
        # Canvas coordinates account for scrolling; clamp to the page image.
        x = self.canvas.canvasx(event.x)
        y = self.canvas.canvasy(event.y)
        return Point(max(0, min(x, self.image_width)), max(0, min(y, self.image_height)))

    def on_button_press(self, event):
        if self.session.drag_start(self.to_page_point(event)):
            self.draw_selection()
            self.refresh_controls()

    def on_mouse_drag(self, event):
        if self.session.drag_move(self.to_page_point(event)):
            self.draw_selection()

    def on_button_release(self, event):
        if self.session.drag_end(self.to_page_point(event)):
            self.draw_selection()
            self.refresh_controls()

    def on_mouse_leave(self, event):
        if self.session.drag_end():
            self.draw_selection()
            self.refresh_controls()

    def on_apply_crop(self):
        try:
            job = self.session.begin_crop(self.image_width)
        except CropError as e:
            self.show_error(e)
            self.refresh_controls()
            return
        self.draw_selection()
        self.refresh_controls()
        self.pending = (job, self.executor.submit(self.session.run_crop, job))
        self.root.after(POLL_MS, self.poll_crop)

    def poll_crop(self):
        job, future = self.pending
        if not future.done():
            self.root.after(POLL_MS, self.poll_crop)
            return
        self.pending = None
        error = future.exception()
        try:
            stored = self.session.finish_crop(job, output=None if error else future.result(), error=error)
        except CropError as e:
            self.show_error(e)
            stored = False
        self.draw_selection()
        self.refresh_controls()
        if stored:
            messagebox.showinfo(
                "PDF Crop Tool",
                "PDF cropped successfully! Click Download to save the file.",
                parent=self.root,
            )

    def on_download(self):
        try:
            download = self.session.download()
        except CropError as e:
            self.show_error(e)
            return
        path = filedialog.asksaveasfilename(
            title="Save cropped PDF",
            initialfile=download.filename,
            defaultextension=".pdf",
            filetypes=PDF_FILETYPES,
            parent=self.root,
        )
        if not path:
            return
        try:
            with open(path, "wb") as f:
                f.write(download.data)
        except OSError as e:
            self.show_error(CropError(f"Could not save {path}: {e.strerror}"))
            return
        print(f"Cropped PDF saved to {path}")

    # Zoom

    def on_zoom_in(self):
        self.session.zoom_in()
        self.render_page()
        self.refresh_controls()

    def on_zoom_out(self):
        self.session.zoom_out()
        self.render_page()
        self.refresh_controls()

    def on_close(self):
        self.executor.shutdown(wait=False)
        self.root.destroy()
