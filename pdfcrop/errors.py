"""Errors raised while loading, selecting, cropping and saving."""


class CropError(Exception):
    """Base class. `message` is shown to the user as is."""

    message = "Error cropping PDF. Please try again."

    def __init__(self, message=None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class LoadError(CropError):
    message = "The selected file could not be read as a PDF."


class PageAccessError(CropError):
    message = "The PDF has no first page to crop."


class NoSelectionError(CropError):
    message = "Please select a PDF file and create a crop area"


class NoArtifactError(CropError):
    message = "Please crop the PDF first before downloading."


class NoDocumentError(CropError):
    message = "Please select a PDF file first."


class SelectionStateError(CropError):
    pass
