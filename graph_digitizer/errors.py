from __future__ import annotations


class DigitizerError(Exception):
    """Base class for conditions the controller turns into a status message."""


class NoImageLoaded(DigitizerError):
    pass


class CalibrationNotActive(DigitizerError):
    pass


class ImageLoadError(DigitizerError):
    pass


class DocumentError(DigitizerError):
    pass


class ExportError(DigitizerError):
    pass
