"""Exceptions raised by the export pipeline."""


class ExportError(Exception):
    """Fatal failure of a whole export."""


class ElementNotFoundError(ExportError, LookupError):
    """The element requested for a snapshot export does not exist."""


class RasterizationError(ExportError):
    """Rendering a view region to an image failed."""
