"""Fault taxonomy for sheet composition and export."""


class DrawingError(Exception):
    """Base class for faults raised while building drawings."""


class MissingDataError(DrawingError):
    """A sheet or view has none of the data it needs."""


class SerializationError(DrawingError):
    """An export format could not be produced."""
