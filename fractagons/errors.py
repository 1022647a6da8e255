class FractagonsError(Exception):
    pass

class RenderFault(FractagonsError):
    """A non-finite point reached the projection stage."""

class MissingResource(FractagonsError, FileNotFoundError):
    """A snapshot or image file requested by the operator does not exist."""
