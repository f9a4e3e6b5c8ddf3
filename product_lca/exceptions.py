"""
Exceptions raised by the product LCA engine.

The numeric core never raises for well-typed input. These are only used
where records cross into the engine and for programmer errors such as
out-of-range Pedigree scores.
"""


class ProductLCAError(Exception):
    """Base class for product LCA engine errors."""
    pass


class InvalidRecordError(ProductLCAError, ValueError):
    """Raised when an upstream material or facility record cannot be parsed."""

    def __init__(self, message: str, field_name: str = None, value=None):
        super().__init__(message)
        self.field_name = field_name
        self.value = value


class PedigreeScoreError(ProductLCAError, ValueError):
    """Raised when a Pedigree Matrix score falls outside 1..5."""
    pass
