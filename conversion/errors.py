"""Exceptions raised by the conversion layer.

All of them derive from ValueError so callers that already guard numeric
conversions with ``except ValueError`` keep working.
"""


class ConversionError(ValueError):
    """Base class for layout and component-packing failures."""


class LengthMismatchError(ConversionError):
    """A buffer or row-major container does not match the declared height/width."""


class ContractError(ConversionError):
    """Bad NDI/NSHR, wrong vector/matrix size, or a tensor that is not symmetric."""
