"""Column-major <-> row-major conversion of two dimensional arrays.

Fortran (and therefore Abaqus) stores a height x width array column by column:

    column_major[col * height + row] == row_major[row][col]

The row-major direction returns a new (height, width) jax array. The column-major
direction writes through a caller-owned numpy buffer, the Python counterpart of
the solver's output pointer.
"""

import numpy as np
import jax.numpy as jnp

from conversion.errors import ContractError, LengthMismatchError

_SIZE_MISMATCH = "Column major size must match row major size"


def _check_dimensions(height, width):
    for name, n in (("height", height), ("width", width)):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise ContractError(f"{name} must be an integer, got {n!r}")
        if n < 0:
            raise ContractError(f"{name} must be non-negative, got {n}")
    return int(height), int(width)

def _check_row_major_shape(shape, height, width):
    # 2-D container, or flat row-major sequence of length height*width
    if len(shape) == 2:
        ok = tuple(shape) == (height, width)
    elif len(shape) == 1:
        ok = shape[0] == height * width
    else:
        ok = False
    if not ok:
        raise LengthMismatchError(
            f"{_SIZE_MISMATCH}: got row major shape {tuple(shape)} for {height}x{width}"
        )


def _check_flat(shape, height, width):
    # solver memory is a flat buffer
    if len(shape) != 1:
        raise LengthMismatchError(
            f"Column major buffer must be flat, got shape {tuple(shape)} for {height}x{width}"
        )
    if shape[0] != height * width:
        raise LengthMismatchError(
            f"Column major buffer holds {shape[0]} values, expected {height}x{width}"
        )


def check_output_buffer(column_major, height, width):
    """Raise unless `column_major` is a writeable, flat numpy array of height*width values."""
    height, width = _check_dimensions(height, width)
    if not isinstance(column_major, np.ndarray):
        raise TypeError(
            f"column_major must be a numpy array owned by the caller, got {type(column_major).__name__}"
        )
    if not column_major.flags.writeable:
        raise ValueError("column_major buffer is read-only")
    _check_flat(column_major.shape, height, width)
    return height, width


def column_to_row_major(column_major, height, width):
    """
    Read a flat column-major buffer as a row-major (height, width) array.

    Args:
        column_major: flat (1-D) buffer of exactly height*width values
        height: number of rows
        width: number of columns

    Returns:
        jnp array of shape (height, width)
    """
    height, width = _check_dimensions(height, width)
    flat = jnp.asarray(column_major)
    _check_flat(flat.shape, height, width)
    return jnp.reshape(flat, (height, width), order="F")


def row_to_column_major(column_major, row_major, height, width):
    """
    Write a row-major array into a caller-owned column-major buffer, in place.

    Args:
        column_major: writeable, flat (1-D) numpy array of exactly height*width values
        row_major: (height, width) container or flat row-major sequence of
            length height*width
        height: number of rows. 1 for vectors.
        width: number of columns. The vector length for vectors.
    """
    height, width = check_output_buffer(column_major, height, width)

    try:
        values = np.asarray(row_major)
    except ValueError as exc:  # ragged nested rows
        raise LengthMismatchError(_SIZE_MISMATCH) from exc
    _check_row_major_shape(values.shape, height, width)

    np.copyto(column_major, values.reshape(height, width).ravel(order="F"))


def row_to_column_major_array(row_major, height, width):
    """Same mapping as row_to_column_major, returned as a new flat jnp array."""
    height, width = _check_dimensions(height, width)
    try:
        values = jnp.asarray(row_major)
    except (TypeError, ValueError) as exc:
        raise LengthMismatchError(_SIZE_MISMATCH) from exc
    _check_row_major_shape(values.shape, height, width)
    return jnp.ravel(jnp.reshape(values, (height, width)), order="F")
