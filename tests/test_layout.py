# python -m pytest tests/test_layout.py

import numpy as np
import jax.numpy as jnp
import pytest

from conversion.errors import ContractError, LengthMismatchError
from conversion.layout import (column_to_row_major, row_to_column_major,
                               row_to_column_major_array)

# fake Fortran column-major memory for a 2x3 array
COLUMN_MAJOR = [1, 4,
                2, 5,
                3, 6]
ROW_MAJOR = [[1, 2, 3],
             [4, 5, 6]]

def test_column_to_row_major():
    row_major = column_to_row_major(np.array(COLUMN_MAJOR, dtype=float), 2, 3)

    assert row_major.shape == (2, 3)
    assert ( row_major == jnp.array(ROW_MAJOR) ).all()

def test_row_to_column_major_nested():
    column_major = np.zeros(6)
    row_to_column_major(column_major, ROW_MAJOR, 2, 3)

    assert ( column_major == np.array(COLUMN_MAJOR) ).all()

def test_row_to_column_major_flat():
    column_major = np.zeros(6)
    row_to_column_major(column_major, [1, 2, 3, 4, 5, 6], 2, 3)

    assert ( column_major == np.array(COLUMN_MAJOR) ).all()

def test_row_to_column_major_vector():
    # single c++-style row to a single Fortran column
    fortran_vector = np.zeros(3)
    row_to_column_major(fortran_vector, jnp.array([1., 2., 3.]), 1, 3)

    assert ( fortran_vector == np.array([1., 2., 3.]) ).all()

def test_row_to_column_major_writes_in_place():
    storage = np.zeros(8)
    view = storage[1:7]
    row_to_column_major(view, ROW_MAJOR, 2, 3)

    assert ( storage == np.array([0, 1, 4, 2, 5, 3, 6, 0]) ).all()

def test_row_to_column_major_array():
    flat = row_to_column_major_array(jnp.array(ROW_MAJOR), 2, 3)

    assert ( flat == jnp.array(COLUMN_MAJOR) ).all()

@pytest.mark.parametrize("height,width", [(1, 1), (1, 4), (4, 1), (3, 3), (2, 5), (6, 6)])
def test_round_trip(height, width):
    R = jnp.arange(height * width, dtype=jnp.float32).reshape(height, width) * 1.5 - 2.0

    buffer = np.zeros(height * width, dtype=np.float32)
    row_to_column_major(buffer, R, height, width)

    assert ( column_to_row_major(buffer, height, width) == R ).all()
    assert ( column_to_row_major(row_to_column_major_array(R, height, width), height, width) == R ).all()

def test_matches_fortran_order():
    R = np.arange(12.).reshape(3, 4)
    buffer = np.zeros(12)
    row_to_column_major(buffer, R, 3, 4)

    assert ( buffer == R.ravel(order="F") ).all()

def test_row_major_shape_mismatch():
    column_major = np.zeros(6)
    with pytest.raises(LengthMismatchError, match="Column major size must match row major size"):
        row_to_column_major(column_major, [[1, 2], [3, 4], [5, 6]], 2, 3)
    with pytest.raises(LengthMismatchError):
        row_to_column_major(column_major, [1, 2, 3, 4, 5], 2, 3)
    with pytest.raises(LengthMismatchError):
        row_to_column_major(column_major, [[1, 2, 3], [4, 5]], 2, 3)
    with pytest.raises(LengthMismatchError):
        row_to_column_major_array([[1, 2, 3]], 2, 3)
    # nothing was written
    assert ( column_major == 0. ).all()

def test_column_major_buffer_size_mismatch():
    with pytest.raises(LengthMismatchError):
        row_to_column_major(np.zeros(5), ROW_MAJOR, 2, 3)
    with pytest.raises(LengthMismatchError):
        column_to_row_major(np.zeros(5), 2, 3)
    with pytest.raises(LengthMismatchError):
        column_to_row_major(np.zeros(7), 2, 3)

def test_two_dimensional_buffer_rejected():
    # Fortran-ordered 2-D memory as handed over by f2py or ctypes
    fortran = np.zeros((2, 3), order="F")
    with pytest.raises(LengthMismatchError, match="flat"):
        row_to_column_major(fortran, ROW_MAJOR, 2, 3)
    assert ( fortran == 0. ).all()

    with pytest.raises(LengthMismatchError, match="flat"):
        column_to_row_major(np.asfortranarray(ROW_MAJOR), 2, 3)

    # viewing the same memory flat gives the expected layout
    row_to_column_major(fortran.ravel(order="K"), ROW_MAJOR, 2, 3)
    assert ( fortran.ravel(order="K") == np.array(COLUMN_MAJOR) ).all()
    assert ( column_to_row_major(fortran.ravel(order="K"), 2, 3) == jnp.array(ROW_MAJOR) ).all()

def test_column_major_buffer_must_be_writeable_numpy():
    with pytest.raises(TypeError):
        row_to_column_major([0.] * 6, ROW_MAJOR, 2, 3)
    with pytest.raises(TypeError):
        row_to_column_major(jnp.zeros(6), ROW_MAJOR, 2, 3)

    frozen = np.zeros(6)
    frozen.flags.writeable = False
    with pytest.raises(ValueError):
        row_to_column_major(frozen, ROW_MAJOR, 2, 3)

def test_bad_dimensions():
    with pytest.raises(ContractError):
        column_to_row_major(np.zeros(6), -2, -3)
    with pytest.raises(ContractError):
        column_to_row_major(np.zeros(6), 2.0, 3)

if __name__ == "__main__":

    print("running test layout")
    test_column_to_row_major()
    test_row_to_column_major_nested()
    test_row_to_column_major_flat()
    test_row_to_column_major_vector()
    test_round_trip(2, 5)
    print("success")
