"""Full 3x3 tensors and 9x9 matrices <-> Abaqus stress-type vectors and matrices.

The expanded stress-type vector differs between the two solvers only in the
order of the last two shear slots:

    Abaqus/Standard (UMAT)   { s11, s22, s33, t12, t13, t23 }
    Abaqus/Explicit (VUMAT)  { s11, s22, s33, t12, t23, t13 }

`standard=True` selects the first, `standard=False` the second. Full tensors are
row-major vectors of length 9 (a (3, 3) array is accepted as input too).
"""

import numpy as np
import jax.numpy as jnp

from conversion.errors import ContractError
from conversion.gather import gather, gather_matrix
from conversion.packing import contract_matrix, contract_vector, expand_vector
from conversion.tables import (N_FULL, N_VOIGT, STANDARD_VOIGT_ORDER,
                               tensor_order, voigt_order)


def _full_tensor(full_tensor):
    t = jnp.asarray(full_tensor)
    if t.shape not in ((N_FULL,), (3, 3)):
        raise ContractError(f"full tensor must have shape (9,) or (3, 3), got {t.shape}")
    return jnp.ravel(t)

def check_symmetric(full_tensor, atol=0.0):
    """Raise ContractError unless t12 == t21, t13 == t31 and t23 == t32 (within atol)."""
    t = np.asarray(full_tensor).reshape(3, 3)
    if not np.allclose(t, t.T, rtol=0.0, atol=atol):
        raise ContractError(f"full tensor is not symmetric:\n{t}")


# ----------------- tensors -----------------
def construct_full_tensor(expanded, standard=True):
    """
    Build the row-major full tensor from the expanded (length 6) stress-type vector.

    Args:
        expanded: stress-type vector of length 6
        standard: True for Abaqus/Standard ordering, False for Abaqus/Explicit

    Returns:
        jnp row-major vector of length 9
    """
    v = jnp.asarray(expanded)
    if v.shape != (N_VOIGT,):
        raise ContractError(f"expanded vector must have shape (6,), got {v.shape}")
    return gather(v, tensor_order(standard))


def construct_full_tensor_from_reduced(reduced, ndi, nshr, standard=True):
    """Build the row-major full tensor from a reduced (NDI + NSHR) stress-type vector."""
    expanded = expand_vector(reduced, ndi, nshr)
    return construct_full_tensor(expanded, standard)


def destruct_full_tensor(full_tensor, standard=True, check_symmetry=False, atol=0.0):
    """
    Contract a row-major full tensor into the expanded (length 6) stress-type vector.

        full_tensor[]   0    1    2
                     { s11, s12, s13,
                        3    4    5
                       s12, s22, s23,
                        6    7    8
                       s13, s23, s33 }

    Only the upper triangle is read. With `check_symmetry` the lower triangle is
    compared first; this needs concrete values, so leave it off under jax.jit.
    """
    t = _full_tensor(full_tensor)
    if check_symmetry:
        check_symmetric(t, atol)
    return gather(t, voigt_order(standard))


def destruct_full_tensor_to_reduced(full_tensor, ndi, nshr, standard=True,
                                    check_symmetry=False, atol=0.0):
    """Contract a row-major full tensor into a reduced (NDI + NSHR) stress-type vector."""
    expanded = destruct_full_tensor(full_tensor, standard, check_symmetry, atol)
    return contract_vector(expanded, ndi, nshr)


# ----------------- matrices -----------------
def contract_full_matrix(full_matrix, standard=True):
    """
    Re-pack a full 9x9 matrix (rows/columns 11,12,13,21,22,23,31,32,33) into the
    6x6 Abaqus/Standard Voigt matrix:

        result[i][j] = full_matrix[order[i]][order[j]],  order = (0, 4, 8, 1, 2, 5)

    Only the Abaqus/Standard ordering is defined for matrices.
    """
    if not standard:
        raise NotImplementedError(
            "Abaqus/Explicit matrix ordering is not defined; only standard=True is supported"
        )
    m = jnp.asarray(full_matrix)
    if m.shape != (N_FULL, N_FULL):
        raise ContractError(f"full matrix must have shape (9, 9), got {m.shape}")
    return gather_matrix(m, STANDARD_VOIGT_ORDER, STANDARD_VOIGT_ORDER)


def contract_full_matrix_to_reduced(full_matrix, ndi, nshr, standard=True):
    """Re-pack a full 9x9 matrix into the NTENS x NTENS Abaqus/Standard matrix."""
    expanded = contract_full_matrix(full_matrix, standard)
    return contract_matrix(expanded, ndi, nshr)
