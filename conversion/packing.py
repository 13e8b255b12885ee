"""Reduced <-> length-6 Abaqus stress-type vectors and matrices.

A stress-type vector (stress, strain, ...) handed over by the solver only holds the
components that are not zero by definition: NDI direct components followed by NSHR
shear components, NTENS = NDI + NSHR in total. Plane stress for instance has
NDI = 2, NSHR = 1:

    reduced  = (s11, s22, t12)
    expanded = (s11, s22, 0, t12, 0, 0)

The expanded (length 6) vector keeps the direct components in slots 0..2 and the
shear components in slots 3..5, in the solver's own shear order. The mapping does
not depend on that order, so the same routines serve Abaqus/Standard and
Abaqus/Explicit.
"""

import numpy as np
import jax.numpy as jnp

from conversion.errors import ContractError
from conversion.gather import gather, gather_matrix, scatter
from conversion.tables import N_DIRECT, N_VOIGT


def check_components(ndi, nshr):
    """Validate NDI/NSHR and return them as plain ints."""
    for name, n in (("NDI", ndi), ("NSHR", nshr)):
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)):
            raise ContractError(f"{name} must be an integer, got {n!r}")
        if not 0 <= n <= N_DIRECT:
            raise ContractError(f"{name} must be between 0 and {N_DIRECT}, got {n}")
    return int(ndi), int(nshr)


def reduced_index_map(ndi, nshr):
    """Expanded-vector slot of every reduced component: (0..NDI-1, 3..3+NSHR-1)."""
    ndi, nshr = check_components(ndi, nshr)
    return tuple(range(ndi)) + tuple(N_DIRECT + i for i in range(nshr))


def _vector(values, length, what):
    v = jnp.asarray(values)
    if v.ndim != 1 or v.shape[0] != length:
        raise ContractError(f"{what} must have shape ({length},), got {v.shape}")
    return v


# ----------------- vectors -----------------
def expand_vector(reduced, ndi, nshr):
    """
    Expand a reduced stress-type vector to the length-6 vector.

    Components that are zero by definition (direct slots NDI..2, shear slots
    3+NSHR..5) are zero filled.

    Args:
        reduced: vector of length NDI + NSHR
        ndi: number of direct components
        nshr: number of shear components

    Returns:
        jnp vector of length 6, same dtype as `reduced`
    """
    order = reduced_index_map(ndi, nshr)
    v = _vector(reduced, len(order), "reduced vector")
    return scatter(v, order, N_VOIGT)


def contract_vector(expanded, ndi, nshr):
    """
    Contract a length-6 stress-type vector to its NDI + NSHR solver components.

    Slots that are not read are dropped without checking they are zero.
    """
    order = reduced_index_map(ndi, nshr)
    v = _vector(expanded, N_VOIGT, "expanded vector")
    return gather(v, order)


# ----------------- matrices -----------------
def contract_matrix(expanded, ndi, nshr):
    """
    Contract a 6x6 Abaqus/Standard Voigt matrix (e.g. the Jaumann stiffness
    DDSDDE) to NTENS x NTENS.

    Row and column maps are the vector map, applied independently:

        ( D1111, D1122, D1133, D1112, D1113, D1123 )
        ( D2211, D2222, D2233, D2212, D2213, D2223 )
        ( D3311, D3322, D3333, D3312, D3313, D3323 )
        ( D1211, D1222, D1233, D1212, D1213, D1223 )
        ( D1311, D1322, D1333, D1312, D1313, D1323 )
        ( D2311, D2322, D2333, D2312, D2313, D2323 )

    loses rows/columns 2, 4, 5 for plane stress (NDI=2, NSHR=1).
    """
    order = reduced_index_map(ndi, nshr)
    m = jnp.asarray(expanded)
    if m.shape != (N_VOIGT, N_VOIGT):
        raise ContractError(f"expanded matrix must have shape (6, 6), got {m.shape}")
    return gather_matrix(m, order, order)
