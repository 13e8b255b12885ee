"""Permutation tables between the Abaqus stress-type vectors and full tensors.

Abaqus/Standard (UMAT) orders the shear components as (12, 13, 23); Abaqus/Explicit
(VUMAT) as (12, 23, 13). The direct components always come first.

Full tensors are stored row-major:

    full[]   0     1     2     3     4     5     6     7     8
           { s11,  s12,  s13,  s21,  s22,  s23,  s31,  s32,  s33 }
"""

# ----------------- length-6 vector -> row-major 3x3 tensor -----------------
STANDARD_TENSOR_ORDER = (0, 3, 4,
                         3, 1, 5,
                         4, 5, 2)

EXPLICIT_TENSOR_ORDER = (0, 3, 5,
                         3, 1, 4,
                         5, 4, 2)

# ----------------- row-major 3x3 tensor -> length-6 vector -----------------
STANDARD_VOIGT_ORDER = (0, 4, 8, 1, 2, 5)

EXPLICIT_VOIGT_ORDER = (0, 4, 8, 1, 5, 2)

# number of direct (and of shear) slots in the length-6 vector
N_DIRECT = 3
N_VOIGT = 6
N_FULL = 9


def tensor_order(standard=True):
    return STANDARD_TENSOR_ORDER if standard else EXPLICIT_TENSOR_ORDER


def voigt_order(standard=True):
    return STANDARD_VOIGT_ORDER if standard else EXPLICIT_VOIGT_ORDER
