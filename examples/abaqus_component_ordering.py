import numpy as np
import jax.numpy as jnp

from conversion.layout import column_to_row_major, row_to_column_major
from conversion.packing import expand_vector, contract_vector, contract_matrix
from conversion.assembly import (construct_full_tensor_from_reduced,
                                 destruct_full_tensor_to_reduced,
                                 contract_full_matrix)

print("--------------------------------")
print("Fortran column-major <-> row-major")
print("--------------------------------")

column_major = np.array([1., 4., 2., 5., 3., 6.])
row_major = column_to_row_major(column_major, 2, 3)
print("column-major buffer:", column_major)
print("row-major (2x3):\n", row_major)

back = np.zeros(6)
row_to_column_major(back, row_major, 2, 3)
print("written back:", back)

print("-----------------------------------------")
print("Plane stress vector (NDI=2, NSHR=1)")
print("-----------------------------------------")

reduced = jnp.array([11., 22., 12.])
print("expanded:", expand_vector(reduced, 2, 1))
print("contracted:", contract_vector(expand_vector(reduced, 2, 1), 2, 1))
print("full tensor:\n", construct_full_tensor_from_reduced(reduced, 2, 1).reshape(3, 3))

print("-------------------------------------------")
print("Abaqus/Standard vs Abaqus/Explicit ordering")
print("-------------------------------------------")

full = jnp.array([11., 12., 13., 12., 22., 23., 13., 23., 33.])
print("Standard (12, 13, 23):", destruct_full_tensor_to_reduced(full, 3, 3, standard=True))
print("Explicit (12, 23, 13):", destruct_full_tensor_to_reduced(full, 3, 3, standard=False))

print("------------------------------------")
print("9x9 -> 6x6 -> plane stress 3x3 matrix")
print("------------------------------------")

pairs = [11, 12, 13, 21, 22, 23, 31, 32, 33]
full_matrix = jnp.array([[100 * ab + cd for cd in pairs] for ab in pairs])
voigt = contract_full_matrix(full_matrix)
print("6x6:\n", voigt)
print("3x3:\n", contract_matrix(voigt, 2, 1))
