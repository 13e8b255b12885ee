import jax
import jax.numpy as jnp

from functools import partial

# ----------------- index-table kernels (tables are static, hence hashable tuples) -----------------
@partial(jax.jit, static_argnames=("order",))
def gather(values, order):
    """out[k] = values[order[k]]"""
    return values[jnp.asarray(order, dtype=jnp.int32)]

@partial(jax.jit, static_argnames=("order", "size"))
def scatter(values, order, size):
    """Zero-filled vector of length `size` with out[order[k]] = values[k]."""
    out = jnp.zeros((size,), dtype=values.dtype)
    return out.at[jnp.asarray(order, dtype=jnp.int32)].set(values)

@partial(jax.jit, static_argnames=("rows", "cols"))
def gather_matrix(matrix, rows, cols):
    """out[i, j] = matrix[rows[i], cols[j]]"""
    r = jnp.asarray(rows, dtype=jnp.int32)
    c = jnp.asarray(cols, dtype=jnp.int32)
    return matrix[jnp.ix_(r, c)]
