import os

import numpy as np
import jax
import jax.numpy as jnp
from jax import config
config.update("jax_enable_x64", True)

import matplotlib.pyplot as plt

from conversion.layout import column_to_row_major
from interface.umat import full_tensor_update, umat_interface


# ----------------- isotropic elasticity written with full tensors -----------------
def C_iso_full(E, nu):
    mu  = E / (2.0 * (1.0 + nu))
    lam = E * nu / ((1.0 + nu) * (1.0 - 2.0 * nu))
    I = jnp.eye(3)
    C = (lam * jnp.einsum("ij,kl->ijkl", I, I)
         + mu * (jnp.einsum("ik,jl->ijkl", I, I) + jnp.einsum("il,jk->ijkl", I, I)))
    return C.reshape(9, 9)  # rows/cols 11,12,13,21,22,23,31,32,33

# ----------------- constitutive update (pure function) -----------------
def constitutive_update_fn(state_old, step_load, params):

    C = C_iso_full(params["E"], params["nu"])

    # the solver hands over engineering shear strain on the off-diagonal
    def tensorial(gamma):
        return jnp.where(jnp.eye(3, dtype=bool), gamma, 0.5 * gamma)

    deps = tensorial(step_load["dstran"])
    eps = tensorial(step_load["stran"] + step_load["dstran"])

    sigma = state_old["stress"] + (C @ deps.ravel()).reshape(3, 3)

    new_state = {"stress": sigma, "statev": state_old["statev"]}
    fields = {"ddsdde": C, "sse": 0.5 * jnp.sum(sigma * eps)}
    logs = {}
    return new_state, fields, logs

# ----------------- example usage -----------------
print("--------------------------------------------")
print("Plane strain elasticity through a UMAT call")
print("--------------------------------------------")

params = {"E": 1.0, "nu": 0.3}

# plane strain: s11, s22, s33, t12
ndi, nshr = 3, 1
ntens = ndi + nshr
umat = full_tensor_update(constitutive_update_fn, ndi, nshr)

# strain history
n_ts = 20 if os.environ.get("JAXUMAT_TEST") else 200
ts = np.linspace(0., 1., n_ts)
eps11 = 0.01 * np.sin(ts * 6.0)
gamma12 = 0.005 * ts

# solver memory, reused across increments like the Fortran arrays are
buffers = {
    "stress": np.zeros(ntens),
    "statev": np.zeros(0),
    "ddsdde": np.zeros(ntens * ntens),
}
stran = np.zeros(ntens)

sigma_ts = [buffers["stress"].copy()]
for n in range(1, n_ts):
    dstran = np.zeros(ntens)
    dstran[0] = eps11[n] - eps11[n - 1]
    dstran[3] = gamma12[n] - gamma12[n - 1]
    step_load = {
        "stran": stran,
        "dstran": dstran,
        "drot": np.eye(3).ravel(order="F"),
        "time": np.array([ts[n - 1], ts[n - 1]]),
        "dtime": ts[n] - ts[n - 1],
        "kinc": n,
    }
    out = umat_interface(umat, buffers, step_load, params, ndi, nshr)
    stran = stran + dstran
    sigma_ts.append(buffers["stress"].copy())
sigma_ts = np.array(sigma_ts)

ddsdde = column_to_row_major(buffers["ddsdde"], ntens, ntens)
print("DDSDDE (row-major):\n", ddsdde)
print("strain energy density (last increment):", float(out["sse"]))

# closed form: sigma = D @ (eps11, 0, 0, gamma12)
lam2 = float(ddsdde[0, 0])
mu = float(ddsdde[3, 3])
print("max |sigma11 - D1111 eps11|:", np.max(np.abs(sigma_ts[:, 0] - lam2 * (eps11 - eps11[0]))))
print("max |tau12 - D1212 gamma12|:", np.max(np.abs(sigma_ts[:, 3] - mu * (gamma12 - gamma12[0]))))

plt.plot(eps11, sigma_ts[:, 0], label=r"$\sigma_{11}$")
plt.plot(eps11, sigma_ts[:, 2], label=r"$\sigma_{33}$")
plt.grid()
plt.legend()
plt.xlabel(r"$\epsilon_{11}$")
plt.ylabel(r"stress")
plt.show()


print("---------------------------------------------------")
print("Autodiff through the component conversions (jacfwd)")
print("---------------------------------------------------")

def sigma_reduced(dstran):
    state = {"stress": jnp.zeros(ntens), "statev": jnp.zeros(0)}
    load = {"stran": jnp.zeros(ntens), "dstran": dstran}
    new_state, _, _ = umat(state, load, params)
    return new_state["stress"]

# d(sigma)/d(strain) through expand -> full tensor -> destruct -> contract is DDSDDE
D_ad = jax.jacfwd(sigma_reduced)(jnp.zeros(ntens))
print("max |dsigma/deps - DDSDDE|:", float(jnp.max(jnp.abs(D_ad - ddsdde))))
