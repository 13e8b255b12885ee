"""UMAT-style glue between Abaqus solver memory and a constitutive update.

The solver hands over flat Fortran buffers. Two dimensional arrays (DDSDDE, DROT,
DFGRD0, DFGRD1) are column-major, stress-type vectors hold NTENS = NDI + NSHR
components. `umat_interface` converts them to row-major jax arrays, calls the
constitutive update

    update_fn(state_old, step_load, params) -> (new_state, fields, logs)

and re-packs the results into the caller's buffers in place. Scalars cannot be
passed by reference in Python; they are returned in a dict instead.

`full_tensor_update` lets the constitutive update be written with full 3x3
tensors and 9x9 tangents instead of reduced NTENS vectors.
"""

import warnings

import numpy as np

from conversion.assembly import (construct_full_tensor_from_reduced,
                                 contract_full_matrix_to_reduced,
                                 destruct_full_tensor_to_reduced)
from conversion.layout import (check_output_buffer, column_to_row_major,
                               row_to_column_major)
from conversion.packing import check_components

SPATIAL_DIMENSIONS = 3

STRAIN_INPUTS = ("stran", "dstran")
TENSOR_INPUTS = ("drot", "dfgrd0", "dfgrd1")
VECTOR_OUTPUTS = ("ddsddt", "drplde")
SCALAR_OUTPUTS = ("sse", "spd", "scd", "rpl", "drpldt", "pnewdt")


def _vector_in(buffer, length):
    return column_to_row_major(buffer, 1, length)[0]


def umat_interface(update_fn, buffers, step_load, params, ndi, nshr):
    """
    Run one material-point update against solver-layout buffers.

    Args:
        update_fn: constitutive update, see module docstring. `new_state` must hold
            "stress" and may hold "statev"; `fields` must hold "ddsdde" (NTENS x
            NTENS, row-major) and may hold "ddsddt", "drplde" and the scalars
            sse, spd, scd, rpl, drpldt, pnewdt.
        buffers: caller-owned numpy arrays updated in place: "stress" (NTENS),
            "statev" (NSTATV), "ddsdde" (NTENS*NTENS, column-major) and, when the
            update returns them, "ddsddt" and "drplde" (NTENS).
        step_load: "stran", "dstran" (NTENS) and optionally "drot", "dfgrd0",
            "dfgrd1" (3x3 column-major). Any other entry (time, dtime, temp,
            props, coords, kinc, ...) is passed through untouched.
        params: material parameters, passed through untouched.
        ndi: number of direct components
        nshr: number of shear components

    Returns:
        dict of the scalar outputs the update provided, plus "logs".
    """
    ndi, nshr = check_components(ndi, nshr)
    ntens = ndi + nshr

    stress = buffers["stress"]
    statev = buffers["statev"]
    ddsdde = buffers["ddsdde"]
    nstatv = np.size(statev)

    # ----------------- solver layout -> row-major -----------------
    state_old = {
        "stress": _vector_in(stress, ntens),
        "statev": _vector_in(statev, nstatv),
    }
    load = dict(step_load)
    load.update(ndi=ndi, nshr=nshr, ntens=ntens)
    for key in STRAIN_INPUTS:
        load[key] = _vector_in(step_load[key], ntens)
    for key in TENSOR_INPUTS:
        if key in step_load:
            load[key] = column_to_row_major(step_load[key], SPATIAL_DIMENSIONS, SPATIAL_DIMENSIONS)

    new_state, fields, logs = update_fn(state_old, load, params)

    # ----------------- row-major -> solver layout -----------------
    writes = [
        (stress, new_state["stress"], 1, ntens),
        (ddsdde, fields["ddsdde"], ntens, ntens),
    ]
    if "statev" in new_state:
        writes.append((statev, new_state["statev"], 1, nstatv))
    for key in VECTOR_OUTPUTS:
        if key in fields:
            writes.append((buffers[key], fields[key], 1, ntens))

    # check every buffer and stage every write before the first copy into solver memory
    staged = []
    for out, values, height, width in writes:
        check_output_buffer(out, height, width)
        column_major = np.empty_like(out)
        row_to_column_major(column_major, values, height, width)
        staged.append((out, column_major))
    for out, column_major in staged:
        np.copyto(out, column_major)

    scalars = {key: fields[key] for key in SCALAR_OUTPUTS if key in fields}
    if "pnewdt" in scalars and float(scalars["pnewdt"]) < 1.0:
        warnings.warn(
            f"constitutive update requested a time increment cut, pnewdt={float(scalars['pnewdt']):g}",
            RuntimeWarning,
            stacklevel=2,
        )
    return {**scalars, "logs": logs}


def full_tensor_update(update_fn, ndi, nshr, standard=True):
    """
    Adapt a full-tensor constitutive update to reduced stress-type vectors.

    The wrapped update receives "stress" (state) and "stran", "dstran" (load) as
    (3, 3) arrays and returns "stress" as a (3, 3) array, "ddsdde" as a 9x9 matrix
    and "ddsddt"/"drplde" as full tensors. Shear entries keep the solver's
    convention: strains carry engineering shear (gamma_ij = eps_ij + eps_ji).

    Args:
        update_fn: full-tensor constitutive update
        ndi: number of direct components
        nshr: number of shear components
        standard: True for Abaqus/Standard ordering, False for Abaqus/Explicit.
            Tangent contraction is only defined for Abaqus/Standard.

    Returns:
        update function for `umat_interface`
    """
    ndi, nshr = check_components(ndi, nshr)

    def to_full(v):
        return construct_full_tensor_from_reduced(v, ndi, nshr, standard).reshape(3, 3)

    def to_reduced(t):
        return destruct_full_tensor_to_reduced(t, ndi, nshr, standard)

    def reduced_update_fn(state_old, step_load, params):
        state_full = dict(state_old, stress=to_full(state_old["stress"]))
        load_full = dict(step_load)
        for key in STRAIN_INPUTS:
            load_full[key] = to_full(step_load[key])

        new_state, fields, logs = update_fn(state_full, load_full, params)

        new_state = dict(new_state, stress=to_reduced(new_state["stress"]))
        fields = dict(fields)
        if "ddsdde" in fields:
            fields["ddsdde"] = contract_full_matrix_to_reduced(fields["ddsdde"], ndi, nshr, standard)
        for key in VECTOR_OUTPUTS:
            if key in fields:
                fields[key] = to_reduced(fields[key])
        return new_state, fields, logs

    return reduced_update_fn
