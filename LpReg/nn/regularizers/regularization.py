import numbers

import numpy as np
import LpReg.backend.backend as backend
from LpReg.errors import DimensionMismatch, InvalidConfiguration


def validate_power(power):
    """Return `power` as an int, raising InvalidConfiguration unless it is an integer >= 1."""
    if isinstance(power, bool) or not isinstance(power, numbers.Integral):
        raise InvalidConfiguration(f"power must be a positive integer, got {power!r}")
    if power < 1:
        raise InvalidConfiguration(f"power must be a positive integer, got {power}")
    return int(power)


def validate_factor(factor):
    """Return `factor` as a float, raising InvalidConfiguration for non-real values."""
    if isinstance(factor, bool) or not isinstance(factor, numbers.Real):
        raise InvalidConfiguration(f"factor must be a real number, got {factor!r}")
    return float(factor)


def as_array(obj):
    """
    Return the ndarray behind `obj`.

    Arrays pass through untouched, parameters and tensors are unwrapped
    (`.master.data` / `.data`), anything else is converted with `xp.asarray`.
    """
    if isinstance(obj, backend.array_types()):
        return obj
    master = getattr(obj, "master", None)
    if master is not None:
        return as_array(master)
    data = getattr(obj, "data", None)
    if isinstance(data, backend.array_types()):
        return data
    return backend.xp.asarray(obj)


def writable_array(obj):
    """
    Like `as_array`, but refuses to copy: the result must alias caller storage.

    Only floating-point storage is accepted; gradients written into integer
    arrays would be silently truncated.
    """
    if isinstance(obj, backend.array_types()):
        dst = obj
    elif getattr(obj, "master", None) is not None:
        return writable_array(obj.master)
    elif isinstance(getattr(obj, "data", None), backend.array_types()):
        dst = obj.data
    else:
        raise TypeError(f"gradient must be an ndarray or expose one as `.data`, got {type(obj).__name__}")
    if not np.issubdtype(dst.dtype, np.floating):
        raise TypeError(f"gradient must have a floating-point dtype, got {dst.dtype}")
    return dst


def check_same_shape(weight, gradient):
    if tuple(weight.shape) != tuple(gradient.shape):
        raise DimensionMismatch(weight.shape, gradient.shape)


def _as_float(W):
    # integer weights are promoted so |W|^p cannot overflow
    if np.issubdtype(W.dtype, np.floating):
        return W
    return W.astype(backend.DTYPE)


def lp_gradient(weight, power, factor=1.0, out=None):
    """
    Gradient of `factor * sum(|W|^power)` with respect to W.

    - power == 1: factor * sign(W), with sign(0) = 0
    - power == 2: factor * 2 * W
    - power > 2:  factor * power * sign(W) * |W|^(power-1)

    Args:
        weight: array-like weight matrix.
        power (int): regularizer power (>= 1).
        factor (float): regularization strength.
        out: optional floating-point array to overwrite with the result; must
            match the weight shape.

    Returns:
        The gradient array (`out` when given).
    """
    xp = backend.xp
    W = _as_float(as_array(weight))

    if power == 1:
        G = factor * xp.sign(W)
    elif power == 2:
        G = factor * 2 * W
    else:
        G = factor * power * xp.sign(W) * xp.abs(W) ** (power - 1)

    if out is None:
        return xp.asarray(G, dtype=W.dtype)

    dst = writable_array(out)
    check_same_shape(W, dst)
    dst[...] = G
    return out


def lp_loss(weight, power, factor=1.0):
    """Penalty value factor * sum(|W|^power) as a Python float."""
    xp = backend.xp
    W = _as_float(as_array(weight))
    if power == 2:
        total = xp.sum(W * W)
    else:
        total = xp.sum(xp.abs(W) ** power)
    return float(factor * total)


def lp_backward(dW, weight, power, factor=1.0):
    """Add the L_p gradient onto an existing gradient `dW` in place and return it."""
    dst = writable_array(dW)
    W = as_array(weight)
    check_same_shape(W, dst)
    dst += lp_gradient(W, power, factor).astype(dst.dtype, copy=False)
    return dW
