"""
Backend runtime selector for LpReg.

- Single import point for the array backend (`xp`) and dtype.
- Toggle CPU (NumPy) / GPU (CuPy).
- Global-access pattern:
    >>> import LpReg.backend.backend as backend
    >>> xp = backend.xp
    >>> DTYPE = backend.DTYPE

Regularizers look up `backend.xp` at call time, so switching devices
takes effect immediately.
"""

from __future__ import annotations

import numpy as _np
from LpReg.backend.config import CONFIG


# ---------------------------
# Optional GPU backend (CuPy)
# ---------------------------
try:
    import cupy as _cp
    _CUPY_AVAILABLE = True
except ImportError:
    _cp = None
    _CUPY_AVAILABLE = False


# ---------------------------
# Public runtime state (globals)
# ---------------------------
xp = _np                       # current array module (NumPy or CuPy)
USING = "cpu"                  # "cpu" | "gpu"
SEED = CONFIG.get("seed", 997)

DTYPE = _np.float32            # default dtype for new gradient arrays

_DTYPE_NAMES = {"float16": _np.float16, "float32": _np.float32, "float64": _np.float64}


# ===========================
# Introspection / utilities
# ===========================
def gpu_available() -> bool:
    """Return True if CuPy is importable."""
    return _CUPY_AVAILABLE


def is_gpu() -> bool:
    """Return True if current backend is GPU (CuPy)."""
    return USING == "gpu"


def device_name() -> str:
    """Human-readable device name."""
    if is_gpu() and _cp is not None:
        try:
            dev_id = _cp.cuda.Device().id
            props = _cp.cuda.runtime.getDeviceProperties(dev_id)
            name = props.get("name", b"GPU").decode(errors="ignore")
            return f"GPU:{dev_id} ({name})"
        except _cp.cuda.runtime.CUDARuntimeError:
            return "GPU (CuPy)"
    return "CPU (NumPy)"


def get_device() -> str:
    """Return current device string: 'cpu' or 'gpu'."""
    return USING


def array_types() -> tuple:
    """ndarray classes accepted as weight/gradient storage."""
    if _cp is not None:
        return (_np.ndarray, _cp.ndarray)
    return (_np.ndarray,)


# ===========================
# Backend switching
# ===========================
def _set_globals_for_numpy():
    global xp, USING, DTYPE
    xp = _np
    USING = "cpu"
    DTYPE = _np.dtype(DTYPE).type


def _set_globals_for_cupy():
    global xp, USING, DTYPE
    xp = _cp
    USING = "gpu"
    # dtypes are shared between NumPy and CuPy
    DTYPE = _np.dtype(DTYPE).type


def _auto_select_device():
    device = str(CONFIG.get("device", "cpu")).lower()
    if device == "gpu" and _CUPY_AVAILABLE:
        use_gpu()
    else:
        use_cpu()


def _set_default_dtype():
    global DTYPE
    dtype_str = CONFIG.get("dtype", "float32")
    if dtype_str not in _DTYPE_NAMES:
        raise ValueError(f"Unsupported dtype '{dtype_str}'. Use one of: {list(_DTYPE_NAMES)}")
    DTYPE = _DTYPE_NAMES[dtype_str]


def use_gpu():
    """
    Switch backend to GPU (CuPy).
    Raises ImportError if CuPy is not available.
    """
    if not _CUPY_AVAILABLE:
        raise ImportError("CuPy is not installed. Run `pip install cupy` to use GPU.")
    _set_globals_for_cupy()
    _cp.random.seed(SEED)
    print(f"[LpReg] Using {device_name()}")


def use_cpu():
    """Switch backend to CPU (NumPy)."""
    _set_globals_for_numpy()
    _np.random.seed(SEED)
    print(f"[LpReg] Using {device_name()}")


# ===========================
# Runtime configuration
# ===========================
def set_seed(seed: int):
    """Set RNG seed for both NumPy and CuPy (if present)."""
    global SEED
    SEED = int(seed)
    _np.random.seed(SEED)
    if _CUPY_AVAILABLE:
        _cp.random.seed(SEED)


def set_dtype(dtype: str = "float32"):
    """Set DTYPE to float16, float32 or float64."""
    global DTYPE
    if dtype not in _DTYPE_NAMES:
        raise ValueError(f"dtype must be one of {list(_DTYPE_NAMES)}")
    DTYPE = _DTYPE_NAMES[dtype]


_set_default_dtype()
_auto_select_device()
