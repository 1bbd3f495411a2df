class precision_scope:
    """
    Temporarily change the default floating-point precision (dtype) inside a `with` block.

    Affects the dtype of gradient arrays the regularizers allocate for
    integer weights.

    Args:
        dtype (str or dtype): Precision to use ("float16", "float32", "float64", xp.float32, etc.)
    """
    def __init__(self, dtype="float32"):
        import numpy as np
        if isinstance(dtype, str):
            dtype_map = {
                "float16": np.float16,
                "float32": np.float32,
                "float64": np.float64,
            }
            if dtype not in dtype_map:
                raise ValueError(f"Unsupported dtype '{dtype}'. Use one of: {list(dtype_map.keys())}")
            self.new_dtype = dtype_map[dtype]
        else:
            self.new_dtype = np.dtype(dtype).type
            if not np.issubdtype(self.new_dtype, np.floating):
                raise ValueError(f"Unsupported dtype '{np.dtype(dtype).name}'. Use a floating-point dtype")

    def __enter__(self):
        import LpReg.backend.backend as backend
        self.prev_dtype = backend.DTYPE
        backend.DTYPE = self.new_dtype
        return backend.DTYPE

    def __exit__(self, exc_type, exc_value, tb):
        import LpReg.backend.backend as backend
        backend.DTYPE = self.prev_dtype


class device_scope:
    """
    Temporarily switch the array backend to "cpu" or "gpu" inside a `with` block.

    Args:
        device (str): "cpu" or "gpu".
    """
    def __init__(self, device="cpu"):
        if device.lower() not in ("cpu", "gpu"):
            raise ValueError(f"Invalid device '{device}'. Must be 'cpu' or 'gpu'")
        self.device = device.lower()

    def __enter__(self):
        import LpReg.backend.backend as backend
        self.prev_device = backend.USING

        if self.device == "gpu":
            if not backend.gpu_available():
                raise RuntimeError("GPU not available.")
            backend.use_gpu()
        else:
            backend.use_cpu()
        return backend.xp

    def __exit__(self, exc_type, exc_value, tb):
        import LpReg.backend.backend as backend
        if self.prev_device == "gpu":
            backend.use_gpu()
        else:
            backend.use_cpu()
