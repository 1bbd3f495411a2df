from .config import CONFIG
from .backend import gpu_available
from .backend import is_gpu
from .backend import device_name
from .backend import get_device
from .backend import use_gpu
from .backend import use_cpu
from .backend import set_seed
from .backend import set_dtype
from .context import precision_scope
from .context import device_scope

__all__ = [
    "CONFIG",
    "gpu_available",
    "is_gpu",
    "device_name",
    "get_device",
    "use_gpu",
    "use_cpu",
    "set_seed",
    "set_dtype",
    "precision_scope",
    "device_scope"
]
