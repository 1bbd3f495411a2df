from .reg_logger import RegLogger

__all__ = [
    "RegLogger"
]
