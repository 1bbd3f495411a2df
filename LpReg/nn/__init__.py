from .stateful import Stateful
from . import serialization

__all__ = [
    "Stateful",
    "serialization"
]
