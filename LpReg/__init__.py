from LpReg.errors import LpRegError
from LpReg.errors import InvalidConfiguration
from LpReg.errors import DimensionMismatch
from LpReg.nn.regularizers import BaseRegularizer
from LpReg.nn.regularizers import CompositeRegularizer
from LpReg.nn.regularizers import ElasticNet
from LpReg.nn.regularizers import LRegularizer
from LpReg.nn.regularizers import L1Regularizer
from LpReg.nn.regularizers import L2Regularizer
from LpReg.nn.serialization import save
from LpReg.nn.serialization import load
from LpReg.utils.loggers import RegLogger

__version__ = "0.1.0"

__all__ = [
    "LpRegError",
    "InvalidConfiguration",
    "DimensionMismatch",
    "BaseRegularizer",
    "CompositeRegularizer",
    "ElasticNet",
    "LRegularizer",
    "L1Regularizer",
    "L2Regularizer",
    "save",
    "load",
    "RegLogger"
]
