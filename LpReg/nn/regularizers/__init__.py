from .base_regularizer import BaseRegularizer

from .composite import CompositeRegularizer
from .elasticnet import ElasticNet
from .lregularizer import LRegularizer
from .lregularizer import L1Regularizer
from .lregularizer import L2Regularizer
from .regularization import lp_gradient
from .regularization import lp_loss
from .regularization import lp_backward

__all__ = [
    "BaseRegularizer",
    "CompositeRegularizer",
    "ElasticNet",
    "LRegularizer",
    "L1Regularizer",
    "L2Regularizer",
    "lp_gradient",
    "lp_loss",
    "lp_backward"
]
