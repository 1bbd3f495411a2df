from LpReg.nn.regularizers.composite import CompositeRegularizer
from LpReg.nn.regularizers.lregularizer import L1Regularizer, L2Regularizer


class ElasticNet(CompositeRegularizer):
    """
    Combined L1 + L2 regularization (Elastic Net).

    Loss = l1 * ||W||₁ + l2 * ||W||₂²
    Gradient = l1 * sign(W) + 2 * l2 * W
    """
    def __init__(self, l1=1.0, l2=1.0):
        self.l1 = L1Regularizer(l1)
        self.l2 = L2Regularizer(l2)
        super().__init__([self.l1, self.l2])

    def get_config(self):
        return {"l1": self.l1.factor, "l2": self.l2.factor}

    @classmethod
    def from_config(cls, cfg):
        return cls(**cfg)
