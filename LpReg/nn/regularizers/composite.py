import LpReg.backend.backend as backend
from LpReg.nn.regularizers import BaseRegularizer
from LpReg.nn.regularizers.regularization import as_array


class CompositeRegularizer(BaseRegularizer):
    """
    Combines multiple regularizers into a single one.

    The gradient is the sum of the component gradients and the loss is
    the sum of the component losses.

    Example:
        reg = L1Regularizer(1e-4) + L2Regularizer(1e-4)
        reg.evaluate(W, dW)
    """
    def __init__(self, regularizers):
        self.regularizers = []

        # Flatten nested composites
        for r in regularizers:
            if isinstance(r, CompositeRegularizer):
                self.regularizers.extend(r.regularizers)
            else:
                self.regularizers.append(r)
        self.regularizers = tuple(self.regularizers)

    def gradient(self, weight):
        """Sum all component gradients for a weight array."""
        W = as_array(weight)
        total = None

        for r in self.regularizers:
            g = r.gradient(W)
            if total is None:
                total = g
            else:
                total = total + g

        if total is None:
            return backend.xp.zeros(W.shape, dtype=backend.DTYPE)
        return total

    def loss(self, weight):
        """Sum all component losses for a weight array."""
        return sum((r.loss(weight) for r in self.regularizers), 0.0)

    def get_config(self):
        from LpReg.nn.serialization import to_dict
        return {"regularizers": [to_dict(r) for r in self.regularizers]}

    @classmethod
    def from_config(cls, cfg):
        from LpReg.nn.serialization import from_dict
        return cls([from_dict(d) for d in cfg.get("regularizers", [])])

    def __len__(self):
        return len(self.regularizers)

    def __iter__(self):
        return iter(self.regularizers)
