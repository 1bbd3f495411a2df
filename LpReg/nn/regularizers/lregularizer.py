from LpReg.nn.regularizers import BaseRegularizer
from LpReg.nn.regularizers.regularization import (
    validate_power, validate_factor, lp_gradient, lp_loss, lp_backward
)


class LRegularizer(BaseRegularizer):
    """
    L_p regularization for an arbitrary integer power p.

    Penalty: factor * sum(|W|^p). The gradient written by `evaluate` is
    factor * p * sign(W) * |W|^(p-1), which reduces to factor * sign(W)
    for p = 1 (sign(0) = 0) and factor * 2 * W for p = 2.

    Args:
        power (int): power of the norm, >= 1.
        factor (float): regularization strength (default: 1.0).

    Raises:
        InvalidConfiguration: if power is not a positive integer or factor is not real.
    """
    POWER = None

    def __init__(self, power, factor=1.0):
        self._power = validate_power(power)
        self._factor = validate_factor(factor)

    @property
    def power(self):
        return self._power

    @property
    def factor(self):
        return self._factor

    def gradient(self, weight):
        return lp_gradient(weight, self._power, self._factor)

    def evaluate(self, weight, gradient):
        return lp_gradient(weight, self._power, self._factor, out=gradient)

    def accumulate(self, weight, gradient):
        return lp_backward(gradient, weight, self._power, self._factor)

    def loss(self, weight):
        """Compute factor * sum(|W|^p) for a single weight array."""
        return lp_loss(weight, self._power, self._factor)

    def get_config(self):
        return {"power": self._power, "factor": self._factor}


class L1Regularizer(LRegularizer):
    """
    L1 Regularization.

    Gradient: factor * sign(W), zero where W is exactly zero.

    Args:
        factor (float): Regularization strength (default: 1.0)
    """
    POWER = 1

    def __init__(self, factor=1.0):
        super().__init__(self.POWER, factor)

    def get_config(self):
        return {"factor": self._factor}


class L2Regularizer(LRegularizer):
    """
    L2 Regularization (Weight Decay).

    Penalty factor * ||W||², gradient factor * 2 * W.

    Args:
        factor (float): Regularization strength (default: 1.0)
    """
    POWER = 2

    def __init__(self, factor=1.0):
        super().__init__(self.POWER, factor)

    def get_config(self):
        return {"factor": self._factor}
