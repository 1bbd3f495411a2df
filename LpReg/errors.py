class LpRegError(Exception):
    """Base class for errors raised by LpReg."""


class InvalidConfiguration(LpRegError, ValueError):
    """A regularizer was built (or restored) with unusable settings."""


class DimensionMismatch(LpRegError, ValueError):
    """Weight and gradient arrays do not have the same shape."""

    def __init__(self, weight_shape, gradient_shape):
        self.weight_shape = tuple(weight_shape)
        self.gradient_shape = tuple(gradient_shape)
        super().__init__(
            f"gradient shape {self.gradient_shape} does not match "
            f"weight shape {self.weight_shape}"
        )
