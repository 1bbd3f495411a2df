import LpReg.backend.backend as backend
from LpReg.errors import InvalidConfiguration
from LpReg.nn import Stateful
from LpReg.nn.regularizers.regularization import (
    as_array, writable_array, check_same_shape
)


class BaseRegularizer(Stateful):
    """
    Base class for all weight regularizers.

    A regularizer is an immutable value: everything it needs is fixed at
    construction, and every method is a pure function of its arguments.

    Methods:
        evaluate(weight, gradient):
            Overwrite `gradient` with the regularization gradient of `weight`.
        gradient(weight):
            Return the regularization gradient as a new array.
        accumulate(weight, gradient):
            Add the regularization gradient onto `gradient` in place.
        loss(weight):
            Penalty value for a single weight array.
        __call__(weights):
            Total penalty across one weight array or an iterable of them.
    """

    def gradient(self, weight):
        """Override in subclass."""
        W = as_array(weight)
        return backend.xp.zeros(W.shape, dtype=backend.DTYPE)

    def loss(self, weight):
        """Override in subclass."""
        return 0.0

    def evaluate(self, weight, gradient):
        """
        Overwrite `gradient` with this regularizer's gradient for `weight`.

        Args:
            weight: array-like weight matrix (read only).
            gradient: ndarray (or tensor exposing one as `.data`) with the
                same shape as `weight`; its contents are replaced.

        Returns:
            `gradient`, for chaining.

        Raises:
            DimensionMismatch: if the shapes differ. Nothing is written.
        """
        W = as_array(weight)
        dst = writable_array(gradient)
        check_same_shape(W, dst)
        dst[...] = self.gradient(W)
        return gradient

    def accumulate(self, weight, gradient):
        """Add this regularizer's gradient for `weight` onto `gradient` in place."""
        W = as_array(weight)
        dst = writable_array(gradient)
        check_same_shape(W, dst)
        dst += self.gradient(W).astype(dst.dtype, copy=False)
        return gradient

    def __call__(self, weights):
        """
        Compute the total penalty across weights.

        Args:
            weights: a single array, or an iterable of arrays / parameters.

        Returns:
            float: summed penalty (0.0 for an empty iterable).
        """
        if isinstance(weights, backend.array_types()) or hasattr(weights, "data"):
            return self.loss(weights)
        return sum((self.loss(w) for w in weights), 0.0)

    def load_state_dict(self, state):
        """
        Check that an archived state describes this regularizer.

        Regularizers are immutable, so restoring state only validates it;
        build a new instance with `from_config` to change settings.
        """
        expected = self.state_dict()
        cls_name = state.get("class", expected["class"])
        if cls_name != expected["class"]:
            raise InvalidConfiguration(
                f"state for {cls_name} cannot be loaded into {expected['class']}"
            )
        for key, value in expected.items():
            if key != "class" and key in state and state[key] != value:
                raise InvalidConfiguration(
                    f"state has {key}={state[key]!r} but regularizer has {key}={value!r}"
                )

    def __add__(self, other):
        from LpReg.nn.regularizers import CompositeRegularizer
        return CompositeRegularizer([self, other])

    def __or__(self, other):
        return self.__add__(other)

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.get_config() == other.get_config()

    def __hash__(self):
        return hash((type(self).__name__, repr(sorted(self.get_config().items()))))

    def __repr__(self):
        args = ", ".join(f"{k}={v!r}" for k, v in self.get_config().items())
        return f"{type(self).__name__}({args})"
