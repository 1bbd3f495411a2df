import numpy as np
import pytest

from LpReg import DimensionMismatch, L1Regularizer, L2Regularizer
from LpReg.nn.regularizers import lp_gradient, lp_loss, lp_backward


def test_lp_gradient_returns_new_array(weight):
    G = lp_gradient(weight, 2, 0.5)
    assert G is not weight
    np.testing.assert_allclose(G, weight)


def test_lp_gradient_writes_into_out(weight):
    out = np.full_like(weight, 42.0)
    assert lp_gradient(weight, 1, 2.0, out=out) is out
    np.testing.assert_array_equal(out, 2.0 * np.sign(weight))


def test_lp_gradient_mismatched_out_is_untouched(weight):
    out = np.full((2, 2), 42.0)
    with pytest.raises(DimensionMismatch):
        lp_gradient(weight, 3, 1.0, out=out)
    np.testing.assert_array_equal(out, np.full((2, 2), 42.0))


def test_lp_gradient_scalar_weight():
    assert float(lp_gradient(-2.0, 3, 1.0)) == pytest.approx(-12.0)
    assert float(lp_gradient(0.0, 1, 1.0)) == 0.0


def test_lp_loss(weight):
    assert lp_loss(weight, 1, 0.5) == pytest.approx(0.5 * np.abs(weight).sum())
    assert lp_loss(weight, 2) == pytest.approx((weight ** 2).sum())
    assert lp_loss(weight, 3, 2.0) == pytest.approx(2.0 * (np.abs(weight) ** 3).sum())
    assert isinstance(lp_loss(weight, 2), float)


def test_lp_backward_adds_in_place(weight):
    dW = np.ones_like(weight)
    assert lp_backward(dW, weight, 2, 0.5) is dW
    np.testing.assert_allclose(dW, 1.0 + weight)


def test_lp_backward_checks_shape(weight):
    with pytest.raises(DimensionMismatch):
        lp_backward(np.ones((3, 2)), weight, 1)


@pytest.mark.parametrize("dtype", [np.int32, np.int64])
def test_integer_gradients_rejected(weight, dtype):
    G = np.zeros(weight.shape, dtype=dtype)
    with pytest.raises(TypeError):
        L1Regularizer(0.5).evaluate(weight, G)
    with pytest.raises(TypeError):
        L2Regularizer(0.5).accumulate(weight, G)
    with pytest.raises(TypeError):
        lp_gradient(weight, 1, 0.5, out=G)
    np.testing.assert_array_equal(G, np.zeros(weight.shape, dtype=dtype))
