import numpy as np
import pytest

from LpReg import (
    CompositeRegularizer, ElasticNet, LRegularizer, L1Regularizer, L2Regularizer,
    DimensionMismatch
)


def test_add_builds_composite(weight):
    reg = L1Regularizer(0.1) + L2Regularizer(0.2)

    assert isinstance(reg, CompositeRegularizer)
    assert len(reg) == 2
    np.testing.assert_allclose(
        reg.gradient(weight), 0.1 * np.sign(weight) + 0.4 * weight
    )


def test_or_is_an_alias_for_add():
    a, b = L1Regularizer(), L2Regularizer()
    assert (a | b) == (a + b)


def test_nested_composites_are_flattened():
    reg = (L1Regularizer() + L2Regularizer()) + LRegularizer(3)
    assert [type(r) for r in reg] == [L1Regularizer, L2Regularizer, LRegularizer]


def test_composite_evaluate_overwrites(weight):
    reg = CompositeRegularizer([L1Regularizer(1.0), L1Regularizer(2.0)])
    G = np.full_like(weight, -9.0)

    reg.evaluate(weight, G)

    np.testing.assert_allclose(G, 3.0 * np.sign(weight))


def test_composite_loss_is_sum(weight):
    parts = [L1Regularizer(0.3), LRegularizer(4, 0.1)]
    reg = CompositeRegularizer(parts)
    assert reg.loss(weight) == pytest.approx(sum(p.loss(weight) for p in parts))


def test_empty_composite_writes_zeros(weight):
    G = np.ones_like(weight)
    CompositeRegularizer([]).evaluate(weight, G)
    np.testing.assert_array_equal(G, np.zeros_like(weight))
    assert CompositeRegularizer([]).loss(weight) == 0.0


def test_composite_checks_shape():
    with pytest.raises(DimensionMismatch):
        (L1Regularizer() + L2Regularizer()).evaluate(np.ones((1, 3)), np.ones((1, 2)))


def test_elasticnet(weight):
    reg = ElasticNet(l1=0.5, l2=0.25)
    G = np.zeros_like(weight)

    reg.evaluate(weight, G)

    np.testing.assert_allclose(G, 0.5 * np.sign(weight) + 0.5 * weight)
    assert reg.loss(weight) == pytest.approx(
        0.5 * np.abs(weight).sum() + 0.25 * (weight ** 2).sum()
    )
    assert reg.get_config() == {"l1": 0.5, "l2": 0.25}


def test_elasticnet_accumulate(weight):
    dW = np.ones_like(weight)
    ElasticNet(1.0, 1.0).accumulate(weight, dW)
    np.testing.assert_allclose(dW, 1.0 + np.sign(weight) + 2 * weight)
