import math

import numpy as np
import pytest

from tradelab.random_sample import PI, reseed
from tradelab.stochastic_volatility import StochasticVolatility


def test_probability_peak_at_zero():
    model = StochasticVolatility(1.0)
    assert model.probability([0.0], [0.0]) == pytest.approx(1 / (2 * PI))


def test_probability_symmetric_in_observation():
    model = StochasticVolatility(0.7)
    assert model.probability([0.4], [0.3]) == pytest.approx(
        model.probability([-0.4], [0.3])
    )


def test_probability_decreases_away_from_zero():
    model = StochasticVolatility(1.5)
    values = [model.probability([x], [0.2]) for x in (0.0, 0.5, 1.0, 2.0)]
    assert values == sorted(values, reverse=True)


def test_mutate_scales_with_hidden_state():
    model = StochasticVolatility(1.0)
    reseed(7)
    base = model.mutate([0.0])
    reseed(7)
    scaled = model.mutate([2.0])
    assert scaled[0] == pytest.approx(base[0] * math.e)


def test_mutate_zero_coefficient_is_zero():
    model = StochasticVolatility(0.0)
    assert model.mutate([1.0])[0] == 0.0


def test_mutate_sample_spread():
    reseed(11)
    model = StochasticVolatility(2.0)
    samples = np.array([model.mutate([0.0])[0] for _ in range(20000)])
    assert samples.std() == pytest.approx(2.0, abs=0.05)
    assert abs(samples.mean()) < 0.1