import numpy as np
import pytest

from neuquant.constants import CUT_NET_SIZE, NET_SIZE, SPECIALS
from neuquant.network import init_network


def test_init_shapes():
    state = init_network()
    assert state.network.shape == (NET_SIZE, 3)
    assert state.freq.shape == (NET_SIZE,)
    assert state.bias.shape == (NET_SIZE,)
    assert state.size == 256


def test_init_reserved_colours():
    state = init_network()
    assert state.network[0].tolist() == [0.0, 0.0, 0.0]
    assert state.network[1].tolist() == [255.0, 255.0, 255.0]


def test_init_grey_ramp():
    state = init_network()
    assert state.network[SPECIALS].tolist() == [0.0, 0.0, 0.0]
    assert state.network[NET_SIZE - 1, 0] == pytest.approx(255.0 * 252 / 253)
    for i in (3, 50, 128, 200, 255):
        expected = (255.0 * (i - SPECIALS)) / CUT_NET_SIZE
        assert state.network[i].tolist() == [expected] * 3
    assert np.all(np.diff(state.network[SPECIALS:, 1]) > 0)


def test_init_frequency_and_bias():
    state = init_network()
    assert np.all(state.freq == 1.0 / 256.0)
    assert np.all(state.bias == 0.0)
    assert state.freq.sum() == pytest.approx(1.0)


def test_init_returns_independent_states():
    a = init_network()
    b = init_network()
    a.network[10] = 99.0
    assert b.network[10, 0] != 99.0
