import numpy as np
import pytest

from neuquant.finalize import build_net_index, fix_network, round_to_colour_value
from neuquant.network import init_network


@pytest.mark.parametrize(
    "x, expected",
    [
        (0.0, 0),
        (0.49, 0),
        (0.5, 1),
        (127.4999, 127),
        (127.5, 128),
        (254.5, 255),
        (255.7, 255),
        (300.0, 255),
        (-0.4, 0),
        (-3.2, 0),
    ],
)
def test_round_to_colour_value(x, expected):
    assert round_to_colour_value(x) == expected


def test_fix_network_rounds_every_channel():
    state = init_network()
    state.network[7] = (12.5, -4.0, 260.2)
    cmap = fix_network(state)
    assert cmap.shape == (256, 3)
    assert cmap.dtype == np.int32
    assert cmap[0].tolist() == [0, 0, 0]
    assert cmap[1].tolist() == [255, 255, 255]
    assert cmap[4].tolist() == [1, 1, 1]  # 255/253
    assert cmap[7].tolist() == [13, 0, 255]
    assert cmap.min() >= 0 and cmap.max() <= 255


def test_build_net_index_distinct_greens():
    cmap = np.zeros((256, 3), dtype=np.int32)
    cmap[:, 1] = np.arange(255, -1, -1)
    cmap[:, 0] = np.arange(256)
    sorted_map, net_index = build_net_index(cmap)
    assert sorted_map[:, 1].tolist() == list(range(256))
    assert sorted_map[:, 0].tolist() == list(range(255, -1, -1))
    assert net_index.tolist() == list(range(256))


def test_build_net_index_does_not_mutate_input():
    rng = np.random.default_rng(3)
    cmap = rng.integers(0, 256, size=(256, 3)).astype(np.int32)
    original = cmap.copy()
    build_net_index(cmap)
    assert np.array_equal(cmap, original)


@pytest.mark.parametrize("seed, green_hi", [(0, 256), (1, 40), (2, 200), (5, 3)])
def test_build_net_index_properties(seed, green_hi):
    rng = np.random.default_rng(seed)
    cmap = rng.integers(0, 256, size=(256, 3)).astype(np.int32)
    cmap[:, 1] = rng.integers(green_hi // 4, green_hi, size=256)
    sorted_map, net_index = build_net_index(cmap)

    # rows move as whole triples
    assert sorted(map(tuple, sorted_map.tolist())) == sorted(map(tuple, cmap.tolist()))
    greens = sorted_map[:, 1]
    assert np.all(np.diff(greens) >= 0)

    assert net_index.shape == (256,)
    assert net_index.min() >= 0 and net_index.max() <= 255
    assert np.all(np.diff(net_index) >= 0)

    present = set(greens.tolist())
    top = int(greens.max())
    for v in range(256):
        pos = int(net_index[v])
        if v in present:
            assert greens[pos] == v
        elif v < top:
            assert greens[pos] > v
            assert pos == 0 or greens[pos - 1] < v
        else:
            assert pos == 255


def test_build_net_index_single_green():
    cmap = np.full((256, 3), 9, dtype=np.int32)
    sorted_map, net_index = build_net_index(cmap)
    assert np.array_equal(sorted_map, cmap)
    assert net_index[:9].tolist() == [0] * 9
    assert net_index[9] == (0 + 255) >> 1
    assert net_index[10:].tolist() == [255] * 246
