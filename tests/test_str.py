import logging

import numpy
import pytest

from rectindex import AABBVect, InvalidInput
from rectindex import str as packing


@pytest.fixture
def grid_centers():
    # 4x2 grid of points given in scrambled order
    return numpy.array([(3, 1), (0, 0), (2, 0), (1, 1),
                        (0, 1), (3, 0), (1, 0), (2, 1)], dtype=float)


def points(centers):
    centers = numpy.asarray(centers, dtype=float)
    return AABBVect.from_array(numpy.hstack([centers, centers]))


def test_split_bounds():
    assert packing._split_bounds(0, 10, 3).tolist() == [0, 4, 7, 10]
    assert packing._split_bounds(4, 8, 2).tolist() == [4, 6, 8]
    assert packing._split_bounds(0, 3, 3).tolist() == [0, 1, 2, 3]


def test_sort_tile_single_page(grid_centers):
    order, starts = packing.sort_tile(grid_centers, page_size=8)
    assert order.tolist() == list(range(8))
    assert starts.tolist() == [0]


def test_sort_tile_slices_then_pages(grid_centers):
    order, starts = packing.sort_tile(grid_centers, page_size=2)
    # Two vertical slices (x <= 1 and x >= 2), each sorted by y.
    assert order.tolist() == [1, 6, 3, 4, 2, 5, 0, 7]
    assert starts.tolist() == [0, 2, 4, 6]


def test_sort_tile_ties_keep_input_order():
    centers = numpy.zeros((36, 2))
    order, starts = packing.sort_tile(centers, page_size=4)
    assert order.tolist() == list(range(36))
    assert starts.tolist() == list(range(0, 36, 4))


def test_sort_tile_pages_are_balanced():
    centers = numpy.random.default_rng(3).uniform(size=(1000, 2))
    order, starts = packing.sort_tile(centers, page_size=16)
    sizes = numpy.diff(numpy.append(starts, len(centers)))
    assert sorted(order.tolist()) == list(range(1000))
    assert sizes.max() <= 16
    assert sizes.min() >= 8


def test_sort_tile_recurse_levels(grid_centers):
    arena = packing.sort_tile_recurse(points(grid_centers), page_size=2)
    assert arena.size == 8
    assert arena.height == 3
    assert [len(level.spans) for level in arena.levels] == [4, 2, 1]
    assert arena.ids.tolist() == [1, 6, 3, 4, 2, 5, 0, 7]
    assert arena.node_count == 7
    assert arena.span(3, 0) == (0, 2)
    assert arena.envelope(3, 0) == ((0., 0.), (3., 1.))


def test_sort_tile_recurse_custom_ids():
    boxes = points([(0, 0), (5, 5), (1, 1)])
    arena = packing.sort_tile_recurse(boxes, ids=[30, 10, 20])
    assert arena.ids.tolist() == [30, 10, 20]


@pytest.mark.parametrize("ids", [[0, 1], [0.5, 1, 2], [[0], [1], [2]]])
def test_sort_tile_recurse_invalid_ids(ids):
    with pytest.raises(InvalidInput):
        packing.sort_tile_recurse(points([(0, 0), (1, 1), (2, 2)]), ids=ids)


def test_sort_tile_recurse_invalid_page_size():
    with pytest.raises(InvalidInput):
        packing.sort_tile_recurse(points([(0, 0)]), page_size=1)


def test_sort_tile_recurse_empty():
    arena = packing.sort_tile_recurse(points(numpy.zeros((0, 2))))
    assert arena.size == 0
    assert arena.height == 1
    assert arena.span(1, 0) == (0, 0)
    assert arena.envelope(1, 0) is None


def test_sort_tile_recurse_freezes_arrays():
    boxes = points(numpy.random.default_rng(0).uniform(size=(50, 2)))
    arena = packing.sort_tile_recurse(boxes, page_size=4)
    assert not arena.leaves.mins.flags.writeable
    assert not arena.ids.flags.writeable
    assert all(not level.spans.flags.writeable for level in arena.levels)
    # The input batch is left untouched.
    assert boxes.mins.flags.writeable


def test_sort_tile_recurse_logs_summary(caplog):
    boxes = points(numpy.random.default_rng(1).uniform(size=(100, 2)))
    with caplog.at_level(logging.DEBUG, logger="rectindex.str"):
        packing.sort_tile_recurse(boxes, page_size=10)
    assert "Packed 100 boxes into 3 levels of 15 nodes" in caplog.text
