# Copyright (C) 2018 DataStorm
#
# This file is part of RectIndex.
#
# RectIndex is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# RectIndex is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# A copy of the GNU General Public License is available in the LICENSE
# file or at <http://www.gnu.org/licenses/>.
"""
STR-Tree packing algorithm

Sort-Tile-Recurse tree packing algorithm is simple and efficient. Entries are
sorted by the x coordinate of their centers and cut into vertical slices,
each slice is sorted by the y coordinate and cut into pages, and every page
becomes a node of the next level. The procedure is repeated on the nodes
until a single root remains.

Whole levels are sorted and merged at once with numpy.
"""
import logging
import math
import time

import numpy
import toolz

from . import nodes
from .errors import InvalidInput
from .params import DEFAULT_MAX_CHILDREN, make_params


logger = logging.getLogger(__name__)


def _split_bounds(start, stop, parts):
    """
    Bounds of `parts` contiguous chunks of near-equal sizes.

    The first `(stop - start) % parts` chunks hold one more element.

    Returns:
        int array: `parts + 1` increasing offsets from `start` to `stop`.
    """
    q, r = divmod(stop - start, parts)
    sizes = numpy.full(parts, q, dtype=numpy.intp)
    sizes[:r] += 1
    return start + numpy.concatenate([[0], sizes.cumsum()]).astype(numpy.intp)


def sort_tile(centers, page_size):
    """
    Sort and tile one level of entries.

    Args:
        centers (array): Nx2 array of the entries' box centers.
        page_size (int): maximum number of entries per page.

    Returns:
        (order, starts): the permutation putting the entries in packed order,
        and the start offsets of the pages in that order.
    """
    nobs = len(centers)
    if nobs <= page_size:
        return (numpy.arange(nobs, dtype=numpy.intp),
                numpy.zeros(1, dtype=numpy.intp))
    nb_slices = math.ceil(math.sqrt(nobs / page_size))
    # Stable sorts: ties keep their position on the level.
    argx = numpy.argsort(centers[:, 0], kind='stable')
    slice_bounds = _split_bounds(0, nobs, nb_slices)
    slice_of = numpy.repeat(numpy.arange(nb_slices), numpy.diff(slice_bounds))
    order = argx[numpy.lexsort((argx, centers[argx, 1], slice_of))]
    starts = numpy.fromiter(
        toolz.concat(
            _split_bounds(lo, hi, math.ceil((hi - lo) / page_size))[:-1]
            for lo, hi in toolz.sliding_window(2, slice_bounds)
        ),
        dtype=numpy.intp,
    )
    return order, starts


def _as_ids(ids, nobs):
    if ids is None:
        return numpy.arange(nobs, dtype=numpy.int64)
    ids = numpy.asarray(ids)
    if ids.size == 0:
        ids = ids.astype(numpy.int64)
    if ids.ndim != 1 or ids.dtype.kind not in 'iu':
        raise InvalidInput("Leaf ids must be a flat sequence of integers")
    if len(ids) != nobs:
        raise InvalidInput(
            "Got {} ids for {} boxes".format(len(ids), nobs))
    return ids


def sort_tile_recurse(egeoms, ids=None, page_size=DEFAULT_MAX_CHILDREN,
                      min_page_size=None):
    """
    Pack boxes into a tree with the Sort-Tile-Recurse algorithm.

    Parameters:
        egeoms (AABBVect): the leaf boxes.
        ids (int sequence, optional): caller identifier of each box.
            Defaults to the positions `0..n-1`.
        page_size (int, optional): maximum number of children per node.
        min_page_size (int, optional): minimum number of children per
            non-root node. Defaults to `page_size // 2`.

    Returns:
        NodeArena: the frozen tree. An empty input gives a root without
        children.
    """
    params = make_params(page_size, min_page_size)
    ids = _as_ids(ids, len(egeoms))
    t1 = time.perf_counter()
    if len(egeoms) == 0:
        return nodes.NodeArena.empty(egeoms.take(ids), ids.copy())

    envel = egeoms
    leaves = None
    levels = []
    while True:
        order, starts = sort_tile(envel.centers, params.max_children)
        envel = envel.take(order)
        if leaves is None:
            leaves, ids = envel, ids[order]
        else:
            # Children spans travel along with their node.
            levels[-1] = nodes.Level(envel, levels[-1].spans[order])
        spans = numpy.column_stack(
            [starts, numpy.append(starts[1:], len(envel))])
        envel = envel.mergeby(starts)
        levels.append(nodes.Level(envel, spans))
        if len(envel) == 1:
            break

    arena = nodes.NodeArena(leaves, ids, levels).freeze()
    t2 = time.perf_counter()
    logger.debug(
        "Packed %d boxes into %d levels of %d nodes in %.4fs",
        arena.size, arena.height, arena.node_count, t2 - t1,
    )
    return arena
