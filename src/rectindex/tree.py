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
Static spatial index over axis-aligned rectangles.
"""
import numpy

from . import str
from .envelope import AABB, AABBVect
from .errors import InvalidInput
from .nodes import Leaf, ParentNode
from .params import DEFAULT_MAX_CHILDREN, make_params


class SpatialIndex():
    """
    R-Tree of rectangles packed once with the Sort-Tile-Recurse algorithm.

    The index has no insertion, deletion or query operators. It is explored
    from :meth:`root`, and since the envelope of every node bounds all of its
    descendants, a spatial search amounts to skipping the children whose
    envelope misses the searched region.

    Once built the tree is immutable and can be read from several threads.

    Args:
        arena: value of the arena attribute.
        params: value of the params attribute.

    Attributes:
        arena (NodeArena): array storage of the nodes.
        params (IndexParams): branching bounds the tree was built with.
    """

    def __init__(self, arena, params):
        self.arena = arena
        self.params = params

    @classmethod
    def build(cls, entries, max_children=DEFAULT_MAX_CHILDREN,
              min_children=None):
        """
        Build an index from leaf entries.

        Args:
            entries (iterable): `(bbox, id)` pairs, where `bbox` is an
                :class:`AABB` or a `(min_x, min_y, max_x, max_y)` sequence
                and `id` an integer, or :class:`Leaf` handles of another
                index.
            max_children (int, optional): Defaults to 16.
            min_children (int, optional): Defaults to `max_children // 2`.

        Raises:
            InvalidInput: on a malformed entry or invalid parameters.
            InvalidGeometry: on a box with non-finite coordinates.
        """
        params = make_params(max_children, min_children)
        bounds, ids = [], []
        for pos, entry in enumerate(entries):
            if isinstance(entry, Leaf):
                bbox, ident = entry.bbox(), entry.id()
            else:
                try:
                    bbox, ident = entry
                except (TypeError, ValueError) as exc:
                    raise InvalidInput(
                        "Entry {} is not a (bbox, id) pair: {!r}"
                        .format(pos, entry)
                    ) from exc
                if not isinstance(bbox, AABB):
                    bbox = AABB.from_bounds(bbox)
            bounds.append(bbox.bounds)
            ids.append(ident)
        boxes = AABBVect.from_array(numpy.array(bounds, dtype=numpy.float64))
        return cls(str.sort_tile_recurse(boxes, ids, *params), params)

    @classmethod
    def from_bounds(cls, min_x, min_y, max_x, max_y,
                    max_children=DEFAULT_MAX_CHILDREN, min_children=None):
        """
        Build an index from four parallel coordinate arrays.

        Rectangle `i` is described by entry `i` of every array and becomes a
        leaf with id `i`.

        Raises:
            InvalidInput: if the arrays differ in length or hold non-numbers.
            InvalidGeometry: if a coordinate is NaN or infinite.
        """
        params = make_params(max_children, min_children)
        boxes = AABBVect.from_bounds(min_x, min_y, max_x, max_y)
        return cls(str.sort_tile_recurse(boxes, None, *params), params)

    def __len__(self):
        """Returns the number of leaves."""
        return self.arena.size

    def __repr__(self):
        return "<{} size={} height={}>".format(
            self.__class__.__name__, len(self), self.height)

    @property
    def height(self):
        """Number of levels of parent nodes, 1 when the root holds leaves."""
        return self.arena.height

    @property
    def is_empty(self):
        return len(self) == 0

    def root(self):
        return ParentNode(self.arena, self.arena.height, 0)

    def walk(self):
        """Pre-order `(depth, node)` iteration over the whole tree."""
        return self.root().walk()

    def leaves(self):
        """Pre-order iteration over the leaves."""
        return self.root().leaves()


def build(entries, max_children=DEFAULT_MAX_CHILDREN, min_children=None):
    """Shorthand for :meth:`SpatialIndex.build`."""
    return SpatialIndex.build(entries, max_children, min_children)


def from_bounds(min_x, min_y, max_x, max_y,
                max_children=DEFAULT_MAX_CHILDREN, min_children=None):
    """Shorthand for :meth:`SpatialIndex.from_bounds`."""
    return SpatialIndex.from_bounds(min_x, min_y, max_x, max_y,
                                    max_children, min_children)
