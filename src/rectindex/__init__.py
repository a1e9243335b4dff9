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
Static spatial indexing of axis-aligned rectangles.

Classically, R-trees are implemented as a container of node objects, each
pointing to its children. Here the tree is packed once, with the
Sort-Tile-Recurse algorithm, into arrays holding one level of nodes each.
Callers explore it through lightweight node handles.

Example:
    >>> index = from_bounds([0, 2], [0, 0], [1, 3], [1, 1])
    >>> index.root().child_ids()
    [0, 1]
"""
from .envelope import AABB, AABBVect, Point  # noqa: F401
from .errors import InvalidGeometry, InvalidInput, RectIndexError  # noqa: F401
from .nodes import Leaf, ParentNode  # noqa: F401
from .params import IndexParams, make_params  # noqa: F401
from .str import sort_tile_recurse  # noqa: F401
from .tree import SpatialIndex, build, from_bounds  # noqa: F401

__version__ = "0.3.0"
