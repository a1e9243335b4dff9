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
Tree parameters.

The branching factor of a packed tree is bounded above by `max_children`
(the page size of the sort-tile-recurse loader) and below by
`min_children` for every node but the root.
"""
import collections
import numbers

from .errors import InvalidInput


DEFAULT_MAX_CHILDREN = 16

IndexParams = collections.namedtuple('IndexParams',
                                     'max_children min_children')


def make_params(max_children=DEFAULT_MAX_CHILDREN, min_children=None):
    """
    Validated :class:`IndexParams`.

    Args:
        max_children (int, optional): Maximum number of children per node.
            Defaults to 16.
        min_children (int, optional): Minimum number of children of non-root
            nodes. Defaults to `max_children // 2`, which is the largest
            value the loader can honour.

    Raises:
        InvalidInput: if the bounds are not integers or are inconsistent.
    """
    if isinstance(max_children, IndexParams):
        return make_params(*max_children)
    if not _is_int(max_children) or max_children < 2:
        raise InvalidInput(
            "max_children must be an integer >= 2, got {!r}"
            .format(max_children)
        )
    if min_children is None:
        min_children = max_children // 2
    if (not _is_int(min_children)
            or not 1 <= min_children <= max_children // 2):
        raise InvalidInput(
            "min_children must be an integer in [1, {}], got {!r}"
            .format(max_children // 2, min_children)
        )
    return IndexParams(int(max_children), int(min_children))


def _is_int(value):
    # bool is an Integral but never a sensible page size
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)
