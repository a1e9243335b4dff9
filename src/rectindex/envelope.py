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
Axis-aligned bounding boxes.

Two representations are provided. :class:`AABB` is a single immutable box,
the value handed out to callers traversing a tree. :class:`AABBVect` is a
batch of boxes stored as `mins` and `maxs` arrays, so that packing
algorithms can sort and merge whole tree levels at once.

Both share the same validation policy: a coordinate that is NaN or infinite
is an error, while corners given in the wrong order are swapped per axis.
Degenerate boxes (segments and points) are valid.
"""
import collections
import logging
import math

import numpy

from .errors import InvalidGeometry, InvalidInput


logger = logging.getLogger(__name__)

Point = collections.namedtuple('Point', 'x y')


class AABB(collections.namedtuple('AABB', 'lower upper')):
    """
    Axis-aligned bounding box given by its lower-left and upper-right corners.

    Being a named tuple of :class:`Point`, a box compares equal to the plain
    nested tuple of its corners, e.g. `((0., 0.), (1., 1.))`.
    """
    __slots__ = ()

    @classmethod
    def from_corners(cls, ll, ur):
        """
        Box from two corners, swapping coordinates of inverted corners.

        Raises:
            InvalidGeometry: if a corner is not a pair of finite numbers.
        """
        try:
            x0, y0 = (float(c) for c in ll)
            x1, y1 = (float(c) for c in ur)
        except (TypeError, ValueError) as exc:
            raise InvalidGeometry(
                "Corners must be pairs of numbers, got {!r} and {!r}"
                .format(ll, ur)
            ) from exc
        if not all(math.isfinite(c) for c in (x0, y0, x1, y1)):
            raise InvalidGeometry(
                "Non-finite corner coordinates {!r} and {!r}".format(ll, ur))
        return cls(Point(min(x0, x1), min(y0, y1)),
                   Point(max(x0, x1), max(y0, y1)))

    @classmethod
    def from_bounds(cls, bounds):
        """Box from a `(min_x, min_y, max_x, max_y)` sequence."""
        try:
            min_x, min_y, max_x, max_y = bounds
        except (TypeError, ValueError) as exc:
            raise InvalidGeometry(
                "Bounds must be (min_x, min_y, max_x, max_y), got {!r}"
                .format(bounds)
            ) from exc
        return cls.from_corners((min_x, min_y), (max_x, max_y))

    @classmethod
    def merge(cls, collection):
        """Smallest box enclosing every box of a non-empty collection."""
        arr = numpy.array([b.bounds for b in collection],
                          dtype=numpy.float64).reshape(-1, 4)
        if len(arr) == 0:
            raise InvalidInput("Cannot merge an empty collection of boxes")
        mins = arr[:, :2].min(0)
        maxs = arr[:, 2:].max(0)
        return cls(Point(float(mins[0]), float(mins[1])),
                   Point(float(maxs[0]), float(maxs[1])))

    def __repr__(self):
        return "AABB(minx={}, miny={}, maxx={}, maxy={})".format(*self.bounds)

    @property
    def bounds(self):
        """The `(min_x, min_y, max_x, max_y)` tuple."""
        return self.lower + self.upper

    def ll(self):
        return self.lower

    def ur(self):
        return self.upper

    def union(self, other):
        return AABB(
            Point(min(self.lower.x, other.lower.x),
                  min(self.lower.y, other.lower.y)),
            Point(max(self.upper.x, other.upper.x),
                  max(self.upper.y, other.upper.y)),
        )

    def contains(self, other):
        """True if `other` lies within `self`, borders included."""
        return (self.lower.x <= other.lower.x
                and self.lower.y <= other.lower.y
                and other.upper.x <= self.upper.x
                and other.upper.y <= self.upper.y)

    def intersects(self, other):
        """True if the boxes share at least one point, borders included."""
        return (self.lower.x <= other.upper.x
                and other.lower.x <= self.upper.x
                and self.lower.y <= other.upper.y
                and other.lower.y <= self.upper.y)

    def center(self):
        return Point(0.5 * (self.lower.x + self.upper.x),
                     0.5 * (self.lower.y + self.upper.y))

    def area(self):
        return ((self.upper.x - self.lower.x)
                * (self.upper.y - self.lower.y))

    def margin(self):
        """Half perimeter."""
        return (self.upper.x - self.lower.x) + (self.upper.y - self.lower.y)


class AABBVect():
    """
    Batch of 2d axis-aligned boxes.

    Attributes:
        mins (array): Nx2 float array of lower-left corners.
        maxs (array): Nx2 float array of upper-right corners.

    The constructor trusts its arguments; use :meth:`from_bounds` or
    :meth:`from_array` for unchecked input.
    """
    __slots__ = ('mins', 'maxs')

    def __init__(self, mins, maxs):
        self.mins = mins
        self.maxs = maxs

    @classmethod
    def from_bounds(cls, min_x, min_y, max_x, max_y):
        """
        Boxes from four parallel coordinate arrays.

        Entry `i` of every array describes box `i`. Arrays of any shape are
        flattened in C order.

        Raises:
            InvalidInput: if the arrays differ in size or hold non-numbers.
            InvalidGeometry: if a coordinate is not finite.
        """
        names = ('min_x', 'min_y', 'max_x', 'max_y')
        columns = []
        for name, values in zip(names, (min_x, min_y, max_x, max_y)):
            try:
                columns.append(
                    numpy.asarray(values, dtype=numpy.float64).ravel())
            except (TypeError, ValueError) as exc:
                raise InvalidInput(
                    "Cannot read {} as floating-point values".format(name)
                ) from exc
        sizes = [len(col) for col in columns]
        if len(set(sizes)) != 1:
            raise InvalidInput(
                "Coordinate arrays must be of equal length, got {}"
                .format(", ".join("{}={}".format(name, size)
                                  for name, size in zip(names, sizes)))
            )
        return cls.from_array(numpy.column_stack(columns))

    @classmethod
    def from_array(cls, coords):
        """
        Boxes from an Nx4 array of `(min_x, min_y, max_x, max_y)` rows.

        Raises:
            InvalidGeometry: if a coordinate is not finite.
        """
        coords = numpy.asarray(coords, dtype=numpy.float64).reshape(-1, 4)
        finite = numpy.isfinite(coords).all(axis=1)
        if not finite.all():
            bad = int(numpy.argmin(finite))
            raise InvalidGeometry(
                "Non-finite coordinates for box {}: {}"
                .format(bad, coords[bad].tolist())
            )
        lower = coords[:, :2]
        upper = coords[:, 2:]
        inverted = int((lower > upper).any(axis=1).sum())
        if inverted:
            logger.debug("Swapped inverted corners of %d boxes", inverted)
        return cls(numpy.minimum(lower, upper), numpy.maximum(lower, upper))

    def __getitem__(self, idx):
        if isinstance(idx, (int, numpy.integer)):
            return AABB(Point(*self.mins[idx].tolist()),
                        Point(*self.maxs[idx].tolist()))
        return self.__class__(self.mins[idx], self.maxs[idx])

    def __len__(self):
        return self.mins.shape[0]

    @property
    def centers(self):
        return 0.5 * (self.mins + self.maxs)

    def take(self, order):
        """Boxes reordered (or subset) by an integer index array."""
        return self.__class__(self.mins[order], self.maxs[order])

    def mergeby(self, starts):
        """
        Envelopes of contiguous groups of boxes.

        Args:
            starts (int array): increasing start offsets of the groups, the
                first being 0. Group `j` spans `starts[j]:starts[j+1]`, the
                last one running to the end.

        Returns:
            AABBVect: one enclosing box per group.
        """
        return self.__class__(
            numpy.minimum.reduceat(self.mins, starts, axis=0),
            numpy.maximum.reduceat(self.maxs, starts, axis=0),
        )

    def freeze(self):
        """Mark the underlying arrays read-only and return self."""
        self.mins.flags.writeable = False
        self.maxs.flags.writeable = False
        return self
