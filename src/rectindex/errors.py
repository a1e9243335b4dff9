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
Exceptions raised while building a spatial index.

All errors derive from ValueError: they signal bad arguments handed to a
constructor, never a failure of an already built tree.
"""


class RectIndexError(ValueError):
    """Base class of the package's errors."""


class InvalidInput(RectIndexError):
    """
    Malformed input batch: coordinate arrays of different lengths, values
    that cannot be read as floats, or invalid tree parameters.
    """


class InvalidGeometry(RectIndexError):
    """A rectangle with a NaN or infinite coordinate."""
