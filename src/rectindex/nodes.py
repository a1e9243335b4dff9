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
Array-backed tree nodes.

Classically, R-tree nodes are objects pointing to their children. Here a
packed tree is stored level by level in arrays instead:

* Level 0 holds the leaves: their boxes and caller ids, in packed order.
* Level `k > 0` holds the parent nodes of height `k`: their envelopes and a
  `[start, stop)` span of their children in level `k - 1`.
* The last level holds a single node, the root.

Callers never see the arrays. They get :class:`Leaf` and :class:`ParentNode`
handles, i.e. (arena, level, index) triples, which stay valid as long as
they are referenced since the arena is immutable.
"""
import collections

import numpy


# Level of parent nodes: envelopes (AABBVect) and Kx2 int array of spans.
Level = collections.namedtuple('Level', 'boxes spans')


class NodeArena():
    """
    Storage of a packed tree.

    Attributes:
        leaves (AABBVect): leaf boxes in packed order.
        ids (1d-int-array): caller ids parallel to `leaves`.
        levels (list of Level): parent levels, from height 1 up to the root.
    """
    __slots__ = ('leaves', 'ids', 'levels')

    def __init__(self, leaves, ids, levels):
        self.leaves = leaves
        self.ids = ids
        self.levels = levels

    @classmethod
    def empty(cls, leaves, ids):
        # A root without children. Its envelope is undefined (None).
        spans = numpy.zeros((1, 2), dtype=numpy.intp)
        return cls(leaves, ids, [Level(None, spans)]).freeze()

    @property
    def height(self):
        return len(self.levels)

    @property
    def size(self):
        return len(self.ids)

    @property
    def node_count(self):
        return sum(len(level.spans) for level in self.levels)

    def envelope(self, level, index):
        boxes = self.levels[level - 1].boxes
        if boxes is None:
            return None
        return boxes[index]

    def span(self, level, index):
        start, stop = self.levels[level - 1].spans[index]
        return int(start), int(stop)

    def freeze(self):
        """Mark every array read-only and return self."""
        self.leaves.freeze()
        self.ids.flags.writeable = False
        for level in self.levels:
            if level.boxes is not None:
                level.boxes.freeze()
            level.spans.flags.writeable = False
        return self


class Leaf():
    """Handle on a leaf entry: a box and the caller's identifier."""
    __slots__ = ('arena', 'index')
    is_leaf = True

    def __init__(self, arena, index):
        self.arena = arena
        self.index = index

    def __eq__(self, other):
        return (isinstance(other, Leaf) and self.arena is other.arena
                and self.index == other.index)

    def __hash__(self):
        return hash((id(self.arena), self.index))

    def __repr__(self):
        return "Leaf(id={}, bbox={!r})".format(self.id(), self.bbox())

    def bbox(self):
        return self.arena.leaves[self.index]

    def ll(self):
        return self.bbox().lower

    def ur(self):
        return self.bbox().upper

    def id(self):
        return int(self.arena.ids[self.index])


class ParentNode():
    """
    Handle on an internal node.

    The envelope of a node is the union of the boxes of its children, and
    the children of a node are either all leaves (`level == 1`) or all
    parent nodes of level `level - 1`.
    """
    __slots__ = ('arena', 'level', 'index')
    is_leaf = False

    def __init__(self, arena, level, index):
        self.arena = arena
        self.level = level
        self.index = index

    def __eq__(self, other):
        return (isinstance(other, ParentNode) and self.arena is other.arena
                and self.level == other.level and self.index == other.index)

    def __hash__(self):
        return hash((id(self.arena), self.level, self.index))

    def __repr__(self):
        return "ParentNode(level={}, children={}, aabb={!r})".format(
            self.level, len(self), self.aabb())

    def __len__(self):
        start, stop = self.arena.span(self.level, self.index)
        return stop - start

    def aabb(self):
        """Envelope of the node, None for the root of an empty tree."""
        return self.arena.envelope(self.level, self.index)

    def ll(self):
        box = self.aabb()
        return None if box is None else box.lower

    def ur(self):
        box = self.aabb()
        return None if box is None else box.upper

    def children(self):
        """Ordered list of child handles (Leaf or ParentNode)."""
        start, stop = self.arena.span(self.level, self.index)
        if self.level == 1:
            return [Leaf(self.arena, i) for i in range(start, stop)]
        return [ParentNode(self.arena, self.level - 1, i)
                for i in range(start, stop)]

    def child_ids(self):
        """
        Identifiers of all leaves below this node.

        Leaves are listed in pre-order, children being visited in their
        stored order. Each leaf appears exactly once.
        """
        arena = self.arena
        ids = []
        stack = [(self.level, self.index)]
        while stack:
            level, index = stack.pop()
            start, stop = arena.span(level, index)
            if level == 1:
                ids.extend(arena.ids[start:stop].tolist())
            else:
                stack.extend((level - 1, i)
                             for i in reversed(range(start, stop)))
        return ids

    def walk(self):
        """
        Pre-order iteration over the subtree.

        Yields:
            (depth, node) pairs, `depth` being 0 for `self`, where node is a
            ParentNode or a Leaf.
        """
        stack = [(0, self)]
        while stack:
            depth, node = stack.pop()
            yield depth, node
            if not node.is_leaf:
                stack.extend((depth + 1, child)
                             for child in reversed(node.children()))

    def leaves(self):
        """Pre-order iteration over the leaves of the subtree."""
        return (node for _, node in self.walk() if node.is_leaf)
