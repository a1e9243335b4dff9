import pytest


def _region(child):
    return child.bbox() if child.is_leaf else child.aabb()


@pytest.fixture(scope="session")
def check_tree():
    """Asserts the structural invariants of a built index."""
    from rectindex import AABB

    def check(index, ids=None):
        root = index.root()
        params = index.params
        expected = list(range(len(index))) if ids is None else ids
        found = root.child_ids()
        assert len(found) == len(set(found))
        assert sorted(found) == sorted(expected)
        for depth, node in index.walk():
            if node.is_leaf:
                assert depth == index.height
                continue
            children = node.children()
            assert len(children) == len(node)
            if node == root:
                assert len(children) <= params.max_children
                if len(index) == 0:
                    assert children == []
                    assert node.aabb() is None
                    continue
                assert len(children) >= 1
            else:
                assert (params.min_children <= len(children)
                        <= params.max_children)
            regions = [_region(child) for child in children]
            assert node.aabb() == AABB.merge(regions)
            assert all(node.aabb().contains(r) for r in regions)
            assert node.ll() == node.aabb().lower
            assert node.ur() == node.aabb().upper
            assert node.level == index.height - depth
        return index

    return check
