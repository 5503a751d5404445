from provgraph.graph.graph_schema import NO_VERTEX
from provgraph.graph.path_algebra import on_path, paths_through, paths_through_key


def test_dead_ends_have_no_forward_paths(squares):
    store = squares.store
    for v, _ in store.vertices():
        if not store.out_neighbors(v):
            assert paths_through(store, v) == frozenset()


def test_sentinel_and_unknown_records_have_no_paths(squares):
    store = squares.store
    assert paths_through(store, NO_VERTEX) == frozenset()
    assert paths_through(store, {"x": 99}) == frozenset()
    assert paths_through(store, {"x": 1}, "in") == frozenset()


def test_paths_through_vertex_in_both_directions(simulation):
    store = simulation.store
    assert paths_through(store, {"P": 1}) == {1, 2, 3}
    assert paths_through(store, {"alg": "alg1"}, "in") == {1, 2, 3}
    assert paths_through(store, {"x": 20.0}, "in") == {2}


def test_chain_paths_are_the_intersection_of_its_ends(simulation):
    store = simulation.store
    a, b = {"alg": "alg1"}, {"x": 10.0}

    expected = paths_through(store, b) & paths_through(store, a)
    assert paths_through(store, [a, b]) == expected

    assert paths_through(store, [{"P": 1}, {"alg": "alg1"}], "in") == frozenset()
    assert paths_through(store, [{"alg": "alg1"}, {"x": 10.0}], "in") == {1}


def test_squares_scenario(squares):
    store = squares.store
    (path,) = paths_through(store, {"x": 1})

    assert on_path(store, {"y": 1}, path)
    assert not on_path(store, {"y": 4}, path)
    assert on_path(store, 5, {2, 3})
    # membership is decided by in-edges only
    assert not on_path(store, {"x": 1}, path)


def test_paths_through_indexed_key(simulation):
    simulation.index_by("P")
    assert paths_through_key(simulation.store, "P", 1) == {1, 2, 3}
    assert paths_through_key(simulation.store, "P", 2) == frozenset()
