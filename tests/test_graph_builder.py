import logging

import numpy as np
import pytest

from provgraph.errors import AmbiguousContinuation
from provgraph.graph.graph_builder import ordered_dependency
from provgraph.graph.graph_schema import Record
from provgraph.graph.graph_validation import check_invariants
from provgraph.graph.path_algebra import paths_through

SIM_CHAIN = [{"P": 1}, {"alg": "alg1"}]


def test_add_nodes_tags_every_link_and_returns_root(builder, store):
    root = builder.add_nodes([{"a": 1}, {"b": 1}, {"c": 1}])

    assert root == {"a": 1}
    assert store.vertex_count() == 3
    assert [e.path_ids for e in store.edges()] == [{1}, {1}]
    assert store.counter.peek_id() == 2


def test_add_nodes_reuses_existing_records(builder, store):
    builder.add_nodes([{"a": 1}, {"b": 1}])
    builder.add_nodes([{"a": 1}, {"b": 2}])

    assert store.vertex_count() == 3
    a = store.lookup({"a": 1})
    assert paths_through(store, a) == {1, 2}


def test_add_nodes_rejects_single_record(builder):
    with pytest.raises(ValueError):
        builder.add_nodes([{"a": 1}])


def test_explicit_ids_never_lower_the_counter(builder, store):
    builder.add_nodes([{"a": 1}, {"b": 1}], 10)
    builder.add_nodes([{"a": 2}, {"b": 2}], 3)

    assert store.counter.peek_id() == 11
    check_invariants(store)


def test_add_path_consumes_its_id(builder, store):
    builder.add_path({"a": 1}, {"b": 1})
    builder.add_nodes([{"u": 1}, {"w": 1}])

    a, b = store.lookup({"a": 1}), store.lookup({"b": 1})
    u, w = store.lookup({"u": 1}), store.lookup({"w": 1})
    assert store.path_ids_of(a, b) == {1}
    assert store.path_ids_of(u, w) == {2}
    assert store.counter.peek_id() == 3
    check_invariants(store)


def test_add_nodes_logs_each_chain(builder, caplog):
    with caplog.at_level(logging.DEBUG, logger="provgraph.builder"):
        builder.add_nodes([{"x": 1}, {"y": 1}])

    assert "(x=1) => (y=1)" in caplog.text


def test_squares_round_trip(squares):
    assert squares.nv == 6
    assert squares.ne == 3
    assert all(len(e.path_ids) == 1 for e in squares.store.edges())
    assert squares.get_attrs(4) == Record(y=1)
    assert squares.get_attrs(5) == Record(y=4)
    assert squares.get_attrs(6) == Record(y=9)
    check_invariants(squares.store)


def test_walk_dependency_stops_at_missing_link(simulation):
    end, compatible = simulation.walk_dependency([*SIM_CHAIN, {"x": 10.0}, {"r": 12.0}])
    assert end == {"x": 10.0}
    assert compatible == {1, 2, 3}

    end, compatible = simulation.walk_dependency([{"P": 2}, {"alg": "alg1"}])
    assert end == {"P": 2}
    assert compatible == frozenset()


def test_next_id_continues_a_dead_end(builder, store):
    builder.add_nodes(SIM_CHAIN)

    assert builder.next_id(SIM_CHAIN) == {1}

    builder.add_nodes([*SIM_CHAIN, {"x": 10.0}], continue_path=True)
    assert store.path_ids_of(store.lookup({"alg": "alg1"}), store.lookup({"x": 10.0})) == {1}
    assert store.counter.peek_id() == 2


def test_next_id_starts_a_new_path_after_a_branch(builder, store):
    builder.add_nodes(SIM_CHAIN)
    builder.add_nodes([*SIM_CHAIN, {"x": 10.0}], continue_path=True)

    assert builder.next_id(SIM_CHAIN) == {2}


def test_next_id_on_squares_roots_and_leaves(squares):
    # (x=1) already leads somewhere: new path
    assert squares.next_id([{"x": 1}]) == {4}
    # (y=1) is the dead end of path 1
    assert squares.next_id([{"y": 1}]) == {1}
    # a record that does not exist yet
    assert squares.next_id([{"z": 1}]) == {4}


def test_converging_paths_are_ambiguous(builder, store):
    builder.add_nodes([{"a": 1}, {"c": 1}])
    builder.add_nodes([{"b": 1}, {"c": 1}])

    assert builder.next_id([{"c": 1}]) == {1, 2}
    # walking in from a narrows the candidates
    assert builder.next_id([{"a": 1}, {"c": 1}]) == {1}

    with pytest.raises(AmbiguousContinuation) as exc:
        builder.add_nodes([{"c": 1}, {"d": 1}], continue_path=True)
    assert exc.value.candidates == {1, 2}
    assert store.lookup({"d": 1}) == 0


def test_derived_values_after_converging_paths_start_a_new_path(builder, store):
    builder.add_nodes([{"a": 1}, {"c": 1}])
    builder.add_nodes([{"b": 1}, {"c": 1}])

    assert builder.add_derived_values({"c": [1]}, {"d": [1]}) == [3]

    c, d = store.lookup({"c": 1}), store.lookup({"d": 1})
    assert store.path_ids_of(c, d) == {3}
    check_invariants(store)


def test_add_quantity_after_converging_paths_starts_new_paths(builder, store):
    builder.add_nodes([{"a": 1}, {"c": 1}])
    builder.add_nodes([{"b": 1}, {"c": 1}])

    assert builder.add_quantity([{"c": 1}], {"d": [1, 2]}) == [3, 4]
    assert store.counter.peek_id() == 5
    check_invariants(store)


def test_ordered_dependency_pairs_elements_in_order():
    deps = ordered_dependency({"x": [1, 2], "t": [0.1, 0.2]}, {"y": [3, 4]}, {"alg": "a"})

    assert deps == [
        [Record(x=1, t=0.1), Record(alg="a"), Record(y=3)],
        [Record(x=2, t=0.2), Record(alg="a"), Record(y=4)],
    ]


def test_ordered_dependency_accepts_arrays_and_checks_lengths():
    deps = ordered_dependency({"x": np.array([1, 2, 3])}, {"y": np.array([1, 4, 9])})
    assert [d[-1] for d in deps] == [{"y": 1}, {"y": 4}, {"y": 9}]

    with pytest.raises(ValueError):
        ordered_dependency({"x": [1, 2]}, {"y": [1]})
    with pytest.raises(ValueError):
        ordered_dependency({"x": 1}, {"y": [1]})


def test_add_quantity_gives_each_value_its_own_path(simulation):
    store = simulation.store

    assert paths_through(store, {"P": 1}) == {1, 2, 3}
    assert simulation.chain_values(SIM_CHAIN, "x") == [10.0, 20.0, 30.0]
    assert store.counter.peek_id() == 4
    check_invariants(store)


def test_max_id_is_the_next_unused_path_id(simulation, squares):
    assert simulation.max_id() == 4
    assert squares.max_id() == 4

    simulation.add_nodes([{"P": 2}, {"alg": "alg2"}])
    assert simulation.max_id() == 5


def test_derived_values_continue_their_base_paths(simulation):
    x = simulation.chain_values(SIM_CHAIN, "x")
    ids = simulation.add_derived_values({"x": x}, {"r": [v + 2 for v in x]}, base_chain=SIM_CHAIN)

    assert ids == [1, 2, 3]
    store = simulation.store
    assert store.path_ids_of(store.lookup({"x": 20.0}), store.lookup({"r": 22.0})) == {2}
    assert simulation.nv == 8
    check_invariants(store)


def test_derived_values_under_a_new_root_start_new_paths(simulation):
    base = [{"P": 2}, {"alg": "alg1"}]
    ids = simulation.add_derived_values({"x": [20.0, 40.0, 60.0]}, {"r": [22.0, 42.0, 62.0]}, base_chain=base)

    assert ids == [4, 5, 6]
    assert paths_through(simulation.store, base) == {4, 5, 6}
    check_invariants(simulation.store)
