"""Tests for the social graph."""

import pytest

from social_network.network.graph import (
    SocialGraph,
    Suggestion,
    Influence,
    NOT_FOUND,
    PLACEHOLDER_NAME,
)


@pytest.fixture
def graph():
    return SocialGraph()


@pytest.fixture
def trio():
    """Ann is connected to Bo and Cy."""
    graph = SocialGraph()
    graph.add_user(1, "Ann", "ann")
    graph.add_user(2, "Bo", "bo")
    graph.add_user(3, "Cy", "cy")
    graph.add_connection(1, 2)
    graph.add_connection(1, 3)
    return graph


def complete_graph(size):
    graph = SocialGraph()
    for user_id in range(1, size + 1):
        graph.add_user(user_id, f"User{user_id}", f"u{user_id}")
    for a in range(1, size + 1):
        for b in range(a + 1, size + 1):
            graph.add_connection(a, b)
    return graph


class TestInsertion:
    """Tests for adding users and connections."""

    def test_add_user(self, graph):
        user = graph.add_user(1, "Ann", "ann")

        assert user.name == "Ann"
        assert graph.get_user(1) == user
        assert graph.get_connections(1) == []
        assert 1 in graph

    def test_connections_in_insertion_order(self, trio):
        assert trio.get_connections(1) == [2, 3]
        assert trio.get_connections(2) == [1]
        assert trio.get_connections(3) == [1]

    @pytest.mark.parametrize("a,b", [(1, 2), (2, 1), (5, 9), (4, 4)])
    def test_connection_is_symmetric(self, graph, a, b):
        graph.add_connection(a, b)

        assert b in graph.get_connections(a)
        assert a in graph.get_connections(b)

    def test_self_loop_appends_twice(self, graph):
        graph.add_user(4, "Di", "di")
        graph.add_connection(4, 4)

        assert graph.get_connections(4) == [4, 4]

    def test_repeated_edges_are_kept(self, graph):
        graph.add_connection(1, 2)
        graph.add_connection(1, 2)

        assert graph.get_connections(1) == [2, 2]
        assert graph.edge_count == 2

    def test_add_user_keeps_existing_connections(self, graph):
        graph.add_connection(1, 2)
        graph.add_user(1, "Ann", "ann")
        graph.add_user(2, "Bo", "bo")

        assert graph.get_connections(1) == [2]
        assert graph.get_connections(2) == [1]

    def test_duplicate_id_overwrites_record(self, graph):
        graph.add_user(1, "Ann", "ann")
        graph.add_user(1, "Anne", "anne")

        assert graph.get_user(1).name == "Anne"
        assert graph.user_count == 1

    def test_unknown_id_gets_placeholder(self, graph):
        graph.add_user(1, "Ann", "ann")
        graph.add_connection(1, 9)

        placeholder = graph.get_user(9)
        assert placeholder.placeholder
        assert placeholder.name == PLACEHOLDER_NAME
        assert graph.get_connections(9) == [1]

    def test_placeholder_replaced_by_real_user(self, graph):
        graph.add_connection(1, 9)
        graph.add_user(9, "Ned", "ned")

        assert not graph.get_user(9).placeholder
        assert graph.get_user_id_by_handle("ned") == 9
        assert graph.get_connections(9) == [1]

    def test_get_connections_unknown_id(self, graph):
        assert graph.get_connections(42) == []
        assert 42 not in graph

    def test_get_connections_returns_copy(self, trio):
        connections = trio.get_connections(1)
        connections.append(99)

        assert trio.get_connections(1) == [2, 3]

    def test_repr(self, trio):
        assert repr(trio) == "SocialGraph(users=3, edges=2)"


class TestHandleLookup:
    """Tests for finding users by handle."""

    def test_found(self, trio):
        assert trio.get_user_id_by_handle("bo") == 2

    def test_not_found(self, trio):
        assert trio.get_user_id_by_handle("zed") is NOT_FOUND

    def test_case_sensitive(self, trio):
        assert trio.get_user_id_by_handle("Ann") is NOT_FOUND

    def test_duplicate_handle_returns_lowest_id(self, graph):
        graph.add_user(7, "Seven", "dup")
        graph.add_user(3, "Three", "dup")

        assert graph.get_user_id_by_handle("dup") == 3

    def test_placeholders_never_match(self, graph):
        graph.add_connection(1, 2)

        assert graph.get_user_id_by_handle("") is NOT_FOUND


class TestConnectionTree:
    """Tests for the depth-bounded connection walk."""

    def test_tree_revisits_nodes(self, trio):
        lines = trio.display_connections_recursive(2)

        assert lines == [
            "Bo (bo)",
            "    |-- Ann (ann)",
            "        |-- Bo (bo)",
            "        |-- Cy (cy)",
        ]

    def test_tree_from_hub(self, trio):
        assert trio.connection_tree(1) == [
            (0, 1),
            (1, 2), (2, 1),
            (1, 3), (2, 1),
        ]

    def test_depth_never_exceeds_limit(self):
        graph = complete_graph(4)

        tree = graph.connection_tree(1)

        assert max(depth for depth, _ in tree) == 2

    def test_complete_graph_output_is_bounded(self):
        graph = complete_graph(5)
        root_neighbors = graph.get_connections(1)
        bound = 1 + len(root_neighbors) + sum(graph.degree(n) for n in root_neighbors)

        lines = graph.display_connections_recursive(1)

        assert len(lines) <= bound
        assert len(lines) == 1 + 4 + 4 * 4

    def test_custom_depth(self, trio):
        assert trio.connection_tree(1, max_depth=0) == [(0, 1)]
        assert len(trio.connection_tree(1, max_depth=3)) == 1 + 2 + 2 + 4

    def test_isolated_user(self, graph):
        graph.add_user(1, "Ann", "ann")

        assert graph.display_connections_recursive(1) == ["Ann (ann)"]


class TestSuggestFriends:
    """Tests for mutual friend suggestions."""

    def test_single_candidate(self, trio):
        assert trio.suggest_friends(2) == [Suggestion(user_id=3, mutual_count=1)]

    def test_hub_has_no_suggestions(self, trio):
        assert trio.suggest_friends(1) == []

    def test_isolated_user_has_no_suggestions(self, graph):
        graph.add_user(1, "Ann", "ann")

        assert graph.suggest_friends(1) == []

    def test_mutual_counts_ranked(self, graph):
        # 1 knows 2 and 5; both know 3. Only 2 knows 6.
        for a, b in [(1, 2), (1, 5), (2, 3), (5, 3), (2, 6), (3, 4)]:
            graph.add_connection(a, b)

        suggestions = graph.suggest_friends(1)

        assert suggestions == [
            Suggestion(user_id=3, mutual_count=2),
            Suggestion(user_id=6, mutual_count=1),
        ]

    def test_excludes_self_and_direct_friends(self):
        graph = complete_graph(5)
        graph.add_connection(5, 6)

        suggested = {s.user_id for s in graph.suggest_friends(1)}

        assert suggested == {6}
        assert 1 not in suggested
        assert not suggested & set(graph.get_connections(1))

    def test_ties_ordered_by_id(self, graph):
        graph.add_connection(1, 4)
        graph.add_connection(1, 3)
        graph.add_connection(1, 2)

        assert [s.user_id for s in graph.suggest_friends(2)] == [3, 4]

    def test_duplicate_friend_edges_counted_once(self, graph):
        graph.add_connection(1, 2)
        graph.add_connection(1, 2)
        graph.add_connection(2, 3)

        assert graph.suggest_friends(1) == [Suggestion(user_id=3, mutual_count=1)]

    def test_does_not_mutate(self, trio):
        before = {uid: trio.get_connections(uid) for uid in trio.user_ids}

        trio.suggest_friends(2)

        assert {uid: trio.get_connections(uid) for uid in trio.user_ids} == before


class TestInfluentialUsers:
    """Tests for degree ranking."""

    def test_ranking(self, trio):
        assert trio.influential_users() == [
            Influence(user_id=1, connection_count=2),
            Influence(user_id=2, connection_count=1),
            Influence(user_id=3, connection_count=1),
        ]

    def test_empty_graph(self, graph):
        assert graph.influential_users() == []

    def test_all_isolated(self, graph):
        for user_id in (3, 1, 2):
            graph.add_user(user_id, f"U{user_id}", f"u{user_id}")

        ranking = graph.influential_users()

        assert [entry.connection_count for entry in ranking] == [0, 0, 0]
        assert [entry.user_id for entry in ranking] == [1, 2, 3]

    def test_sorted_non_increasing(self):
        graph = complete_graph(4)
        graph.add_connection(2, 5)
        graph.add_connection(2, 6)

        counts = [entry.connection_count for entry in graph.influential_users()]

        assert counts == sorted(counts, reverse=True)
        assert graph.influential_users()[0].user_id == 2

    def test_repeated_edges_inflate_degree(self, graph):
        graph.add_connection(1, 2)
        graph.add_connection(1, 2)
        graph.add_connection(3, 4)

        assert graph.influential_users()[:2] == [
            Influence(user_id=1, connection_count=2),
            Influence(user_id=2, connection_count=2),
        ]
