"""Tests for edge list normalization."""

import pytest
import numpy as np
import pandas as pd

from entropynet import LengthMismatchError, InvalidWeightError, build_graph, gather_unique_nodes
from entropynet.graph.builder import check_lengths, index_labels


class TestBuildGraph:
    """Tests for build_graph()."""

    def test_ids_follow_first_appearance(self):
        """Test that ids are assigned over sources first, then targets."""
        graph = build_graph(["x", "y"], ["y", "z"], [1.0, 2.0])

        assert graph.labels == ['x', 'y', 'z']
        assert graph.label_to_id == {'x': 0, 'y': 1, 'z': 2}
        assert list(graph.sources) == [0, 1]
        assert list(graph.targets) == [1, 2]
        assert list(graph.weights) == [1.0, 2.0]
        assert graph.n_nodes == 3
        assert graph.n_edges == 2

    def test_edge_array(self):
        graph = build_graph(["p", "q"], ["r", "s"], [1.0, 1.0])

        np.testing.assert_array_equal(graph.edge_array(), [[0, 2], [1, 3]])

    def test_empty(self):
        """Test that empty input is valid."""
        graph = build_graph([], [], [])

        assert graph.labels == []
        assert graph.label_to_id == {}
        assert graph.n_edges == 0
        assert graph.edge_array().shape == (0, 2)

    def test_duplicates_and_self_loops_are_kept(self):
        graph = build_graph(["a", "a", "b"], ["b", "b", "b"], [1.0, 2.0, 3.0])

        assert graph.n_edges == 3
        assert graph.n_nodes == 2
        assert list(graph.targets) == [1, 1, 1]

    def test_no_label_normalization(self):
        graph = build_graph(["Node", "node"], [" node", "NODE"], [1.0, 1.0])

        assert graph.n_nodes == 4

    def test_accepts_arrays_and_series(self):
        a = np.array(["1", "2"])
        b = pd.Series(["2", "3"], index=[10, 20])
        w = pd.Series([0.5, -0.5], index=[10, 20])
        graph = build_graph(a, b, w)

        assert graph.labels == ['1', '2', '3']
        assert list(graph.weights) == [0.5, -0.5]

    def test_extra_nodes_appended(self):
        graph = build_graph(["a"], ["b"], [1.0], nodes=["c", "a", "d"])

        assert graph.labels == ['a', 'b', 'c', 'd']
        assert graph.n_edges == 1

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatchError, match="expected 2"):
            build_graph(["a", "b"], ["b"], [1.0, 1.0])

    @pytest.mark.parametrize('bad', [np.nan, np.inf, -np.inf])
    def test_non_finite_weights(self, bad):
        with pytest.raises(InvalidWeightError) as excinfo:
            build_graph(["a", "b"], ["b", "c"], [1.0, bad])

        assert excinfo.value.index == 1

    def test_non_numeric_weight(self):
        with pytest.raises(InvalidWeightError) as excinfo:
            build_graph(["a"], ["b"], ["heavy"], check_weights=False)

        assert excinfo.value.index == 0
        assert excinfo.value.value == "heavy"

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError):
            build_graph(["a"], [], [])


class TestHelpers:

    def test_check_lengths_returns_common_length(self):
        assert check_lengths(a=[1, 2], b=[3, 4], w=[5, 6]) == 2

    def test_index_labels_extends_mapping(self):
        mapping = index_labels(["a", "b"])
        index_labels(["b", "c"], mapping)

        assert mapping == {'a': 0, 'b': 1, 'c': 2}

    def test_gather_unique_nodes(self):
        nodes = gather_unique_nodes(["x", "y", "x"], ["y", "z", "w"])

        assert list(nodes.columns) == ['id']
        assert list(nodes['id']) == ['x', 'y', 'z', 'w']
