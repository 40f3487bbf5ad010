"""Tests for the command-line interface."""

import pandas as pd
import pytest
import yaml
from click.testing import CliRunner

from entropynet.cli.main import cli


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def edges_csv(tmp_path):
    path = tmp_path / "edges.csv"
    path.write_text(
        "a,b,strength\n"
        "x,y,0.9\n"
        "y,z,0.8\n"
        "p,q,0.7\n"
        "x,p,0.1\n"
    )
    return path


class TestComponentsCommand:

    def test_components(self, runner, edges_csv, tmp_path):
        output = tmp_path / "out" / "components.csv"
        summary = tmp_path / "out" / "summary.csv"

        result = runner.invoke(cli, [
            'components', '-i', str(edges_csv), '-o', str(output), '--summary', str(summary),
        ])

        assert result.exit_code == 0, result.output
        assert "Found 1 components over 5 nodes" in result.output
        df = pd.read_csv(output)
        assert list(df.columns) == ['node', 'component']
        assert set(df['component']) == {0}
        assert pd.read_csv(summary)['size'].tolist() == [5]

    def test_components_scipy_backend(self, runner, edges_csv, tmp_path):
        output = tmp_path / "components.csv"

        result = runner.invoke(cli, [
            'components', '-i', str(edges_csv), '-o', str(output), '--backend', 'scipy',
        ])

        assert result.exit_code == 0, result.output

    def test_components_bad_column(self, runner, edges_csv, tmp_path):
        result = runner.invoke(cli, [
            'components', '-i', str(edges_csv), '-o', str(tmp_path / "c.csv"),
            '--weight-column', 'weight',
        ])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestCountNodesCommand:

    def test_count(self, runner, edges_csv):
        result = runner.invoke(cli, ['count-nodes', '-i', str(edges_csv)])

        assert result.exit_code == 0
        assert result.output.strip() == "5"

    def test_expected_mismatch(self, runner, edges_csv):
        result = runner.invoke(cli, ['count-nodes', '-i', str(edges_csv), '--expected', '7'])

        assert result.exit_code == 1
        assert "expected 7" in result.output


class TestStructureCommand:

    def test_structure(self, runner, edges_csv, tmp_path):
        output = tmp_path / "structure.csv"

        result = runner.invoke(cli, ['structure', '-i', str(edges_csv), '-o', str(output)])

        assert result.exit_code == 0, result.output
        assert "Default step (min_max_rule): 3" in result.output
        assert len(pd.read_csv(output)) == 4

    def test_integer_rule(self, runner, edges_csv, tmp_path):
        result = runner.invoke(cli, [
            'structure', '-i', str(edges_csv), '-o', str(tmp_path / "s.csv"), '--rule', '2',
        ])

        assert result.exit_code == 0, result.output
        assert "Default step (2): 2" in result.output

    def test_unknown_rule(self, runner, edges_csv, tmp_path):
        result = runner.invoke(cli, [
            'structure', '-i', str(edges_csv), '-o', str(tmp_path / "s.csv"), '--rule', 'biggest',
        ])

        assert result.exit_code == 1


class TestRunCommands:

    def test_run(self, runner, edges_csv, tmp_path):
        config_path = tmp_path / "run.yaml"
        config_path.write_text(yaml.safe_dump({
            "run_name": "cli_run",
            "input": {"edges": str(edges_csv)},
            "output": {"base_dir": str(tmp_path / "results")},
        }))

        result = runner.invoke(cli, ['run', '-c', str(config_path)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "results" / "components.csv").exists()
        assert (tmp_path / "results" / "component_summary.csv").exists()
        assert (tmp_path / "results" / "subgraph_structure.csv").exists()

    def test_run_invalid_config(self, runner, tmp_path):
        config_path = tmp_path / "run.yaml"
        config_path.write_text(yaml.safe_dump({"run_name": "cli_run"}))

        result = runner.invoke(cli, ['run', '-c', str(config_path)])

        assert result.exit_code == 1
        assert "Missing required config section" in result.output

    def test_run_chunk(self, runner, edges_csv, tmp_path):
        chunk_file = tmp_path / "chunk.txt"
        chunk_file.write_text("edges.csv\n")

        result = runner.invoke(cli, [
            'run-chunk', '-f', str(chunk_file), '-i', str(tmp_path), '-o', str(tmp_path / "out"),
        ])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "out" / "edges.components.csv").exists()


class TestWeightErrors:

    def test_text_weight_fails_with_allow_non_finite(self, runner, tmp_path):
        """Test that a text weight is an error even when non-finite weights are allowed."""
        edges = tmp_path / "e.csv"
        edges.write_text("a,b,strength\nx,y,heavy\n")

        result = runner.invoke(cli, [
            'components', '-i', str(edges), '-o', str(tmp_path / "c.csv"), '--allow-non-finite',
        ])

        assert result.exit_code == 1
        assert "heavy" in result.output
        assert not (tmp_path / "c.csv").exists()

    def test_empty_weight_allowed_with_flag(self, runner, tmp_path):
        edges = tmp_path / "e.csv"
        edges.write_text("a,b,strength\nx,y,\n")

        result = runner.invoke(cli, [
            'components', '-i', str(edges), '-o', str(tmp_path / "c.csv"), '--allow-non-finite',
        ])

        assert result.exit_code == 0, result.output


class TestPinnedNodeOption:

    def test_pinned_node(self, runner, edges_csv, tmp_path):
        result = runner.invoke(cli, [
            'structure', '-i', str(edges_csv), '-o', str(tmp_path / "s.csv"), '--pinned-node', 'q',
        ])

        assert result.exit_code == 0, result.output
        assert "Default step (pinned_node): 3" in result.output

    def test_missing_pinned_node(self, runner, edges_csv, tmp_path):
        result = runner.invoke(cli, [
            'structure', '-i', str(edges_csv), '-o', str(tmp_path / "s.csv"),
            '--pinned-node', 'nowhere',
        ])

        assert result.exit_code == 1
        assert "does not appear" in result.output
