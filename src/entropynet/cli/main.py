"""
Command-line interface for entropynet.

Interactive Commands:
    entropynet components  --input edges.csv --output components.csv
    entropynet count-nodes --input edges.csv --expected 120
    entropynet structure   --input edges.csv --output structure.csv --rule min_max_rule
    entropynet structure   --input edges.csv --output structure.csv --pinned-node IL6

Config-driven runs:
    entropynet run --config run.yaml

Workers (one chunk of edge tables per call):
    entropynet run-chunk --chunk-file chunk.txt --input-dir edges/ --output-dir components/
"""

import click
from pathlib import Path


def _edge_table_options(func):
    """Shared options naming the edge table columns."""
    func = click.option('--weight-column', '-w', default='strength', show_default=True,
                        help='Column holding edge weights')(func)
    func = click.option('--target-column', '-b', default='b', show_default=True,
                        help='Column holding target node labels')(func)
    func = click.option('--source-column', '-a', default='a', show_default=True,
                        help='Column holding source node labels')(func)
    return func


@click.group()
@click.version_option(package_name='entropynet')
def cli():
    """entropynet - Connected components of weighted association networks."""
    pass


# ============================================================================
# Interactive Commands
# ============================================================================

@cli.command('components')
@click.option('--input', '-i', 'input_file', required=True, type=click.Path(exists=True),
              help='Edge table (.csv)')
@click.option('--output', '-o', 'output_file', required=True, type=click.Path(),
              help='Output CSV with node and component columns')
@_edge_table_options
@click.option('--nodes', 'nodes_file', type=click.Path(exists=True),
              help='Optional node table with an "id" column (adds isolated nodes)')
@click.option('--summary', 'summary_file', type=click.Path(),
              help='Optional output CSV with per-component statistics')
@click.option('--backend', default='union_find', show_default=True,
              type=click.Choice(['union_find', 'scipy']),
              help='Component backend')
@click.option('--allow-non-finite', is_flag=True,
              help='Accept NaN/infinite weights instead of failing')
def components_cmd(input_file, output_file, source_column, target_column, weight_column,
                   nodes_file, summary_file, backend, allow_non_finite):
    """Assign a connected component to every node of an edge table."""
    from ..components import find_components, summarize_components
    from ..worker import load_edge_table, load_node_ids

    try:
        a, b, w = load_edge_table(input_file, source_column, target_column, weight_column)
        nodes = load_node_ids(nodes_file) if nodes_file else None
        check_weights = not allow_non_finite

        components = find_components(a, b, w, nodes=nodes, check_weights=check_weights,
                                     backend=backend)
        summary = summarize_components(a, b, w, nodes=nodes, check_weights=check_weights) \
            if summary_file else None
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    components.to_csv(output_file, index=False)

    n_components = components['component'].nunique()
    click.echo(f"Found {n_components} components over {len(components)} nodes")
    click.echo(f"✓ Saved to {output_file}")

    if summary is not None:
        summary_file = Path(summary_file)
        summary_file.parent.mkdir(parents=True, exist_ok=True)
        summary.to_csv(summary_file, index=False)
        click.echo(f"✓ Saved summary to {summary_file}")


@cli.command('count-nodes')
@click.option('--input', '-i', 'input_file', required=True, type=click.Path(exists=True),
              help='Edge table (.csv)')
@_edge_table_options
@click.option('--expected', '-n', type=int,
              help='Expected number of nodes; fail if the edge list disagrees')
def count_nodes_cmd(input_file, source_column, target_column, weight_column, expected):
    """Count the distinct nodes referenced by an edge table."""
    from ..counting import count_nodes
    from ..worker import load_edge_table

    try:
        a, b, _ = load_edge_table(input_file, source_column, target_column, weight_column)
        n_nodes = count_nodes(a, b, expected)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    click.echo(n_nodes)


@cli.command('structure')
@click.option('--input', '-i', 'input_file', required=True, type=click.Path(exists=True),
              help='Edge table (.csv)')
@click.option('--output', '-o', 'output_file', required=True, type=click.Path(),
              help='Output CSV with one row per strength cut-point')
@_edge_table_options
@click.option('--rule', default=None,
              help='Default step heuristic (min_max_rule, giant_component_local, '
                   'giant_component_global, pinned_node) or an integer step '
                   '[default: pinned_node with --pinned-node, else min_max_rule]')
@click.option('--pinned-node', default=None,
              help='Node label; the default step is the first edge touching it')
def structure_cmd(input_file, output_file, source_column, target_column, weight_column, rule,
                  pinned_node):
    """Compute subgraph structure over all strength cut-points."""
    from ..components.structure import calculate_subgraph_structure, default_step
    from ..worker import load_edge_table

    if rule is None:
        rule = 'pinned_node' if pinned_node is not None else 'min_max_rule'
    elif rule.isdigit():
        rule = int(rule)

    try:
        a, b, w = load_edge_table(input_file, source_column, target_column, weight_column)
        structure = calculate_subgraph_structure(a, b, w)
        step = default_step(structure, rule, pinned_node=pinned_node) \
            if len(structure) > 0 else None
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)

    output_file = Path(output_file)
    output_file.parent.mkdir(parents=True, exist_ok=True)
    structure.to_csv(output_file, index=False)

    click.echo(f"Computed {len(structure)} steps")
    if step is not None:
        row = structure[structure['step'] == step].iloc[0]
        click.echo(f"Default step ({rule}): {step} "
                   f"(strength={row['strength']:g}, subgraphs={int(row['n_subgraphs'])})")
    click.echo(f"✓ Saved to {output_file}")


# ============================================================================
# Config-driven Runs
# ============================================================================

@cli.command('run')
@click.option('--config', '-c', 'config_path', required=True, type=click.Path(exists=True),
              help='Run config YAML file')
def run_cmd(config_path):
    """Run the full analysis described by a run config."""
    from ..config import RunConfig
    from ..worker import run_analysis

    try:
        config = RunConfig.from_yaml(config_path)
        run_analysis(config)
    except (ValueError, FileNotFoundError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@cli.command('run-chunk')
@click.option('--chunk-file', '-f', required=True, type=click.Path(exists=True),
              help='Chunk file listing edge tables (one per line)')
@click.option('--input-dir', '-i', required=True, type=click.Path(exists=True),
              help='Base directory for edge tables')
@click.option('--output-dir', '-o', required=True, type=click.Path(),
              help='Output directory for component tables')
@_edge_table_options
@click.option('--backend', default='union_find', show_default=True,
              type=click.Choice(['union_find', 'scipy']),
              help='Component backend')
def run_chunk_cmd(chunk_file, input_dir, output_dir, source_column, target_column,
                  weight_column, backend):
    """Worker: find components for every edge table in a chunk."""
    from ..worker import process_edge_chunk

    click.echo(f"Processing chunk: {chunk_file}")
    process_edge_chunk(
        chunk_file=chunk_file,
        input_dir=input_dir,
        output_dir=output_dir,
        source_column=source_column,
        target_column=target_column,
        weight_column=weight_column,
        backend=backend,
    )


if __name__ == '__main__':
    cli()
