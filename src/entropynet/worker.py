"""
Workers that run component analysis on edge tables and save results.

run_analysis() executes a single RunConfig. process_edge_chunk() processes a
chunk file listing many edge tables, skipping and reporting the ones that fail.
"""

import numpy as np
import pandas as pd
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from .config import RunConfig
from .components.finder import find_components, summarize_components
from .components.structure import calculate_subgraph_structure, default_step
from .counting import count_nodes


MISSING_WEIGHTS = ('', 'NA', 'NaN', 'nan')


def _parse_weight(value: str) -> Union[float, str]:
    """Parse a weight cell, keeping unparseable text for error reporting."""
    if value in MISSING_WEIGHTS:
        return np.nan
    try:
        return float(value)
    except ValueError:
        return value


def load_edge_table(
    path: Union[str, Path],
    source_column: str = 'a',
    target_column: str = 'b',
    weight_column: str = 'strength',
) -> Tuple[List[str], List[str], List[Union[float, str]]]:
    """
    Load an edge table from CSV into parallel sequences.

    Node labels are read as strings without NA conversion, so labels such
    as 'NA' or '1' are kept verbatim. Empty or NA weights become NaN; weights
    that are not numbers are passed through as text so that build_graph()
    reports them with InvalidWeightError.

    Args:
        path: CSV file with one row per edge
        source_column: Column holding source labels
        target_column: Column holding target labels
        weight_column: Column holding edge weights

    Returns:
        Tuple of (a, b, w)
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Edge table not found: {path}")

    df = pd.read_csv(
        path,
        dtype={source_column: str, target_column: str, weight_column: str},
        keep_default_na=False,
    )

    missing = [c for c in (source_column, target_column, weight_column) if c not in df.columns]
    if missing:
        raise ValueError(f"Column(s) {missing} not found in {path}. "
                         f"Available columns: {list(df.columns)}")

    return (
        df[source_column].tolist(),
        df[target_column].tolist(),
        [_parse_weight(value) for value in df[weight_column]],
    )


def load_node_ids(path: Union[str, Path], id_column: str = 'id') -> List[str]:
    """
    Load node labels from a node info table.

    Args:
        path: CSV file with one row per node
        id_column: Column holding node labels

    Returns:
        List of node labels
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Node table not found: {path}")

    df = pd.read_csv(path, dtype={id_column: str}, keep_default_na=False)
    if id_column not in df.columns:
        raise ValueError(f"Column '{id_column}' not found in {path}. "
                         f"Available columns: {list(df.columns)}")
    return df[id_column].tolist()


def run_analysis(config: RunConfig) -> Dict[str, Optional[Path]]:
    """
    Run component analysis for one run config and save the results.

    Writes the components table, the per-component summary, and (unless
    disabled) the subgraph structure table.

    Args:
        config: Loaded run configuration

    Returns:
        Dict mapping 'components', 'summary' and 'structure' to output paths
        (structure is None when disabled)
    """
    print(f"Run: {config.run_name}")
    print(f"  Loading edges from {config.edges_path}")
    a, b, w = load_edge_table(
        config.edges_path,
        source_column=config.source_column,
        target_column=config.target_column,
        weight_column=config.weight_column,
    )

    nodes = None
    if config.nodes_path is not None:
        nodes = load_node_ids(config.nodes_path, config.node_id_column)
        print(f"  Loaded {len(nodes)} node ids from {config.nodes_path}")

    n_nodes = count_nodes(a, b, config.expected_nodes, nodes=nodes)
    print(f"  {len(a)} edges, {n_nodes} distinct nodes")

    components = find_components(
        a, b, w, nodes=nodes, check_weights=config.check_weights, backend=config.backend,
    )
    summary = summarize_components(a, b, w, nodes=nodes, check_weights=config.check_weights)
    print(f"  Found {len(summary)} components (largest: "
          f"{int(summary['size'].max()) if len(summary) else 0} nodes)")

    structure_csv = config.structure_csv
    structure = None
    if structure_csv is not None:
        structure = calculate_subgraph_structure(a, b, w)
        if len(structure) > 0:
            step = default_step(structure, config.default_step, pinned_node=config.pinned_node)
            print(f"  Default step ({config.default_step}): {step}")

    config.base_dir.mkdir(parents=True, exist_ok=True)
    components.to_csv(config.components_csv, index=False)
    summary.to_csv(config.summary_csv, index=False)
    if structure is not None:
        structure.to_csv(structure_csv, index=False)

    print(f"✓ Saved results to {config.base_dir}")
    return {
        'components': config.components_csv,
        'summary': config.summary_csv,
        'structure': structure_csv,
    }


def process_edge_chunk(
    chunk_file: Union[str, Path],
    input_dir: Union[str, Path],
    output_dir: Union[str, Path],
    source_column: str = 'a',
    target_column: str = 'b',
    weight_column: str = 'strength',
    backend: str = 'union_find',
) -> int:
    """
    Process a chunk of edge table files and save their components.

    For every edge table listed in the chunk file (one path per line,
    relative to input_dir), writes {name}.components.csv under output_dir,
    mirroring the input structure.

    Args:
        chunk_file: Path to chunk file containing edge table paths
        input_dir: Base directory for edge tables
        output_dir: Output directory for component tables
        source_column: Column holding source labels
        target_column: Column holding target labels
        weight_column: Column holding edge weights
        backend: Component backend ('union_find' or 'scipy')

    Returns:
        Number of files processed
    """
    chunk_file = Path(chunk_file)
    input_dir = Path(input_dir)
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    with open(chunk_file, 'r') as f:
        edge_files = [line.strip() for line in f if line.strip()]

    print(f"Processing {len(edge_files)} edge tables from chunk...")

    processed = 0

    for edge_file_rel in edge_files:
        try:
            edge_file = input_dir / edge_file_rel

            if not edge_file.exists():
                print(f"  Skipping missing file: {edge_file_rel}")
                continue

            a, b, w = load_edge_table(edge_file, source_column, target_column, weight_column)
            components = find_components(a, b, w, backend=backend)

            output_file = (output_dir / edge_file_rel).with_suffix('.components.csv')
            output_file.parent.mkdir(parents=True, exist_ok=True)
            components.to_csv(output_file, index=False)

            processed += 1

        except Exception as e:
            print(f"  ERROR processing {edge_file_rel}: {e}")
            continue

    print(f"✓ Processed {processed}/{len(edge_files)} files")
    return processed
