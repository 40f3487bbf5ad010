"""
Run configuration.

The RunConfig loads a YAML run definition naming the edge table, the columns
holding the source/target/weight values, and where results are written.
"""

import yaml
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .components.finder import BACKENDS
from .components.structure import DEFAULT_STEP_RULES


class RunConfig:
    """
    Loads and validates a run configuration YAML.

    Example:
        config = RunConfig.from_yaml('config/virus_net.yaml')
        print(config.run_name)
        print(config.components_csv)
    """

    def __init__(self, data: Dict[str, Any]):
        self._data = data
        self._validate()

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> 'RunConfig':
        """Load run config from YAML file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Run config not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Run config must be a mapping: {path}")

        return cls(data)

    def _validate(self):
        """Validate required config sections and option values."""
        required_sections = ['run_name', 'input', 'output']
        for section in required_sections:
            if section not in self._data:
                raise ValueError(f"Missing required config section: '{section}'")

        if 'edges' not in self._data['input']:
            raise ValueError("Missing required input entry: 'edges'")

        if self.backend not in BACKENDS:
            raise ValueError(f"Unsupported backend: '{self.backend}'. Choose from {BACKENDS}")

        step = self.default_step
        is_step_number = isinstance(step, int) and not isinstance(step, bool)
        if not is_step_number and step not in DEFAULT_STEP_RULES:
            raise ValueError(
                f"default_step must be one of {DEFAULT_STEP_RULES} or an integer, got {step!r}"
            )

        if step == 'pinned_node' and self.pinned_node is None:
            raise ValueError("default_step 'pinned_node' requires options.pinned_node")

    # --- Properties ---

    @property
    def run_name(self) -> str:
        return self._data['run_name']

    @property
    def description(self) -> str:
        return self._data.get('description', '')

    # --- Input ---

    @property
    def edges_path(self) -> Path:
        return Path(self._data['input']['edges'])

    @property
    def nodes_path(self) -> Optional[Path]:
        """Optional table with an 'id' column listing every node, including isolated ones."""
        nodes = self._data['input'].get('nodes')
        return Path(nodes) if nodes else None

    @property
    def source_column(self) -> str:
        return self._data['input'].get('source_column', 'a')

    @property
    def target_column(self) -> str:
        return self._data['input'].get('target_column', 'b')

    @property
    def weight_column(self) -> str:
        return self._data['input'].get('weight_column', 'strength')

    @property
    def node_id_column(self) -> str:
        return self._data['input'].get('node_id_column', 'id')

    # --- Output paths ---

    @property
    def base_dir(self) -> Path:
        return Path(self._data['output'].get('base_dir', '.'))

    @property
    def components_csv(self) -> Path:
        return self.base_dir / self._data['output'].get('components_csv', 'components.csv')

    @property
    def summary_csv(self) -> Path:
        return self.base_dir / self._data['output'].get('summary_csv', 'component_summary.csv')

    @property
    def structure_csv(self) -> Optional[Path]:
        """Subgraph structure output; set to null in the config to skip the sweep."""
        output = self._data['output']
        if 'structure_csv' in output and output['structure_csv'] is None:
            return None
        return self.base_dir / output.get('structure_csv', 'subgraph_structure.csv')

    # --- Options ---

    @property
    def _options(self) -> Dict[str, Any]:
        return self._data.get('options') or {}

    @property
    def backend(self) -> str:
        return self._options.get('backend', 'union_find')

    @property
    def check_weights(self) -> bool:
        return bool(self._options.get('check_weights', True))

    @property
    def expected_nodes(self) -> Optional[int]:
        """Expected count of edge labels plus node table ids."""
        value = self._options.get('expected_nodes')
        return int(value) if value is not None else None

    @property
    def pinned_node(self) -> Optional[str]:
        value = self._options.get('pinned_node')
        return str(value) if value is not None else None

    @property
    def default_step(self) -> Union[str, int]:
        """Default step rule; a pinned node without an explicit rule selects 'pinned_node'."""
        step = self._options.get('default_step')
        if step is None:
            return 'pinned_node' if self.pinned_node is not None else 'min_max_rule'
        return step

    def to_dict(self) -> Dict[str, Any]:
        return dict(self._data)
