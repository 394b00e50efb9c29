"""
Configuration loader utility

Reads and writes SimulationConfig YAML files. A scenario can be given as
a file path or as the bare name of a file under scenarios/simulation/.
"""

import yaml
from pathlib import Path
from typing import Union

from .simulation import SimulationConfig

SCENARIO_DIR = Path(__file__).resolve().parent.parent / "scenarios" / "simulation"


class ConfigLoader:
    """Utility class for loading configuration files"""

    @staticmethod
    def resolve_scenario(name_or_path: Union[str, Path]) -> Path:
        """
        Map 'default' or 'realtime_demo.yaml' to the shipped scenario file;
        anything that already exists is returned unchanged.

        Raises:
            FileNotFoundError: If neither the path nor the scenario exists
        """
        path = Path(name_or_path)
        if path.exists():
            return path

        candidate = SCENARIO_DIR / path.name
        if candidate.suffix not in ('.yaml', '.yml'):
            candidate = candidate.with_suffix('.yaml')
        if candidate.exists():
            return candidate

        raise FileNotFoundError(f"Config file not found: {name_or_path}")

    @staticmethod
    def load_simulation(file_path: Union[str, Path]) -> SimulationConfig:
        """
        Load and validate a SimulationConfig

        Raises:
            FileNotFoundError: If the file (or scenario) doesn't exist
            ValueError: If validation fails
        """
        file_path = ConfigLoader.resolve_scenario(file_path)
        with open(file_path, 'r', encoding='utf-8') as f:
            # An empty file means "all defaults"
            data = yaml.safe_load(f) or {}

        config = SimulationConfig.from_dict(data)
        config.validate()
        return config

    @staticmethod
    def save_simulation(config: SimulationConfig, file_path: Union[str, Path]) -> Path:
        """Write config as YAML, creating parent directories as needed"""
        file_path = Path(file_path)
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False, allow_unicode=True)
        return file_path

    @staticmethod
    def available_scenarios():
        """Names of the scenarios shipped under scenarios/simulation/"""
        return sorted(path.stem for path in SCENARIO_DIR.glob('*.yaml'))


# Convenience functions
def load_simulation_config(file_path: Union[str, Path]) -> SimulationConfig:
    return ConfigLoader.load_simulation(file_path)


def save_simulation_config(config: SimulationConfig, file_path: Union[str, Path]) -> Path:
    return ConfigLoader.save_simulation(config, file_path)
