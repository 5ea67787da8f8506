import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = Path(__file__).parent.parent / "config" / "engine.yaml"


@dataclass(frozen=True)
class EngineConfig:
    # Dragging onto any earlier path cell rewinds to it, not only the one-before-head cell.
    allow_multi_step_rewind: bool = False
    # Run numbering validation when loading levels from files.
    validate_levels: bool = True
    # Search budget for hints and uniqueness checks; None means unbounded.
    solver_node_limit: int | None = 200_000

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EngineConfig":
        known = {f.name: f for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                raise ValueError(f"Unknown config key: {key}")
            if key == "solver_node_limit":
                if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value <= 0):
                    raise ValueError(f"Config key '{key}' must be a positive integer or null, got {value!r}")
            elif not isinstance(value, bool):
                raise ValueError(f"Config key '{key}' must be a boolean, got {value!r}")
        return cls(**data)


def load_config(config_file: str | Path | None = None) -> EngineConfig:
    """
    Load engine settings from a YAML file.

    Args:
        config_file: Path to the YAML file. If None, uses config/engine.yaml and
                     falls back to the defaults when that file does not exist.

    Returns:
        The parsed EngineConfig
    """
    if config_file is None:
        if not DEFAULT_CONFIG_FILE.exists():
            logger.debug("No %s found, using default engine config", DEFAULT_CONFIG_FILE)
            return EngineConfig()
        config_file = DEFAULT_CONFIG_FILE
    else:
        config_file = Path(config_file)

    with open(config_file, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_file} must contain a mapping")

    config = EngineConfig.from_dict(data)
    logger.debug("Loaded engine config from %s: %s", config_file, config)
    return config
