import json
import logging
from pathlib import Path
from typing import Any

import yaml

from zip_puzzle.errors import MalformedLevel
from zip_puzzle.models import Grid

logger = logging.getLogger(__name__)


def read_level(file_path: str | Path, validate: bool = True) -> Grid:
    """
    Reads a level mapping and builds a Grid from it. `.json` files are read as
    JSON, anything else as YAML. The document must hold `width`, `height`,
    `cells` and optionally `blockRight` / `blockUp`.
    """
    data: Any
    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = f.read()
        if str(file_path).endswith(".json"):
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (UnicodeDecodeError, json.JSONDecodeError, yaml.YAMLError) as e:
        raise MalformedLevel(f"Could not parse level file {file_path}: {e}") from e

    grid = Grid.from_description(data, strict=validate)
    logger.info("Loaded level %s (%dx%d)", file_path, grid.width, grid.height)
    return grid


def write_level(grid: Grid, file_path: str | Path) -> None:
    description = grid.to_description()
    with open(file_path, "w", encoding="utf-8") as f:
        if str(file_path).endswith(".json"):
            json.dump(description, f, indent=2)
            f.write("\n")
        else:
            yaml.safe_dump(description, f, default_flow_style=None, sort_keys=False)
