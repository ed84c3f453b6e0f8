"""File helpers for configs.

Provides:
    - load_yaml(): safe YAML parsing with path-aware errors
    - atomic_yaml_dump(): write YAML via tmp file, fsync, rename

Usage:
    from colordist.utils import fs
    data = fs.load_yaml("configs/colordist.v1.yaml")
"""

import os
from pathlib import Path
from typing import Any, Dict, Union

import yaml


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load YAML file safely.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content ({} for an empty file)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails

    Notes
    -----
    Uses safe_load to prevent arbitrary code execution.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e
    return data if data is not None else {}


def atomic_yaml_dump(obj: Any, path: Union[str, Path]) -> None:
    """Save object as YAML atomically (tmp → fsync → rename).

    Parameters
    ----------
    obj : Any
        Python object (dict, list, primitives)
    path : Union[str, Path]
        Target YAML file path; parent directories are created

    Raises
    ------
    RuntimeError
        If the directory, write or rename fails (tmp file is removed)
    """
    path = Path(path)

    yaml_str = yaml.safe_dump(
        obj,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True
    )

    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(tmp_path, 'wb') as f:
            f.write(yaml_str.encode('utf-8'))
            f.flush()
            os.fsync(f.fileno())
        tmp_path.replace(path)
    except OSError as e:
        if tmp_path.exists():
            tmp_path.unlink()
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e
