"""Project configuration file support."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Set

import yaml

from model.errors import ConfigurationError
from scanner.discovery import DEFAULT_SOURCE_EXTENSIONS

DEFAULT_MAX_ROUNDS = 10
CONFIG_FILE_NAMES = (".resmover.yaml", ".resmover.yml", ".resmover.json")

_KNOWN_KEYS = {"max_rounds", "source_extensions", "ignore_pattern", "color"}


@dataclass
class MoverConfig:
    max_rounds: int = DEFAULT_MAX_ROUNDS
    source_extensions: Set[str] = field(default_factory=lambda: set(DEFAULT_SOURCE_EXTENSIONS))
    ignore_pattern: Optional[str] = None
    color: bool = True


def normalize_extensions(extensions: Iterable[str]) -> Set[str]:
    """Lower-case extensions with a leading dot: ``KT`` -> ``.kt``."""
    normalized = set()
    for ext in extensions:
        if not ext.startswith("."):
            ext = "." + ext
        normalized.add(ext.lower())
    return normalized


def parse_config_file(file_path: Path) -> Dict[str, Any]:
    """
    Read a YAML or JSON configuration file.
    
    Raises:
        ConfigurationError: If the file cannot be read or parsed.
    """
    try:
        content = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigurationError(f"Cannot read config file '{file_path}': {e}") from e
    
    try:
        if file_path.suffix.lower() == ".json":
            data = json.loads(content)
        else:
            data = yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Invalid config file '{file_path}': {e}") from e
    
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"Config file '{file_path}' must contain a mapping")
    return data


def find_config_file(directory: Path) -> Optional[Path]:
    for name in CONFIG_FILE_NAMES:
        candidate = directory / name
        if candidate.is_file():
            return candidate
    return None


def config_from_dict(data: Dict[str, Any]) -> MoverConfig:
    unknown = set(data) - _KNOWN_KEYS
    if unknown:
        raise ConfigurationError(f"Unknown config key(s): {', '.join(sorted(unknown))}")
    
    config = MoverConfig()
    
    if "max_rounds" in data:
        max_rounds = data["max_rounds"]
        if not isinstance(max_rounds, int) or isinstance(max_rounds, bool) or max_rounds < 1:
            raise ConfigurationError("max_rounds must be a positive integer")
        config.max_rounds = max_rounds
    
    if "source_extensions" in data:
        extensions = data["source_extensions"]
        if not isinstance(extensions, list) or not all(isinstance(e, str) for e in extensions):
            raise ConfigurationError("source_extensions must be a list of strings")
        config.source_extensions = normalize_extensions(extensions)
    
    if "ignore_pattern" in data:
        pattern = data["ignore_pattern"]
        if pattern is not None and not isinstance(pattern, str):
            raise ConfigurationError("ignore_pattern must be a string")
        config.ignore_pattern = pattern
    
    if "color" in data:
        if not isinstance(data["color"], bool):
            raise ConfigurationError("color must be true or false")
        config.color = data["color"]
    
    return config


def load_config(path: Optional[Path] = None, search_dir: Optional[Path] = None) -> MoverConfig:
    """
    Load the run configuration.
    
    Args:
        path: Explicit config file. Must exist.
        search_dir: Directory to look for a default config file in when no
                    explicit path is given (default: current directory).
    
    Returns:
        The configuration; defaults when no file is found.
    """
    if path is None:
        path = find_config_file(search_dir if search_dir is not None else Path.cwd())
        if path is None:
            return MoverConfig()
    elif not path.is_file():
        raise ConfigurationError(f"Config file '{path}' does not exist")
    
    return config_from_dict(parse_config_file(path))
