"""
Loader configuration for RTNet.

Provides the LoaderOptions carried through a load call and YAML/JSON loading
of those options with validation.
"""

import json
import yaml
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

from rtnet.util.device_manager import resolve_device, resolve_dtype

logger = logging.getLogger(__name__)


@dataclass
class ConfigValidationError(Exception):
    """Configuration validation error."""
    field: str
    message: str

    def __str__(self):
        return f"Configuration error in '{self.field}': {self.message}"


@dataclass(frozen=True)
class LoaderOptions:
    """
    Options for a single load call.

    Attributes:
        strict: Raise on unknown layer types / activation names instead of skipping them
        debug: Emit the step-by-step trace on the ``rtnet.debug`` logger
        dtype: Element type of the loaded weights ('float32', 'float64', ...)
        device: Device the weights are placed on
    """
    strict: bool = False
    debug: bool = False
    dtype: Optional[str] = None
    device: Optional[str] = None

    def with_overrides(self, **overrides: Any) -> "LoaderOptions":
        """Return a copy with the given non-None keyword overrides applied."""
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise TypeError(f"Unknown loader option(s): {sorted(unknown)}")
        changes = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **changes) if changes else self

    @property
    def torch_dtype(self):
        return resolve_dtype(self.dtype)

    @property
    def torch_device(self):
        return resolve_device(self.device)


def options_from_dict(config: Dict[str, Any]) -> LoaderOptions:
    """
    Build LoaderOptions from a plain mapping.

    Raises:
        ConfigValidationError: If a key is unknown or a value has the wrong type
    """
    if not isinstance(config, dict):
        raise ConfigValidationError("root", f"Expected a mapping, got {type(config).__name__}")

    allowed = {f.name for f in fields(LoaderOptions)}
    for key in config:
        if key not in allowed:
            raise ConfigValidationError(key, f"Unknown option. Allowed: {sorted(allowed)}")

    for key in ("strict", "debug"):
        if key in config and not isinstance(config[key], bool):
            raise ConfigValidationError(key, f"Must be a boolean, got {config[key]!r}")

    if config.get("dtype") is not None:
        try:
            resolve_dtype(config["dtype"])
        except ValueError as e:
            raise ConfigValidationError("dtype", str(e)) from e

    if config.get("device") is not None and not isinstance(config["device"], str):
        raise ConfigValidationError("device", f"Must be a string, got {config['device']!r}")

    return LoaderOptions(**config)


def load_loader_config(path: Union[str, Path]) -> LoaderOptions:
    """
    Load LoaderOptions from a YAML or JSON file.

    Args:
        path: Config file. A top-level ``loader`` section is used when present.

    Returns:
        Validated LoaderOptions

    Raises:
        FileNotFoundError: If config file doesn't exist
        ConfigValidationError: If config format is invalid
    """
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        if config_path.suffix.lower() == '.json':
            try:
                config = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigValidationError("json_format", f"Invalid JSON format: {e}") from e
        else:
            try:
                config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigValidationError("yaml_format", f"Invalid YAML format: {e}") from e

    if isinstance(config, dict) and "loader" in config:
        config = config["loader"] or {}

    options = options_from_dict(config)
    logger.info(f"Loaded loader configuration: {config_path}")
    return options
