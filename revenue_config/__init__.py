"""
revenue_config -- single public entrypoint for engine configuration.

Responsibility:
    Provides the one way to obtain an ``EngineConfig`` at runtime through
    ``get_active_config()``.  Engines never read files or environment
    variables; they receive a config (or use ``DEFAULT_ENGINE_CONFIG``).

Failure modes:
    - ``FileNotFoundError`` -- the requested config file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``ConfigurationError`` -- a value has the wrong type or range.

Audit relevance:
    Every successful ``get_active_config()`` call emits a
    ``REVENUE_CONFIG_TRACE`` log entry with the config version, source
    path and checksum, tying calculated figures to the settings that
    rounded them.
"""

from __future__ import annotations

from pathlib import Path

from revenue_config.loader import compute_checksum, load_yaml_file, parse_engine_config
from revenue_config.schema import DEFAULT_ENGINE_CONFIG, EngineConfig
from revenue_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_config(config_path: Path | str | None = None) -> EngineConfig:
    """Load and validate the engine configuration.

    Args:
        config_path: YAML file to load.  Defaults to the packaged
            ``defaults.yaml``.

    Returns:
        A frozen ``EngineConfig``.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If validation fails.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    data = load_yaml_file(path)
    config = parse_engine_config(data, source=str(path))

    _logger.info(
        "REVENUE_CONFIG_TRACE",
        extra={
            "trace_type": "REVENUE_CONFIG_TRACE",
            "config_version": config.version,
            "config_path": str(path),
            "checksum": compute_checksum(data),
            "amount_places": config.amount_places,
            "proration_places": config.proration_places,
            "rounding": config.rounding,
        },
    )
    return config


__all__ = [
    "DEFAULT_CONFIG_PATH",
    "DEFAULT_ENGINE_CONFIG",
    "EngineConfig",
    "get_active_config",
]
