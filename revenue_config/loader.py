"""
Configuration Loader (``revenue_config.loader``).

Responsibility
--------------
Loads an engine configuration YAML file and parses it into a typed
``EngineConfig``.  Runtime callers go through
``revenue_config.get_active_config()``; this module is the parsing
machinery behind it and the hook tests use to feed in-memory dicts.

Expected layout::

    version: "2025.1"
    rounding:
      amount_places: 2
      proration_places: 6
      mode: ROUND_HALF_UP
    tolerances:
      term_alignment_days: 1
      expiry_window_days: 30

Every section and key is optional; omitted values keep the
``EngineConfig`` defaults.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong types or out-of-range values -> ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

import yaml

from revenue_config.schema import ROUNDING_MODES, EngineConfig
from revenue_kernel.exceptions import ConfigurationError

_DEFAULTS = EngineConfig()


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ConfigurationError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ConfigurationError("<root>", "document must be a mapping", str(path))
    return data


def _section(data: dict[str, Any], name: str, source: str | None) -> dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(name, "section must be a mapping", source)
    return section


def _int_field(
    section: dict[str, Any],
    key: str,
    default: int,
    *,
    field_name: str,
    minimum: int,
    source: str | None,
) -> int:
    value = section.get(key, default)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(field_name, f"expected integer, got {value!r}", source)
    if value < minimum:
        raise ConfigurationError(field_name, f"must be >= {minimum}, got {value}", source)
    return value


def parse_engine_config(data: dict[str, Any], source: str | None = None) -> EngineConfig:
    """
    Parse an ``EngineConfig`` from a dict.

    Postconditions:
        - Returns a frozen ``EngineConfig``; omitted keys keep defaults.

    Raises:
        ConfigurationError: on wrong types or out-of-range values.
    """
    rounding = _section(data, "rounding", source)
    tolerances = _section(data, "tolerances", source)

    mode = rounding.get("mode", _DEFAULTS.rounding)
    if mode not in ROUNDING_MODES:
        raise ConfigurationError(
            "rounding.mode",
            f"unknown rounding mode {mode!r}; expected one of {sorted(ROUNDING_MODES)}",
            source,
        )

    return EngineConfig(
        amount_places=_int_field(
            rounding, "amount_places", _DEFAULTS.amount_places,
            field_name="rounding.amount_places", minimum=0, source=source,
        ),
        proration_places=_int_field(
            rounding, "proration_places", _DEFAULTS.proration_places,
            field_name="rounding.proration_places", minimum=0, source=source,
        ),
        rounding=mode,
        term_alignment_tolerance_days=_int_field(
            tolerances, "term_alignment_days", _DEFAULTS.term_alignment_tolerance_days,
            field_name="tolerances.term_alignment_days", minimum=0, source=source,
        ),
        expiry_window_days=_int_field(
            tolerances, "expiry_window_days", _DEFAULTS.expiry_window_days,
            field_name="tolerances.expiry_window_days", minimum=0, source=source,
        ),
        version=str(data.get("version", _DEFAULTS.version)),
    )


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Postconditions:
        - Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
