"""
Configuration loading for geonav_transform.

Bridges three sources:
1. YAML configuration files (config/geonav_transform.yaml)
2. Pydantic validation model (common/param_models.py)
3. ROS 2 parameter system

The datum gets its own parser: a missing or malformed datum must not stop the
node, so parse_datum() returns a result with diagnostics instead of raising.

Usage:
    from geonav_transform.config import load_geonav_config, parse_datum

    params = load_geonav_config("/path/to/geonav_transform.yaml")
    result = parse_datum(params.datum)
    for msg in result.errors:
        logger.error(msg)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, TYPE_CHECKING

import yaml
from pydantic import ValidationError

from geonav_transform.common.errors import ConfigurationError
from geonav_transform.common.param_models import GeonavParams
from geonav_transform.common.types import DatumConfig, GeodeticPoint

if TYPE_CHECKING:
    from rclpy.node import Node


NODE_NAME = "geonav_transform"
DEGRADED_DATUM_MESSAGE = "Setting to 0,0,0 which is non-ideal!"


def load_yaml_config(config_path: str | Path) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If config file is invalid YAML
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def merge_configs(*configs: Dict[str, Any]) -> Dict[str, Any]:
    """Merge configuration dicts; later configs override earlier ones."""
    result: Dict[str, Any] = {}
    for config in configs:
        if config:
            _deep_merge(result, config)
    return result


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> None:
    for key, value in override.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value


def extract_node_parameters(data: Dict[str, Any], node_name: str = NODE_NAME) -> Dict[str, Any]:
    """
    Pull the ros__parameters block for node_name out of a parameter file.

    Accepts "<node_name>:", "/**:" and bare (already unwrapped) layouts.
    """
    for key in (node_name, f"/{node_name}", "/**"):
        section = data.get(key)
        if isinstance(section, dict) and "ros__parameters" in section:
            return dict(section["ros__parameters"] or {})
    if "ros__parameters" in data:
        return dict(data["ros__parameters"] or {})
    return dict(data)


def load_geonav_config(
    base_path: Optional[str | Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> GeonavParams:
    """
    Load and validate node configuration.

    Args:
        base_path: Parameter YAML (defaults are used when None)
        overrides: Optional dictionary of parameter overrides

    Raises:
        ValidationError: If configuration is invalid
    """
    base_config: Dict[str, Any] = {}
    if base_path:
        base_config = extract_node_parameters(load_yaml_config(base_path))

    merged = merge_configs(base_config, overrides or {})
    return GeonavParams(**merged)


def validate_geonav_params(node: "Node") -> GeonavParams:
    """
    Validate declared ROS 2 node parameters against GeonavParams.

    Raises:
        ValidationError: If parameters are invalid
    """
    values: Dict[str, Any] = {}
    for name in GeonavParams.model_fields:
        if node.has_parameter(name):
            values[name] = node.get_parameter(name).value

    try:
        return GeonavParams(**values)
    except ValidationError as exc:
        node.get_logger().error(f"Invalid geonav_transform parameters: {exc}")
        raise


def get_default_config_path() -> Path:
    """Path to config/geonav_transform.yaml in the source tree."""
    pkg_root = Path(__file__).parent.parent
    return pkg_root / "config" / "geonav_transform.yaml"


@dataclass
class DatumParseResult:
    """
    Outcome of parsing the datum parameter.

    degraded is True when the datum fell back to (0, 0, 0); errors then holds
    the messages to log at ERROR level.
    """
    datum: DatumConfig
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
    degraded: bool = False

    def emit(self, logger) -> None:
        if logger is None:
            return
        for msg in self.errors:
            logger.error(msg)
        for msg in self.warnings:
            logger.warn(msg)


def default_datum() -> DatumConfig:
    return DatumConfig(point=GeodeticPoint(0.0, 0.0, 0.0), heading=0.0)


def _datum_values(raw) -> List[float]:
    if not isinstance(raw, (list, tuple)):
        raise ConfigurationError(f"datum must be a list, got {type(raw).__name__}")
    if len(raw) < 3:
        raise ConfigurationError(
            f"datum needs (latitude, longitude, yaw), got {len(raw)} entries"
        )
    values = []
    for item in raw[:3]:
        if isinstance(item, bool):
            raise ConfigurationError(f"datum entry {item!r} is not a number")
        try:
            value = float(item)
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"datum entry {item!r} is not a number") from exc
        if not math.isfinite(value):
            raise ConfigurationError(f"datum entry {item!r} is not finite")
        values.append(value)
    return values


def parse_datum(raw) -> DatumParseResult:
    """
    Parse [latitude, longitude, yaw] into a DatumConfig.

    Never raises. Absent or malformed input yields the (0, 0, 0) datum with
    error messages; more than three entries warns and uses the first three.
    Altitude is always 0.
    """
    if raw is None:
        return DatumParseResult(
            datum=default_datum(),
            errors=[
                "ERROR <datum> parameter is not supplied in geonav_transform configuration",
                DEGRADED_DATUM_MESSAGE,
            ],
            degraded=True,
        )

    try:
        lat, lon, yaw = _datum_values(raw)
    except ConfigurationError as exc:
        return DatumParseResult(
            datum=default_datum(),
            errors=[f"ERROR datum config: {exc}", DEGRADED_DATUM_MESSAGE],
            degraded=True,
        )

    warnings = []
    if len(raw) > 3:
        warnings.append(
            "Deprecated datum parameter configuration detected. Only the first "
            "three parameters (latitude, longitude, yaw) will be used."
        )
    return DatumParseResult(
        datum=DatumConfig(point=GeodeticPoint(lat, lon, 0.0), heading=yaw),
        warnings=warnings,
    )
