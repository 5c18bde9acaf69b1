from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Sequence

from .sensitivity import Sensitivity
from .transport import SENSOR_DEVICE_PRODUCT_ID, SENSOR_DEVICE_VENDOR_ID, SerialSettings


@dataclass
class CalibrationSettings:
    period_sec: float = 0.01
    samples: int = 100


@dataclass
class SensitivityValues:
    force: List[float] = field(default_factory=lambda: [24.9, 24.6, 24.5])
    torque: List[float] = field(default_factory=lambda: [1664.7, 1639.7, 1638.0])

    @staticmethod
    def from_mapping(data: Dict[str, Any]) -> "SensitivityValues":
        defaults = SensitivityValues()
        values = SensitivityValues(
            force=_float_triplet(data.get("force", defaults.force), "sensitivity.force"),
            torque=_float_triplet(data.get("torque", defaults.torque), "sensitivity.torque"),
        )
        values.build()
        return values

    def build(self) -> Sensitivity:
        return Sensitivity.from_values(self.force, self.torque)


@dataclass
class SensorConfig:
    serial: SerialSettings = field(default_factory=SerialSettings)
    sensitivity: SensitivityValues = field(default_factory=SensitivityValues)
    calibration: CalibrationSettings = field(default_factory=CalibrationSettings)
    output_csv: Path | None = None


def _float_triplet(value: Any, key: str) -> List[float]:
    if not isinstance(value, list) or len(value) != 3:
        raise ValueError(f"{key} must be a list of 3 numbers")
    try:
        return [float(item) for item in value]
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{key} must be a list of 3 numbers") from exc


def _parse_id(value: Any, key: str) -> int:
    if isinstance(value, int):
        return value
    try:
        return int(str(value), 0)
    except ValueError as exc:
        raise ValueError(f"{key} must be an integer (e.g. 0x10C4)") from exc


def _load_json(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as fh:
        return json.load(fh)


def _merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged: Dict[str, Any] = {**base}
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            merged[key] = _merge(base[key], value)  # type: ignore[index]
        else:
            merged[key] = value
    return merged


def load_config(path: Path | str | None = None, overrides: Sequence[str] | None = None) -> SensorConfig:
    """
    Load the sensor configuration from JSON and apply CLI-style overrides.

    Overrides are dotted `key=value` pairs, e.g.:
        ["serial.timeout=0.05", "calibration.samples=200"]
    Without a path only the defaults and overrides are used.
    """
    data = _load_json(Path(path)) if path is not None else {}
    override_data: Dict[str, Any] = {}
    for override in overrides or []:
        key, raw_value = _parse_override(override)
        _assign_nested(override_data, key, raw_value)
    merged = _merge(data, override_data)

    serial_data = merged.get("serial") or {}
    calibration_data = merged.get("calibration") or {}
    samples = int(calibration_data.get("samples", 100))
    if samples <= 0:
        raise ValueError("calibration.samples must be positive")
    port = serial_data.get("port")
    return SensorConfig(
        serial=SerialSettings(
            vendor_id=_parse_id(serial_data.get("vendor_id", SENSOR_DEVICE_VENDOR_ID), "serial.vendor_id"),
            product_id=_parse_id(serial_data.get("product_id", SENSOR_DEVICE_PRODUCT_ID), "serial.product_id"),
            baudrate=int(serial_data.get("baudrate", 921600)),
            timeout=float(serial_data.get("timeout", 0.01)),
            port=str(port) if port else None,
        ),
        sensitivity=SensitivityValues.from_mapping(merged.get("sensitivity") or {}),
        calibration=CalibrationSettings(
            period_sec=float(calibration_data.get("period_sec", 0.01)),
            samples=samples,
        ),
        output_csv=Path(merged["output_csv"]) if merged.get("output_csv") else None,
    )


def _parse_override(item: str) -> tuple[str, Any]:
    if "=" not in item:
        raise ValueError(f"Override '{item}' must use key=value syntax")
    key, raw_value = item.split("=", 1)
    key = key.strip()
    if not key:
        raise ValueError("Override key may not be empty")
    value = _coerce_value(raw_value.strip())
    return key, value


def _coerce_value(raw: str) -> Any:
    if raw.lower() in {"true", "false"}:
        return raw.lower() == "true"
    if raw.lower().startswith("0x"):
        return raw
    try:
        if "." in raw or "e" in raw.lower():
            return float(raw)
        return int(raw)
    except ValueError:
        pass
    if raw.startswith("[") and raw.endswith("]"):
        return json.loads(raw)
    if raw.startswith("{") and raw.endswith("}"):
        return json.loads(raw)
    return raw


def _assign_nested(target: Dict[str, Any], dotted_key: str, value: Any) -> None:
    cursor = target
    parts = dotted_key.split(".")
    for part in parts[:-1]:
        cursor = cursor.setdefault(part, {})
    cursor[parts[-1]] = value
