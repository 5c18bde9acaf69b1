from __future__ import annotations

from pathlib import Path

import pytest

from wacohft.config import SensorConfig, load_config
from wacohft.sensitivity import FORCE_SENSITIVITY, TORQUE_SENSITIVITY
from wacohft.units import PerNewton, Triplet


def test_defaults_without_file() -> None:
    cfg = load_config()
    assert isinstance(cfg, SensorConfig)
    assert cfg.serial.vendor_id == 0x10C4
    assert cfg.serial.product_id == 0xEA60
    assert cfg.serial.baudrate == 921600
    assert cfg.serial.port is None
    assert cfg.calibration.samples == 100
    assert cfg.output_csv is None
    sensitivity = cfg.sensitivity.build()
    assert sensitivity.force == FORCE_SENSITIVITY
    assert sensitivity.torque == TORQUE_SENSITIVITY


def test_load_config_overrides(tmp_path: Path) -> None:
    cfg_path = tmp_path / "config.json"
    cfg_path.write_text(
        """
        {
          "serial": {"vendor_id": "0x10C4", "product_id": "0xEA60", "timeout": 0.01},
          "sensitivity": {"force": [25.0, 25.0, 25.0]},
          "calibration": {"period_sec": 0.02, "samples": 50},
          "output_csv": "out/wrench.csv"
        }
        """,
        encoding="utf-8",
    )
    cfg = load_config(
        cfg_path,
        overrides=[
            "serial.timeout=0.05",
            "serial.port=/dev/ttyUSB1",
            "calibration.samples=200",
            "sensitivity.torque=[1600, 1600, 1600.5]",
        ],
    )
    assert cfg.serial.timeout == 0.05
    assert cfg.serial.port == "/dev/ttyUSB1"
    assert cfg.calibration.period_sec == 0.02
    assert cfg.calibration.samples == 200
    assert cfg.output_csv == Path("out/wrench.csv")
    assert cfg.sensitivity.force == [25.0, 25.0, 25.0]
    assert cfg.sensitivity.torque == [1600.0, 1600.0, 1600.5]
    assert cfg.sensitivity.build().force == Triplet.from_cloned(PerNewton(25.0))


def test_hex_id_override() -> None:
    cfg = load_config(overrides=["serial.vendor_id=0x0403", "serial.product_id=24577"])
    assert cfg.serial.vendor_id == 0x0403
    assert cfg.serial.product_id == 24577


@pytest.mark.parametrize(
    "override",
    [
        "sensitivity.force=[1, 2]",
        "sensitivity.torque=[1, 0, 2]",
        "calibration.samples=0",
        "serial.vendor_id=abc",
        "missing_equals",
    ],
)
def test_invalid_config_rejected(override: str) -> None:
    with pytest.raises(ValueError):
        load_config(overrides=[override])
