from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

import serial
from serial.tools import list_ports

from .errors import SensorNotFoundError, SerialPortOpenError

logger = logging.getLogger(__name__)

SENSOR_DEVICE_VENDOR_ID = 0x10C4
SENSOR_DEVICE_PRODUCT_ID = 0xEA60


@dataclass
class SerialSettings:
    vendor_id: int = SENSOR_DEVICE_VENDOR_ID
    product_id: int = SENSOR_DEVICE_PRODUCT_ID
    baudrate: int = 921600
    timeout: float = 0.01
    port: Optional[str] = None


def list_sensor_ports(settings: SerialSettings) -> List[str]:
    """Return device paths of USB serial ports whose ids match the sensor."""

    return [
        info.device
        for info in list_ports.comports()
        if info.vid == settings.vendor_id and info.pid == settings.product_id
    ]


def find_sensor_port(settings: SerialSettings) -> str:
    if settings.port:
        return settings.port
    matches = list_sensor_ports(settings)
    if not matches:
        raise SensorNotFoundError(settings.vendor_id, settings.product_id)
    if len(matches) > 1:
        logger.warning("Found %d matching sensors, using %s", len(matches), matches[0])
    return matches[0]


def open_serial(settings: SerialSettings) -> Any:
    """Locate the sensor and open it with the 8N1, no flow control setup it expects."""

    path = find_sensor_port(settings)
    try:
        handle = serial.Serial(
            port=path,
            baudrate=settings.baudrate,
            bytesize=serial.EIGHTBITS,
            parity=serial.PARITY_NONE,
            stopbits=serial.STOPBITS_ONE,
            xonxoff=False,
            rtscts=False,
            dsrdtr=False,
            timeout=settings.timeout,
        )
    except (serial.SerialException, ValueError) as exc:
        raise SerialPortOpenError(f"Failed to open {path}: {exc}") from exc
    logger.info("Connected to %s (%d baud)", path, settings.baudrate)
    return handle
