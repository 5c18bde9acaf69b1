"""Errors raised while talking to the force/torque sensor."""
from __future__ import annotations


class SensorError(Exception):
    """Base class for every failure reported by the driver."""


class SensorNotFoundError(SensorError):
    def __init__(self, vendor_id: int, product_id: int) -> None:
        super().__init__(f"Sensor not found (vid=0x{vendor_id:04X}, pid=0x{product_id:04X})")
        self.vendor_id = vendor_id
        self.product_id = product_id


class SerialPortOpenError(SensorError):
    """The device exists but the serial port could not be opened or configured."""


class ShortReadError(SensorError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"The driver should read {expected} bytes from the sensor, "
            f"but actually {actual} bytes read"
        )
        self.expected = expected
        self.actual = actual


class ShortWriteError(SensorError):
    def __init__(self, expected: int, actual: int) -> None:
        super().__init__(
            f"The driver should write {expected} bytes to the sensor, "
            f"but actually {actual} bytes written"
        )
        self.expected = expected
        self.actual = actual


class SensorIoError(SensorError):
    """Transport-level I/O failure while reading or writing."""


class InvalidEncodingError(SensorError):
    """The response is not valid UTF-8 text."""


class InvalidTextLengthError(SensorError):
    """An axis field falls outside the decoded response text."""


class InvalidDigitsError(SensorError):
    """An axis field is not a 4-digit hexadecimal number."""
