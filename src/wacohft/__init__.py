"""
Driver for the Wacoh-tech WDF-6M200 6-axis force/torque sensor.

The sensor talks a fixed 27-byte ASCII frame over USB serial. This package
decodes those frames, scales them to newtons and newton-metres and removes the
sensor's zero-load bias.
"""

from importlib.metadata import PackageNotFoundError, version

from .errors import (
    InvalidDigitsError,
    InvalidEncodingError,
    InvalidTextLengthError,
    SensorError,
    SensorIoError,
    SensorNotFoundError,
    SerialPortOpenError,
    ShortReadError,
    ShortWriteError,
)
from .frames import RESPONSE_BYTES, DigitalReading, FrameParser, decode_frame
from .sensitivity import FORCE_SENSITIVITY, TORQUE_SENSITIVITY, Sensitivity, scale
from .session import Wdf6m200
from .transport import SerialSettings
from .units import Meter, Newton, NewtonMeter, PerNewton, PerNewtonMeter, Triplet, Unitless, Wrench

try:  # pragma: no cover - fallback when package metadata missing
    __version__ = version("wacohft")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

__all__ = [
    "__version__",
    "DigitalReading",
    "FrameParser",
    "RESPONSE_BYTES",
    "decode_frame",
    "FORCE_SENSITIVITY",
    "TORQUE_SENSITIVITY",
    "Sensitivity",
    "scale",
    "SerialSettings",
    "Wdf6m200",
    "Meter",
    "Newton",
    "NewtonMeter",
    "PerNewton",
    "PerNewtonMeter",
    "Triplet",
    "Unitless",
    "Wrench",
    "SensorError",
    "SensorNotFoundError",
    "SerialPortOpenError",
    "ShortReadError",
    "ShortWriteError",
    "SensorIoError",
    "InvalidEncodingError",
    "InvalidTextLengthError",
    "InvalidDigitsError",
]
