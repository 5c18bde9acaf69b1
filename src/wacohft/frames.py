from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Dict, Tuple

from .errors import InvalidDigitsError, InvalidEncodingError, InvalidTextLengthError, SensorError
from .units import Triplet

# Response layout:
# ---------------------------
# X111122223333444455556666++
# X: record number (1 byte)
# 1111...6666: one 4-digit hex field per axis (6 * 4 = 24 bytes)
# ++: CR+LF (2 bytes)

AXIS_DATUM_LENGTH = 4
AXIS_DATA_START_INDEX = 1
AXIS_COUNT = 6
NEWLINE_BYTES = 2
RESPONSE_BYTES = AXIS_DATA_START_INDEX + AXIS_DATUM_LENGTH * AXIS_COUNT + NEWLINE_BYTES

# Asks the sensor to send the next frame.
REQUEST_COMMAND = b"R"

_HEX_FIELD = re.compile(rb"[0-9A-Fa-f]{%d}" % AXIS_DATUM_LENGTH)


@dataclass(frozen=True)
class DigitalReading:
    """Unscaled sensor output: x, y, z force then x, y, z torque."""

    force: Triplet[int]
    torque: Triplet[int]

    @property
    def values(self) -> Tuple[int, ...]:
        return (*self.force, *self.torque)


def decode_frame(reception: bytes) -> DigitalReading:
    """
    Extract the six digital readings from one raw response.

    The whole buffer must be valid UTF-8. Each axis occupies the 4 bytes
    starting at ``1 + axis * 4``; the record marker and line terminator are
    not inspected.
    """

    try:
        reception.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidEncodingError(f"Sensor response is not valid UTF-8: {exc}") from exc

    digitals = []
    for axis in range(AXIS_COUNT):
        start = AXIS_DATA_START_INDEX + axis * AXIS_DATUM_LENGTH
        end = start + AXIS_DATUM_LENGTH
        if end > len(reception):
            raise InvalidTextLengthError(
                f"Received text's length from the sensor ({len(reception)}) "
                f"does not cover axis {axis} (bytes {start}..{end})"
            )
        field = reception[start:end]
        try:
            field.decode("utf-8")
        except UnicodeDecodeError as exc:
            # the slice cuts a multi-byte character
            raise InvalidTextLengthError(
                f"Axis {axis} field does not fall on character boundaries"
            ) from exc
        if not _HEX_FIELD.fullmatch(field):
            raise InvalidDigitsError(f"Axis {axis} field {field!r} is not hexadecimal")
        digitals.append(int(field, 16))

    return DigitalReading(
        force=Triplet(digitals[0], digitals[1], digitals[2]),
        torque=Triplet(digitals[3], digitals[4], digitals[5]),
    )


class FrameParser:
    """
    Decode responses one at a time while counting rejected frames.
    Errors are re-raised to the caller after being counted.
    """

    def __init__(self) -> None:
        self._stats: Dict[str, int] = {
            "frames": 0,
            "encoding_errors": 0,
            "length_errors": 0,
            "digit_errors": 0,
        }
        self._log = logging.getLogger(__name__)

    def parse(self, reception: bytes) -> DigitalReading:
        try:
            reading = decode_frame(reception)
        except SensorError as exc:
            self._stats[self._error_key(exc)] += 1
            self._log.debug("Discarding frame %r: %s", reception, exc)
            raise
        self._stats["frames"] += 1
        return reading

    @staticmethod
    def _error_key(exc: SensorError) -> str:
        if isinstance(exc, InvalidEncodingError):
            return "encoding_errors"
        if isinstance(exc, InvalidTextLengthError):
            return "length_errors"
        return "digit_errors"

    def stats(self) -> Dict[str, int]:
        return dict(self._stats)

    def reset(self) -> None:
        for key in self._stats:
            self._stats[key] = 0
