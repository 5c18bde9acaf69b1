from __future__ import annotations

import logging
import operator
import time
from dataclasses import replace
from functools import reduce
from typing import Any, Dict, List, Optional

import numpy as np
import serial

from .errors import SensorError, SensorIoError, ShortReadError, ShortWriteError
from .frames import REQUEST_COMMAND, RESPONSE_BYTES, FrameParser
from .sensitivity import Sensitivity
from .transport import SerialSettings, open_serial
from .units import Wrench

logger = logging.getLogger(__name__)


class Wdf6m200:
    """
    WDF-6M200-3 Wacoh-tech 6-axis force/torque sensor.

    The sensor answers one frame per ``R`` command, so a request is kept
    pending at all times: ``open`` sends the first one and every successful
    ``update`` sends the next. Not safe for concurrent use.
    """

    def __init__(self, port: Any, sensitivity: Optional[Sensitivity] = None) -> None:
        self._port = port
        self.sensitivity = sensitivity or Sensitivity()
        self.parser = FrameParser()
        self._raw_wrench = Wrench.zeroed()
        # the sensor reads non-zero with no load applied; subtracted from raw output
        self._offset = Wrench.zeroed()
        self._counters: Dict[str, int] = {
            "updates": 0,
            "short_reads": 0,
            "short_writes": 0,
            "io_errors": 0,
        }

    @classmethod
    def open(
        cls,
        timeout: float,
        settings: Optional[SerialSettings] = None,
        sensitivity: Optional[Sensitivity] = None,
    ) -> "Wdf6m200":
        """
        Find the sensor, open its serial port and request the first frame.

        ``timeout`` is the serial read timeout in seconds.
        """

        settings = replace(settings or SerialSettings(), timeout=timeout)
        port = open_serial(settings)
        sensor = cls(port, sensitivity)
        try:
            sensor._request_next_data()
        except Exception:
            sensor.close()
            raise
        return sensor

    @property
    def raw_wrench(self) -> Wrench:
        return self._raw_wrench

    @property
    def offset(self) -> Wrench:
        return self._offset

    def last_measurement(self) -> Wrench:
        """
        Return the latest bias-corrected measurement.

        No communication happens here; call ``update`` to poll the sensor.
        """

        return self._raw_wrench - self._offset

    def update(self) -> None:
        """Read the pending frame, request the next one and store the new raw wrench."""

        reception = self._read_bytes()
        reading = self.parser.parse(reception)
        raw_wrench = self.sensitivity.to_wrench(reading)
        self._request_next_data()
        self._raw_wrench = raw_wrench
        self._counters["updates"] += 1

    def calibrate(self, period: float, samples: int) -> Wrench:
        """
        Average ``samples`` raw readings taken ``period`` seconds apart and use
        the mean as the zero offset.

        A failed poll does not abort calibration; the previous raw reading is
        recorded for that sample instead.
        """

        if samples <= 0:
            raise ValueError(f"calibrate() requires samples > 0, got {samples}")

        raw_wrenches: List[Wrench] = []
        for index in range(samples):
            try:
                self.update()
            except SensorError as exc:
                logger.warning(
                    "Calibration sample %d/%d reuses previous reading: %s", index + 1, samples, exc
                )
            raw_wrenches.append(self._raw_wrench)
            time.sleep(period)

        total = reduce(operator.add, raw_wrenches, Wrench.zeroed())
        count = len(raw_wrenches)
        self._offset = Wrench(
            force=total.force.map(lambda value: value / count),
            torque=total.torque.map(lambda value: value / count),
        )

        spread = np.stack([wrench.to_array() for wrench in raw_wrenches]).std(axis=0)
        logger.info("Calibration done (%d samples), offset=%s", count, self._offset.to_array())
        logger.debug("Calibration spread per axis: %s", spread)
        return self._offset

    def stats(self) -> Dict[str, int]:
        stats = self.parser.stats()
        stats.update(self._counters)
        return stats

    def close(self) -> None:
        if self._port is None:
            return
        try:
            self._port.close()
        finally:
            self._port = None

    def __enter__(self) -> "Wdf6m200":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _request_next_data(self) -> None:
        try:
            written = self._port.write(REQUEST_COMMAND)
        except (serial.SerialException, OSError) as exc:
            self._counters["io_errors"] += 1
            raise SensorIoError(f"Failed to send request to the sensor: {exc}") from exc
        if written != len(REQUEST_COMMAND):
            self._counters["short_writes"] += 1
            raise ShortWriteError(len(REQUEST_COMMAND), written or 0)

    def _read_bytes(self) -> bytes:
        try:
            reception = self._port.read(RESPONSE_BYTES)
        except (serial.SerialException, OSError) as exc:
            self._counters["io_errors"] += 1
            raise SensorIoError(f"Failed to read from the sensor: {exc}") from exc
        if len(reception) != RESPONSE_BYTES:
            self._counters["short_reads"] += 1
            raise ShortReadError(RESPONSE_BYTES, len(reception))
        return bytes(reception)
