"""Conversion from digital sensor output to newtons and newton-metres."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .frames import DigitalReading
from .units import PerNewton, PerNewtonMeter, Quantity, Triplet, Wrench

# Digital output change per 1 N / 1 N*m on each axis, from the WDF-6M200-3 datasheet.
FORCE_SENSITIVITY: Triplet[PerNewton] = Triplet(24.9, 24.6, 24.5).map(PerNewton)
TORQUE_SENSITIVITY: Triplet[PerNewtonMeter] = Triplet(1664.7, 1639.7, 1638.0).map(PerNewtonMeter)


def scale(digital: Triplet[int], sensitivity: Triplet[Quantity]) -> Triplet[Quantity]:
    """Divide each digital reading by the sensitivity of its axis."""

    return digital.map(float).map_entrywise(sensitivity, lambda d, s: d / s)


@dataclass(frozen=True)
class Sensitivity:
    force: Triplet[PerNewton] = FORCE_SENSITIVITY
    torque: Triplet[PerNewtonMeter] = TORQUE_SENSITIVITY

    @staticmethod
    def from_values(force: Sequence[float], torque: Sequence[float]) -> "Sensitivity":
        if len(force) != 3 or len(torque) != 3:
            raise ValueError("sensitivity.force and sensitivity.torque need exactly 3 values")
        if any(float(value) == 0.0 for value in (*force, *torque)):
            raise ValueError("sensitivity values must be non-zero")
        return Sensitivity(
            force=Triplet(*force).map(PerNewton),
            torque=Triplet(*torque).map(PerNewtonMeter),
        )

    def to_wrench(self, reading: DigitalReading) -> Wrench:
        return Wrench(
            force=scale(reading.force, self.force),
            torque=scale(reading.torque, self.torque),
        )
