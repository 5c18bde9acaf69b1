"""Dimension-tagged quantities, 3-axis triplets and force/torque wrenches."""
from __future__ import annotations

import operator
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, Generic, Iterator, Tuple, Type, TypeVar

import numpy as np

T = TypeVar("T")
U = TypeVar("U")
V = TypeVar("V")
Q = TypeVar("Q", bound="Quantity")

Dimension = Tuple[int, int]  # (newton exponent, metre exponent)

_REGISTRY: Dict[Dimension, Type["Quantity"]] = {}


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Quantity:
    """
    A float magnitude whose class carries its physical dimension.

    Only values of the same class add or subtract. Products and quotients of
    two quantities resolve to the class registered for the derived dimension.
    """

    value: float

    dimension: ClassVar[Dimension] = (0, 0)
    symbol: ClassVar[str] = ""

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        _REGISTRY.setdefault(cls.dimension, cls)

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", float(self.value))

    def __float__(self) -> float:
        return self.value

    def __str__(self) -> str:
        return f"{self.value:g} {self.symbol}".rstrip()

    def __add__(self: Q, other: Any) -> Q:
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.value + other.value)

    def __sub__(self: Q, other: Any) -> Q:
        if type(other) is not type(self):
            return NotImplemented
        return type(self)(self.value - other.value)

    def __neg__(self: Q) -> Q:
        return type(self)(-self.value)

    def __abs__(self: Q) -> Q:
        return type(self)(abs(self.value))

    def __mul__(self, other: Any) -> "Quantity":
        if _is_scalar(other):
            return type(self)(self.value * other)
        if isinstance(other, Quantity):
            dimension = (
                self.dimension[0] + other.dimension[0],
                self.dimension[1] + other.dimension[1],
            )
            return quantity_class(dimension)(self.value * other.value)
        return NotImplemented

    def __rmul__(self, other: Any) -> "Quantity":
        if _is_scalar(other):
            return type(self)(other * self.value)
        return NotImplemented

    def __truediv__(self, other: Any) -> "Quantity":
        if _is_scalar(other):
            return type(self)(self.value / other)
        if isinstance(other, Quantity):
            dimension = (
                self.dimension[0] - other.dimension[0],
                self.dimension[1] - other.dimension[1],
            )
            return quantity_class(dimension)(self.value / other.value)
        return NotImplemented

    def __rtruediv__(self, other: Any) -> "Quantity":
        if _is_scalar(other):
            dimension = (-self.dimension[0], -self.dimension[1])
            return quantity_class(dimension)(other / self.value)
        return NotImplemented


class Unitless(Quantity):
    dimension = (0, 0)


class Newton(Quantity):
    dimension = (1, 0)
    symbol = "N"


class Meter(Quantity):
    dimension = (0, 1)
    symbol = "m"


class NewtonMeter(Quantity):
    dimension = (1, 1)
    symbol = "N*m"


class PerNewton(Quantity):
    dimension = (-1, 0)
    symbol = "1/N"


class PerNewtonMeter(Quantity):
    dimension = (-1, -1)
    symbol = "1/(N*m)"


def quantity_class(dimension: Dimension) -> Type[Quantity]:
    """Return the class for *dimension*, generating one if none is declared yet."""

    cls = _REGISTRY.get(dimension)
    if cls is None:
        newton, metre = dimension
        name = f"Quantity_N{newton}_m{metre}".replace("-", "neg")
        cls = type(name, (Quantity,), {"dimension": dimension, "symbol": f"N^{newton}*m^{metre}"})
    return cls


@dataclass(frozen=True)
class Triplet(Generic[T]):
    """Three same-typed values in axis order (x, y, z)."""

    x: T
    y: T
    z: T

    @classmethod
    def from_cloned(cls, value: T) -> "Triplet[T]":
        return cls(value, value, value)

    def map(self, fn: Callable[[T], U]) -> "Triplet[U]":
        return Triplet(fn(self.x), fn(self.y), fn(self.z))

    def map_entrywise(self, other: "Triplet[U]", fn: Callable[[T, U], V]) -> "Triplet[V]":
        return Triplet(fn(self.x, other.x), fn(self.y, other.y), fn(self.z, other.z))

    def as_tuple(self) -> Tuple[T, T, T]:
        return (self.x, self.y, self.z)

    def __iter__(self) -> Iterator[T]:
        return iter(self.as_tuple())

    def __len__(self) -> int:
        return 3

    def __getitem__(self, axis: int) -> T:
        return self.as_tuple()[axis]

    def __add__(self, other: "Triplet[Any]") -> "Triplet[Any]":
        if not isinstance(other, Triplet):
            return NotImplemented
        return self.map_entrywise(other, operator.add)

    def __sub__(self, other: "Triplet[Any]") -> "Triplet[Any]":
        if not isinstance(other, Triplet):
            return NotImplemented
        return self.map_entrywise(other, operator.sub)


@dataclass(frozen=True)
class Wrench:
    """A force/torque pair measured by the sensor."""

    force: Triplet[Newton]
    torque: Triplet[NewtonMeter]

    @classmethod
    def zeroed(cls) -> "Wrench":
        return cls(
            force=Triplet.from_cloned(0.0).map(Newton),
            torque=Triplet.from_cloned(0.0).map(NewtonMeter),
        )

    def __add__(self, other: "Wrench") -> "Wrench":
        if not isinstance(other, Wrench):
            return NotImplemented
        return Wrench(force=self.force + other.force, torque=self.torque + other.torque)

    def __sub__(self, other: "Wrench") -> "Wrench":
        if not isinstance(other, Wrench):
            return NotImplemented
        return Wrench(force=self.force - other.force, torque=self.torque - other.torque)

    def to_array(self) -> np.ndarray:
        """Return ``[fx, fy, fz, tx, ty, tz]`` as floats (N and N*m)."""

        return np.array([float(v) for v in (*self.force, *self.torque)], dtype=float)
