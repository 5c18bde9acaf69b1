from __future__ import annotations

import numpy as np
import pytest

from wacohft.units import (
    Meter,
    Newton,
    NewtonMeter,
    PerNewton,
    PerNewtonMeter,
    Triplet,
    Unitless,
    Wrench,
    quantity_class,
)


def make_wrench(fx=1.5, fy=-2.25, fz=3.0, tx=0.125, ty=-0.5, tz=0.75) -> Wrench:
    return Wrench(
        force=Triplet(fx, fy, fz).map(Newton),
        torque=Triplet(tx, ty, tz).map(NewtonMeter),
    )


def test_same_dimension_add_and_sub() -> None:
    assert Newton(1.5) + Newton(2.0) == Newton(3.5)
    assert NewtonMeter(1.0) - NewtonMeter(0.25) == NewtonMeter(0.75)


def test_cross_dimension_arithmetic_rejected() -> None:
    with pytest.raises(TypeError):
        Newton(1.0) + NewtonMeter(1.0)
    with pytest.raises(TypeError):
        Newton(1.0) - Meter(1.0)
    with pytest.raises(TypeError):
        Newton(1.0) + 1.0
    assert Newton(1.0) != NewtonMeter(1.0)


def test_derived_dimensions() -> None:
    torque = Newton(2.0) * Meter(0.5)
    assert isinstance(torque, NewtonMeter)
    assert torque == NewtonMeter(1.0)

    ratio = Newton(3.0) / Newton(1.5)
    assert isinstance(ratio, Unitless)
    assert ratio.value == 2.0

    assert 10.0 / PerNewton(4.0) == Newton(2.5)
    assert 10.0 / PerNewtonMeter(4.0) == NewtonMeter(2.5)


def test_generated_dimension_is_stable() -> None:
    squared = Newton(2.0) * Newton(3.0)
    assert squared.dimension == (2, 0)
    assert type(squared) is quantity_class((2, 0))
    assert type(Newton(1.0) * Newton(1.0)) is type(squared)


def test_scalar_scaling_keeps_dimension() -> None:
    assert Newton(3.0) / 2 == Newton(1.5)
    assert 2 * NewtonMeter(1.25) == NewtonMeter(2.5)
    assert float(Newton(4.0)) == 4.0


def test_triplet_map_and_entrywise_preserve_order() -> None:
    source = Triplet(1, 2, 3)
    doubled = source.map(lambda v: v * 2)
    assert doubled == Triplet(2, 4, 6)
    assert source == Triplet(1, 2, 3)

    combined = source.map_entrywise(Triplet(10, 20, 30), lambda a, b: b - a)
    assert combined.as_tuple() == (9, 18, 27)
    assert list(combined) == [9, 18, 27]
    assert combined[2] == 27


def test_triplet_broadcast() -> None:
    assert Triplet.from_cloned(7.0) == Triplet(7.0, 7.0, 7.0)


def test_zeroed_is_additive_identity() -> None:
    w = make_wrench()
    assert Wrench.zeroed() + w == w
    assert w + Wrench.zeroed() == w
    assert w - w == Wrench.zeroed()


def test_wrench_addition_is_commutative_and_associative() -> None:
    a = make_wrench()
    b = make_wrench(0.5, 0.5, 0.5, 0.25, 0.25, 0.25)
    c = make_wrench(-1.0, 2.0, -4.0, 8.0, -16.0, 32.0)
    assert a + b == b + a
    assert (a + b) + c == a + (b + c)


def test_no_cross_axis_interference() -> None:
    base = make_wrench()
    bumped = make_wrench(fx=101.5)
    diff = bumped - base
    assert diff.force.x == Newton(100.0)
    assert diff.force.y == Newton(0.0)
    assert diff.force.z == Newton(0.0)
    assert diff.torque == Triplet.from_cloned(0.0).map(NewtonMeter)


def test_to_array_axis_order() -> None:
    arr = make_wrench().to_array()
    assert arr.dtype == float
    assert np.array_equal(arr, np.array([1.5, -2.25, 3.0, 0.125, -0.5, 0.75]))
