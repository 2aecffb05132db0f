import pytest

from rush_hour.errors import InvalidVehicle
from rush_hour.types import Orientation, Position, Slide, VehicleKind
from rush_hour.vehicle import Vehicle


def cells(*pairs):
    return [Position(x, y) for x, y in pairs]


def test_from_cells_horizontal_uses_minimum_as_origin():
    v = Vehicle.from_cells('L', cells((5, 0), (3, 0), (4, 0)))
    assert v.origin == Position(3, 0)
    assert v.length == 3
    assert v.orientation == Orientation.HORIZONTAL
    assert v.kind == VehicleKind.OTHER
    assert not v.is_player


def test_from_cells_vertical_player():
    v = Vehicle.from_cells('X', cells((2, 5), (2, 4)))
    assert v.origin == Position(2, 4)
    assert v.orientation == Orientation.VERTICAL
    assert v.kind == VehicleKind.PLAYER
    assert v.is_player


def test_single_cell_vehicle_counts_as_horizontal():
    v = Vehicle.from_cells('Q', cells((1, 1)))
    assert v.is_horizontal
    assert v.head() == v.tail() == Position(1, 1)


def test_from_cells_rejects_empty():
    with pytest.raises(InvalidVehicle):
        Vehicle.from_cells('A', [])
    with pytest.raises(ValueError):
        Vehicle.from_cells('A', [])


def test_occupied_cells_is_restartable_and_ordered():
    v = Vehicle.from_cells('B', cells((2, 2), (3, 2), (4, 2)))
    first = list(v.occupied_cells())
    second = list(v.occupied_cells())
    assert first == second == cells((2, 2), (3, 2), (4, 2))
    assert v.head() == Position(2, 2)
    assert v.tail() == Position(4, 2)


def test_includes():
    v = Vehicle.from_cells('R', cells((5, 2), (5, 3)))
    assert v.includes(Position(5, 3))
    assert not v.includes(Position(4, 3))


def test_overlaps_other_vehicles_but_not_itself():
    horizontal = Vehicle.from_cells('B', cells((2, 2), (3, 2), (4, 2)))
    crossing = Vehicle.from_cells('G', cells((3, 1), (3, 2)))
    apart = Vehicle.from_cells('U', cells((4, 4), (5, 4)))
    assert horizontal.overlaps(crossing)
    assert crossing.overlaps(horizontal)
    assert not horizontal.overlaps(apart)
    assert not horizontal.overlaps(horizontal)


def test_slide_moves_along_own_axis_only():
    h = Vehicle.from_cells('L', cells((3, 0), (4, 0), (5, 0)))
    moved = h.slide(Slide.FORWARD)
    assert moved.origin == Position(2, 0)
    assert h.origin == Position(3, 0)  # original untouched
    assert h.slide(Slide.BACKWARD, delta=2).origin == Position(5, 0)

    v = Vehicle.from_cells('X', cells((2, 4), (2, 5)))
    assert v.slide(Slide.FORWARD).origin == Position(2, 3)
    assert v.slide(Slide.BACKWARD).origin == Position(2, 5)


def test_slide_does_not_check_bounds():
    v = Vehicle.from_cells('X', cells((0, 0), (0, 1)))
    assert v.slide(Slide.FORWARD).origin == Position(0, -1)
