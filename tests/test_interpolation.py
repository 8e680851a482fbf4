import pytest

from ingestion.catalog import EquipmentRecord
from sizing.interpolation import capacity_at, capacity_points, select_bracket


def _full_record():
    return EquipmentRecord(
        model_number="KM18H5O",
        btu_lowest_max=10000,
        lowest_temp=-13,
        btu_5_max=12000,
        btu_17_max=15000,
        btu_17_rated=13000,
        btu_47_max=20000,
    )


def test_capacity_points_skip_missing_and_rated():
    record = EquipmentRecord(
        model_number="A",
        btu_lowest_max=9000,  # no lowest_temp -> skipped
        btu_5_max=12000,
        btu_17_rated=13000,
        btu_47_max=20000,
    )
    assert capacity_points(record) == [(5.0, 12000), (47.0, 20000)]


@pytest.mark.parametrize("temp", [-40.0, 0.0, 17.0, 95.0])
def test_no_points_gives_zero(temp):
    record = EquipmentRecord(model_number="A", btu_95_min=18000, btu_17_rated=13000)
    assert capacity_at(record, temp) == 0.0


@pytest.mark.parametrize("temp", [-40.0, 5.0, 17.0, 95.0])
def test_single_point_is_constant(temp):
    record = EquipmentRecord(model_number="A", btu_17_max=15000)
    assert capacity_at(record, temp) == 15000


@pytest.mark.parametrize(
    "temp, expected",
    [(-13.0, 10000), (5.0, 12000), (17.0, 15000), (47.0, 20000)],
)
def test_nodes_are_reproduced_exactly(temp, expected):
    assert capacity_at(_full_record(), temp) == expected


def test_interpolates_between_5_and_47():
    record = EquipmentRecord(model_number="A", btu_5_max=12000, btu_47_max=20000)
    expected = 12000 + (25 - 5) * (20000 - 12000) / (47 - 5)
    assert capacity_at(record, 25.0) == pytest.approx(expected)
    assert capacity_at(record, 25.0) == pytest.approx(15809.52, abs=0.01)


def test_interpolates_inside_each_window():
    record = _full_record()
    assert capacity_at(record, 11.0) == pytest.approx(13500)
    assert capacity_at(record, 32.0) == pytest.approx(17500)
    assert capacity_at(record, -4.0) == pytest.approx(11000)


def test_extrapolates_below_lowest_point():
    record = EquipmentRecord(model_number="A", btu_5_max=12000, btu_17_max=15000)
    # slope 250 Btu per degree, not clamped to 12000
    assert capacity_at(record, -3.0) == pytest.approx(10000)


def test_extrapolates_above_highest_point():
    record = _full_record()
    slope = (20000 - 15000) / (47 - 17)
    assert capacity_at(record, 62.0) == pytest.approx(20000 + 15 * slope)


def test_lowest_temp_sorted_into_place():
    record = EquipmentRecord(
        model_number="A", btu_lowest_max=13000, lowest_temp=10, btu_5_max=12000, btu_17_max=15000,
    )
    assert capacity_at(record, 5.0) == 12000
    assert capacity_at(record, 10.0) == 13000
    assert capacity_at(record, 8.0) == pytest.approx(12600)


def test_duplicate_temperature_returns_first_capacity():
    # lowest_temp collides with the 5-degree node and sorts first
    record = EquipmentRecord(
        model_number="A", btu_lowest_max=11000, lowest_temp=5, btu_5_max=12000,
    )
    assert capacity_at(record, -10.0) == 11000
    assert capacity_at(record, 5.0) == 11000
    assert capacity_at(record, 30.0) == 11000


def test_select_bracket_takes_first_window():
    points = [(-13.0, 1.0), (5.0, 2.0), (17.0, 3.0), (47.0, 4.0)]
    assert select_bracket(points, 5.0) == ((-13.0, 1.0), (5.0, 2.0))
    assert select_bracket(points, 20.0) == ((17.0, 3.0), (47.0, 4.0))
    assert select_bracket(points, -20.0) == ((-13.0, 1.0), (5.0, 2.0))
    assert select_bracket(points, 50.0) == ((17.0, 3.0), (47.0, 4.0))


def test_capacity_at_does_not_mutate_record():
    record = _full_record()
    capacity_at(record, 0.0)
    assert capacity_points(record)[0] == (-13, 10000)


def test_near_duplicate_temperatures_use_strict_tolerance():
    below = EquipmentRecord(
        model_number="A", btu_lowest_max=11000, lowest_temp=5 - 5e-7, btu_5_max=12000,
    )
    assert capacity_at(below, 5.0) == 11000

    apart = EquipmentRecord(
        model_number="A", btu_lowest_max=11000, lowest_temp=5 - 4e-6, btu_5_max=12000,
    )
    assert capacity_at(apart, 5.0) == pytest.approx(12000)
    assert capacity_at(apart, 5 - 2e-6) == pytest.approx(11500)
