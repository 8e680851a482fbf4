"""
Heating capacity at an arbitrary outdoor temperature.

Published data gives at most four usable (temperature, capacity) nodes per
record: the lowest rated temperature, 5, 17 (max capacity only) and 47.
Capacity between nodes is linear; outside the covered range the slope of the
two nearest nodes is extended rather than clamped.
"""

from typing import List, Tuple

from ingestion.catalog import EquipmentRecord

TEMPERATURE_TOLERANCE = 1e-6

CapacityPoint = Tuple[float, float]


def capacity_points(record: EquipmentRecord) -> List[CapacityPoint]:
    """
    Collect the record's usable interpolation nodes in candidate order.

    A node is skipped when either coordinate is missing. ``btu_17_rated`` is
    never a node.
    """
    points: List[CapacityPoint] = []
    if record.lowest_temp is not None and record.btu_lowest_max is not None:
        points.append((record.lowest_temp, record.btu_lowest_max))
    if record.btu_5_max is not None:
        points.append((5.0, record.btu_5_max))
    if record.btu_17_max is not None:
        points.append((17.0, record.btu_17_max))
    if record.btu_47_max is not None:
        points.append((47.0, record.btu_47_max))
    return points


def select_bracket(points: List[CapacityPoint], target_temp: float) -> Tuple[CapacityPoint, CapacityPoint]:
    """
    Pick the two nodes used to evaluate ``target_temp``.

    ``points`` must hold at least two nodes sorted by temperature.
    """
    if target_temp <= points[0][0]:
        return points[0], points[1]
    if target_temp >= points[-1][0]:
        return points[-2], points[-1]
    for lower, upper in zip(points, points[1:]):
        if lower[0] <= target_temp <= upper[0]:
            return lower, upper
    # Unreachable for sorted input; keep the lowest pair like the below-range case
    return points[0], points[1]


def capacity_at(record: EquipmentRecord, target_temp: float) -> float:
    """
    Interpolate (or extrapolate) the record's heating capacity at ``target_temp``.

    Returns 0.0 when the record has no usable nodes and the single capacity
    when it has exactly one. Never raises.
    """
    points = capacity_points(record)
    if not points:
        return 0.0
    if len(points) == 1:
        return points[0][1]

    # Stable sort; equal temperatures keep candidate order
    points.sort(key=lambda point: point[0])

    (x1, y1), (x2, y2) = select_bracket(points, target_temp)
    if abs(x2 - x1) < TEMPERATURE_TOLERANCE:
        return y1

    # Multiply before dividing so a node hit as x2 reproduces y2 exactly
    return y1 + (target_temp - x1) * (y2 - y1) / (x2 - x1)
