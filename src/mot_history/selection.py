from __future__ import annotations

import re
from typing import Optional, Protocol, Sequence

from mot_history.data_models import LookupSummary
from mot_history.errors import MotApiError


_ODOMETER_PATTERN = re.compile(r"^\s*-?[0-9]+\s*$")


class Inspection(Protocol):
    completed_date: Optional[str]
    expiry_date: Optional[str]
    odometer_value: Optional[str]


class Vehicle(Protocol):
    make: Optional[str]
    model: Optional[str]
    primary_colour: Optional[str]
    mot_tests: Optional[Sequence[Inspection]]


def latest_inspection(inspections: Sequence[Inspection]) -> Optional[Inspection]:
    latest: Optional[Inspection] = None
    for inspection in inspections:
        # completedDate is fixed-width "YYYY.MM.DD HH:MM:SS", so string order is time order;
        # strict comparison keeps the first record on equal timestamps; undated records sort oldest
        if latest is None or (inspection.completed_date or "") > (latest.completed_date or ""):
            latest = inspection
    return latest


def parse_mileage(odometer_value: Optional[str]) -> int:
    if odometer_value is None or not _ODOMETER_PATTERN.match(odometer_value):
        raise MotApiError.deserialization()
    return int(odometer_value)


def build_summary(vehicles: Optional[Sequence[Vehicle]]) -> LookupSummary:
    if not vehicles:
        raise MotApiError.vehicle_not_found()
    # upstream returns at most one vehicle per registration; only the first is used
    vehicle = vehicles[0]
    inspection = latest_inspection(vehicle.mot_tests or [])
    if inspection is None:
        raise MotApiError.no_mot_tests()
    return LookupSummary(
        make=vehicle.make,
        model=vehicle.model,
        colour=vehicle.primary_colour,
        mot_expiry_date=inspection.expiry_date,
        mileage=parse_mileage(inspection.odometer_value),
    )
