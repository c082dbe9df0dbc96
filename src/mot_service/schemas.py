"""Pydantic models for the MOT history API wire format and the HTTP front door."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from mot_history.data_models import REGISTRATION_PATTERN


class _UpstreamModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True, coerce_numbers_to_str=True)


# ── Upstream payloads ───────────────────────────────────────────────

class InspectionRecord(_UpstreamModel):
    completed_date: Optional[str] = Field(default=None, alias="completedDate")
    test_result: Optional[str] = Field(default=None, alias="testResult")
    expiry_date: Optional[str] = Field(default=None, alias="expiryDate")
    odometer_value: Optional[str] = Field(default=None, alias="odometerValue")
    odometer_unit: Optional[str] = Field(default=None, alias="odometerUnit")
    mot_test_number: Optional[str] = Field(default=None, alias="motTestNumber")
    rfr_and_comments: Optional[list[Any]] = Field(default=None, alias="rfrAndComments")


class VehicleRecord(_UpstreamModel):
    registration: Optional[str] = None
    make: Optional[str] = None
    model: Optional[str] = None
    first_used_date: Optional[str] = Field(default=None, alias="firstUsedDate")
    fuel_type: Optional[str] = Field(default=None, alias="fuelType")
    primary_colour: Optional[str] = Field(default=None, alias="primaryColour")
    mot_tests: Optional[list[InspectionRecord]] = Field(default=None, alias="motTests")


class UpstreamErrorBody(_UpstreamModel):
    code: Optional[str] = None
    message: Optional[str] = None


VehicleList = TypeAdapter(Optional[list[VehicleRecord]])


# ── HTTP front door ─────────────────────────────────────────────────

class MotRequest(BaseModel):
    registration_number: str = Field(min_length=1, pattern=REGISTRATION_PATTERN.pattern)


class LookupSummaryResponse(BaseModel):
    make: Optional[str] = None
    model: Optional[str] = None
    colour: Optional[str] = None
    mot_expiry_date: Optional[str] = None
    mileage: int


class ErrorResponse(BaseModel):
    kind: str
    status_code: int
    error_code: Optional[str] = None
    message: str


class HealthResponse(BaseModel):
    status: str
