"""Request and response schemas for shops, drivers, routes and targets.

``*Create`` models enforce required fields and fill defaults; ``*Update``
models accept any subset of fields but still type-check what was sent
(required fields can not be nulled). Unknown keys are dropped.
"""

from __future__ import annotations

import datetime
from typing import Annotated, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, StrictStr

NonEmptyStr = Annotated[StrictStr, Field(min_length=1)]
DriverStatus = Literal["available", "on_route", "off_duty"]
RouteStatus = Literal["planned", "in_progress", "completed"]


class _InputModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", allow_inf_nan=False)


class _OutputModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


# Shops

class ShopCreate(_InputModel):
    name: NonEmptyStr
    latitude: StrictFloat
    longitude: StrictFloat
    category: NonEmptyStr = "retail"
    status: NonEmptyStr = "active"
    owner_name: Optional[StrictStr] = Field(None, alias="ownerName")
    phone: Optional[StrictStr] = None
    address: Optional[StrictStr] = None
    added_by: Optional[StrictStr] = Field(None, alias="addedBy")
    notes: Optional[StrictStr] = None


class ShopUpdate(_InputModel):
    name: NonEmptyStr = None
    latitude: StrictFloat = None
    longitude: StrictFloat = None
    category: NonEmptyStr = None
    status: NonEmptyStr = None
    owner_name: Optional[StrictStr] = Field(None, alias="ownerName")
    phone: Optional[StrictStr] = None
    address: Optional[StrictStr] = None
    added_by: Optional[StrictStr] = Field(None, alias="addedBy")
    notes: Optional[StrictStr] = None


class ShopModel(_OutputModel):
    id: str
    name: str
    latitude: float
    longitude: float
    category: str
    status: str
    owner_name: Optional[str] = Field(None, alias="ownerName")
    phone: Optional[str] = None
    address: Optional[str] = None
    added_by: Optional[str] = Field(None, alias="addedBy")
    notes: Optional[str] = None


# Drivers

class DriverCreate(_InputModel):
    name: NonEmptyStr
    phone: NonEmptyStr
    vehicle_type: NonEmptyStr = Field(..., alias="vehicleType")
    status: DriverStatus = "available"
    vehicle_plate: Optional[StrictStr] = Field(None, alias="vehiclePlate")
    current_latitude: Optional[StrictFloat] = Field(None, alias="currentLatitude")
    current_longitude: Optional[StrictFloat] = Field(None, alias="currentLongitude")


class DriverUpdate(_InputModel):
    name: NonEmptyStr = None
    phone: NonEmptyStr = None
    vehicle_type: NonEmptyStr = Field(None, alias="vehicleType")
    status: DriverStatus = None
    vehicle_plate: Optional[StrictStr] = Field(None, alias="vehiclePlate")
    current_latitude: Optional[StrictFloat] = Field(None, alias="currentLatitude")
    current_longitude: Optional[StrictFloat] = Field(None, alias="currentLongitude")


class DriverModel(_OutputModel):
    id: str
    name: str
    phone: str
    vehicle_type: str = Field(..., alias="vehicleType")
    status: str
    vehicle_plate: Optional[str] = Field(None, alias="vehiclePlate")
    current_latitude: Optional[float] = Field(None, alias="currentLatitude")
    current_longitude: Optional[float] = Field(None, alias="currentLongitude")


# Routes

class RouteCreate(_InputModel):
    name: NonEmptyStr
    date: datetime.date
    driver_id: Optional[StrictStr] = Field(None, alias="driverId")
    shop_ids: List[StrictStr] = Field(default_factory=list, alias="shopIds")
    status: RouteStatus = "planned"
    estimated_distance: Optional[StrictFloat] = Field(None, alias="estimatedDistance")
    estimated_time: Optional[StrictFloat] = Field(None, alias="estimatedTime")


class RouteUpdate(_InputModel):
    name: NonEmptyStr = None
    date: datetime.date = None
    driver_id: Optional[StrictStr] = Field(None, alias="driverId")
    shop_ids: List[StrictStr] = Field(None, alias="shopIds")
    status: RouteStatus = None
    estimated_distance: Optional[StrictFloat] = Field(None, alias="estimatedDistance")
    estimated_time: Optional[StrictFloat] = Field(None, alias="estimatedTime")


class RouteModel(_OutputModel):
    id: str
    name: str
    date: datetime.date
    driver_id: Optional[str] = Field(None, alias="driverId")
    shop_ids: List[str] = Field(default_factory=list, alias="shopIds")
    status: str
    estimated_distance: Optional[float] = Field(None, alias="estimatedDistance")
    estimated_time: Optional[float] = Field(None, alias="estimatedTime")


# Targets

class TargetCreate(_InputModel):
    driver_id: NonEmptyStr = Field(..., alias="driverId")
    period: NonEmptyStr
    target_shops: StrictInt = Field(..., alias="targetShops")
    target_deliveries: StrictInt = Field(..., alias="targetDeliveries")
    completed_shops: StrictInt = Field(0, alias="completedShops")
    completed_deliveries: StrictInt = Field(0, alias="completedDeliveries")
    start_date: datetime.date = Field(..., alias="startDate")
    end_date: datetime.date = Field(..., alias="endDate")


class TargetUpdate(_InputModel):
    driver_id: NonEmptyStr = Field(None, alias="driverId")
    period: NonEmptyStr = None
    target_shops: StrictInt = Field(None, alias="targetShops")
    target_deliveries: StrictInt = Field(None, alias="targetDeliveries")
    completed_shops: StrictInt = Field(None, alias="completedShops")
    completed_deliveries: StrictInt = Field(None, alias="completedDeliveries")
    start_date: datetime.date = Field(None, alias="startDate")
    end_date: datetime.date = Field(None, alias="endDate")


class TargetModel(_OutputModel):
    id: str
    driver_id: str = Field(..., alias="driverId")
    period: str
    target_shops: int = Field(..., alias="targetShops")
    target_deliveries: int = Field(..., alias="targetDeliveries")
    completed_shops: int = Field(0, alias="completedShops")
    completed_deliveries: int = Field(0, alias="completedDeliveries")
    start_date: datetime.date = Field(..., alias="startDate")
    end_date: datetime.date = Field(..., alias="endDate")
