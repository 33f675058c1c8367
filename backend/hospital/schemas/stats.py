"""
Statistics schemas.
"""
from pydantic import BaseModel
from typing import Dict, List
from datetime import datetime

from hospital.models.enums import RoomTypeEnum


class PatientStatsResponse(BaseModel):
    """Patient counters."""
    total_patients: int
    admitted_patients: int
    discharged_patients: int
    pending_patients: int
    critical_patients: int
    stable_patients: int
    normal_patients: int
    unassigned_patients: int


class RoomTypeStats(BaseModel):
    """Room counters for one room type."""
    type: RoomTypeEnum
    total: int
    available: int
    occupied: int
    maintenance: int


class RoomStatsResponse(BaseModel):
    """Room counters and occupancy."""
    total_rooms: int
    occupied_rooms: int
    available_rooms: int
    maintenance_rooms: int
    cleaning_rooms: int
    occupancy_rate: float
    rooms_by_type: List[RoomTypeStats]


class AllocationStatsResponse(BaseModel):
    """Counters relevant to the allocation queue."""
    patients_by_status: Dict[str, int]
    rooms_by_status: Dict[str, int]
    unassigned_patients: int
    critical_patients: int


class DashboardPatients(BaseModel):
    total_patients: int
    admitted_patients: int
    critical_patients: int
    unassigned_patients: int


class DashboardRooms(BaseModel):
    total_rooms: int
    occupied_rooms: int
    available_rooms: int
    maintenance_rooms: int


class DashboardStatsResponse(BaseModel):
    """Dashboard summary."""
    patients: DashboardPatients
    rooms: DashboardRooms
    occupancy_rate: float
    last_updated: datetime
