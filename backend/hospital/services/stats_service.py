"""
Statistics service.
Counters for the dashboard and the patient/room overviews.
"""
from datetime import datetime
from collections import defaultdict
from typing import Dict
from sqlmodel import Session

from hospital.models.enums import (
    ConditionEnum,
    PatientStatusEnum,
    RoomTypeEnum,
    RoomStatusEnum,
)
from hospital.repositories.patient_repo import PatientRepository
from hospital.repositories.room_repo import RoomRepository
from hospital.schemas.stats import (
    PatientStatsResponse,
    RoomTypeStats,
    RoomStatsResponse,
    AllocationStatsResponse,
    DashboardPatients,
    DashboardRooms,
    DashboardStatsResponse,
)
from hospital.utils.helpers import occupancy_rate


class StatsService:
    """
    Service for system statistics.
    
    Every counter is computed with aggregate queries; nothing is cached.
    """
    
    def __init__(self, session: Session):
        self.session = session
        self.patient_repo = PatientRepository(session)
        self.room_repo = RoomRepository(session)
    
    def patient_stats(self) -> PatientStatsResponse:
        """Patients by status and condition, plus those waiting for a room."""
        by_status = self.patient_repo.count_by_status()
        by_condition = self.patient_repo.count_by_condition()
        
        return PatientStatsResponse(
            total_patients=sum(by_status.values()),
            admitted_patients=by_status[PatientStatusEnum.ADMITTED.value],
            discharged_patients=by_status[PatientStatusEnum.DISCHARGED.value],
            pending_patients=by_status[PatientStatusEnum.PENDING.value],
            critical_patients=by_condition[ConditionEnum.CRITICAL.value],
            stable_patients=by_condition[ConditionEnum.STABLE.value],
            normal_patients=by_condition[ConditionEnum.NORMAL.value],
            unassigned_patients=self.patient_repo.count_waiting(),
        )
    
    def room_stats(self) -> RoomStatsResponse:
        """Rooms by status, occupancy rate and a per-type breakdown."""
        by_type: Dict[RoomTypeEnum, Dict[RoomStatusEnum, int]] = defaultdict(
            lambda: defaultdict(int)
        )
        for room_type, status, total in self.room_repo.count_by_type_and_status():
            by_type[room_type][status] += total
        
        by_status = self.room_repo.count_by_status()
        total_rooms = sum(by_status.values())
        occupied = self.room_repo.count_occupied()
        
        rooms_by_type = []
        for room_type in RoomTypeEnum:
            if room_type not in by_type:
                continue
            counts = by_type[room_type]
            rooms_by_type.append(RoomTypeStats(
                type=room_type,
                total=sum(counts.values()),
                available=counts[RoomStatusEnum.AVAILABLE],
                occupied=counts[RoomStatusEnum.OCCUPIED],
                maintenance=counts[RoomStatusEnum.MAINTENANCE],
            ))
        
        return RoomStatsResponse(
            total_rooms=total_rooms,
            occupied_rooms=occupied,
            available_rooms=self.room_repo.count_available(),
            maintenance_rooms=by_status[RoomStatusEnum.MAINTENANCE.value],
            cleaning_rooms=by_status[RoomStatusEnum.CLEANING.value],
            occupancy_rate=occupancy_rate(occupied, total_rooms),
            rooms_by_type=rooms_by_type,
        )
    
    def allocation_stats(self) -> AllocationStatsResponse:
        return AllocationStatsResponse(
            patients_by_status=self.patient_repo.count_by_status(),
            rooms_by_status=self.room_repo.count_by_status(),
            unassigned_patients=self.patient_repo.count_waiting(),
            critical_patients=self.patient_repo.count_waiting(ConditionEnum.CRITICAL),
        )
    
    def dashboard(self) -> DashboardStatsResponse:
        """Summary shown on the dashboard landing page."""
        patients = self.patient_stats()
        rooms = self.room_stats()
        
        return DashboardStatsResponse(
            patients=DashboardPatients(
                total_patients=patients.total_patients,
                admitted_patients=patients.admitted_patients,
                critical_patients=patients.critical_patients,
                unassigned_patients=patients.unassigned_patients,
            ),
            rooms=DashboardRooms(
                total_rooms=rooms.total_rooms,
                occupied_rooms=rooms.occupied_rooms,
                available_rooms=rooms.available_rooms,
                maintenance_rooms=rooms.maintenance_rooms,
            ),
            occupancy_rate=rooms.occupancy_rate,
            last_updated=datetime.utcnow(),
        )
