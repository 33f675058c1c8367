"""
Tests for statistics and the health check.
"""
from fastapi import status

from hospital.models.enums import (
    ConditionEnum,
    PatientStatusEnum,
    RoomTypeEnum,
    RoomStatusEnum,
)
from hospital.services.stats_service import StatsService


class TestStatsService:
    """Tests for the counters."""
    
    def test_empty_hospital(self, session):
        stats = StatsService(session).room_stats()
        
        assert stats.total_rooms == 0
        assert stats.occupancy_rate == 0.0
        assert stats.rooms_by_type == []
    
    def test_room_stats(self, session, create_patient, create_room, assign):
        icu = create_room(room_number="ICU-101", type=RoomTypeEnum.ICU)
        create_room(room_number="ICU-102", type=RoomTypeEnum.ICU, status=RoomStatusEnum.CLEANING)
        create_room(room_number="GEN-201", type=RoomTypeEnum.GENERAL, floor=2)
        create_room(room_number="GEN-202", type=RoomTypeEnum.GENERAL, floor=2,
                    status=RoomStatusEnum.MAINTENANCE)
        assign(create_patient(condition=ConditionEnum.CRITICAL), icu)
        
        stats = StatsService(session).room_stats()
        
        assert stats.total_rooms == 4
        assert stats.occupied_rooms == 1
        assert stats.available_rooms == 1
        assert stats.cleaning_rooms == 1
        assert stats.maintenance_rooms == 1
        assert stats.occupancy_rate == 25.0
        
        by_type = {t.type: t for t in stats.rooms_by_type}
        assert by_type[RoomTypeEnum.ICU].total == 2
        assert by_type[RoomTypeEnum.ICU].occupied == 1
        assert by_type[RoomTypeEnum.GENERAL].available == 1
        assert by_type[RoomTypeEnum.GENERAL].maintenance == 1
        assert RoomTypeEnum.PRIVATE not in by_type
    
    def test_patient_stats(self, session, create_patient, create_room, assign):
        placed = create_patient(condition=ConditionEnum.CRITICAL)
        create_patient(condition=ConditionEnum.CRITICAL)
        create_patient(condition=ConditionEnum.NORMAL, status=PatientStatusEnum.PENDING)
        create_patient(condition=ConditionEnum.STABLE, status=PatientStatusEnum.DISCHARGED)
        assign(placed, create_room())
        
        stats = StatsService(session).patient_stats()
        
        assert stats.total_patients == 4
        assert stats.admitted_patients == 2
        assert stats.pending_patients == 1
        assert stats.discharged_patients == 1
        assert stats.critical_patients == 2
        assert stats.unassigned_patients == 2
    
    def test_allocation_stats(self, session, create_patient):
        create_patient(condition=ConditionEnum.CRITICAL)
        create_patient(condition=ConditionEnum.NORMAL)
        
        stats = StatsService(session).allocation_stats()
        
        assert stats.patients_by_status == {"Admitted": 2, "Discharged": 0, "Pending": 0}
        assert stats.unassigned_patients == 2
        assert stats.critical_patients == 1


class TestStatsEndpoints:
    """Tests for the statistics endpoints."""
    
    def test_dashboard(self, client, create_patient, create_room, assign):
        room = create_room(room_number="ICU-101")
        create_room(room_number="ICU-102")
        assign(create_patient(condition=ConditionEnum.CRITICAL), room)
        create_patient(condition=ConditionEnum.NORMAL)
        
        response = client.get("/api/stats")
        
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["occupancy_rate"] == 50.0
        assert body["rooms"]["total_rooms"] == 2
        assert body["rooms"]["occupied_rooms"] == 1
        assert body["patients"]["total_patients"] == 2
        assert body["patients"]["unassigned_patients"] == 1
        assert "last_updated" in body
    
    def test_patient_and_room_stats(self, client, create_room):
        create_room()
        
        assert client.get("/api/patients/stats").json()["total_patients"] == 0
        assert client.get("/api/rooms/stats").json()["available_rooms"] == 1
    
    def test_allocation_endpoint(self, client, create_patient):
        create_patient(condition=ConditionEnum.CRITICAL)
        
        response = client.get("/api/stats/allocation")
        
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["critical_patients"] == 1


class TestHealth:
    """Tests for the health check."""
    
    def test_health(self, client):
        response = client.get("/api/health")
        
        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["status"] == "healthy"
        assert body["components"]["database"] == "healthy"
    
    def test_root(self, client):
        response = client.get("/")
        assert response.status_code == status.HTTP_200_OK
        assert "version" in response.json()
