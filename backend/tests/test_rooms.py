"""
Tests for the room endpoints.
"""
import pytest
from fastapi import status

from hospital.models.enums import (
    ConditionEnum,
    RoomTypeEnum,
    RoomStatusEnum,
)


class TestRoomCatalogue:
    """Tests for creating, reading, editing and deleting rooms."""
    
    def test_create_room(self, client, room_data):
        response = client.post("/api/rooms", json=room_data)
        assert response.status_code == status.HTTP_201_CREATED
        
        room = response.json()["data"]
        assert room["room_number"] == "ICU-101"
        assert room["status"] == "Available"
        assert room["occupied"] is False
        assert room["is_available"] is True
        assert room["amenities"] == ["AC", "TV", "WiFi"]
    
    def test_duplicate_room_number_conflicts(self, client, room_data):
        client.post("/api/rooms", json=room_data)
        
        response = client.post("/api/rooms", json={**room_data, "room_number": "ICU-101"})
        
        assert response.status_code == status.HTTP_409_CONFLICT
    
    @pytest.mark.parametrize("field,value", [
        ("room_number", "ICU 101"),
        ("floor", 0),
        ("floor", 21),
        ("capacity", 5),
        ("daily_rate", -1),
        ("type", "Suite"),
        ("amenities", ["Jacuzzi"]),
    ])
    def test_invalid_room_rejected(self, client, room_data, field, value):
        room_data[field] = value
        
        response = client.post("/api/rooms", json=room_data)
        
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
    
    def test_get_room_with_occupant(self, client, create_patient, create_room, assign):
        patient = create_patient(name="John Smith")
        room = create_room()
        assign(patient, room)
        
        response = client.get(f"/api/rooms/{room.id}")
        
        body = response.json()
        assert body["status"] == "Occupied"
        assert body["patient"]["name"] == "John Smith"
    
    def test_get_room_not_found(self, client):
        response = client.get("/api/rooms/missing")
        assert response.status_code == status.HTTP_404_NOT_FOUND
    
    def test_list_rooms_filtered(self, client, create_room):
        create_room(room_number="ICU-101", type=RoomTypeEnum.ICU, floor=1)
        create_room(room_number="GEN-201", type=RoomTypeEnum.GENERAL, floor=2)
        create_room(room_number="GEN-202", type=RoomTypeEnum.GENERAL, floor=2,
                    status=RoomStatusEnum.MAINTENANCE)
        
        response = client.get("/api/rooms", params={"type": "General"})
        assert [r["room_number"] for r in response.json()["rooms"]] == ["GEN-201", "GEN-202"]
        
        response = client.get("/api/rooms", params={"available": True})
        assert [r["room_number"] for r in response.json()["rooms"]] == ["GEN-201", "ICU-101"]
    
    def test_update_room(self, client, create_room):
        room = create_room()
        
        response = client.put(
            f"/api/rooms/{room.id}",
            json={"daily_rate": 950, "amenities": ["AC"], "notes": "Renovated"}
        )
        
        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["daily_rate"] == 950
        assert data["amenities"] == ["AC"]
        assert data["notes"] == "Renovated"
    
    def test_update_room_ignores_occupancy_fields(self, client, create_room):
        room = create_room()
        
        response = client.put(
            f"/api/rooms/{room.id}", json={"occupied": True, "status": "Occupied"}
        )
        
        data = response.json()["data"]
        assert data["occupied"] is False
        assert data["status"] == "Available"
    
    def test_update_to_existing_number_conflicts(self, client, create_room):
        create_room(room_number="ICU-101")
        other = create_room(room_number="ICU-102")
        
        response = client.put(f"/api/rooms/{other.id}", json={"room_number": "icu-101"})
        
        assert response.status_code == status.HTTP_409_CONFLICT
    
    def test_delete_room(self, client, create_room):
        room_id = create_room().id
        
        response = client.delete(f"/api/rooms/{room_id}")
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["room_number"] == "ICU-101"
        
        assert client.get(f"/api/rooms/{room_id}").status_code == status.HTTP_404_NOT_FOUND
    
    def test_delete_occupied_room_conflicts(self, client, create_patient, create_room, assign):
        room = create_room()
        assign(create_patient(), room)
        
        response = client.delete(f"/api/rooms/{room.id}")
        
        assert response.status_code == status.HTTP_409_CONFLICT
        assert client.get(f"/api/rooms/{room.id}").status_code == status.HTTP_200_OK


class TestRoomAvailability:
    """Tests for availability, assignment and release through rooms."""
    
    def test_available_rooms_ordered(self, client, create_room):
        create_room(room_number="GEN-301", type=RoomTypeEnum.GENERAL, floor=3)
        create_room(room_number="GEN-201", type=RoomTypeEnum.GENERAL, floor=2)
        create_room(room_number="GEN-202", type=RoomTypeEnum.GENERAL, floor=2,
                    status=RoomStatusEnum.CLEANING)
        
        response = client.get("/api/rooms/available", params={"type": "General"})
        
        body = response.json()
        assert body["total_count"] == 2
        assert [r["room_number"] for r in body["rooms"]] == ["GEN-201", "GEN-301"]
    
    def test_assign_patient_to_room(self, client, create_patient, create_room):
        patient = create_patient()
        room = create_room()
        
        response = client.post(f"/api/rooms/{room.id}/assign", json={"patient_id": patient.id})
        
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["room"]["patient_id"] == patient.id
    
    def test_release_room(self, client, create_patient, create_room, assign):
        patient = create_patient()
        room = create_room()
        assign(patient, room)
        
        response = client.post(f"/api/rooms/{room.id}/release")
        
        assert response.status_code == status.HTTP_200_OK
        data = response.json()["data"]
        assert data["room"]["status"] == "Cleaning"
        assert data["room"]["occupied"] is False
        assert data["patient"]["status"] == "Discharged"
    
    def test_release_empty_room_conflicts(self, client, create_room):
        room = create_room()
        
        response = client.post(f"/api/rooms/{room.id}/release")
        
        assert response.status_code == status.HTTP_409_CONFLICT
    
    def test_transfer_suggestions(self, client, create_patient, create_room, assign):
        critical = create_patient(name="Critical in General", condition=ConditionEnum.CRITICAL)
        stable = create_patient(name="Stable in General", condition=ConditionEnum.STABLE)
        assign(critical, create_room(room_number="GEN-201", type=RoomTypeEnum.GENERAL))
        assign(stable, create_room(room_number="GEN-202", type=RoomTypeEnum.GENERAL))
        
        response = client.get("/api/rooms/transfer-suggestions")
        
        body = response.json()
        assert body["total_suggestions"] == 1
        suggestion = body["suggestions"][0]
        assert suggestion["patient"]["id"] == critical.id
        assert suggestion["current_room"]["room_number"] == "GEN-201"
        assert suggestion["ideal_category"] == "ICU"


class TestRoomStatus:
    """Tests for manual status changes."""
    
    def test_cleaning_to_available(self, client, create_room):
        room = create_room(status=RoomStatusEnum.CLEANING)
        
        response = client.put(f"/api/rooms/{room.id}/status", json={"status": "Available"})
        
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["data"]["status"] == "Available"
        assert response.json()["data"]["is_available"] is True
    
    def test_available_to_maintenance_with_notes(self, client, create_room):
        room = create_room()
        
        response = client.put(
            f"/api/rooms/{room.id}/status",
            json={"status": "Maintenance", "notes": "AC repair"}
        )
        
        data = response.json()["data"]
        assert data["status"] == "Maintenance"
        assert data["notes"] == "AC repair"
    
    def test_manual_occupied_rejected(self, client, create_room):
        room = create_room()
        
        response = client.put(f"/api/rooms/{room.id}/status", json={"status": "Occupied"})
        
        assert response.status_code == status.HTTP_409_CONFLICT
    
    def test_occupied_room_status_locked(self, client, create_patient, create_room, assign):
        room = create_room()
        assign(create_patient(), room)
        
        response = client.put(f"/api/rooms/{room.id}/status", json={"status": "Available"})
        
        assert response.status_code == status.HTTP_409_CONFLICT
    
    def test_same_status_rejected(self, client, create_room):
        room = create_room()
        
        response = client.put(f"/api/rooms/{room.id}/status", json={"status": "Available"})
        
        assert response.status_code == status.HTTP_409_CONFLICT
    
    def test_unknown_status_rejected(self, client, create_room):
        room = create_room()
        
        response = client.put(f"/api/rooms/{room.id}/status", json={"status": "Closed"})
        
        assert response.status_code == status.HTTP_422_UNPROCESSABLE_ENTITY
