"""
Room service.
Room catalogue, manual status changes and releasing occupants.
"""
from typing import Optional, List, Tuple, Dict
from sqlmodel import Session
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from datetime import datetime
import logging

from hospital.models.patient import Patient
from hospital.models.room import Room
from hospital.models.enums import (
    RoomTypeEnum,
    RoomStatusEnum,
    ROOM_STATUS_TRANSITIONS,
)
from hospital.repositories.patient_repo import PatientRepository
from hospital.repositories.room_repo import RoomRepository
from hospital.schemas.room import RoomCreate, RoomUpdate
from hospital.core.database import transaction
from hospital.core.exceptions import (
    ConflictError,
    InternalError,
    RoomNotFoundError,
    RoomOccupiedError,
    RoomNotOccupiedError,
    DuplicateRoomNumberError,
    InvalidRoomStatusError,
)
from hospital.core.notifications import (
    Notifier,
    ROOM_CREATED,
    ROOM_UPDATED,
    ROOM_DELETED,
    ROOM_STATUS_CHANGED,
)
from hospital.services.assignment_service import AssignmentService, ReleaseResult
from hospital.utils.helpers import build_room_response, safe_json_dumps, snapshot

logger = logging.getLogger("hms.rooms")


class RoomService:
    """
    Service for room management.
    """
    
    def __init__(self, session: Session, notifier: Optional[Notifier] = None):
        self.session = session
        self.notifier = notifier or Notifier()
        self.room_repo = RoomRepository(session)
        self.patient_repo = PatientRepository(session)
        self.assignment = AssignmentService(session, self.notifier)
    
    # ============================================
    # QUERIES
    # ============================================
    
    def get_room(self, room_id: str) -> Room:
        """
        Returns a room.
        
        Raises:
            RoomNotFoundError: If it does not exist
        """
        room = self.room_repo.get_by_id(room_id)
        if not room:
            raise RoomNotFoundError(room_id)
        return room
    
    def get_occupant(self, room: Room) -> Optional[Patient]:
        """Patient occupying a room."""
        if not room.patient_id:
            return None
        return self.patient_repo.get_by_id(room.patient_id)
    
    def occupants_for(self, rooms: List[Room]) -> Dict[str, Patient]:
        """Occupants of a list of rooms, keyed by patient ID."""
        return self.patient_repo.get_many([r.patient_id for r in rooms])
    
    def list_rooms(
        self,
        type: Optional[RoomTypeEnum] = None,
        status: Optional[RoomStatusEnum] = None,
        floor: Optional[int] = None,
        available: Optional[bool] = None,
        sort_by: str = "room_number",
        sort_order: str = "asc",
        page: int = 1,
        limit: int = 10
    ) -> Tuple[List[Room], int]:
        """Filtered and paginated room list."""
        return self.room_repo.search(
            type=type,
            status=status,
            floor=floor,
            available=available,
            sort_by=sort_by,
            sort_order=sort_order,
            page=page,
            limit=limit
        )
    
    def list_available(
        self,
        type: Optional[RoomTypeEnum] = None,
        floor: Optional[int] = None
    ) -> List[Room]:
        """Free rooms ordered by floor and room number."""
        return self.room_repo.list_available(type=type, floor=floor)
    
    # ============================================
    # CATALOGUE
    # ============================================
    
    def create_room(self, data: RoomCreate) -> Room:
        """
        Creates a room.
        
        Raises:
            DuplicateRoomNumberError: The room number is already in use
        """
        if self.room_repo.get_by_number(data.room_number):
            raise DuplicateRoomNumberError(data.room_number)
        
        room = Room(
            room_number=data.room_number,
            type=data.type,
            floor=data.floor,
            capacity=data.capacity,
            daily_rate=data.daily_rate,
            amenities=safe_json_dumps([a.value for a in data.amenities]),
            equipment=safe_json_dumps([e.model_dump(mode="json") for e in data.equipment]),
            notes=data.notes,
        )
        
        self.room_repo.add(room)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateRoomNumberError(data.room_number) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error while creating room {data.room_number}: {e}")
            raise InternalError("Could not create room") from e
        self.session.refresh(room)
        
        logger.info(f"Room created: {room.room_number} ({room.type.value}, floor {room.floor})")
        self.notifier.emit(ROOM_CREATED, {"room": snapshot(build_room_response(room))})
        return room
    
    def update_room(self, room_id: str, data: RoomUpdate) -> Room:
        """
        Edits room details. Occupancy and status are left alone.
        
        Raises:
            RoomNotFoundError: Unknown room
            DuplicateRoomNumberError: The new room number is already in use
        """
        room = self.get_room(room_id)
        changes = data.model_dump(exclude_unset=True)
        
        new_number = changes.get("room_number")
        if new_number and new_number != room.room_number:
            if self.room_repo.get_by_number(new_number):
                raise DuplicateRoomNumberError(new_number)
        
        if "amenities" in changes:
            amenities = changes.pop("amenities")
            room.amenities = safe_json_dumps(
                [a.value for a in data.amenities] if amenities is not None else []
            )
        if "equipment" in changes:
            equipment = changes.pop("equipment")
            room.equipment = safe_json_dumps(
                [e.model_dump(mode="json") for e in data.equipment] if equipment is not None else []
            )
        
        for field_name, value in changes.items():
            if value is None and field_name != "notes":
                continue
            setattr(room, field_name, value)
        room.updated_at = datetime.utcnow()
        
        self.room_repo.add(room)
        try:
            self.session.commit()
        except IntegrityError as e:
            self.session.rollback()
            raise DuplicateRoomNumberError(room.room_number) from e
        except SQLAlchemyError as e:
            self.session.rollback()
            logger.error(f"Database error while updating room {room_id}: {e}")
            raise InternalError("Could not update room") from e
        self.session.refresh(room)
        
        logger.info(f"Room updated: {room.room_number}")
        self.notifier.emit(ROOM_UPDATED, {
            "room": snapshot(build_room_response(room, self.get_occupant(room)))
        })
        return room
    
    def delete_room(self, room_id: str) -> dict:
        """
        Deletes an unoccupied room.
        
        Returns:
            Snapshot of the deleted room
        
        Raises:
            RoomNotFoundError: Unknown room
            RoomOccupiedError: Somebody is in the room
        """
        room = self.get_room(room_id)
        if room.occupied:
            logger.warning(f"Delete rejected: room {room.room_number} is occupied")
            raise RoomOccupiedError(room_id)
        
        data = snapshot(build_room_response(room))
        
        with transaction(self.session, "delete room"):
            if not self.room_repo.delete_if_unoccupied(room_id):
                raise RoomOccupiedError(room_id)
        self.session.expunge(room)
        
        logger.info(f"Room deleted: {data['room_number']}")
        self.notifier.emit(ROOM_DELETED, {"room": data})
        return data
    
    # ============================================
    # LIFECYCLE
    # ============================================
    
    def set_room_status(
        self,
        room_id: str,
        status: RoomStatusEnum,
        notes: Optional[str] = None
    ) -> Room:
        """
        Moves an unoccupied room between Available, Cleaning and Maintenance.
        
        Occupied is only reached through an assignment, so it cannot be set
        here, and an occupied room cannot change status until released.
        
        Raises:
            RoomNotFoundError: Unknown room
            InvalidRoomStatusError: Transition not allowed
        """
        room = self.get_room(room_id)
        current = room.status
        
        if room.occupied:
            raise InvalidRoomStatusError(RoomStatusEnum.OCCUPIED.value, status.value)
        
        allowed = ROOM_STATUS_TRANSITIONS.get(current, [])
        if status not in allowed:
            logger.warning(
                f"Status change rejected for room {room.room_number}: "
                f"{current.value} -> {status.value}"
            )
            raise InvalidRoomStatusError(
                current.value,
                status.value,
                [s.value for s in allowed]
            )
        
        with transaction(self.session, "change room status"):
            if not self.room_repo.change_status_if_unoccupied(room_id, current, status, notes):
                raise ConflictError(f"Room {room_id} changed during the status update")
        self.session.refresh(room)
        
        logger.info(f"Room {room.room_number}: {current.value} -> {status.value}")
        self.notifier.emit(ROOM_STATUS_CHANGED, {
            "room": snapshot(build_room_response(room)),
            "previous_status": current.value,
        })
        return room
    
    def release_room(self, room_id: str) -> ReleaseResult:
        """
        Releases the occupant of a room.
        
        Raises:
            RoomNotFoundError: Unknown room
            RoomNotOccupiedError: The room is empty
        """
        room = self.get_room(room_id)
        if not room.occupied or not room.patient_id:
            raise RoomNotOccupiedError(room_id)
        return self.assignment.release(room.patient_id)
