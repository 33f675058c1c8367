"""
Room repository.
"""
from typing import Optional, List, Tuple, Dict
from sqlmodel import Session, select, func, col
from sqlalchemy import update, delete
from datetime import datetime

from hospital.repositories.base import BaseRepository
from hospital.models.room import Room
from hospital.models.enums import RoomTypeEnum, RoomStatusEnum

SORTABLE_FIELDS = {
    "room_number": Room.room_number,
    "type": Room.type,
    "floor": Room.floor,
    "status": Room.status,
    "daily_rate": Room.daily_rate,
    "created_at": Room.created_at,
}


class RoomRepository(BaseRepository[Room]):
    """Repository for room operations."""
    
    def __init__(self, session: Session):
        super().__init__(session, Room)
    
    def get_by_number(self, room_number: str) -> Optional[Room]:
        """
        Returns a room by its number.
        
        Args:
            room_number: Room number (e.g. "ICU-101")
        
        Returns:
            The room or None
        """
        query = select(Room).where(Room.room_number == room_number)
        return self.session.exec(query).first()
    
    def search(
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
        """
        Filtered, sorted and paginated room list.
        
        ``available=True`` keeps unoccupied rooms in Available status,
        ``available=False`` keeps occupied rooms.
        
        Returns:
            Tuple (rooms of the page, total matching rooms)
        """
        query = select(Room)
        
        if type:
            query = query.where(Room.type == type)
        if status:
            query = query.where(Room.status == status)
        if floor is not None:
            query = query.where(Room.floor == floor)
        if available is True:
            query = query.where(
                Room.occupied == False,  # noqa: E712
                Room.status == RoomStatusEnum.AVAILABLE
            )
        elif available is False:
            query = query.where(Room.occupied == True)  # noqa: E712
        
        column = SORTABLE_FIELDS.get(sort_by, Room.room_number)
        order = col(column).desc() if sort_order == "desc" else col(column).asc()
        query = query.order_by(order, col(Room.id))
        
        return self.paginate(query, page, limit)
    
    def find_first_available(self, types: List[RoomTypeEnum]) -> Optional[Room]:
        """
        Returns the first free room of the given types.
        
        Args:
            types: Accepted room types
        
        Returns:
            Lowest floor, then lowest room number; None if there is none
        """
        query = (
            select(Room)
            .where(
                col(Room.type).in_(types),
                Room.status == RoomStatusEnum.AVAILABLE,
                Room.occupied == False  # noqa: E712
            )
            .order_by(col(Room.floor).asc(), col(Room.room_number).asc())
        )
        return self.session.exec(query).first()
    
    def list_available(
        self,
        type: Optional[RoomTypeEnum] = None,
        floor: Optional[int] = None
    ) -> List[Room]:
        """
        Free rooms ordered by floor and room number.
        
        Args:
            type: Optional room type filter
            floor: Optional floor filter
        """
        query = select(Room).where(
            Room.status == RoomStatusEnum.AVAILABLE,
            Room.occupied == False  # noqa: E712
        )
        if type:
            query = query.where(Room.type == type)
        if floor is not None:
            query = query.where(Room.floor == floor)
        
        query = query.order_by(col(Room.floor).asc(), col(Room.room_number).asc())
        return list(self.session.exec(query).all())
    
    # ============================================
    # CONDITIONAL UPDATES
    # The affected row count decides which concurrent writer wins.
    # None of these commit; the caller owns the transaction.
    # ============================================
    
    def occupy_if_available(self, room_id: str, patient_id: str) -> bool:
        """
        Marks a room Occupied by a patient only if it is still free.
        
        Returns:
            True if this call took the room
        """
        statement = (
            update(Room)
            .where(
                Room.id == room_id,
                Room.status == RoomStatusEnum.AVAILABLE,
                Room.occupied == False  # noqa: E712
            )
            .values(
                occupied=True,
                patient_id=patient_id,
                status=RoomStatusEnum.OCCUPIED,
                updated_at=datetime.utcnow()
            )
            .execution_options(synchronize_session=False)
        )
        return self.session.exec(statement).rowcount == 1
    
    def vacate(self, room_id: str, patient_id: str, when: datetime) -> bool:
        """
        Frees a room held by a patient and sends it to Cleaning.
        
        Returns:
            True if the room was occupied by that patient and is now released
        """
        statement = (
            update(Room)
            .where(
                Room.id == room_id,
                Room.patient_id == patient_id,
                Room.occupied == True  # noqa: E712
            )
            .values(
                occupied=False,
                patient_id=None,
                status=RoomStatusEnum.CLEANING,
                last_cleaned=when,
                updated_at=when
            )
            .execution_options(synchronize_session=False)
        )
        return self.session.exec(statement).rowcount == 1
    
    def change_status_if_unoccupied(
        self,
        room_id: str,
        expected_status: RoomStatusEnum,
        new_status: RoomStatusEnum,
        notes: Optional[str] = None,
        when: Optional[datetime] = None
    ) -> bool:
        """
        Moves an unoccupied room between lifecycle states.
        
        Returns:
            True if the room still had ``expected_status`` and no occupant
        """
        when = when or datetime.utcnow()
        values = {"status": new_status, "updated_at": when}
        if notes:
            values["notes"] = notes
        if new_status == RoomStatusEnum.CLEANING:
            values["last_cleaned"] = when
        
        statement = (
            update(Room)
            .where(
                Room.id == room_id,
                Room.status == expected_status,
                Room.occupied == False  # noqa: E712
            )
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        return self.session.exec(statement).rowcount == 1
    
    def delete_if_unoccupied(self, room_id: str) -> bool:
        """
        Deletes a room only if nobody occupies it.
        
        Returns:
            True if the room was deleted
        """
        statement = (
            delete(Room)
            .where(
                Room.id == room_id,
                Room.occupied == False  # noqa: E712
            )
            .execution_options(synchronize_session=False)
        )
        return self.session.exec(statement).rowcount == 1
    
    # ============================================
    # COUNTERS
    # ============================================
    
    def count_by_status(self) -> Dict[str, int]:
        """Number of rooms per status, every status present."""
        rows = self.session.exec(
            select(Room.status, func.count()).group_by(Room.status)
        ).all()
        counts = {status.value: 0 for status in RoomStatusEnum}
        for status, total in rows:
            counts[RoomStatusEnum(status).value] = total
        return counts
    
    def count_occupied(self) -> int:
        return self.session.exec(
            select(func.count()).select_from(Room).where(Room.occupied == True)  # noqa: E712
        ).one()
    
    def count_available(self) -> int:
        return self.session.exec(
            select(func.count()).select_from(Room).where(
                Room.status == RoomStatusEnum.AVAILABLE,
                Room.occupied == False  # noqa: E712
            )
        ).one()
    
    def count_by_type_and_status(self) -> List[Tuple[RoomTypeEnum, RoomStatusEnum, int]]:
        """Room counts grouped by (type, status)."""
        rows = self.session.exec(
            select(Room.type, Room.status, func.count()).group_by(Room.type, Room.status)
        ).all()
        return [
            (RoomTypeEnum(room_type), RoomStatusEnum(status), total)
            for room_type, status, total in rows
        ]
