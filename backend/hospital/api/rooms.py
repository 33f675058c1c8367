"""
Room endpoints.
"""
from fastapi import APIRouter, Depends, Query, status
from sqlmodel import Session
from typing import Optional
import logging

from hospital.config import settings
from hospital.core.database import get_session
from hospital.core.exceptions import BaseAppException
from hospital.core.notifications import Notifier, get_notifier
from hospital.models.enums import RoomTypeEnum, RoomStatusEnum
from hospital.schemas.responses import MessageResponse, PatientSummary, RoomSummary
from hospital.schemas.room import (
    RoomCreate,
    RoomUpdate,
    RoomStatusUpdate,
    RoomAssignRequest,
    RoomResponse,
    RoomListResponse,
    RoomMutationResponse,
    AvailableRoomsResponse,
    TransferSuggestionResponse,
    TransferSuggestionsResponse,
)
from hospital.schemas.allocation import AssignmentResponse
from hospital.schemas.stats import RoomStatsResponse
from hospital.services.room_service import RoomService
from hospital.services.assignment_service import AssignmentService
from hospital.services.transfer_service import TransferService
from hospital.services.stats_service import StatsService
from hospital.api.errors import to_http_exception
from hospital.utils.helpers import (
    build_room_response,
    build_pagination,
    build_assignment_data,
)

router = APIRouter()
logger = logging.getLogger("hms.api.rooms")


@router.post("", response_model=RoomMutationResponse, status_code=status.HTTP_201_CREATED)
async def create_room(
    data: RoomCreate,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """Creates a room."""
    try:
        room = RoomService(session, notifier).create_room(data)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    
    return RoomMutationResponse(
        success=True,
        message="Room created successfully",
        data=build_room_response(room),
    )


@router.get("", response_model=RoomListResponse)
def list_rooms(
    type: Optional[RoomTypeEnum] = None,
    status: Optional[RoomStatusEnum] = None,
    floor: Optional[int] = Query(default=None, ge=1, le=20),
    available: Optional[bool] = None,
    sort_by: str = "room_number",
    sort_order: str = Query(default="asc", pattern="^(asc|desc)$"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    session: Session = Depends(get_session)
):
    """Lists rooms with filters, sorting and pagination."""
    service = RoomService(session)
    rooms, total = service.list_rooms(
        type=type,
        status=status,
        floor=floor,
        available=available,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    occupants = service.occupants_for(rooms)
    
    return RoomListResponse(
        rooms=[build_room_response(r, occupants.get(r.patient_id)) for r in rooms],
        pagination=build_pagination(page, limit, total),
    )


@router.get("/stats", response_model=RoomStatsResponse)
def room_stats(session: Session = Depends(get_session)):
    """Room counters and occupancy."""
    return StatsService(session).room_stats()


@router.get("/available", response_model=AvailableRoomsResponse)
def available_rooms(
    type: Optional[RoomTypeEnum] = None,
    floor: Optional[int] = Query(default=None, ge=1, le=20),
    session: Session = Depends(get_session)
):
    """Free rooms ordered by floor and room number."""
    rooms = RoomService(session).list_available(type=type, floor=floor)
    return AvailableRoomsResponse(
        rooms=[build_room_response(r) for r in rooms],
        total_count=len(rooms),
    )


@router.get("/transfer-suggestions", response_model=TransferSuggestionsResponse)
def transfer_suggestions(session: Session = Depends(get_session)):
    """Patients whose room type does not match their condition."""
    suggestions = TransferService(session).suggest_transfers()
    return TransferSuggestionsResponse(
        suggestions=[
            TransferSuggestionResponse(
                patient=PatientSummary.model_validate(s.patient),
                current_room=RoomSummary.model_validate(s.current_room),
                ideal_category=s.ideal_category,
            )
            for s in suggestions
        ],
        total_suggestions=len(suggestions),
    )


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: str, session: Session = Depends(get_session)):
    """Returns a room."""
    service = RoomService(session)
    try:
        room = service.get_room(room_id)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    return build_room_response(room, service.get_occupant(room))


@router.put("/{room_id}", response_model=RoomMutationResponse)
async def update_room(
    room_id: str,
    data: RoomUpdate,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """Edits room details."""
    service = RoomService(session, notifier)
    try:
        room = service.update_room(room_id, data)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    
    return RoomMutationResponse(
        success=True,
        message="Room updated successfully",
        data=build_room_response(room, service.get_occupant(room)),
    )


@router.delete("/{room_id}", response_model=MessageResponse)
async def delete_room(
    room_id: str,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """Deletes an unoccupied room."""
    try:
        data = RoomService(session, notifier).delete_room(room_id)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    
    return MessageResponse(
        success=True,
        message="Room deleted successfully",
        data={"id": data["id"], "room_number": data["room_number"]},
    )


@router.post("/{room_id}/assign", response_model=AssignmentResponse)
async def assign_patient(
    room_id: str,
    request: RoomAssignRequest,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """Places a patient in this room."""
    try:
        result = AssignmentService(session, notifier).assign(request.patient_id, room_id)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    
    return AssignmentResponse(
        success=True,
        message="Patient assigned to room successfully",
        data=build_assignment_data(result.patient, result.room),
    )


@router.post("/{room_id}/release", response_model=AssignmentResponse)
async def release_room(
    room_id: str,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """Discharges the occupant of this room. The room goes to Cleaning."""
    try:
        result = RoomService(session, notifier).release_room(room_id)
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    
    return AssignmentResponse(
        success=True,
        message="Room released successfully",
        data=build_assignment_data(result.patient, result.room, linked=False),
    )


@router.put("/{room_id}/status", response_model=RoomMutationResponse)
async def set_room_status(
    room_id: str,
    request: RoomStatusUpdate,
    session: Session = Depends(get_session),
    notifier: Notifier = Depends(get_notifier)
):
    """Changes the lifecycle status of an unoccupied room."""
    try:
        room = RoomService(session, notifier).set_room_status(
            room_id, request.status, request.notes
        )
    except BaseAppException as e:
        raise to_http_exception(e)
    
    await notifier.flush()
    
    return RoomMutationResponse(
        success=True,
        message=f"Room status updated to {room.status.value}",
        data=build_room_response(room),
    )
