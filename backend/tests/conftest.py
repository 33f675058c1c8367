"""
Pytest fixtures.
"""
import pytest
from datetime import datetime, timedelta
from fastapi.testclient import TestClient
from sqlmodel import SQLModel, Session, create_engine
from sqlmodel.pool import StaticPool

from hospital.core.database import get_session, create_db_and_tables
from hospital.core.notifications import Notifier
from hospital.models.enums import (
    ConditionEnum,
    PatientStatusEnum,
    RoomTypeEnum,
    RoomStatusEnum,
)
from hospital.services.priority import derive_priority
from main import create_app


# Test engine (in-memory SQLite)
@pytest.fixture(name="engine")
def engine_fixture():
    """In-memory test engine."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_db_and_tables(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture(name="session")
def session_fixture(engine):
    """Test session."""
    with Session(engine) as session:
        yield session


@pytest.fixture(name="client")
def client_fixture(engine, session):
    """Test client sharing the test session."""
    app = create_app(engine)
    
    def get_session_override():
        yield session
    
    app.dependency_overrides[get_session] = get_session_override
    
    with TestClient(app) as client:
        yield client
    
    app.dependency_overrides.clear()


@pytest.fixture
def notifier():
    """Notifier whose pending events are inspected instead of sent."""
    return Notifier()


# Test data fixtures

@pytest.fixture
def patient_data():
    """Valid admission payload."""
    return {
        "name": "John Smith",
        "age": 45,
        "contact_number": "+1555000001",
        "emergency_contact": {
            "name": "Jane Smith",
            "phone": "+1555000002",
            "relationship": "Wife"
        },
        "condition": "Critical",
        "medical_history": "Hypertension, Diabetes",
        "allergies": ["Penicillin"],
        "current_medication": [
            {"name": "Metformin", "dosage": "500mg", "frequency": "Twice daily"}
        ]
    }


@pytest.fixture
def room_data():
    """Valid room payload."""
    return {
        "room_number": "icu-101",
        "type": "ICU",
        "floor": 1,
        "capacity": 1,
        "daily_rate": 800,
        "amenities": ["AC", "TV", "WiFi"]
    }


@pytest.fixture
def create_room(session):
    """Factory fixture for rooms."""
    from hospital.models.room import Room
    
    def _create_room(
        room_number="ICU-101",
        type=RoomTypeEnum.ICU,
        floor=1,
        status=RoomStatusEnum.AVAILABLE,
        **kwargs
    ):
        room = Room(
            room_number=room_number,
            type=type,
            floor=floor,
            status=status,
            **kwargs
        )
        session.add(room)
        session.commit()
        session.refresh(room)
        return room
    
    return _create_room


@pytest.fixture
def create_patient(session):
    """
    Factory fixture for patients.
    
    ``minutes_ago`` moves the admission time back so the waiting order is
    deterministic.
    """
    from hospital.models.patient import Patient
    
    def _create_patient(
        name="Test Patient",
        condition=ConditionEnum.STABLE,
        status=PatientStatusEnum.ADMITTED,
        minutes_ago=0,
        **kwargs
    ):
        defaults = {
            "age": 40,
            "contact_number": "+1555000100",
            "emergency_contact_name": "Contact",
            "emergency_contact_phone": "+1555000101",
            "emergency_contact_relationship": "Sibling",
        }
        defaults.update(kwargs)
        
        patient = Patient(
            name=name,
            condition=condition,
            priority=derive_priority(condition),
            status=status,
            admission_date=datetime.utcnow() - timedelta(minutes=minutes_ago),
            **defaults
        )
        session.add(patient)
        session.commit()
        session.refresh(patient)
        return patient
    
    return _create_patient


@pytest.fixture
def assign(session):
    """Places a patient in a room through the assignment service."""
    from hospital.services.assignment_service import AssignmentService
    
    def _assign(patient, room):
        return AssignmentService(session).assign(patient.id, room.id)
    
    return _assign
