"""
Initial system data.
Sample rooms and patients for a fresh database.

ROOMS:
======
- ICU: ICU-101..103, floor 1, 1 bed
- General: GEN-201..204, floor 2, 2 beds
- Private: PVT-301..302, floor 3, 1 bed
- Emergency: ER-001..002, floor 1, 1 bed

PATIENTS:
=========
Five admitted patients (two Critical, two Stable, one Normal) waiting for a
room; run an automatic allocation to place them.
"""
from sqlmodel import Session

from hospital.models.patient import Patient
from hospital.models.room import Room
from hospital.models.enums import ConditionEnum, RoomTypeEnum
from hospital.repositories.room_repo import RoomRepository
from hospital.services.priority import derive_priority
from hospital.utils.helpers import safe_json_dumps
from hospital.utils.logger import get_logger

logger = get_logger("init_data")


SAMPLE_ROOMS = [
    # ICU
    {"room_number": "ICU-101", "type": RoomTypeEnum.ICU, "floor": 1, "capacity": 1, "daily_rate": 800, "amenities": ["AC", "TV", "WiFi"]},
    {"room_number": "ICU-102", "type": RoomTypeEnum.ICU, "floor": 1, "capacity": 1, "daily_rate": 800, "amenities": ["AC", "TV", "WiFi"]},
    {"room_number": "ICU-103", "type": RoomTypeEnum.ICU, "floor": 1, "capacity": 1, "daily_rate": 800, "amenities": ["AC", "TV", "WiFi"]},
    # General
    {"room_number": "GEN-201", "type": RoomTypeEnum.GENERAL, "floor": 2, "capacity": 2, "daily_rate": 300, "amenities": ["AC", "TV"]},
    {"room_number": "GEN-202", "type": RoomTypeEnum.GENERAL, "floor": 2, "capacity": 2, "daily_rate": 300, "amenities": ["AC", "TV"]},
    {"room_number": "GEN-203", "type": RoomTypeEnum.GENERAL, "floor": 2, "capacity": 2, "daily_rate": 300, "amenities": ["AC", "TV"]},
    {"room_number": "GEN-204", "type": RoomTypeEnum.GENERAL, "floor": 2, "capacity": 2, "daily_rate": 300, "amenities": ["AC", "TV"]},
    # Private
    {"room_number": "PVT-301", "type": RoomTypeEnum.PRIVATE, "floor": 3, "capacity": 1, "daily_rate": 500, "amenities": ["AC", "TV", "WiFi", "Refrigerator"]},
    {"room_number": "PVT-302", "type": RoomTypeEnum.PRIVATE, "floor": 3, "capacity": 1, "daily_rate": 500, "amenities": ["AC", "TV", "WiFi", "Refrigerator"]},
    # Emergency
    {"room_number": "ER-001", "type": RoomTypeEnum.EMERGENCY, "floor": 1, "capacity": 1, "daily_rate": 600, "amenities": ["AC"]},
    {"room_number": "ER-002", "type": RoomTypeEnum.EMERGENCY, "floor": 1, "capacity": 1, "daily_rate": 600, "amenities": ["AC"]},
]

SAMPLE_PATIENTS = [
    {
        "name": "John Smith",
        "age": 45,
        "condition": ConditionEnum.CRITICAL,
        "contact_number": "+1555000001",
        "emergency_contact": ("Jane Smith", "+1555000002", "Wife"),
        "medical_history": "Hypertension, Diabetes",
        "allergies": ["Penicillin"],
        "current_medication": [
            {"name": "Metformin", "dosage": "500mg", "frequency": "Twice daily"},
            {"name": "Lisinopril", "dosage": "10mg", "frequency": "Once daily"},
        ],
    },
    {
        "name": "Maria Rodriguez",
        "age": 32,
        "condition": ConditionEnum.STABLE,
        "contact_number": "+1555000003",
        "emergency_contact": ("Carlos Rodriguez", "+1555000004", "Husband"),
        "medical_history": "No significant history",
        "allergies": [],
        "current_medication": [],
    },
    {
        "name": "Robert Johnson",
        "age": 67,
        "condition": ConditionEnum.NORMAL,
        "contact_number": "+1555000005",
        "emergency_contact": ("Mary Johnson", "+1555000006", "Daughter"),
        "medical_history": "Previous heart surgery",
        "allergies": ["Aspirin"],
        "current_medication": [
            {"name": "Warfarin", "dosage": "5mg", "frequency": "Once daily"},
        ],
    },
    {
        "name": "Emily Chen",
        "age": 28,
        "condition": ConditionEnum.CRITICAL,
        "contact_number": "+1555000007",
        "emergency_contact": ("David Chen", "+1555000008", "Brother"),
        "medical_history": "Asthma",
        "allergies": ["Shellfish"],
        "current_medication": [
            {"name": "Albuterol", "dosage": "2 puffs", "frequency": "As needed"},
        ],
    },
    {
        "name": "Michael Brown",
        "age": 52,
        "condition": ConditionEnum.STABLE,
        "contact_number": "+1555000009",
        "emergency_contact": ("Lisa Brown", "+1555000010", "Wife"),
        "medical_history": "Arthritis",
        "allergies": [],
        "current_medication": [
            {"name": "Ibuprofen", "dosage": "400mg", "frequency": "Three times daily"},
        ],
    },
]


def initialize_data(session: Session) -> bool:
    """
    Loads the sample rooms and patients if the database is empty.
    
    Args:
        session: Database session
    
    Returns:
        True if data was created, False if rooms already existed
    """
    if RoomRepository(session).count():
        logger.info("Sample data skipped: rooms already exist")
        return False
    
    for data in SAMPLE_ROOMS:
        room = Room(**{**data, "amenities": safe_json_dumps(data["amenities"])})
        session.add(room)
    
    for data in SAMPLE_PATIENTS:
        contact_name, contact_phone, relationship = data["emergency_contact"]
        patient = Patient(
            name=data["name"],
            age=data["age"],
            condition=data["condition"],
            priority=derive_priority(data["condition"]),
            contact_number=data["contact_number"],
            emergency_contact_name=contact_name,
            emergency_contact_phone=contact_phone,
            emergency_contact_relationship=relationship,
            medical_history=data["medical_history"],
            allergies=safe_json_dumps(data["allergies"]),
            current_medication=safe_json_dumps(data["current_medication"]),
        )
        session.add(patient)
    
    session.commit()
    logger.info(
        f"Sample data created: {len(SAMPLE_ROOMS)} rooms, {len(SAMPLE_PATIENTS)} patients"
    )
    return True
