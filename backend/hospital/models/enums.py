"""
System enumerations.
Centralized to avoid circular imports.
"""
from enum import Enum


class ConditionEnum(str, Enum):
    """Clinical condition of the patient."""
    CRITICAL = "Critical"
    STABLE = "Stable"
    NORMAL = "Normal"


class PatientStatusEnum(str, Enum):
    """Administrative status of the patient."""
    ADMITTED = "Admitted"
    DISCHARGED = "Discharged"
    PENDING = "Pending"


class RoomTypeEnum(str, Enum):
    """Room category."""
    ICU = "ICU"
    GENERAL = "General"
    PRIVATE = "Private"
    EMERGENCY = "Emergency"
    SURGERY = "Surgery"


class RoomStatusEnum(str, Enum):
    """Lifecycle status of a room."""
    AVAILABLE = "Available"
    OCCUPIED = "Occupied"
    MAINTENANCE = "Maintenance"
    CLEANING = "Cleaning"


class AmenityEnum(str, Enum):
    """Room amenities."""
    AC = "AC"
    TV = "TV"
    WIFI = "WiFi"
    BATHROOM = "Bathroom"
    BALCONY = "Balcony"
    REFRIGERATOR = "Refrigerator"


class EquipmentStatusEnum(str, Enum):
    """Status of a piece of room equipment."""
    WORKING = "Working"
    FAULTY = "Faulty"
    UNDER_MAINTENANCE = "Under Maintenance"


# ============================================
# CONSTANTS RELATED TO ENUMS
# ============================================

# Lower number means more urgent
CONDITION_PRIORITY = {
    ConditionEnum.CRITICAL: 1,
    ConditionEnum.STABLE: 3,
    ConditionEnum.NORMAL: 5,
}

# Room category required by each condition
CONDITION_ROOM_CATEGORY = {
    ConditionEnum.CRITICAL: RoomTypeEnum.ICU,
    ConditionEnum.STABLE: RoomTypeEnum.GENERAL,
    ConditionEnum.NORMAL: RoomTypeEnum.GENERAL,
}

# Fallback room types for non-critical patients
NON_CRITICAL_FALLBACK_ROOM_TYPES = [
    RoomTypeEnum.GENERAL,
    RoomTypeEnum.PRIVATE,
]

# Patients that may still receive a room
WAITING_PATIENT_STATUSES = [
    PatientStatusEnum.ADMITTED,
    PatientStatusEnum.PENDING,
]

# Manual status changes allowed on an unoccupied room
ROOM_STATUS_TRANSITIONS = {
    RoomStatusEnum.AVAILABLE: [RoomStatusEnum.MAINTENANCE, RoomStatusEnum.CLEANING],
    RoomStatusEnum.CLEANING: [RoomStatusEnum.AVAILABLE, RoomStatusEnum.MAINTENANCE],
    RoomStatusEnum.MAINTENANCE: [RoomStatusEnum.AVAILABLE, RoomStatusEnum.CLEANING],
    RoomStatusEnum.OCCUPIED: [],
}
