"""
Shared system utilities.
"""
from hospital.utils.helpers import (
    safe_json_loads,
    safe_json_dumps,
    occupancy_rate,
    build_patient_response,
    build_room_response,
    build_pagination,
    build_assignment_data,
    build_allocation_response,
    snapshot,
    snapshots,
)
from hospital.utils.validators import normalize_room_number, validate_phone
from hospital.utils.logger import configure_logging, get_logger, logger

__all__ = [
    "safe_json_loads",
    "safe_json_dumps",
    "occupancy_rate",
    "build_patient_response",
    "build_room_response",
    "build_pagination",
    "build_assignment_data",
    "build_allocation_response",
    "snapshot",
    "snapshots",
    "normalize_room_number",
    "validate_phone",
    "configure_logging",
    "get_logger",
    "logger",
]
