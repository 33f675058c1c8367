"""
Field validators shared by the request schemas.
"""
import re

ROOM_NUMBER_PATTERN = re.compile(r'^[A-Z0-9\-]+$')
PHONE_PATTERN = re.compile(r'^\+?[\d\s\-\(\)]+$')


def normalize_room_number(value: str) -> str:
    """
    Trims and uppercases a room number, then checks its format.
    
    Args:
        value: Room number as typed (e.g. "icu-101 ")
    
    Returns:
        Normalized room number ("ICU-101")
    
    Raises:
        ValueError: If it contains characters other than letters, digits or hyphens
    """
    normalized = value.strip().upper()
    if not normalized or not ROOM_NUMBER_PATTERN.match(normalized):
        raise ValueError('Room number can only contain letters, numbers, and hyphens')
    return normalized


def validate_phone(value: str) -> str:
    """
    Checks a phone number.
    
    Raises:
        ValueError: If the value is not a valid contact number
    """
    value = value.strip()
    if not PHONE_PATTERN.match(value):
        raise ValueError('Please enter a valid contact number')
    return value
