"""
Priority rules.
Pure functions mapping a patient condition to its priority and room needs.
"""
from typing import List

from hospital.models.enums import (
    ConditionEnum,
    RoomTypeEnum,
    CONDITION_PRIORITY,
    CONDITION_ROOM_CATEGORY,
    NON_CRITICAL_FALLBACK_ROOM_TYPES,
)


def derive_priority(condition: ConditionEnum) -> int:
    """
    Priority of a condition. Lower is more urgent.
    
    Called at every write that sets or changes a patient's condition.
    
    Args:
        condition: Patient condition
    
    Returns:
        1 for Critical, 3 for Stable, 5 for Normal
    """
    return CONDITION_PRIORITY[ConditionEnum(condition)]


def required_room_category(condition: ConditionEnum) -> RoomTypeEnum:
    """Room type a condition calls for: ICU for Critical, General otherwise."""
    return CONDITION_ROOM_CATEGORY[ConditionEnum(condition)]


def room_search_tiers(
    category: RoomTypeEnum,
    condition: ConditionEnum
) -> List[List[RoomTypeEnum]]:
    """
    Room types to try, in order, when looking for a room.
    
    1. Exactly ``category``.
    2. Critical patients: any ICU room.
    3. Everyone else: any General or Private room.
    
    Args:
        category: Requested room category
        condition: Patient condition
    
    Returns:
        List of tiers, each one a list of acceptable room types
    """
    tiers = [[RoomTypeEnum(category)]]
    if ConditionEnum(condition) == ConditionEnum.CRITICAL:
        tiers.append([RoomTypeEnum.ICU])
    else:
        tiers.append(list(NON_CRITICAL_FALLBACK_ROOM_TYPES))
    return tiers
