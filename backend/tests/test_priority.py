"""
Tests for the priority rules.
"""
import pytest

from hospital.models.enums import ConditionEnum, RoomTypeEnum
from hospital.services.priority import (
    derive_priority,
    required_room_category,
    room_search_tiers,
)


class TestPriorityRules:
    """Tests for the condition -> priority/category mapping."""
    
    @pytest.mark.parametrize("condition,expected", [
        (ConditionEnum.CRITICAL, 1),
        (ConditionEnum.STABLE, 3),
        (ConditionEnum.NORMAL, 5),
    ])
    def test_derive_priority(self, condition, expected):
        assert derive_priority(condition) == expected
    
    def test_derive_priority_accepts_plain_values(self):
        assert derive_priority("Critical") == 1
    
    @pytest.mark.parametrize("condition,expected", [
        (ConditionEnum.CRITICAL, RoomTypeEnum.ICU),
        (ConditionEnum.STABLE, RoomTypeEnum.GENERAL),
        (ConditionEnum.NORMAL, RoomTypeEnum.GENERAL),
    ])
    def test_required_room_category(self, condition, expected):
        assert required_room_category(condition) == expected
    
    def test_search_tiers_critical(self):
        """Critical patients fall back to ICU only."""
        tiers = room_search_tiers(RoomTypeEnum.ICU, ConditionEnum.CRITICAL)
        assert tiers == [[RoomTypeEnum.ICU], [RoomTypeEnum.ICU]]
    
    def test_search_tiers_non_critical(self):
        """Other patients fall back to General or Private."""
        tiers = room_search_tiers(RoomTypeEnum.GENERAL, ConditionEnum.NORMAL)
        assert tiers[0] == [RoomTypeEnum.GENERAL]
        assert tiers[1] == [RoomTypeEnum.GENERAL, RoomTypeEnum.PRIVATE]
        assert RoomTypeEnum.ICU not in tiers[1]


class TestPriorityOnWrite:
    """Priority is recomputed whenever the condition is written."""
    
    def test_update_condition_recomputes_priority(self, session, create_patient):
        from hospital.schemas.patient import PatientUpdate
        from hospital.services.patient_service import PatientService
        
        patient = create_patient(condition=ConditionEnum.NORMAL)
        assert patient.priority == 5
        
        service = PatientService(session)
        updated = service.update_patient(
            patient.id, PatientUpdate(condition=ConditionEnum.CRITICAL)
        )
        
        assert updated.priority == 1
        assert updated.condition == ConditionEnum.CRITICAL
    
    def test_update_without_condition_keeps_priority(self, session, create_patient):
        from hospital.schemas.patient import PatientUpdate
        from hospital.services.patient_service import PatientService
        
        patient = create_patient(condition=ConditionEnum.STABLE)
        
        updated = PatientService(session).update_patient(patient.id, PatientUpdate(age=50))
        
        assert updated.priority == 3
        assert updated.age == 50
