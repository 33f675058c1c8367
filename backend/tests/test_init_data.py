"""
Tests for the sample data loader.
"""
from hospital.models.enums import ConditionEnum, RoomTypeEnum
from hospital.repositories.patient_repo import PatientRepository
from hospital.repositories.room_repo import RoomRepository
from hospital.services.allocation_service import AllocationService
from hospital.utils.init_data import SAMPLE_PATIENTS, SAMPLE_ROOMS, initialize_data


class TestInitData:
    
    def test_loads_once(self, session):
        assert initialize_data(session) is True
        assert initialize_data(session) is False
        
        assert RoomRepository(session).count() == len(SAMPLE_ROOMS)
        patient_repo = PatientRepository(session)
        assert patient_repo.count() == len(SAMPLE_PATIENTS)
        assert len(patient_repo.waiting_queue()) == len(SAMPLE_PATIENTS)
    
    def test_sample_patients_can_be_placed(self, session):
        initialize_data(session)
        service = AllocationService(session)
        
        results = [service.auto_allocate() for _ in SAMPLE_PATIENTS]
        
        assert all(r.success for r in results)
        for result in results:
            if result.patient.condition == ConditionEnum.CRITICAL:
                assert result.room.type == RoomTypeEnum.ICU
        
        assert service.auto_allocate().reason == "no waiting patients"
