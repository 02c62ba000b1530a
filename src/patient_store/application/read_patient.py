from .dto.patient import PatientReadOutDTO
from .exceptions.application import UnexpectedError
from .exceptions.patient_repository import PatientNotFound
from .ports.patient_repo import PatientRepository


async def read_patient(
        patient_id: int,
        patient_repo: PatientRepository,
) -> PatientReadOutDTO:
    try:
        patient = patient_repo.read(patient_id)
    except PatientNotFound:
        raise
    except Exception as err:
        raise UnexpectedError from err

    return PatientReadOutDTO.model_validate(patient)


async def read_patients(patient_repo: PatientRepository) -> list[PatientReadOutDTO]:
    try:
        patients = patient_repo.read_all()
    except Exception as err:
        raise UnexpectedError from err

    return [PatientReadOutDTO.model_validate(patient) for patient in patients]
