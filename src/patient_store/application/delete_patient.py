from .exceptions.application import UnexpectedError
from .exceptions.patient_repository import PatientNotFound
from .ports.patient_repo import PatientRepository


async def delete_patient(patient_id: int, patient_repo: PatientRepository) -> None:
    try:
        patient_repo.delete(patient_id)
    except PatientNotFound:
        raise
    except Exception as err:
        raise UnexpectedError from err
