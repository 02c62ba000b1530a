from starlette.concurrency import run_in_threadpool

from .dto.patient import PatientReadOutDTO, PatientUpdateInDTO
from .exceptions.application import InvalidPatientName, UnexpectedError
from .exceptions.patient_repository import PatientNotFound
from .ports.patient_repo import PatientRepository
from .ports.security import NameValidator, PasswordHasher
from ..domain.patient import Patient


async def update_patient(
        patient_id: int,
        patient_dto: PatientUpdateInDTO,
        patient_repo: PatientRepository,
        name_validator: NameValidator,
        password_hasher: PasswordHasher,
) -> PatientReadOutDTO:
    if not name_validator.is_valid(patient_dto.name):
        raise InvalidPatientName(patient_dto.name)

    patch = Patient.from_dto(patient_dto)
    if patch.has_password():
        patch.password = await run_in_threadpool(password_hasher.hash, patch.password)
    try:
        patient = patient_repo.update(patient_id, patch)
    except PatientNotFound:
        raise
    except Exception as err:
        raise UnexpectedError from err

    return PatientReadOutDTO.model_validate(patient)
