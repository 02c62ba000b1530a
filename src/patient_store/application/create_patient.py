from starlette.concurrency import run_in_threadpool

from .dto.patient import PatientAddInDTO, PatientReadOutDTO
from .exceptions.application import InvalidPatientName, UnexpectedError
from .ports.patient_repo import PatientRepository
from .ports.security import NameValidator, PasswordHasher
from ..domain.patient import Patient


async def create_patient(
        patient_dto: PatientAddInDTO,
        patient_repo: PatientRepository,
        name_validator: NameValidator,
        password_hasher: PasswordHasher,
) -> PatientReadOutDTO:
    if not name_validator.is_valid(patient_dto.name):
        raise InvalidPatientName(patient_dto.name)

    draft = Patient.from_dto(patient_dto)
    # bcrypt is CPU-bound; keep it off the event loop
    draft.password = await run_in_threadpool(password_hasher.hash, draft.password)
    try:
        patient = patient_repo.create(draft)
    except Exception as err:
        raise UnexpectedError from err

    return PatientReadOutDTO.model_validate(patient)
