from dishka.integrations.fastapi import inject, FromDishka
from fastapi import APIRouter, HTTPException, Response, status

from patient_store.application.create_patient import create_patient
from patient_store.application.delete_patient import delete_patient
from patient_store.application.dto.patient import PatientReadOutDTO, PatientAddInDTO, PatientUpdateInDTO
from patient_store.application.exceptions.application import InvalidPatientName, UnexpectedError
from patient_store.application.exceptions.patient_repository import PatientNotFound
from patient_store.application.ports.patient_repo import PatientRepository
from patient_store.application.ports.security import NameValidator, PasswordHasher
from patient_store.application.read_patient import read_patient, read_patients
from patient_store.application.update_patient import update_patient

router = APIRouter()


@router.get("")
@inject
async def get_patients(patient_repo: FromDishka[PatientRepository]) -> list[PatientReadOutDTO]:
    try:
        return await read_patients(patient_repo)
    except UnexpectedError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unexpected error")

@router.post("", status_code=status.HTTP_201_CREATED)
@inject
async def add_patient(
        patient: PatientAddInDTO,
        patient_repo: FromDishka[PatientRepository],
        name_validator: FromDishka[NameValidator],
        password_hasher: FromDishka[PasswordHasher],
) -> PatientReadOutDTO:
    try:
        return await create_patient(patient, patient_repo, name_validator, password_hasher)
    except InvalidPatientName:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid patient name")
    except UnexpectedError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unexpected error")

@router.get("/{patient_id}")
@inject
async def get_patient(patient_id: int, patient_repo: FromDishka[PatientRepository]) -> PatientReadOutDTO:
    try:
        return await read_patient(patient_id, patient_repo)
    except PatientNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
    except UnexpectedError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unexpected error")

@router.put("/{patient_id}")
@inject
async def update_patient_info(
        patient_id: int,
        patient: PatientUpdateInDTO,
        patient_repo: FromDishka[PatientRepository],
        name_validator: FromDishka[NameValidator],
        password_hasher: FromDishka[PasswordHasher],
) -> PatientReadOutDTO:
    try:
        return await update_patient(patient_id, patient, patient_repo, name_validator, password_hasher)
    except PatientNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
    except InvalidPatientName:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid patient name")
    except UnexpectedError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unexpected error")

@router.delete("/{patient_id}", status_code=status.HTTP_204_NO_CONTENT)
@inject
async def remove_patient(patient_id: int, patient_repo: FromDishka[PatientRepository]) -> Response:
    try:
        await delete_patient(patient_id, patient_repo)
    except PatientNotFound:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Patient not found")
    except UnexpectedError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Unexpected error")

    return Response(status_code=status.HTTP_204_NO_CONTENT)
