import threading
from dataclasses import replace
from typing_extensions import override

import structlog

from ...application.exceptions.patient_repository import PatientNotFound
from ...application.ports.patient_repo import PatientRepository
from ...domain.patient import Patient

logger = structlog.get_logger('store')


class InMemoryPatientRepository(PatientRepository):
    """Process-wide patient collection.

    The mapping and the id counter are only ever touched together under
    ``self._lock``. Records handed out are copies, so callers can't mutate
    stored state outside the lock. Ids start at ``id_seed`` and are never
    reused after delete.
    """

    def __init__(self, id_seed: int = 1) -> None:
        if id_seed < 1:
            raise ValueError("id_seed must be >= 1")
        self._lock = threading.Lock()
        self._patients: dict[int, Patient] = {}
        self._next_id = id_seed

    @override
    def create(self, draft: Patient) -> Patient:
        with self._lock:
            patient = replace(draft, id=self._next_id)
            self._patients[patient.id] = patient
            self._next_id += 1
            created = patient.copy()
            total = len(self._patients)

        logger.info("patient_created", patient_id=created.id, patients_total=total)
        return created

    @override
    def read(self, patient_id: int) -> Patient:
        with self._lock:
            patient = self._patients.get(patient_id)
            if patient is None:
                raise PatientNotFound(patient_id)
            return patient.copy()

    @override
    def read_all(self) -> list[Patient]:
        with self._lock:
            return [patient.copy() for patient in self._patients.values()]

    @override
    def update(self, patient_id: int, patch: Patient) -> Patient:
        with self._lock:
            patient = self._patients.get(patient_id)
            if patient is None:
                raise PatientNotFound(patient_id)
            patient.apply_patch(patch)
            updated = patient.copy()

        logger.info("patient_updated", patient_id=patient_id, password_changed=patch.has_password())
        return updated

    @override
    def delete(self, patient_id: int) -> None:
        with self._lock:
            if self._patients.pop(patient_id, None) is None:
                raise PatientNotFound(patient_id)
            total = len(self._patients)

        logger.info("patient_deleted", patient_id=patient_id, patients_total=total)
