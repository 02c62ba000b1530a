from typing import Protocol

from patient_store.domain.patient import Patient


class PatientRepository(Protocol):

    def create(self, draft: Patient) -> Patient: ...

    def read(self, patient_id: int) -> Patient: ...

    def read_all(self) -> list[Patient]: ...

    def update(self, patient_id: int, patch: Patient) -> Patient: ...

    def delete(self, patient_id: int) -> None: ...
