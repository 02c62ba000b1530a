class PatientRepositoryError(Exception):
    pass

class PatientNotFound(PatientRepositoryError):
    def __init__(self, patient_id: int):
        super().__init__(f"Patient {patient_id} not found")
        self.patient_id = patient_id
