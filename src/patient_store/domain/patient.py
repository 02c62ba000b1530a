from dataclasses import dataclass

from pydantic import BaseModel

from .mixin import DataclassMixin

UNASSIGNED_ID = 0


@dataclass(slots=True)
class Patient(DataclassMixin):
    id: int
    name: str
    age: int
    password: str = ""

    def has_password(self) -> bool:
        return self.password != ""

    def apply_patch(self, patch: 'Patient') -> None:
        """Identity is immutable; an empty password keeps the stored one."""
        self.name = patch.name
        self.age = patch.age
        if patch.has_password():
            self.password = patch.password

    @staticmethod
    def from_dto(dto: BaseModel) -> 'Patient':
        data = dto.model_dump()
        return Patient(
            id=UNASSIGNED_ID,
            name=data.get("name", ""),
            age=data.get("age", 0),
            password=data.get("password", ""),
        )
