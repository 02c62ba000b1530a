from pydantic import BaseModel, ConfigDict


class PatientReadOutDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    age: int

class PatientAddInDTO(BaseModel):
    model_config = ConfigDict(extra='ignore', strict=True)

    name: str = ""
    age: int = 0
    password: str = ""

class PatientUpdateInDTO(BaseModel):
    model_config = ConfigDict(extra='ignore', strict=True)

    name: str = ""
    age: int = 0
    password: str = ""
