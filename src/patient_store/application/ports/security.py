from typing import Protocol


class NameValidator(Protocol):

    def is_valid(self, name: str) -> bool: ...


class PasswordHasher(Protocol):

    def hash(self, password: str) -> str: ...
