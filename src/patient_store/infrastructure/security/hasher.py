from typing_extensions import override

import bcrypt

from ...application.ports.security import PasswordHasher

# bcrypt only reads the first 72 bytes; recent releases reject longer input
MAX_PASSWORD_BYTES = 72


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 12) -> None:
        self._rounds = rounds

    @override
    def hash(self, password: str) -> str:
        secret = password.encode()[:MAX_PASSWORD_BYTES]
        return bcrypt.hashpw(secret, bcrypt.gensalt(rounds=self._rounds)).decode()
