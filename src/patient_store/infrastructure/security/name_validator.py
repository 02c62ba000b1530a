import re
from typing_extensions import override

from ...application.ports.security import NameValidator


class RegexNameValidator(NameValidator):
    """Matches the whole name against a pattern compiled once at startup."""

    def __init__(self, pattern: str) -> None:
        self._regex = re.compile(pattern)

    @override
    def is_valid(self, name: str) -> bool:
        return self._regex.fullmatch(name) is not None
