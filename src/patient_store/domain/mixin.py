from dataclasses import dataclass, replace
from typing import Self


@dataclass
class DataclassMixin:

    def copy(self) -> Self:
        return replace(self)
