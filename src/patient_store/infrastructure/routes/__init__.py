from collections.abc import Iterable

from fastapi import APIRouter

from .patient import router as patient_router


def build_routers(patient_prefixes: Iterable[str]) -> list[tuple[APIRouter, str]]:
    return [(patient_router, prefix) for prefix in patient_prefixes]
