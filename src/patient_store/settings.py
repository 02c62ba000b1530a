from enum import Enum

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class RunMode(Enum):
    PROD = 'prod'
    TEST = 'test'
    DEV = 'dev'

class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file_encoding='utf-8', extra='ignore')

    run_mode: RunMode = RunMode.DEV

    def is_dev(self) -> bool:
        return self.run_mode == RunMode.DEV

class HTTPServerSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file_encoding='utf-8', extra='ignore')

    http_host: str = "0.0.0.0"
    http_port: int = 8080
    api_version: str = "1.0.0"
    origins: list[str] = ['*']
    # every prefix is served by the same router and the same store
    patient_prefixes: list[str] = ["/patients", "/patients-dup"]

    @field_validator("patient_prefixes")
    @classmethod
    def _check_prefixes(cls, prefixes: list[str]) -> list[str]:
        if not prefixes:
            raise ValueError("at least one patient prefix is required")
        for prefix in prefixes:
            if not prefix.startswith("/") or prefix == "/" or prefix.endswith("/"):
                raise ValueError(f"invalid patient prefix: {prefix!r}")
        return prefixes

class StoreSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file_encoding='utf-8', env_prefix='STORE_', extra='ignore')

    id_seed: int = Field(default=1, ge=1)

class SecuritySettings(BaseSettings):
    model_config = SettingsConfigDict(env_file_encoding='utf-8', env_prefix='SECURITY_', extra='ignore')

    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    patient_name_pattern: str = r"^[A-Z][a-z]+(?:\s[A-Z][a-z]+)*$"
