import os

from dishka import Provider, Scope, provide, make_container, make_async_container, AsyncContainer, Container

from patient_store.application.ports.patient_repo import PatientRepository
from patient_store.application.ports.security import NameValidator, PasswordHasher
from patient_store.infrastructure.repositories.patient import InMemoryPatientRepository
from patient_store.infrastructure.security.hasher import BcryptPasswordHasher
from patient_store.infrastructure.security.name_validator import RegexNameValidator
from patient_store.settings import AppSettings, HTTPServerSettings, StoreSettings, SecuritySettings

ENV_PATH = os.environ.get("ENV_PATH", None)


class SettingsProvider(Provider):
    """Application-level settings, read once per container."""

    scope = Scope.APP

    def __init__(self, env_file: str | None):
        super().__init__()
        self._env_file = env_file

    @provide
    def app_settings(self) -> AppSettings:
        return AppSettings(_env_file=self._env_file)

    @provide
    def http_server_settings(self) -> HTTPServerSettings:
        return HTTPServerSettings(_env_file=self._env_file)

    @provide
    def store_settings(self) -> StoreSettings:
        return StoreSettings(_env_file=self._env_file)

    @provide
    def security_settings(self) -> SecuritySettings:
        return SecuritySettings(_env_file=self._env_file)


class StorageProvider(Provider):
    # one store per container, shared by every request and every route prefix
    @provide(scope=Scope.APP, provides=PatientRepository)
    def patient_repo(self, settings: StoreSettings) -> InMemoryPatientRepository:
        return InMemoryPatientRepository(id_seed=settings.id_seed)

    @provide(scope=Scope.APP, provides=NameValidator)
    def name_validator(self, settings: SecuritySettings) -> RegexNameValidator:
        return RegexNameValidator(settings.patient_name_pattern)

    @provide(scope=Scope.APP, provides=PasswordHasher)
    def password_hasher(self, settings: SecuritySettings) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=settings.bcrypt_rounds)


def make_settings_container(env_file: str | None = ENV_PATH) -> Container:
    return make_container(SettingsProvider(env_file))

def make_di_container(env_file: str | None = ENV_PATH) -> AsyncContainer:
    return make_async_container(SettingsProvider(env_file), StorageProvider())
