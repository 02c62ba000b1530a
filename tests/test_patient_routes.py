import unittest

import bcrypt
import structlog
from dishka import Provider, Scope, make_async_container, provide
from fastapi.testclient import TestClient

from patient_store.application.ports.patient_repo import PatientRepository
from patient_store.application.ports.security import NameValidator, PasswordHasher
from patient_store.bootstrap import create_app
from patient_store.di_container import SettingsProvider
from patient_store.infrastructure.repositories.patient import InMemoryPatientRepository
from patient_store.infrastructure.security.hasher import BcryptPasswordHasher
from patient_store.infrastructure.security.name_validator import RegexNameValidator
from patient_store.settings import SecuritySettings


def _matches(password, hashed):
    return bcrypt.checkpw(password.encode(), hashed.encode())


class FixedStorageProvider(Provider):
    scope = Scope.APP

    def __init__(self, repo, validator, hasher):
        super().__init__()
        self._repo = repo
        self._validator = validator
        self._hasher = hasher

    @provide(provides=PatientRepository)
    def patient_repo(self) -> InMemoryPatientRepository:
        return self._repo

    @provide(provides=NameValidator)
    def name_validator(self) -> RegexNameValidator:
        return self._validator

    @provide(provides=PasswordHasher)
    def password_hasher(self) -> BcryptPasswordHasher:
        return self._hasher


class PatientRoutesTests(unittest.TestCase):
    def setUp(self):
        self.repo = InMemoryPatientRepository()
        self.hasher = BcryptPasswordHasher(rounds=4)
        validator = RegexNameValidator(SecuritySettings().patient_name_pattern)
        container = make_async_container(
            SettingsProvider(None),
            FixedStorageProvider(self.repo, validator, self.hasher),
        )
        app = create_app(container=container, env_file=None)
        self.client = TestClient(app)
        self.client.__enter__()
        self.addCleanup(self.client.__exit__, None, None, None)

    def _create(self, name="Ann Lee", age=30, password="s3cret", prefix="/patients"):
        return self.client.post(prefix, json={"name": name, "age": age, "password": password})

    def test_create_returns_201_with_record(self):
        resp = self._create()
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json(), {"id": 1, "name": "Ann Lee", "age": 30})

    def test_password_is_hashed_and_never_echoed(self):
        resp = self._create(password="s3cret")
        self.assertNotIn("password", resp.json())
        stored = self.repo.read(resp.json()["id"])
        self.assertNotEqual(stored.password, "s3cret")
        self.assertTrue(_matches("s3cret", stored.password))

    def test_create_ignores_id_and_unknown_fields(self):
        resp = self.client.post(
            "/patients",
            json={"id": 99, "name": "Ann Lee", "age": 30, "ward": "B"},
        )
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["id"], 1)

    def test_missing_age_defaults_to_zero(self):
        resp = self.client.post("/patients", json={"name": "Ann Lee"})
        self.assertEqual(resp.status_code, 201)
        self.assertEqual(resp.json()["age"], 0)

    def test_invalid_name_is_bad_request(self):
        resp = self._create(name="ann lee")
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"], "Invalid patient name")
        self.assertEqual(len(self.repo.read_all()), 0)

    def test_malformed_json_is_bad_request(self):
        resp = self.client.post(
            "/patients",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(len(self.repo.read_all()), 0)

    def test_wrong_field_type_is_bad_request(self):
        resp = self.client.post("/patients", json={"name": "Ann Lee", "age": "old"})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(len(self.repo.read_all()), 0)

    def test_coercible_values_are_bad_request(self):
        for body in (
            {"name": "Ann Lee", "age": True},
            {"name": "Ann Lee", "age": "30"},
            {"name": "Ann Lee", "age": 30.0},
            {"name": "Ann Lee", "age": 30, "password": 1234},
        ):
            resp = self.client.post("/patients", json=body)
            self.assertEqual(resp.status_code, 400, body)
        self.assertEqual(len(self.repo.read_all()), 0)

    def test_update_rejects_coercible_age(self):
        self._create()
        resp = self.client.put("/patients/1", json={"name": "Ann Lee", "age": False})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.repo.read(1).age, 30)

    def test_list_patients(self):
        self._create(name="Ann Lee", age=30)
        self._create(name="Bo Kim", age=41)
        resp = self.client.get("/patients")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(
            sorted(resp.json(), key=lambda p: p["id"]),
            [
                {"id": 1, "name": "Ann Lee", "age": 30},
                {"id": 2, "name": "Bo Kim", "age": 41},
            ],
        )

    def test_list_empty_store(self):
        resp = self.client.get("/patients")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), [])

    def test_get_patient(self):
        self._create()
        resp = self.client.get("/patients/1")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"id": 1, "name": "Ann Lee", "age": 30})

    def test_get_missing_patient_is_404(self):
        resp = self.client.get("/patients/999")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Patient not found")

    def test_non_numeric_id_is_bad_request(self):
        for method in ("get", "put", "delete"):
            resp = self.client.request(method.upper(), "/patients/abc", json={"name": "Ann Lee"})
            self.assertEqual(resp.status_code, 400, method)

    def test_missing_id_is_404(self):
        self._create()
        resp = self.client.get("/patients/")
        self.assertEqual(resp.status_code, 404)

    def test_unsupported_methods_are_405(self):
        self._create()
        self.assertEqual(self.client.patch("/patients/1", json={}).status_code, 405)
        self.assertEqual(self.client.post("/patients/1", json={}).status_code, 405)
        self.assertEqual(self.client.delete("/patients").status_code, 405)
        self.assertEqual(self.client.put("/patients", json={}).status_code, 405)
        self.assertEqual(len(self.repo.read_all()), 1)

    def test_update_patient(self):
        self._create()
        resp = self.client.put("/patients/1", json={"name": "Ann Park", "age": 31})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"id": 1, "name": "Ann Park", "age": 31})

    def test_update_without_password_keeps_hash(self):
        self._create(password="first")
        before = self.repo.read(1).password
        self.client.put("/patients/1", json={"name": "Ann Lee", "age": 30, "password": ""})
        self.assertEqual(self.repo.read(1).password, before)

    def test_update_with_password_rehashes(self):
        self._create(password="first")
        self.client.put("/patients/1", json={"name": "Ann Lee", "age": 30, "password": "second"})
        self.assertTrue(_matches("second", self.repo.read(1).password))

    def test_update_missing_patient_is_404(self):
        resp = self.client.put("/patients/5", json={"name": "Ann Lee", "age": 30})
        self.assertEqual(resp.status_code, 404)

    def test_update_invalid_name_is_bad_request(self):
        self._create()
        resp = self.client.put("/patients/1", json={"name": "", "age": 30})
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(self.repo.read(1).name, "Ann Lee")

    def test_delete_then_delete_again(self):
        self._create()
        first = self.client.delete("/patients/1")
        self.assertEqual(first.status_code, 204)
        self.assertEqual(first.content, b"")
        second = self.client.delete("/patients/1")
        self.assertEqual(second.status_code, 404)

    def test_prefixes_share_one_store(self):
        self._create(prefix="/patients")
        self._create(name="Bo Kim", age=41, prefix="/patients-dup")

        resp = self.client.get("/patients-dup/1")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["name"], "Ann Lee")
        self.assertEqual(len(self.client.get("/patients").json()), 2)

        self.assertEqual(self.client.delete("/patients-dup/2").status_code, 204)
        self.assertEqual(self.client.get("/patients/2").status_code, 404)

    def test_ann_and_bo_scenario(self):
        self.assertEqual(self._create(name="Ann Lee", age=30).json()["id"], 1)
        self.assertEqual(self._create(name="Bo Kim", age=41).json()["id"], 2)
        self.assertEqual(self.client.delete("/patients/1").status_code, 204)
        self.assertEqual(self.client.get("/patients").json(), [{"id": 2, "name": "Bo Kim", "age": 41}])
        self.assertEqual(self.client.get("/patients/1").status_code, 404)

    def test_request_id_header(self):
        resp = self.client.get("/patients", headers={"x-request-id": "req-123"})
        self.assertEqual(resp.headers["x-request-id"], "req-123")
        generated = self.client.get("/patients")
        self.assertTrue(generated.headers["x-request-id"])

    def test_store_events_carry_request_context(self):
        capture = structlog.testing.LogCapture()
        structlog.configure(processors=[structlog.contextvars.merge_contextvars, capture])
        self.addCleanup(structlog.reset_defaults)

        self._create(name="Ann Lee")
        self.client.delete("/patients/1", headers={"x-request-id": "req-7"})

        deleted = [e for e in capture.entries if e["event"] == "patient_deleted"]
        self.assertEqual(len(deleted), 1)
        self.assertEqual(deleted[0]["request_id"], "req-7")
        self.assertEqual(deleted[0]["method"], "DELETE")
        self.assertEqual(deleted[0]["path"], "/patients/1")
        self.assertEqual(deleted[0]["patients_total"], 0)


if __name__ == "__main__":
    unittest.main()
