"""Users resource API tests."""

from __future__ import annotations

import os
import unittest

from fastapi.testclient import TestClient

from blog_api.core.config import get_settings
from blog_api.main import create_app
from blog_api.repositories import InMemoryStore
from blog_api.schemas.user import UserType

TEST_SECRET = "test-secret-0123456789abcdef0123456789"


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "BLOG_JWT_SECRET",
        "BLOG_TOKEN_TTL_MINUTES",
        "BLOG_STORAGE_BACKEND",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["BLOG_JWT_SECRET"] = TEST_SECRET
        os.environ.pop("BLOG_TOKEN_TTL_MINUTES", None)
        os.environ["BLOG_STORAGE_BACKEND"] = "memory"
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class UsersApiTests(_SettingsEnvCase):
    def setUp(self) -> None:
        super().setUp()
        self.store = InMemoryStore()
        self.client = TestClient(create_app(store=self.store))

    def _register(self, email: str, password: str = "pw-123456", **extra) -> None:
        response = self.client.post("/users", json={"email": email, "password": password, **extra})
        self.assertEqual(response.status_code, 204)

    def _login_headers(self, email: str, password: str = "pw-123456") -> dict[str, str]:
        response = self.client.post("/users/login", json={"email": email, "password": password})
        self.assertEqual(response.status_code, 200)
        return {"Authorization": f"Bearer {response.json()['token']}"}

    def test_register_hashes_password_and_defaults_to_blogger(self) -> None:
        self._register("new@example.com")

        stored = self.store.users.find_one({"email": "new@example.com"})
        self.assertIsNotNone(stored)
        assert stored is not None
        self.assertEqual(stored.type, UserType.BLOGGER)
        self.assertNotEqual(stored.password_hash, "pw-123456")

    def test_register_accepts_explicit_admin_type(self) -> None:
        self._register("boss@example.com", type="ADMIN")

        self.assertEqual(self.store.users.find_one({"email": "boss@example.com"}).type, UserType.ADMIN)

    def test_duplicate_email_is_rejected(self) -> None:
        self._register("dup@example.com")

        response = self.client.post("/users", json={"email": "dup@example.com", "password": "other"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "USER_ALREADY_EXISTS")
        self.assertEqual(len(self.store.users.find_all()), 1)

    def test_login_issues_token_that_authenticates(self) -> None:
        self._register("me@example.com")
        headers = self._login_headers("me@example.com")

        response = self.client.get("/users/me", headers=headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"id": 1, "email": "me@example.com", "type": "BLOGGER"})

    def test_wrong_password_and_unknown_email_look_the_same(self) -> None:
        self._register("me@example.com")

        wrong_password = self.client.post("/users/login", json={"email": "me@example.com", "password": "nope"})
        unknown_email = self.client.post("/users/login", json={"email": "ghost@example.com", "password": "nope"})

        self.assertEqual(wrong_password.status_code, 401)
        self.assertEqual(wrong_password.json(), unknown_email.json())
        self.assertEqual(wrong_password.json()["code"], "INVALID_CREDENTIALS")

    def test_list_and_get_require_authentication(self) -> None:
        self.assertEqual(self.client.get("/users").json()["code"], "MISSING_TOKEN")
        self.assertEqual(self.client.get("/users/1").status_code, 401)

    def test_list_and_get_users_without_password_hashes(self) -> None:
        self._register("a@example.com")
        self._register("b@example.com", type="ADMIN")
        headers = self._login_headers("a@example.com")

        listed = self.client.get("/users", headers=headers)
        fetched = self.client.get("/users/2", headers=headers)
        missing = self.client.get("/users/99", headers=headers)

        self.assertEqual(listed.status_code, 200)
        self.assertEqual([u["email"] for u in listed.json()], ["a@example.com", "b@example.com"])
        self.assertTrue(all(set(u) == {"id", "email", "type"} for u in listed.json()))
        self.assertEqual(fetched.json()["type"], "ADMIN")
        self.assertEqual(missing.status_code, 400)
        self.assertEqual(missing.json()["code"], "USER_NOT_FOUND")


if __name__ == "__main__":
    unittest.main()
