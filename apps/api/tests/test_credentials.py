"""Credential adapter tests."""

from __future__ import annotations

import unittest

import jwt

from blog_api.adapters.auth import InvalidTokenError, JwtCredentials
from blog_api.schemas.auth import TokenData

TEST_SECRET = "test-secret-0123456789abcdef0123456789"


class PasswordHashingUnitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.credentials = JwtCredentials(secret=TEST_SECRET)

    def test_hash_verifies_and_is_salted(self) -> None:
        first = self.credentials.hash_password("hunter22")
        second = self.credentials.hash_password("hunter22")

        self.assertNotEqual(first, "hunter22")
        self.assertNotEqual(first, second)
        self.assertTrue(self.credentials.compare_hash("hunter22", first))
        self.assertTrue(self.credentials.compare_hash("hunter22", second))
        self.assertFalse(self.credentials.compare_hash("hunter23", first))

    def test_blank_password_cannot_be_hashed(self) -> None:
        with self.assertRaises(ValueError):
            self.credentials.hash_password("")

    def test_malformed_hash_compares_false(self) -> None:
        self.assertFalse(self.credentials.compare_hash("hunter22", "not-a-hash"))
        self.assertFalse(self.credentials.compare_hash("hunter22", ""))


class TokenUnitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.credentials = JwtCredentials(secret=TEST_SECRET)

    def test_blank_secret_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            JwtCredentials(secret="")

    def test_round_trip_binds_user_id(self) -> None:
        token = self.credentials.generate_token(TokenData(id=7))

        claims = self.credentials.is_valid_token(token)

        self.assertEqual(claims["id"], 7)
        self.assertNotIn("exp", claims)
        self.assertEqual(self.credentials.extract_data_from_token(token), TokenData(id=7))

    def test_configured_lifetime_adds_expiry(self) -> None:
        credentials = JwtCredentials(secret=TEST_SECRET, token_ttl_minutes=30)

        claims = credentials.is_valid_token(credentials.generate_token(TokenData(id=1)))

        self.assertEqual(claims["exp"] - claims["iat"], 30 * 60)

    def test_invalid_tokens_raise(self) -> None:
        other = JwtCredentials(secret="another-secret-0123456789abcdef0123")
        cases = {
            "blank": "",
            "garbage": "not.a.jwt",
            "wrong_secret": other.generate_token(TokenData(id=1)),
            "expired": jwt.encode({"id": 1, "exp": 1}, TEST_SECRET, algorithm="HS256"),
            "unsigned": jwt.encode({"id": 1}, None, algorithm="none"),
        }
        for name, token in cases.items():
            with self.subTest(case=name):
                with self.assertRaises(InvalidTokenError):
                    self.credentials.is_valid_token(token)

    def test_extract_rejects_payload_without_integer_id(self) -> None:
        for payload in ({"sub": "1"}, {"id": "1"}, {"id": True}):
            with self.subTest(payload=payload):
                token = jwt.encode(payload, TEST_SECRET, algorithm="HS256")
                with self.assertRaises(InvalidTokenError):
                    self.credentials.extract_data_from_token(token)


if __name__ == "__main__":
    unittest.main()
