"""Unit tests for password hashing and JWT round-trips into AuthClaims."""

import unittest
from datetime import UTC, datetime, timedelta

import jwt

from burger_queen.core.config import settings
from burger_queen.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from burger_queen.services.authorization import AuthClaims, Role


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_salted_and_verifies(self) -> None:
        first = hash_password("secret")
        second = hash_password("secret")
        self.assertNotEqual(first, "secret")
        self.assertNotEqual(first, second)
        self.assertTrue(verify_password("secret", first))
        self.assertFalse(verify_password("wrong", first))

    def test_malformed_hash_does_not_verify(self) -> None:
        self.assertFalse(verify_password("secret", "not-a-bcrypt-hash"))


class TestAccessToken(unittest.TestCase):
    def test_claims_round_trip(self) -> None:
        token = create_access_token(user_id="64b7f0c2a1d3e4f5a6b7c8d9", role="admin", email="a@x.com")
        claims = AuthClaims.from_token_payload(decode_access_token(token))
        self.assertEqual(claims.user_id, "64b7f0c2a1d3e4f5a6b7c8d9")
        self.assertEqual(claims.email, "a@x.com")
        self.assertIs(claims.role, Role.ADMIN)

    def test_tampered_token_rejected(self) -> None:
        token = create_access_token(user_id="u1", role="user", email="a@x.com")
        forged = jwt.encode(
            {**jwt.decode(token, options={"verify_signature": False}), "role": "admin"},
            "some-other-secret-that-is-long-enough-for-hs256",
            algorithm="HS256",
        )
        with self.assertRaises(jwt.PyJWTError):
            decode_access_token(forged)

    def test_expired_token_rejected(self) -> None:
        past = datetime.now(UTC) - timedelta(minutes=5)
        token = jwt.encode(
            {"userId": "u1", "role": "user", "email": "a@x.com", "exp": past},
            settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
        )
        with self.assertRaises(jwt.ExpiredSignatureError):
            decode_access_token(token)


if __name__ == "__main__":
    unittest.main()
