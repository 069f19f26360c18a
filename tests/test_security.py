"""Unit tests for catalog_api.core.security: bcrypt hashing and credential validators."""

import unittest

from catalog_api.core.errors import ValidationError
from catalog_api.core.security import (
    hash_password,
    validate_email,
    validate_password_strength,
    validate_username,
    verify_password,
)

FAST_ROUNDS = 4


class TestPasswordHashing(unittest.TestCase):
    def test_hash_is_not_plaintext(self) -> None:
        hashed = hash_password("password1", FAST_ROUNDS)
        self.assertNotEqual(hashed, "password1")
        self.assertNotIn("password1", hashed)
        self.assertTrue(hashed.startswith("$2"))

    def test_salted(self) -> None:
        self.assertNotEqual(
            hash_password("password1", FAST_ROUNDS),
            hash_password("password1", FAST_ROUNDS),
        )

    def test_verify(self) -> None:
        hashed = hash_password("password1", FAST_ROUNDS)
        self.assertTrue(verify_password("password1", hashed))
        self.assertFalse(verify_password("password2", hashed))

    def test_verify_against_garbage_hash_is_false(self) -> None:
        self.assertFalse(verify_password("password1", "not-a-bcrypt-hash"))

    def test_long_password_truncated_consistently(self) -> None:
        long_pw = "x" * 100
        hashed = hash_password(long_pw, FAST_ROUNDS)
        self.assertTrue(verify_password(long_pw, hashed))


class TestValidators(unittest.TestCase):
    def test_email_accepts_basic_addresses(self) -> None:
        for email in ("a@b.co", "first.last+tag@mail.example.org", "x_1%y@sub-domain.io"):
            with self.subTest(email=email):
                validate_email(email)

    def test_email_rejections(self) -> None:
        cases = {
            "": "user email is required",
            "bad-email": "invalid email format",
            "a@b.c": "invalid email format",
            "A@B.CO": "invalid email format",
            "a@@b.co": "invalid email format",
        }
        for email, message in cases.items():
            with self.subTest(email=email):
                with self.assertRaises(ValidationError) as ctx:
                    validate_email(email)
                self.assertEqual(ctx.exception.message, message)
                self.assertEqual(ctx.exception.field, "email")

    def test_username_bounds(self) -> None:
        validate_username("abc")
        validate_username("a" * 50)
        cases = {
            "": "user username is required",
            "ab": "username must be at least 3 characters",
            "a" * 51: "username must be less than 50 characters",
        }
        for username, message in cases.items():
            with self.subTest(username=username):
                with self.assertRaises(ValidationError) as ctx:
                    validate_username(username)
                self.assertEqual(ctx.exception.message, message)

    def test_password_strength(self) -> None:
        validate_password_strength("12345678")
        for pw in ("", "1234567"):
            with self.subTest(pw=pw):
                with self.assertRaises(ValidationError):
                    validate_password_strength(pw)


if __name__ == "__main__":
    unittest.main()
