"""Settings validation and derived values."""

import unittest
from datetime import timedelta

from pydantic import ValidationError

from tests.client import make_settings


class TestSettings(unittest.TestCase):
    def test_defaults(self) -> None:
        settings = make_settings()
        self.assertEqual(settings.JWT_EXPIRE_MINUTES, 1440)
        self.assertEqual(settings.jwt_lifetime, timedelta(hours=24))
        self.assertEqual(settings.API_V1_PREFIX, "/api/v1")

    def test_rejects_non_postgres_url(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(DATABASE_URL="sqlite:///tmp.db")

    def test_rejects_blank_secret(self) -> None:
        with self.assertRaises(ValidationError):
            make_settings(JWT_SECRET="   ")

    def test_bounds(self) -> None:
        for field, value in (
            ("JWT_EXPIRE_MINUTES", 0),
            ("JWT_EXPIRE_MINUTES", 10081),
            ("BCRYPT_ROUNDS", 3),
            ("BCRYPT_ROUNDS", 32),
            ("LOG_LEVEL", "VERBOSE"),
        ):
            with self.subTest(field=field, value=value):
                with self.assertRaises(ValidationError):
                    make_settings(**{field: value})

    def test_log_level_normalized(self) -> None:
        self.assertEqual(make_settings(LOG_LEVEL=" debug ").LOG_LEVEL, "DEBUG")

    def test_cors_origins_split(self) -> None:
        settings = make_settings(CORS_ALLOWED_ORIGINS="http://a.io, ,http://b.io")
        self.assertEqual(settings.cors_origins, ["http://a.io", "http://b.io"])


if __name__ == "__main__":
    unittest.main()
