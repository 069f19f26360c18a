"""Health endpoints with the database session replaced by a mock."""

import unittest
from unittest.mock import MagicMock

from sqlalchemy.exc import OperationalError

from catalog_api.core.database import get_db
from tests.client import ApiHarness

HEALTH = "/api/v1/health"


class TestHealth(unittest.TestCase):
    def setUp(self) -> None:
        self.h = ApiHarness()
        self.db = MagicMock()
        self.h.app.dependency_overrides[get_db] = lambda: self.db

    def test_healthy(self) -> None:
        resp = self.h.client.get(f"{HEALTH}/")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["status"], "healthy")
        self.assertEqual(body["services"]["database"], "healthy")
        self.db.execute.assert_called_once()

    def test_database_down(self) -> None:
        self.db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
        resp = self.h.client.get(f"{HEALTH}/")
        self.assertEqual(resp.status_code, 503)
        self.assertEqual(resp.json()["status"], "unhealthy")
        self.assertEqual(self.h.client.get(f"{HEALTH}/ready").status_code, 503)

    def test_live_never_touches_database(self) -> None:
        resp = self.h.client.get(f"{HEALTH}/live")
        self.assertEqual(resp.status_code, 200)
        self.db.execute.assert_not_called()

    def test_root(self) -> None:
        resp = self.h.client.get("/")
        self.assertEqual(resp.json(), {"message": "Catalog API"})

    def test_unversioned_paths(self) -> None:
        resp = self.h.client.get("/health")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json()["status"], "healthy")
        self.assertEqual(self.h.client.get("/ready").status_code, 200)
        self.assertEqual(self.h.client.get("/live").json(), {"message": "Service is alive"})

    def test_unversioned_health_reports_database_down(self) -> None:
        self.db.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection refused"))
        self.assertEqual(self.h.client.get("/health").status_code, 503)
        self.assertEqual(self.h.client.get("/ready").status_code, 503)


class TestOpenApiErrors(unittest.TestCase):
    def test_error_body_documented_on_versioned_routes(self) -> None:
        schema = ApiHarness().client.get("/openapi.json").json()
        self.assertIn("ErrorResponse", schema["components"]["schemas"])
        conflict = schema["paths"]["/api/v1/auth/register"]["post"]["responses"]["409"]
        self.assertEqual(
            conflict["content"]["application/json"]["schema"]["$ref"],
            "#/components/schemas/ErrorResponse",
        )


if __name__ == "__main__":
    unittest.main()
