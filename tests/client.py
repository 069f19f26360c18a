"""TestClient wiring: a real app with repositories swapped for in-memory fakes."""

from datetime import timedelta

from fastapi.testclient import TestClient

from catalog_api.api.v1.dependencies import (
    get_auth_service,
    get_product_service,
    get_token_manager,
)
from catalog_api.core.config import Settings
from catalog_api.core.tokens import TokenManager
from catalog_api.main import create_app
from catalog_api.services.auth import AuthService
from catalog_api.services.products import ProductService
from tests.fakes import InMemoryProductRepository, InMemoryUserRepository

SECRET = "api-test-secret-0123456789abcdef0123456789"
FAST_ROUNDS = 4


def make_settings(**overrides: object) -> Settings:
    fields: dict[str, object] = {
        "JWT_SECRET": SECRET,
        "BCRYPT_ROUNDS": FAST_ROUNDS,
        "CORS_ALLOWED_ORIGINS": "http://localhost:3000",
    }
    fields.update(overrides)
    return Settings(_env_file=None, **fields)


class ApiHarness:
    """App + fakes; tests reach into users/products/token_manager directly."""

    def __init__(self, token_manager: TokenManager | None = None) -> None:
        self.users = InMemoryUserRepository()
        self.products = InMemoryProductRepository()
        self.token_manager = token_manager or TokenManager(SECRET, timedelta(hours=1))
        self.auth_service = AuthService(self.users, self.token_manager, bcrypt_rounds=FAST_ROUNDS)

        self.app = create_app(make_settings())
        self.app.dependency_overrides[get_token_manager] = lambda: self.token_manager
        self.app.dependency_overrides[get_auth_service] = lambda: self.auth_service
        self.app.dependency_overrides[get_product_service] = lambda: ProductService(self.products)
        self.client = TestClient(self.app)

    def register(self, email: str = "a@b.co", username: str = "alice", password: str = "password1") -> dict:
        resp = self.client.post(
            "/api/v1/auth/register",
            json={"email": email, "username": username, "password": password},
        )
        assert resp.status_code == 201, resp.text
        return resp.json()

    def auth_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}

    def admin_headers(self) -> dict[str, str]:
        body = self.register(email="root@b.co", username="root")
        admin = self.users.get_by_id(body["user"]["id"])
        admin.is_admin = True
        token, _ = self.auth_service.issue_token(admin)
        return self.auth_headers(token)
