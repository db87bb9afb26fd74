import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# raíz del repo en sys.path para `import entropy.*` sin instalar
ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

from entropy.api.app import create_app  # noqa: E402
from entropy.config.seed_modules import seed_modules  # noqa: E402
from entropy.repositories.module_repository import InMemoryModuleRepository  # noqa: E402
from entropy.repositories.user_repository import InMemoryUserRepository  # noqa: E402
from entropy.services.auth_service import AuthService  # noqa: E402
from entropy.services.catalog_service import CatalogService  # noqa: E402
from entropy.services.enrollment_service import EnrollmentService  # noqa: E402

SECRET = "test-secret"


class FakeRedis:
    """Lo mínimo de redis.Redis que usa CatalogCacheRepository."""

    def __init__(self):
        self.data = {}
        self.expirations = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value, ex=None):
        self.data[key] = value.encode("utf-8") if isinstance(value, str) else value
        self.expirations[key] = ex

    def delete(self, key):
        self.data.pop(key, None)


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def modules():
    return InMemoryModuleRepository(seed_modules())


@pytest.fixture
def auth(users):
    return AuthService(users, secret=SECRET)


@pytest.fixture
def catalog(modules):
    return CatalogService(modules)


@pytest.fixture
def enrollment(users, modules, catalog):
    return EnrollmentService(users, modules, catalog=catalog)


@pytest.fixture
def make_user(auth):
    counter = {"n": 0}

    def _make(name="Ana", age=15, password="secret1", email=None):
        counter["n"] += 1
        email = email or f"user{counter['n']}@x.com"
        return auth.register(name, email, age, password)

    return _make


@pytest.fixture
def client(users, modules, auth):
    app = create_app(users=users, modules=modules, auth_service=auth)
    return TestClient(app)


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
