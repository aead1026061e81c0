"""
Shared fixtures: an in-memory SQLite database, a TestClient wired to it, JWT
helpers and fakes for the chain and storage clients.
"""

import os

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret"
os.environ.setdefault("CORS_ORIGINS", "*")

import itertools

import pytest
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from azure_blob import get_blob_storage
from chain import reset_nonce_managers
from database import get_session
from dependencies import get_deployer_factory, get_transaction_verifier
from main import app
from models import Base


DEPLOYER_ADDRESS = "0x742d35Cc6634C0532925a3b8D373d3E2B2dA4e9D"


class FakeDeployer:
    """Stands in for chain.ContractDeployer; every deploy gets a fresh address"""

    _counter = itertools.count(1)

    def __init__(self, fail_on=None):
        self.calls = []
        self.fail_on = fail_on

    def deploy(self, contract_name, bytecode, constructor_types=(), constructor_args=()):
        self.calls.append((contract_name, bytecode, tuple(constructor_types), tuple(constructor_args)))
        if contract_name == self.fail_on:
            raise RuntimeError(f"{contract_name} deployment reverted")
        n = next(self._counter)
        return {
            "contract_address": "0x" + f"{n:040x}",
            "transaction_hash": "0x" + f"{n:064x}",
            "block_number": 1000 + n,
            "gas_used": 21000 + n,
        }


class FakeVerifier:
    """Stands in for chain.TransactionVerifier with a fixed answer"""

    def __init__(self, status="confirmed"):
        self.status = status
        self.checked = []

    def get_status(self, tx_hash):
        self.checked.append(tx_hash)
        return self.status


class FakeStorage:
    """Stands in for azure_blob.BlobStorage"""

    def __init__(self):
        self.uploaded = []
        self.deleted = []

    def upload(self, file, container, user_id):
        url = f"https://test.blob.core.windows.net/{container}/{user_id}/{file.filename}"
        self.uploaded.append(url)
        return url

    def delete(self, blob_url):
        self.deleted.append(blob_url)


@pytest.fixture(autouse=True)
def fresh_nonce_managers():
    """Nonce counters are process-wide; start every test from the mocked chain"""
    reset_nonce_managers()
    yield
    reset_nonce_managers()


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def deployer():
    return FakeDeployer()


@pytest.fixture
def deployer_factory_calls():
    return []


@pytest.fixture
def verifier():
    return FakeVerifier()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def client(session_factory, deployer, deployer_factory_calls, verifier, storage):
    def override_get_session():
        session = session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def factory():
        deployer_factory_calls.append(deployer)
        return deployer

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_deployer_factory] = lambda: factory
    app.dependency_overrides[get_transaction_verifier] = lambda: verifier
    app.dependency_overrides[get_blob_storage] = lambda: storage

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def make_token(user_id="artist-1"):
    return jwt.encode({"id": user_id}, "test-secret", algorithm="HS256")


def auth_headers(user_id="artist-1"):
    return {"Authorization": f"Bearer {make_token(user_id)}"}
