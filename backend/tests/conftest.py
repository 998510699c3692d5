"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy import event
from sqlalchemy.orm import scoped_session, sessionmaker

from sessionauth.core.config import TestingConfig
from sessionauth.core.extensions import db as _db
from sessionauth.factory import create_app
from sessionauth.services._shared.ports import (
    InMemoryAccountStore,
    InMemorySessionRecordStore,
)
from sessionauth.services.auth.dto import AuthTokenConfig
from sessionauth.services.auth.service import AuthService
from sessionauth.services.sessions.store import SessionStore
from sessionauth.services.tokens.issuer import TokenIssuer
from sessionauth.services.tokens.verifier import CredentialVerifier


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - In-memory SQLite, SQL session store, no Redis.
    - Fixed signing secrets inherited from :class:`TestingConfig`.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    REDIS_URL = None
    SESSION_STORE_BACKEND = "sql"
    LOG_LEVEL = "WARNING"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing."""
    # Ensure env-based config does not leak into tests
    for var in ("DATABASE_URL", "REDIS_URL"):
        os.environ.pop(var, None)
    app = create_app(TestConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    pysqlite does not emit BEGIN itself, which breaks SAVEPOINT handling; the
    two listeners hand transaction control back to SQLAlchemy.
    """
    with app.app_context():
        engine = _db.engine

        @event.listens_for(engine, "connect")
        def _sqlite_connect(dbapi_connection, connection_record):  # pragma: no cover
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def _sqlite_begin(conn):  # pragma: no cover
            conn.exec_driver_sql("BEGIN")

        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db):
    """Keep a dedicated connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(app, db, connection):
    """Provide a SQLAlchemy session wrapped in a per-test transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection. Application commits
        only release SAVEPOINTs; the outer transaction is rolled back after
        each test.
    """
    top_trans = connection.begin()
    factory = sessionmaker(
        bind=connection,
        join_transaction_mode="create_savepoint",
        autoflush=False,
    )
    scoped = scoped_session(factory)

    # Monkey-patch db.session so app code uses this scoped session
    original_session = db.session
    db.session.remove()
    db.session = scoped

    ctx = app.app_context()
    ctx.push()
    try:
        yield scoped
    finally:
        ctx.pop()
        scoped.remove()
        db.session = original_session
        top_trans.rollback()


@pytest.fixture()
def client(app, session):
    """Flask test client sharing the transactional session."""
    return app.test_client()


@pytest.fixture()
def runner(app, session):
    """Flask CLI runner sharing the transactional session."""
    return app.test_cli_runner()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- In-memory auth wiring -----------------------------------------------------
@pytest.fixture()
def token_cfg() -> AuthTokenConfig:
    return AuthTokenConfig(
        access_secret=TestingConfig.ACCESS_TOKEN_SECRET,
        session_secret=TestingConfig.SESSION_TOKEN_SECRET,
        hash_rounds=4,
    )


@pytest.fixture()
def issuer(token_cfg) -> TokenIssuer:
    return TokenIssuer(token_cfg)


@pytest.fixture()
def access_verifier(token_cfg) -> CredentialVerifier:
    return CredentialVerifier.for_access(token_cfg)


@pytest.fixture()
def session_verifier(token_cfg) -> CredentialVerifier:
    return CredentialVerifier.for_session(token_cfg)


@pytest.fixture()
def session_store() -> SessionStore:
    return SessionStore(InMemorySessionRecordStore(), rounds=4)


@pytest.fixture()
def auth_service(issuer, session_verifier, session_store) -> AuthService:
    """AuthService wired to in-memory account and session stores."""
    return AuthService(
        accounts=InMemoryAccountStore(),
        sessions=session_store,
        issuer=issuer,
        session_verifier=session_verifier,
    )


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(request):
    """Wire Factory Boy's session helper to the transactional session fixture.

    Only tests that request ``session`` (directly or through ``client`` and
    ``runner``) touch the database.
    """
    from tests.factories import SQLAlchemySession

    if "session" in request.fixturenames:
        SQLAlchemySession.set(request.getfixturevalue("session"))
    else:
        SQLAlchemySession.set(None)
    yield
    SQLAlchemySession.set(None)
