"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Auth components
(token stores, blacklist, rate limiter) are rebuilt for every test.
"""

from __future__ import annotations

import os

import pytest
from sqlalchemy.orm import scoped_session, sessionmaker

from blog import wiring
from blog.core.config import TestingConfig
from blog.core.extensions import db as _db  # Flask-SQLAlchemy instance
from blog.factory import create_app  # application factory under test


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - Keeps Redis out of the picture; the in-memory adapters are wired.
    - Retries in the toggle engine do not sleep.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    REDIS_URL = None
    TOGGLE_RETRY_BASE_DELAY = 0.0
    LOG_LEVEL = "WARNING"


@pytest.fixture(scope="session")
def app():
    """Create a Flask application configured for testing.

    Returns
    -------
    flask.Flask
        Application instance with :class:`TestConfig` applied and logging
        noise reduced.
    """
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    os.environ.pop("REDIS_URL", None)
    app = create_app(TestConfig, instance_relative_config=False)
    app.logger.setLevel("WARNING")
    return app


@pytest.fixture(scope="session")
def db(app):
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application. No app
        context stays pushed; see :func:`app_context`.
    """
    with app.app_context():
        _db.create_all()
    yield _db
    with app.app_context():
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(app, db):
    """Keep a dedicated connection open for the whole session."""
    with app.app_context():
        conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture(scope="function")
def session(db, connection):
    """Provide a SQLAlchemy session joined to an outer, rolled-back transaction.

    Yields
    ------
    sqlalchemy.orm.scoping.scoped_session
        Scoped session bound to the shared connection.

    Notes
    -----
    ``join_transaction_mode="create_savepoint"`` makes every
    ``session.commit()`` (Unit of Work commits included) release a
    SAVEPOINT instead of committing, so the outer rollback discards it all.
    """
    outer = connection.begin()
    scoped = scoped_session(
        sessionmaker(bind=connection, join_transaction_mode="create_savepoint", autoflush=False)
    )

    # Route application code through this session
    original_session = db.session
    db.session = scoped

    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        outer.rollback()


@pytest.fixture(autouse=True)
def app_context(request, app):
    """Push an app context for the duration of each test.

    Tests driving the HTTP client get none: each request then pushes and
    tears down its own context, as in production.
    """
    if "client" in request.fixturenames:
        yield None
        return
    with app.app_context() as ctx:
        yield ctx


@pytest.fixture(autouse=True)
def components(app, db):
    """Rebuild the wired components so in-memory state never leaks."""
    wiring.init_app(app)
    return app.extensions[wiring.EXTENSION_KEY]


@pytest.fixture()
def client(app, session):
    return app.test_client()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to pytest SQLAlchemy session --------------------------
@pytest.fixture(autouse=True)
def _factories_session(session):
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
