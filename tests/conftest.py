"""
Shared fixtures: in-memory SQLite plus fake identity/object storage, wired
into the app through the Backend container.
"""
import uuid

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from supportdesk.core.auth import AuthSession, User
from supportdesk.core.backend import Backend
from supportdesk.core.errors import AuthError, RemoteOperationError
from supportdesk.main import create_app
from supportdesk.models import Base
from supportdesk.services import tenants


class FakeIdentity:
    def __init__(self):
        self.accounts = {}  # email -> (User, password)
        self.tokens = {}    # token -> User

    def _issue(self, user: User) -> AuthSession:
        token = f"token-{uuid.uuid4().hex}"
        self.tokens[token] = user
        return AuthSession(user=user, access_token=token)

    def sign_up(self, email, password):
        if email in self.accounts:
            raise AuthError("User already registered")
        user = User(user_id=str(uuid.uuid4()), email=email)
        self.accounts[email] = (user, password)
        return self._issue(user)

    def sign_in(self, email, password):
        account = self.accounts.get(email)
        if account is None or account[1] != password:
            raise AuthError("Invalid login credentials")
        return self._issue(account[0])

    def sign_out(self, access_token):
        self.tokens.pop(access_token, None)

    def get_user(self, access_token):
        user = self.tokens.get(access_token)
        if user is None:
            raise AuthError("Invalid authentication credentials")
        return user


class FakeStorage:
    def __init__(self):
        self.objects = {}
        self.calls = 0
        self.fail = False

    def upload(self, key, content, content_type):
        self.calls += 1
        if self.fail:
            raise RemoteOperationError("Could not upload attachment")
        self.objects[key] = (content, content_type)

    def public_url(self, key):
        return f"https://storage.test/ticket-images/{key}"


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def query_log(engine):
    """Every SQL statement sent to the database, in order."""
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        statements.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    yield statements
    event.remove(engine, "before_cursor_execute", record)


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def storage():
    return FakeStorage()


@pytest.fixture
def backend(identity, session_factory, storage):
    return Backend(identity=identity, sessions=session_factory, storage=storage)


@pytest.fixture
def client(backend):
    return TestClient(create_app(backend))


@pytest.fixture
def make_owner(db, identity):
    """Register an owner and return (auth headers, business)."""
    def _make(business_name="Acme", email=None, password="secret123"):
        email = email or f"{uuid.uuid4().hex[:8]}@example.com"
        session, business = tenants.register_owner(db, identity, email, password, business_name)
        return {"Authorization": f"Bearer {session.access_token}"}, business
    return _make


@pytest.fixture
def acme(make_owner):
    return make_owner("Acme")
