"""Shared fixtures: a fresh in-memory app per test plus users and tokens."""
import pytest

from config import TestConfig
from coachrpg import create_app, db
from coachrpg.auth import issue_token
from coachrpg.models.user import User, ClientProfile, ROLE_ADMIN, ROLE_CLIENT
from coachrpg.rpg.xp import initialize_character


# ============================================================================
# App Fixtures
# ============================================================================

@pytest.fixture
def app():
    """Application bound to an empty in-memory SQLite database"""
    app = create_app(TestConfig)
    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


# ============================================================================
# User & Auth Fixtures
# ============================================================================

def _make_user(email, role, full_name=None, password="secret123"):
    user = User(email=email, role=role)
    user.set_password(password)
    if role == ROLE_CLIENT:
        user.client_profile = ClientProfile(full_name=full_name or "Test Client", phone="555-0100")
    db.session.add(user)
    db.session.commit()
    return user


@pytest.fixture
def admin_user(app):
    return _make_user("coach@example.com", ROLE_ADMIN)


@pytest.fixture
def client_user(app):
    return _make_user("client@example.com", ROLE_CLIENT, full_name="Jamie Client")


@pytest.fixture
def other_client(app):
    return _make_user("other@example.com", ROLE_CLIENT, full_name="Other Client")


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {issue_token(admin_user)}"}


@pytest.fixture
def client_headers(client_user):
    return {"Authorization": f"Bearer {issue_token(client_user)}"}


# ============================================================================
# RPG Fixtures
# ============================================================================

@pytest.fixture
def character(client_user):
    """Fresh level-1 character for client_user"""
    character = initialize_character(client_user.id)
    db.session.commit()
    return character
