"""
Shared test configuration and fixtures
"""

import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Set before natours is imported: settings are read at import time
os.environ.setdefault("SECRET_KEY", "test-secret-key-for-testing-only")
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SMTP_HOST", "")

from natours.main import app
from natours.api.dependencies import get_email_service
from natours.application.services.rating_aggregator import RatingAggregator
from natours.db.database import get_db
from natours.db.models import Base
from natours.domain.entities.tour import Tour
from natours.domain.entities.user import User
from natours.domain.enums import UserRole
from natours.domain.value_objects.email import Email
from natours.infrastructure.external_services.email_service import EmailService
from natours.infrastructure.orm.user_model import UserModel
from natours.infrastructure.repositories.unit_of_work_impl import UnitOfWorkImpl
from natours.core.security import get_password_hash


# In-memory SQLite shared by every session of a test
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    """DB session for request handlers"""
    try:
        db = TestingSessionLocal()
        yield db
    finally:
        db.close()


class FakeEmailService(EmailService):
    """Records outgoing mail instead of talking to SMTP"""

    def __init__(self):
        super().__init__()
        self.outbox = []

    async def send(self, recipient: str, subject: str, body: str) -> bool:
        self.outbox.append({"to": recipient, "subject": subject, "body": body})
        return True


@pytest.fixture(scope="function")
def db_session():
    """DB session for a single test"""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def unit_of_work(db_session):
    """Unit of work with rating recomputation hooked in, as in requests"""
    uow = UnitOfWorkImpl(db_session)
    RatingAggregator.for_unit_of_work(uow)
    return uow


@pytest.fixture
def aggregator(unit_of_work):
    """Detached aggregator for calling recompute_ratings directly"""
    return RatingAggregator(unit_of_work.reviews, unit_of_work.tours)


@pytest.fixture
def make_user(unit_of_work):
    """Factory persisting a user, optionally with a password"""

    async def _make_user(email="user@example.com", name="Test User", password=None, role=UserRole.USER):
        user = User.create(name=name, email=Email(email), role=role)
        if password:
            user.hashed_password = get_password_hash(password)
        async with unit_of_work:
            await unit_of_work.users.add(user)
            await unit_of_work.commit()
        return user

    return _make_user


@pytest.fixture
def make_tour(unit_of_work):
    """Factory persisting a valid tour"""

    async def _make_tour(name="The Forest Hiker", **overrides):
        fields = dict(
            name=name,
            duration=5,
            max_group_size=25,
            difficulty="easy",
            price=397,
            summary="Breathtaking hike through the Canadian Banff National Park",
            image_cover="tour-1-cover.jpg",
        )
        fields.update(overrides)
        tour = Tour.create(**fields)
        async with unit_of_work:
            await unit_of_work.tours.add(tour)
            await unit_of_work.commit()
        return tour

    return _make_tour


@pytest.fixture
def email_service():
    return FakeEmailService()


@pytest.fixture(scope="function")
def client(db_session, email_service):
    """API client against the test database"""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_email_service] = lambda: email_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


API = "/api/v1"


def signup(client, email, name="Test User", password="testpassword123"):
    """Sign up through the API and return the response body"""
    response = client.post(
        f"{API}/auth/signup",
        json={
            "name": name,
            "email": email,
            "password": password,
            "password_confirm": password
        }
    )
    assert response.status_code == 201, response.text
    return response.json()


def set_role(db_session, email, role: UserRole):
    """Promote a user directly in the database; the API never grants roles at signup"""
    db_session.query(UserModel).filter(UserModel.email == email).update({UserModel.role: role})
    db_session.commit()


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_user(client):
    return signup(client, "test@example.com")


@pytest.fixture
def auth_headers(test_user):
    return bearer(test_user["token"])


@pytest.fixture
def admin_headers(client, db_session):
    body = signup(client, "admin@example.com", name="Admin User")
    set_role(db_session, "admin@example.com", UserRole.ADMIN)
    return bearer(body["token"])


@pytest.fixture
def tour_payload():
    return {
        "name": "The Sea Explorer",
        "duration": 7,
        "max_group_size": 15,
        "difficulty": "medium",
        "price": 497,
        "price_discount": 450,
        "summary": "Exploring the jaw-dropping US east coast by foot and by boat",
        "image_cover": "tour-2-cover.jpg",
        "images": ["tour-2-1.jpg", "tour-2-2.jpg"],
        "start_dates": ["2027-06-19T09:00:00", "2027-07-20T09:00:00"]
    }
