import os

# Must be set before the app is imported so the in-memory engine is used
os.environ["TESTING"] = "True"

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import DatabaseManager, SessionLocal, get_db, init_db
from app.core.security import create_access_token, get_password_hash
from app.main import app
from app.models.user import User, UserRole

API = settings.API_V1_STR


@pytest.fixture
def db() -> Generator[Session, None, None]:
    """Fresh schema with the seeded admin, settings and art types."""
    DatabaseManager.create_all_tables()
    session = SessionLocal()
    init_db(session)
    try:
        yield session
    finally:
        session.close()
        DatabaseManager.drop_all_tables()


@pytest_asyncio.fixture
async def client(db: Session) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to the test session. Lifespan is not run."""

    def get_db_override() -> Generator[Session, None, None]:
        try:
            yield db
        finally:
            # Uncommitted changes from a failed request must not leak into the next one
            db.rollback()

    app.dependency_overrides[get_db] = get_db_override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client
    app.dependency_overrides.clear()


def make_user(db: Session, name: str, role: UserRole = UserRole.DESIGNER, password: str = "secret", **fields) -> User:
    user = User(name=name, hashed_password=get_password_hash(password), role=role.value, **fields)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def bearer(user: User) -> dict:
    token = create_access_token(subject=user.id, additional_claims={"role": user.role, "name": user.name})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin(db: Session) -> User:
    return db.query(User).filter(User.name == settings.FIRST_ADMIN_NAME).one()


@pytest.fixture
def designer(db: Session) -> User:
    return make_user(db, "Studio - Ana Souza", avatar_color="#123456")


@pytest.fixture
def other_designer(db: Session) -> User:
    return make_user(db, "Bruno Lima")


@pytest.fixture
def admin_headers(admin: User) -> dict:
    return bearer(admin)


@pytest.fixture
def designer_headers(designer: User) -> dict:
    return bearer(designer)


@pytest.fixture
def art_types(db: Session) -> dict:
    """Seeded art types keyed by label."""
    from app.models.art_type import ArtType

    return {a.label: a for a in db.query(ArtType).all()}
