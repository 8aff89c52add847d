import os
import tempfile

# Must be set before the application modules read their configuration
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="videostream-uploads-")
os.environ["MAX_FILE_SIZE"] = str(1024 * 1024)

import pytest
from fastapi.testclient import TestClient

from db.database import Base, engine, SessionLocal
from db.connection import create_tables
from main import app
from models.userModels import Users, UserRole
from models.videoModels import Video, PrivacySetting
from Endpoints.Auth.normal_register import bcrypt_context
from functions.generateToken import create_access_token

PASSWORD = "Secret123"


@pytest.fixture(autouse=True)
def reset_database():
    create_tables()
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_user(db):
    def _make_user(username, role=UserRole.VIEWER, is_active=True):
        user = Users(
            username=username,
            email=f"{username}@videostream.io",
            password_hash=bcrypt_context.hash(PASSWORD),
            role=role,
            display_name=username,
            is_active=is_active,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user
    return _make_user


@pytest.fixture
def make_video(db):
    def _make_video(creator, title="Sample clip", privacy=PrivacySetting.PUBLIC,
                    description=None, filename=None, upload_date=None):
        video = Video(
            creator_id=creator.id,
            title=title,
            description=description,
            filename=filename or f"video-{title.replace(' ', '-')}.mp4",
            file_size=10,
            privacy=privacy,
        )
        if upload_date is not None:
            video.upload_date = upload_date
        db.add(video)
        db.commit()
        db.refresh(video)
        return video
    return _make_video


@pytest.fixture
def auth_headers():
    def _auth_headers(user):
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}
    return _auth_headers


@pytest.fixture
def creator(make_user):
    return make_user("creator_b", role=UserRole.CREATOR)


@pytest.fixture
def viewer(make_user):
    return make_user("viewer_a")
