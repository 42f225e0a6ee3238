import os

# settings are read once at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-secret-key-that-is-long-enough-0123"
os.environ["ADMIN_PASSWORD"] = "letmein"
os.environ["TOKEN_REAPER_ENABLED"] = "false"
os.environ["ENVIRONMENT"] = "development"

from datetime import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool

from config.database import Database
from main import create_app
from api.testusers.testusers_model import Registrant
from api.attendance.attendance_records_model import AttendanceRecord, AttendanceStatus
from utils.time_utils import local_midnight

ADMIN_PASSWORD = "letmein"


@pytest.fixture
def database():
    db = Database(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db.ensure_connection()
    yield db
    db.dispose()


@pytest.fixture
def db_session(database):
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def client(database):
    return TestClient(create_app(database=database))


@pytest.fixture
def make_registrant(db_session):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        data = {
            "name": f"Student {n}",
            "email": f"student{n}@campus.edu",
            "regno": f"REG{n:04d}",
            "phone": f"90000000{n:02d}",
            "branch": "CSE",
            "campus": "bbsr",
        }
        data.update(overrides)
        registrant = Registrant(**data)
        db_session.add(registrant)
        db_session.commit()
        db_session.refresh(registrant)
        return registrant

    return _make


@pytest.fixture
def make_record(db_session):
    def _make(registrant, day=None, check_in=None, check_out=None, status=AttendanceStatus.present):
        day = local_midnight(day)
        record = AttendanceRecord(
            test_user_id=registrant.id,
            email=registrant.email,
            date=day,
            check_in_time=check_in or datetime.now(),
            check_out_time=check_out,
            status=status,
        )
        db_session.add(record)
        db_session.commit()
        db_session.refresh(record)
        return record

    return _make


@pytest.fixture
def broken_client():
    """App wired to a store that cannot be opened."""
    return TestClient(create_app(database=Database("sqlite:////nonexistent-dir/zenetrone.db")))
