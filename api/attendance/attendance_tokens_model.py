from datetime import datetime, timedelta

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Boolean,
    ForeignKey,
)
from config.database import Base

# tokens are purged this long after creation
TOKEN_TTL = timedelta(hours=12)


class AttendanceToken(Base):
    __tablename__ = "attendance_tokens"

    id           = Column(Integer, primary_key=True, index=True)
    email        = Column(String(255), nullable=False, unique=True, index=True)
    test_user_id = Column(Integer, ForeignKey("test_users.id"), nullable=False)
    token        = Column(String(1024), nullable=False)
    salt         = Column(String(64), nullable=False)
    created_at   = Column(DateTime, default=datetime.now, nullable=False, index=True)
    last_active  = Column(DateTime, default=datetime.now, nullable=False)
    is_active    = Column(Boolean, nullable=False, default=True)

    @property
    def expires_at(self) -> datetime:
        return self.created_at + TOKEN_TTL

    def __init__(self, email, test_user_id, token, salt, is_active=True):
        self.email        = email
        self.test_user_id = test_user_id
        self.token        = token
        self.salt         = salt
        self.is_active    = is_active
