# api/testusers/testusers_model.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from config.database import Base


class Registrant(Base):
    """A registrant for the event/test track."""
    __tablename__ = "test_users"

    id         = Column(Integer, primary_key=True, index=True)
    name       = Column(String(255), nullable=False)
    # one registrant per email is checked by the registration route, not here
    email      = Column(String(255), nullable=False, index=True)
    regno      = Column(String(100), nullable=False)
    phone      = Column(String(50), nullable=False)
    branch     = Column(String(100), nullable=False)
    domain     = Column(String(100), nullable=True)
    campus     = Column(String(50), nullable=True)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    def __repr__(self):
        return f"<Registrant(id={self.id}, email='{self.email}', campus='{self.campus}')>"
