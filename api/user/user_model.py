# api/user/user_model.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from config.database import Base


class User(Base):
    __tablename__ = 'users'

    id          = Column(Integer, primary_key=True, index=True)
    name        = Column(String(100), nullable=True)
    email       = Column(String(255), nullable=False, unique=True, index=True)
    password    = Column(String(255), nullable=False)
    created_at  = Column(DateTime, default=datetime.now, nullable=False)
    updated_at  = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    event_registrations = relationship("EventRegistration", back_populates="user")

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"
