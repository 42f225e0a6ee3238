# api/events/event_reg_model.py
from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from config.database import Base


class EventRegistration(Base):
    __tablename__ = "event_registrations"

    id         = Column(Integer, primary_key=True, index=True)
    user_id    = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    event_id   = Column(String(100), nullable=False)
    event_name = Column(String(255), nullable=False)
    ticket_id  = Column(String(100), nullable=False, index=True)
    email      = Column(String(255), nullable=False, index=True)
    is_zentrone = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, default=datetime.now, nullable=False)
    updated_at = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    user = relationship("User", back_populates="event_registrations")

    def __repr__(self):
        return f"<EventRegistration(id={self.id}, ticket_id='{self.ticket_id}')>"
