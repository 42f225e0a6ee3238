from datetime import datetime

from sqlalchemy import Column, Integer, String, Float, Boolean, DateTime
from config.database import Base

CAMPUSES = ("bbsr", "pkd", "vzm")


class CampusLocation(Base):
    __tablename__ = "campus_locations"

    id           = Column(Integer, primary_key=True)
    name         = Column(String(10), nullable=False, unique=True, index=True)
    latitude     = Column(Float, nullable=False)
    longitude    = Column(Float, nullable=False)
    radius       = Column(Float, nullable=False, default=50)
    enabled      = Column(Boolean, nullable=False, default=True)
    last_updated = Column(DateTime, default=datetime.now, nullable=False)
    updated_by   = Column(String(100), nullable=True)
    created_at   = Column(DateTime, default=datetime.now, nullable=False)
    updated_at   = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)
