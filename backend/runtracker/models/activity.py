from sqlalchemy import Column, Date, DateTime, Float, Integer, String, Text
from sqlalchemy.sql import func
from runtracker.db import Base


class Activity(Base):
    __tablename__ = "activities"

    id = Column(String(36), primary_key=True, index=True)
    user_id = Column(String(36), nullable=False, index=True)

    date = Column(Date, nullable=False, index=True)

    distance = Column(Float, nullable=False)  # kilometers
    duration = Column(Integer, nullable=False)  # minutes
    # minutes/km as sent by the client; not recomputed on update
    pace = Column(Float, nullable=False)

    location = Column(String, nullable=False, server_default="")
    notes = Column(String, nullable=False, server_default="")

    # JSON-encoded list of strings (data URIs or URLs)
    images = Column(Text, nullable=False, server_default="[]")

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
