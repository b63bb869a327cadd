from sqlalchemy import CheckConstraint, Column, Date, DateTime, Float, String
from sqlalchemy.sql import func
from runtracker.db import Base


class Goal(Base):
    __tablename__ = "goals"
    __table_args__ = (
        CheckConstraint("start_date <= deadline", name="ck_goals_window"),
    )

    id = Column(String(36), primary_key=True, index=True)
    user_id = Column(String(36), nullable=False, index=True)

    title = Column(String, nullable=False)
    type = Column(String(20), nullable=False)  # distance, time, frequency

    target = Column(Float, nullable=False)
    # Derived from activities by the progress recalculator
    current_value = Column(Float, nullable=False, server_default="0")
    unit = Column(String, nullable=False)  # free text

    start_date = Column(Date, nullable=False)
    deadline = Column(Date, nullable=False)

    description = Column(String, nullable=False, server_default="")

    status = Column(
        String(20),
        nullable=False,
        server_default="active",  # active, completed, paused
    )

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
