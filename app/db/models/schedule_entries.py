from sqlalchemy import Integer, Float, Boolean, Date, DateTime, ForeignKey, Enum as SQLEnum, Index, func
from datetime import date, datetime
from sqlalchemy.orm import Mapped, mapped_column
from enum import Enum
from typing import Optional
from app.db.database import Base


class CompletionType(str, Enum):
    ON_TIME = "on_time"
    LATE = "late"


class ScheduleEntries(Base):
    __tablename__ = "schedule_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    work_item_id: Mapped[int] = mapped_column(Integer, ForeignKey("work_items.id", ondelete="CASCADE"), nullable=False)
    staff_id: Mapped[int] = mapped_column(Integer, ForeignKey("staff.id", ondelete="CASCADE"), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    allocated_hours: Mapped[float] = mapped_column(Float, nullable=False)
    is_overdue: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    days_overdue: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    is_completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    completed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    completion_type: Mapped[Optional[CompletionType]] = mapped_column(
        SQLEnum(CompletionType, name="completion_type_enum", values_callable=lambda e: [m.value for m in e]),
        nullable=True,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    __table_args__ = (
        Index("ix_schedule_entries_work_item", "work_item_id"),
        Index("ix_schedule_entries_staff_start", "staff_id", "start_date"),
        Index("ix_schedule_entries_is_completed", "is_completed"),
    )
