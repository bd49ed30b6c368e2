from sqlalchemy import Integer, String, Date, DateTime, ForeignKey, Enum as SQLEnum, Index
from datetime import date, datetime
from sqlalchemy.orm import Mapped, mapped_column
from enum import Enum
from typing import Optional
from app.db.database import Base


class ChangeType(str, Enum):
    DATE_SHIFT = "DATE_SHIFT"
    REASSIGNMENT = "REASSIGNMENT"


class VersionRecords(Base):
    """
    One recorded change between two generations for one work item.

    work_item_id / staff_id carry no foreign key and the names are cached,
    so history survives deletion of the staff member or work item.
    """
    __tablename__ = "version_records"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    prior_entry_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("schedule_entries.id", ondelete="SET NULL"), nullable=True
    )
    work_item_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    staff_id: Mapped[int] = mapped_column(Integer, nullable=False)
    previous_staff_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    staff_name: Mapped[str] = mapped_column(String(255), nullable=False)
    work_item_title: Mapped[str] = mapped_column(String(255), nullable=False)
    change_type: Mapped[ChangeType] = mapped_column(SQLEnum(ChangeType, name="change_type_enum"), nullable=False)
    old_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    old_end_date: Mapped[date] = mapped_column(Date, nullable=False)
    new_start_date: Mapped[date] = mapped_column(Date, nullable=False)
    new_end_date: Mapped[date] = mapped_column(Date, nullable=False)
    delta_days: Mapped[int] = mapped_column(Integer, nullable=False)
    generation_id: Mapped[str] = mapped_column(String(36), nullable=False)
    generation_timestamp: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_version_records_generation_id", "generation_id"),
        Index("ix_version_records_generation_timestamp", "generation_timestamp"),
    )
