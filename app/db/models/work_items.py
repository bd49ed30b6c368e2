from typing import Optional
from datetime import date, datetime
from sqlalchemy import Integer, String, Float, Date, DateTime, func, Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from app.db.database import Base
from app.db.models.staff import Skill


class WorkItems(Base):
    __tablename__ = "work_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    client: Mapped[str] = mapped_column(String(255), nullable=False)
    skill_required: Mapped[Skill] = mapped_column(SQLEnum(Skill, name="skill_enum"), nullable=False)
    effort_hours: Mapped[float] = mapped_column(Float, nullable=False)
    due_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
