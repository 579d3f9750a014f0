"""
SQLAlchemy ORM models for persistent storage.

Only entries and rules are stored. Stay summaries are always recomputed.
"""

from datetime import date, datetime

from sqlalchemy import (
    Boolean,
    Date,
    DateTime,
    Integer,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class TravelEntryDB(Base):
    """
    A border crossing stored for one user.

    `position` records the order the entries were saved in, which breaks
    ties between entries departing on the same day.
    """

    __tablename__ = "travel_entries"
    __table_args__ = (UniqueConstraint("user_id", "entry_id", name="uq_user_entry"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    entry_id: Mapped[str] = mapped_column(String(255))
    position: Mapped[int] = mapped_column(Integer, default=0)
    departure_country: Mapped[str] = mapped_column(String(8))
    arrival_country: Mapped[str] = mapped_column(String(8), index=True)
    departure_date: Mapped[date] = mapped_column(Date)
    arrival_date: Mapped[date] = mapped_column(Date)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return (
            f"<TravelEntryDB(user_id={self.user_id}, "
            f"{self.departure_country}->{self.arrival_country})>"
        )


class CountryRuleDB(Base):
    """
    A country rule stored for one user.

    Built-in rules are stored too once a user edits them, so their
    thresholds and window policies can be overridden.
    """

    __tablename__ = "country_rules"
    __table_args__ = (UniqueConstraint("user_id", "country_code", name="uq_user_country"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), index=True)
    country_code: Mapped[str] = mapped_column(String(8))
    name: Mapped[str] = mapped_column(String(255))
    threshold: Mapped[int] = mapped_column(Integer)
    window: Mapped[str] = mapped_column(String(32))
    description: Mapped[str] = mapped_column(Text, default="")
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<CountryRuleDB(user_id={self.user_id}, code={self.country_code})>"
