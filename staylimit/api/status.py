"""
Residency status API endpoints.

Summaries are computed on every request from the stored travel log and
rules; they are never stored.
"""

from datetime import date
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from staylimit.analysis.residency import available_years, evaluate, evaluate_for_year
from staylimit.api.clock import get_today
from staylimit.config import settings
from staylimit.db import get_entries, get_rules
from staylimit.db.database import get_session
from staylimit.models.rules import WindowPolicy
from staylimit.models.stay import StayStatus, StaySummary

router = APIRouter(prefix="/status", tags=["status"])

# Earliest reference date accepted, matching the lower bound on `year`
EARLIEST_REFERENCE = date(1900, 1, 1)


class StayResponse(BaseModel):
    """Days spent in one country, classified against its rule."""

    code: str
    country: str
    days: int = Field(ge=0)
    status: StayStatus
    status_label: str
    threshold: int
    days_remaining: int
    window: WindowPolicy

    @classmethod
    def from_summary(cls, summary: StaySummary) -> "StayResponse":
        return cls(
            code=summary.code,
            country=summary.country,
            days=summary.days,
            status=summary.status,
            status_label=summary.status.label,
            threshold=summary.threshold,
            days_remaining=summary.days_remaining,
            window=summary.window,
        )


class StatusResponse(BaseModel):
    """Residency status for every rule, most days first."""

    user_id: str
    view: Literal["current", "historical"]
    reference_date: date = Field(
        ...,
        description="Open stays are counted up to this date",
    )
    year: int | None = None
    stays: list[StayResponse] = Field(default_factory=list)


class YearsResponse(BaseModel):
    """Years that have travel data, most recent first."""

    user_id: str
    years: list[int]


@router.get("/{user_id}", response_model=StatusResponse)
async def get_user_status(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    today: Annotated[date, Depends(get_today)],
    year: Annotated[
        int | None, Query(ge=1900, le=9999, description="Show status as of Dec 31 of this year")
    ] = None,
    as_of: Annotated[date | None, Query(description="Reference date for the current view")] = None,
    include_zero: Annotated[bool, Query(description="Include countries with no days")] = True,
) -> StatusResponse:
    """
    Compute residency status for a user.

    Without `year` this is the current view: calendar-year rules count the
    reference date's year, rolling rules the twelve months ending on it.
    The reference date is `as_of`, or today.

    With `year` this is the historical view as of Dec 31 of that year.
    """
    if year is not None and as_of is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Use either year or as_of, not both",
        )
    if as_of is not None and as_of < EARLIEST_REFERENCE:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"as_of must be on or after {EARLIEST_REFERENCE.isoformat()}",
        )

    entries = await get_entries(session, user_id)
    rules = await get_rules(session, user_id)
    strict = settings.require_matching_departure

    if year is None:
        reference = as_of or today
        summaries = evaluate(entries, rules, reference, require_matching_departure=strict)
        view: Literal["current", "historical"] = "current"
    else:
        reference = date(year, 12, 31)
        summaries = evaluate_for_year(entries, rules, year, require_matching_departure=strict)
        view = "historical"

    if not include_zero:
        summaries = [summary for summary in summaries if summary.days > 0]

    return StatusResponse(
        user_id=user_id,
        view=view,
        reference_date=reference,
        year=year,
        stays=[StayResponse.from_summary(summary) for summary in summaries],
    )


@router.get("/{user_id}/years", response_model=YearsResponse)
async def get_user_years(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    today: Annotated[date, Depends(get_today)],
) -> YearsResponse:
    """List years with travel data for the historical view selector."""
    entries = await get_entries(session, user_id)
    return YearsResponse(user_id=user_id, years=available_years(entries, today))
