"""
Travel entry API endpoints.

The travel log is always replaced as a whole: edits and deletes happen
client-side and the full list is saved back.
"""

import logging
from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from staylimit.api.clock import get_today
from staylimit.db import delete_entries, get_entries, replace_entries
from staylimit.db.database import get_session
from staylimit.models.failure import KnownError
from staylimit.parsers.entry_import import (
    EntryRecord,
    entries_to_json,
    export_filename,
    parse_entries_json,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/entries", tags=["entries"])


class EntriesResponse(BaseModel):
    """Response model for a user's travel log."""

    user_id: str
    entries: list[EntryRecord] = Field(default_factory=list)
    total_entries: int = 0


class EntriesUpdateRequest(BaseModel):
    """Request model for replacing a travel log."""

    entries: list[EntryRecord] = Field(
        ...,
        description="Complete travel log; replaces what is stored",
    )


class EntriesImportRequest(BaseModel):
    """Request model for importing a previously exported travel log."""

    text: str = Field(
        ...,
        description="Contents of an exported JSON file (a JSON array of entries)",
        examples=[
            '[{"id": "1", "departureCountry": "US", "arrivalCountry": "AU", '
            '"departureDate": "2024-01-01", "arrivalDate": "2024-01-10"}]'
        ],
    )


class ImportResponse(BaseModel):
    """Response model for a travel log import."""

    user_id: str
    entries_imported: int
    replaced_existing: bool = Field(
        default=False,
        description="True if a stored travel log was replaced",
    )


class DeleteEntriesResponse(BaseModel):
    """Response model for clearing a travel log."""

    user_id: str
    deleted: int
    message: str = ""


@router.get("/{user_id}", response_model=EntriesResponse)
async def get_user_entries(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> EntriesResponse:
    """Get a user's travel log in saved order. Empty if nothing is stored."""
    entries = await get_entries(session, user_id)
    return EntriesResponse(
        user_id=user_id,
        entries=[EntryRecord.from_entry(entry) for entry in entries],
        total_entries=len(entries),
    )


@router.put("/{user_id}", response_model=EntriesResponse)
async def update_user_entries(
    user_id: str,
    request: EntriesUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> EntriesResponse:
    """Replace a user's travel log. An empty list clears it."""
    try:
        entries = await replace_entries(
            session, user_id, [record.to_entry() for record in request.entries]
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    return EntriesResponse(
        user_id=user_id,
        entries=[EntryRecord.from_entry(entry) for entry in entries],
        total_entries=len(entries),
    )


@router.delete("/{user_id}", response_model=DeleteEntriesResponse)
async def delete_user_entries(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteEntriesResponse:
    """Clear all of a user's travel data."""
    deleted = await delete_entries(session, user_id)

    if deleted:
        message = f"Deleted {deleted} travel entries."
    else:
        message = "No travel data found to delete."

    return DeleteEntriesResponse(user_id=user_id, deleted=deleted, message=message)


@router.post("/{user_id}/import", response_model=ImportResponse)
async def import_user_entries(
    user_id: str,
    request: EntriesImportRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> ImportResponse:
    """
    Import a travel log exported earlier.

    The file must hold a JSON array of entries. Anything else is rejected
    and the stored log is left untouched. A valid import replaces the
    stored log.
    """
    if not request.text or not request.text.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Import text cannot be empty",
        )

    try:
        entries = parse_entries_json(request.text)
    except KnownError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    existing = await get_entries(session, user_id)

    try:
        await replace_entries(session, user_id, entries)
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    logger.info("Imported %d entries for %s (replaced %d)", len(entries), user_id, len(existing))
    return ImportResponse(
        user_id=user_id,
        entries_imported=len(entries),
        replaced_existing=bool(existing),
    )


@router.get("/{user_id}/export")
async def export_user_entries(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
    today: Annotated[date, Depends(get_today)],
) -> Response:
    """Download the travel log as a JSON file in the import format."""
    entries = await get_entries(session, user_id)
    return Response(
        content=entries_to_json(entries),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{export_filename(today)}"'},
    )
