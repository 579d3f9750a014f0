"""
Country rule API endpoints.

Users start with the built-in rules and may add custom countries, edit
any rule's threshold or window, and delete custom countries.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from staylimit.config import DEFAULT_THRESHOLD
from staylimit.db import get_rules, save_rules
from staylimit.db.database import get_session
from staylimit.models.failure import KnownError
from staylimit.models.rules import CountryRule, WindowPolicy
from staylimit.services.tax_rules import add_rule, delete_rule, normalize_code, update_rule

router = APIRouter(prefix="/rules", tags=["rules"])


class RuleResponse(BaseModel):
    """One country rule."""

    code: str
    name: str
    threshold: int
    window: WindowPolicy
    window_label: str
    description: str
    is_custom: bool

    @classmethod
    def from_rule(cls, rule: CountryRule) -> "RuleResponse":
        window = WindowPolicy(rule.window)
        return cls(
            code=rule.code,
            name=rule.name,
            threshold=rule.threshold,
            window=window,
            window_label=window.label,
            description=rule.description,
            is_custom=rule.is_custom,
        )


class RulesResponse(BaseModel):
    """All rules in effect for a user."""

    user_id: str
    rules: list[RuleResponse] = Field(default_factory=list)


class RuleCreateRequest(BaseModel):
    """Request model for adding a custom country."""

    code: str = Field(..., min_length=1, max_length=8, examples=["FR"])
    name: str = Field(..., min_length=1, examples=["France"])
    threshold: int = Field(default=DEFAULT_THRESHOLD, description="Day threshold")
    window: WindowPolicy = WindowPolicy.CALENDAR_YEAR
    description: str | None = None


class RuleUpdateRequest(BaseModel):
    """Request model for editing a rule. Omitted fields are left unchanged."""

    name: str | None = None
    threshold: int | None = None
    window: WindowPolicy | None = None
    description: str | None = None


class DeleteRuleResponse(BaseModel):
    """Response model for deleting a custom country."""

    user_id: str
    code: str
    deleted: bool


@router.get("/{user_id}", response_model=RulesResponse)
async def get_user_rules(
    user_id: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> RulesResponse:
    """Get the rules in effect for a user: built-ins plus any saved changes."""
    rules = await get_rules(session, user_id)
    return RulesResponse(
        user_id=user_id,
        rules=[RuleResponse.from_rule(rule) for rule in rules.values()],
    )


@router.post(
    "/{user_id}",
    response_model=RuleResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_user_rule(
    user_id: str,
    request: RuleCreateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> RuleResponse:
    """Add a custom country. Fails with 409 if the code already exists."""
    rules = await get_rules(session, user_id)
    try:
        updated = add_rule(
            rules,
            request.code,
            request.name,
            threshold=request.threshold,
            window=request.window,
            description=request.description,
        )
    except KnownError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    await save_rules(session, user_id, updated)
    return RuleResponse.from_rule(updated[normalize_code(request.code)])


@router.patch("/{user_id}/{code}", response_model=RuleResponse)
async def update_user_rule(
    user_id: str,
    code: str,
    request: RuleUpdateRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> RuleResponse:
    """Edit a rule's name, threshold, window or description."""
    changes = request.model_dump(exclude_none=True)
    if not changes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No changes provided",
        )

    rules = await get_rules(session, user_id)
    try:
        updated = update_rule(rules, code, **changes)
    except KnownError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    await save_rules(session, user_id, updated)
    return RuleResponse.from_rule(updated[normalize_code(code)])


@router.delete("/{user_id}/{code}", response_model=DeleteRuleResponse)
async def delete_user_rule(
    user_id: str,
    code: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeleteRuleResponse:
    """Delete a custom country. Built-in countries cannot be deleted (403)."""
    rules = await get_rules(session, user_id)
    try:
        updated = delete_rule(rules, code)
    except KnownError as e:
        raise HTTPException(status_code=e.status_code, detail=e.message) from e

    await save_rules(session, user_id, updated)
    return DeleteRuleResponse(user_id=user_id, code=normalize_code(code), deleted=True)
