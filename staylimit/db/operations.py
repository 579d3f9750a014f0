"""
Database CRUD operations.

Entries and rules are saved as whole collections: every save replaces
what was stored for the user, matching how the travel log is edited.
"""

import logging
from collections.abc import Iterable, Mapping

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from staylimit.models.db import CountryRuleDB, TravelEntryDB
from staylimit.models.rules import CountryRule, WindowPolicy
from staylimit.models.travel import TravelEntry
from staylimit.services.tax_rules import RuleMap, seed_rules

logger = logging.getLogger(__name__)

# --- Travel Entry Operations ---


async def get_entries(session: AsyncSession, user_id: str) -> list[TravelEntry]:
    """Get a user's entries in the order they were saved."""
    result = await session.execute(
        select(TravelEntryDB)
        .where(TravelEntryDB.user_id == user_id)
        .order_by(TravelEntryDB.position, TravelEntryDB.id)
    )
    return [entry_to_model(row) for row in result.scalars().all()]


async def replace_entries(
    session: AsyncSession,
    user_id: str,
    entries: Iterable[TravelEntry],
) -> list[TravelEntry]:
    """
    Replace a user's whole travel log.

    Raises ValueError if two entries share an id.
    """
    entries = list(entries)
    ids = [entry.id for entry in entries]
    if len(ids) != len(set(ids)):
        msg = f"Duplicate entry ids in travel log for user {user_id}"
        raise ValueError(msg)

    await session.execute(delete(TravelEntryDB).where(TravelEntryDB.user_id == user_id))
    for position, entry in enumerate(entries):
        session.add(entry_to_db(entry, user_id, position))

    await session.flush()
    logger.info("Saved %d travel entries for %s", len(entries), user_id)
    return entries


async def delete_entries(session: AsyncSession, user_id: str) -> int:
    """
    Delete a user's whole travel log.

    Returns the number of deleted entries.
    """
    result = await session.execute(delete(TravelEntryDB).where(TravelEntryDB.user_id == user_id))
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount)  # type: ignore[attr-defined]


def entry_to_model(row: TravelEntryDB) -> TravelEntry:
    """Convert a database entry to a domain model."""
    return TravelEntry(
        id=row.entry_id,
        departure_country=row.departure_country,
        arrival_country=row.arrival_country,
        departure_date=row.departure_date,
        arrival_date=row.arrival_date,
    )


def entry_to_db(entry: TravelEntry, user_id: str, position: int) -> TravelEntryDB:
    return TravelEntryDB(
        user_id=user_id,
        entry_id=entry.id,
        position=position,
        departure_country=entry.departure_country,
        arrival_country=entry.arrival_country,
        departure_date=entry.departure_date,
        arrival_date=entry.arrival_date,
    )


# --- Country Rule Operations ---


async def get_stored_rules(session: AsyncSession, user_id: str) -> dict[str, CountryRule]:
    """Get only the rules a user has saved, keyed by code."""
    result = await session.execute(
        select(CountryRuleDB)
        .where(CountryRuleDB.user_id == user_id)
        .order_by(CountryRuleDB.id)
    )
    return {row.country_code: rule_to_model(row) for row in result.scalars().all()}


async def get_rules(session: AsyncSession, user_id: str) -> RuleMap:
    """
    Get the rules in effect for a user.

    Built-in rules come first, overridden or extended by saved ones.
    """
    return seed_rules(await get_stored_rules(session, user_id))


async def save_rules(session: AsyncSession, user_id: str, rules: Mapping[str, CountryRule]) -> int:
    """
    Replace a user's saved rules with a full rule mapping.

    Returns the number of rules saved.
    """
    await session.execute(delete(CountryRuleDB).where(CountryRuleDB.user_id == user_id))
    for rule in rules.values():
        session.add(rule_to_db(rule, user_id))

    await session.flush()
    logger.info("Saved %d country rules for %s", len(rules), user_id)
    return len(rules)


def rule_to_model(row: CountryRuleDB) -> CountryRule:
    """Convert a database rule to a domain model."""
    return CountryRule(
        code=row.country_code,
        name=row.name,
        threshold=row.threshold,
        window=WindowPolicy(row.window),
        description=row.description or "",
        is_custom=row.is_custom,
    )


def rule_to_db(rule: CountryRule, user_id: str) -> CountryRuleDB:
    return CountryRuleDB(
        user_id=user_id,
        country_code=rule.code,
        name=rule.name,
        threshold=rule.threshold,
        window=WindowPolicy(rule.window).value,
        description=rule.description,
        is_custom=rule.is_custom,
    )
