"""Expectation domain services."""
import json
import logging
from datetime import date
from typing import Optional

from coaching_config.domain.common.errors import (
    ConflictingExpectationError,
    NotFoundError,
    ValidationError,
)
from coaching_config.domain.common.types import Clock, as_bool, as_int, format_audit_date, normalize_resource_id
from coaching_config.domain.expectations.models import Expectation, ExpectationCandidate
from coaching_config.domain.expectations.overlap import find_conflict, next_expectation_id
from coaching_config.domain.expectations.repositories import ExpectationRepository, IdentityResolver
from coaching_config.domain.expectations.validation import validate_expectation
from coaching_config.infra.properties.store import PropertyStore
from coaching_config.infra.sheets.store import TabularStore

logger = logging.getLogger(__name__)

EXPECTATION_TYPES_PROPERTY = "EXPECTATION_TYPES"


class ExpectationService:
    """
    Adds, updates and archives expectations.

    Each mutation holds the store lock across its read-check-write sequence so
    the overlap check always sees the rows the write is based on. Errors are
    raised to the caller; nothing is retried here.
    """

    def __init__(
        self,
        store: TabularStore,
        repo: ExpectationRepository,
        identity: IdentityResolver,
        clock: Clock,
        properties: Optional[PropertyStore] = None,
    ):
        self.store = store
        self.repo = repo
        self.identity = identity
        self.clock = clock
        self.properties = properties

    # Reads
    async def list_expectations(self, active: Optional[bool] = None) -> list[Expectation]:
        """List expectations in storage order, optionally filtered by active flag."""
        async with self.store.locked():
            expectations = await self.repo.list_all()
        if active is None:
            return expectations
        return [e for e in expectations if e.active == active]

    async def get_expectation(self, expectation_id: int) -> Expectation:
        """Get expectation by ID."""
        async with self.store.locked():
            expectation = await self.repo.get(expectation_id)
        if expectation is None:
            raise NotFoundError("Expectation", expectation_id)
        return expectation

    async def get_expectation_types(self, refresh: bool = False) -> list[str]:
        """Valid expectation types, cached in the property store after the first sheet read."""
        if self.properties is not None and not refresh:
            cached = await self.properties.get(EXPECTATION_TYPES_PROPERTY)
            if cached:
                return json.loads(cached)
        async with self.store.locked():
            types = await self.repo.list_types()
        if self.properties is not None:
            await self.properties.set(EXPECTATION_TYPES_PROPERTY, json.dumps(types))
        return types

    @staticmethod
    def _check_type(expectation_type: str, types: list[str]) -> None:
        if not isinstance(expectation_type, str) or not expectation_type.strip():
            raise ValidationError("Validation failed: expectation type is required")
        if types and expectation_type not in types:
            raise ValidationError(f"Validation failed: unknown expectation type {expectation_type!r}")

    def _validate(self, candidate: ExpectationCandidate, types: list[str], action: str) -> tuple[date, date]:
        try:
            start, end = validate_expectation(candidate)
            self._check_type(candidate.expectation_type, types)
        except ValidationError as e:
            logger.warning("Rejected %s for resource %s: %s", action, candidate.resource_id, e.message)
            raise
        return start, end

    # Mutations
    async def add_expectation(self, candidate: ExpectationCandidate) -> int:
        """Validate, check for overlap, then append with a new id. Returns the id."""
        types = await self.get_expectation_types()
        start, end = self._validate(candidate, types, "new expectation")
        resource_id = normalize_resource_id(candidate.resource_id)

        async with self.store.locked():
            existing = await self.repo.list_all()
            conflict = find_conflict(existing, resource_id, candidate.expectation_type, start, end)
            if conflict is not None:
                logger.warning(
                    "Rejected new expectation for resource %s (%s): conflicts with %s",
                    resource_id, candidate.expectation_type, conflict,
                )
                raise ConflictingExpectationError(conflict, resource_id)

            created_by = await self.identity.current_resource_id()
            expectation = Expectation(
                id=next_expectation_id(existing),
                resource_id=resource_id,
                performance=candidate.performance,
                one_to_one=candidate.one_to_one,
                side_by_side=candidate.side_by_side,
                start_date=start,
                end_date=end,
                expectation_type=candidate.expectation_type,
                active=as_bool(candidate.active),
                created_by=created_by,
                created_date=format_audit_date(self.clock.today()),
            )
            await self.repo.append(expectation)

        logger.info(
            "Added expectation %d for resource %s (%s) by %s",
            expectation.id, resource_id, expectation.expectation_type, created_by,
        )
        return expectation.id

    async def update_expectation(self, expectation_id: int, candidate: ExpectationCandidate) -> Expectation:
        """Replace an expectation's fields after validation and an overlap check that skips itself."""
        expectation_id = as_int(expectation_id)
        types = await self.get_expectation_types()

        async with self.store.locked():
            current = await self.repo.get(expectation_id) if expectation_id is not None else None
            if current is None:
                raise NotFoundError("Expectation", expectation_id)
            start, end = self._validate(candidate, types, f"update of expectation {expectation_id}")
            resource_id = normalize_resource_id(candidate.resource_id)

            existing = await self.repo.list_all()
            conflict = find_conflict(
                existing, resource_id, candidate.expectation_type, start, end, exclude_id=expectation_id
            )
            if conflict is not None:
                logger.warning(
                    "Rejected update of expectation %d for resource %s: conflicts with %s",
                    expectation_id, resource_id, conflict,
                )
                raise ConflictingExpectationError(conflict, resource_id)

            current.resource_id = resource_id
            current.performance = candidate.performance
            current.one_to_one = candidate.one_to_one
            current.side_by_side = candidate.side_by_side
            current.start_date = start
            current.end_date = end
            current.expectation_type = candidate.expectation_type
            current.active = as_bool(candidate.active)
            current.modified_by = await self.identity.current_resource_id()
            current.modified_date = format_audit_date(self.clock.today())
            await self.repo.replace(current)

        logger.info("Updated expectation %d by %s", expectation_id, current.modified_by)
        return current

    async def set_expectation_status(self, expectation_id: int, is_active: bool) -> Expectation:
        """Archive or reactivate. Only reactivation is overlap-checked."""
        expectation_id = as_int(expectation_id)
        is_active = as_bool(is_active)

        async with self.store.locked():
            current = await self.repo.get(expectation_id) if expectation_id is not None else None
            if current is None:
                raise NotFoundError("Expectation", expectation_id)

            if is_active:
                if current.start_date is None or current.end_date is None:
                    raise ValidationError(
                        f"Validation failed: expectation {expectation_id} has no valid date range"
                    )
                existing = await self.repo.list_all()
                conflict = find_conflict(
                    existing,
                    current.resource_id,
                    current.expectation_type,
                    current.start_date,
                    current.end_date,
                    exclude_id=expectation_id,
                )
                if conflict is not None:
                    logger.warning(
                        "Rejected reactivation of expectation %d: conflicts with %s",
                        expectation_id, conflict,
                    )
                    raise ConflictingExpectationError(conflict, current.resource_id)

            current.active = is_active
            current.modified_by = await self.identity.current_resource_id()
            current.modified_date = format_audit_date(self.clock.today())
            await self.repo.replace(current)

        logger.info(
            "Expectation %d %s by %s",
            expectation_id, "activated" if is_active else "archived", current.modified_by,
        )
        return current
