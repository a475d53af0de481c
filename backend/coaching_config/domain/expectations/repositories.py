"""Expectation domain repository protocols."""
from typing import Optional, Protocol

from coaching_config.domain.expectations.models import Expectation


class ExpectationRepository(Protocol):
    """Expectation repository protocol. Callers hold the store lock."""

    async def list_all(self) -> list[Expectation]:
        """All expectation rows in storage order."""
        ...

    async def get(self, expectation_id: int) -> Optional[Expectation]:
        """Get expectation by ID."""
        ...

    async def append(self, expectation: Expectation) -> Expectation:
        """Append a new expectation row."""
        ...

    async def replace(self, expectation: Expectation) -> Expectation:
        """Overwrite the row the expectation was read from."""
        ...

    async def list_types(self) -> list[str]:
        """Valid expectation types vocabulary."""
        ...


class IdentityResolver(Protocol):
    """Maps the current caller to the resource id stamped on audit fields."""

    async def current_resource_id(self) -> int:
        """Raises IdentityNotFoundError when the caller has no resource id."""
        ...
