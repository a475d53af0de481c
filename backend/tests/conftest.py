"""Pytest configuration for tests directory."""
from datetime import date

import pytest

from coaching_config.domain.common.errors import IdentityNotFoundError
from coaching_config.domain.expectations.services import ExpectationService
from coaching_config.domain.forms.services import FormService
from coaching_config.infra.properties.store import InMemoryPropertyStore
from coaching_config.infra.sheets.repositories.expectation_repo import ExpectationRepositoryImpl
from coaching_config.infra.sheets.repositories.form_repo import FormRepositoryImpl
from coaching_config.infra.sheets.store import InMemoryTabularStore, StoreLock


def pytest_configure(config):
    """Register markers."""
    config.addinivalue_line(
        "markers", "asyncio: mark test as async (requires pytest-asyncio)"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests that need a real DB (deselect with '-m \"not integration\"')"
    )


EXPECTATION_HEADER = [
    ["Coaching Expectations"] + [""] * 12,
    [
        "id", "resourceId", "performance", "oneToOne", "sideBySide", "startDate", "endDate",
        "expectationType", "active", "createdBy", "createdDate", "modifiedBy", "modifiedDate",
    ],
]
COACHING_FORMS_HEADER = [
    ["Coaching Forms"] + [""] * 6,
    ["id", "name", "performance", "oneToOne", "sideBySide", "updatedBy", "updatedOn"],
]
COACHING_QUESTIONS_HEADER = [
    ["Coaching Questions"] + [""] * 6,
    ["id", "formId", "text", "category", "hidden", "updatedBy", "updatedOn"],
]

EMPLOYEES = [
    ["id", "name", "email", "level", "workgroupId", "workgroupName", "jobProfileId", "jobProfileName", "samAccountName"],
    [501, "Dana Reyes", "dana@example.com", "Lead", 10, "Support East", 7, "Team Lead", "dreyes"],
    [502, "Sam Ortiz", "sam@example.com", "Agent", 10, "Support East", 8, "Agent II", "sortiz"],
    [503, "Kim Park", "kim@example.com", "Agent", 11, "Support West", 8, "Agent II", "kpark"],
]


class FixedClock:
    """Clock pinned to one date."""

    def __init__(self, today: date = date(2024, 3, 15)):
        self._today = today

    def today(self) -> date:
        return self._today


class FakeIdentity:
    """Identity resolver returning a fixed resource id, or failing when none is set."""

    def __init__(self, resource_id=501):
        self.resource_id = resource_id
        self.calls = 0

    async def current_resource_id(self) -> int:
        self.calls += 1
        if self.resource_id is None:
            raise IdentityNotFoundError("nobody@example.com")
        return self.resource_id


def seed_workbook(store: InMemoryTabularStore, expectations=None) -> InMemoryTabularStore:
    store.load_sheet("tbl_coaching_expectations", EXPECTATION_HEADER + [list(r) for r in (expectations or [])])
    store.load_sheet("Valid Expectation Types", [["type"], ["Default"], ["Agent"], ["Workgroup"], ["Job Profile"]])
    store.load_sheet("Employee", EMPLOYEES)
    store.load_sheet("forms", [["id", "name", "isActive"], [1, "Call Review", True], [2, "Chat Review", True], [3, "Email Review", False]])
    store.load_sheet(
        "questions",
        [
            ["formId", "version", "questionId", "rank", "type"],
            [1, 1, 100, 1, "Score"],
            [1, 1, 101, 2, "Score"],
            [1, 2, 102, 1, "Comment"],
            [2, 1, 200, 1, "Score"],
            [99, 1, 900, 1, "Score"],
        ],
    )
    store.load_sheet(
        "tbl_coaching_forms",
        COACHING_FORMS_HEADER + [[1, "Call Review", True, False, True, 501, "2024-01-02"]],
    )
    store.load_sheet(
        "tbl_coaching_questions",
        COACHING_QUESTIONS_HEADER + [[100, 1, "Greeted the customer", "Opening", False, 501, "2024-01-02"]],
    )
    store.load_sheet("Valid Question Categories", [["category"], ["Opening"], ["Closing"], ["Compliance"]])
    return store


@pytest.fixture
def store():
    return seed_workbook(InMemoryTabularStore(lock=StoreLock(timeout_seconds=5)))


@pytest.fixture
def clock():
    return FixedClock()


@pytest.fixture
def identity():
    return FakeIdentity()


@pytest.fixture
def properties():
    return InMemoryPropertyStore()


@pytest.fixture
def expectation_service(store, identity, clock, properties):
    return ExpectationService(
        store=store,
        repo=ExpectationRepositoryImpl(store),
        identity=identity,
        clock=clock,
        properties=properties,
    )


@pytest.fixture
def form_service(store, identity, clock):
    return FormService(store=store, repo=FormRepositoryImpl(store), identity=identity, clock=clock)
