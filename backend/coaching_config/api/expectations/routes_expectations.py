"""Expectation API routes."""
from typing import Any, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel, ConfigDict, Field

from coaching_config.api.deps import get_expectation_service, get_queue, require_editor
from coaching_config.domain.access.models import Role
from coaching_config.domain.expectations.models import ExpectationCandidate
from coaching_config.domain.expectations.services import ExpectationService
from coaching_config.infra.jobs.queue import SerialTaskQueue

router = APIRouter()


# Request/Response Models
class ExpectationRequest(BaseModel):
    """Expectation fields sent by the client. Values are checked by the service."""
    model_config = ConfigDict(populate_by_name=True)

    resource_id: Any = Field(alias="resourceId")
    performance: Any = None
    one_to_one: Any = Field(default=None, alias="oneToOne")
    side_by_side: Any = Field(default=None, alias="sideBySide")
    start_date: Any = Field(default=None, alias="startDate")
    end_date: Any = Field(default=None, alias="endDate")
    expectation_type: Any = Field(default=None, alias="expectationType")
    active: bool = True

    def to_candidate(self) -> ExpectationCandidate:
        return ExpectationCandidate(
            resource_id=self.resource_id,
            performance=self.performance,
            one_to_one=self.one_to_one,
            side_by_side=self.side_by_side,
            start_date=self.start_date,
            end_date=self.end_date,
            expectation_type=self.expectation_type,
            active=self.active,
        )


class ExpectationStatusRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    is_active: bool = Field(alias="isActive")


class ExpectationCreatedResponse(BaseModel):
    id: int


@router.get("")
async def list_expectations(
    active: Optional[bool] = Query(default=None),
    service: ExpectationService = Depends(get_expectation_service),
):
    """List expectations in storage order."""
    return [e.to_dict() for e in await service.list_expectations(active=active)]


@router.get("/types", response_model=list[str])
async def list_expectation_types(
    refresh: bool = Query(default=False),
    service: ExpectationService = Depends(get_expectation_service),
):
    return await service.get_expectation_types(refresh=refresh)


@router.get("/{expectation_id}")
async def get_expectation(
    expectation_id: int,
    service: ExpectationService = Depends(get_expectation_service),
):
    expectation = await service.get_expectation(expectation_id)
    return expectation.to_dict()


@router.post("", response_model=ExpectationCreatedResponse, status_code=status.HTTP_201_CREATED)
async def add_expectation(
    body: ExpectationRequest,
    _: Role = Depends(require_editor),
    service: ExpectationService = Depends(get_expectation_service),
    queue: SerialTaskQueue = Depends(get_queue),
):
    """Add an expectation; 409 with the conflicting id when it overlaps an active one."""
    new_id = await queue.submit("add_expectation", service.add_expectation, body.to_candidate())
    return ExpectationCreatedResponse(id=new_id)


@router.put("/{expectation_id}")
async def update_expectation(
    expectation_id: int,
    body: ExpectationRequest,
    _: Role = Depends(require_editor),
    service: ExpectationService = Depends(get_expectation_service),
    queue: SerialTaskQueue = Depends(get_queue),
):
    expectation = await queue.submit(
        "update_expectation", service.update_expectation, expectation_id, body.to_candidate()
    )
    return expectation.to_dict()


@router.put("/{expectation_id}/status")
async def set_expectation_status(
    expectation_id: int,
    body: ExpectationStatusRequest,
    _: Role = Depends(require_editor),
    service: ExpectationService = Depends(get_expectation_service),
    queue: SerialTaskQueue = Depends(get_queue),
):
    """Archive (isActive=false) or reactivate an expectation."""
    expectation = await queue.submit(
        "set_expectation_status", service.set_expectation_status, expectation_id, body.is_active
    )
    return expectation.to_dict()
