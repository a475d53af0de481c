"""Form and question API routes."""
from typing import Any, List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, ConfigDict, Field

from coaching_config.api.deps import get_form_service, get_queue, require_editor
from coaching_config.domain.access.models import Role
from coaching_config.domain.forms.models import CoachingForm, CoachingQuestion
from coaching_config.domain.forms.services import FormService
from coaching_config.infra.jobs.queue import SerialTaskQueue

router = APIRouter()


# Request/Response Models
class FormSummaryResponse(BaseModel):
    id: int
    name: Any


class CoachingFormResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: Any
    performance: bool
    one_to_one: bool = Field(serialization_alias="oneToOne")
    side_by_side: bool = Field(serialization_alias="sideBySide")
    updated_by: Any = Field(serialization_alias="updatedBy")
    updated_on: Any = Field(serialization_alias="updatedOn")

    @classmethod
    def from_domain(cls, form: CoachingForm) -> "CoachingFormResponse":
        return cls(
            id=form.id,
            name=form.name,
            performance=form.performance,
            one_to_one=form.one_to_one,
            side_by_side=form.side_by_side,
            updated_by=form.updated_by,
            updated_on=form.updated_on,
        )


class FormUpdateRequest(BaseModel):
    """Checkbox values are checked by the service, so they are not coerced here."""
    model_config = ConfigDict(populate_by_name=True)

    performance: Any = None
    one_to_one: Any = Field(default=None, alias="oneToOne")
    side_by_side: Any = Field(default=None, alias="sideBySide")


class AddFormRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    form_id: Any = Field(default=None, alias="formId")


class QuestionResponse(BaseModel):
    id: int
    form_id: Any = Field(serialization_alias="formId")
    text: Any
    category: Any
    hidden: bool
    updated_by: Any = Field(serialization_alias="updatedBy")
    updated_on: Any = Field(serialization_alias="updatedOn")

    @classmethod
    def from_domain(cls, question: CoachingQuestion) -> "QuestionResponse":
        return cls(
            id=question.id,
            form_id=question.form_id,
            text=question.text,
            category=question.category,
            hidden=question.hidden,
            updated_by=question.updated_by,
            updated_on=question.updated_on,
        )


class QuestionUpdateRequest(BaseModel):
    text: Any = None
    category: Any = None
    hidden: Any = None


@router.get("/forms/unused", response_model=List[FormSummaryResponse])
async def list_unused_forms(service: FormService = Depends(get_form_service)):
    """Master forms that are not enabled for coaching yet."""
    return [FormSummaryResponse(**f.to_dict()) for f in await service.get_unused_forms()]


@router.post("/forms", response_model=CoachingFormResponse, response_model_by_alias=True, status_code=status.HTTP_201_CREATED)
async def add_form(
    body: AddFormRequest,
    _: Role = Depends(require_editor),
    service: FormService = Depends(get_form_service),
    queue: SerialTaskQueue = Depends(get_queue),
):
    form = await queue.submit("add_form", service.add_form, body.form_id)
    return CoachingFormResponse.from_domain(form)


@router.put("/forms/{form_id}", response_model=CoachingFormResponse, response_model_by_alias=True)
async def update_form(
    form_id: int,
    body: FormUpdateRequest,
    _: Role = Depends(require_editor),
    service: FormService = Depends(get_form_service),
    queue: SerialTaskQueue = Depends(get_queue),
):
    form = await queue.submit(
        "update_form", service.update_form, form_id, body.performance, body.one_to_one, body.side_by_side
    )
    return CoachingFormResponse.from_domain(form)


@router.delete("/forms/{form_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_form(
    form_id: int,
    _: Role = Depends(require_editor),
    service: FormService = Depends(get_form_service),
    queue: SerialTaskQueue = Depends(get_queue),
):
    await queue.submit("remove_form", service.remove_form, form_id)


@router.get("/questions/categories", response_model=List[str])
async def list_question_categories(service: FormService = Depends(get_form_service)):
    return await service.list_question_categories()


@router.put("/questions/{question_id}", response_model=QuestionResponse, response_model_by_alias=True)
async def update_question(
    question_id: int,
    body: QuestionUpdateRequest,
    _: Role = Depends(require_editor),
    service: FormService = Depends(get_form_service),
    queue: SerialTaskQueue = Depends(get_queue),
):
    """Create or replace a question's coaching text, category and visibility."""
    question = await queue.submit(
        "update_question", service.update_question, question_id, body.text, body.category, body.hidden
    )
    return QuestionResponse.from_domain(question)
