"""Form and question repository implementation."""
from typing import Any, Optional

from coaching_config.domain.common.types import as_int
from coaching_config.domain.forms.models import CoachingForm, CoachingQuestion, FormSummary
from coaching_config.domain.forms.repositories import FormRepository
from coaching_config.infra.sheets.layout import (
    COACHING_FORMS,
    COACHING_QUESTIONS,
    FORMS,
    QUESTION_CATEGORIES,
    QUESTIONS,
    QuestionLinkCols,
)
from coaching_config.infra.sheets.store import TabularStore, append_data_row, find_row_index, read_data_rows


class FormRepositoryImpl(FormRepository):
    """Forms and questions spread over the forms/questions sheets and their coaching tables."""

    def __init__(self, store: TabularStore):
        self.store = store

    async def list_question_categories(self) -> list[str]:
        rows = await read_data_rows(self.store, QUESTION_CATEGORIES)
        return [str(cells[0]) for cells in rows if str(cells[0]).strip()]

    async def list_master_forms(self) -> list[FormSummary]:
        rows = await read_data_rows(self.store, FORMS)
        forms = []
        for cells in rows:
            form_id = as_int(cells[0])
            if form_id is not None:
                forms.append(FormSummary(id=form_id, name=cells[1]))
        return forms

    async def list_coaching_form_ids(self) -> list[int]:
        rows = await read_data_rows(self.store, COACHING_FORMS)
        return [n for n in (as_int(cells[0]) for cells in rows) if n is not None]

    async def get_coaching_form(self, form_id: int) -> Optional[CoachingForm]:
        row = await find_row_index(self.store, COACHING_FORMS, form_id)
        if row is None:
            return None
        (cells,) = await self.store.read_range(COACHING_FORMS.sheet_name, row, 1, 1, COACHING_FORMS.col_span)
        return CoachingForm.from_row(cells, row=row)

    async def save_coaching_form(self, form: CoachingForm) -> CoachingForm:
        if form.row is None:
            form.row = await append_data_row(self.store, COACHING_FORMS, form.to_row())
        else:
            await self.store.write_range(
                COACHING_FORMS.sheet_name, form.row, 1, 1, COACHING_FORMS.col_span, [form.to_row()]
            )
        return form

    async def delete_coaching_form(self, form: CoachingForm) -> None:
        if form.row is None:
            raise ValueError(f"Form {form.id} has not been stored yet")
        await self.store.delete_row(COACHING_FORMS.sheet_name, form.row)
        form.row = None

    async def list_coaching_question_ids(self) -> list[int]:
        rows = await read_data_rows(self.store, COACHING_QUESTIONS)
        return [n for n in (as_int(cells[0]) for cells in rows) if n is not None]

    async def get_coaching_question(self, question_id: int) -> Optional[CoachingQuestion]:
        row = await find_row_index(self.store, COACHING_QUESTIONS, question_id)
        if row is None:
            return None
        (cells,) = await self.store.read_range(
            COACHING_QUESTIONS.sheet_name, row, 1, 1, COACHING_QUESTIONS.col_span
        )
        return CoachingQuestion.from_row(cells, row=row)

    async def get_question_form_id(self, question_id: int) -> Optional[Any]:
        row = await find_row_index(self.store, QUESTIONS, question_id)
        if row is None:
            return None
        ((form_id,),) = await self.store.read_range(QUESTIONS.sheet_name, row, QuestionLinkCols.FORM_ID, 1, 1)
        return form_id

    async def save_coaching_question(self, question: CoachingQuestion) -> CoachingQuestion:
        if question.row is None:
            question.row = await append_data_row(self.store, COACHING_QUESTIONS, question.to_row())
        else:
            await self.store.write_range(
                COACHING_QUESTIONS.sheet_name,
                question.row,
                1,
                1,
                COACHING_QUESTIONS.col_span,
                [question.to_row()],
            )
        return question
