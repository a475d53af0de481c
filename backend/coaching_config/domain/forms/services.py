"""Form and question configuration services."""
import logging
from typing import Any

from coaching_config.domain.common.errors import ConflictError, NotFoundError, ValidationError
from coaching_config.domain.common.types import Clock, as_int, format_audit_date
from coaching_config.domain.expectations.repositories import IdentityResolver
from coaching_config.domain.forms.models import CoachingForm, CoachingQuestion, FormSummary
from coaching_config.domain.forms.repositories import FormRepository
from coaching_config.domain.forms.validators import FieldKind, make_validator
from coaching_config.infra.sheets.store import TabularStore

logger = logging.getLogger(__name__)


def _require(value: Any, label: str) -> None:
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"Missing {label}")


class FormService:
    """Enables forms for coaching and edits the coaching metadata of their questions."""

    def __init__(self, store: TabularStore, repo: FormRepository, identity: IdentityResolver, clock: Clock):
        self.store = store
        self.repo = repo
        self.identity = identity
        self.clock = clock

    async def list_question_categories(self) -> list[str]:
        async with self.store.locked():
            return await self.repo.list_question_categories()

    async def update_question(self, question_id: Any, text: Any, category: Any, hidden: Any) -> CoachingQuestion:
        """Create or replace the coaching metadata of a question."""
        _require(question_id, "Question ID")
        _require(text, "Question Text")
        if category is None:
            raise ValidationError("Missing Question Category")
        if hidden is None:
            raise ValidationError("Missing Hidden Checkbox Value")
        number = as_int(question_id)
        if number is None:
            raise ValidationError("Invalid Question ID")
        if not make_validator(FieldKind.TEXT)(text):
            raise ValidationError("Invalid Question Text")
        if not make_validator(FieldKind.CHECKBOX)(hidden):
            raise ValidationError("Invalid Hidden Checkbox Value")

        async with self.store.locked():
            categories = await self.repo.list_question_categories()
            if not make_validator(FieldKind.CATEGORY, categories=categories)(category):
                raise ValidationError("Invalid Question Category")

            known = make_validator(FieldKind.IDENTIFIER, known_ids=await self.repo.list_coaching_question_ids())
            question = await self.repo.get_coaching_question(number) if known(number) else None
            if question is None:
                form_id = await self.repo.get_question_form_id(number)
                if form_id is None or form_id == "":
                    raise NotFoundError("Question", number)
                question = CoachingQuestion(id=number, form_id=form_id)

            question.text = text
            question.category = category
            question.hidden = hidden
            question.updated_by = await self.identity.current_resource_id()
            question.updated_on = format_audit_date(self.clock.today())
            await self.repo.save_coaching_question(question)

        logger.info("Question %d updated by %s", number, question.updated_by)
        return question

    async def update_form(self, form_id: Any, performance: Any, one_to_one: Any, side_by_side: Any) -> CoachingForm:
        """Set which coaching kinds an enabled form may be used for."""
        _require(form_id, "Form ID")
        flags = {"Performance": performance, "One to One": one_to_one, "Side by Side": side_by_side}
        checkbox = make_validator(FieldKind.CHECKBOX)
        for label, value in flags.items():
            if value is None:
                raise ValidationError(f"Missing {label} Checkbox Value")
            if not checkbox(value):
                raise ValidationError(f"Invalid {label} Checkbox Value")
        number = as_int(form_id)
        if number is None:
            raise ValidationError("Invalid Form ID")

        async with self.store.locked():
            form = await self.repo.get_coaching_form(number)
            if form is None:
                raise NotFoundError("Form", number)
            form.performance = performance
            form.one_to_one = one_to_one
            form.side_by_side = side_by_side
            form.updated_by = await self.identity.current_resource_id()
            form.updated_on = format_audit_date(self.clock.today())
            await self.repo.save_coaching_form(form)

        logger.info("Form %d updated by %s", number, form.updated_by)
        return form

    async def get_unused_forms(self) -> list[FormSummary]:
        """Master forms not yet enabled for coaching, in master order."""
        async with self.store.locked():
            master = await self.repo.list_master_forms()
            enabled = set(await self.repo.list_coaching_form_ids())
        return [form for form in master if form.id not in enabled]

    async def add_form(self, form_id: Any) -> CoachingForm:
        """Enable a master form for coaching with every kind switched off."""
        _require(form_id, "Form ID")
        number = as_int(form_id)
        if number is None:
            raise ValidationError("Invalid Form ID")

        async with self.store.locked():
            enabled = make_validator(FieldKind.IDENTIFIER, known_ids=await self.repo.list_coaching_form_ids())
            if enabled(number):
                raise ConflictError(f"Form ID {number} already exists")
            master = {form.id: form for form in await self.repo.list_master_forms()}
            if number not in master:
                raise NotFoundError("Form", number)
            form = CoachingForm(
                id=number,
                name=master[number].name,
                updated_by=await self.identity.current_resource_id(),
                updated_on=format_audit_date(self.clock.today()),
            )
            await self.repo.save_coaching_form(form)

        logger.info("Form %d enabled for coaching by %s", number, form.updated_by)
        return form

    async def remove_form(self, form_id: Any) -> None:
        """Disable a form for coaching."""
        _require(form_id, "Form ID")
        number = as_int(form_id)
        if number is None:
            raise ValidationError("Invalid Form ID")

        async with self.store.locked():
            form = await self.repo.get_coaching_form(number)
            if form is None:
                raise NotFoundError("Form", number)
            await self.repo.delete_coaching_form(form)

        logger.info("Form %d removed from coaching", number)
