"""Form domain repository protocols."""
from typing import Any, Optional, Protocol

from coaching_config.domain.forms.models import CoachingForm, CoachingQuestion, FormSummary


class FormRepository(Protocol):
    """Form and question repository protocol. Callers hold the store lock."""

    async def list_question_categories(self) -> list[str]:
        """Valid question categories."""
        ...

    async def list_master_forms(self) -> list[FormSummary]:
        """All forms known to the organisation."""
        ...

    async def list_coaching_form_ids(self) -> list[int]:
        """IDs of forms enabled for coaching."""
        ...

    async def get_coaching_form(self, form_id: int) -> Optional[CoachingForm]:
        """Get coaching form by ID."""
        ...

    async def save_coaching_form(self, form: CoachingForm) -> CoachingForm:
        """Replace the form's row, or append it when it has none."""
        ...

    async def delete_coaching_form(self, form: CoachingForm) -> None:
        """Delete the form's row."""
        ...

    async def list_coaching_question_ids(self) -> list[int]:
        """IDs of questions that have coaching metadata."""
        ...

    async def get_coaching_question(self, question_id: int) -> Optional[CoachingQuestion]:
        """Get question metadata by ID."""
        ...

    async def get_question_form_id(self, question_id: int) -> Optional[Any]:
        """Form ID a question is linked to in the questions sheet."""
        ...

    async def save_coaching_question(self, question: CoachingQuestion) -> CoachingQuestion:
        """Replace the question's row, or append it when it has none."""
        ...
