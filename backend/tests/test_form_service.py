"""Tests for the form and question service."""
import pytest

from coaching_config.domain.common.errors import ConflictError, NotFoundError, ValidationError

FORMS_SHEET = "tbl_coaching_forms"
QUESTIONS_SHEET = "tbl_coaching_questions"


async def test_list_question_categories(form_service):
    assert await form_service.list_question_categories() == ["Opening", "Closing", "Compliance"]


async def test_update_existing_question_keeps_form_id(form_service, store):
    question = await form_service.update_question(100, "Used the customer's name", "Closing", True)
    assert question.form_id == 1
    rows = store.snapshot(QUESTIONS_SHEET)[2:]
    assert rows == [[100, 1, "Used the customer's name", "Closing", True, 501, "2024-03-15"]]


async def test_update_new_question_looks_up_form(form_service, store):
    await form_service.update_question("102", "Any other comments?", "", False)
    rows = store.snapshot(QUESTIONS_SHEET)[2:]
    assert rows[-1] == [102, 1, "Any other comments?", "", False, 501, "2024-03-15"]


async def test_update_unknown_question(form_service, store):
    with pytest.raises(NotFoundError):
        await form_service.update_question(12345, "text", "", False)
    assert len(store.snapshot(QUESTIONS_SHEET)) == 3


@pytest.mark.parametrize(
    "args, message",
    [
        ((None, "t", "", False), "Missing Question ID"),
        ((100, None, "", False), "Missing Question Text"),
        ((100, "t", None, False), "Missing Question Category"),
        ((100, "t", "", None), "Missing Hidden Checkbox Value"),
        (("abc", "t", "", False), "Invalid Question ID"),
        ((100, "x" * 256, "", False), "Invalid Question Text"),
        ((100, "t", "", "yes"), "Invalid Hidden Checkbox Value"),
        ((100, "t", "Nonsense", False), "Invalid Question Category"),
    ],
)
async def test_update_question_rejects_bad_input(form_service, args, message):
    with pytest.raises(ValidationError, match=message):
        await form_service.update_question(*args)


async def test_update_form_keeps_name(form_service, store):
    form = await form_service.update_form(1, False, True, False)
    assert form.name == "Call Review"
    rows = store.snapshot(FORMS_SHEET)[2:]
    assert rows == [[1, "Call Review", False, True, False, 501, "2024-03-15"]]


async def test_update_form_not_enabled(form_service):
    with pytest.raises(NotFoundError):
        await form_service.update_form(2, True, True, True)


async def test_update_form_rejects_non_bool(form_service):
    with pytest.raises(ValidationError, match="Invalid One to One Checkbox Value"):
        await form_service.update_form(1, True, "TRUE", False)
    with pytest.raises(ValidationError, match="Missing Side by Side Checkbox Value"):
        await form_service.update_form(1, True, False, None)


async def test_unused_forms(form_service):
    unused = await form_service.get_unused_forms()
    assert [(f.id, f.name) for f in unused] == [(2, "Chat Review"), (3, "Email Review")]


async def test_add_form(form_service, store):
    form = await form_service.add_form("2")
    assert form.id == 2
    rows = store.snapshot(FORMS_SHEET)[2:]
    assert rows[-1] == [2, "Chat Review", False, False, False, 501, "2024-03-15"]
    assert [f.id for f in await form_service.get_unused_forms()] == [3]


async def test_add_form_already_enabled(form_service):
    with pytest.raises(ConflictError, match="already exists"):
        await form_service.add_form(1)


async def test_add_form_not_in_master(form_service):
    with pytest.raises(NotFoundError):
        await form_service.add_form(77)


async def test_add_form_missing_id(form_service):
    with pytest.raises(ValidationError, match="Missing Form ID"):
        await form_service.add_form("")


async def test_remove_form(form_service, store):
    await form_service.add_form(2)
    await form_service.remove_form(1)
    rows = store.snapshot(FORMS_SHEET)[2:]
    assert [r[0] for r in rows] == [2]
    with pytest.raises(NotFoundError):
        await form_service.remove_form(1)


async def test_empty_coaching_tables_get_header_rows_before_data(form_service, store):
    store.load_sheet(FORMS_SHEET, [])
    store.load_sheet(QUESTIONS_SHEET, [])

    await form_service.add_form(2)
    with pytest.raises(ConflictError):
        await form_service.add_form(2)
    await form_service.update_question(102, "Any other comments?", "", False)
    await form_service.update_question(102, "Anything else?", "", True)

    forms = store.snapshot(FORMS_SHEET)
    assert forms[:2] == [[""] * 7, [""] * 7]
    assert [row[0] for row in forms[2:]] == [2]
    questions = store.snapshot(QUESTIONS_SHEET)
    assert [row[:3] for row in questions[2:]] == [[102, 1, "Anything else?"]]
