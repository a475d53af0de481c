"""Sheet layouts: where each table lives in the workbook (1-based rows/columns)."""
from dataclasses import dataclass


@dataclass(frozen=True)
class SheetLayout:
    """Position of a table inside a sheet."""

    sheet_name: str
    header_rows: int
    col_span: int
    id_col: int = 1

    @property
    def first_data_row(self) -> int:
        return self.header_rows + 1


class ExpectationCols:
    ID = 1
    RESOURCE_ID = 2
    PERFORMANCE = 3
    ONE_TO_ONE = 4
    SIDE_BY_SIDE = 5
    START_DATE = 6
    END_DATE = 7
    EXPECTATION_TYPE = 8
    ACTIVE = 9
    CREATED_BY = 10
    CREATED_DATE = 11
    MODIFIED_BY = 12
    MODIFIED_DATE = 13


class CoachingFormCols:
    ID = 1
    NAME = 2
    PERFORMANCE = 3
    ONE_TO_ONE = 4
    SIDE_BY_SIDE = 5
    UPDATED_BY = 6
    UPDATED_ON = 7


class CoachingQuestionCols:
    ID = 1
    FORM_ID = 2
    TEXT = 3
    CATEGORY = 4
    HIDDEN = 5
    UPDATED_BY = 6
    UPDATED_ON = 7


class QuestionLinkCols:
    FORM_ID = 1
    VERSION = 2
    QUESTION_ID = 3
    RANK = 4
    QUESTION_TYPE = 5


class EmployeeCols:
    ID = 1
    NAME = 2
    EMAIL = 3
    LEVEL = 4
    WORKGROUP_ID = 5
    WORKGROUP_NAME = 6
    JOB_PROFILE_ID = 7
    JOB_PROFILE_NAME = 8
    SAM_ACCOUNT_NAME = 9


EXPECTATIONS = SheetLayout("tbl_coaching_expectations", header_rows=2, col_span=13)
COACHING_FORMS = SheetLayout("tbl_coaching_forms", header_rows=2, col_span=7)
COACHING_QUESTIONS = SheetLayout("tbl_coaching_questions", header_rows=2, col_span=7)
FORMS = SheetLayout("forms", header_rows=1, col_span=3)
QUESTIONS = SheetLayout("questions", header_rows=1, col_span=5, id_col=QuestionLinkCols.QUESTION_ID)
EMPLOYEES = SheetLayout("Employee", header_rows=1, col_span=9)
QUESTION_CATEGORIES = SheetLayout("Valid Question Categories", header_rows=1, col_span=1)
EXPECTATION_TYPES = SheetLayout("Valid Expectation Types", header_rows=1, col_span=1)
