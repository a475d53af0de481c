"""
Catalog projection.

Joins the employee, expectation, form and question tables into the nested,
read-only structure the coaching UI loads in one request. Everything here is
a pure function of the row sets passed in; rebuilding is cheap enough to do
on every call.
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from coaching_config.domain.common.types import as_bool, normalize_resource_id
from coaching_config.domain.expectations.models import Expectation

Rows = list[list[Any]]


@dataclass
class CatalogSource:
    """Raw data rows (headers already stripped) for each table the catalog reads."""

    employees: Rows = field(default_factory=list)
    expectations: Rows = field(default_factory=list)
    master_forms: Rows = field(default_factory=list)
    coaching_forms: Rows = field(default_factory=list)
    question_links: Rows = field(default_factory=list)
    coaching_questions: Rows = field(default_factory=list)


def _pad(cells: list[Any], width: int) -> list[Any]:
    return list(cells) + [""] * (width - len(cells))


def _key(value: Any) -> Any:
    return normalize_resource_id(value)


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def project_people(rows: Rows) -> tuple[dict, dict, dict]:
    """Employees keyed by id, plus the workgroup and job profile names they reference."""
    employees: dict[Any, dict[str, Any]] = {}
    workgroups: dict[Any, Any] = {}
    job_profiles: dict[Any, Any] = {}
    for cells in rows:
        cells = _pad(cells, 9)
        if _blank(cells[0]):
            continue
        employees[_key(cells[0])] = {
            "name": cells[1],
            "email": cells[2],
            "level": cells[3],
            "workgroupId": cells[4],
            "jobProfileId": cells[6],
            "samAccountName": cells[8],
        }
        if not _blank(cells[4]):
            workgroups[_key(cells[4])] = cells[5]
        if not _blank(cells[6]):
            job_profiles[_key(cells[6])] = cells[7]
    return employees, workgroups, job_profiles


def project_expectations(rows: Rows) -> dict[Any, dict[str, Any]]:
    expectations = {}
    for index, cells in enumerate(rows):
        if _blank(cells[0] if cells else None):
            continue
        expectation = Expectation.from_row(cells, row=index)
        expectations[_key(cells[0])] = expectation.to_dict()
    return expectations


def project_forms(master: Rows, coaching: Rows, links: Rows, questions: Rows) -> dict[Any, dict[str, Any]]:
    """
    Forms keyed by id, each with its questions nested in link-row order.

    Coaching settings come from the coaching forms table and question text,
    category and visibility from the coaching questions table; a form or
    question without coaching metadata gets blank fields. Questions whose
    form id is not in the master list are dropped.
    """
    coaching_by_id = {_key(c[0]): _pad(c, 7) for c in coaching if c and not _blank(c[0])}
    meta_by_id = {_key(q[0]): _pad(q, 7) for q in questions if q and not _blank(q[0])}

    forms: dict[Any, dict[str, Any]] = {}
    for cells in master:
        cells = _pad(cells, 2)
        if _blank(cells[0]):
            continue
        form_id = _key(cells[0])
        meta = coaching_by_id.get(form_id, [""] * 7)
        forms[form_id] = {
            "id": form_id,
            "name": cells[1],
            "versions": [],
            "performanceCoaching": meta[2],
            "oneToOne": meta[3],
            "sideBySide": meta[4],
            "modifiedBy": meta[5],
            "modifiedDate": meta[6],
            "questions": [],
        }

    for cells in links:
        cells = _pad(cells, 5)
        form = forms.get(_key(cells[0]))
        if form is None:
            continue
        question_id = _key(cells[2])
        meta = meta_by_id.get(question_id, [""] * 7)
        form["questions"].append(
            {
                "id": question_id,
                "version": cells[1],
                "rank": cells[3],
                "type": cells[4],
                "text": meta[2],
                "category": meta[3],
                "hidden": as_bool(meta[4]),
                "modifiedBy": meta[5],
                "modifiedDate": meta[6],
            }
        )

    for form in forms.values():
        # dict keeps first-seen order
        form["versions"] = list(dict.fromkeys(q["version"] for q in form["questions"]))
    return forms


def build_catalog(source: CatalogSource, pulled_at: datetime) -> dict[str, Any]:
    employees, workgroups, job_profiles = project_people(source.employees)
    return {
        "employees": employees,
        "workgroups": workgroups,
        "jobProfiles": job_profiles,
        "expectations": project_expectations(source.expectations),
        "forms": project_forms(
            source.master_forms,
            source.coaching_forms,
            source.question_links,
            source.coaching_questions,
        ),
        "datePulled": pulled_at.isoformat(),
    }
