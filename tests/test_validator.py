import json
import logging

import pytest

from generation.errors import (
    AssignmentValidationError,
    InvalidField,
    MalformedEnvelope,
    MalformedJSON,
    MissingField,
    TaskCountDeficit,
)
from generation.schemas import DiagnosticKind
from generation.validator import parse_integer, strip_code_fences, validate_response


# ---------------------------------------------------------------------------
# Fence stripping
# ---------------------------------------------------------------------------


def test_strip_json_fence():
    assert strip_code_fences('```json\n{"a": 1}\n```') == '{"a": 1}'


def test_strip_bare_fence_and_surrounding_whitespace():
    assert strip_code_fences('  \n```\n{"a": 1}\n```  \n') == '{"a": 1}'


def test_unfenced_text_is_used_as_is():
    assert strip_code_fences('{"a": 1}') == '{"a": 1}'


def test_fence_without_closing_marker():
    assert strip_code_fences('```json\n{"a": 1}') == '{"a": 1}'


# ---------------------------------------------------------------------------
# Envelope and decoding failures
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("raw", ["", "   ", "```json\n```", "```"])
def test_empty_envelope(raw):
    with pytest.raises(MalformedEnvelope):
        validate_response(raw)


def test_malformed_json_keeps_cleaned_text():
    with pytest.raises(MalformedJSON) as exc_info:
        validate_response("```json\n{title: oops\n```")
    assert exc_info.value.raw_text == "{title: oops"


def test_json_array_is_not_an_assignment():
    with pytest.raises(MalformedJSON):
        validate_response("[1, 2, 3]")


def test_all_errors_are_value_errors():
    assert issubclass(MalformedJSON, AssignmentValidationError)
    assert issubclass(AssignmentValidationError, ValueError)


# ---------------------------------------------------------------------------
# Required fields
# ---------------------------------------------------------------------------


def test_missing_fields_reported_together():
    raw = json.dumps({"title": "T", "deadline": "", "tasks": []})
    with pytest.raises(MissingField) as exc_info:
        validate_response(raw)
    assert exc_info.value.names == [
        "deadline",
        "totalMarksWeightage",
        "evaluationCriteria",
        "numberOfTasks",
    ]
    assert exc_info.value.to_dict()["kind"] == "MissingField"


def test_null_field_counts_as_missing(reply_factory):
    with pytest.raises(MissingField) as exc_info:
        validate_response(reply_factory(title=None))
    assert exc_info.value.names == ["title"]


# ---------------------------------------------------------------------------
# Task count reconciliation
# ---------------------------------------------------------------------------


def test_exact_task_count(reply_factory):
    record = validate_response(reply_factory(number_of_tasks=2, task_count=2))
    assert record.number_of_tasks == 2
    assert [t.description for t in record.tasks] == ["Task body 1", "Task body 2"]


def test_surplus_tasks_are_truncated_in_order(reply_factory, caplog):
    diagnostics = []
    with caplog.at_level(logging.WARNING, logger="generation.pipeline"):
        record = validate_response(
            reply_factory(number_of_tasks=2, task_count=3), diagnostics=diagnostics
        )

    assert len(record.tasks) == 2
    assert [t.description for t in record.tasks] == ["Task body 1", "Task body 2"]
    assert len(diagnostics) == 1
    assert diagnostics[0].kind == DiagnosticKind.TASK_COUNT_SURPLUS
    assert diagnostics[0].details == {"expected": 2, "actual": 3}
    assert any(r.levelno == logging.WARNING and "Trimming" in r.getMessage() for r in caplog.records)


def test_deficit_is_fatal(reply_factory):
    with pytest.raises(TaskCountDeficit) as exc_info:
        validate_response(reply_factory(number_of_tasks=3, task_count=1))
    assert (exc_info.value.expected, exc_info.value.actual) == (3, 1)
    assert exc_info.value.raw_text.startswith("{")


def test_number_of_tasks_as_string(reply_factory):
    record = validate_response(reply_factory(number_of_tasks="2 tasks", task_count=2))
    assert record.number_of_tasks == 2


def test_unparseable_number_of_tasks(reply_factory):
    with pytest.raises(InvalidField) as exc_info:
        validate_response(reply_factory(number_of_tasks="several"))
    assert exc_info.value.name == "numberOfTasks"


def test_tasks_must_be_a_list(reply_factory):
    with pytest.raises(InvalidField):
        validate_response(reply_factory(tasks={"description": "x"}))


def test_task_entries_must_be_objects(reply_factory):
    with pytest.raises(InvalidField):
        validate_response(reply_factory(number_of_tasks=1, tasks=["just text"]))


@pytest.mark.parametrize(
    "field, value",
    [("title", ["x"]), ("totalMarksWeightage", {"a": 1}), ("deadline", {"date": "2025-03-01"})],
)
def test_structured_text_fields_are_rejected(reply_factory, field, value):
    with pytest.raises(InvalidField) as exc_info:
        validate_response(reply_factory(**{field: value}))
    assert exc_info.value.name == field


# ---------------------------------------------------------------------------
# Normalised record
# ---------------------------------------------------------------------------


def test_optional_fields_get_defaults(reply_factory):
    record = validate_response(reply_factory(fenced=False))
    assert record.language == "English"
    assert record.additional_instructions == "None"


def test_record_serialises_with_wire_names(reply_factory):
    record = validate_response(reply_factory(language="French"))
    data = record.model_dump(by_alias=True)
    assert data["numberOfTasks"] == 2
    assert data["totalMarksWeightage"] == "100"
    assert data["language"] == "French"


@pytest.mark.parametrize(
    "value, expected",
    [(3, 3), ("3", 3), (" 12 tasks", 12), (4.0, 4), (2.5, None), ("x", None), (True, None), (None, None)],
)
def test_parse_integer(value, expected):
    assert parse_integer(value) == expected
