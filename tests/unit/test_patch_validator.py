import json

import pytest

from mender.agents.repair_team.patch import EditAction
from mender.agents.repair_team.validator import parse_patch
from mender.errors import MalformedPatch


def _document(**overrides):
    doc = {
        "intent": "Print a greeting",
        "explanation": "Missing quote",
        "files": [
            {
                "file_name": "hello.py",
                "changes": [
                    {"action": "edit", "line_number": 2, "original_line": "print(hello world')", "new_line": "print('hello world')"},
                    {"action": "remove", "line_number": 3, "original_line": "pass"},
                    {"action": "add", "line_number": 1, "new_line": "import sys"},
                ],
            }
        ],
    }
    doc.update(overrides)
    return doc


def test_parse_valid_document():
    document = parse_patch(json.dumps(_document()))

    assert document.intent == "Print a greeting"
    assert document.file_names == ["hello.py"]
    changes = document.files[0].changes
    assert [c.action for c in changes] == [EditAction.EDIT, EditAction.REMOVE, EditAction.ADD]
    assert changes[1].new_line == ""
    assert changes[2].original_line == ""


def test_parse_strips_markdown_fence():
    raw = "```json\n" + json.dumps(_document()) + "\n```"
    assert parse_patch(raw).files[0].file_name == "hello.py"


def test_action_is_case_insensitive():
    doc = _document()
    doc["files"][0]["changes"][0]["action"] = "EDIT"
    assert parse_patch(json.dumps(doc)).files[0].changes[0].action is EditAction.EDIT


def test_intent_and_explanation_are_optional():
    doc = _document()
    del doc["intent"]
    del doc["explanation"]
    document = parse_patch(json.dumps(doc))
    assert document.intent == ""
    assert document.explanation == ""


def test_null_new_line_on_remove_defaults_to_empty():
    doc = _document()
    doc["files"][0]["changes"][1]["new_line"] = None
    assert parse_patch(json.dumps(doc)).files[0].changes[1].new_line == ""


@pytest.mark.parametrize("raw", [
    "",
    "   ",
    "Sure! Here is the fix.",
    '{"files": [}',
    '{"files": [{"file_name": "a.py", "changes": [],}]}',
    "[1, 2, 3]",
    '"just a string"',
])
def test_malformed_text_raises(raw):
    with pytest.raises(MalformedPatch):
        parse_patch(raw)


def test_missing_files_raises():
    doc = _document()
    del doc["files"]
    with pytest.raises(MalformedPatch, match="files"):
        parse_patch(json.dumps(doc))


@pytest.mark.parametrize("field", ["file_name", "changes"])
def test_missing_file_fields_raise(field):
    doc = _document()
    del doc["files"][0][field]
    with pytest.raises(MalformedPatch, match=field):
        parse_patch(json.dumps(doc))


@pytest.mark.parametrize("field", ["action", "line_number"])
def test_missing_change_fields_raise(field):
    doc = _document()
    del doc["files"][0]["changes"][0][field]
    with pytest.raises(MalformedPatch):
        parse_patch(json.dumps(doc))


def test_unknown_action_raises():
    doc = _document()
    doc["files"][0]["changes"][0]["action"] = "replace"
    with pytest.raises(MalformedPatch):
        parse_patch(json.dumps(doc))


@pytest.mark.parametrize("action,missing", [
    ("edit", "original_line"),
    ("edit", "new_line"),
    ("remove", "original_line"),
    ("add", "new_line"),
])
def test_action_specific_text_is_required(action, missing):
    change = {"action": action, "line_number": 1, "original_line": "x", "new_line": "y"}
    del change[missing]
    doc = _document(files=[{"file_name": "a.py", "changes": [change]}])
    with pytest.raises(MalformedPatch, match=missing):
        parse_patch(json.dumps(doc))


def test_line_numbers_are_not_checked_against_files():
    doc = _document(files=[{
        "file_name": "a.py",
        "changes": [{"action": "edit", "line_number": 10_000, "original_line": "x", "new_line": "y"}],
    }])
    assert parse_patch(json.dumps(doc)).files[0].changes[0].line_number == 10_000


def test_malformed_patch_keeps_raw_text():
    with pytest.raises(MalformedPatch) as excinfo:
        parse_patch("nope")
    assert excinfo.value.error_details["raw"] == "nope"


@pytest.mark.parametrize("line_number", [True, "3", 2.0, "  2 "])
def test_line_number_must_be_an_integer(line_number):
    doc = _document()
    doc["files"][0]["changes"][0]["line_number"] = line_number
    with pytest.raises(MalformedPatch, match="line_number"):
        parse_patch(json.dumps(doc))


@pytest.mark.parametrize("field,value", [
    ("original_line", 5),
    ("new_line", ["print(x)"]),
    ("new_line", False),
])
def test_line_text_must_be_a_string(field, value):
    doc = _document()
    doc["files"][0]["changes"][0][field] = value
    with pytest.raises(MalformedPatch, match=field):
        parse_patch(json.dumps(doc))
