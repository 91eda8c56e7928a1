"""
Tests for the callsmith command line.
"""

import json

import pytest

from callsmith.__main__ import main


@pytest.fixture
def schema_file(tmp_path, projects_spec_text):
    path = tmp_path / "openapi.json"
    path.write_text(projects_spec_text, encoding="utf-8")
    return path


def test_actions_lists_operations(schema_file, capsys):
    assert main(["actions", str(schema_file)]) == 0

    actions = json.loads(capsys.readouterr().out)
    assert [a["name"] for a in actions] == [
        "listProjects",
        "createProject",
        "getProject",
        "renameProject",
    ]
    assert actions[2]["method"] == "GET"


def test_filter_prints_minimal_document(schema_file, capsys):
    assert main(["filter", str(schema_file), "getProject"]) == 0

    filtered = json.loads(capsys.readouterr().out)
    assert list(filtered["paths"]) == ["/projects/{projectId}"]
    assert list(filtered["components"]["schemas"]) == ["Project"]


def test_unknown_action_exits_with_error(schema_file, capsys):
    assert main(["filter", str(schema_file), "nope"]) == 1

    assert "failed to find path and method for action 'nope'" in capsys.readouterr().err


def test_missing_file_exits_with_error(tmp_path, capsys):
    assert main(["actions", str(tmp_path / "missing.json")]) == 1

    assert capsys.readouterr().err.startswith("error:")


def test_command_is_required():
    with pytest.raises(SystemExit):
        main([])
