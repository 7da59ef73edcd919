"""Tests for the 'habits' command group."""

import json
from unittest.mock import patch

import pytest
import yaml
from typer.testing import CliRunner

from habitpomo_cli.main import app
from habitpomo_cli.services.config_service import get_config_service, get_habit_repository

runner = CliRunner()


@pytest.fixture()
def read_habit():
    return get_habit_repository().add("Read", "30 pages a day")


class TestAdd:
    def test_add(self):
        result = runner.invoke(app, ["habits", "add", "Read", "-d", "books"])
        assert result.exit_code == 0
        assert "Habit created: Read" in result.output

        [habit] = get_habit_repository().habits
        assert habit.title == "Read"
        assert habit.description == "books"

    def test_add_strips_title(self):
        runner.invoke(app, ["habits", "add", "  Write  "])
        assert get_habit_repository().habits[0].title == "Write"

    def test_blank_title_rejected(self):
        result = runner.invoke(app, ["habits", "add", "   "])
        assert result.exit_code == 2
        assert "cannot be empty" in result.output
        assert get_habit_repository().habits == []


class TestList:
    def test_empty(self):
        result = runner.invoke(app, ["habits", "list"])
        assert result.exit_code == 0
        assert "No habits yet" in result.output

    def test_pretty(self, read_habit):
        result = runner.invoke(app, ["habits", "list"])
        assert result.exit_code == 0
        assert "Read" in result.output
        assert read_habit.id[:8] in result.output

    def test_json_includes_today_count(self, read_habit):
        get_habit_repository().record_completed_session(read_habit.id)

        result = runner.invoke(app, ["habits", "list", "-o", "json"])

        assert result.exit_code == 0
        [row] = json.loads(result.output)
        assert row["title"] == "Read"
        assert row["today"] == 1
        assert row["total"] == 1

    def test_default_format_from_config(self, read_habit):
        get_config_service().set("output.format", "yaml")
        result = runner.invoke(app, ["habits", "list"])
        assert yaml.safe_load(result.output)[0]["title"] == "Read"


class TestShow:
    def test_show_by_prefix(self, read_habit):
        result = runner.invoke(app, ["habits", "show", read_habit.id[:6]])
        assert result.exit_code == 0
        assert "Read" in result.output
        assert "30 pages a day" in result.output

    def test_show_history(self, read_habit):
        get_habit_repository().set_note(read_habit.id, "chapter 4")
        result = runner.invoke(app, ["habits", "show", read_habit.id])
        assert "History" in result.output
        assert "chapter 4" in result.output

    def test_show_json_uses_stored_field_names(self, read_habit):
        result = runner.invoke(app, ["habits", "show", read_habit.id, "-o", "json"])
        data = json.loads(result.output)
        assert data["id"] == read_habit.id
        assert "createdAt" in data
        assert data["dailyPomodoros"] == []

    def test_show_unknown(self):
        result = runner.invoke(app, ["habits", "show", "deadbeef"])
        assert result.exit_code == 5
        assert "not found" in result.output


class TestEdit:
    def test_edit_title(self, read_habit):
        result = runner.invoke(app, ["habits", "edit", read_habit.id, "--title", "Read more"])
        assert result.exit_code == 0
        assert get_habit_repository().get(read_habit.id).title == "Read more"

    def test_edit_description_keeps_title(self, read_habit):
        runner.invoke(app, ["habits", "edit", read_habit.id, "-d", ""])
        habit = get_habit_repository().get(read_habit.id)
        assert habit.title == "Read"
        assert habit.description == ""

    def test_edit_nothing(self, read_habit):
        result = runner.invoke(app, ["habits", "edit", read_habit.id])
        assert result.exit_code == 2

    def test_edit_blank_title(self, read_habit):
        result = runner.invoke(app, ["habits", "edit", read_habit.id, "-t", " "])
        assert result.exit_code == 2
        assert get_habit_repository().get(read_habit.id).title == "Read"


class TestDelete:
    def test_delete_with_yes(self, read_habit):
        result = runner.invoke(app, ["habits", "delete", read_habit.id, "--yes"])
        assert result.exit_code == 0
        assert get_habit_repository().habits == []

    def test_delete_confirmed(self, read_habit):
        result = runner.invoke(app, ["habits", "delete", read_habit.id], input="y\n")
        assert result.exit_code == 0
        assert get_habit_repository().habits == []

    def test_delete_cancelled(self, read_habit):
        result = runner.invoke(app, ["habits", "delete", read_habit.id], input="n\n")
        assert result.exit_code == 0
        assert "Cancelled" in result.output
        assert len(get_habit_repository()) == 1

    def test_delete_unknown(self):
        result = runner.invoke(app, ["habits", "delete", "nope", "-y"])
        assert result.exit_code == 5


def test_unsaved_change_warns():
    with patch(
        "habitpomo_cli.adapters.file_storage.FileStorageGateway.save",
        side_effect=OSError("read-only file system"),
    ):
        result = runner.invoke(app, ["habits", "add", "Read"])

    assert result.exit_code == 0
    assert "Habit created: Read" in result.output
    assert "Changes could not be saved" in result.output
    assert len(get_habit_repository()) == 1
