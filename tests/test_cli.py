"""Tests for the formgrid command line tool.

Date: 2026-10-19
"""

import io
import json

import pytest

from formgrid.cli import EXIT_BAD_FORM, EXIT_OK, FormFileError, load_form, main
from formgrid.utils.shared.json_config_manager import create_app_config_manager


@pytest.fixture
def form_file(tmp_path):
    path = tmp_path / "form.json"
    path.write_text(
        json.dumps(
            {
                "id": 12,
                "slug": "contact",
                "properties": [
                    {"id": "name", "name": "Name", "type": "text"},
                    {"id": "intro", "name": "Intro", "type": "nf-text"},
                    {"id": "email", "name": "Email", "type": "email"},
                ],
                "removed_properties": [{"id": "phone", "name": "Phone", "type": "phone_number"}],
            }
        ),
        encoding="utf-8",
    )
    return path


@pytest.fixture
def run(tmp_path):
    """Run the CLI against a private config directory and capture stdout."""
    config_dir = tmp_path / "cli-config"

    def _run(*args):
        out = io.StringIO()
        code = main(["--config-dir", str(config_dir), *args], out=out)
        return code, out.getvalue()

    _run.config_dir = config_dir
    return _run


def _stored_table(config_dir, table_key="12"):
    manager = create_app_config_manager(config_dir=str(config_dir))
    return manager.get_category("table_preferences").get(table_key)


def _row(output, column_id):
    for line in output.splitlines()[2:]:
        fields = line.split()
        if fields[1] == column_id:
            return line
    raise AssertionError(f"column {column_id} not listed")


class TestColumnsCommand:
    """Test listing columns."""

    def test_lists_data_columns(self, run, form_file):
        code, output = run("columns", str(form_file))

        assert code == EXIT_OK
        listed = [line.split()[1] for line in output.splitlines()[2:]]
        assert listed == ["name", "email", "phone", "created_at"]
        assert "(removed)" in _row(output, "phone")

    def test_with_actions(self, run, form_file):
        code, output = run("--with-actions", "columns", str(form_file))

        assert code == EXIT_OK
        actions = _row(output, "actions")
        assert "right" in actions
        assert actions.rstrip().endswith("80")


class TestMutatingCommands:
    """Commands persist their changes to the config directory."""

    def test_toggle_visibility_persists(self, run, form_file):
        code, _ = run("toggle-visibility", str(form_file), "email")

        assert code == EXIT_OK
        assert _stored_table(run.config_dir)["columns"]["email"] == {"visible": False}

    def test_toggle_pin(self, run, form_file):
        run("toggle-pin", str(form_file), "email")

        _, output = run("columns", str(form_file))
        assert "left" in _row(output, "email")

    def test_toggle_wrap(self, run, form_file):
        run("toggle-wrap", str(form_file), "name")

        assert _stored_table(run.config_dir)["columns"]["name"] == {"wrapped": True}

    def test_move(self, run, form_file):
        run("move", str(form_file), "email", "0")

        _, output = run("columns", str(form_file))
        listed = [line.split()[1] for line in output.splitlines()[2:]]
        assert listed == ["email", "name", "created_at", "phone"]

    def test_resize_is_clamped_and_saved(self, run, form_file):
        code, output = run("resize", str(form_file), "name", "5000")

        assert code == EXIT_OK
        assert _row(output, "name").rstrip().endswith("700")
        assert _stored_table(run.config_dir)["globalSizing"]["name"] == 700

    def test_reset_column(self, run, form_file):
        run("toggle-visibility", str(form_file), "email")
        run("toggle-wrap", str(form_file), "name")

        run("reset", str(form_file), "--column", "email")

        assert _stored_table(run.config_dir)["columns"] == {"name": {"wrapped": True}}

    def test_reset_everything(self, run, form_file):
        run("toggle-visibility", str(form_file), "email")

        run("reset", str(form_file))

        assert _stored_table(run.config_dir) is None


class TestBadInput:
    """Unreadable forms exit with a dedicated code."""

    def test_missing_file(self, run, tmp_path):
        code, output = run("columns", str(tmp_path / "nope.json"))

        assert code == EXIT_BAD_FORM
        assert output == ""

    def test_not_a_form(self, run, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        assert run("columns", str(path))[0] == EXIT_BAD_FORM

    def test_form_without_identity(self, tmp_path):
        path = tmp_path / "anon.json"
        path.write_text(json.dumps({"properties": []}), encoding="utf-8")

        with pytest.raises(FormFileError):
            load_form(str(path))

    def test_slug_is_table_key(self, tmp_path):
        path = tmp_path / "slug.json"
        path.write_text(json.dumps({"slug": "survey", "properties": []}), encoding="utf-8")

        assert load_form(str(path)).table_key == "survey"
