"""Module: conftest.py

Date: 2026-10-19

Global pytest configuration and fixtures for the formgrid test suite.
Runs Qt headless and keeps every test's configuration inside tmp_path.
"""

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from formgrid.models.form_definition import FormDefinition
from formgrid.utils.paths import AppPaths
from formgrid.utils.shared import json_config_manager
from formgrid.utils.shared.json_config_manager import create_app_config_manager
from formgrid.utils.shared.timer_manager import cleanup_all_timers


@pytest.fixture(scope="session")
def qapp():
    """Create the QApplication shared by all tests."""
    from PyQt5.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture(autouse=True)
def isolated_environment(qapp, tmp_path):
    """Point user data at tmp_path and drop timers and global managers afterwards."""
    AppPaths.set_user_data_dir(tmp_path / "userdata")
    json_config_manager.set_app_config_manager(None)

    yield

    cleanup_all_timers()
    json_config_manager.set_app_config_manager(None)
    AppPaths.set_user_data_dir(None)
    qapp.processEvents()


@pytest.fixture
def config_manager(tmp_path):
    """Config manager writing to its own directory."""
    return create_app_config_manager(app_name="formgrid-test", config_dir=str(tmp_path / "cfg"))


@pytest.fixture
def scenario_form():
    """Form with a text input, a layout text block and a matrix field."""
    return FormDefinition.from_dict(
        {
            "id": 42,
            "slug": "feedback",
            "properties": [
                {"id": "name", "name": "Name", "type": "text-input"},
                {"id": "bio", "name": "Bio", "type": "nf-text"},
                {
                    "id": "signature",
                    "name": "Signature",
                    "type": "matrix",
                    "columns": ["a", "b"],
                },
            ],
        }
    )


@pytest.fixture
def make_form():
    """Factory for forms with plain text fields named after their ids."""

    def _make(field_ids=("a", "b", "c"), removed_ids=(), **kwargs):
        data = {
            "id": kwargs.pop("form_id", 7),
            "properties": [
                {"id": field_id, "name": field_id.upper(), "type": "text"} for field_id in field_ids
            ],
            "removed_properties": [
                {"id": field_id, "name": field_id.upper(), "type": "text"} for field_id in removed_ids
            ],
        }
        data.update(kwargs)
        return FormDefinition.from_dict(data)

    return _make
