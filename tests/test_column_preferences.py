"""Tests for the per-table column preference store.

Date: 2026-10-19
"""

import json

import pytest

from formgrid.core.column_preferences import ColumnPreferenceStore
from formgrid.models.preferences import PreferenceRecord, TablePreferences, clamp_column_width
from formgrid.utils.shared.json_config_manager import create_app_config_manager


@pytest.fixture
def store(config_manager):
    store = ColumnPreferenceStore("42", config_manager)
    yield store
    store.dispose()


class TestPreferenceRecords:
    """Test the stored record shapes."""

    def test_record_drops_unset_fields(self):
        assert PreferenceRecord(visible=False).to_dict() == {"visible": False}
        assert PreferenceRecord().is_empty()

    def test_record_ignores_right_pin(self):
        assert PreferenceRecord.from_dict({"pinned": "right"}).pinned is None

    def test_table_preferences_from_garbage(self):
        prefs = TablePreferences.from_dict({"columns": [], "globalSizing": {"a": "wide", "b": 120}})

        assert prefs.columns == {}
        assert prefs.global_sizing == {"b": 120}


class TestSetColumnPreference:
    """Test merging partial updates."""

    def test_partial_update_merges(self, store):
        store.set_column_preference("email", {"visible": False})
        store.set_column_preference("email", {"wrapped": True})

        record = store.get_column_preference("email")
        assert record.visible is False
        assert record.wrapped is True
        assert record.pinned is None

    def test_unknown_column_reads_as_empty(self, store):
        assert store.get_column_preference("nope").is_empty()

    def test_returned_record_is_a_copy(self, store):
        store.set_column_preference("email", {"visible": True})

        store.get_column_preference("email").visible = False

        assert store.get_column_preference("email").visible is True

    def test_unknown_key_rejected(self, store):
        with pytest.raises(ValueError):
            store.set_column_preference("email", {"colour": "red"})

    def test_right_pin_rejected(self, store):
        with pytest.raises(ValueError):
            store.set_column_preference("email", {"pinned": "right"})

    def test_false_pin_means_unpinned(self, store):
        store.set_column_preference("email", {"pinned": "left"})
        store.set_column_preference("email", {"pinned": False})

        assert store.get_column_preference("email").pinned is None

    def test_mutation_emits_signal(self, store, qtbot):
        with qtbot.waitSignal(store.preferences_changed, timeout=500) as blocker:
            store.set_column_preference("email", {"order": 3})

        assert blocker.args == ["42"]

    def test_toggle_wrap(self, store):
        store.toggle_column_wrap("email")
        assert store.get_column_preference("email").wrapped is True

        store.toggle_column_wrap("email")
        assert store.get_column_preference("email").wrapped is False


class TestSizingAndOrder:
    """Test table-wide sizing and bulk ordering."""

    @pytest.mark.parametrize(
        ("width", "expected"), [(10, 80), (80, 80), (250.4, 250), (700, 700), (5000, 700)]
    )
    def test_clamp_column_width(self, width, expected):
        assert clamp_column_width(width) == expected

    @pytest.mark.parametrize("width", [float("nan"), float("inf"), float("-inf")])
    def test_non_finite_width_uses_default(self, width):
        assert clamp_column_width(width) == 200

    def test_stored_widths_are_clamped_on_load(self):
        prefs = TablePreferences.from_dict({"globalSizing": {"a": 5000, "b": 3, "c": 250}})

        assert prefs.global_sizing == {"a": 700, "b": 80, "c": 250}

    def test_sizing_is_clamped(self, store):
        store.set_column_sizing({"a": 20, "b": 300, "c": 9000})

        assert store.preferences.global_sizing == {"a": 80, "b": 300, "c": 700}

    def test_sizing_replaces_previous_mapping(self, store):
        store.set_column_sizing({"a": 300})
        store.set_column_sizing({"b": 300})

        assert store.preferences.global_sizing == {"b": 300}

    def test_columns_order_is_one_update(self, store):
        emitted = []
        store.preferences_changed.connect(emitted.append)

        store.set_columns_order(["c", "a", "b"])

        assert [store.get_column_preference(key).order for key in "abc"] == [1, 2, 0]
        assert emitted == ["42"]

    def test_batch_update_emits_once(self, store, config_manager):
        emitted = []
        store.preferences_changed.connect(emitted.append)

        with store.batch_update():
            store.set_column_preference("a", {"visible": False})
            with store.batch_update():
                store.set_column_preference("b", {"wrapped": True})
            assert emitted == []

        assert emitted == ["42"]
        assert config_manager.is_dirty

    def test_empty_batch_does_not_emit(self, store):
        emitted = []
        store.preferences_changed.connect(emitted.append)

        with store.batch_update():
            pass

        assert emitted == []


class TestReset:
    """Test forgetting preferences."""

    def test_reset_column(self, store):
        store.set_column_preference("a", {"visible": False, "order": 2})
        store.set_column_preference("b", {"wrapped": True})
        store.set_column_sizing({"a": 300, "b": 400})

        store.reset_column("a")

        assert store.get_column_preference("a").is_empty()
        assert store.get_column_preference("b").wrapped is True
        assert store.preferences.global_sizing == {"b": 400}

    def test_reset_preferences(self, store, config_manager):
        store.set_column_preference("a", {"visible": False})
        store.set_column_sizing({"a": 300})

        store.reset_preferences()

        assert store.preferences == TablePreferences()
        assert config_manager.get_category("table_preferences").get("42") is None


class TestPersistence:
    """Preferences survive a new store on the same configuration directory."""

    def test_round_trip(self, tmp_path, config_manager):
        store = ColumnPreferenceStore("42", config_manager)
        store.set_column_preference("email", {"visible": False, "pinned": "left", "order": 1})
        store.set_column_sizing({"email": 320})
        store.dispose()

        reloaded = create_app_config_manager(
            app_name="formgrid-test", config_dir=str(tmp_path / "cfg")
        )
        fresh = ColumnPreferenceStore("42", reloaded)

        record = fresh.get_column_preference("email")
        assert (record.visible, record.pinned, record.order) == (False, "left", 1)
        assert fresh.preferences.global_sizing == {"email": 320}

    def test_stored_layout_uses_camel_case_sizing_key(self, config_manager):
        store = ColumnPreferenceStore("slug-form", config_manager)
        store.set_column_sizing({"email": 320})
        store.dispose()

        data = json.loads(config_manager.config_file.read_text(encoding="utf-8"))
        assert data["table_preferences"]["slug-form"] == {
            "columns": {},
            "globalSizing": {"email": 320},
        }

    def test_tables_are_independent(self, config_manager):
        first = ColumnPreferenceStore("1", config_manager)
        second = ColumnPreferenceStore("2", config_manager)

        first.set_column_preference("email", {"visible": False})

        assert second.get_column_preference("email").is_empty()

    def test_dispose_without_changes_does_not_write(self, config_manager):
        store = ColumnPreferenceStore("42", config_manager)
        store.dispose()

        assert not config_manager.config_file.exists()
