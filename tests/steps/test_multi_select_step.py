"""Tests for MultiSelectStep."""

import pytest
from textual import events

from wizard_cli.steps import MultiSelectStep
from wizard_cli.stores.labels import Labels


def press(step, *keys: str) -> None:
    for key in keys:
        character = " " if key == "space" else (key if len(key) == 1 else None)
        step.handle_event(events.Key(key, character))


def make_step(**kwargs) -> MultiSelectStep:
    return MultiSelectStep("Components", ["docs", "tests", "ci"], **kwargs)


class TestSelection:
    def test_toggle_and_confirm(self) -> None:
        step = make_step()
        press(step, "space", "down", "down", "right", "enter")
        assert step.is_complete and not step.has_failure
        assert step.value == ["docs", "ci"]

    def test_toggle_twice_clears_the_option(self) -> None:
        step = make_step()
        press(step, "space", "space")
        assert step.selected == set()

    def test_navigation_stops_at_the_ends(self) -> None:
        step = make_step()
        press(step, "up")
        assert step.cursor == 0
        press(step, "down", "j", "down")
        assert step.cursor == 2

    def test_preselected_options_by_index_or_text(self) -> None:
        step = make_step(selected=[2, "tests", "unknown", 9])
        assert step.selected == {1, 2}
        assert step.cursor == 1
        press(step, "enter")
        assert step.value == ["tests", "ci"]

    def test_enter_without_selection_warns_and_stays_active(self) -> None:
        step = make_step()
        press(step, "enter")
        assert not step.is_complete
        assert "! Select at least one item" in step.render_active(80).plain
        press(step, "space")
        assert step.warning == ""

    def test_empty_selection_allowed_with_zero_minimum(self) -> None:
        step = make_step(min_selected=0)
        press(step, "enter")
        assert step.is_complete
        assert step.value == []

    def test_needs_options(self) -> None:
        with pytest.raises(ValueError):
            MultiSelectStep("Components", [])


class TestSelectAll:
    def test_select_all_row_sits_above_the_options(self) -> None:
        step = make_step(select_all=True)
        press(step, "up")
        assert step.cursor == -1
        press(step, "up")
        assert step.cursor == -1
        press(step, "down")
        assert step.cursor == 0

    def test_toggles_every_option(self) -> None:
        step = make_step(select_all=True, selected=["docs"])
        press(step, "up", "space")
        assert step.all_selected
        press(step, "space")
        assert step.selected == set()

    def test_custom_and_localized_row_text(self) -> None:
        step = make_step(select_all=True, labels=Labels.russian())
        assert "[ ] Выбрать все" in step.render_active(80).plain
        custom = make_step(select_all=True, select_all_text="Everything")
        assert "Everything" in custom.render_active(80).plain


class TestRendering:
    def test_active_rows_show_cursor_and_marks(self) -> None:
        step = make_step(select_all=True, selected=["tests"])
        lines = step.render_active(80).plain.split("\n")
        assert lines[0] == "  ○ Components"
        assert lines[1:5] == [
            "  │     [ ] Select all",
            "  │     [ ] docs",
            "  │   > [■] tests",
            "  │     [ ] ci",
        ]
        assert "toggle all" in lines[5]

    def test_final_render_lists_the_selection(self) -> None:
        step = make_step(selected=["docs", "ci"])
        press(step, "enter")
        lines = step.render_final(80).plain.split("\n")
        assert lines[0].rstrip().endswith("DONE")
        assert lines[1:] == ["  │   docs", "  │   ci", "  │"]

    def test_prefix_overrides_apply(self) -> None:
        step = make_step(selected=["docs"])
        step.set_in_progress_prefix(" [03] ")
        assert step.render_active(80).plain.startswith(" [03] Components")
        press(step, "enter")
        step.set_completed_prefix(" [03]")
        assert step.render_final(80).plain.startswith(" [03]  Components")
