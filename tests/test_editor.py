"""
Unit tests for SpreadsheetEditor, the user-facing operations surface.

Tests cover:
- Selection and formula bar behaviour
- Literal edits and formula application with history snapshots
- Undo/redo round trips and redo invalidation
- Stale formula values and explicit recalculation
- Save/load round trips, absent keys, and corrupt payloads
- Configuration defaults
"""

import pytest

from cellgrid.editor import SpreadsheetEditor
from cellgrid.exceptions import PersistenceError
from cellgrid.formula import ERROR, INVALID, FunctionRegistry
from cellgrid.spreadsheet.model import Cell, CellRef
from cellgrid.storage.file_store import JsonFileStore
from cellgrid.storage.memory import MemoryStore


def _apply(editor, row, col, text):
    editor.select_cell(row, col)
    editor.set_formula_bar_text(text)
    return editor.apply_formula_bar()


class TestSelectionOperations:
    """Selection and formula bar."""

    def test_select_cell_shows_value(self, editor):
        editor.set_cell_literal(0, 0, "hello")
        editor.select_cell(0, 0)
        assert editor.selection.selected_cell == CellRef(0, 0)
        assert editor.formula_bar == "hello"

    def test_select_cell_shows_formula(self, editor):
        editor.set_cell_literal(0, 0, "1")
        _apply(editor, 1, 0, "=SUM(A1:A1)")
        editor.select_cell(0, 0)
        editor.select_cell(1, 0)
        assert editor.formula_bar == "=SUM(A1:A1)"

    def test_select_cell_clears_drag_selection(self, editor):
        editor.start_drag(0, 0)
        editor.extend_drag(0, 1)
        editor.end_drag()
        editor.select_cell(4, 4)
        assert editor.selection.multi_select == []

    def test_drag_sequence(self, editor):
        editor.start_drag(2, 2)
        assert editor.extend_drag(2, 3) is True
        assert editor.extend_drag(2, 2) is False
        editor.end_drag()
        assert editor.selection.multi_select == [CellRef(2, 2), CellRef(2, 3)]
        assert not editor.selection.is_dragging

    def test_resume_drag(self, editor):
        assert editor.resume_drag() is False
        editor.start_drag(0, 0)
        editor.end_drag()
        assert editor.resume_drag() is True
        editor.extend_drag(1, 0)
        assert editor.selection.multi_select == [CellRef(0, 0), CellRef(1, 0)]

    def test_selection_outside_grid(self, editor):
        with pytest.raises(IndexError):
            editor.select_cell(20, 0)
        with pytest.raises(IndexError):
            editor.start_drag(0, 10)

    def test_selection_does_not_touch_history(self, editor):
        editor.select_cell(0, 0)
        editor.start_drag(1, 1)
        editor.extend_drag(1, 2)
        editor.end_drag()
        editor.set_formula_bar_text("abc")
        assert not editor.history.can_undo


class TestEditing:
    """Literal edits and formula application."""

    def test_set_cell_literal(self, editor):
        cell = editor.set_cell_literal(3, 4, "text")
        assert cell == Cell(value="text", formula="")
        assert editor.grid.get_cell(3, 4) == cell
        assert editor.history.undo_depth == 1

    def test_out_of_bounds_edit_records_nothing(self, editor):
        with pytest.raises(IndexError):
            editor.set_cell_literal(0, 10, "x")
        assert not editor.history.can_undo

    def test_apply_formula(self, editor):
        editor.set_cell_literal(0, 0, "1")
        editor.set_cell_literal(1, 0, "2")
        editor.set_cell_literal(2, 0, "3")
        cell = _apply(editor, 3, 0, "=SUM(A1:A3)")
        assert cell == Cell(value="6", formula="=SUM(A1:A3)")
        assert editor.grid.get_cell(3, 0) == cell

    def test_apply_average(self, editor):
        for row, text in enumerate(["1", "2", "3"]):
            editor.set_cell_literal(row, 0, text)
        assert _apply(editor, 0, 1, "=AVERAGE(A1:A3)").value == "2"

    def test_apply_invalid_formula_marks_cell(self, editor):
        cell = _apply(editor, 0, 0, "=PRODUCT(B1:B2)")
        assert cell.value == INVALID
        assert cell.formula == "=PRODUCT(B1:B2)"

    def test_apply_error_formula_marks_cell(self, editor):
        assert _apply(editor, 0, 0, "=SUM(A1:A50)").value == ERROR

    def test_apply_literal_text(self, editor):
        cell = _apply(editor, 0, 0, "plain")
        assert cell == Cell(value="plain", formula="")

    def test_apply_without_selection_is_noop(self, editor):
        editor.set_formula_bar_text("=SUM(A1:A2)")
        assert editor.apply_formula_bar() is None
        assert not editor.history.can_undo

    def test_apply_records_pre_mutation_snapshot(self, editor):
        before = editor.grid.snapshot()
        _apply(editor, 0, 0, "x")
        assert editor.undo() is True
        assert editor.grid.snapshot() == before

    def test_custom_registry(self):
        registry = FunctionRegistry()
        registry.register("MAX", max)
        editor = SpreadsheetEditor(registry=registry)
        editor.set_cell_literal(0, 0, "5")
        editor.set_cell_literal(1, 0, "9")
        assert _apply(editor, 2, 0, "=MAX(A1:A2)").value == "9"
        assert editor.registry is registry

    def test_failing_custom_reducer_marks_cell(self):
        def boom(values):
            raise RuntimeError("x")

        registry = FunctionRegistry()
        registry.register("BOOM", boom)
        editor = SpreadsheetEditor(registry=registry)
        cell = _apply(editor, 0, 0, "=BOOM(A1:A2)")
        assert cell == Cell(value=ERROR, formula="=BOOM(A1:A2)")
        assert editor.grid.get_cell(0, 0) == cell
        assert editor.history.undo_depth == 1


class TestRecalculation:
    """Formulas go stale until recalculate() is called."""

    def test_formula_is_not_recomputed_on_edit(self, editor):
        editor.set_cell_literal(0, 0, "1")
        _apply(editor, 1, 0, "=SUM(A1:A1)")
        editor.set_cell_literal(0, 0, "10")
        assert editor.grid.get_cell(1, 0).value == "1"

    def test_recalculate_refreshes_formulas(self, editor):
        editor.set_cell_literal(0, 0, "1")
        _apply(editor, 1, 0, "=SUM(A1:A1)")
        editor.set_cell_literal(0, 0, "10")
        depth = editor.history.undo_depth

        assert editor.recalculate() == [CellRef(1, 0)]
        assert editor.grid.get_cell(1, 0) == Cell(value="10", formula="=SUM(A1:A1)")
        assert editor.history.undo_depth == depth + 1

        editor.undo()
        assert editor.grid.get_cell(1, 0).value == "1"

    def test_recalculate_row_major_chain(self, editor):
        editor.set_cell_literal(0, 0, "2")
        _apply(editor, 0, 1, "=SUM(A1:A1)")
        _apply(editor, 1, 1, "=SUM(B1:B1)")
        editor.set_cell_literal(0, 0, "5")
        editor.recalculate()
        assert editor.grid.get_cell(0, 1).value == "5"
        assert editor.grid.get_cell(1, 1).value == "5"

    def test_recalculate_without_changes_records_nothing(self, editor):
        editor.set_cell_literal(0, 0, "1")
        _apply(editor, 1, 0, "=SUM(A1:A1)")
        depth = editor.history.undo_depth
        assert editor.recalculate() == []
        assert editor.history.undo_depth == depth


class TestUndoRedo:
    """Undo/redo through the editor."""

    def test_round_trip(self, editor):
        g0 = editor.grid.snapshot()
        editor.set_cell_literal(0, 0, "a")
        g1 = editor.grid.snapshot()

        assert editor.undo() is True
        assert editor.grid.snapshot() == g0
        assert editor.history.redo_depth == 1

        assert editor.redo() is True
        assert editor.grid.snapshot() == g1

    def test_edit_after_undo_invalidates_redo(self, editor):
        editor.set_cell_literal(0, 0, "a")
        editor.undo()
        editor.set_cell_literal(0, 0, "b")
        assert editor.redo() is False
        assert editor.grid.get_cell(0, 0).value == "b"

    def test_empty_history_is_silent_noop(self, editor):
        editor.set_cell_literal(0, 0, "a")
        editor.undo()
        assert editor.undo() is False
        assert editor.grid.get_cell(0, 0).value == ""
        editor.redo()
        assert editor.redo() is False
        assert editor.grid.get_cell(0, 0).value == "a"

    def test_undo_restores_in_place(self, editor):
        grid = editor.grid
        editor.set_cell_literal(0, 0, "a")
        editor.undo()
        assert editor.grid is grid

    def test_history_limit(self):
        editor = SpreadsheetEditor(history_limit=1)
        editor.set_cell_literal(0, 0, "a")
        editor.set_cell_literal(0, 0, "b")
        assert editor.undo() is True
        assert editor.undo() is False
        assert editor.grid.get_cell(0, 0).value == "a"


class TestPersistence:
    """Save and load through a snapshot store."""

    def test_save_then_load_round_trip(self, editor, store):
        editor.set_cell_literal(0, 0, "1")
        _apply(editor, 1, 0, "=SUM(A1:A1)")
        saved = editor.grid.snapshot()
        editor.save()
        assert "spreadsheet" in store

        editor.set_cell_literal(0, 0, "changed")
        assert editor.load() is True
        assert editor.grid.snapshot() == saved

    def test_load_into_fresh_editor(self, editor, store):
        editor.set_cell_literal(5, 5, "x")
        editor.save()
        other = SpreadsheetEditor(store=store)
        assert other.load() is True
        assert other.grid == editor.grid

    def test_load_absent_key_is_noop(self, editor):
        editor.set_cell_literal(0, 0, "keep")
        assert editor.load() is False
        assert editor.grid.get_cell(0, 0).value == "keep"

    def test_load_empty_payload_is_noop(self, editor, store):
        editor.set_cell_literal(0, 0, "keep")
        store.set("spreadsheet", "")
        assert editor.load() is False
        assert editor.grid.get_cell(0, 0).value == "keep"

    def test_load_empty_file_is_noop(self, tmp_path):
        (tmp_path / "spreadsheet.json").write_text("")
        editor = SpreadsheetEditor(store=JsonFileStore(tmp_path))
        assert editor.load() is False

    def test_load_does_not_touch_history(self, editor):
        editor.set_cell_literal(0, 0, "a")
        editor.save()
        depth = editor.history.undo_depth
        editor.load()
        assert editor.history.undo_depth == depth

    def test_corrupt_payload(self, editor, store):
        editor.set_cell_literal(0, 0, "keep")
        store.set("spreadsheet", "{not json")
        with pytest.raises(PersistenceError, match="invalid"):
            editor.load()
        assert editor.grid.get_cell(0, 0).value == "keep"

    def test_dimension_mismatch(self, store):
        SpreadsheetEditor(rows=3, cols=3, store=store).save()
        editor = SpreadsheetEditor(store=store)
        with pytest.raises(PersistenceError, match="3x3"):
            editor.load()

    def test_custom_storage_key(self, store):
        editor = SpreadsheetEditor(store=store, storage_key="budget")
        editor.save()
        assert "budget" in store
        assert "spreadsheet" not in store


class TestDefaults:
    """Configuration-driven defaults."""

    def test_defaults(self):
        editor = SpreadsheetEditor()
        assert (editor.grid.rows, editor.grid.cols) == (20, 10)
        assert editor.storage_key == "spreadsheet"
        assert editor.history.limit is None
        assert isinstance(editor.store, MemoryStore)
        assert editor.formula_bar == ""

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("CELLGRID_ROWS", "5")
        monkeypatch.setenv("CELLGRID_COLS", "3")
        monkeypatch.setenv("CELLGRID_HISTORY_LIMIT", "4")
        editor = SpreadsheetEditor()
        assert (editor.grid.rows, editor.grid.cols) == (5, 3)
        assert editor.history.limit == 4

    def test_to_frame(self, editor):
        editor.set_cell_literal(0, 0, "7")
        df = editor.to_frame()
        assert df.shape == (20, 10)
        assert df.loc[1, "A"] == "7"
