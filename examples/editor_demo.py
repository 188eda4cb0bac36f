"""
Demonstration of the editor operations.

This script fills a few cells, applies SUM/AVERAGE formulas, walks the undo
history, and saves the grid. By default snapshots go to a local JSON file
under GridConfig.storage_dir; pass ``--sheets <title>`` to store them in a
Google Sheets spreadsheet instead.

Authentication for ``--sheets``: requires either a service account JSON at
~/.config/gspread/service_account.json or OAuth credentials at
~/.config/gspread/credentials.json (browser flow on first use).
"""

import sys

import gspread

from cellgrid import JsonFileStore, SheetsStore, SpreadsheetEditor
from cellgrid.config import configure_logging, get_config


def _get_gspread_client() -> gspread.Client:
    """Authenticate with Google Sheets, trying service account then OAuth."""
    try:
        return gspread.service_account()
    except Exception:
        pass
    try:
        return gspread.oauth()
    except Exception as exc:
        print(f"Could not authenticate with Google Sheets: {exc}")
        sys.exit(1)


def main():
    configure_logging()

    if len(sys.argv) == 3 and sys.argv[1] == "--sheets":
        store = SheetsStore.open(_get_gspread_client(), sys.argv[2])
    else:
        store = JsonFileStore(get_config().storage_dir)

    editor = SpreadsheetEditor(store=store)

    print("=" * 60)
    print("cellgrid editor demo")
    print("=" * 60)

    for row, text in enumerate(["12", "7.5", "n/a", "30"]):
        editor.set_cell_literal(row, 0, text)

    editor.select_cell(0, 1)
    editor.set_formula_bar_text("=SUM(A1:A4)")
    editor.apply_formula_bar()

    editor.select_cell(1, 1)
    editor.set_formula_bar_text("=AVERAGE(A1:A4)")
    editor.apply_formula_bar()

    editor.select_cell(2, 1)
    editor.set_formula_bar_text("=MEDIAN(A1:A4)")
    editor.apply_formula_bar()

    print(editor.to_frame().loc[1:4, ["A", "B"]])
    print()

    editor.set_cell_literal(0, 0, "100")
    print(f"B1 after editing A1 (stale):   {editor.grid.get_cell(0, 1).value}")
    editor.recalculate()
    print(f"B1 after recalculate():        {editor.grid.get_cell(0, 1).value}")

    editor.undo()
    editor.undo()
    print(f"A1 after two undos:            {editor.grid.get_cell(0, 0).value}")
    editor.redo()
    print(f"A1 after redo:                 {editor.grid.get_cell(0, 0).value}")

    editor.save()
    print(f"\nSaved under key '{editor.storage_key}' using {store!r}")


if __name__ == "__main__":
    main()
