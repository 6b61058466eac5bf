from __future__ import annotations
from pathlib import Path
from typing import Sequence, Optional

WORKBOOK_SUFFIXES = (".xlsx", ".xls")


class FileChooser:
    """
    Single-workbook selection helper.
    - GUI dialog via tkinter
    - CLI fallback (type a path) when no display is available
    - Suffix enforcement (.xlsx / .xls by default)
    - Remembers last directory used
    """
    def __init__(self, initial_dir: str | Path | None = None, prompt=input):
        self.initial_dir = Path(initial_dir) if initial_dir else Path.cwd()
        self._prompt = prompt

    def _dialog(self, title: str, patterns: Sequence[str]) -> str:
        import tkinter as tk
        from tkinter import filedialog
        root = tk.Tk(); root.withdraw()
        try:
            filetypes = [("Workbooks", " ".join(patterns)), ("All files", "*.*")]
            return filedialog.askopenfilename(
                title=title, initialdir=str(self.initial_dir), filetypes=filetypes
            )
        finally:
            root.update(); root.destroy()

    def pick(
        self,
        *,
        title: str = "Select a workbook",
        patterns: Sequence[str] = ("*.xlsx", "*.xls"),
        enforce_suffixes: Sequence[str] | None = WORKBOOK_SUFFIXES,
        interactive: bool = True,
        cli_fallback: bool = True,
    ) -> Optional[Path]:
        chosen = ""
        if interactive:
            try:
                chosen = self._dialog(title, patterns)
            except Exception:
                # tkinter missing or no display
                if not cli_fallback:
                    raise
        if not chosen and (not interactive or cli_fallback):
            print(f"Enter the workbook path. Expected patterns: {', '.join(patterns)}")
            chosen = self._prompt("> ").strip().strip('"')

        if not chosen:
            return None
        path = Path(chosen)

        if enforce_suffixes:
            ok = {s.lower() if s.startswith(".") else "." + s.lower() for s in enforce_suffixes}
            if path.suffix.lower() not in ok:
                return None
        if not path.exists():
            return None

        self.initial_dir = path.parent
        return path

    def pick_manifest_source(self, layout_label: str = "", **kwargs) -> Optional[Path]:
        """Convenience: carrier export used to build a manifest."""
        title = f"Select the carrier export ({layout_label})" if layout_label else "Select the carrier export"
        return self.pick(title=title, **kwargs)

    def pick_workbook_to_merge(self, **kwargs) -> Optional[Path]:
        """Convenience: multi-sheet workbook for the format converter."""
        return self.pick(title="Select a workbook to merge (XLS/XLSX)", **kwargs)
