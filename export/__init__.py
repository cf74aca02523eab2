"""Export-Modul: Terminal-Anzeige (Rich) für den Wochenplan."""

from export.tui_renderer import print_result, render_classroom_rows, render_teacher_rows

__all__ = ["print_result", "render_classroom_rows", "render_teacher_rows"]
