from typing import Any

from textual.widgets import TextArea
from textual.widgets.text_area import Selection

from TranslatorComponents.ProgressReport import CodeGenerationReport


class GeneratedCodeDisplay(TextArea):
    """Read-only display of the C code produced so far."""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.read_only = True
        self.show_line_numbers = True

    def apply_progress_report(self, code_generation_report: CodeGenerationReport | None = None):
        """Appends the report's code fragment and selects it.

        Args:
            code_generation_report (CodeGenerationReport): The report carrying the new fragment.
        """
        if code_generation_report and code_generation_report.new_code:
            start_index = len(self.text)
            new_code = code_generation_report.new_code
            self.text += new_code

            end_index = start_index + len(new_code)
            document: Any = self.document
            start_location = document.get_location_from_index(start_index)
            end_location = document.get_location_from_index(end_index)
            self.selection = Selection(start=start_location, end=end_location)
            self.scroll_cursor_visible(center=True)
