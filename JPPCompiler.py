from pathlib import Path
import sys

_SRC_DIR = Path(__file__).resolve().parent / "src"
if _SRC_DIR.exists():
    src_str = str(_SRC_DIR)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)

from textual.app import App, ComposeResult
from textual.containers import Container, Horizontal
from textual.widgets import (
    Header,
    Footer,
    Static,
    Input,
    Label,
    TextArea,
)
from textual.binding import Binding
from textual.reactive import reactive

from TranslatorComponents.CodeGenerator import StructuralViolationError
from TranslatorComponents.Grammar import ParsingError
from TranslatorComponents.Toolchain import ToolchainConfig, ToolchainError

from ViewerComponents.GeneratedCodeDisplay import GeneratedCodeDisplay
from ViewerComponents.ParseTreeView import ParseTreeView

from compile_pipeline import PipelineSession


class JPPToCCompiler(App):
    """Interactive viewer for the JPP to C translator."""

    CSS = """
    #title-bar { height: 1; padding: 0 1; }
    Horizontal { height: 1fr; }
    #source-code-editor, #parse-tree, #generated-code { width: 1fr; border: round $accent; }
    #action-bar { height: 3; padding: 0 1; border: round $panel; }
    #action-bar.error { color: $error; }
    #action-bar.success { color: $success; }
    .hidden { display: none; }
    """

    BINDINGS = [
        Binding("ctrl+l", "load_file", "Load File"),
        Binding("ctrl+t", "translate", "Translate"),
        Binding("ctrl+r", "toggle_auto_progress", "Pause/Unpause"),
        Binding("ctrl+n", "complete_step", "Finish Generation"),
        Binding("ctrl+b", "build", "Build"),
    ]

    running = reactive(False)

    def watch_running(self, is_running: bool):
        if not hasattr(self, "ticker"):
            return
        self.ticker.pause() if not is_running else self.ticker.resume()

    subtitle = reactive("")

    def watch_subtitle(self, new_subtitle: str):
        self.query_one("#title-bar", Label).update(new_subtitle)

    def __init__(
        self,
        output_root: str | Path = "outputs",
        config: ToolchainConfig | None = None,
        initial_file: Path | None = None,
    ):
        super().__init__()
        self.initial_file = initial_file
        self.pipeline = PipelineSession()
        self.output_root = Path(output_root)
        self.config = config or ToolchainConfig()
        self.file_name = ""  # Name of the file being translated
        self.generation_done = False

    def compose(self) -> ComposeResult:
        """Create the layout of the application."""
        yield Header()
        yield Footer()

        with Container():
            yield Label("Initializing...", id="title-bar")

            with Horizontal():
                self.source_editor = TextArea(id="source-code-editor", show_line_numbers=True)
                self.source_editor.border_title = "JPP source"
                yield self.source_editor
                self.parse_tree_view = ParseTreeView("program", id="parse-tree")
                self.parse_tree_view.border_title = "Parse tree"
                yield self.parse_tree_view
                self.code_display = GeneratedCodeDisplay(id="generated-code")
                self.code_display.border_title = "Generated C"
                yield self.code_display

            yield Static(
                "Type your JPP program in the left panel, or press Ctrl+L to load a file.",
                id="action-bar",
            )

            yield Input(
                placeholder="Path of the .jpp file to load...",
                id="file-input",
                classes="hidden",
            )

    def on_mount(self):
        """Initialize the application."""
        self.ticker = self.set_interval(0.3, self.progress_tick, pause=True)
        self._refresh_title_bar()
        if self.initial_file is not None:
            self.load_source(self.initial_file)

    def _refresh_title_bar(self) -> None:
        program_label = self.file_name if self.file_name else "(none)"
        self.subtitle = f"JPP to C | Program: {program_label}"

    def post_to_action_bar(self, message: str, style_class: str = "info"):
        """Post a message to the action bar with a specific style."""
        action_bar = self.query_one("#action-bar", Static)
        action_bar.update(message)
        action_bar.remove_class("info", "error", "success")
        action_bar.add_class(style_class)

    def load_source(self, path: Path) -> None:
        try:
            code = path.read_text(encoding="utf-8")
        except OSError as e:
            self.post_to_action_bar(f"Error loading file: {e}", "error")
            return
        self.source_editor.text = code
        self.file_name = path.name
        self._refresh_title_bar()
        self.post_to_action_bar(f"Loaded {path.name}. Press Ctrl+T to translate.", "success")

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id != "file-input":
            return
        event.input.add_class("hidden")
        path_text = event.value.strip()
        if not path_text:
            self.post_to_action_bar("File path cannot be empty.", "error")
            return
        self.load_source(Path(path_text))

    def action_load_file(self):
        file_input = self.query_one("#file-input", Input)
        file_input.remove_class("hidden")
        file_input.focus()

    def action_translate(self):
        """Parse the source, show the tree and start streaming generated code."""
        self.running = False
        self.generation_done = False
        self.code_display.text = ""
        try:
            report = self.pipeline.begin_parsing(
                self.source_editor.text, file_name=self.file_name or "program.jpp"
            )
        except ParsingError as e:
            self.post_to_action_bar(f"Parsing failed. {e}", "error")
            return

        self.parse_tree_view.build_from_parse_tree(self.pipeline.tree)
        self.pipeline.begin_code_generation()
        self.post_to_action_bar(report.action_bar_message, "info")
        self.running = True

    def progress_tick(self):
        """Advance code generation by one report."""
        if not self.compute_code_generation_tick():
            self.running = False

    def compute_code_generation_tick(self) -> bool:
        """Apply one code generation report.

        Returns:
            bool: True while more reports may follow.
        """
        if self.pipeline.tree is None or self.generation_done:
            return False
        try:
            done, report = self.pipeline.tick_code_generation()
        except (RuntimeError, StructuralViolationError) as e:
            self.post_to_action_bar(f"Code generation failed. {e}", "error")
            return False

        if done:
            self.generation_done = True
            self.post_to_action_bar("Code generation completed. Press Ctrl+B to build.", "success")
            return False

        self.code_display.apply_progress_report(report)
        self.parse_tree_view.apply_code_generation_report(report)
        self.post_to_action_bar(report.action_bar_message, "info")
        return True

    def action_toggle_auto_progress(self):
        if self.pipeline.tree is not None and not self.generation_done:
            self.running = not self.running

    def action_complete_step(self):
        """Run the remaining code generation without animation."""
        self.running = False
        while self.compute_code_generation_tick():
            pass

    def action_build(self):
        if not self.generation_done:
            self.post_to_action_bar("Translate the program (Ctrl+T) before building.", "error")
            return
        output_dir = self.output_root / self.config.binary_name(self.pipeline.file_name)
        try:
            report = self.pipeline.build(output_dir, self.config)
        except ToolchainError as e:
            self.post_to_action_bar(f"Build failed. {e}", "error")
            return
        self.post_to_action_bar(report.action_bar_message, "success")


if __name__ == "__main__":
    initial = Path(sys.argv[1]) if len(sys.argv) > 1 else None
    JPPToCCompiler(initial_file=initial).run()
