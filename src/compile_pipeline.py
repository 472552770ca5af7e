from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from rich.console import Console

from TranslatorComponents.CodeGenerator import (
    StructuralViolationError,
    get_code_generation_reporter,
)
from TranslatorComponents.Grammar import ParsingError, parse_source
from TranslatorComponents.ParseTree import ParseNode
from TranslatorComponents.ProgressReport import (
    BuildReport,
    CodeGenerationReport,
    ParsingReport,
)
from TranslatorComponents.Toolchain import ToolchainConfig, compile_c_code, write_c_code
from TranslatorComponents.TreePrinter import print_parse_tree

logger = logging.getLogger(__name__)

SEPARATOR = "-" * 100


class PipelineSession:
    """Shared translation pipeline state.

    UI-agnostic orchestrator driven by both the Textual UI and the CLI. It
    holds the parse tree, the code generator and the produced C code.
    """

    def __init__(self) -> None:
        self.reset_all()

    def reset_all(self) -> None:
        self.file_name: str = ""
        self.source_code: str = ""
        self.tree: ParseNode | None = None
        self.output_code: str = ""

        self._code_generator = None

    # ----- Parsing -----

    def begin_parsing(self, source_code: str, file_name: str = "") -> ParsingReport:
        """Parse `source_code` into `self.tree`.

        Raises:
            ParsingError: If the source does not match the grammar.
        """
        self.reset_all()
        self.file_name = file_name
        self.source_code = source_code
        self.tree = parse_source(source_code, filename=file_name or "<source>")

        report = ParsingReport()
        report.node_count = self.tree.count_nodes()
        report.action_bar_message = f"Parsing completed: {report.node_count} nodes."
        return report

    # ----- Code generation -----

    def begin_code_generation(self) -> None:
        if self.tree is None:
            raise RuntimeError("No parse tree available for code generation.")
        self.output_code = ""
        self._code_generator = get_code_generation_reporter(self.tree)

    def tick_code_generation(self) -> tuple[bool, CodeGenerationReport | None]:
        if self._code_generator is None:
            raise RuntimeError("Code generator not initialized.")
        try:
            report: CodeGenerationReport = next(self._code_generator)
            if report.new_code:
                self.output_code += report.new_code
            return False, report
        except StopIteration:
            return True, None

    def finish_code_generation(self) -> str:
        """Consume remaining code generation reports and return the full output."""
        while True:
            done, _ = self.tick_code_generation()
            if done:
                return self.output_code

    # ----- Native build -----

    def build(
        self,
        output_dir: str | Path,
        config: ToolchainConfig | None = None,
        compile_binary: bool = True,
    ) -> BuildReport:
        """Write the generated code and, if asked, compile it.

        Raises:
            ToolchainError: If the compiler fails.
        """
        if not self.output_code:
            raise RuntimeError("No generated code to build.")
        config = config or ToolchainConfig()
        name = self.file_name or "program"

        report = BuildReport()
        report.c_file = str(Path(output_dir) / config.c_file_name(name))
        if compile_binary:
            binary = compile_c_code(self.output_code, name, output_dir, config)
            report.binary = str(binary)
            report.action_bar_message = f"C code compiled successfully: {binary}"
        else:
            write_c_code(self.output_code, name, output_dir, config)
            report.action_bar_message = f"C code written to {report.c_file}, build skipped."
        return report


def read_text_file(path: str | Path) -> str:
    return Path(path).read_text(encoding="utf-8")


def compile_file_to_outputs(
    input_path: str | Path,
    output_root: str | Path = "outputs",
    config: ToolchainConfig | None = None,
    build: bool = True,
    print_tree: bool = False,
    console: Console | None = None,
) -> tuple[bool, Optional[Path], str]:
    """Translate a .jpp file end-to-end using the same session as the UI.

    Parse failures and malformed trees are reported, not raised, so a batch can
    carry on with the next file. Compiler failures propagate as ToolchainError.

    Returns: (ok, output_path, message)
    """

    input_path = Path(input_path)
    config = config or ToolchainConfig()
    program_name = config.binary_name(input_path)
    output_dir = Path(output_root) / program_name

    session = PipelineSession()
    try:
        session.begin_parsing(read_text_file(input_path), file_name=input_path.name)
    except ParsingError as e:
        return False, None, f"Error while parsing {input_path}: {e}"

    if print_tree and session.tree is not None:
        print_parse_tree(session.tree, 0, console=console)

    try:
        session.begin_code_generation()
        session.finish_code_generation()
    except StructuralViolationError as e:
        return False, None, f"Code generation failed for {input_path}: {e}"

    report = session.build(output_dir, config, compile_binary=build)
    output_path = Path(report.binary) if report.binary else Path(report.c_file)
    return True, output_path, report.action_bar_message


def compile_directory(
    folder_path: str | Path,
    output_root: str | Path = "outputs",
    config: ToolchainConfig | None = None,
    build: bool = True,
    print_tree: bool = False,
    console: Console | None = None,
) -> list[tuple[Path, bool, str]]:
    """Translate every regular file in `folder_path`, in name order.

    Returns:
        list of (input_path, ok, message), one entry per file.

    Raises:
        ToolchainError: On the first compiler failure; remaining files are not processed.
    """
    console = console or Console()
    results: list[tuple[Path, bool, str]] = []

    for path in sorted(Path(folder_path).iterdir()):
        if not path.is_file():
            continue
        console.print(SEPARATOR, markup=False)
        console.print(f"Reading file: {path}", markup=False)

        ok, _, message = compile_file_to_outputs(
            path,
            output_root=output_root,
            config=config,
            build=build,
            print_tree=print_tree,
            console=console,
        )
        if not ok:
            logger.error(message)
        console.print(message, markup=False)
        results.append((path, ok, message))

    return results
