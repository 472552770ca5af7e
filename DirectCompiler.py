from pathlib import Path
import argparse
import logging
import sys

_SRC_DIR = Path(__file__).resolve().parent / "src"
if _SRC_DIR.exists():
    src_str = str(_SRC_DIR)
    if src_str not in sys.path:
        sys.path.insert(0, src_str)

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from TranslatorComponents.Toolchain import ToolchainConfig, ToolchainError

from compile_pipeline import compile_directory, compile_file_to_outputs

EXAMPLES_DIR = "./examples/"


def build_argument_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Translate JPP programs to C and compile them."
    )
    parser.add_argument(
        "paths",
        nargs="*",
        help=f"JPP files or directories to translate (default: {EXAMPLES_DIR})",
    )
    parser.add_argument("--output-root", default="outputs", help="Directory for generated files")
    parser.add_argument("--cc", default=None, help="C compiler to invoke (default: $CC or gcc)")
    parser.add_argument("--no-build", action="store_true", help="Only write the C files")
    parser.add_argument("--print-tree", action="store_true", help="Dump each parse tree")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log translation details")
    return parser


def configure_logging(verbose: bool, console: Console) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def main(argv: list[str] | None = None) -> int:
    args = build_argument_parser().parse_args(argv)
    console = Console()
    configure_logging(args.verbose, console)

    config = ToolchainConfig()
    if args.cc:
        config.compiler = args.cc

    failures = 0
    try:
        for target in args.paths or [EXAMPLES_DIR]:
            target = Path(target)
            if target.is_dir():
                results = compile_directory(
                    target,
                    output_root=args.output_root,
                    config=config,
                    build=not args.no_build,
                    print_tree=args.print_tree,
                    console=console,
                )
                failures += sum(1 for _, ok, _ in results if not ok)
                continue

            ok, _, message = compile_file_to_outputs(
                target,
                output_root=args.output_root,
                config=config,
                build=not args.no_build,
                print_tree=args.print_tree,
                console=console,
            )
            console.print(message, markup=False)
            if not ok:
                failures += 1
    except ToolchainError as e:
        console.print(f"[bold red]Build aborted:[/] {escape(str(e))}")
        return 2

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
