"""Native build of generated C code.

Writes the translation unit next to the configured output directory and
invokes the C compiler as a subprocess.
"""

from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)


class ToolchainError(Exception):
    """Raised when the C compiler cannot be run or exits with a nonzero status."""

    def __init__(self, message: str, stderr: str = ""):
        super().__init__(message)
        self.stderr = stderr


def _default_compiler() -> str:
    return os.environ.get("CC", "gcc")


@dataclass
class ToolchainConfig:
    """Settings for writing and compiling generated C code.

    Attributes:
        compiler (str): Compiler executable; defaults to $CC, then gcc.
        source_extension (str): Extension stripped from the input name to name the binary.
        c_suffix (str): Suffix appended to the input name to name the C file.
        extra_flags (tuple[str, ...]): Additional arguments placed before the C file.
    """

    compiler: str = field(default_factory=_default_compiler)
    source_extension: str = ".jpp"
    c_suffix: str = ".c"
    extra_flags: tuple[str, ...] = ()

    def c_file_name(self, input_path: str | Path) -> str:
        return Path(input_path).name + self.c_suffix

    def binary_name(self, input_path: str | Path) -> str:
        return Path(input_path).name.removesuffix(self.source_extension)


def write_c_code(
    c_code: str,
    input_path: str | Path,
    output_dir: str | Path = ".",
    config: ToolchainConfig | None = None,
) -> Path:
    config = config or ToolchainConfig()
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    c_file_path = output_dir / config.c_file_name(input_path)
    c_file_path.write_text(c_code, encoding="utf-8")
    return c_file_path


def compile_c_code(
    c_code: str,
    input_path: str | Path,
    output_dir: str | Path = ".",
    config: ToolchainConfig | None = None,
) -> Path:
    """Write `c_code` to a file and compile it into an executable.

    Args:
        c_code (str): The complete translation unit.
        input_path (str | Path): The JPP source the code was generated from; names the outputs.
        output_dir (str | Path): Directory receiving the C file and the binary.
        config (ToolchainConfig | None): Compiler settings.

    Returns:
        Path: The produced executable.

    Raises:
        ToolchainError: If the compiler is missing or exits with a nonzero status.
    """
    config = config or ToolchainConfig()
    c_file_path = write_c_code(c_code, input_path, output_dir, config)
    binary_path = Path(output_dir) / config.binary_name(input_path)

    command = [config.compiler, *config.extra_flags, str(c_file_path), "-o", str(binary_path)]
    logger.debug("Running %s", " ".join(command))
    try:
        result = subprocess.run(command, capture_output=True, text=True)
    except FileNotFoundError as error:
        raise ToolchainError(f"Failed to execute {config.compiler}: {error}") from error

    if result.returncode != 0:
        raise ToolchainError(
            f"{config.compiler} failed to compile C code: {result.stderr}",
            stderr=result.stderr,
        )

    logger.info("C code compiled successfully: %s", binary_path)
    return binary_path
