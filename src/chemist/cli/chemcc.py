"""
chemcc - Compiler Command-Line Interface
========================================

Compiles one C-subset source file to FASM assembly and hands the result
to the flat assembler to produce a Linux ELF64 executable.

Usage
-----
    $ chemcc hello.c hello

writes hello.asm, then runs ``fasm hello.asm`` which produces the
executable ``hello``. The assembly file is only written once the whole
compilation has succeeded.

If fasm is not installed, hello.asm is still written and a warning is
printed.

Exit Codes
----------
0 - Success
1 - Usage, file access, compilation or assembler error
"""

import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import Optional

import click

from chemist.cc import ChemistCompiler, CompilerOptions
from chemist.cc.compiler import write_assembly
from chemist.cli.errors import AssemblerError, ExitCode, handle_cli_exception
from chemist.errors import ChemistError

logger = logging.getLogger(__name__)


def setup_logging() -> None:
    """Send warnings from the compiler to stderr."""
    logging.basicConfig(level=logging.WARNING, format="%(message)s")


def output_path_for(output_base: str, options: CompilerOptions) -> Path:
    """Path of the assembly file for an output base name."""
    return Path(f"{output_base}{options.output_suffix}")


def run_assembler(assembler: str, asm_path: Path) -> bool:
    """
    Run the external assembler on a generated file.

    Returns:
        True if the assembler ran, False if it is not installed

    Raises:
        AssemblerError: If the assembler exits with a non-zero status
    """
    executable = shutil.which(assembler)
    if executable is None:
        logger.warning(f"warning: assembler '{assembler}' not found; {asm_path} was not assembled")
        return False

    logger.debug(f"running {executable} {asm_path}")
    result = subprocess.run(
        [executable, str(asm_path)],
        capture_output=True,
        text=True,
    )
    if result.returncode != 0:
        details = (result.stderr or result.stdout).strip()
        message = f"{assembler} failed on {asm_path} (exit status {result.returncode})"
        if details:
            message = f"{message}\n{details}"
        raise AssemblerError(message)
    return True


# =============================================================================
# CLI Definition
# =============================================================================

@click.command()
@click.argument(
    "input_file",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.argument("output_base")
def chemcc(input_file: Path, output_base: str) -> None:
    """
    Compile a C-subset program to a freestanding x86-64 executable.

    INPUT_FILE is the C source file to compile. OUTPUT_BASE names the
    outputs: OUTPUT_BASE.asm is written and then assembled with fasm.

    \b
    Supported C:
        int name() { ... }        functions without parameters
        int x; int x = expr;      local variables
        x = expr;                 assignment
        f();                      calls
        return expr;              expr is a number, variable or call
    """
    options = CompilerOptions()
    asm_path = output_path_for(output_base, options)

    try:
        result = ChemistCompiler(options).compile_file(input_file)
        write_assembly(result.assembly, asm_path)
        if run_assembler(options.assembler, asm_path):
            click.echo(f"Compiled {input_file} -> {output_base}")
        else:
            click.echo(f"Compiled {input_file} -> {asm_path}")
    except (ChemistError, click.ClickException, OSError) as e:
        handle_cli_exception(e)


def main(argv: Optional[list[str]] = None) -> None:
    """
    Console entry point.

    Runs the click command outside standalone mode so that usage errors
    exit with status 1 like every other failure.
    """
    setup_logging()
    try:
        exit_code = chemcc.main(args=argv, prog_name="chemcc", standalone_mode=False)
    except click.ClickException as e:
        handle_cli_exception(e)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(ExitCode.ERROR)

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
