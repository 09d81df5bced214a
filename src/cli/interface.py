"""
CLI Interface
Feeds lines from a file or standard input to the command interpreter.

Reports and not-on-table notices go to stdout; diagnostics for rejected
commands go to stderr. Rejected commands never stop the run.
"""

import argparse
import sys
import uuid
from typing import List, Optional, TextIO
from src.cli.reader import read_command_lines
from src.core.errors import UnreadableSourceError
from src.core.robot.executor import CommandInterpreter
from src.core.verification.yaml_converter import write_transcript
from src.core.observability.logging import get_logger

logger = get_logger("cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="toy-robot",
        description="Drive a toy robot on a square board with "
                    "PLACE x,y,F / MOVE / LEFT / RIGHT / REPORT commands.",
    )
    parser.add_argument(
        "input_file",
        nargs="?",
        default=None,
        help="File of commands, one per line (default: standard input)",
    )
    parser.add_argument(
        "--transcript",
        metavar="PATH",
        default=None,
        help="Write a YAML transcript of the run to PATH",
    )
    return parser


def run_commands(
    interpreter: CommandInterpreter,
    input_file: Optional[str],
    out: TextIO,
    err: TextIO
) -> dict:
    """
    Execute every line from the source, routing output.

    Args:
        interpreter: Interpreter owning the robot
        input_file: File path or None for standard input
        out: Stream for reports and notices
        err: Stream for diagnostics

    Returns:
        Counters: lines, reports, diagnostics

    Raises:
        UnreadableSourceError: If the input file cannot be read
    """
    counters = {"lines": 0, "reports": 0, "diagnostics": 0}

    for line in read_command_lines(input_file):
        result = interpreter.execute_line(line)
        counters["lines"] += 1

        if result.diagnostic is not None:
            counters["diagnostics"] += 1
            print(result.diagnostic.message, file=err, flush=True)
        if result.report is not None:
            counters["reports"] += 1
            print(result.report, file=out, flush=True)

    return counters


def run_cli_session(
    argv: Optional[List[str]] = None,
    out: Optional[TextIO] = None,
    err: Optional[TextIO] = None
) -> int:
    """
    Run one simulation from the command line.

    Process:
    1. Parse arguments
    2. Stream lines through a fresh interpreter
    3. Optionally write the YAML transcript

    Returns:
        Process exit code (0 ok, 1 unreadable source or transcript failure)

    Raises:
        Exception: Unexpected internal failures propagate to main()
    """
    out = out or sys.stdout
    err = err or sys.stderr
    args = build_parser().parse_args(argv)

    run_id = str(uuid.uuid4())
    source = args.input_file or "stdin"
    logger.info("CLI session started", run_id=run_id, source=source)

    exit_code = 0

    try:
        interpreter = CommandInterpreter(
            run_id=run_id, record_history=bool(args.transcript))
        counters = run_commands(interpreter, args.input_file, out, err)
        logger.info("CLI session ended", run_id=run_id, **counters)

        if args.transcript:
            try:
                write_transcript(args.transcript, interpreter, args.input_file, run_id)
            except OSError as e:
                logger.error("Transcript write failed", run_id=run_id, error=str(e))
                print(f"Failed to write transcript '{args.transcript}': {e}", file=err)
                exit_code = 1

    except UnreadableSourceError as e:
        logger.error("CLI session aborted", run_id=run_id, error=str(e))
        print(f"Error: {e}", file=err)
        exit_code = 1

    except Exception as e:
        logger.error("CLI session failed", run_id=run_id, error=str(e))
        raise

    finally:
        logger.end_run(run_id)

    return exit_code
