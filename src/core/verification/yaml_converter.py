"""
YAML Converter
Renders one run's executed commands and outcomes as a YAML transcript.

Structure:
    RobotTranscript:
      run_id: "..."
      source: "..."
      board_size: 5
      final_state: {placed: ..., x: ..., y: ..., facing: ...}
      commands:
        - id: 1
          line: "..."
          [report: "..."]
          [error: {kind: "...", message: "..."}]
"""

import yaml
from pathlib import Path
from typing import Optional
from src.core.robot.executor import CommandInterpreter
from src.core.observability.logging import get_logger

logger = get_logger("yaml_converter")


def convert_to_yaml(
    interpreter: CommandInterpreter,
    source: Optional[str],
    run_id: Optional[str] = None
) -> str:
    """
    Convert an interpreter's history to a YAML transcript.

    Args:
        interpreter: Interpreter that executed the run
        source: Input file path, or None for standard input
        run_id: UUIDv4 of the run

    Returns:
        YAML-formatted string
    """
    commands = []
    for i, entry in enumerate(interpreter.history, start=1):
        step = {"id": i}
        step.update(entry.to_dict())
        commands.append(step)

    transcript = {
        "RobotTranscript": {
            "run_id": run_id,
            "source": source or "stdin",
            "board_size": interpreter.board.size,
            "final_state": interpreter.state.to_dict(),
            "commands": commands,
        }
    }

    yaml_output = yaml.dump(
        transcript,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
        indent=2
    )

    logger.info("YAML transcript rendered",
                run_id=run_id,
                command_count=len(commands),
                yaml_length=len(yaml_output))

    return yaml_output


def write_transcript(
    path: str,
    interpreter: CommandInterpreter,
    source: Optional[str],
    run_id: Optional[str] = None
) -> Path:
    """Write the YAML transcript to path, creating parent directories."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(convert_to_yaml(interpreter, source, run_id), encoding="utf-8")
    logger.info("Transcript written", run_id=run_id, path=str(target))
    return target
