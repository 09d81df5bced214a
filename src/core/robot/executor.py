"""
Robot Execution Module
Command interpreter and robot state machine.

States: Unplaced -> Placed (via a valid PLACE). Nothing returns the robot
to Unplaced. Every command is verified before the state is replaced, so a
rejected command never leaves a partial update behind.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from src.core.errors import CommandError, ErrorKind
from src.core.robot.state import RobotState
from src.core.translation.command_parser import Command, CommandType, parse_command
from src.core.verification.verifier import Board, verify_move, verify_placement
from src.core.observability.logging import get_logger

logger = get_logger("executor")

NOT_ON_TABLE = "Robot is not on the table"


@dataclass(frozen=True)
class Diagnostic:
    """Non-fatal message describing a rejected command."""

    kind: ErrorKind
    message: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "message": self.message}


@dataclass(frozen=True)
class ExecutionResult:
    """
    Outcome of one line.

    Attributes:
        report: Position report or not-on-table notice (stdout)
        diagnostic: Rejection details (stderr)
    """

    report: Optional[str] = None
    diagnostic: Optional[Diagnostic] = None


@dataclass(frozen=True)
class TranscriptEntry:
    line: str
    result: ExecutionResult

    def to_dict(self) -> Dict[str, Any]:
        entry: Dict[str, Any] = {"line": self.line}
        if self.result.report is not None:
            entry["report"] = self.result.report
        if self.result.diagnostic is not None:
            entry["error"] = self.result.diagnostic.to_dict()
        return entry


class CommandInterpreter:
    """
    Executes command lines against a single robot it owns.

    Usage:
        interpreter = CommandInterpreter()
        result = interpreter.execute_line("PLACE 0,0,NORTH")
        result.report  # "x=0, y=0, facing=NORTH"
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        run_id: Optional[str] = None,
        record_history: bool = True
    ):
        """
        Args:
            board: Board to play on (default: $BOARD_SIZE or 5)
            run_id: UUIDv4 of the CLI run, attached to log entries
            record_history: Keep a TranscriptEntry per executed line
        """
        self.board = board or Board()
        self.run_id = run_id
        self.record_history = record_history
        self._state = RobotState.unplaced()
        self.history: List[TranscriptEntry] = []

        logger.info("CommandInterpreter initialized",
                    run_id=run_id, board_size=self.board.size)

    @property
    def state(self) -> RobotState:
        return self._state

    def execute_line(self, raw_line: str) -> ExecutionResult:
        """
        Parse, verify and apply one line.

        Blank lines are skipped and produce an empty result. Recoverable
        command errors become a Diagnostic; anything else propagates.

        Args:
            raw_line: Line as read from the input source

        Returns:
            ExecutionResult with optional report and optional diagnostic
        """
        line = raw_line.strip()
        if not line:
            return ExecutionResult()

        try:
            command = parse_command(line)
            result = self._dispatch(command)
        except CommandError as e:
            diagnostic = Diagnostic(kind=e.kind, message=str(e))
            logger.warning("Command rejected",
                           run_id=self.run_id, line=line,
                           kind=e.kind.value, error=str(e))
            result = ExecutionResult(diagnostic=diagnostic)

        if self.record_history:
            self.history.append(TranscriptEntry(line=line, result=result))
        logger.debug("Command executed",
                     run_id=self.run_id, line=line,
                     state=self._state.to_dict())
        return result

    def report(self) -> str:
        """Report for the current state, or the not-on-table notice."""
        if not self._state.placed:
            return NOT_ON_TABLE
        return (f"x={self._state.x}, y={self._state.y}, "
                f"facing={self._state.heading.value}")

    def _dispatch(self, command: Command) -> ExecutionResult:
        if command.type is CommandType.PLACE:
            return self._place(command)

        if not self._state.placed:
            return ExecutionResult(report=NOT_ON_TABLE)

        if command.type is CommandType.MOVE:
            return self._move()
        elif command.type is CommandType.LEFT:
            self._state = self._state.placed_at(
                self._state.x, self._state.y, self._state.heading.left())
        elif command.type is CommandType.RIGHT:
            self._state = self._state.placed_at(
                self._state.x, self._state.y, self._state.heading.right())

        return ExecutionResult(report=self.report())

    def _place(self, command: Command) -> ExecutionResult:
        direction = verify_placement(
            self.board, command.x, command.y, command.direction_token)
        self._state = self._state.placed_at(command.x, command.y, direction)
        logger.info("Robot placed", run_id=self.run_id, state=self._state.to_dict())
        return ExecutionResult(report=self.report())

    def _move(self) -> ExecutionResult:
        # Off-board moves are ignored but the unchanged position is still reported
        try:
            x, y = verify_move(self.board, self._state)
        except CommandError as e:
            return ExecutionResult(
                report=self.report(),
                diagnostic=Diagnostic(kind=e.kind, message=str(e)),
            )
        self._state = self._state.placed_at(x, y, self._state.heading)
        return ExecutionResult(report=self.report())
