"""Unit tests for the CLI session: output routing and exit codes."""
import io
import os
import tempfile
import unittest
from unittest.mock import patch
import yaml
import main
from src.cli import interface
from src.cli.interface import run_cli_session
from src.core.robot.executor import CommandInterpreter


class CliTestCase(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)
        self.out = io.StringIO()
        self.err = io.StringIO()

    def commands_file(self, text: str) -> str:
        path = os.path.join(self.tmp.name, "commands.txt")
        with open(path, "w", encoding="utf-8") as f:
            f.write(text)
        return path

    def run_session(self, *argv):
        return run_cli_session(list(argv), out=self.out, err=self.err)


class TestRunCliSession(CliTestCase):
    def test_reports_to_stdout(self):
        path = self.commands_file("PLACE 0,0,NORTH\nMOVE\nREPORT\n")
        self.assertEqual(self.run_session(path), 0)
        self.assertEqual(self.out.getvalue().splitlines(), [
            "x=0, y=0, facing=NORTH",
            "x=0, y=1, facing=NORTH",
            "x=0, y=1, facing=NORTH",
        ])
        self.assertEqual(self.err.getvalue(), "")

    def test_diagnostics_to_stderr_and_processing_continues(self):
        path = self.commands_file("PLACE 5,5,NORTH\nFLY\nREPORT\n")
        self.assertEqual(self.run_session(path), 0)
        self.assertEqual(self.out.getvalue().splitlines(), ["Robot is not on the table"])
        self.assertEqual(len(self.err.getvalue().splitlines()), 2)

    def test_off_board_move_reports_and_diagnoses(self):
        path = self.commands_file("PLACE 0,0,SOUTH\nMOVE\n")
        self.assertEqual(self.run_session(path), 0)
        self.assertEqual(self.out.getvalue().splitlines(),
                         ["x=0, y=0, facing=SOUTH", "x=0, y=0, facing=SOUTH"])
        self.assertEqual(len(self.err.getvalue().splitlines()), 1)

    def test_missing_file_exits_nonzero(self):
        missing = os.path.join(self.tmp.name, "missing.txt")
        self.assertEqual(self.run_session(missing), 1)
        self.assertIn("Failed to read input file", self.err.getvalue())
        self.assertEqual(self.out.getvalue(), "")

    def test_reads_stdin_without_argument(self):
        with patch("sys.stdin", io.StringIO("PLACE 1 2 E\nREPORT\n")):
            self.assertEqual(self.run_session(), 0)
        self.assertEqual(self.out.getvalue().splitlines()[-1], "x=1, y=2, facing=EAST")

    def test_transcript(self):
        path = self.commands_file("PLACE 0,0,N\nMOVE\nBAD\n")
        transcript = os.path.join(self.tmp.name, "out", "run.yaml")
        self.assertEqual(self.run_session(path, "--transcript", transcript), 0)
        with open(transcript, encoding="utf-8") as f:
            data = yaml.safe_load(f)["RobotTranscript"]
        self.assertEqual(data["source"], path)
        self.assertEqual(data["final_state"],
                         {"placed": True, "x": 0, "y": 1, "facing": "NORTH"})
        self.assertEqual([c["id"] for c in data["commands"]], [1, 2, 3])
        self.assertEqual(data["commands"][2]["error"]["kind"], "MALFORMED_COMMAND")

    def test_unwritable_transcript_exits_nonzero(self):
        path = self.commands_file("REPORT\n")
        # A directory cannot be written as a file
        self.assertEqual(self.run_session(path, "--transcript", self.tmp.name), 1)
        self.assertIn("Failed to write transcript", self.err.getvalue())

    def test_history_only_kept_for_transcripts(self):
        path = self.commands_file("REPORT\n")
        with patch.object(interface, "CommandInterpreter", wraps=CommandInterpreter) as factory:
            self.run_session(path)
        self.assertFalse(factory.call_args.kwargs["record_history"])

        transcript = os.path.join(self.tmp.name, "run.yaml")
        with patch.object(interface, "CommandInterpreter", wraps=CommandInterpreter) as factory:
            self.run_session(path, "--transcript", transcript)
        self.assertTrue(factory.call_args.kwargs["record_history"])

    def test_bad_board_size_still_closes_run(self):
        path = self.commands_file("REPORT\n")
        with patch.dict(os.environ, {"BOARD_SIZE": "zero"}), \
                patch.object(interface.logger, "end_run") as end_run, \
                patch.object(interface.logger, "error") as log_error:
            with self.assertRaises(ValueError):
                self.run_session(path)
        end_run.assert_called_once()
        self.assertEqual(log_error.call_args.args[0], "CLI session failed")


class TestMain(CliTestCase):
    def test_exit_code_zero(self):
        path = self.commands_file("REPORT\n")
        with patch("sys.stdout", self.out), self.assertRaises(SystemExit) as ctx:
            main.main([path])
        self.assertEqual(ctx.exception.code, 0)

    def test_unexpected_failure_exits_one(self):
        with patch("src.cli.interface.run_cli_session", side_effect=RuntimeError("boom")), \
                patch("sys.stderr", self.err), \
                self.assertRaises(SystemExit) as ctx:
            main.main([])
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Fatal error: boom", self.err.getvalue())


if __name__ == "__main__":
    unittest.main()
