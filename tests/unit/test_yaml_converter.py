"""Unit tests for the YAML transcript."""
import unittest
import yaml
from src.core.robot.executor import CommandInterpreter
from src.core.verification.verifier import Board
from src.core.verification.yaml_converter import convert_to_yaml


class TestConvertToYaml(unittest.TestCase):
    def test_unplaced_run(self):
        interpreter = CommandInterpreter(board=Board(5))
        interpreter.execute_line("REPORT")
        data = yaml.safe_load(convert_to_yaml(interpreter, None, "run-1"))
        transcript = data["RobotTranscript"]
        self.assertEqual(transcript["run_id"], "run-1")
        self.assertEqual(transcript["source"], "stdin")
        self.assertEqual(transcript["board_size"], 5)
        self.assertEqual(transcript["final_state"], {"placed": False})
        self.assertEqual(transcript["commands"],
                         [{"id": 1, "line": "REPORT", "report": "Robot is not on the table"}])

    def test_illegal_move_has_report_and_error(self):
        interpreter = CommandInterpreter(board=Board(5))
        interpreter.execute_line("PLACE 4,4,EAST")
        interpreter.execute_line("MOVE")
        commands = yaml.safe_load(convert_to_yaml(interpreter, "cmds.txt"))["RobotTranscript"]["commands"]
        self.assertEqual(commands[1]["report"], "x=4, y=4, facing=EAST")
        self.assertEqual(commands[1]["error"]["kind"], "ILLEGAL_MOVE")

    def test_key_order(self):
        interpreter = CommandInterpreter(board=Board(5))
        text = convert_to_yaml(interpreter, None)
        keys = [line.split(":")[0].strip() for line in text.splitlines()[1:6]]
        self.assertEqual(keys, ["run_id", "source", "board_size", "final_state", "placed"])


if __name__ == "__main__":
    unittest.main()
