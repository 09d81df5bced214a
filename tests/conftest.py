"""Shared test setup: keep log files out of the working tree."""
import os

os.environ["LOG_TO_FILE"] = "false"
os.environ["CONSOLE_LOG_LEVEL"] = "WARNING"
os.environ.pop("BOARD_SIZE", None)
