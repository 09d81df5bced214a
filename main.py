"""
Toy Robot Simulator
Entry point for the command-line interpreter.
Usage: python main.py [input-file] [--transcript PATH]
"""

import sys
from pathlib import Path
from dotenv import load_dotenv

def main(argv=None):
    """
    Main entry point for the robot simulator.
    Loads configuration and runs one CLI session.
    """

    # Load environment configuration
    env_path = Path(__file__).parent / ".env"
    load_dotenv(dotenv_path=env_path)

    # Import CLI after .env loaded (modules may read env vars on import)
    from src.cli.interface import run_cli_session

    try:
        exit_code = run_cli_session(argv)
    except KeyboardInterrupt:
        print("\nInterrupted, shutting down.", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        sys.exit(1)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
