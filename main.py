import curses
import os
import sys

from app_state import AppState
from config_paths import LOG_PATH, ensure_config_dirs, load_config
from log_setup import configure_logging

# Make ESC snappy
os.environ.setdefault("ESCDELAY", "25")
from orchestrator import Orchestrator

try:
    from _version import __version__
except ImportError:
    __version__ = "0.0.0"


USAGE = "tabscope - terminal viewer for csv, tsv, avro and parquet files\n\nUsage:\n  tabscope [path]\n  tabscope -v\n"


def parse_args(args):
    """Return (action, path) where action is one of "version", "help", "run"."""
    if "-v" in args or "-V" in args:
        return "version", None
    if "-h" in args or "--help" in args or len(args) > 1:
        return "help", None
    return "run", (args[0] if args else None)


def main():
    action, path = parse_args(sys.argv[1:])

    if action == "version":
        print(__version__)
        return
    if action == "help":
        print(USAGE)
        return

    config = load_config()
    try:
        ensure_config_dirs()
        log_path = LOG_PATH
    except OSError:
        log_path = None
    configure_logging(config["LOG_LEVEL"], log_path)

    state = AppState()
    if path:
        state.submit(path)

    def curses_main(stdscr):
        Orchestrator(stdscr, state, config).run()

    curses.wrapper(curses_main)


if __name__ == "__main__":
    main()
