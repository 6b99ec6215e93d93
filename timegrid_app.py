#!/usr/bin/env python3
"""
Timegrid - A PySide6 week grid for planning tasks and reviewing achievements.

This is the main entry point for the application.
"""

import sys
import argparse
from datetime import date
from pathlib import Path

from PySide6.QtWidgets import QApplication
from PySide6.QtCore import Qt

from timegrid.config import Config, set_debug
from timegrid.timed_item import load_items
from timegrid_gui.main_window import MainWindow


def parse_args():
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Timegrid - A week grid for tasks and achievements"
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="Path to configuration file (default: auto-detect)"
    )
    parser.add_argument(
        "--items",
        type=Path,
        help="JSON file with tasks and achievements to show"
    )
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        help="Show the week containing this date (YYYY-MM-DD, default: today)"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug output"
    )
    return parser.parse_args()


def main():
    """Main entry point."""
    args = parse_args()
    set_debug(args.debug)

    # Enable high DPI scaling
    QApplication.setHighDpiScaleFactorRoundingPolicy(
        Qt.HighDpiScaleFactorRoundingPolicy.PassThrough
    )

    app = QApplication(sys.argv)
    app.setApplicationName("Timegrid")
    app.setApplicationVersion("0.1")
    app.setStyle("Fusion")

    try:
        config = Config.load(args.config)
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(f"\nThe default location is {Config.get_default_config_path()}", file=sys.stderr)
        sys.exit(1)
    except (ValueError, TypeError) as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        sys.exit(1)

    tasks, achievements = [], []
    if args.items is not None:
        try:
            tasks, achievements = load_items(args.items)
        except (OSError, ValueError, KeyError) as e:
            print(f"Error loading items from {args.items}: {e}", file=sys.stderr)
            sys.exit(1)

    if args.debug:
        print(f"Loaded configuration from: {args.config or Config.get_default_config_path()}", file=sys.stderr)
        print(f"  Tasks: {len(tasks)}", file=sys.stderr)
        print(f"  Achievements: {len(achievements)}", file=sys.stderr)

    window = MainWindow(config, tasks, achievements, start_date=args.date)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
