#!/usr/bin/env python3
"""
patchpanel - Live control surface for a patcher's parameters

Loads a patcher export, builds one control per parameter and keeps the
controls in sync with the device state.
"""

import argparse
import cProfile
import sys
from pathlib import Path
from typing import Optional

from PyQt6.QtWidgets import QApplication

from config import DEFAULT_PATCH_PATH, Config
from config_persistence import load_config
from logging_utils import log_event, set_log_level
from patch_loader import PatchLoadError, create_device, load_patch_export


def resolve_patch_path(cli_path: Optional[str], config: Config) -> Path:
    """Command line first, then the last opened patch, then the default export location."""
    if cli_path:
        return Path(cli_path)
    if config.last_patch_path:
        return Path(config.last_patch_path)
    return Path(DEFAULT_PATCH_PATH)


def effective_log_level(cli_level: Optional[str], config: Config) -> str:
    """Command line level for this run only; config.log_level is left as saved."""
    if cli_level:
        return cli_level.upper()
    return config.log_level


def run_app(app_argv: list[str], patch_path: Optional[str] = None, log_level: Optional[str] = None) -> int:
    app = QApplication(app_argv)
    app.setStyle("Fusion")

    from main import PatchPanelWindow

    config = load_config()
    window = PatchPanelWindow(config)
    # After the window: it applies the configured level on construction
    set_log_level(effective_log_level(log_level, config))

    path = resolve_patch_path(patch_path, config)
    try:
        export = load_patch_export(path)
    except PatchLoadError as e:
        window.show_load_error(e)
    else:
        config.last_patch_path = str(path)
        window.attach_device(create_device(export), export)

    log_event("INFO", "App", "Starting GUI")
    window.show()

    return app.exec()


def main() -> None:
    parser = argparse.ArgumentParser(description="Run patchpanel")
    parser.add_argument(
        "patch",
        nargs="?",
        default=None,
        help=f"Patcher export to load (default: last opened, then {DEFAULT_PATCH_PATH})",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
        default=None,
        help="Override the configured log level",
    )
    parser.add_argument(
        "--profile",
        action="store_true",
        help="Enable cProfile and save stats to --profile-out",
    )
    parser.add_argument(
        "--profile-out",
        default="profile.prof",
        help="Path to save cProfile stats (default: profile.prof)",
    )
    args = parser.parse_args()

    # Keep Qt argument list clean; avoid passing our flags downstream
    app_argv = [sys.argv[0]]

    if args.profile:
        profiler = cProfile.Profile()
        profiler.enable()
        exit_code = run_app(app_argv, args.patch, args.log_level)
        profiler.disable()
        profiler.dump_stats(args.profile_out)
    else:
        exit_code = run_app(app_argv, args.patch, args.log_level)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
