"""Command-line front door for snapview.

Parses CLI options, validates the restic environment and configures
logging, then dispatches into the interactive runtime.
"""

from __future__ import annotations

import argparse
import sys

from .config import AppConfig, ResticSettings, load_app_config
from .debug import configure_logging
from .errors import ConfigError, SnapviewError
from .runtime import run_app
from .ui_theme import available_theme_names

REQUIRED_ENV_HELP = """\
Required environment variables:
  RESTIC_REPOSITORY        Repository location (or --repo)
  RESTIC_PASSWORD          Repository password
  or RESTIC_PASSWORD_FILE  Path to password file
  or RESTIC_PASSWORD_COMMAND  Command that prints the password

Example:
  export RESTIC_REPOSITORY="rest:https://your-server/repo"
  export RESTIC_PASSWORD_FILE="$HOME/.restic-password"
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snapview",
        description="Terminal UI for browsing and restoring restic snapshots.",
        epilog=REQUIRED_ENV_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--repo", default=None, help="Repository location. Overrides RESTIC_REPOSITORY.")
    parser.add_argument("-l", "--log-file", default=None, metavar="PATH", help="Save command logs to file.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--restic-binary", default=None, metavar="PATH", help="restic executable to run.")
    return parser


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the browser.

    Configuration errors exit with status 1 before the terminal is touched.
    """
    args = build_parser().parse_args(argv)
    app_config: AppConfig = load_app_config()

    try:
        settings = ResticSettings.from_env(
            repository=args.repo,
            binary=args.restic_binary or app_config.restic_binary,
        )
    except ConfigError as exc:
        sys.stderr.write(f"Error: {exc}\n\n{REQUIRED_ENV_HELP}")
        raise SystemExit(1) from None

    configure_logging(args.log_file or app_config.log_file)
    try:
        run_app(settings, app_config, theme_name=args.theme, no_color=args.no_color)
    except SnapviewError as exc:
        raise SystemExit(f"Error: {exc}") from None
