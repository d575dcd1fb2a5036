"""Entry point for the sway-ws command line tool."""

import sys

from sway_workspaces.cli.commands import cli_main


def main() -> int:
    return cli_main()


if __name__ == "__main__":
    sys.exit(main())
