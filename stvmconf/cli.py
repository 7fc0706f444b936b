"""Command line for compiling, exporting and inspecting the configuration."""

from __future__ import annotations

import argparse
import sys

from .model import ConfigError
from .store import make_config, read_boot, unmake_config, write_default


def _ask_overwrite() -> bool:
    print("The configuration already exists, Confirm the cover(Y/N)?:", end="", file=sys.stderr)
    sys.stderr.flush()
    answer = sys.stdin.readline()
    return answer[:1] in ("y", "Y")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="stvmconf", description="Manage the engine configuration.")
    parser.add_argument("--config", help="runtime configuration file (default: $TVMCFG)")
    commands = parser.add_subparsers(dest="command", required=True)

    compile_cmd = commands.add_parser("compile", help="compile a text configuration")
    compile_cmd.add_argument("source")

    export_cmd = commands.add_parser("export", help="export the runtime configuration as text")
    export_cmd.add_argument("target")
    export_cmd.add_argument("-y", "--yes", action="store_true", help="overwrite without asking")

    commands.add_parser("default", help="write the default runtime configuration")
    commands.add_parser("show", help="print the boot parameters")
    return parser


def main(argv=None) -> int:
    """Run the command line; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        if args.command == "compile":
            make_config(args.source, args.config)
            print("create completed successfully!!!")
        elif args.command == "export":
            confirm = (lambda: True) if args.yes else _ask_overwrite
            if unmake_config(args.target, args.config, confirm):
                print(f"export file ({args.target}) completed successfully!!!")
        elif args.command == "default":
            write_default(args.config)
            print("create default param completed successfully!!!")
        else:
            boot = read_boot(args.config)
            print(f"MACHINE={boot.node}")
            print(f"DEPLOY={boot.boot_type.name.lower()}")
            print(f"MAXTABLE={boot.max_table}")
            print(f"MAXFILED={boot.max_field}")
            print(f"MAXDOMAIN={boot.max_domain}")
            print(f"MAXSEQUE={boot.max_seque}")
            print(f"SERVER_EXEC={boot.boot_exec}")
            print(f"SERVER_PORT={boot.boot_port}")
            print(f"LOGNAME={boot.log}")
    except ConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())