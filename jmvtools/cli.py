"""CLI entrypoints for jmvtools commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from .config import load_config
from .errors import JmvToolsError
from .logging import configure_logging
from .toolkit import ModuleTools, version


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_home_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--home",
        default=None,
        help="Path to a local jamovi installation.",
    )


def _add_path_argument(parser: argparse.ArgumentParser, help_text: str) -> None:
    parser.add_argument("path", nargs="?", default=".", help=help_text)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jmvtools",
        description="Create, prepare and install jamovi modules.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to a .jmvtools.yml file or the directory holding it.",
    )
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write debug logs, including compiler command lines, to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check",
        help="Check that the jamovi compiler can find jamovi.",
    )
    _add_verbose_option(check_parser, suppress_default=True)
    _add_home_option(check_parser)

    install_parser = subparsers.add_parser(
        "install",
        help="Build a module and install it into jamovi.",
    )
    _add_verbose_option(install_parser, suppress_default=True)
    _add_home_option(install_parser)
    _add_path_argument(install_parser, "Path to the module source (defaults to current directory).")
    install_parser.add_argument(
        "--debug",
        action="store_true",
        help="Build a debug version of the module.",
    )

    prepare_parser = subparsers.add_parser(
        "prepare",
        help="Regenerate the derived sources of a module.",
    )
    _add_verbose_option(prepare_parser, suppress_default=True)
    _add_home_option(prepare_parser)
    _add_path_argument(prepare_parser, "Path to the module source (defaults to current directory).")

    create_parser = subparsers.add_parser(
        "create",
        help="Create an empty module; its name is taken from the directory name.",
    )
    _add_verbose_option(create_parser, suppress_default=True)
    _add_home_option(create_parser)
    _add_path_argument(create_parser, "Directory to create the module in.")
    create_parser.add_argument(
        "--no-gitignore",
        dest="gitignore",
        action="store_false",
        default=None,
        help="Do not write a .gitignore file.",
    )

    analysis_parser = subparsers.add_parser(
        "add-analysis",
        help="Add a new analysis to a module.",
    )
    _add_verbose_option(analysis_parser, suppress_default=True)
    _add_home_option(analysis_parser)
    analysis_parser.add_argument("name", help="Name of the new analysis.")
    analysis_parser.add_argument(
        "--title",
        default=None,
        help="Title of the new analysis (defaults to its name).",
    )
    analysis_parser.add_argument(
        "--path",
        default=".",
        help="Path to the module (defaults to current directory).",
    )

    version_parser = subparsers.add_parser("version", help="Print the jmvtools version.")
    _add_verbose_option(version_parser, suppress_default=True)

    jmc_parser = subparsers.add_parser(
        "jmc-version",
        help="Print the jamovi version reported by the compiler.",
    )
    _add_verbose_option(jmc_parser, suppress_default=True)
    _add_home_option(jmc_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for jmvtools commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    if args.command == "version":
        print(version())
        return

    try:
        tools = ModuleTools(load_config(args.config))
        if args.command == "jmc-version":
            print(tools.jmc_version(args.home))
            return
        status = _run_command(tools, args)
    except JmvToolsError as exc:
        parser.exit(1, f"jmvtools {args.command} failed: {exc}\n")
    except OSError as exc:
        parser.exit(1, f"jmvtools {args.command} failed: {exc}\nRun with --verbose for more details.\n")

    if status != 0:
        parser.exit(_exit_status(status))


def _exit_status(returncode: int) -> int:
    """Map a child killed by signal N (returncode -N) to the shell convention 128 + N."""
    if returncode < 0:
        return 128 - returncode
    return returncode


def _run_command(tools: ModuleTools, args: argparse.Namespace) -> int:
    if args.command == "check":
        return tools.check(args.home)
    if args.command == "install":
        return tools.install(args.path, args.home, debug=bool(args.debug))
    if args.command == "prepare":
        return tools.prepare(args.path, args.home)
    if args.command == "create":
        return tools.create(args.path, args.home, gitignore=args.gitignore)
    if args.command == "add-analysis":
        return tools.add_analysis(args.name, args.title, args.path, args.home)
    raise JmvToolsError(f"Unknown command '{args.command}'")  # pragma: no cover


if __name__ == "__main__":
    main(sys.argv[1:])
