import argparse
import logging
import sys
from pathlib import Path

from .. import exceptions, VERSION
from ..utils import configure_logger, get_app_name, log_exception
from . import cat, info, md5

multiseek_commands = [
    info,
    cat,
    md5,
]


# Root logger of multiseek (not including third-party libraries)
LOG = logging.getLogger(get_app_name())


# Handle shared arguments/options here
def add_general_arguments(parser, command):
    parser.add_argument(
        "source_paths",
        help="Paths to the sources, in the order they are concatenated.",
        nargs="+",
        type=Path,
    )


def _log_params(argvars: dict) -> None:
    # a split archive can have hundreds of volumes
    MAX_SOURCES = 5

    for k, v in argvars.items():
        if v is None or callable(v):
            continue
        if k == "source_paths":
            shown = ", ".join(str(p) for p in v[:MAX_SOURCES])
            if MAX_SOURCES < len(v):
                shown += f" and {len(v) - MAX_SOURCES} more"
            v = shown
        LOG.debug("CLI param: %s: %s", k, v)


def main(argv=None):
    version_text = f"multiseek version {VERSION}"

    parser = argparse.ArgumentParser(
        "multiseek",
    )
    parser.add_argument(
        "--version",
        help="show the version of multiseek and exit",
        action="version",
        version=version_text,
    )
    parser.add_argument(
        "--verbose",
        help="show verbose",
        action="store_true",
        default=False,
        required=False,
    )
    parser.set_defaults(func=lambda _: parser.print_help())

    all_commands = [module.Command() for module in multiseek_commands]

    subparsers = parser.add_subparsers(
        description="please choose one of the available subcommands",
    )
    for command in all_commands:
        cmd_parser = subparsers.add_parser(
            command.name, help=command.help, conflict_handler="resolve"
        )
        add_general_arguments(cmd_parser, command.name)
        command.add_basic_arguments(cmd_parser)
        cmd_parser.set_defaults(func=command.run)

    args = parser.parse_args(argv)

    configure_logger(
        LOG, level=logging.DEBUG if args.verbose else logging.INFO, stream=sys.stderr
    )

    LOG.debug("%s", version_text)
    argvars = vars(args)
    _log_params(argvars)

    try:
        args.func(argvars)

    except exceptions.MultiSeekError as ex:
        log_exception(ex)
        sys.exit(ex.exit_code)

    except KeyboardInterrupt:
        LOG.info("Interrupted by user...")
        sys.exit(130)


if __name__ == "__main__":
    main()
