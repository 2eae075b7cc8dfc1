import argparse
import json
import logging
import sys
from pathlib import Path

import humanize

from .. import utils

LOG = logging.getLogger(__name__)


class Command:
    name = "info"
    help = "show where each source lies in the concatenated stream"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "--indent",
            help="Indent the JSON output by this many spaces. [default: %(default)s]",
            type=int,
            default=2,
            required=False,
        )

    def run(self, vars_args: dict):
        paths: list[Path] = vars_args["source_paths"]
        with utils.open_concatenated(paths) as stream:
            sources = utils.describe_sources(paths, stream)
            total_size = stream.size

        LOG.info(
            f"{len(sources)} sources, {humanize.naturalsize(total_size, binary=True)} in total"
        )
        json.dump(
            {"sources": sources, "total_size": total_size},
            sys.stdout,
            indent=vars_args.get("indent"),
        )
        sys.stdout.write("\n")
