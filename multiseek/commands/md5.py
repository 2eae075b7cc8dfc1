import argparse
import sys

from .. import constants, utils


class Command:
    name = "md5"
    help = "compute the MD5 checksum of the concatenated stream"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "--chunk_size",
            help="Number of bytes to read at a time. [default: %(default)s]",
            type=int,
            default=constants.CHUNK_SIZE,
            required=False,
        )

    def run(self, vars_args: dict):
        with utils.open_concatenated(vars_args["source_paths"]) as stream:
            md5 = utils.md5sum_fp(stream, chunk_size=vars_args["chunk_size"])
        sys.stdout.write(f"{md5.hexdigest()}\n")
