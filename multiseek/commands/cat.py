import argparse
import io
import logging
import sys
from pathlib import Path

from .. import constants, exceptions, utils

LOG = logging.getLogger(__name__)


class Command:
    name = "cat"
    help = "copy a byte range of the concatenated stream"

    def add_basic_arguments(self, parser: argparse.ArgumentParser):
        parser.add_argument(
            "--offset",
            help="Logical offset to start copying from. Negative values count from the end. [default: %(default)s]",
            type=int,
            default=0,
            required=False,
        )
        parser.add_argument(
            "--length",
            help="Number of bytes to copy. Copy until the end if not specified.",
            type=int,
            default=None,
            required=False,
        )
        parser.add_argument(
            "--output",
            help="Write to this file instead of STDOUT.",
            type=Path,
            default=None,
            required=False,
        )
        parser.add_argument(
            "--chunk_size",
            help="Number of bytes to read at a time. [default: %(default)s]",
            type=int,
            default=constants.CHUNK_SIZE,
            required=False,
        )

    def run(self, vars_args: dict):
        length = vars_args.get("length")
        if length is not None and length < 0:
            raise exceptions.MultiSeekInvalidArgumentError(
                f"length must not be negative, but got {length}"
            )

        offset = vars_args.get("offset", 0)
        output: Path | None = vars_args.get("output")

        with utils.open_concatenated(vars_args["source_paths"]) as stream:
            if offset < 0:
                stream.seek(offset, io.SEEK_END)
            else:
                stream.seek(offset, io.SEEK_SET)
            LOG.debug("Copying from position %d", stream.tell())

            if output is None:
                copied = utils.copy_range(
                    stream,
                    sys.stdout.buffer,
                    length=length,
                    chunk_size=vars_args["chunk_size"],
                )
                sys.stdout.buffer.flush()
            else:
                with output.open("wb") as fp:
                    copied = utils.copy_range(
                        stream,
                        fp,
                        length=length,
                        chunk_size=vars_args["chunk_size"],
                        desc=f"Writing {output.name}",
                    )

        LOG.debug("Copied %d bytes", copied)
