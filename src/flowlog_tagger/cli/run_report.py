from __future__ import annotations
import logging
from pathlib import Path

import click

from flowlog_tagger.capabilities.vpc_flow_log.decoder import parse_log
from flowlog_tagger.core.aggregator import aggregate
from flowlog_tagger.core.lookup import build_lookup_table
from flowlog_tagger.core.report import render_report
from flowlog_tagger.logging_setup import setup_logging

logger = logging.getLogger(__name__)

# Relative paths resolve against the current working directory.
DEFAULT_LOGFILE = "example.log"
DEFAULT_LOOKUP_FILE = "example.csv"
DEFAULT_OUTPUT_FILE = "processed.txt"

_existing_file = click.Path(exists=True, dir_okay=False, readable=True, path_type=Path)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--logfile",
    type=_existing_file,
    default=DEFAULT_LOGFILE,
    show_default=True,
    envvar="FLOWLOG_LOGFILE",
    help="Flow log file to process.",
)
@click.option(
    "--lookup-file",
    type=_existing_file,
    default=DEFAULT_LOOKUP_FILE,
    show_default=True,
    envvar="FLOWLOG_LOOKUP_FILE",
    help="dstport,protocol,tag lookup CSV.",
)
@click.option(
    "--output-file",
    type=click.Path(exists=True, dir_okay=False, writable=True, path_type=Path),
    default=DEFAULT_OUTPUT_FILE,
    show_default=True,
    envvar="FLOWLOG_OUTPUT_FILE",
    help="Existing file the report is written to.",
)
@click.option(
    "--skip-header",
    is_flag=True,
    default=False,
    help="Ignore a leading dstport,protocol,tag header row in the lookup file.",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="INFO",
    show_default=True,
    envvar="FLOWLOG_LOG_LEVEL",
)
def main(logfile: Path, lookup_file: Path, output_file: Path, skip_header: bool, log_level: str) -> None:
    """
    Count flow log records per tag and per destination port/protocol.
    """
    setup_logging(log_level)

    try:
        logger.info("reading lookup file %s", lookup_file.resolve())
        lookup_buf = lookup_file.read_bytes()

        logger.info("reading log file %s", logfile.resolve())
        log_buf = logfile.read_bytes()
    except OSError as e:
        logger.error("failed to read input: %s", e)
        raise SystemExit(1)

    table = build_lookup_table(lookup_buf, has_header=skip_header)
    records = parse_log(log_buf)
    counts = aggregate(records, table)

    try:
        logger.info("writing results to %s", output_file.resolve())
        output_file.write_text(render_report(counts), encoding="utf-8")
    except OSError as e:
        logger.error("failed to write report: %s", e)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
