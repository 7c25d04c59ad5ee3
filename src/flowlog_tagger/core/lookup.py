from __future__ import annotations
import logging
from typing import List, Optional

from .models import (
    LOOKUP_FIELDS_DEFAULT,
    Buffer,
    LookupEntry,
    LookupTable,
    join_key,
    split_lines,
)

logger = logging.getLogger(__name__)


def parse_lookup_line(
    line: str, fields: List[str] = LOOKUP_FIELDS_DEFAULT
) -> Optional[LookupEntry]:
    """
    Parse one "dstport,protocol,tag" row.

    Returns None for rows with the wrong number of fields or an empty field.
    Both cases are logged and the caller just moves on.
    """
    parts = line.strip().split(",")

    if len(parts) != len(fields):
        logger.warning("skipping lookup condition that is not in default format: %r", line)
        return None

    if any(p == "" for p in parts):
        logger.warning("skipping lookup condition with empty values: %r", line)
        return None

    return LookupEntry(key=join_key(parts[0], parts[1]), value=parts[2])


def _is_header(line: str, fields: List[str]) -> bool:
    return line.strip().lower() == ",".join(fields)


def build_lookup_table(
    buf: Buffer,
    fields: List[str] = LOOKUP_FIELDS_DEFAULT,
    has_header: bool = False,
) -> LookupTable:
    """
    Build the join key -> tag table from lookup CSV text.

    Rows are processed in order and a repeated key overwrites the earlier
    tag. Malformed rows are skipped, see parse_lookup_line.

    has_header
      Skip the first line when it is the "dstport,protocol,tag" header.
    """
    lines = split_lines(buf)
    if has_header and lines and _is_header(lines[0], fields):
        logger.debug("skipping lookup header: %r", lines[0])
        lines = lines[1:]

    table: LookupTable = {}
    for line in lines:
        entry = parse_lookup_line(line, fields)
        if entry is not None:
            table[entry.key] = entry.value
    return table
