from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Mapping, Optional

from flowlog_tagger.core.models import (
    FLOW_LOG_FIELDS_DEFAULT,
    Buffer,
    FlowRecord,
    split_lines,
)
from flowlog_tagger.core.protocols import PROTOCOL_NUMBERS, ProtocolNumber, translate_protocol

# References
# VPC flow log records, default format (version 2)
# https://docs.aws.amazon.com/vpc/latest/userguide/flow-log-records.html

logger = logging.getLogger(__name__)


@dataclass
class DecodeResult:
    """
    Parsed records plus line counters for one log buffer.
    """

    records: List[FlowRecord] = field(default_factory=list)
    lines: int = 0

    @property
    def dropped(self) -> int:
        return self.lines - len(self.records)


def parse_line(
    line: str,
    fields: List[str] = FLOW_LOG_FIELDS_DEFAULT,
    protocol_numbers: Mapping[int, ProtocolNumber] = PROTOCOL_NUMBERS,
) -> Optional[FlowRecord]:
    """
    Parse one space separated flow log line into a FlowRecord.

    Returns None when the token count does not match the field layout.
    The protocol number is swapped for its IANA keyword when known.
    """
    parts = line.split()

    if len(parts) != len(fields):
        logger.warning("skipping flow log line that is not in default format: %r", line)
        return None

    record: FlowRecord = {}
    for name, value in zip(fields, parts):
        if name == "protocol":
            value = translate_protocol(value, protocol_numbers)
        record[name] = value
    return record


def decode_flow_log(
    buf: Buffer,
    fields: List[str] = FLOW_LOG_FIELDS_DEFAULT,
    protocol_numbers: Mapping[int, ProtocolNumber] = PROTOCOL_NUMBERS,
) -> DecodeResult:
    result = DecodeResult()

    for line in split_lines(buf):
        result.lines += 1
        record = parse_line(line, fields, protocol_numbers)
        if record is not None:
            result.records.append(record)

    return result


def parse_log(
    buf: Buffer,
    fields: List[str] = FLOW_LOG_FIELDS_DEFAULT,
    protocol_numbers: Mapping[int, ProtocolNumber] = PROTOCOL_NUMBERS,
) -> List[FlowRecord]:
    """
    Parse a whole flow log buffer.

    Lines that do not match the default format are skipped, the rest come
    back in file order.
    """
    return decode_flow_log(buf, fields, protocol_numbers).records
