from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Union

# Default VPC flow log (version 2) field layout, in record order.
FLOW_LOG_FIELDS_DEFAULT: List[str] = [
    "version",
    "account-id",
    "interface-id",
    "srcaddr",
    "dstaddr",
    "srcport",
    "dstport",
    "protocol",
    "packets",
    "bytes",
    "start",
    "end",
    "action",
    "log-status",
]

LOOKUP_FIELDS_DEFAULT: List[str] = ["dstport", "protocol", "tag"]

UNTAGGED = "untagged"

# One parsed flow log line, field name -> raw (or translated) token.
FlowRecord = Dict[str, str]

# Join key -> tag.
LookupTable = Dict[str, str]

# Key -> count, insertion ordered.
CountTable = Dict[str, int]

Buffer = Union[str, bytes]


def join_key(dstport: str, protocol: str) -> str:
    """
    Key shared by the lookup table and the aggregator.

    Lower-casing both parts makes the join case-insensitive, so a lookup row
    for "80,tcp" matches a flow whose protocol 6 translated to "TCP".
    """
    return f"{dstport},{protocol}".lower()


def split_lines(buf: Buffer) -> List[str]:
    """
    Trim a whole input buffer and split it on newlines only.

    An empty or whitespace-only buffer has no lines. Bytes that are not valid
    UTF-8 become U+FFFD, so a damaged line is dropped by the field checks
    instead of failing the whole buffer.
    """
    if isinstance(buf, bytes):
        buf = buf.decode("utf-8", errors="replace")
    buf = buf.strip()
    if not buf:
        return []
    return buf.split("\n")


@dataclass
class LookupEntry:
    """
    One accepted lookup CSV row.

    key
      join_key(dstport, protocol)

    value
      The tag, exactly as written in the CSV.
    """

    key: str
    value: str


@dataclass
class CountTables:
    """
    Result of one aggregation pass.

    tag_counts
      Tag -> number of flow records. Always starts with "untagged" = 0.

    port_protocol_counts
      Join key -> number of flow records.
    """

    tag_counts: CountTable = field(default_factory=lambda: {UNTAGGED: 0})
    port_protocol_counts: CountTable = field(default_factory=dict)

    def total(self) -> int:
        return sum(self.port_protocol_counts.values())
