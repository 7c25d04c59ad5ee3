from __future__ import annotations
from typing import List

from .models import CountTable, CountTables

TAG_COUNTS_HEADER = "Tag counts"
PORT_PROTOCOL_COUNTS_HEADER = "Dest. Port, Protocol counts"


def _section(header: str, table: CountTable) -> List[str]:
    return [header] + [f"{key}={count}" for key, count in table.items()]


def render_report(counts: CountTables) -> str:
    """
    Plain text report, tag counts first, then port/protocol counts.

    Example:
      Tag counts
      untagged=0
      web=1

      Dest. Port, Protocol counts
      80,tcp=1
    """
    lines = _section(TAG_COUNTS_HEADER, counts.tag_counts)
    lines.append("")
    lines += _section(PORT_PROTOCOL_COUNTS_HEADER, counts.port_protocol_counts)
    return "\n".join(lines) + "\n"
