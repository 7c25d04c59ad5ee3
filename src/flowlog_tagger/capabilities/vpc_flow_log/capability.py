from __future__ import annotations
from pathlib import Path
from typing import Any, Dict, Optional

from flowlog_tagger.core.aggregator import aggregate
from flowlog_tagger.core.capability_base import Capability, CapabilityContext
from flowlog_tagger.core.lookup import build_lookup_table
from flowlog_tagger.core.models import Buffer
from flowlog_tagger.core.protocols import PROTOCOL_NUMBERS
from flowlog_tagger.core.report import render_report
from .decoder import decode_flow_log


class VpcFlowLogCapability:
    """
    VPC flow log (default version 2 format) capability.

    Each call is a full, independent run:
      build the lookup table
      decode the log text into FlowRecord dicts
      aggregate tag and port/protocol counts
      render the text report

    Nothing is kept between calls except the status counters.
    """

    name = "vpc_flow_log"

    def __init__(self):
        self._ctx: Optional[CapabilityContext] = None

        self._runs = 0
        self._lines = 0
        self._parsed = 0
        self._dropped = 0

    def register_tools(self, mcp: Any, ctx: CapabilityContext) -> None:
        self._ctx = ctx

        @mcp.tool()
        def tag_flow_log(
            capability: str, log_text: str, lookup_text: str, has_header: bool = False
        ) -> Dict[str, Any]:
            if capability != self.name:
                return {"error": f"wrong capability, expected {self.name}"}
            return self.tag(log_text, lookup_text, has_header=has_header)

        @mcp.tool()
        def tag_flow_log_files(
            capability: str, log_file: str, lookup_file: str, has_header: bool = False
        ) -> Dict[str, Any]:
            if capability != self.name:
                return {"error": f"wrong capability, expected {self.name}"}
            return self.tag_files(log_file, lookup_file, has_header=has_header)

    def tag(self, log_buf: Buffer, lookup_buf: Buffer, has_header: bool = False) -> Dict[str, Any]:
        """
        Run the tagging pipeline over in-memory buffers.
        """
        protocol_numbers = self._ctx.protocol_numbers if self._ctx else PROTOCOL_NUMBERS

        table = build_lookup_table(lookup_buf, has_header=has_header)
        decoded = decode_flow_log(log_buf, protocol_numbers=protocol_numbers)
        counts = aggregate(decoded.records, table)

        self._runs += 1
        self._lines += decoded.lines
        self._parsed += len(decoded.records)
        self._dropped += decoded.dropped

        if self._ctx:
            self._ctx.log(
                f"{self.name}: {len(decoded.records)} records, "
                f"{decoded.dropped} dropped, {len(table)} lookup entries"
            )

        return {
            "tag_counts": counts.tag_counts,
            "port_protocol_counts": counts.port_protocol_counts,
            "report": render_report(counts),
        }

    def tag_files(self, log_file: str, lookup_file: str, has_header: bool = False) -> Dict[str, Any]:
        lookup_buf = Path(lookup_file).read_bytes()
        log_buf = Path(log_file).read_bytes()
        return self.tag(log_buf, lookup_buf, has_header=has_header)

    def status(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "runs": self._runs,
            "lines": self._lines,
            "parsed": self._parsed,
            "dropped": self._dropped,
        }


def build_capability() -> Capability:
    return VpcFlowLogCapability()
