from __future__ import annotations
from typing import Iterable, Mapping

from .models import UNTAGGED, CountTables, FlowRecord, join_key


def aggregate(records: Iterable[FlowRecord], lookup_table: Mapping[str, str]) -> CountTables:
    """
    Join flow records against the lookup table and count them.

    Each record lands in exactly one tag bucket and one port/protocol bucket.
    Records whose join key has no lookup entry count as "untagged".

    Both tables keep first-seen order, which is the order the report prints.
    """
    counts = CountTables()
    tag_counts = counts.tag_counts
    port_protocol_counts = counts.port_protocol_counts

    for record in records:
        key = join_key(record["dstport"], record["protocol"])
        tag = lookup_table.get(key, UNTAGGED)

        tag_counts[tag] = tag_counts.get(tag, 0) + 1
        port_protocol_counts[key] = port_protocol_counts.get(key, 0) + 1

    return counts
