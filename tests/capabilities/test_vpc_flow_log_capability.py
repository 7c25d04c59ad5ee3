from flowlog_tagger.capabilities.vpc_flow_log.capability import VpcFlowLogCapability
from flowlog_tagger.capabilities.vpc_flow_log.decoder import parse_log
from flowlog_tagger.core.aggregator import aggregate
from flowlog_tagger.core.lookup import build_lookup_table
from flowlog_tagger.core.report import render_report


class _FakeMCP:
    def __init__(self):
        self.tools = {}

    def tool(self):
        def deco(fn):
            self.tools[fn.__name__] = fn
            return fn
        return deco


def test_end_to_end_without_protocol_names(log_lines):
    records = parse_log("\n".join(log_lines), protocol_numbers={})
    table = build_lookup_table("80,6,web\n23,6,ssh")
    counts = aggregate(records, table)

    assert counts.tag_counts == {"untagged": 0, "web": 1, "ssh": 1}
    assert counts.port_protocol_counts == {"80,6": 1, "23,6": 1}


def test_end_to_end_with_protocol_names(log_lines):
    records = parse_log("\n".join(log_lines))
    table = build_lookup_table("80,TCP,web\n23,6,ssh")
    counts = aggregate(records, table)

    # 6 is translated to TCP, so the "23,6" row never matches
    assert counts.tag_counts == {"untagged": 1, "web": 1}
    assert counts.port_protocol_counts == {"80,tcp": 1, "23,tcp": 1}
    assert render_report(counts).startswith("Tag counts\nuntagged=1\nweb=1\n\n")


def test_capability_tag_updates_status(ctx, log_lines):
    cap = VpcFlowLogCapability()
    cap.register_tools(_FakeMCP(), ctx)

    out = cap.tag("\n".join(log_lines + ["garbage"]), "80,tcp,web\n")
    assert out["tag_counts"] == {"untagged": 1, "web": 1}
    assert out["port_protocol_counts"] == {"80,tcp": 1, "23,tcp": 1}
    assert out["report"].endswith("80,tcp=1\n23,tcp=1\n")

    status = cap.status()
    assert status == {"name": "vpc_flow_log", "runs": 1, "lines": 3, "parsed": 2, "dropped": 1}
    assert ctx.messages == ["vpc_flow_log: 2 records, 1 dropped, 1 lookup entries"]


def test_capability_tools_check_name(ctx, log_lines, tmp_path):
    mcp = _FakeMCP()
    cap = VpcFlowLogCapability()
    cap.register_tools(mcp, ctx)

    assert set(mcp.tools) == {"tag_flow_log", "tag_flow_log_files"}
    assert "error" in mcp.tools["tag_flow_log"]("netflow_udp", "", "")

    log_file = tmp_path / "flow.log"
    lookup_file = tmp_path / "lookup.csv"
    log_file.write_text("\n".join(log_lines))
    lookup_file.write_text("dstport,protocol,tag\n23,tcp,telnet\n")

    out = mcp.tools["tag_flow_log_files"](
        "vpc_flow_log", str(log_file), str(lookup_file), has_header=True
    )
    assert out["tag_counts"] == {"untagged": 1, "telnet": 1}
    assert cap.status()["runs"] == 1
