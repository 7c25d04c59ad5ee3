from click.testing import CliRunner

from flowlog_tagger.cli.run_report import main

LOG_TEXT = (
    "2 123456789012 eni-abc 10.0.0.1 10.0.0.2 443 80 6 10 1000 1610000000 1610000010 ACCEPT OK\n"
    "2 123456789012 eni-abc 10.0.0.1 10.0.0.2 22 23 6 5 500 1610000000 1610000010 REJECT OK\n"
    "not a flow log line\n"
    "2 123456789012 eni-abc 10.0.0.1 10.0.0.2 53211 53 17 2 160 1610000000 1610000010 ACCEPT OK\n"
)
LOOKUP_TEXT = "80,tcp,web\n23,TCP,telnet\n"

EXPECTED_REPORT = (
    "Tag counts\n"
    "untagged=1\n"
    "web=1\n"
    "telnet=1\n"
    "\n"
    "Dest. Port, Protocol counts\n"
    "80,tcp=1\n"
    "23,tcp=1\n"
    "53,udp=1\n"
)


def _write_inputs(directory, log_name="example.log", lookup_name="example.csv", out_name="processed.txt"):
    (directory / log_name).write_text(LOG_TEXT)
    (directory / lookup_name).write_text(LOOKUP_TEXT)
    (directory / out_name).write_text("")
    return directory / log_name, directory / lookup_name, directory / out_name


def test_report_with_explicit_paths(tmp_path):
    log_file, lookup_file, out_file = _write_inputs(tmp_path, "flow.log", "tags.csv", "out.txt")

    result = CliRunner().invoke(
        main,
        ["--logfile", str(log_file), "--lookup-file", str(lookup_file), "--output-file", str(out_file)],
    )

    assert result.exit_code == 0, result.output
    assert out_file.read_text() == EXPECTED_REPORT


def test_report_with_default_paths(tmp_path, monkeypatch):
    _, _, out_file = _write_inputs(tmp_path)
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(main, [])

    assert result.exit_code == 0, result.output
    assert out_file.read_text() == EXPECTED_REPORT


def test_report_paths_from_environment(tmp_path):
    log_file, lookup_file, out_file = _write_inputs(tmp_path, "a.log", "b.csv", "c.txt")

    result = CliRunner().invoke(
        main,
        [],
        env={
            "FLOWLOG_LOGFILE": str(log_file),
            "FLOWLOG_LOOKUP_FILE": str(lookup_file),
            "FLOWLOG_OUTPUT_FILE": str(out_file),
        },
    )

    assert result.exit_code == 0, result.output
    assert out_file.read_text() == EXPECTED_REPORT


def test_skip_header_flag(tmp_path):
    log_file, lookup_file, out_file = _write_inputs(tmp_path, "flow.log", "tags.csv", "out.txt")
    lookup_file.write_text("dstport,protocol,tag\n" + LOOKUP_TEXT)

    result = CliRunner().invoke(
        main,
        [
            "--logfile", str(log_file),
            "--lookup-file", str(lookup_file),
            "--output-file", str(out_file),
            "--skip-header",
        ],
    )

    assert result.exit_code == 0, result.output
    assert out_file.read_text() == EXPECTED_REPORT


def test_missing_logfile_fails(tmp_path):
    _, lookup_file, out_file = _write_inputs(tmp_path)

    result = CliRunner().invoke(
        main,
        [
            "--logfile", str(tmp_path / "missing.log"),
            "--lookup-file", str(lookup_file),
            "--output-file", str(out_file),
        ],
    )

    assert result.exit_code != 0
    assert out_file.read_text() == ""


def test_missing_output_file_fails(tmp_path):
    log_file, lookup_file, _ = _write_inputs(tmp_path)
    out_file = tmp_path / "not-created.txt"

    result = CliRunner().invoke(
        main,
        ["--logfile", str(log_file), "--lookup-file", str(lookup_file), "--output-file", str(out_file)],
    )

    assert result.exit_code != 0
    assert not out_file.exists()


def test_directory_is_not_a_lookup_file(tmp_path):
    log_file, _, out_file = _write_inputs(tmp_path)

    result = CliRunner().invoke(
        main,
        ["--logfile", str(log_file), "--lookup-file", str(tmp_path), "--output-file", str(out_file)],
    )

    assert result.exit_code != 0


def test_help():
    result = CliRunner().invoke(main, ["--help"])

    assert result.exit_code == 0
    assert "--lookup-file" in result.output
    assert "--output-file" in result.output


def test_undecodable_log_line_is_skipped(tmp_path):
    log_file, lookup_file, out_file = _write_inputs(tmp_path)
    good = LOG_TEXT.splitlines()[0].encode()
    log_file.write_bytes(good + b"\n\xff\xfe garbage\n" + good + b"\n")

    result = CliRunner().invoke(
        main,
        ["--logfile", str(log_file), "--lookup-file", str(lookup_file), "--output-file", str(out_file)],
    )

    assert result.exit_code == 0, result.output
    assert out_file.read_text() == (
        "Tag counts\n"
        "untagged=0\n"
        "web=2\n"
        "\n"
        "Dest. Port, Protocol counts\n"
        "80,tcp=2\n"
    )
