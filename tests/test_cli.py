from __future__ import annotations

import textwrap
from pathlib import Path

import usfx_tsv.cli as cli_module
from usfx_tsv.cli import cli

DOCUMENT = """
<usfx>
<book id="GEN">
<s>The Creation</s>
<p><v bcv="GEN.1.1"/><w>In</w> <w>the</w> <w>beginning</w><ve/>
<v bcv="GEN.1"/>lost<ve/>
<v bcv="GEN.1.2"/>The earth was empty<f>Or, formless</f><ve/></p>
</book>
</usfx>
"""

EXPECTED = "GEN\t1\t1\tIn the beginning\nGEN\t1\t2\tThe earth was empty\n"


def _write(tmp_path: Path, filename: str, content: str) -> Path:
    path = tmp_path / filename
    path.write_text(textwrap.dedent(content).lstrip(), encoding="utf-8")
    return path


def _write_pyproject(base: Path, body: str) -> Path:
    path = base / "pyproject.toml"
    path.write_text(textwrap.dedent(body).lstrip(), encoding="utf-8")
    return path


def test_cli_writes_tsv_to_stdout(cli_runner, tmp_path):
    target = _write(tmp_path, "genesis.xml", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == EXPECTED


def test_cli_writes_tsv_to_file(cli_runner, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    target = _write(tmp_path, "genesis.xml", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target), "-o", "genesis.tsv"])

    assert result.exit_code == 0
    assert result.output == ""
    assert (tmp_path / "genesis.tsv").read_text(encoding="utf-8") == EXPECTED


def test_cli_dash_output_means_stdout(cli_runner, tmp_path):
    target = _write(tmp_path, "genesis.xml", DOCUMENT)

    result = cli_runner.invoke(cli, ["--output", "-", str(target)])

    assert result.exit_code == 0
    assert result.output == EXPECTED


def test_cli_accepts_usfx_extension(cli_runner, tmp_path):
    target = _write(tmp_path, "genesis.usfx", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == EXPECTED


def test_cli_rejects_non_xml_files(cli_runner, tmp_path):
    target = _write(tmp_path, "genesis.txt", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "not a USFX file" in result.output


def test_cli_rejects_missing_files(cli_runner, tmp_path):
    result = cli_runner.invoke(cli, [str(tmp_path / "missing.xml")])

    assert result.exit_code != 0
    assert "does not exist" in result.output


def test_cli_reports_malformed_markup(cli_runner, tmp_path):
    target = _write(tmp_path, "broken.xml", '<usfx><v bcv="GEN.1.1"/><w>In</v></usfx>')

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "broken.xml" in result.output
    assert "Error" in result.output


def test_cli_no_trim_text_keeps_line_break_markers(cli_runner, tmp_path):
    target = _write(
        tmp_path,
        "psalm.xml",
        '<usfx><v bcv="PSA.23.1"/>my shepherd;<p/>\n<p/>I lack nothing.<ve/></usfx>',
    )

    result = cli_runner.invoke(cli, ["--no-trim-text", str(target)])

    assert result.exit_code == 0
    assert result.output == "PSA\t23\t1\tmy shepherd;^I lack nothing.\n"


def test_cli_debug_reports_diagnostics(cli_runner, tmp_path):
    target = _write(tmp_path, "genesis.xml", DOCUMENT)

    result = cli_runner.invoke(cli, ["--debug", str(target)])

    assert result.exit_code == 0
    assert "Skipping verse with malformed reference 'GEN.1'" in result.output
    assert "Wrote 2 records" in result.output


def test_cli_reads_config_from_pyproject(cli_runner, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.usfx-tsv]
        debug_output = true
        """,
    )
    target = _write(tmp_path, "genesis.xml", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert "Wrote 2 records" in result.output


def test_cli_flags_override_config(cli_runner, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.usfx-tsv]
        debug_output = true
        """,
    )
    target = _write(tmp_path, "genesis.xml", DOCUMENT)

    result = cli_runner.invoke(cli, ["--no-debug", str(target)])

    assert result.exit_code == 0
    assert result.output == EXPECTED


def test_cli_rejects_invalid_config(cli_runner, tmp_path):
    _write_pyproject(
        tmp_path,
        """
        [tool.usfx-tsv]
        buffer_size = 0
        """,
    )
    target = _write(tmp_path, "genesis.xml", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code != 0
    assert "buffer_size" in result.output


def test_cli_rejects_invalid_buffer_size_flag(cli_runner, tmp_path):
    target = _write(tmp_path, "genesis.xml", DOCUMENT)

    result = cli_runner.invoke(cli, ["--buffer-size", "-1", str(target)])

    assert result.exit_code != 0
    assert "buffer_size" in result.output


def test_cli_rejects_invalid_buffer_size_env(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv("USFX_TSV_BUFFER_SIZE", "huge")
    target = _write(tmp_path, "genesis.xml", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 1
    assert "USFX_TSV_BUFFER_SIZE" in result.output


def test_cli_buffer_size_env_does_not_change_output(cli_runner, tmp_path, monkeypatch):
    monkeypatch.setenv("USFX_TSV_BUFFER_SIZE", "7")
    target = _write(tmp_path, "genesis.xml", DOCUMENT)

    result = cli_runner.invoke(cli, [str(target)])

    assert result.exit_code == 0
    assert result.output == EXPECTED


def test_cli_public_api():
    assert cli_module.__all__ == ["cli"]
