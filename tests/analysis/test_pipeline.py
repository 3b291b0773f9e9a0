from __future__ import annotations

import logging

import pytest

from symsize.analysis import pipeline
from symsize.config import ToolchainConfig
from symsize.toolchain.exec import CommandFailedError, CommandResult

READELF_OUTPUT = """\
There are 4 section headers, starting at offset 0x1234:

Section Headers:
  [Nr] Name              Type            Addr     Off    Size   ES Flg Lk Inf Al
  [ 0]                   NULL            00000000 000000 000000 00      0   0  0
  [ 1] .text             PROGBITS        08000000 010000 000200 00  AX  0   0  4
  [ 2] .data             PROGBITS        20000000 020000 000040 00  WA  0   0  4
  [ 3] .comment          PROGBITS        00000000 020040 000012 01  MS  0   0  1
Key to Flags:
  W (write), A (alloc), X (execute), M (merge), S (strings), I (info),
"""

NM_OUTPUT = """\
08000000 00000010 T Vec<int>::push(int)
08000010 00000010 W Vec<int>::push(int)
08000020 00000008 T main
20000000 00000004 D counter
30000000 00000004 D stray
"""


@pytest.fixture
def elf_file(tmp_path):
    path = tmp_path / "firmware.elf"
    path.write_bytes(b"\x7fELF")
    return path


@pytest.fixture
def fake_tools(monkeypatch):
    calls = []

    def fake_run(command, args=(), **kwargs):
        calls.append((command, tuple(args), kwargs))
        stdout = READELF_OUTPUT if command.endswith("readelf") else NM_OUTPUT
        return CommandResult(
            command=command, args=tuple(args), stdout=stdout, stderr="", exit_code=0
        )

    monkeypatch.setattr(pipeline, "run_command", fake_run)
    return calls


def test_collect_symbols_runs_readelf_then_nm(elf_file, fake_tools):
    cfg = ToolchainConfig(prefix="xtensa-", timeout=5.0)
    symbols = pipeline.collect_symbols(elf_file, cfg)

    commands = [c[0] for c in fake_tools]
    assert commands == ["xtensa-readelf", "xtensa-nm"]
    assert fake_tools[0][1] == ("-S", "-W", str(elf_file.resolve()))
    assert fake_tools[1][1][-1] == str(elf_file.resolve())
    assert fake_tools[1][1][:-1] == cfg.nm_args
    assert all(c[2]["timeout"] == 5.0 and c[2]["check"] for c in fake_tools)

    assert [s.name for s in symbols] == [
        "Vec<int>::push(int)",
        "Vec<int>::push(int)",
        "main",
        "counter",
        "stray",
    ]
    assert [s.section_id for s in symbols] == [
        "sec_1",
        "sec_1",
        "sec_1",
        "sec_2",
        None,
    ]


def test_collect_symbols_logs_unplaced_symbols(elf_file, fake_tools, caplog):
    with caplog.at_level(logging.WARNING, logger="symsize"):
        pipeline.collect_symbols(elf_file)
    assert "Symbol stray at 0x30000000 does not fall within" in caplog.text


def test_analyze_template_groups_end_to_end(elf_file, fake_tools):
    groups = {g.id: g for g in pipeline.analyze_template_groups(elf_file)}

    vec = groups["Vec"]
    assert vec.is_template
    assert vec.totals.symbol_count == 2
    assert vec.totals.size_bytes == 32
    assert vec.totals.unique_size_bytes == 32
    assert groups["[non-template] main"].totals.size_bytes == 8


def test_missing_elf_raises_before_running_tools(tmp_path, fake_tools):
    with pytest.raises(FileNotFoundError):
        pipeline.collect_symbols(tmp_path / "missing.elf")
    assert fake_tools == []


def test_tool_failure_propagates(elf_file, monkeypatch):
    def failing_run(command, args=(), **kwargs):
        raise CommandFailedError(
            CommandResult(
                command=command,
                args=tuple(args),
                stdout="",
                stderr="readelf: Error: Not an ELF file",
                exit_code=1,
            )
        )

    monkeypatch.setattr(pipeline, "run_command", failing_run)
    with pytest.raises(CommandFailedError, match="Not an ELF file"):
        pipeline.collect_symbols(elf_file)
