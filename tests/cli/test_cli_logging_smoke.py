from __future__ import annotations

import logging
from pathlib import Path

from symsize import cli


def test_cli_verbose_and_quiet_switch_levels(caplog, tmp_path: Path) -> None:
    symbols = tmp_path / "s.yaml"
    symbols.write_text(
        """
symbols:
  - {name: "A<int>", size: 4}
"""
    )

    with caplog.at_level(logging.DEBUG, logger="symsize"):
        cli.main(["--verbose", "groups", "--symbols", str(symbols)])
    assert any("Debug logging enabled" in r.message for r in caplog.records)

    # quiet suppresses info
    caplog.clear()
    with caplog.at_level(logging.INFO, logger="symsize"):
        cli.main(["--quiet", "groups", "--symbols", str(symbols)])
    assert not any(r.levelno == logging.INFO for r in caplog.records)
    logging.getLogger("symsize").setLevel(logging.INFO)
