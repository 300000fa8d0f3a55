from __future__ import annotations

import pytest

from clichess.cli.main import build_parser, main


def test_perft_command_prints_node_count(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["perft", "--depth", "2"]) == 0
    out = capsys.readouterr().out
    assert "nodes=400" in out
    assert "depth=2" in out


def test_perft_command_accepts_placement(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["perft", "--placement", "4k3/8/8/8/8/8/8/4K3", "--depth", "1"])
    assert code == 0
    assert "nodes=5" in capsys.readouterr().out


def test_local_defaults() -> None:
    args = build_parser().parse_args(["local"])
    assert args.white == "human"
    assert args.black == "human"
    assert args.max_plies is None


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
