import json
import textwrap

import pytest

from litscript import lits_cc, run_game


def write_source(tmp_path, source: str):
    path = tmp_path / "game.lits"
    path.write_text(textwrap.dedent(source), encoding="utf-8")
    return path


def test_lits_cc_writes_bytecode(tmp_path):
    source = write_source(tmp_path, 'gamedef "Demo"\n')
    output = tmp_path / "game.litc"

    assert lits_cc.main([str(source), str(output)]) == 0
    assert output.read_bytes() == b"\x00\x01\x04\x04Demo"


def test_lits_cc_usage_error_exits_with_one(capsys):
    with pytest.raises(SystemExit) as exc:
        lits_cc.main(["only-one-argument"])

    assert exc.value.code == 1
    assert "usage: lits-cc" in capsys.readouterr().err


def test_lits_cc_reports_failing_line(tmp_path, capsys):
    source = write_source(
        tmp_path,
        """\
        def ok 1
        nope 2
        """,
    )

    assert lits_cc.main([str(source), str(tmp_path / "out.litc")]) == 1
    assert "Error occurred on line 1: Unknown command: nope" in capsys.readouterr().err


def test_lits_cc_missing_input(tmp_path, capsys):
    assert lits_cc.main([str(tmp_path / "absent.lits"), str(tmp_path / "out.litc")]) == 1
    assert "Unable to read" in capsys.readouterr().err


def test_lit_prints_game_summary(tmp_path, capsys):
    source = write_source(
        tmp_path,
        """
        gamedef "Runner"
        create_tex img 2 2 (1, 2, 3)
        log "ready" ()
        """,
    )
    output = tmp_path / "game.litc"
    assert lits_cc.main([str(source), str(output)]) == 0
    capsys.readouterr()

    assert run_game.main([str(output), "--frames", "3"]) == 0

    out = capsys.readouterr().out
    assert out.startswith("ready\n")
    summary = json.loads(out[len("ready\n") :])
    assert summary["name"] == "Runner"
    assert summary["frame"] == 3
    assert summary["materials"][0]["resident"] is True


def test_lit_reports_fatal_error(tmp_path, capsys):
    data_file = tmp_path / "bad.litc"
    data_file.write_bytes(b"\x00\x63")

    assert run_game.main([str(data_file)]) == 1
    assert "A fatal error occurred:" in capsys.readouterr().err


def test_lits_cc_rejects_source_that_is_not_utf8(tmp_path, capsys):
    source = tmp_path / "game.lits"
    source.write_bytes(b'gamedef "\xff"\n')

    assert lits_cc.main([str(source), str(tmp_path / "out.litc")]) == 1
    assert "Unable to read" in capsys.readouterr().err


def test_lits_cc_writes_nothing_when_compilation_fails(tmp_path):
    source = write_source(tmp_path, "nope 2\n")
    output = tmp_path / "out.litc"

    assert lits_cc.main([str(source), str(output)]) == 1
    assert not output.exists()


def test_lits_cc_reports_unwritable_output(tmp_path, capsys):
    source = write_source(tmp_path, 'gamedef "Demo"\n')

    assert lits_cc.main([str(source), str(tmp_path / "missing" / "out.litc")]) == 1
    assert "Unable to write" in capsys.readouterr().err


def test_lit_reports_missing_data_file(tmp_path, capsys):
    assert run_game.main([str(tmp_path / "absent.litc")]) == 1
    assert "A fatal error occurred: An IO error occurred" in capsys.readouterr().err
