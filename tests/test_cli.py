import logging

import pytest

from objcli.main import main

MODEL = "# box\nv 0 0 0\nv 2 2 4\nvn 0 0 1\nf 1 2 2\n"


@pytest.fixture
def model(tmp_path):
    p = tmp_path / "box.obj"
    p.write_text(MODEL, encoding="utf-8", newline="")
    return p


def test_convert_to_output_dir(tmp_path, model):
    out_dir = tmp_path / "out"
    rc = main(["convert", "--scale", "2", "--align", "BottomCenter", "-o", str(out_dir), str(model)])
    assert rc == 0
    assert (out_dir / "box.obj").read_text() == "# box\nv -2 -2 0\nv 2 2 8\nvn 0 0 1\nf 1 2 2"
    assert model.read_text() == MODEL


def test_convert_in_place(model):
    rc = main(["convert", "--inplace", str(model)])
    assert rc == 0
    assert model.read_text() == MODEL.rstrip("\n")


def test_convert_requires_output(model, capsys):
    rc = main(["convert", str(model)])
    assert rc == 1
    out = capsys.readouterr().out
    assert "output path" in out
    assert "--help" in out


def test_convert_rejects_bad_scale(model, capsys):
    rc = main(["convert", "--inplace", "--scale", "0", str(model)])
    assert rc == 1
    assert "invalid scale factor" in capsys.readouterr().out
    assert model.read_text() == MODEL


def test_convert_rejects_bad_alignment(model):
    assert main(["convert", "--inplace", "--align", "Top", str(model)]) == 1


def test_convert_missing_input(tmp_path, capsys):
    rc = main(["convert", "--inplace", str(tmp_path / "nope.obj")])
    assert rc == 1
    assert "error finding source" in capsys.readouterr().out


def test_convert_batch_failure_exit_code(tmp_path, model, capsys):
    bad = tmp_path / "bad.obj"
    bad.write_text("v 1 2 3\nv 1 2 x\n")
    rc = main(["convert", "--inplace", "--scale", "3", str(bad), str(model)])
    assert rc == 1
    assert "line 2" in capsys.readouterr().out
    assert bad.read_text() == "v 1 2 3\nv 1 2 x\n"
    assert model.read_text().startswith("# box\nv 0 0 0\nv 6 6 12")


def test_summary(model, capsys):
    assert main(["summary", str(model)]) == 0
    out = capsys.readouterr().out
    assert "(0, 0, 0)" in out
    assert "(2, 2, 4)" in out


def test_verify_roundtrip(model, capsys):
    assert main(["verify-roundtrip", str(model)]) == 0
    assert "STABLE" in capsys.readouterr().out


def test_verify_roundtrip_rejects_extension(tmp_path):
    p = tmp_path / "m.stl"
    p.write_text("solid\n")
    assert main(["verify-roundtrip", str(p)]) == 1


def test_help_exits():
    with pytest.raises(SystemExit) as ei:
        main(["--help"])
    assert ei.value.code == 0


def test_convert_reports_cause_of_failed_file(tmp_path, model, capsys):
    out_dir = tmp_path / "out"
    (out_dir / "box.obj").mkdir(parents=True)
    rc = main(["convert", "-o", str(out_dir), str(model)])
    assert rc == 1
    out = capsys.readouterr().out
    assert "error writing" in out
    assert "Is a directory" in out


def test_verbose_flag_drives_logging(model):
    assert main(["convert", "--inplace", str(model)]) == 0
    assert logging.getLogger().level == logging.WARNING
    assert main(["convert", "-v", "--inplace", str(model)]) == 0
    assert logging.getLogger().level == logging.DEBUG
