import io

from stvmconf.cli import main
from stvmconf.model import default_boot
from stvmconf.store import read_boot, write_default

SIMPLE_CONF = """*GLOBLE
MACHINE="NODE1"
LOGNAME="node.log"
"""


def test_compile(tmp_path, capsys):
    source = tmp_path / "conf.txt"
    source.write_text(SIMPLE_CONF, encoding="utf-8")
    runtime = tmp_path / "rt.cfg"
    assert main(["--config", str(runtime), "compile", str(source)]) == 0
    assert "create completed successfully!!!" in capsys.readouterr().out
    assert read_boot(runtime).node == "NODE1"


def test_compile_missing_source(tmp_path, capsys):
    runtime = tmp_path / "rt.cfg"
    assert main(["--config", str(runtime), "compile", str(tmp_path / "none")]) == 1
    assert "error:" in capsys.readouterr().err
    assert not runtime.exists()


def test_default_and_show(tmp_path, capsys):
    runtime = tmp_path / "rt.cfg"
    assert main(["--config", str(runtime), "default"]) == 0
    assert read_boot(runtime) == default_boot()
    assert main(["--config", str(runtime), "show"]) == 0
    out = capsys.readouterr().out
    assert "MACHINE=STVM" in out
    assert "LOGNAME=stvm.log" in out


def test_show_missing(tmp_path):
    assert main(["--config", str(tmp_path / "none.cfg"), "show"]) == 1


def test_export_yes(tmp_path):
    runtime = tmp_path / "rt.cfg"
    write_default(runtime)
    out = tmp_path / "out.txt"
    out.write_text("old", encoding="utf-8")
    assert main(["--config", str(runtime), "export", str(out), "--yes"]) == 0
    assert out.read_text(encoding="utf-8").startswith("*GLOBLE\n")


def test_export_declined(tmp_path, monkeypatch):
    runtime = tmp_path / "rt.cfg"
    write_default(runtime)
    out = tmp_path / "out.txt"
    out.write_text("old", encoding="utf-8")
    monkeypatch.setattr("sys.stdin", io.StringIO("n\n"))
    assert main(["--config", str(runtime), "export", str(out)]) == 0
    assert out.read_text(encoding="utf-8") == "old"


def test_export_accepted_from_prompt(tmp_path, monkeypatch):
    runtime = tmp_path / "rt.cfg"
    write_default(runtime)
    out = tmp_path / "out.txt"
    out.write_text("old", encoding="utf-8")
    monkeypatch.setattr("sys.stdin", io.StringIO("Y\n"))
    assert main(["--config", str(runtime), "export", str(out)]) == 0
    assert 'MACHINE="STVM"' in out.read_text(encoding="utf-8")