"""End-to-end runs of ``main`` with a recording runner in place of real processes."""

import pytest

from conftest import FakeRunner
from gilthub import main as main_module
from gilthub.main import main, setup_logger


@pytest.fixture
def fake_runner(monkeypatch, scratch_root):
    runner = FakeRunner()
    monkeypatch.setattr(main_module, "CommandRunner", lambda logger: runner)
    monkeypatch.setenv("GILTHUB_TEMP_ROOT", str(scratch_root))
    return runner


@pytest.fixture
def no_config(tmp_path):
    return ["--config", str(tmp_path / "absent.yaml")]


def test_archive_success(fake_runner, no_config, capsys):
    code = main(no_config + ["archive", "git@example.com:org/widget.git", "my-bucket/archives"])
    out = capsys.readouterr().out
    assert code == 0
    assert out.splitlines()[-1] == "Successfully archived widget!"
    assert "s3://my-bucket/archives/widget.tar.gz" in fake_runner.argv_for("copy archive to s3")


def test_restore_success(fake_runner, no_config, capsys):
    code = main(no_config + [
        "restore", "-p", "ops", "s3://my-bucket/archives/widget.tar.gz", "git@example.com:org/widget2.git",
    ])
    out = capsys.readouterr().out
    assert code == 0
    assert out.splitlines()[-1] == "Successfully restored widget.tar.gz!"
    assert fake_runner.argv_for("download")[-1] == "ops"
    assert fake_runner.argv_for("restore repository")[-1] == "git@example.com:org/widget2.git"


def test_stage_failure_still_exits_zero(fake_runner, no_config, capsys):
    fake_runner.statuses["clone"] = 128
    code = main(no_config + ["archive", "git@example.com:org/widget.git", "my-bucket"])
    out = capsys.readouterr().out
    assert code == 0
    assert out.splitlines()[-1] == "Error archiving git repository: Unable to clone repository."


def test_missing_executable_aborts_without_report(fake_runner, no_config, capsys):
    fake_runner.missing.add("un-compress")
    code = main(no_config + ["restore", "s3://b/widget.tar.gz", "git@example.com:org/w.git"])
    captured = capsys.readouterr()
    assert code == 1
    assert "Successfully" not in captured.out
    assert "Error restoring" not in captured.out
    assert "failed to un-compress" in captured.err


def test_bad_config_aborts(tmp_path, capsys):
    path = tmp_path / "gilthub.yaml"
    path.write_text("log_level: loud\n", encoding="utf-8")
    assert main(["--config", str(path), "archive", "url", "bucket"]) == 1
    assert "LOG_LEVEL" in capsys.readouterr().err


def test_usage_error_exits_2():
    with pytest.raises(SystemExit) as excinfo:
        main(["archive"])
    assert excinfo.value.code == 2


def test_setup_logger_writes_file(tmp_path):
    log_file = tmp_path / "gilthub.log"
    logger = setup_logger(str(log_file), "INFO")
    logger.info("[CLONE] hello")
    for handler in logger.handlers:
        handler.flush()
    assert "[INFO] [CLONE] hello" in log_file.read_text(encoding="utf-8")
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()
