import json
import sys

import pytest

from filelimit.cli.cli_cleanup import split_noui
from filelimit.main import main


def _remaining(directory):
    return sorted(p.name for p in directory.iterdir() if p.is_file())


def test_cleanup_positional(target_dir, log_path, make_files, capsys):
    names = make_files(10)

    code = main([str(target_dir), "5", "--log-file", str(log_path)])

    assert code == 0
    assert _remaining(target_dir) == names[5:]
    out = capsys.readouterr().out
    assert "Current file count: 10" in out
    assert "Files deleted: 5" in log_path.read_text()


def test_cleanup_under_limit(target_dir, log_path, make_files):
    names = make_files(5)

    assert main([str(target_dir), "10", "--log-file", str(log_path)]) == 0
    assert _remaining(target_dir) == names


def test_quiet_writes_file_only(target_dir, log_path, make_files, capsys):
    make_files(3)

    assert main([str(target_dir), "1", "--quiet", "--log-file", str(log_path)]) == 0

    assert capsys.readouterr().out == ""
    assert "Files deleted: 2" in log_path.read_text()


@pytest.mark.parametrize("token", ["noui", "NoUI"])
def test_noui_token_silences_everything(tmp_path, target_dir, make_files, capsys, token):
    make_files(3)

    assert main([str(target_dir), "1", token]) == 0

    assert _remaining(target_dir) == ["testfile_002.txt"]
    assert capsys.readouterr().out == ""
    assert not (tmp_path / "_default_logs").exists() or not any(
        (tmp_path / "_default_logs").iterdir()
    )


def test_default_log_goes_to_logs_dir(tmp_path, target_dir, make_files):
    make_files(2)

    assert main([str(target_dir), "1", "--quiet"]) == 0

    logs = list((tmp_path / "_default_logs").glob("FileLimitService_*.log"))
    assert len(logs) == 1
    assert "Deleted: testfile_000.txt" in logs[0].read_text()


def test_dry_run(target_dir, log_path, make_files):
    names = make_files(4)

    assert main([str(target_dir), "1", "--dry-run", "--log-file", str(log_path)]) == 0

    assert _remaining(target_dir) == names
    assert "Would delete: testfile_000.txt" in log_path.read_text()


@pytest.mark.parametrize("count", ["abc", "-3", "1.5", "1_000", "\u0663", " "])
def test_bad_count_is_rejected(target_dir, capsys, count):
    assert main([str(target_dir), count]) == 1
    assert "max-file-count must be a non-negative integer" in capsys.readouterr().out


def test_missing_directory_is_rejected(tmp_path, capsys):
    assert main([str(tmp_path / "missing"), "3"]) == 1
    assert "does not exist" in capsys.readouterr().out


def test_no_arguments_prints_usage(capsys):
    assert main([]) == 1
    assert "Usage:" in capsys.readouterr().out


def test_only_directory_is_an_argument_error(target_dir, capsys):
    assert main([str(target_dir)]) == 1
    out = capsys.readouterr().out
    assert out.startswith("Error:")
    assert "Usage:" in out


def test_config_mode(tmp_path, target_dir, log_path, make_files):
    names = make_files(6)
    cfg = tmp_path / "config.json"
    cfg.write_text(
        json.dumps({"targetDirectory": str(target_dir), "maxFileCount": 2}),
        encoding="utf-8",
    )

    assert main(["--config", str(cfg), "--log-file", str(log_path)]) == 0
    assert _remaining(target_dir) == names[4:]


def test_config_can_disable_logging(tmp_path, target_dir, log_path, make_files, capsys):
    make_files(3)
    cfg = tmp_path / "config.json"
    cfg.write_text(
        json.dumps(
            {"targetDirectory": str(target_dir), "maxFileCount": 1, "enableLogging": False}
        ),
        encoding="utf-8",
    )

    assert main(["--config", str(cfg), "--log-file", str(log_path)]) == 0

    assert len(_remaining(target_dir)) == 1
    assert not log_path.exists()
    assert capsys.readouterr().out == ""


def test_config_validation_error_exits_1(tmp_path, capsys):
    cfg = tmp_path / "config.json"
    cfg.write_text('{"targetDirectory": "", "maxFileCount": 1}', encoding="utf-8")

    assert main(["--config", str(cfg)]) == 1
    assert "targetDirectory cannot be empty" in capsys.readouterr().out


def test_missing_config_exits_1(tmp_path, capsys):
    assert main(["--config", str(tmp_path / "none.json")]) == 1
    assert "Configuration file not found" in capsys.readouterr().out


def test_config_and_positionals_conflict(tmp_path, target_dir, capsys):
    cfg = tmp_path / "config.json"
    cfg.write_text("{}", encoding="utf-8")

    assert main(["--config", str(cfg), str(target_dir), "3"]) == 1


def test_deletion_failure_still_exits_0(target_dir, log_path, make_files, monkeypatch):
    from pathlib import Path

    names = make_files(3)
    real_unlink = Path.unlink

    def flaky_unlink(self, *args, **kwargs):
        if self.name == names[0]:
            raise PermissionError(13, "Permission denied", str(self))
        return real_unlink(self, *args, **kwargs)

    monkeypatch.setattr(Path, "unlink", flaky_unlink)

    assert main([str(target_dir), "1", "--quiet", "--log-file", str(log_path)]) == 0
    assert "Error deleting testfile_000.txt" in log_path.read_text()


def test_logs_list_and_show(tmp_path, capsys):
    log_dir = tmp_path / "audit"
    log_dir.mkdir()
    (log_dir / "FileLimitService_20240101_000000.log").write_text(
        "2024-01-01 00:00:00 - first\n2024-01-01 00:00:01 - second\n",
        encoding="utf-8",
    )

    assert main(["logs", "list", "--dir", str(log_dir)]) == 0
    assert "FileLimitService_20240101_000000.log" in capsys.readouterr().out

    assert main(
        ["logs", "show", "FileLimitService_20240101_000000", "--dir", str(log_dir), "--tail", "1"]
    ) == 0
    out = capsys.readouterr().out
    assert "second" in out
    assert "first" not in out

    assert main(["logs", "show", "missing", "--dir", str(log_dir)]) == 1


def test_directory_named_logs_is_still_cleaned(tmp_path, monkeypatch, make_files):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "logs").mkdir()
    make_files(3, directory=tmp_path / "logs")

    assert main(["logs", "1", "--log-file", str(tmp_path / "out.log")]) == 0
    assert len(list((tmp_path / "logs").glob("testfile_*.txt"))) == 1


def test_env_dump(capsys):
    assert main(["env", "dump"]) == 0
    assert "Runtime Environment" in capsys.readouterr().out


def test_split_noui():
    assert split_noui(["a", "3", "NOUI"]) == (["a", "3"], True)
    assert split_noui(["a", "3"]) == (["a", "3"], False)
    assert split_noui(["noui", "3"]) == (["noui", "3"], False)
    assert split_noui(["--config", "noui"]) == (["--config", "noui"], False)
    assert split_noui(["d", "3", "--log-file", "noui"]) == (
        ["d", "3", "--log-file", "noui"],
        False,
    )


def test_config_without_max_file_count_deletes_nothing(
    tmp_path, target_dir, log_path, make_files, capsys
):
    names = make_files(4)
    cfg = tmp_path / "config.json"
    cfg.write_text(
        json.dumps({"targetDirectory": str(target_dir), "maxFiles": 3}),
        encoding="utf-8",
    )

    assert main(["--config", str(cfg), "--quiet", "--log-file", str(log_path)]) == 1

    assert _remaining(target_dir) == names
    assert "maxFileCount is required" in capsys.readouterr().out


def test_directory_named_noui_is_cleaned(tmp_path, monkeypatch, make_files):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "noui").mkdir()
    make_files(3, directory=tmp_path / "noui")

    code = main(["noui", "1", "--quiet", "--log-file", str(tmp_path / "out.log")])

    assert code == 0
    assert _remaining(tmp_path / "noui") == ["testfile_002.txt"]


def test_noui_as_option_value_is_a_path(tmp_path, monkeypatch, target_dir, make_files):
    monkeypatch.chdir(tmp_path)
    make_files(2)

    assert main([str(target_dir), "1", "--quiet", "--log-file", "noui"]) == 0

    assert "Files deleted: 1" in (tmp_path / "noui").read_text()


def test_trailing_noui_after_config(tmp_path, target_dir, make_files, capsys):
    make_files(3)
    cfg = tmp_path / "config.json"
    cfg.write_text(
        json.dumps({"targetDirectory": str(target_dir), "maxFileCount": 1}),
        encoding="utf-8",
    )

    assert main(["--config", str(cfg), "noui"]) == 0

    assert len(_remaining(target_dir)) == 1
    assert capsys.readouterr().out == ""


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="linux log layout")
def test_read_only_tools_do_not_create_log_dirs(tmp_path, monkeypatch, capsys):
    from filelimit.env import paths

    monkeypatch.delenv("FILELIMIT_LOGS_DIR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    (tmp_path / "var" / "log").mkdir(parents=True)
    system_dir = tmp_path / "var" / "log" / "FileLimitService"
    monkeypatch.setattr(paths, "LINUX_SYSTEM_LOGS_DIR", system_dir)

    assert main(["logs", "list"]) == 0
    assert main(["env", "dump"]) == 0

    assert not system_dir.exists()
    assert not (tmp_path / "home").exists()
    assert "No logs directory found" in capsys.readouterr().out
