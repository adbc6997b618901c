import logging
import os
import time

import pytest


@pytest.fixture(autouse=True)
def clean_env_and_logging(monkeypatch, tmp_path):
    """
    Ensure tests don't leak env, logger state, or write to real log dirs.
    """

    keys = [
        "FILELIMIT_LOGS_DIR",
        "FILELIMIT_RUN_ID",
        "FILELIMIT_VERBOSE",
        "FILELIMIT_QUIET",
        "LOG_LEVEL",
        "LOG_RETENTION",
    ]
    for k in keys:
        monkeypatch.delenv(k, raising=False)

    # Default audit logs land in a throwaway directory
    monkeypatch.setenv("FILELIMIT_LOGS_DIR", str(tmp_path / "_default_logs"))

    from filelimit.env import reset_env_caches
    import filelimit.logger.state

    reset_env_caches()
    filelimit.logger.state.INITIALIZED = False
    filelimit.logger.state.CONSOLE_HANDLER = None

    pkg = logging.getLogger("filelimit")
    for h in list(pkg.handlers):
        pkg.removeHandler(h)
    pkg.propagate = True

    yield

    reset_env_caches()


@pytest.fixture
def target_dir(tmp_path):
    d = tmp_path / "target"
    d.mkdir()
    return d


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "logs" / "test.log"


@pytest.fixture
def make_files(target_dir):
    """
    Create `count` files, oldest first, one minute apart.

    Returns the names in creation (= age, oldest first) order.
    """

    def _make(count: int, *, directory=None, start_offset: int = 0) -> list[str]:
        directory = directory or target_dir
        base = time.time() - 3600
        names = []
        for i in range(count):
            name = f"testfile_{i + start_offset:03d}.txt"
            path = directory / name
            path.write_text(f"Test content {i}")
            ts = base - (count - i) * 60
            os.utime(path, (ts, ts))
            names.append(name)
        return names

    return _make
