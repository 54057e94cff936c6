import stat
import sys
import textwrap
from pathlib import Path

import pytest


def _write_formatter(directory: Path, name: str, body: str) -> str:
    """Write an executable formatter stub that runs body under this interpreter."""
    script = directory / f"{name}.py"
    script.write_text(textwrap.dedent(body), encoding="utf-8")

    launcher = directory / name
    launcher.write_text(
        f'#!/bin/sh\nexec "{sys.executable}" "{script}" "$@"\n',
        encoding="utf-8",
    )
    launcher.chmod(launcher.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return str(launcher)


@pytest.fixture
def bin_dir(tmp_path):
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def make_formatter(bin_dir):
    """Factory for stubs that read all of stdin, then reply with fixed output."""
    counter = {"n": 0}

    def factory(stdout: str = "", stderr: str = "", exit_code: int = 0) -> str:
        counter["n"] += 1
        body = f"""
            import sys
            sys.stdin.buffer.read()
            sys.stdout.buffer.write({stdout.encode("utf-8")!r})
            sys.stderr.buffer.write({stderr.encode("utf-8")!r})
            sys.exit({exit_code})
        """
        return _write_formatter(bin_dir, f"formatter{counter['n']}", body)

    return factory


@pytest.fixture
def echo_formatter(bin_dir):
    """Stub that streams stdin back to stdout chunk by chunk as it reads."""
    body = """
        import sys
        while True:
            chunk = sys.stdin.buffer.read1(4096)
            if not chunk:
                break
            sys.stdout.buffer.write(chunk)
            sys.stdout.buffer.flush()
    """
    return _write_formatter(bin_dir, "echo-format", body)


@pytest.fixture
def argv_formatter(bin_dir):
    """Stub that prints its argv (after the program name) and cwd as JSON."""
    body = """
        import json
        import os
        import sys
        sys.stdin.buffer.read()
        sys.stdout.write(json.dumps({"argv": sys.argv[1:], "cwd": os.getcwd()}))
    """
    return _write_formatter(bin_dir, "argv-format", body)


@pytest.fixture
def project_dir(tmp_path):
    """Project directory with a .clang-format at its root."""
    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / ".clang-format").write_text("BasedOnStyle: Google\n", encoding="utf-8")
    return root


@pytest.fixture
def source_file(project_dir):
    path = project_dir / "src" / "main.cc"
    path.write_text("int x=1;", encoding="utf-8")
    return path


@pytest.fixture
def write_formatter(bin_dir):
    """Write a stub from arbitrary Python source."""

    def factory(name: str, body: str) -> str:
        return _write_formatter(bin_dir, name, body)

    return factory
