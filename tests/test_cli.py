"""Tests for the duck command line."""

import re

import pytest
from click.testing import CliRunner

from duck import Repository
from duck.cli import main


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("DUCK_REPO", raising=False)
    return tmp_path


def run(runner, *args):
    return runner.invoke(main, list(args), catch_exceptions=False)


def commit_hash(output: str) -> str:
    return re.search(r"created: ([0-9a-f]{40})", output).group(1)


class TestInitCommand:
    def test_init(self, runner, workdir):
        result = run(runner, "init")
        assert result.exit_code == 0
        assert "Initialized empty duck repository" in result.output
        assert (workdir / ".duck" / "HEAD").exists()

    def test_init_twice(self, runner, workdir):
        run(runner, "init")
        result = run(runner, "init")
        assert result.exit_code == 0
        assert "Already initialized" in result.output

    def test_repo_option(self, runner, workdir):
        result = run(runner, "--repo", str(workdir / "elsewhere"), "init")
        assert result.exit_code == 0
        assert (workdir / "elsewhere" / ".duck" / "objects").is_dir()

    def test_repo_env_var(self, runner, workdir, monkeypatch):
        monkeypatch.setenv("DUCK_REPO", str(workdir / "env"))
        run(runner, "init")
        assert (workdir / "env" / ".duck").is_dir()


class TestAddCommitLog:
    def test_add(self, runner, workdir):
        run(runner, "init")
        (workdir / "a.txt").write_bytes(b"hello\n")
        result = run(runner, "add", "a.txt")
        assert result.exit_code == 0
        assert "Added a.txt" in result.output
        assert "f572d396fae9206628714fb2ce00f72e94f2258f" in result.output

    def test_add_several(self, runner, workdir):
        run(runner, "init")
        (workdir / "a.txt").write_bytes(b"a\n")
        (workdir / "b.txt").write_bytes(b"b\n")
        run(runner, "add", "a.txt", "b.txt")
        assert [e.path for e in Repository().staged()] == ["a.txt", "b.txt"]

    def test_add_missing_file(self, runner, workdir):
        run(runner, "init")
        result = run(runner, "add", "nope.txt")
        assert result.exit_code == 1
        assert "File not found: nope.txt" in result.output

    def test_commit_and_log(self, runner, workdir):
        run(runner, "init")
        (workdir / "a.txt").write_bytes(b"hello\n")
        run(runner, "add", "a.txt")
        c1 = commit_hash(run(runner, "commit", "c1").output)
        run(runner, "add", "a.txt")
        c2 = commit_hash(run(runner, "commit", "c2").output)

        result = run(runner, "log")
        assert result.exit_code == 0
        out = result.output
        assert out.index(c2) < out.index(c1)
        assert out.index("    c2") < out.index("    c1")

    def test_log_empty(self, runner, workdir):
        result = run(runner, "log")
        assert result.exit_code == 0
        assert result.output == ""

    def test_log_corrupt(self, runner, workdir):
        run(runner, "init")
        (workdir / ".duck" / "HEAD").write_text("f" * 40)
        result = run(runner, "log")
        assert result.exit_code == 1
        assert "Corrupt history" in result.output

    def test_log_mistyped_parent(self, runner, workdir):
        run(runner, "init")
        repo = Repository()
        h = repo.objects.write(b'{"timeStamp":"t","message":"m","files":[],"parent":5}')
        repo.head.write(h)
        result = run(runner, "log")
        assert result.exit_code == 1
        assert "Corrupt history" in result.output

    def test_status(self, runner, workdir):
        run(runner, "init")
        assert "Nothing staged." in run(runner, "status").output
        (workdir / "a.txt").write_bytes(b"hello\n")
        run(runner, "add", "a.txt")
        out = run(runner, "status").output
        assert "a.txt" in out
        assert "f572d39" in out


class TestShowCommand:
    def test_show_diff(self, runner, workdir):
        run(runner, "init")
        a = workdir / "a.txt"
        a.write_bytes(b"hello\n")
        run(runner, "add", "a.txt")
        c1 = commit_hash(run(runner, "commit", "c1").output)
        a.write_bytes(b"hello\nworld\n")
        run(runner, "add", "a.txt")
        c2 = commit_hash(run(runner, "commit", "c2").output)

        out = run(runner, "show", c1).output
        assert "File: a.txt" in out
        assert "First commit" in out

        out = run(runner, "show", c2).output
        assert "+ world" in out
        assert "  hello" in out
        assert "- " not in out

    def test_show_new_file(self, runner, workdir):
        run(runner, "init")
        (workdir / "a.txt").write_bytes(b"a\n")
        run(runner, "add", "a.txt")
        run(runner, "commit", "c1")
        (workdir / "b.txt").write_bytes(b"b\n")
        run(runner, "add", "b.txt")
        c2 = commit_hash(run(runner, "commit", "c2").output)
        assert "New file in this commit" in run(runner, "show", c2).output

    def test_show_unknown(self, runner, workdir):
        run(runner, "init")
        result = run(runner, "show", "0" * 40)
        assert result.exit_code == 0
        assert "Commit not found." in result.output

    def test_show_escapes_markup(self, runner, workdir):
        run(runner, "init")
        a = workdir / "a.txt"
        a.write_bytes(b"x\n")
        run(runner, "add", "a.txt")
        run(runner, "commit", "c1")
        a.write_bytes(b"x\n[bold]y[/bold]\n")
        run(runner, "add", "a.txt")
        c2 = commit_hash(run(runner, "commit", "c2").output)
        assert "+ [bold]y[/bold]" in run(runner, "show", c2).output
