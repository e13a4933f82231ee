import os

import pytest

from qgit.commands import (
    CommandError,
    cmd_cat_file,
    cmd_config,
    cmd_hash_object,
    cmd_init,
)
from qgit.ini import IniFile
from qgit.objects import GitObject, ObjectType


@pytest.fixture
def home(tmp_path, monkeypatch):
    path = tmp_path / "home"
    path.mkdir()
    monkeypatch.setenv("HOME", str(path))
    return path


@pytest.fixture
def workdir(tmp_path, monkeypatch, home):
    path = tmp_path / "work"
    path.mkdir()
    monkeypatch.chdir(path)
    return path


@pytest.fixture
def repo_dir(workdir):
    assert cmd_init(["-q"]) == 0
    return workdir


def test_init_creates_repository(workdir, capsys):
    assert cmd_init([]) == 0
    out = capsys.readouterr().out
    real = os.path.realpath(workdir)
    assert out == f"Initialized empty qgit repository in {real}/.qgit/\n"
    assert (workdir / ".qgit" / "HEAD").read_text() == "ref: refs/heads/main\n"
    assert (workdir / ".qgit" / "refs" / "heads").is_dir()
    assert (workdir / ".qgit" / "objects" / "pack").is_dir()


def test_init_reinitialises(repo_dir, capsys):
    capsys.readouterr()
    assert cmd_init([]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Reinitialized existing qgit repository in ")


def test_init_quiet_prints_nothing(workdir, capsys):
    assert cmd_init(["--quiet"]) == 0
    assert capsys.readouterr().out == ""
    assert (workdir / ".qgit").is_dir()


def test_init_initial_branch(workdir):
    assert cmd_init(["-q", "-b", "dev"]) == 0
    assert (workdir / ".qgit" / "HEAD").read_text() == "ref: refs/heads/dev\n"


def test_init_default_branch_from_global_config(workdir, home):
    (home / ".qgitconfig").write_text("[init]\n\tdefaultBranch = trunk\n")
    assert cmd_init(["-q"]) == 0
    assert (workdir / ".qgit" / "HEAD").read_text() == "ref: refs/heads/trunk\n"


def test_init_bare_and_path(workdir):
    assert cmd_init(["-q", "--bare", "a/b"]) == 0
    config = IniFile.open(workdir / "a" / "b" / ".qgit" / "config")
    config.parse()
    assert config.get("core", "bare") == "true"
    assert config.get("core", "repositoryformatversion") == "0"


def test_init_unknown_option(workdir):
    with pytest.raises(CommandError, match="unknown option: '-z'"):
        cmd_init(["-z"])


def test_init_help_exits(workdir, capsys):
    with pytest.raises(SystemExit) as info:
        cmd_init(["-h"])
    assert info.value.code == 0
    assert "USAGE: qgit init [options]" in capsys.readouterr().out


def test_hash_object_empty_blob(workdir, capsys):
    (workdir / "empty").write_bytes(b"")
    assert cmd_hash_object(["empty"]) == 0
    assert capsys.readouterr().out == "e69de29bb2d1d6434b8b29ae775ad8c2e48c5391\n"


def test_hash_object_matches_object_hash(workdir, capsys):
    (workdir / "f").write_bytes(b"some content\n")
    assert cmd_hash_object(["-t", "commit", "f"]) == 0
    expected = GitObject(ObjectType.COMMIT, b"some content\n").hash()
    assert capsys.readouterr().out.strip() == expected


def test_hash_object_write_and_cat_file(repo_dir, capsys):
    (repo_dir / "f").write_bytes(b"hello world\n")
    capsys.readouterr()
    assert cmd_hash_object(["-w", "f"]) == 0
    name = capsys.readouterr().out.strip()
    assert (repo_dir / ".qgit" / "objects" / name[:2] / name[2:]).is_file()

    assert cmd_cat_file(["-p", name]) == 0
    assert capsys.readouterr().out == "hello world\n"
    assert cmd_cat_file(["-t", name]) == 0
    assert capsys.readouterr().out == "blob\n"
    assert cmd_cat_file(["-s", name]) == 0
    assert capsys.readouterr().out == f"{len(b'hello world' + bytes([10]))}\n"


def test_hash_object_invalid_type(workdir):
    (workdir / "f").write_bytes(b"x")
    with pytest.raises(CommandError, match="invalid object type 'bogus'"):
        cmd_hash_object(["-t", "bogus", "f"])


def test_hash_object_requires_file(workdir):
    with pytest.raises(CommandError, match="a file is required"):
        cmd_hash_object([])


def test_hash_object_missing_file(workdir):
    with pytest.raises(CommandError, match="^qgit: "):
        cmd_hash_object(["does-not-exist"])


def test_hash_object_write_outside_repository(workdir):
    (workdir / "f").write_bytes(b"x")
    with pytest.raises(CommandError, match="not a qgit repository"):
        cmd_hash_object(["-w", "f"])


def test_cat_file_conflicting_options(repo_dir):
    with pytest.raises(CommandError, match="'-t' and '-s'"):
        cmd_cat_file(["-t", "-s", "abcd"])
    with pytest.raises(CommandError, match="'-t' and '-p'"):
        cmd_cat_file(["-tp", "abcd"])
    with pytest.raises(CommandError, match="'-s' and '-p'"):
        cmd_cat_file(["-s", "-p", "abcd"])


def test_cat_file_requires_hash(repo_dir):
    with pytest.raises(CommandError, match="a hash is required"):
        cmd_cat_file(["-p"])


def test_cat_file_outside_repository(workdir):
    with pytest.raises(CommandError, match="not a qgit repository"):
        cmd_cat_file(["-p", "0123456789"])


def test_cat_file_missing_object(repo_dir):
    with pytest.raises(CommandError, match="^qgit: "):
        cmd_cat_file(["-p", "0" * 40])


def test_cat_file_corrupt_object(repo_dir):
    name = "ab" + "c" * 38
    directory = repo_dir / ".qgit" / "objects" / "ab"
    directory.mkdir()
    (directory / name[2:]).write_bytes(b"not zlib data")
    with pytest.raises(CommandError, match=f"not a valid object name '{name}'"):
        cmd_cat_file(["-t", name])


def test_config_set_and_get_local(repo_dir, capsys):
    assert cmd_config(["--set", "user.name", "Alice"]) == 0
    capsys.readouterr()
    assert cmd_config(["--get", "user.name"]) == 0
    assert capsys.readouterr().out == "Alice\n"
    config = IniFile.open(repo_dir / ".qgit" / "config")
    config.parse()
    assert config.get("user", "name") == "Alice"


def test_config_set_global(workdir, home, capsys):
    assert cmd_config(["--global", "--set", "user.email", "alice@example.com"]) == 0
    assert cmd_config(["--get", "user.email"]) == 0
    assert capsys.readouterr().out == "alice@example.com\n"
    assert "email=alice@example.com" in (home / ".qgitconfig").read_text()


def test_config_local_overrides_global(repo_dir, capsys):
    assert cmd_config(["--global", "-s", "user.name", "Global"]) == 0
    assert cmd_config(["-s", "user.name", "Local"]) == 0
    capsys.readouterr()
    assert cmd_config(["-g", "user.name"]) == 0
    assert capsys.readouterr().out == "Local\n"
    assert cmd_config(["--global", "-g", "user.name"]) == 0
    assert capsys.readouterr().out == "Global\n"


def test_config_get_missing_key(repo_dir, capsys):
    capsys.readouterr()
    assert cmd_config(["--get", "nosuch.key"]) == 1
    assert capsys.readouterr().out == ""


def test_config_unset(repo_dir, capsys):
    assert cmd_config(["--set", "user.name", "Alice"]) == 0
    assert cmd_config(["--unset", "user.name"]) == 0
    assert cmd_config(["--get", "user.name"]) == 1


def test_config_list(repo_dir, capsys):
    capsys.readouterr()
    assert cmd_config(["--list"]) == 0
    out = capsys.readouterr().out
    assert "core.bare=false\n" in out
    assert "core.filemode=true\n" in out


def test_config_no_action(repo_dir):
    with pytest.raises(CommandError, match="no action specified"):
        cmd_config([])


def test_config_local_outside_repository(workdir):
    with pytest.raises(CommandError, match="--local can only be used"):
        cmd_config(["--local", "--list"])


def test_config_set_outside_repository(workdir):
    with pytest.raises(CommandError, match="not inside a qgit repository"):
        cmd_config(["--set", "user.name", "Alice"])


def test_config_argument_counts(repo_dir):
    with pytest.raises(CommandError, match="--set requires two arguments"):
        cmd_config(["--set", "user.name"])
    with pytest.raises(CommandError, match="--get requires one argument"):
        cmd_config(["--get"])
    with pytest.raises(CommandError, match="--unset requires one argument"):
        cmd_config(["--unset", "a.b", "c.d"])


def test_config_key_format(repo_dir):
    with pytest.raises(CommandError, match="section.key format"):
        cmd_config(["--get", "nodot"])