import shutil

import pytest

import archive
import fixtures
import generate

requires_git = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")

@requires_git
def test_generate_then_check(tmp_path, capsys):
    assert fixtures.main(["generate"], fixtures_dir=str(tmp_path)) == 0
    assert fixtures.main(["check"], fixtures_dir=str(tmp_path)) == 0

    assert "attributes_baseline: 14 records ok" in capsys.readouterr().out
    assert (tmp_path / "basics" / "baseline").is_file()

@requires_git
def test_generate_twice_fails(tmp_path):
    assert fixtures.main(["generate"], fixtures_dir=str(tmp_path)) == 0
    assert fixtures.main(["generate"], fixtures_dir=str(tmp_path)) == 1
    assert fixtures.main(["generate", "--force"], fixtures_dir=str(tmp_path)) == 0

def test_check_without_baseline_fails(tmp_path):
    assert fixtures.main(["check"], fixtures_dir=str(tmp_path)) == 1

def test_check_recipe_without_baseline_paths_fails(tmp_path, monkeypatch):
    recipes_dir = tmp_path / "recipes"
    recipes_dir.mkdir()
    (recipes_dir / "bare.py").write_text(
        "def setup(fs, git):\n    pass\n\ndef run_git(baseline):\n    pass\n")
    monkeypatch.setattr(generate, "RECIPES_DIR", str(recipes_dir))

    assert fixtures.main(["check", "bare"], fixtures_dir=str(tmp_path / "out")) == 1

def test_generate_rejects_names_with_all(tmp_path):
    assert fixtures.main(["generate", "--all", "attributes_baseline"], fixtures_dir=str(tmp_path)) == 2

def test_pack_archives_fixture_directories(tmp_path, monkeypatch):
    commands = []
    monkeypatch.setattr(archive, "exec_redirect_to_log", lambda command, logger, level: commands.append(command))
    (tmp_path / "basics").mkdir()
    (tmp_path / "_scratch").mkdir()
    (tmp_path / "existing").mkdir()
    (tmp_path / "existing.7z").write_bytes(b"")

    assert fixtures.main(["pack"], fixtures_dir=str(tmp_path)) == 0

    assert commands == [["7z", "a", str(tmp_path / "basics.7z"), ".", "-mtc", "-mtm", "-mta"]]

def test_unpack_skips_existing_directories(tmp_path, monkeypatch):
    commands = []
    monkeypatch.setattr(archive, "exec_redirect_to_log", lambda command, logger, level: commands.append(command))
    (tmp_path / "basics.7z").write_bytes(b"")
    (tmp_path / "other.7z").write_bytes(b"")
    (tmp_path / "other").mkdir()

    archive.unpack_fixtures(str(tmp_path))

    assert commands == [["7z", "x", str(tmp_path / "basics.7z"), f"-o{tmp_path / 'basics'}"]]
    assert (tmp_path / "basics").is_dir()

def test_unpack_force_replaces_directories(tmp_path, monkeypatch):
    commands = []
    monkeypatch.setattr(archive, "exec_redirect_to_log", lambda command, logger, level: commands.append(command))
    (tmp_path / "other.7z").write_bytes(b"")
    (tmp_path / "other").mkdir()
    (tmp_path / "other" / "stale").write_text("stale")

    archive.unpack_fixtures(str(tmp_path), force=True)

    assert len(commands) == 1
    assert not (tmp_path / "other" / "stale").exists()
