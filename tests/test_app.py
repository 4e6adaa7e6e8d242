"""
Tests for the command line interface.
"""

import json

import pytest

from talentmatch import __version__
from talentmatch.app import _split_list, main


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    """Run the CLI from an empty directory with a temp database."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("TALENTMATCH_MIN_THRESHOLD", raising=False)
    monkeypatch.delenv("TALENTMATCH_LIMIT", raising=False)
    monkeypatch.setenv("TALENTMATCH_LOG_DIR", str(tmp_path / "logs"))
    return tmp_path / "cli.db"


@pytest.fixture
def export_file(tmp_path, sample_export):
    path = tmp_path / "export.json"
    path.write_text(json.dumps(sample_export), encoding="utf-8")
    return path


@pytest.fixture
def loaded_db(cli_env, export_file):
    main(["--db", str(cli_env), "load", "--input", str(export_file)])
    return cli_env


def test_split_list():
    """Lists are semicolon separated so names may keep their commas."""
    assert _split_list("Acme, Seattle; Globex ;") == ["Acme, Seattle", "Globex"]
    assert _split_list(None) == []


def test_version(capsys):
    main(["--version"])
    assert capsys.readouterr().out.strip() == __version__


def test_no_command_prints_help(cli_env, capsys):
    main([])
    assert "usage" in capsys.readouterr().out.lower()


def test_init_db(cli_env, capsys):
    main(["--db", str(cli_env), "init-db"])
    assert cli_env.exists()
    assert "Database ready" in capsys.readouterr().out


def test_bad_configuration(cli_env, monkeypatch):
    monkeypatch.setenv("TALENTMATCH_LIMIT", "zero")
    with pytest.raises(SystemExit) as exc:
        main(["init-db"])
    assert "Configuration error" in str(exc.value)


class TestLoadAndValidate:
    """Test the import commands."""

    def test_validate_valid(self, cli_env, export_file, capsys):
        main(["validate", "--input", str(export_file)])
        assert capsys.readouterr().out.strip() == "Valid"

    def test_validate_invalid(self, cli_env, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"jobs": [{"id": "j1"}]}), encoding="utf-8")
        with pytest.raises(SystemExit) as exc:
            main(["validate", "--input", str(path)])
        assert exc.value.code == 2
        assert "jobs[0]: Missing required field: title" in capsys.readouterr().out

    def test_missing_input(self, cli_env, tmp_path):
        with pytest.raises(SystemExit):
            main(["validate", "--input", str(tmp_path / "none.json")])

    def test_load(self, cli_env, export_file, capsys):
        main(["--db", str(cli_env), "load", "--input", str(export_file)])
        out = capsys.readouterr().out
        assert "jobs=1 candidates=2 histories=1 skipped=0 invalid=0" in out

    def test_load_dry_run(self, cli_env, export_file, capsys):
        main(["--db", str(cli_env), "load", "--input", str(export_file), "--dry-run"])
        assert capsys.readouterr().out.startswith("[dry-run] Done.")


class TestRankCommand:
    """Test ranking from the command line."""

    def test_rank_text(self, loaded_db, capsys):
        capsys.readouterr()
        main(["--db", str(loaded_db), "rank", "--job-id", "job-java"])
        out = capsys.readouterr().out
        assert "Top 1 candidates for job job-java" in out
        assert "Dana Reyes (cand-1)" in out

    def test_rank_json(self, loaded_db, capsys):
        capsys.readouterr()
        main(["--db", str(loaded_db), "rank", "--job-id", "job-java", "--threshold", "0", "--json"])
        results = json.loads(capsys.readouterr().out)
        assert [r["candidate_id"] for r in results] == ["cand-1", "cand-2"]
        assert results[0]["score"] >= results[1]["score"]

    def test_unknown_job(self, loaded_db):
        with pytest.raises(SystemExit) as exc:
            main(["--db", str(loaded_db), "rank", "--job-id", "missing"])
        assert "missing" in str(exc.value)

    def test_bad_limit(self, loaded_db):
        with pytest.raises(SystemExit) as exc:
            main(["--db", str(loaded_db), "rank", "--job-id", "job-java", "--limit", "0"])
        assert "Invalid arguments" in str(exc.value)


class TestHistoryCommands:
    """Test history checks and invalidation."""

    def test_check_history_from_orgs(self, loaded_db, capsys):
        capsys.readouterr()
        main([
            "--db", str(loaded_db), "check-history",
            "--orgs", "First National Bank; Globex Corporation",
            "--dates", "Jan 2019 - Present; Jun 2013 - Dec 2018",
            "--json",
        ])
        report = json.loads(capsys.readouterr().out)
        assert report["has_identical_chronology"]
        assert report["identical_chronology_matches"][0]["candidate_name"] == "Dana Reyes"

    def test_check_history_for_candidate_excludes_self(self, loaded_db, capsys):
        capsys.readouterr()
        main(["--db", str(loaded_db), "check-history", "--candidate-id", "cand-1"])
        assert capsys.readouterr().out.strip() == "Employment history validation complete"

    def test_check_history_without_history(self, loaded_db):
        with pytest.raises(SystemExit):
            main(["--db", str(loaded_db), "check-history", "--candidate-id", "cand-2"])

    def test_mark_invalid_and_list(self, loaded_db, capsys):
        main(["--db", str(loaded_db), "mark-invalid", "--candidate-id", "cand-2", "--reason", "duplicate"])
        capsys.readouterr()

        main(["--db", str(loaded_db), "list-candidates"])
        out = capsys.readouterr().out
        assert "ID: cand-1" in out
        assert "cand-2" not in out

        main(["--db", str(loaded_db), "list-candidates", "--all"])
        out = capsys.readouterr().out
        assert "ID: cand-2 [invalidated]" in out
        assert "Reason: duplicate" in out

    def test_mark_unknown_candidate(self, loaded_db):
        with pytest.raises(SystemExit):
            main(["--db", str(loaded_db), "mark-invalid", "--candidate-id", "ghost", "--reason", "x"])
