"""Tests for the poolhash command line driver."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from poolhash.checksum.processor import ChecksumProcessor
from poolhash.cli import EXIT_INTEGRITY, EXIT_OK, EXIT_USAGE, build_parser, main


@pytest.fixture
def pool(tmp_path: Path) -> Path:
    d = tmp_path / "site" / "pool"
    d.mkdir(parents=True)
    (d / "a.pol").write_bytes(b"x")
    (d / "b.pol").write_bytes(b"y")
    return d


class TestParser:

    def test_operation_is_required(self):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["--recursive"])
        assert exc.value.code == 2

    def test_operations_are_exclusive(self):
        with pytest.raises(SystemExit) as exc:
            build_parser().parse_args(["--create", "--validate"])
        assert exc.value.code == 2

    def test_defaults(self):
        args = build_parser().parse_args(["--validate"])
        assert args.operation == "validate"
        assert args.recursive is False
        assert args.directory is None
        assert args.format == "text"

    def test_help_exits_zero(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main(["--help"])
        assert exc.value.code == 0
        assert "--create" in capsys.readouterr().out


class TestMain:

    def test_no_arguments_prints_usage(self, capsys):
        assert main([]) == EXIT_USAGE
        assert "usage: poolhash" in capsys.readouterr().out

    def test_create_then_validate(self, pool: Path, capsys):
        assert main(["--create", str(pool)]) == EXIT_OK
        out = capsys.readouterr().out
        assert f"Processing directory: {pool}" in out
        assert "SHA file created:" in out
        assert (pool / "Pool_site_pool.sha1").is_file()

        assert main(["--validate", str(pool)]) == EXIT_OK
        assert "Directory is valid. No integrity issues found." in capsys.readouterr().out

    def test_tampered_exit_code(self, pool: Path, capsys):
        main(["--create", str(pool)])
        (pool / "a.pol").write_bytes(b"changed")
        capsys.readouterr()
        assert main(["--validate", str(pool)]) == EXIT_INTEGRITY
        assert "Integrity check failed!" in capsys.readouterr().out

    def test_missing_sidecar_exit_code(self, pool: Path, capsys):
        assert main(["--validate", str(pool)]) == EXIT_INTEGRITY
        assert "No .sha file found in the directory:" in capsys.readouterr().out

    def test_no_files_is_not_a_failure(self, tmp_path: Path, capsys):
        assert main(["--create", str(tmp_path)]) == EXIT_OK
        assert "No .pol files found in the directory." in capsys.readouterr().out

    def test_missing_directory(self, tmp_path: Path, capsys):
        assert main(["--create", str(tmp_path / "missing")]) == EXIT_USAGE
        assert "DirectoryNotFoundError" in capsys.readouterr().err

    def test_os_error_outside_directory_guard(self, pool: Path, monkeypatch, capsys):
        def failing_run(self, *args, **kwargs):
            raise PermissionError("denied")

        monkeypatch.setattr(ChecksumProcessor, "run", failing_run)
        assert main(["--validate", str(pool)]) == EXIT_INTEGRITY
        assert "Error: PermissionError: denied" in capsys.readouterr().err

    def test_deleted_working_directory(self, monkeypatch, capsys):
        def missing_cwd(cls):
            raise FileNotFoundError("cwd is gone")

        monkeypatch.setattr(Path, "cwd", classmethod(missing_cwd))
        assert main(["--create"]) == EXIT_INTEGRITY
        assert "FileNotFoundError: cwd is gone" in capsys.readouterr().err

    def test_defaults_to_current_directory(self, pool: Path, monkeypatch):
        monkeypatch.chdir(pool)
        assert main(["--create"]) == EXIT_OK
        assert (pool / "Pool_site_pool.sha1").is_file()

    def test_recursive(self, pool: Path, capsys):
        sub = pool / "nested"
        sub.mkdir()
        (sub / "n.pol").write_bytes(b"n")
        assert main(["--create", "--recursive", str(pool)]) == EXIT_OK
        out = capsys.readouterr().out
        assert out.count("Processing directory:") == 2
        assert (sub / "Pool_pool_nested.sha1").is_file()

    def test_json_format(self, pool: Path, capsys):
        assert main(["--create", "--format", "json", str(pool)]) == EXIT_OK
        data = json.loads(capsys.readouterr().out)
        assert data["operation"] == "create"
        assert data["results"][0]["outcome"] == "created"
        assert len(data["results"][0]["digest"]) == 64

    def test_markdown_format(self, pool: Path, capsys):
        assert main(["--validate", "--format", "markdown", str(pool)]) == EXIT_INTEGRITY
        out = capsys.readouterr().out
        assert "# Pool Checksum Report (validate)" in out
        assert "no_sidecar" in out

    def test_invalid_environment(self, pool: Path, monkeypatch, capsys):
        monkeypatch.setenv("POOLHASH_CHUNK_SIZE", "0")
        assert main(["--create", str(pool)]) == EXIT_USAGE
        assert "ConfigError" in capsys.readouterr().err

    def test_extension_from_environment(self, pool: Path, monkeypatch, capsys):
        monkeypatch.setenv("POOLHASH_EXTENSION", ".dat")
        assert main(["--create", str(pool)]) == EXIT_OK
        assert "No .dat files found in the directory." in capsys.readouterr().out
