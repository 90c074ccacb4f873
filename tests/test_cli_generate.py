"""Tests for the gospecialize command line."""

import io
from unittest.mock import patch

import pytest
import yaml

from gospecialize.cli.main import create_parser, main


class TestGenCommand:
    """Test `gospecialize gen`."""

    def test_writes_output_file(self, template_file, tmp_path):
        out = tmp_path / "gen" / "gen-list.go"

        exit_code = main([
            "gen", "--in", str(template_file), "--out", str(out),
            "--no-imports", "--pkg", "keys", "KeyType=int,string"
        ])

        assert exit_code == 0
        text = out.read_text()
        assert "package keys\n" in text
        assert "\tKey int\n" in text
        assert "\tKey string\n" in text

    def test_stdout_when_no_out(self, template_file, capsys):
        exit_code = main(["gen", "--in", str(template_file), "--no-imports", "KeyType=int"])

        assert exit_code == 0
        assert "func NewIntList ( key int ) * List {" in capsys.readouterr().out

    def test_reads_template_from_stdin(self, template_file, capsys):
        stdin = io.TextIOWrapper(io.BytesIO(template_file.read_bytes()))
        with patch("sys.stdin", stdin):
            exit_code = main(["gen", "--no-imports", "KeyType=bool"])

        assert exit_code == 0
        assert "\tKey bool" in capsys.readouterr().out

    def test_missing_binding_writes_nothing(self, template_file, tmp_path):
        out = tmp_path / "gen-list.go"

        exit_code = main(["gen", "--in", str(template_file), "--out", str(out), "--no-imports", "Other=int"])

        assert exit_code == 2
        assert not out.exists()

    def test_bad_type_set(self, template_file):
        assert main(["gen", "--in", str(template_file), "--no-imports", "KeyType="]) == 2

    def test_no_type_sets(self, template_file):
        assert main(["gen", "--in", str(template_file), "--no-imports"]) == 2

    def test_missing_template(self, tmp_path):
        assert main(["gen", "--in", str(tmp_path / "absent.go"), "KeyType=int"]) == 1

    def test_types_file(self, template_file, tmp_path, capsys):
        types_file = tmp_path / "types.yaml"
        with open(types_file, 'w') as f:
            yaml.safe_dump([{"KeyType": "uint8"}, {"KeyType": "rune"}], f)

        exit_code = main(["gen", "--in", str(template_file), "--types-file", str(types_file), "--no-imports"])

        out = capsys.readouterr().out
        assert exit_code == 0
        assert out.index("\tKey uint8") < out.index("\tKey rune")

    def test_invalid_profile(self, template_file, tmp_path):
        profile = tmp_path / "profile.yaml"
        profile.write_text("unknown_key: 1\n")

        assert main(["gen", "--in", str(template_file), "--profile", str(profile), "KeyType=int"]) == 2

    @patch('gospecialize.imports.normalizer.subprocess.run')
    def test_goimports_runs_by_default(self, mock_run, template_file, tmp_path):
        mock_run.return_value.returncode = 0
        mock_run.return_value.stdout = b"package list\n"
        out = tmp_path / "gen-list.go"

        exit_code = main(["gen", "--in", str(template_file), "--out", str(out),
                          "--goimports", "/usr/local/bin/goimports", "KeyType=int"])

        assert exit_code == 0
        assert mock_run.call_args[0][0][0] == "/usr/local/bin/goimports"
        assert out.read_text() == "package list\n"

    @patch('gospecialize.imports.normalizer.subprocess.run')
    def test_goimports_failure(self, mock_run, template_file, tmp_path):
        mock_run.return_value.returncode = 1
        mock_run.return_value.stderr = b"could not import x"
        out = tmp_path / "gen-list.go"

        exit_code = main(["gen", "--in", str(template_file), "--out", str(out), "KeyType=int"])

        assert exit_code == 1
        assert not out.exists()


class TestCheckCommand:
    """Test `gospecialize check`."""

    def test_valid_template(self, template_file):
        assert main(["check", "--in", str(template_file), "KeyType=int,string"]) == 0

    def test_missing_binding(self, template_file):
        assert main(["check", "--in", str(template_file), "ValueType=int"]) == 2

    def test_malformed_template(self, tmp_path):
        path = tmp_path / "bad.go"
        path.write_text("package p\n\nfunc f() {\n")

        assert main(["check", "--in", str(path), "T=int"]) == 2

    def test_invalid_utf8_template(self, tmp_path):
        path = tmp_path / "bad.go"
        path.write_bytes(b'package p\n\nvar s = "\xff"\n')

        assert main(["check", "--in", str(path), "T=int"]) == 2


def test_no_command_prints_help(capsys):
    assert main([]) == 1
    assert "usage" in capsys.readouterr().out


def test_parser_defaults():
    args = create_parser().parse_args(["gen", "T=int"])

    assert args.goimports == "goimports"
    assert args.pkg == ""
    assert args.preserve_inline_comments is False
