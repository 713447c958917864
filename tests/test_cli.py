"""
Test Suite for the Command-Line Interface

Runs CLI commands in-process and checks exit codes and written files.
"""

import json

import pytest
import yaml

from cli import CLI


@pytest.fixture
def cli():
    return CLI()


@pytest.fixture
def request_file(tmp_path):
    path = tmp_path / "request.yaml"
    path.write_text(yaml.safe_dump({
        "fields": [
            {"name": "id", "type": "autoIncrement", "unique": True},
            {"name": "fullName", "type": "fullName"},
            {"name": "phone", "type": "phone"},
        ],
        "count": 12,
        "location": {"mode": "single", "singleCountry": "US"},
    }))
    return path


class TestGenerateCommand:
    """Test the generate command"""

    def test_generate_from_file(self, cli, request_file, tmp_path):
        out = tmp_path / "out"

        cli.run([
            "generate", "--config", str(request_file),
            "--format", "csv", "--format", "sql",
            "--output-dir", str(out), "--filename", "people", "--table-name", "People",
        ])

        assert sorted(p.name for p in out.iterdir()) == ["people.csv", "people.sql"]
        assert (out / "people.csv").read_text().count("\n") == 13
        assert "CREATE TABLE People (" in (out / "people.sql").read_text()

    def test_count_override(self, cli, request_file, tmp_path):
        cli.run([
            "generate", "-c", str(request_file), "-n", "3", "-f", "txt",
            "-o", str(tmp_path), "--filename", "few",
        ])

        assert len((tmp_path / "few.txt").read_text().splitlines()) == 4

    def test_seed_repeats_output(self, cli, request_file, tmp_path):
        for name in ("a", "b"):
            cli.run([
                "generate", "-c", str(request_file), "-s", "5", "-f", "csv",
                "-o", str(tmp_path), "--filename", name,
            ])

        assert (tmp_path / "a.csv").read_text() == (tmp_path / "b.csv").read_text()

    def test_preset(self, cli, tmp_path):
        cli.run([
            "generate", "--preset", "employees", "--count", "5",
            "-f", "xlsx", "-o", str(tmp_path),
        ])

        assert (tmp_path / "data.xlsx").exists()

    def test_settings_file(self, cli, request_file, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text(yaml.safe_dump({
            "export": {"formats": ["txt"], "outputDir": str(tmp_path / "from_settings"),
                       "filename": "configured"},
            "logging": {"level": "WARNING"},
        }))

        cli.run(["generate", "-c", str(request_file), "--settings", str(settings)])

        assert (tmp_path / "from_settings" / "configured.txt").exists()

    def test_invalid_request_exits(self, cli, request_file, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            cli.run(["generate", "-c", str(request_file), "-n", "0", "-o", str(tmp_path)])

        assert excinfo.value.code == 1
        assert "DF-GEN-003" in capsys.readouterr().out

    def test_null_percentage_exits_cleanly(self, cli, tmp_path, capsys):
        path = tmp_path / "nulls.yaml"
        path.write_text(yaml.safe_dump({
            "fields": [{"name": "id", "type": "autoIncrement"}],
            "count": 3,
            "demographics": {"malePercentage": None, "femalePercentage": 100},
        }))

        with pytest.raises(SystemExit) as excinfo:
            cli.run(["generate", "-c", str(path), "-o", str(tmp_path)])

        assert excinfo.value.code == 1
        assert "DF-GEN-006" in capsys.readouterr().out

    def test_unknown_preset_exits(self, cli, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            cli.run(["generate", "--preset", "astronauts", "-o", str(tmp_path)])

        assert excinfo.value.code == 1

    def test_config_and_preset_are_exclusive(self, cli, request_file):
        with pytest.raises(SystemExit) as excinfo:
            cli.run(["generate", "-c", str(request_file), "-p", "students"])

        assert excinfo.value.code == 2


class TestValidateCommand:
    """Test the validate command"""

    def test_valid_request(self, cli, request_file, capsys):
        cli.run(["validate", str(request_file)])

        assert "Request is valid" in capsys.readouterr().out

    def test_invalid_request(self, cli, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({
            "fields": [{"name": "a", "type": "uuid"}, {"name": "a", "type": "city"}],
            "demographics": {"malePercentage": 70, "femalePercentage": 20},
        }))

        with pytest.raises(SystemExit) as excinfo:
            cli.run(["validate", str(path)])

        assert excinfo.value.code == 1
        assert "2 problem(s) found" in capsys.readouterr().out

    def test_missing_file(self, cli, tmp_path):
        with pytest.raises(SystemExit):
            cli.run(["validate", str(tmp_path / "missing.yaml")])


class TestCatalogueCommands:
    """Test listing commands"""

    def test_fields(self, cli, capsys):
        cli.run(["fields"])

        assert "customPattern" in capsys.readouterr().out

    def test_countries(self, cli, capsys):
        cli.run(["countries"])

        assert "Germany" in capsys.readouterr().out


class TestConfigCommand:
    """Test preset management"""

    def test_list(self, cli, capsys):
        cli.run(["config", "list"])

        assert "students" in capsys.readouterr().out

    def test_show(self, cli, capsys):
        cli.run(["config", "show", "customers"])

        assert "malePercentage" in capsys.readouterr().out

    def test_create_default(self, cli, tmp_path):
        path = tmp_path / "starter.yaml"

        cli.run(["config", "create", str(path)])

        data = yaml.safe_load(path.read_text())
        assert data["fields"][0] == {"name": "id", "type": "autoIncrement", "unique": True}

    def test_create_from_preset_then_validate(self, cli, tmp_path, capsys):
        path = tmp_path / "students.json"

        cli.run(["config", "create", str(path), "--preset", "students"])
        cli.run(["validate", str(path)])

        assert json.loads(path.read_text())["count"] == 200
        assert "Request is valid" in capsys.readouterr().out
