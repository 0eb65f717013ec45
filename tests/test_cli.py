"""Tests for the sshez command line."""

import pytest
import typer
from typer.testing import CliRunner

from sshez.cli import app, parse_destination, parse_option
from sshez.connector.ssh import ExecConnector

SAMPLE = "Host a\n  HostName 1.1.1.1\n  User x\n\nHost b\n  HostName 2.2.2.2\n  User y\n"

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch, tmp_path):
    monkeypatch.setenv("SSHEZ_CONFIG", str(tmp_path / "sshez.yaml"))


@pytest.fixture
def config_path(tmp_path):
    path = tmp_path / "config"
    path.write_text(SAMPLE)
    return path


def invoke(config_path, *args, **kwargs):
    return runner.invoke(app, ["--config-file", str(config_path), *args], **kwargs)


class TestParsing:
    def test_destination(self):
        assert parse_destination("root@10.0.0.1") == ("root", "10.0.0.1")

    @pytest.mark.parametrize("value", ["root", "@host", "root@", "a@b@c"])
    def test_bad_destination(self, value):
        with pytest.raises(typer.BadParameter):
            parse_destination(value)

    def test_option(self):
        assert parse_option("ForwardAgent=yes") == ("ForwardAgent", "yes")

    def test_bad_option(self):
        with pytest.raises(typer.BadParameter):
            parse_option("ForwardAgent")


class TestAddCommand:
    def test_add(self, config_path):
        result = invoke(config_path, "add", "c", "z@3.3.3.3")
        assert result.exit_code == 0
        assert "Successfully added `c` as an alias for `z@3.3.3.3`" in result.output
        assert config_path.read_text() == SAMPLE + "\nHost c\n  HostName 3.3.3.3\n  User z\n"

    def test_add_with_options(self, config_path):
        result = invoke(
            config_path,
            "add", "c", "z@3.3.3.3",
            "-p", "2222",
            "-i", "/keys/id_c",
            "-b",
            "-o", "ForwardAgent=yes",
        )
        assert result.exit_code == 0
        assert config_path.read_text().endswith(
            "Host c\n"
            "  HostName 3.3.3.3\n"
            "  User z\n"
            "  Port 2222\n"
            "  IdentityFile /keys/id_c\n"
            "  BatchMode yes\n"
            "  ForwardAgent yes\n"
        )

    def test_dry_run(self, config_path):
        result = invoke(config_path, "add", "c", "z@3.3.3.3", "--test")
        assert result.exit_code == 0
        assert "Host c" in result.output
        assert config_path.read_text() == SAMPLE

    def test_bad_destination(self, config_path):
        result = invoke(config_path, "add", "c", "3.3.3.3")
        assert result.exit_code == 2
        assert config_path.read_text() == SAMPLE

    def test_invalid_alias(self, config_path):
        result = invoke(config_path, "add", "web*", "z@3.3.3.3")
        assert result.exit_code == 2
        assert config_path.read_text() == SAMPLE

    def test_permission_denied(self, tmp_path):
        directory = tmp_path / "ssh-config"
        directory.mkdir()
        result = invoke(directory, "add", "c", "z@3.3.3.3")
        assert result.exit_code == 3
        assert "Permission denied!" in result.output


class TestRemoveCommand:
    def test_remove(self, config_path):
        result = invoke(config_path, "remove", "a")
        assert result.exit_code == 0
        assert "`a` was successfully removed from your hosts" in result.output
        assert config_path.read_text() == "Host b\n  HostName 2.2.2.2\n  User y\n"

    def test_not_found(self, config_path):
        result = invoke(config_path, "remove", "ghost")
        assert result.exit_code == 1
        assert "Could not find host `ghost`" in result.output
        assert config_path.read_text() == SAMPLE


class TestListCommand:
    def test_list(self, config_path):
        result = invoke(config_path, "list")
        assert result.exit_code == 0
        assert "Listing aliases:" in result.output
        assert result.output.index("- a") < result.output.index("- b")

    def test_empty(self, tmp_path):
        result = invoke(tmp_path / "missing", "list")
        assert result.exit_code == 0
        assert "No aliases added" in result.output

    def test_long(self, config_path):
        result = invoke(config_path, "list", "--long")
        assert result.exit_code == 0
        assert "1.1.1.1" in result.output
        assert "2.2.2.2" in result.output


class TestResetCommand:
    def test_confirmed(self, config_path):
        result = invoke(config_path, "reset", input="y\n")
        assert result.exit_code == 0
        assert "successfully reset" in result.output
        assert config_path.read_text() == ""

    def test_declined(self, config_path):
        result = invoke(config_path, "reset", input="n\n")
        assert result.exit_code == 0
        assert config_path.read_text() == SAMPLE

    def test_yes_flag(self, config_path):
        result = invoke(config_path, "reset", "--yes")
        assert result.exit_code == 0
        assert config_path.read_text() == ""


class TestConnectCommand:
    def test_hands_off_to_ssh(self, config_path, monkeypatch):
        calls = []
        monkeypatch.setattr(ExecConnector, "connect", lambda self, alias: calls.append(self.command(alias)))

        result = invoke(config_path, "connect", "a")
        assert result.exit_code == 0
        assert calls == [["ssh", "-F", str(config_path), "a"]]

    def test_not_found(self, config_path, monkeypatch):
        calls = []
        monkeypatch.setattr(ExecConnector, "connect", lambda self, alias: calls.append(alias))

        result = invoke(config_path, "connect", "ghost")
        assert result.exit_code == 1
        assert calls == []

    def test_missing_client(self, config_path, tmp_path):
        settings = tmp_path / "sshez.yaml"
        settings.write_text("ssh_binary: definitely-not-an-ssh-client\n")
        result = invoke(config_path, "connect", "a")
        assert result.exit_code == 1
        assert "SSH client not found" in result.output


class TestInitCommand:
    def test_writes_template(self, tmp_path):
        result = runner.invoke(app, ["init"])
        assert result.exit_code == 0
        assert (tmp_path / "sshez.yaml").read_text().startswith("# sshez configuration")


class TestBrokenSettings:
    @pytest.fixture
    def broken_settings(self, tmp_path):
        settings = tmp_path / "sshez.yaml"
        settings.write_text("ssh_binary: [unclosed\n")
        return settings

    def test_reported_without_traceback(self, config_path, broken_settings):
        result = invoke(config_path, "list")
        assert result.exit_code == 2
        assert "Could not load" in result.output
        assert "Traceback" not in result.output

    def test_invalid_values_reported(self, config_path, broken_settings):
        broken_settings.write_text("ssh_binary: ''\n")
        result = invoke(config_path, "list")
        assert result.exit_code == 2
        assert "ssh_binary must not be empty" in result.output

    def test_init_overwrites_broken_file(self, broken_settings):
        result = runner.invoke(app, ["init"], input="y\n")
        assert result.exit_code == 0
        assert broken_settings.read_text().startswith("# sshez configuration")
