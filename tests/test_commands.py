"""Tests for command table."""
import pytest

from fleetclient.cli import cli
from fleetclient.commands import (
    CommandDefinition,
    find_command,
    register_command,
    registered_commands,
    validate_id,
)
from fleetclient.errors import DuplicateCommand, InvalidName


def test_register_command(clean_commands):
    """Test registering and finding commands."""
    register_command(CommandDefinition(usage="target", description="Set target"))
    register_command(CommandDefinition(usage="alias"))

    assert find_command("target").description == "Set target"
    assert find_command("missing") is None
    assert [c.usage for c in registered_commands()] == ["alias", "target"]


def test_duplicate_command(clean_commands):
    """Test that a usage can only be registered once."""
    register_command(CommandDefinition(usage="status"))
    with pytest.raises(DuplicateCommand):
        register_command(CommandDefinition(usage="status"))


def test_cli_commands_are_registered():
    """Test that every CLI subcommand is in the command table."""
    usages = {c.usage for c in registered_commands()}
    assert usages == set(cli.commands)


@pytest.mark.parametrize("name", ["dev", "my-target_1.prod", "UPPER"])
def test_validate_id_accepts(name):
    assert validate_id(name) == name


@pytest.mark.parametrize("name", ["", "with space", "slash/name", "star*"])
def test_validate_id_rejects(name):
    with pytest.raises(InvalidName):
        validate_id(name)


def test_cli_descriptions_come_from_docstrings():
    """Test that a command's description is its docstring summary."""
    assert find_command("status").description == "Show current target, deployment and login"
    assert cli.commands["status"].help.startswith("Show current target")
