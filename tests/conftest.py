"""Test fixtures for client tests."""
import json

import pytest


@pytest.fixture
def config_path(tmp_path):
    """Path to a config file in a temporary directory."""
    return tmp_path / "fleet_config"


@pytest.fixture
def add_config(config_path):
    """Write an object to the config file as JSON."""
    def write(obj):
        config_path.write_text(json.dumps(obj))
        return config_path
    return write


@pytest.fixture
def read_config(config_path):
    """Load the config file as it is on disk."""
    def read():
        return json.loads(config_path.read_text())
    return read


@pytest.fixture
def clean_commands():
    """Run with an empty command table, restoring it afterwards."""
    from fleetclient.commands import clear_commands, register_command, registered_commands

    saved = registered_commands()
    clear_commands()
    yield
    clear_commands()
    for command in saved:
        register_command(command)
