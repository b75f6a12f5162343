"""Process-wide command table and runtime options."""
import re
from dataclasses import dataclass
from typing import Optional

from .errors import DuplicateCommand, InvalidName

VALID_ID = re.compile(r"^[-a-z0-9_.]+$", re.IGNORECASE)


@dataclass
class CommandDefinition:
    usage: str
    description: str = ""


@dataclass
class RuntimeOptions:
    colorize: bool = True
    interactive: bool = False


options = RuntimeOptions()

_commands: dict[str, CommandDefinition] = {}


def register_command(command: CommandDefinition) -> None:
    if command.usage in _commands:
        raise DuplicateCommand(f"Duplicate command `{command.usage}'")
    _commands[command.usage] = command


def find_command(usage: str) -> Optional[CommandDefinition]:
    return _commands.get(usage)


def registered_commands() -> list[CommandDefinition]:
    """Return registered commands sorted by usage."""
    return [_commands[usage] for usage in sorted(_commands)]


def clear_commands() -> None:
    _commands.clear()


def validate_id(name: str) -> str:
    """Return `name` if it is a valid identifier, else raise InvalidName."""
    if not VALID_ID.match(name):
        raise InvalidName(f"Invalid name `{name}': use letters, digits, '-', '_' or '.'")
    return name
