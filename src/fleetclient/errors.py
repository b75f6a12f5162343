"""Errors raised by the fleet client."""


class CliError(Exception):
    exit_code = 1


class ConfigError(CliError):
    """Config file cannot be created, read or written."""


class MissingTarget(CliError):
    """Operation needs a target but none is set."""


class DuplicateCommand(CliError):
    pass


class InvalidName(CliError):
    pass
