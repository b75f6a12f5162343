"""Configuration store for the fleet client.

The config file is a single JSON document holding per-target credentials,
aliases, per-target deployments and a few global attributes. Any key can
also be overridden for a working directory: the document then holds a
mapping keyed by the absolute directory path.
"""
import copy
import json
import logging
import os
from pathlib import Path
from typing import Any, Optional

from .errors import ConfigError, MissingTarget

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".fleet_config"
CONFIG_FILE_MODE = 0o600


def _global_attribute(attr: str) -> property:
    """Attribute always read from and written to the top of the document."""

    def getter(self: "ConfigStore") -> Any:
        return self.read(attr, try_local_first=False)

    def setter(self: "ConfigStore", value: Any) -> None:
        self.write_global(attr, value)

    return property(getter, setter, doc=f"Global `{attr}` setting.")


class ConfigStore:
    """Typed access to the fleet config file.

    The file is read once on construction and only written back by `save()`
    (or by `deployment()` when it upgrades an old config).
    """

    target = _global_attribute("target")
    target_name = _global_attribute("target_name")
    target_version = _global_attribute("target_version")
    release = _global_attribute("release")
    target_uuid = _global_attribute("target_uuid")
    status_timeout = _global_attribute("status_timeout")

    def __init__(self, filename: Optional[str | Path] = None, work_dir: Optional[str] = None):
        self._filename = Path(os.path.abspath(os.path.expanduser(filename or DEFAULT_CONFIG_PATH)))
        self._work_dir = work_dir or os.getcwd()

        try:
            if not self._filename.exists():
                self._filename.write_text(self._dump({}))
                self._filename.chmod(CONFIG_FILE_MODE)
                logger.debug("Created config file %s", self._filename)
            raw = self._filename.read_bytes()
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}") from e

        self._data = self._parse(raw)

    @property
    def filename(self) -> Path:
        """Absolute path of the config file."""
        return self._filename

    @property
    def work_dir(self) -> str:
        return self._work_dir

    def _parse(self, raw: bytes) -> dict:
        try:
            data = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError):
            data = None
        if not isinstance(data, dict):
            # Malformed config is ignored, not reported
            logger.debug("Ignoring malformed config file %s", self._filename)
            return {}
        return data

    @staticmethod
    def _dump(data: dict) -> str:
        return json.dumps(data, indent=2) + "\n"

    def to_dict(self) -> dict:
        """Return a copy of the whole document."""
        return copy.deepcopy(self._data)

    # === Scoped access ===

    def read(self, attr: str, try_local_first: bool = True) -> Any:
        """Read `attr`, preferring the working directory's value if asked."""
        attr = str(attr)
        local = self._data.get(self._work_dir)
        if try_local_first and isinstance(local, dict) and attr in local:
            return local[attr]
        return self._data.get(attr)

    def write(self, attr: str, value: Any) -> None:
        """Set `attr` for the current working directory only."""
        local = self._data.get(self._work_dir)
        if not isinstance(local, dict):
            local = self._data[self._work_dir] = {}
        local[str(attr)] = value

    def write_global(self, attr: str, value: Any) -> None:
        """Set `attr` at the top level of the document."""
        self._data[str(attr)] = value

    # === Credentials ===

    def credentials_for(self, target: str) -> dict:
        """Return the username/password record stored for `target`."""
        auth = self._data.get("auth")
        if isinstance(auth, dict) and isinstance(auth.get(target), dict):
            return auth[target]
        return {"username": None, "password": None}

    def set_credentials(self, target: str, username: Optional[str], password: Optional[str]) -> None:
        """Store credentials for `target`, replacing any previous ones."""
        if not isinstance(self._data.get("auth"), dict):
            self._data["auth"] = {}
        self._data["auth"][target] = {"username": username, "password": password}

    def username(self, target: str) -> Optional[str]:
        """Username stored for `target`."""
        return self.credentials_for(target).get("username")

    def password(self, target: str) -> Optional[str]:
        """Password stored for `target`."""
        return self.credentials_for(target).get("password")

    # === Aliases ===

    def set_alias(self, category: Any, alias_name: str, value: str) -> None:
        """Set an alias in `category`."""
        if not isinstance(self._data.get("aliases"), dict):
            self._data["aliases"] = {}
        aliases = self._data["aliases"]
        category = str(category)
        if not isinstance(aliases.get(category), dict):
            aliases[category] = {}
        aliases[category][alias_name] = value

    def aliases(self, category: Any) -> Optional[dict]:
        """Return all aliases in `category`, or None if there are none."""
        aliases = self._data.get("aliases")
        if not isinstance(aliases, dict):
            return None
        category_aliases = aliases.get(str(category))
        return category_aliases if isinstance(category_aliases, dict) else None

    def resolve_alias(self, category: Any, alias_name: str) -> Optional[str]:
        """Return the aliased value, or None if unset or empty."""
        category_aliases = self.aliases(category)
        if category_aliases is None:
            return None
        value = category_aliases.get(alias_name)
        if isinstance(value, str) and len(value) > 0:
            return value
        return None

    # === Deployments ===

    def is_old_deployment_config(self) -> bool:
        """
        Deployment used to be a single string for whatever target was
        current. Newer configs map each target to its own deployment.
        """
        return isinstance(self._data.get("deployment"), str)

    def deployment(self, name: Optional[str] = None) -> Optional[str]:
        """
        Return the deployment path for `name`, or for the current target.

        An old-style deployment string is converted to the per-target
        mapping under the current target and saved to disk right away.
        """
        target = self.target
        if name is None and target is None:
            return None
        if "deployment" not in self._data:
            return None

        if self.is_old_deployment_config():
            if target is None:
                return None
            self._data["deployment"] = {target: self._data["deployment"]}
            logger.debug("Converted old deployment config for target %s", target)
            self.save()

        deployments = self._data["deployment"]
        if isinstance(deployments, dict):
            return deployments.get(name if name is not None else target)
        return None

    def set_deployment(self, deployment_file_path: str, name: Optional[str] = None) -> None:
        """
        Set the deployment path for `name`, or for the current target.

        Raises MissingTarget if there is neither. An old-style deployment
        string is dropped.
        """
        target = self.target
        if name is None and target is None:
            raise MissingTarget("Must have a target set")
        if not isinstance(self._data.get("deployment"), dict):
            self._data["deployment"] = {}
        self._data["deployment"][name if name is not None else target] = deployment_file_path

    def remove_deployment(self, name: str) -> None:
        """Remove a named deployment entry."""
        deployments = self._data.get("deployment")
        if isinstance(deployments, dict):
            deployments.pop(name, None)

    # === Persistence ===

    def save(self) -> None:
        """Write the whole document back to the config file."""
        try:
            self._filename.write_text(self._dump(self._data))
        except OSError as e:
            raise ConfigError(str(e)) from e
        logger.debug("Saved config to %s", self._filename)
