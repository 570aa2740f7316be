"""Pass-through facade over the host process environment."""
from __future__ import annotations

import os
from typing import MutableMapping, Optional

from ..errors import MissingEnvironmentVariableError


class Environment:
    """Read/write access to environment variables.

    Every call reads the backing mapping afresh; nothing is cached.
    """

    def __init__(self, variables: Optional[MutableMapping[str, str]] = None):
        self._variables = os.environ if variables is None else variables

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        return self._variables.get(key, default)

    def require(self, key: str) -> str:
        """Return the value of ``key``.

        Raises:
            MissingEnvironmentVariableError: If the variable is not set
        """
        value = self._variables.get(key)
        if value is None:
            raise MissingEnvironmentVariableError(key)
        return value

    def flag(self, key: str) -> Optional[bool]:
        """Interpret ``key`` as a boolean (``true``/``1``/``yes``), ``None`` if unset."""
        value = self._variables.get(key)
        if value is None:
            return None
        return value.strip().lower() in {"1", "true", "yes", "on"}

    def set(self, key: str, value: str) -> None:
        self._variables[key] = value

    def unset(self, key: str) -> None:
        self._variables.pop(key, None)

    def __contains__(self, key: object) -> bool:
        return key in self._variables
