"""Secret backends.

The engine only needs "resolve this secret to bytes"; each backend decides
where the value comes from.
"""
from __future__ import annotations

import base64
import binascii
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Awaitable, Callable, Optional, Union

from ..errors import CIFlowError
from .environment import Environment

Transform = Callable[[bytes], Union[bytes, Awaitable[bytes]]]


class SecretError(CIFlowError):
    """Base class for secret resolution failures."""


class MissingEnvironmentSecretError(SecretError):
    """The environment variable backing a secret is not set."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Missing environment secret: {key}")


class MissingFileSecretError(SecretError):
    """The file backing a secret does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Missing secret file: {path}")


class SecretDecodeError(SecretError):
    """The raw secret value could not be decoded."""


class Secret(ABC):
    """Anything that can be resolved to secret bytes."""

    @abstractmethod
    async def get(self) -> bytes:
        """Resolve the secret value."""


def decode_base64(data: bytes) -> bytes:
    """Decode base64, discarding characters outside the alphabet (e.g. line breaks).

    Raises:
        SecretDecodeError: If the remaining characters are not valid base64
    """
    try:
        return base64.b64decode(data, validate=False)
    except (binascii.Error, ValueError) as e:
        raise SecretDecodeError("Failed to base64-decode secret") from e


class EnvironmentSecret(Secret):
    """Secret read from an environment variable, optionally transformed."""

    def __init__(
        self,
        key: str,
        transform: Optional[Transform] = None,
        environment: Optional[Environment] = None,
    ):
        self.key = key
        self.transform = transform
        self.environment = environment

    @classmethod
    def value(cls, key: str) -> "EnvironmentSecret":
        return cls(key)

    @classmethod
    def base64_encoded_value(cls, key: str) -> "EnvironmentSecret":
        return cls(key, transform=decode_base64)

    async def get(self) -> bytes:
        environment = self.environment or Environment()
        value = environment.get(self.key)
        if value is None:
            raise MissingEnvironmentSecretError(self.key)

        data = value.encode("utf-8")
        if self.transform is not None:
            processed = self.transform(data)
            if isinstance(processed, (bytes, bytearray)):
                data = bytes(processed)
            else:
                data = await processed
        return data

    def __repr__(self) -> str:
        return f"EnvironmentSecret(key={self.key!r})"


class FileSecret(Secret):
    """Secret stored in a file on disk."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    async def get(self) -> bytes:
        if not self.path.is_file():
            raise MissingFileSecretError(self.path)
        return self.path.read_bytes()

    def __repr__(self) -> str:
        return f"FileSecret(path={str(self.path)!r})"
