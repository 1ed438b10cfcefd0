"""Messaging service contract.

A Glue connects CampFire to an external chat-like service (microblogging,
SMS gateway, IRC) so attendees can propose and vote on talks by message.
The record layer never calls a Glue itself; hook handlers registered on
``record.*`` are the usual bridge.

Usage::

    class EchoGlue(Glue):
        def read_private(self):
            return []

        def read_public(self):
            return []

        def send(self, message, *, to=None):
            print(message)
            return True

    glue = EchoGlue({"account": "cfm"})
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from campfire.core.errors import MissingConfigError


class Glue(ABC):
    """Base class for messaging service connectors.

    Subclasses list the configuration keys they cannot work without in
    ``required_config``; construction fails with
    :class:`~campfire.core.errors.MissingConfigError` if one is absent.
    """

    required_config: tuple[str, ...] = ()

    def __init__(self, config: Mapping[str, Any] | None = None) -> None:
        self._config: dict[str, Any] = dict(config or {})
        for key in self.required_config:
            if self._config.get(key) in (None, ""):
                raise MissingConfigError(key)

    @property
    def config(self) -> dict[str, Any]:
        return dict(self._config)

    @abstractmethod
    def read_private(self) -> list[Any]:
        """Fetch direct messages addressed to this service account."""
        ...

    @abstractmethod
    def read_public(self) -> list[Any]:
        """Fetch public messages mentioning this service account."""
        ...

    @abstractmethod
    def send(self, message: str, *, to: str | None = None) -> bool:
        """Post ``message``, privately to ``to`` when given. Returns whether it was accepted."""
        ...


__all__ = ["Glue"]
