"""Bookkeeping for the clients connected to a game server."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Optional

__all__ = ["ServerFullError", "Client", "ClientPool", "MAX_CLIENTS", "DEFAULT_PORT", "MIN_PORT"]

_log = logging.getLogger(__name__)

MAX_CLIENTS = 2
DEFAULT_PORT = 8099
MIN_PORT = 1024
_PACKET_ID_MODULUS = 1 << 32


class ServerFullError(Exception):
    """Raised when a peer tries to connect while every allowed slot is taken."""


@dataclass
class Client:
    """One client slot."""

    peer: Any = None
    in_use: bool = False
    disconnect_pending: bool = False


class ClientPool:
    """A fixed number of client slots, filled lowest index first."""

    def __init__(self, capacity: int = MAX_CLIENTS) -> None:
        if capacity < 0:
            raise ValueError("capacity must not be negative")
        self.capacity = capacity
        self.clients: list[Client] = [Client() for _ in range(capacity)]
        self.port = DEFAULT_PORT
        self.max_clients = capacity
        self.connected = 0
        self._packet_ids: list[int] = [0] * capacity

    def set_port(self, port: int) -> int:
        """Set the listening port; ports below 1024 fall back to the default."""
        if port < MIN_PORT:
            _log.warning('Variable "port" out of range. Setting to %i.', DEFAULT_PORT)
            port = DEFAULT_PORT
        self.port = port
        return port

    def set_max_clients(self, count: int) -> int:
        """Set how many clients may connect, clamped to ``0..capacity``."""
        if count < 0:
            _log.warning('Variable "maxClients" out of range. Setting to %i.', 0)
            count = 0
        if count > self.capacity:
            _log.warning('Variable "maxClients" out of range. Setting to %i.', self.capacity)
            count = self.capacity
        self.max_clients = count
        return count

    def connect(self, peer: Any) -> int:
        """Give ``peer`` the lowest free slot and return its index.

        Raises ServerFullError when the allowed number of clients is reached.
        """
        if self.connected >= self.max_clients:
            _log.info("%s attempted to connect, but server is full.", peer)
            raise ServerFullError(f"{peer} attempted to connect, but server is full.")
        index = next(i for i, client in enumerate(self.clients) if not client.in_use)
        self.clients[index] = Client(peer=peer, in_use=True, disconnect_pending=False)
        self.connected += 1
        _log.info("%s (Client %i) connected", peer, index)
        return index

    def disconnect(self, index: Optional[int]) -> bool:
        """Free the slot at ``index``; return whether a connected client was removed."""
        if index is None or index < 0:
            return False
        client = self.clients[index]
        if not client.in_use:
            return False
        client.in_use = False
        self.connected -= 1
        _log.info("Client %u disconnected", index)
        return True

    def request_disconnect(self, lua_index: int) -> Client:
        """Mark the client with one-based index ``lua_index`` for disconnection.

        Returns the client so that its peer can be told to disconnect.
        """
        if isinstance(lua_index, bool) or not isinstance(lua_index, int):
            raise TypeError("Argument must be a number.")
        if lua_index <= 0 or lua_index > self.capacity:
            raise ValueError(f"Passed `clientIndex` is invalid: {lua_index}")
        client = self.clients[lua_index - 1]
        client.disconnect_pending = True
        return client

    def active(self) -> Iterator[tuple[int, Client]]:
        """Yield ``(index, client)`` for clients in use and not about to disconnect."""
        for index, client in enumerate(self.clients):
            if client.in_use and not client.disconnect_pending:
                yield index, client

    def next_packet_id(self, index: int) -> int:
        """Return the next packet number for slot ``index`` and advance its counter."""
        packet_id = self._packet_ids[index]
        self._packet_ids[index] = (packet_id + 1) % _PACKET_ID_MODULUS
        return packet_id