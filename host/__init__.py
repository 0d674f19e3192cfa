"""Websocket host that exposes the dealer's command surface to remote clients."""

from .server import HostServer

__all__ = ["HostServer"]
