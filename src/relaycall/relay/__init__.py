"""Relay service client."""

from relaycall.relay.client import RelayClient

__all__ = ["RelayClient"]
