"""
Mock collaborators for exercising the client without a live wallet API.
"""
from .wallet_server import DEFAULT_PAYLOADS, MockWalletAdapter, MockWalletServer

__all__ = ["DEFAULT_PAYLOADS", "MockWalletAdapter", "MockWalletServer"]
