"""Outbound transports."""
from .tor import TorTransport

__all__ = ["TorTransport"]
