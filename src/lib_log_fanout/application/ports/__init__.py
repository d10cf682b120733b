"""Protocols describing the boundaries of the fan-out engine."""

from __future__ import annotations

from .destination import DeliveryQueuePort, DestinationPort
from .identity import ThreadLabelPort

__all__ = ["DeliveryQueuePort", "DestinationPort", "ThreadLabelPort"]
