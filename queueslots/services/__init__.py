"""
Service layer helpers that orchestrate adapters and domain logic.
"""

from .slot_finder import BusySourceProtocol, SlotFinderService

__all__ = ["BusySourceProtocol", "SlotFinderService"]
