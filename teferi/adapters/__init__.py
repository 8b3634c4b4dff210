"""
Adapters layer - Time-slot data sources.
"""

from .time_slot_store import InMemoryTimeSlotStore, JsonTimeSlotStore

__all__ = ["InMemoryTimeSlotStore", "JsonTimeSlotStore"]
