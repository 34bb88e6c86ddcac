"""
Event Status Enum - Domain Value Object

Lifecycle of an event as shown to browsers of the catalogue.
"""

from enum import StrEnum


class EventStatus(StrEnum):
    UPCOMING = 'upcoming'
    ONGOING = 'ongoing'
    COMPLETED = 'completed'
    CANCELLED = 'cancelled'
