"""EventHub Domain Value Objects"""

from src.service.eventhub.domain.value_object.attendee_stats import AttendeeStats
from src.service.eventhub.domain.value_object.attendee_update import AttendeeUpdate
from src.service.eventhub.domain.value_object.summary import EventSummary, UserSummary

__all__ = ['AttendeeStats', 'AttendeeUpdate', 'EventSummary', 'UserSummary']
