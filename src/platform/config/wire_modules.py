"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.eventhub.app.command import (
    book_ticket_use_case,
    cancel_ticket_use_case,
    create_event_use_case,
    delete_event_use_case,
    register_user_use_case,
    update_event_use_case,
)
from src.service.eventhub.app.query import (
    get_attendee_stats_use_case,
    get_event_use_case,
    get_owner_dashboard_use_case,
    get_ticket_use_case,
    list_event_attendees_use_case,
    list_events_use_case,
    list_my_tickets_use_case,
)
from src.service.eventhub.driving_adapter.http_controller import (
    event_controller,
    ticket_controller,
    user_controller,
)
from src.service.eventhub.driving_adapter.http_controller.auth import role_auth


WIRE_MODULES: list[ModuleType] = [
    book_ticket_use_case,
    cancel_ticket_use_case,
    create_event_use_case,
    update_event_use_case,
    delete_event_use_case,
    register_user_use_case,
    get_attendee_stats_use_case,
    list_event_attendees_use_case,
    list_my_tickets_use_case,
    get_ticket_use_case,
    list_events_use_case,
    get_event_use_case,
    get_owner_dashboard_use_case,
    role_auth,
    user_controller,
    event_controller,
    ticket_controller,
]
