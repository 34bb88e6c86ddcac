from typing import List

import attrs


ATTENDEE_UPDATE = 'ATTENDEE_UPDATE'


@attrs.frozen
class AttendeeUpdate:
    """Live notification pushed to viewers of one event after book/cancel"""

    event_id: int
    current_attendees: int
    attendees: List[int]

    def to_message(self) -> dict:
        return {
            'type': ATTENDEE_UPDATE,
            'eventId': self.event_id,
            'currentAttendees': self.current_attendees,
            'attendees': list(self.attendees),
        }
