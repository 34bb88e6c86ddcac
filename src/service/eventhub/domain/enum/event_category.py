from enum import StrEnum


class EventCategory(StrEnum):
    MUSIC = 'music'
    SPORTS = 'sports'
    THEATER = 'theater'
    FESTIVALS = 'festivals'
    OTHER = 'other'
