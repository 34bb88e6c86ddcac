# API Route Constants

# Base API
API_BASE = '/api'

# User routes
USER_BASE = f'{API_BASE}/users'
USER_REGISTER = f'{USER_BASE}/register'
USER_LOGIN = f'{USER_BASE}/login'
USER_LOGOUT = f'{USER_BASE}/logout'
USER_PROFILE = f'{USER_BASE}/profile'
USER_EVENTS = f'{USER_BASE}/events'
USER_EVENTS_SUMMARY = f'{USER_BASE}/events/summary'
USER_EVENT_GET = f'{USER_BASE}/events/{{event_id}}'

# Event routes
EVENT_BASE = f'{API_BASE}/events'
EVENT_LIST = EVENT_BASE
EVENT_CREATE = EVENT_BASE
EVENT_MY_EVENTS = f'{EVENT_BASE}/my-events'
EVENT_GET = f'{EVENT_BASE}/{{event_id}}'
EVENT_UPDATE = f'{EVENT_BASE}/{{event_id}}'
EVENT_DELETE = f'{EVENT_BASE}/{{event_id}}'
EVENT_ATTENDEES = f'{EVENT_BASE}/{{event_id}}/attendees'
EVENT_WS = f'{EVENT_BASE}/{{event_id}}/ws'
EVENT_SSE = f'{EVENT_BASE}/{{event_id}}/sse'

# Ticket routes
TICKET_BASE = f'{API_BASE}/tickets'
TICKET_BOOK = TICKET_BASE
TICKET_LIST = TICKET_BASE
TICKET_GET = f'{TICKET_BASE}/{{ticket_id}}'
TICKET_CANCEL = f'{TICKET_BASE}/{{ticket_id}}/cancel'

# System routes
HEALTH = '/health'
METRICS = '/metrics'
