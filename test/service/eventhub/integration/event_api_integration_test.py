"""
Integration tests for the event catalogue and owner operations

Test Coverage:
1. Create and read events (owner and attendee details resolved)
2. Listing: category filter, search, sort
3. Update: owner only, capacity not editable
4. Delete: owner only, blocked while attendees remain
5. Owner dashboard and summary
"""

from fastapi.testclient import TestClient

from src.platform.constant.route_constant import (
    EVENT_CREATE,
    EVENT_DELETE,
    EVENT_GET,
    EVENT_LIST,
    EVENT_MY_EVENTS,
    EVENT_UPDATE,
    USER_EVENT_GET,
    USER_EVENTS,
    USER_EVENTS_SUMMARY,
)
from test.shared.utils import (
    assert_response_status,
    book_ticket,
    cancel_ticket,
    create_event,
    get_event,
)
from test.util_constant import DEFAULT_EVENT_PAYLOAD, PAST_EVENT_DATE


class TestCreateEvent:
    def test_create_event(self, client: TestClient, owner):
        # When
        response = client.post(EVENT_CREATE, json=DEFAULT_EVENT_PAYLOAD, headers=owner['headers'])

        # Then
        assert_response_status(response, 201)
        event = response.json()
        assert event['title'] == DEFAULT_EVENT_PAYLOAD['title']
        assert event['eventDate'] == DEFAULT_EVENT_PAYLOAD['eventDate']
        assert event['ownerId'] == owner['id']
        assert event['maxAttendees'] == 100
        assert event['currentAttendees'] == 0
        assert event['attendees'] == []
        assert event['status'] == 'upcoming'

    def test_create_event_requires_login(self, client: TestClient):
        response = client.post(EVENT_CREATE, json=DEFAULT_EVENT_PAYLOAD)

        assert_response_status(response, 401)

    def test_create_event_with_invalid_time_returns_400(self, client: TestClient, owner):
        response = client.post(
            EVENT_CREATE, json={**DEFAULT_EVENT_PAYLOAD, 'eventTime': '7pm'}, headers=owner['headers']
        )

        assert_response_status(response, 400)

    def test_create_event_with_zero_capacity_returns_400(self, client: TestClient, owner):
        response = client.post(
            EVENT_CREATE, json={**DEFAULT_EVENT_PAYLOAD, 'maxAttendees': 0}, headers=owner['headers']
        )

        assert_response_status(response, 400)


class TestGetEvent:
    def test_get_event_resolves_owner_and_attendees(self, client: TestClient, owner, user_a):
        event = create_event(client, owner['headers'])
        book_ticket(client, user_a['headers'], event['id'])

        detail = get_event(client, event['id'])

        assert detail['owner']['email'] == owner['email']
        assert [a['id'] for a in detail['attendeeDetails']] == [user_a['id']]
        assert detail['currentAttendees'] == 1

    def test_get_missing_event_returns_404(self, client: TestClient):
        response = client.get(EVENT_GET.format(event_id=999999))

        assert_response_status(response, 404)


class TestListEvents:
    def test_filter_by_category_and_search(self, client: TestClient, owner):
        # Given
        create_event(client, owner['headers'], title='Jazz Night', category='music')
        create_event(
            client,
            owner['headers'],
            title='City Marathon',
            category='sports',
            description='42 km through the old town',
        )
        create_event(
            client,
            owner['headers'],
            title='Rock Fest',
            category='festivals',
            description='Loud guitars and jazz fusion',
        )

        # When/Then: Category filter
        response = client.get(EVENT_LIST, params={'category': 'sports'})
        assert_response_status(response, 200)
        assert [e['title'] for e in response.json()] == ['City Marathon']

        # When/Then: Search covers title and description
        response = client.get(EVENT_LIST, params={'search': 'jazz'})
        assert sorted(e['title'] for e in response.json()) == ['Jazz Night', 'Rock Fest']

        # When/Then: 'all' means no category filter
        response = client.get(EVENT_LIST, params={'category': 'all'})
        assert len(response.json()) == 3

    def test_sort_by_date(self, client: TestClient, owner):
        create_event(client, owner['headers'], title='Later', eventDate='2099-12-01')
        create_event(client, owner['headers'], title='Sooner', eventDate='2099-01-01')

        ascending = client.get(EVENT_LIST, params={'sort': 'date'}).json()
        descending = client.get(EVENT_LIST, params={'sort': '-date'}).json()

        assert [e['title'] for e in ascending] == ['Sooner', 'Later']
        assert [e['title'] for e in descending] == ['Later', 'Sooner']

    def test_unknown_sort_returns_400(self, client: TestClient):
        response = client.get(EVENT_LIST, params={'sort': 'price'})

        assert_response_status(response, 400)

    def test_my_events_lists_only_own_events(self, client: TestClient, owner, user_a):
        create_event(client, owner['headers'], title='Owner Event')
        create_event(client, user_a['headers'], title='Alice Event')

        response = client.get(EVENT_MY_EVENTS, headers=user_a['headers'])

        assert_response_status(response, 200)
        assert [e['title'] for e in response.json()] == ['Alice Event']


class TestUpdateEvent:
    def test_owner_updates_event(self, client: TestClient, owner):
        event = create_event(client, owner['headers'])

        response = client.put(
            EVENT_UPDATE.format(event_id=event['id']),
            json={'title': 'Renamed', 'location': 'Main Hall'},
            headers=owner['headers'],
        )

        assert_response_status(response, 200)
        body = response.json()
        assert body['title'] == 'Renamed'
        assert body['location'] == 'Main Hall'
        assert body['description'] == event['description']
        assert get_event(client, event['id'])['title'] == 'Renamed'

    def test_non_owner_update_returns_403(self, client: TestClient, owner, user_a):
        event = create_event(client, owner['headers'])

        response = client.put(
            EVENT_UPDATE.format(event_id=event['id']),
            json={'title': 'Hijacked'},
            headers=user_a['headers'],
        )

        assert_response_status(response, 403)
        assert get_event(client, event['id'])['title'] == event['title']

    def test_capacity_is_not_editable(self, client: TestClient, owner):
        event = create_event(client, owner['headers'], maxAttendees=2)

        response = client.put(
            EVENT_UPDATE.format(event_id=event['id']),
            json={'maxAttendees': 500},
            headers=owner['headers'],
        )

        assert_response_status(response, 400)
        assert response.json()['errors'][0]['field'] == 'body.maxAttendees'
        assert get_event(client, event['id'])['maxAttendees'] == 2

    def test_update_keeps_attendance(self, client: TestClient, owner, user_a):
        event = create_event(client, owner['headers'])
        book_ticket(client, user_a['headers'], event['id'])

        client.put(
            EVENT_UPDATE.format(event_id=event['id']),
            json={'title': 'Renamed'},
            headers=owner['headers'],
        )

        detail = get_event(client, event['id'])
        assert detail['attendees'] == [user_a['id']]
        assert detail['currentAttendees'] == 1

    def test_update_missing_event_returns_404(self, client: TestClient, owner):
        response = client.put(
            EVENT_UPDATE.format(event_id=999999), json={'title': 'x'}, headers=owner['headers']
        )

        assert_response_status(response, 404)


class TestDeleteEvent:
    def test_owner_deletes_event_without_attendees(self, client: TestClient, owner):
        event = create_event(client, owner['headers'])

        response = client.delete(EVENT_DELETE.format(event_id=event['id']), headers=owner['headers'])

        assert_response_status(response, 200)
        assert response.json() == {'message': 'Event deleted successfully'}
        assert_response_status(client.get(EVENT_GET.format(event_id=event['id'])), 404)

    def test_delete_with_attendees_returns_409(self, client: TestClient, owner, user_a):
        event = create_event(client, owner['headers'])
        book_ticket(client, user_a['headers'], event['id'])

        response = client.delete(EVENT_DELETE.format(event_id=event['id']), headers=owner['headers'])

        assert_response_status(response, 409)
        assert get_event(client, event['id'])['currentAttendees'] == 1

    def test_delete_after_last_attendee_cancels(self, client: TestClient, owner, user_a):
        event = create_event(client, owner['headers'])
        ticket = book_ticket(client, user_a['headers'], event['id']).json()
        cancel_ticket(client, user_a['headers'], ticket['id'])

        response = client.delete(EVENT_DELETE.format(event_id=event['id']), headers=owner['headers'])

        assert_response_status(response, 200)

    def test_non_owner_delete_returns_403(self, client: TestClient, owner, user_a):
        event = create_event(client, owner['headers'])

        response = client.delete(
            EVENT_DELETE.format(event_id=event['id']), headers=user_a['headers']
        )

        assert_response_status(response, 403)


class TestOwnerDashboard:
    def test_dashboard_groups_and_stats(self, client: TestClient, owner, user_a, user_b):
        # Given: One upcoming event with two attendees, one past event
        upcoming = create_event(client, owner['headers'], title='Upcoming', maxAttendees=2)
        create_event(client, owner['headers'], title='Past', eventDate=PAST_EVENT_DATE)
        book_ticket(client, user_a['headers'], upcoming['id'])
        book_ticket(client, user_b['headers'], upcoming['id'])

        # When
        response = client.get(USER_EVENTS, headers=owner['headers'])

        # Then
        assert_response_status(response, 200)
        body = response.json()
        assert body['stats'] == {'total': 2, 'upcoming': 1, 'completed': 1, 'totalAttendees': 2}
        assert [e['title'] for e in body['grouped']['upcoming']] == ['Upcoming']
        assert [e['title'] for e in body['grouped']['completed']] == ['Past']
        upcoming_view = body['grouped']['upcoming'][0]
        assert upcoming_view['stats'] == {
            'totalAttendees': 2,
            'isFull': True,
            'spotsLeft': 0,
            'status': 'upcoming',
        }

    def test_summary(self, client: TestClient, owner, user_a):
        event = create_event(client, owner['headers'], category='sports')
        create_event(client, owner['headers'], category='sports', eventDate=PAST_EVENT_DATE)
        create_event(client, owner['headers'], category='music')
        book_ticket(client, user_a['headers'], event['id'])

        response = client.get(USER_EVENTS_SUMMARY, headers=owner['headers'])

        assert_response_status(response, 200)
        assert response.json() == {
            'totalEvents': 3,
            'upcomingEvents': 2,
            'pastEvents': 1,
            'totalAttendees': 1,
            'averageAttendees': 0,
            'mostPopularCategory': 'sports',
        }

    def test_owner_event_of_other_owner_returns_404(self, client: TestClient, owner, user_a):
        event = create_event(client, owner['headers'])

        response = client.get(USER_EVENT_GET.format(event_id=event['id']), headers=user_a['headers'])

        assert_response_status(response, 404)

    def test_owner_event_detail(self, client: TestClient, owner, user_a):
        event = create_event(client, owner['headers'], maxAttendees=3)
        book_ticket(client, user_a['headers'], event['id'])

        response = client.get(USER_EVENT_GET.format(event_id=event['id']), headers=owner['headers'])

        assert_response_status(response, 200)
        body = response.json()
        assert body['stats']['spotsLeft'] == 2
        assert [a['name'] for a in body['attendeeDetails']] == [user_a['name']]
