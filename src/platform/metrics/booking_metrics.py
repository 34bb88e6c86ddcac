from prometheus_client import Counter, Gauge, Histogram


class BookingMetrics:
    """
    Booking core metrics collector

    Tracks booking/cancel outcomes, attendee counts per event and live-update
    fan-out. Scraped from GET /metrics.
    """

    def __init__(self) -> None:
        # ========== Booking Engine ==========
        self.booking_requests = Counter(
            'eventhub_booking_requests_total',
            'Ticket booking requests by outcome',
            ['result'],  # success/capacity_exceeded/duplicate/not_found/conflict
        )

        self.booking_duration = Histogram(
            'eventhub_booking_duration_seconds',
            'Ticket booking processing time (lock wait included)',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0],
        )

        self.cancel_requests = Counter(
            'eventhub_cancel_requests_total',
            'Ticket cancel requests by outcome',
            ['result'],
        )

        self.cas_retries = Counter(
            'eventhub_booking_cas_retries_total',
            'Event updates rejected by the version check and retried',
            ['operation'],  # book/cancel
        )

        self.event_attendees = Gauge(
            'eventhub_event_attendees',
            'Current attendees per event',
            ['event_id'],
        )

        # ========== Live Update Broadcaster ==========
        self.broadcast_messages = Counter(
            'eventhub_broadcast_messages_total',
            'Attendee update messages per subscriber by outcome',
            ['outcome'],  # delivered/dropped
        )

        self.broadcast_subscribers = Gauge(
            'eventhub_broadcast_subscribers',
            'Connected live-update subscribers',
        )

    # ========== Helper Methods ==========

    def record_booking(self, *, result: str, duration: float) -> None:
        self.booking_requests.labels(result=result).inc()
        self.booking_duration.observe(duration)

    def record_cancel(self, *, result: str) -> None:
        self.cancel_requests.labels(result=result).inc()

    def record_cas_retry(self, *, operation: str) -> None:
        self.cas_retries.labels(operation=operation).inc()

    def update_event_attendees(self, *, event_id: int, current: int) -> None:
        self.event_attendees.labels(event_id=str(event_id)).set(current)

    def record_broadcast(self, *, delivered: int, dropped: int) -> None:
        if delivered:
            self.broadcast_messages.labels(outcome='delivered').inc(delivered)
        if dropped:
            self.broadcast_messages.labels(outcome='dropped').inc(dropped)


# Global metrics instance
metrics = BookingMetrics()
