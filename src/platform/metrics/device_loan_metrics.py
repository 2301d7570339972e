from prometheus_client import Counter, Gauge, Histogram


_CIRCUIT_STATE_VALUE = {'CLOSED': 0, 'HALF_OPEN': 1, 'OPEN': 2}


class DeviceLoanMetrics:
    """
    Device reservation and waitlist metrics

    Tracks reservation outcomes, waitlist notification delivery and the health
    of the outbound notification channel.
    """

    def __init__(self):
        # ========== Reservation Metrics ==========
        self.reservation_requests = Counter(
            'reservation_requests_total',
            'Total reservation requests',
            ['result'],  # result: success/no_inventory/not_found/error
        )

        self.reservation_duration = Histogram(
            'reservation_duration_seconds',
            'Reservation transaction duration',
            buckets=[0.005, 0.01, 0.05, 0.1, 0.2, 0.5, 1.0, 2.0],
        )

        # ========== Waitlist Metrics ==========
        self.waitlist_operations = Counter(
            'waitlist_operations_total',
            'Total waitlist operations',
            ['operation', 'result'],  # operation: join/remove
        )

        self.waitlist_notifications = Counter(
            'waitlist_notifications_total',
            'Waitlist notification outcomes',
            ['result'],  # result: sent/failed/skipped
        )

        # ========== Notification Channel Metrics ==========
        self.circuit_breaker_state = Gauge(
            'circuit_breaker_state',
            'Circuit breaker state (0=closed, 1=half_open, 2=open)',
            ['name'],
        )

    # ========== Helper Methods ==========

    def record_reservation(self, *, result: str, duration: float | None = None):
        self.reservation_requests.labels(result=result).inc()
        if duration is not None:
            self.reservation_duration.observe(duration)

    def record_waitlist_operation(self, *, operation: str, result: str):
        self.waitlist_operations.labels(operation=operation, result=result).inc()

    def record_waitlist_notification(self, *, result: str):
        self.waitlist_notifications.labels(result=result).inc()

    def update_circuit_breaker_state(self, name: str, state: str):
        self.circuit_breaker_state.labels(name=name).set(_CIRCUIT_STATE_VALUE.get(str(state), -1))


# Global metrics instance
metrics = DeviceLoanMetrics()
