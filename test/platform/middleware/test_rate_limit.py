"""
Unit tests for request throttling

Test Focus:
1. Up to max_requests per key per window, then rejected with retry_after
2. A new window starts once the old one expires
3. Keys are independent (per user / per endpoint)
4. Middleware answers 429 with Retry-After and the standard error body
"""

from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from src.platform.constant.route_constant import USER_ID_HEADER
from src.platform.middleware.rate_limit import FixedWindowRateLimiter, RateLimitMiddleware


pytestmark = pytest.mark.unit


class FakeClock:
    def __init__(self) -> None:
        self.now = 500.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def limiter(clock: FakeClock) -> FixedWindowRateLimiter:
    return FixedWindowRateLimiter(max_requests=3, window_seconds=60.0, clock=clock)


class TestFixedWindowRateLimiter:
    def test_rejects_after_max_requests(self, limiter: FixedWindowRateLimiter, clock: FakeClock):
        """
        Given: a limit of 3 requests per 60s
        When: the same key sends a 4th request 20s into the window
        Then: it is rejected and told to retry when the window ends
        """
        assert all(limiter.hit('user:a:GET:/x').allowed for _ in range(3))
        clock.advance(20)

        decision = limiter.hit('user:a:GET:/x')

        assert decision.allowed is False
        assert decision.retry_after == 40

    def test_window_expiry_starts_a_new_window(
        self, limiter: FixedWindowRateLimiter, clock: FakeClock
    ):
        for _ in range(4):
            limiter.hit('user:a:GET:/x')
        clock.advance(60)

        assert limiter.hit('user:a:GET:/x').allowed is True

    def test_keys_are_counted_separately(self, limiter: FixedWindowRateLimiter):
        for _ in range(3):
            limiter.hit('user:a:GET:/x')

        assert limiter.hit('user:a:GET:/x').allowed is False
        assert limiter.hit('user:b:GET:/x').allowed is True
        assert limiter.hit('user:a:POST:/x').allowed is True

    def test_reset_clears_the_key(self, limiter: FixedWindowRateLimiter):
        for _ in range(3):
            limiter.hit('ip:10.0.0.1:GET:/x')

        limiter.reset('ip:10.0.0.1:GET:/x')

        assert limiter.hit('ip:10.0.0.1:GET:/x').allowed is True

    def test_expired_windows_are_swept(self, limiter: FixedWindowRateLimiter, clock: FakeClock):
        limiter.hit('user:a:GET:/x')
        limiter.hit('user:b:GET:/x')
        clock.advance(61)

        limiter.hit('user:c:GET:/x')

        assert limiter.tracked_keys == 1

    @pytest.mark.parametrize('max_requests, window_seconds', [(0, 60.0), (1, 0.0)])
    def test_invalid_configuration_is_rejected(self, max_requests: int, window_seconds: float):
        with pytest.raises(ValueError):
            FixedWindowRateLimiter(max_requests=max_requests, window_seconds=window_seconds)


@pytest.fixture
def throttled_client(limiter: FixedWindowRateLimiter) -> TestClient:
    app = FastAPI()
    app.add_middleware(RateLimitMiddleware, limiter=limiter)  # type: ignore

    @app.get('/api/ping')
    async def ping() -> dict[str, str]:
        return {'status': 'ok'}

    @app.get('/health')
    async def health() -> dict[str, str]:
        return {'status': 'healthy'}

    return TestClient(app)


class TestRateLimitMiddleware:
    def test_over_limit_returns_429(self, throttled_client: TestClient):
        """
        Given: a limit of 3 requests per window
        When: one user calls the same endpoint 4 times
        Then: the 4th call gets 429 with Retry-After and code RATE_LIMITED
        """
        headers = {USER_ID_HEADER: 'user-a'}
        for _ in range(3):
            assert throttled_client.get('/api/ping', headers=headers).status_code == 200

        response = throttled_client.get('/api/ping', headers=headers)

        assert response.status_code == 429
        assert response.headers['Retry-After'] == '60'
        assert response.json() == {
            'detail': 'Too many requests. Please try again later.',
            'code': 'RATE_LIMITED',
        }

    def test_other_user_is_not_throttled(self, throttled_client: TestClient):
        for _ in range(4):
            throttled_client.get('/api/ping', headers={USER_ID_HEADER: 'user-a'})

        response = throttled_client.get('/api/ping', headers={USER_ID_HEADER: 'user-b'})

        assert response.status_code == 200

    def test_health_is_exempt(self, throttled_client: TestClient):
        responses = [throttled_client.get('/health') for _ in range(5)]

        assert all(r.status_code == 200 for r in responses)
