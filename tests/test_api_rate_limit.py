import unittest
from unittest.mock import patch
from fastapi.testclient import TestClient
from casino_engine.main import create_app
from casino_engine.config import settings
from casino_engine.core.economy import Wallet
from casino_engine.core.engine import engine
from casino_engine.routers.api import limiter


class TestApiRateLimit(unittest.TestCase):
    def setUp(self):
        # Create a new app instance for each test to ensure a clean state
        self.app = create_app()

        # Ensure rate limiting is enabled for the test
        for patcher in (
            patch.object(limiter, "enabled", True),
            patch.object(settings.rate_limit, "game_requests", "5/minute"),
            patch.object(engine, "wallet", Wallet(starting_balance=1000.0)),
        ):
            patcher.start()
            self.addCleanup(patcher.stop)
        limiter.reset()
        self.addCleanup(limiter.reset)

    def test_rate_limit_applied_to_play_endpoint(self):
        endpoint = "/api/games/play"
        body = {"gameType": "coinflip", "betAmount": 1, "gameData": {"choice": "heads"}}

        with TestClient(self.app, cookies={"user_id": "1"}) as client:
            # The first 5 requests should succeed
            for i in range(5):
                response = client.post(endpoint, json=body)
                self.assertNotEqual(
                    response.status_code, 429,
                    f"Request {i+1}/6 should have succeeded, but got 429."
                )

            # The 6th request should be rate-limited
            response = client.post(endpoint, json=body)
            self.assertEqual(
                response.status_code, 429,
                f"The 6th request should have been rate-limited (429), but got {response.status_code}."
            )

    def test_read_endpoints_are_not_limited(self):
        with TestClient(self.app, cookies={"user_id": "1"}) as client:
            for _ in range(10):
                self.assertEqual(client.get("/api/user/balance").status_code, 200)


if __name__ == "__main__":
    unittest.main()
