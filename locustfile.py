import uuid

from locust import HttpUser, task, between


class PlayerUser(HttpUser):
    """
    Load test for the play endpoint.
    Each simulated player gets its own user_id cookie, so wallets never collide.
    Run with rate limiting disabled (RATE_LIMIT_ENABLED=false) to measure raw throughput.
    """

    wait_time = between(0.5, 1.5)
    host = "http://127.0.0.1:8000"

    def on_start(self):
        self.client.cookies.set("user_id", f"load-{uuid.uuid4().hex[:12]}")

    def play(self, game_type: str, game_data: dict = None, bet: float = 1):
        body = {"gameType": game_type, "betAmount": bet, "gameData": game_data or {}}
        with self.client.post("/api/games/play", json=body, name=f"play:{game_type}", catch_response=True) as response:
            if response.status_code == 400 and "Insufficient" in response.text:
                # Broke players are expected under sustained load
                response.success()
            elif response.status_code != 200:
                response.failure(f"{response.status_code}: {response.text}")
            else:
                return response.json()
        return None

    @task(5)
    def spin_slots(self):
        self.play("slots")

    @task(3)
    def roll_dice(self):
        self.play("dice", {"prediction": "high"})

    @task(2)
    def keno(self):
        self.play("keno", {"selectedNumbers": [3, 14, 27, 40, 66]})

    @task(2)
    def mines_round(self):
        data = self.play("mines", {"action": "start", "mineCount": 3})
        if not data:
            return
        game_id = data["gameData"]["gameId"]
        data = self.play("mines", {"action": "reveal", "gameId": game_id, "row": 2, "col": 2})
        if data and not data["gameComplete"]:
            self.play("mines", {"action": "cashout", "gameId": game_id})

    @task(1)
    def blackjack_round(self):
        data = self.play("blackjack", {"action": "deal"})
        if data and not data["gameComplete"]:
            self.play("blackjack", {"action": "stand", "gameId": data["gameData"]["gameId"]})

    @task(1)
    def check_balance(self):
        self.client.get("/api/user/balance")
