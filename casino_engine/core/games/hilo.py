"""
Hi-Lo card game - guess if the next card is higher or lower.
Build a streak for a growing multiplier (1.5 ** streak), cash out anytime.
Equal ranks lose.
"""

from casino_engine.core.games.base import MultiStepGame, SettlementResult
from casino_engine.core.odds import get_game_odds


class HiLoGame(MultiStepGame):

    game_type = "hilo"
    display_name = "Hi-Lo"

    start_action = "start"
    actions = ("start", "predict", "cashout")
    PREDICTIONS = ("higher", "lower")

    SUITS = ["♠", "♥", "♦", "♣"]
    CARD_NAMES = {1: "A", 11: "J", 12: "Q", 13: "K"}

    STREAK_BASE = 1.5

    def _streak_base(self) -> float:
        return get_game_odds("hilo").get("streak_base", self.STREAK_BASE)

    def multiplier_for(self, streak: int) -> float:
        return self._streak_base() ** streak

    def _draw_card(self, rng) -> dict:
        """Rank decides the game; the suit is cosmetic."""
        return {"rank": rng.random_int(1, 13), "suit": rng.random_choice(self.SUITS)}

    def card_display(self, card: dict) -> str:
        return f"{self.CARD_NAMES.get(card['rank'], str(card['rank']))}{card['suit']}"

    def _view(self, state: dict, multiplier: float, game_over: bool) -> dict:
        view = {
            "currentCard": state["card"]["rank"],
            "currentCardDisplay": self.card_display(state["card"]),
            "streak": state["streak"],
            "multiplier": multiplier,
            "gameOver": game_over,
        }
        if not game_over:
            view["nextMultiplier"] = self.multiplier_for(state["streak"] + 1)
        return view

    def start(self, bet_amount, game_data, rng) -> SettlementResult:
        state = {"card": self._draw_card(rng), "streak": 0}
        return self._result(
            bet_amount, 1, self._view(state, 1, game_over=False), game_complete=False, state=state
        )

    def predict(self, bet_amount, game_data, rng, state) -> SettlementResult:
        prediction = self._require_choice(game_data, "prediction", self.PREDICTIONS)

        current = state["card"]
        next_card = self._draw_card(rng)

        if prediction == "higher":
            correct = next_card["rank"] > current["rank"]
        else:
            correct = next_card["rank"] < current["rank"]

        if not correct:
            view = self._view(state, 0, game_over=True)
            view.update(
                nextCard=next_card["rank"],
                nextCardDisplay=self.card_display(next_card),
                prediction=prediction,
                correct=False,
            )
            return self._result(bet_amount, 0, view)

        state = {"card": next_card, "streak": state["streak"] + 1}
        multiplier = self.multiplier_for(state["streak"])
        view = self._view(state, multiplier, game_over=False)
        view.update(
            previousCard=current["rank"],
            previousCardDisplay=self.card_display(current),
            prediction=prediction,
            correct=True,
        )
        return self._result(bet_amount, multiplier, view, game_complete=False, state=state)

    def cashout(self, bet_amount, game_data, rng, state) -> SettlementResult:
        multiplier = self.multiplier_for(state["streak"])
        view = self._view(state, multiplier, game_over=True)
        view["cashedOut"] = True
        return self._result(bet_amount, multiplier, view)


hilo_game = HiLoGame()
