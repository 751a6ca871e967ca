"""
Baccarat (simplified tableau).

Cards are drawn with replacement (rank 1-13); tens and faces count 0.
Player draws a third card on 0-5. Banker draws a third card on 0-6, but
only when the player stood on two cards.
"""

from casino_engine.core.games.base import BaseGame, SettlementResult
from casino_engine.core.odds import get_game_odds
from typing import List


class BaccaratGame(BaseGame):

    game_type = "baccarat"
    display_name = "Baccarat"

    BET_TYPES = ("player", "banker", "tie")
    PAYOUTS = {
        "player": 2,
        "banker": 1.95,
        "tie": 8,
    }

    PLAYER_DRAWS_ON = 5
    BANKER_DRAWS_ON = 6

    def _deal_card(self, rng) -> int:
        return rng.random_int(1, 13)

    @staticmethod
    def card_value(rank: int) -> int:
        return 0 if rank >= 10 else rank

    def hand_total(self, cards: List[int]) -> int:
        return sum(self.card_value(c) for c in cards) % 10

    def _settle(self, bet_amount, game_data, rng, state) -> SettlementResult:
        bet_type = self._require_choice(self._require_bet(game_data), "type", self.BET_TYPES)
        payouts = {**self.PAYOUTS, **get_game_odds("baccarat").get("payouts", {})}

        player_cards = [self._deal_card(rng), self._deal_card(rng)]
        banker_cards = [self._deal_card(rng), self._deal_card(rng)]

        if self.hand_total(player_cards) <= self.PLAYER_DRAWS_ON:
            player_cards.append(self._deal_card(rng))

        if self.hand_total(banker_cards) <= self.BANKER_DRAWS_ON and len(player_cards) == 2:
            banker_cards.append(self._deal_card(rng))

        player_total = self.hand_total(player_cards)
        banker_total = self.hand_total(banker_cards)

        if player_total > banker_total:
            winner = "player"
        elif banker_total > player_total:
            winner = "banker"
        else:
            winner = "tie"

        multiplier = payouts[winner] if bet_type == winner else 0

        return self._result(
            bet_amount,
            multiplier,
            {
                "playerCards": player_cards,
                "bankerCards": banker_cards,
                "playerTotal": player_total,
                "bankerTotal": banker_total,
                "winner": winner,
                "bet": {"type": bet_type},
                "multiplier": multiplier,
            },
        )


baccarat_game = BaccaratGame()
