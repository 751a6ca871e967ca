from casino_engine.core.games.base import MultiStepGame, SettlementResult
from typing import List, Dict


class Card:
    """Represents a playing card."""

    SUITS = ["♠", "♥", "♦", "♣"]
    RANKS = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]

    def __init__(self, rank: str, suit: str):
        self.rank = rank
        self.suit = suit

    @property
    def value(self) -> int:
        """Blackjack value; an ace counts 11 here and is downgraded by the hand."""
        if self.rank in ["J", "Q", "K"]:
            return 10
        elif self.rank == "A":
            return 11
        else:
            return int(self.rank)

    @classmethod
    def from_dict(cls, data: Dict) -> "Card":
        return cls(data["rank"], data["suit"])

    def to_dict(self) -> Dict:
        return {"rank": self.rank, "suit": self.suit}

    def __repr__(self):
        return f"{self.rank}{self.suit}"


class BlackjackHand:
    """Represents a blackjack hand."""

    def __init__(self, cards: List[Card] = None):
        self.cards: List[Card] = list(cards or [])

    @classmethod
    def from_list(cls, cards: List[Dict]) -> "BlackjackHand":
        return cls([Card.from_dict(c) for c in cards])

    def add_card(self, card: Card):
        self.cards.append(card)

    @property
    def value(self) -> int:
        """Best hand value: aces drop from 11 to 1 while the hand would bust."""
        total = sum(card.value for card in self.cards)
        aces = sum(1 for card in self.cards if card.rank == "A")

        while total > 21 and aces > 0:
            total -= 10
            aces -= 1

        return total

    @property
    def is_bust(self) -> bool:
        return self.value > 21

    @property
    def is_blackjack(self) -> bool:
        return len(self.cards) == 2 and self.value == 21

    def to_list(self) -> List[Dict]:
        return [card.to_dict() for card in self.cards]


class BlackjackGame(MultiStepGame):
    """
    Single-deck blackjack: deal, hit, stand.
    Naturals settle on the deal; dealer draws to 17 and stands on all 17s.
    """

    game_type = "blackjack"
    display_name = "Blackjack"

    start_action = "deal"
    actions = ("deal", "hit", "stand")

    BLACKJACK_PAYOUT = 2.5  # 3:2
    WIN_PAYOUT = 2
    PUSH_PAYOUT = 1
    DEALER_STANDS_ON = 17

    def _create_deck(self, rng) -> List[Card]:
        """Create and shuffle a standard 52-card deck."""
        deck = [Card(rank, suit) for suit in Card.SUITS for rank in Card.RANKS]
        return rng.shuffle(deck)

    def _draw(self, deck: List[Card], rng) -> Card:
        if not deck:
            deck.extend(self._create_deck(rng))
        return deck.pop()

    def _state(self, deck: List[Card], player: BlackjackHand, dealer: BlackjackHand) -> Dict:
        return {
            "deck": [c.to_dict() for c in deck],
            "playerHand": player.to_list(),
            "dealerHand": dealer.to_list(),
        }

    def _load(self, state: Dict) -> tuple:
        return (
            [Card.from_dict(c) for c in state["deck"]],
            BlackjackHand.from_list(state["playerHand"]),
            BlackjackHand.from_list(state["dealerHand"]),
        )

    def _playing_view(self, player: BlackjackHand, dealer: BlackjackHand) -> Dict:
        """Dealer's hole card stays hidden while the hand is live."""
        return {
            "playerHand": player.to_list(),
            "playerValue": player.value,
            "dealerUpCard": dealer.cards[0].to_dict(),
            "dealerHidden": True,
            "canHit": player.value < 21,
            "canStand": True,
            "gameComplete": False,
        }

    def _finish(self, bet_amount: float, player: BlackjackHand, dealer: BlackjackHand,
                outcome: str, multiplier: float) -> SettlementResult:
        view = {
            "playerHand": player.to_list(),
            "playerValue": player.value,
            "dealerHand": dealer.to_list(),
            "dealerValue": dealer.value,
            "dealerHidden": False,
            "canHit": False,
            "canStand": False,
            "gameComplete": True,
            "outcome": outcome,
            "multiplier": multiplier,
        }
        return self._result(bet_amount, multiplier, view)

    def start(self, bet_amount, game_data, rng) -> SettlementResult:
        deck = self._create_deck(rng)
        player = BlackjackHand()
        dealer = BlackjackHand()

        # Deal alternating cards
        player.add_card(self._draw(deck, rng))
        dealer.add_card(self._draw(deck, rng))
        player.add_card(self._draw(deck, rng))
        dealer.add_card(self._draw(deck, rng))

        if player.is_blackjack and dealer.is_blackjack:
            return self._finish(bet_amount, player, dealer, "push", self.PUSH_PAYOUT)
        if player.is_blackjack:
            return self._finish(bet_amount, player, dealer, "blackjack", self.BLACKJACK_PAYOUT)
        if dealer.is_blackjack:
            return self._finish(bet_amount, player, dealer, "dealer_blackjack", 0)

        return self._result(
            bet_amount,
            0,
            self._playing_view(player, dealer),
            game_complete=False,
            state=self._state(deck, player, dealer),
        )

    def hit(self, bet_amount, game_data, rng, state) -> SettlementResult:
        deck, player, dealer = self._load(state)
        card = self._draw(deck, rng)
        player.add_card(card)

        if player.is_bust:
            return self._finish(bet_amount, player, dealer, "bust", 0)

        view = self._playing_view(player, dealer)
        view["newCard"] = card.to_dict()
        return self._result(
            bet_amount, 0, view, game_complete=False, state=self._state(deck, player, dealer)
        )

    def stand(self, bet_amount, game_data, rng, state) -> SettlementResult:
        deck, player, dealer = self._load(state)

        while dealer.value < self.DEALER_STANDS_ON:
            dealer.add_card(self._draw(deck, rng))

        player_val = player.value
        dealer_val = dealer.value

        if dealer.is_bust:
            return self._finish(bet_amount, player, dealer, "dealer_bust", self.WIN_PAYOUT)
        if player_val > dealer_val:
            return self._finish(bet_amount, player, dealer, "win", self.WIN_PAYOUT)
        if player_val == dealer_val:
            return self._finish(bet_amount, player, dealer, "push", self.PUSH_PAYOUT)
        return self._finish(bet_amount, player, dealer, "lose", 0)


blackjack_game = BlackjackGame()
