"""
Monte Carlo return-to-player check for every game.

Plays each game against a seeded random source with a fixed strategy and
reports the measured RTP (total returned / total wagered).

    python scripts/simulate_rtp.py --rounds 100000
    python scripts/simulate_rtp.py --game keno --seed 7 --json
"""

import argparse
import math
import os
import sys

# Add the project root to the Python path
project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), '..'))
sys.path.insert(0, project_root)

import orjson

from casino_engine.core.dispatcher import dispatcher
from casino_engine.core.rng import SeededRNG

SINGLE_STEP_DATA = {
    "slots": {},
    "dice": {"prediction": "high"},
    "coinflip": {"choice": "heads"},
    "roulette": {"bet": {"type": "color", "value": "red"}},
    "wheel": {"bet": {"type": "color", "value": "red"}},
    "baccarat": {"bet": {"type": "banker"}},
    "keno": {"selectedNumbers": [5, 12, 23, 34, 45]},
    "plinko": {},
    "crash": {"cashoutMultiplier": 2.0},
}


def play_mines(rng) -> float:
    """Reveal one random cell, cash out if it was safe."""
    result = dispatcher.dispatch("mines", 1, {"action": "start", "mineCount": 5}, rng=rng)
    cell = rng.random_int(0, 24)
    result = dispatcher.dispatch(
        "mines", 1, {"action": "reveal", "row": cell // 5, "col": cell % 5}, rng=rng, state=result.state
    )
    if result.game_complete:
        return result.multiplier
    return dispatcher.dispatch("mines", 1, {"action": "cashout"}, rng=rng, state=result.state).multiplier


def play_hilo(rng) -> float:
    """One call toward the larger side of the deck, then cash out."""
    result = dispatcher.dispatch("hilo", 1, {"action": "start"}, rng=rng)
    prediction = "higher" if result.state["card"]["rank"] <= 7 else "lower"
    result = dispatcher.dispatch(
        "hilo", 1, {"action": "predict", "prediction": prediction}, rng=rng, state=result.state
    )
    if result.game_complete:
        return result.multiplier
    return dispatcher.dispatch("hilo", 1, {"action": "cashout"}, rng=rng, state=result.state).multiplier


def play_blackjack(rng) -> float:
    """Hit below 17, otherwise stand."""
    result = dispatcher.dispatch("blackjack", 1, {"action": "deal"}, rng=rng)
    while not result.game_complete:
        action = "hit" if result.outcome["playerValue"] < 17 else "stand"
        result = dispatcher.dispatch("blackjack", 1, {"action": action}, rng=rng, state=result.state)
    return result.multiplier


STRATEGIES = {
    "mines": play_mines,
    "hilo": play_hilo,
    "blackjack": play_blackjack,
}


def play_round(game_type: str, rng) -> float:
    if game_type in STRATEGIES:
        return STRATEGIES[game_type](rng)
    return dispatcher.dispatch(game_type, 1, SINGLE_STEP_DATA[game_type], rng=rng).multiplier


def simulate(game_type: str, rounds: int = 100_000, seed: int = 42) -> dict:
    """Play `rounds` unit bets and summarise the returns."""
    rng = SeededRNG(seed)

    total_returned = 0.0
    total_squared = 0.0
    wins = 0
    max_mult = 0.0

    for _ in range(rounds):
        mult = play_round(game_type, rng)
        total_returned += mult
        total_squared += mult * mult
        if mult > 1:
            wins += 1
        max_mult = max(max_mult, mult)

    rtp = total_returned / rounds
    variance = max(total_squared / rounds - rtp * rtp, 0.0)
    std_err = math.sqrt(variance / rounds)

    return {
        "game_type": game_type,
        "rounds": rounds,
        "rtp": round(rtp, 4),
        "house_edge": round(1 - rtp, 4),
        "confidence_95": [round(rtp - 1.96 * std_err, 4), round(rtp + 1.96 * std_err, 4)],
        "win_rate": round(wins / rounds, 4),
        "max_multiplier_hit": round(max_mult, 2),
    }


def main():
    parser = argparse.ArgumentParser(description="Measure the RTP of each game by simulation")
    parser.add_argument("--game", choices=dispatcher.game_types, help="Simulate a single game")
    parser.add_argument("--rounds", type=int, default=100_000, help="Rounds per game")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--json", action="store_true", help="Print results as JSON")
    args = parser.parse_args()

    games = [args.game] if args.game else dispatcher.game_types
    results = [simulate(game, args.rounds, args.seed) for game in games]

    if args.json:
        print(orjson.dumps(results, option=orjson.OPT_INDENT_2).decode("utf-8"))
        return

    print(f"{'game':<10} {'rtp':>8} {'edge':>8} {'win rate':>9} {'max':>10}")
    for r in results:
        print(
            f"{r['game_type']:<10} {r['rtp']:>8.4f} {r['house_edge']:>8.4f} "
            f"{r['win_rate']:>9.4f} {r['max_multiplier_hit']:>10.2f}"
        )


if __name__ == "__main__":
    main()
