"""Engine flow: bet validation, wallet settlement, history, and multi-step sessions."""

import math
import time
from unittest.mock import patch

import pytest

from casino_engine.config import AppConfig
from casino_engine.core import economy, history as history_module
from casino_engine.core.economy import Wallet
from casino_engine.core.engine import GameEngine
from casino_engine.core.exceptions import (
    GameSessionError,
    InsufficientFundsError,
    InvalidBetError,
    UnknownGameError,
)
from casino_engine.core.history import GameHistory
from casino_engine.core.sessions import SessionStore


# ==================== Wallet ====================


def test_wallet_opens_with_starting_balance():
    wallet = Wallet(starting_balance=250.0)
    assert wallet.get_balance("alice") == 250.0
    assert wallet.get_transactions("alice") == []


def test_wallet_apply_delta_loss_and_win():
    wallet = Wallet(starting_balance=100.0)
    assert wallet.apply_delta("alice", debit=10, credit=0) == 90.0
    assert wallet.apply_delta("alice", debit=10, credit=19.5) == 99.5

    transactions = wallet.get_transactions("alice")
    # Newest first
    assert [t["type"] for t in transactions] == ["win", "bet", "bet"]
    assert transactions[0]["balanceAfter"] == 99.5


def test_wallet_rounds_to_cents():
    wallet = Wallet(starting_balance=0.3)
    assert wallet.apply_delta("alice", debit=0.1, credit=0.2) == 0.4


def test_wallet_rejects_overdraw():
    wallet = Wallet(starting_balance=5.0)
    with pytest.raises(InsufficientFundsError):
        wallet.apply_delta("alice", debit=10, credit=0)
    assert wallet.get_balance("alice") == 5.0
    assert wallet.get_transactions("alice") == []


def test_wallet_reserve_holds_available_funds():
    wallet = Wallet(starting_balance=20.0)
    wallet.reserve("alice", 15)
    assert wallet.get_balance("alice") == 20.0
    assert wallet.get_available("alice") == 5.0
    assert not wallet.has_sufficient_funds("alice", 10)
    with pytest.raises(InsufficientFundsError):
        wallet.reserve("alice", 10)

    assert wallet.apply_delta("alice", debit=15, credit=30, reserved=15) == 35.0
    assert wallet.get_available("alice") == 35.0


def test_wallet_transaction_log_is_bounded():
    wallet = Wallet(starting_balance=1000.0, history_size=3)
    for _ in range(5):
        wallet.apply_delta("alice", debit=1, credit=0)
    assert len(wallet.get_transactions("alice")) == 3


# ==================== History ====================


def test_history_user_view_is_filtered_and_newest_first():
    history = GameHistory(max_records=10)
    history.record("alice", "dice", 10, 0, 0, "loss", {"roll": 12})
    history.record("bob", "dice", 10, 19.5, 1.95, "win", {"roll": 80})
    history.record("alice", "slots", 5, 10, 2, "win", {})

    records = history.get_user_history("alice")
    assert [r.game_type for r in records] == ["slots", "dice"]
    assert records[0].to_dict()["gameType"] == "slots"


def test_history_is_bounded():
    history = GameHistory(max_records=2)
    for i in range(5):
        history.record("alice", "dice", 1, 0, 0, "loss", {"n": i})
    assert len(history.get_user_history("alice")) == 2


def test_leaderboard_ranks_by_net_winnings():
    history = GameHistory(max_records=10)
    history.record("alice", "dice", 10, 19.5, 1.95, "win", {})
    history.record("bob", "keno", 10, 300, 30, "win", {})
    history.record("carol", "dice", 10, 0, 0, "loss", {})

    board = history.get_leaderboard(limit=2)
    assert [row["userId"] for row in board] == ["bob", "alice"]
    assert board[0]["totalWinnings"] == 290
    assert board[0]["biggestWin"] == 300
    assert set(board[0]) == {"userId", "totalWinnings", "totalLosses", "gamesPlayed", "biggestWin"}


# ==================== Sessions ====================


def test_session_checkout_is_exclusive():
    store = SessionStore(timeout_seconds=60)
    session = store.open("alice", "mines", 10, {"x": 1})
    assert store.active_count("alice") == 1

    checked_out = store.checkout(session.game_id, "alice", "mines")
    assert checked_out.state == {"x": 1}
    with pytest.raises(GameSessionError):
        store.checkout(session.game_id, "alice", "mines")

    store.save(checked_out, {"x": 2})
    assert store.checkout(session.game_id, "alice", "mines").state == {"x": 2}


def test_session_checkout_checks_owner_and_type():
    store = SessionStore(timeout_seconds=60)
    session = store.open("alice", "mines", 10, {})
    with pytest.raises(GameSessionError, match="not your game"):
        store.checkout(session.game_id, "bob", "mines")
    with pytest.raises(GameSessionError):
        store.checkout(session.game_id, "alice", "hilo")
    with pytest.raises(GameSessionError, match="Game ID required"):
        store.checkout(None, "alice", "mines")
    # Rejected checkouts leave the session in place
    assert store.active_count() == 1


def test_session_expiry():
    store = SessionStore(timeout_seconds=60)
    session = store.open("alice", "hilo", 10, {})
    store.open("bob", "hilo", 10, {})

    with patch("casino_engine.core.sessions.time.time", return_value=time.time() + 120):
        expired = store.expire()
    assert {s.user_id for s in expired} == {"alice", "bob"}
    assert store.active_count() == 0
    with pytest.raises(GameSessionError, match="not found or expired"):
        store.checkout(session.game_id, "alice", "hilo")


def test_session_discard():
    store = SessionStore(timeout_seconds=60)
    session = store.open("alice", "hilo", 10, {})
    assert store.discard(session.game_id) is session
    assert store.discard(session.game_id) is None


# ==================== Engine: single-step ====================


def test_engine_builds_collaborators_from_its_config(seeded_rng):
    config = AppConfig()
    config.economy.starting_balance = 250.0
    config.economy.transaction_history_size = 4
    config.history.max_records = 3
    config.sessions.timeout_seconds = 5
    engine = GameEngine(rng=seeded_rng, config=config)

    assert engine.wallet is not economy.wallet
    assert engine.history is not history_module.history
    assert engine.wallet.get_balance("alice") == 250.0
    assert engine.sessions.timeout_seconds == 5

    for _ in range(5):
        engine.play("alice", "plinko", 1, {})
    assert len(engine.history.get_user_history("alice")) == 3
    assert len(engine.wallet.get_transactions("alice")) == 4


def test_single_step_settles_wallet_and_history(engine):
    result = engine.play("alice", "dice", 10, {"prediction": "high"})

    assert result.game_complete is True
    assert result.result in ("win", "loss")
    assert result.win_amount == pytest.approx(10 * result.multiplier)
    assert result.new_balance == pytest.approx(1000 - 10 + result.win_amount)
    assert engine.wallet.get_balance("alice") == result.new_balance

    records = engine.history.get_user_history("alice")
    assert len(records) == 1
    assert records[0].result == result.result


def test_result_payload_is_camel_case(engine):
    payload = engine.play("alice", "plinko", 10, {}).to_dict()
    assert set(payload) == {
        "result", "multiplier", "winAmount", "betAmount", "gameData", "gameComplete", "newBalance",
    }
    assert "slot" in payload["gameData"]


@pytest.mark.parametrize("bet", [0, -5, "10", True, math.nan, math.inf, None])
def test_invalid_bet_amounts(engine, bet):
    with pytest.raises(InvalidBetError):
        engine.play("alice", "dice", bet, {"prediction": "high"})
    assert engine.wallet.get_balance("alice") == 1000.0


def test_table_limits(engine):
    with pytest.raises(InvalidBetError):
        engine.play("alice", "dice", 0.5, {"prediction": "high"})
    with pytest.raises(InvalidBetError):
        engine.play("alice", "dice", 1000.01, {"prediction": "high"})


def test_disabled_game(engine):
    config = AppConfig()
    config.games.dice.enabled = False
    engine.config = config
    with pytest.raises(InvalidBetError, match="disabled"):
        engine.play("alice", "dice", 10, {"prediction": "high"})


def test_unknown_game(engine):
    with pytest.raises(UnknownGameError):
        engine.play("alice", "poker", 10, {})


def test_game_data_must_be_object(engine):
    with pytest.raises(InvalidBetError):
        engine.play("alice", "dice", 10, ["high"])


def test_insufficient_funds_leaves_everything_untouched(engine):
    engine.wallet = Wallet(starting_balance=5.0)
    with pytest.raises(InsufficientFundsError):
        engine.play("alice", "dice", 10, {"prediction": "high"})
    assert engine.wallet.get_balance("alice") == 5.0
    assert engine.history.get_user_history("alice") == []


def test_invalid_game_data_leaves_wallet_untouched(engine):
    with pytest.raises(InvalidBetError):
        engine.play("alice", "roulette", 10, {"bet": {"type": "number", "value": 99}})
    assert engine.wallet.get_transactions("alice") == []


# ==================== Engine: multi-step ====================


def test_mines_start_reserves_stake(engine):
    result = engine.play("alice", "mines", 10, {"action": "start", "mineCount": 3})

    assert result.result == "pending"
    assert result.game_complete is False
    assert result.new_balance == 1000.0
    assert "gameId" in result.game_data
    assert "grid" not in result.game_data
    assert engine.wallet.get_available("alice") == 990.0
    assert engine.history.get_user_history("alice") == []


def test_mines_cashout_settles_once(engine):
    start = engine.play("alice", "mines", 10, {"action": "start"})
    game_id = start.game_data["gameId"]

    result = engine.play("alice", "mines", 0, {"action": "cashout", "gameId": game_id})
    assert result.game_complete is True
    assert result.result == "push"
    assert result.bet_amount == 10
    assert result.new_balance == 1000.0
    assert engine.wallet.get_available("alice") == 1000.0
    assert len(engine.history.get_user_history("alice")) == 1

    with pytest.raises(GameSessionError, match="not found or expired"):
        engine.play("alice", "mines", 10, {"action": "cashout", "gameId": game_id})


def test_mines_reveal_then_cashout_pays(engine):
    start = engine.play("alice", "mines", 10, {"action": "start", "mineCount": 1})
    game_id = start.game_data["gameId"]
    session = engine.sessions.checkout(game_id, "alice", "mines")
    engine.sessions.restore(session)
    state = session.state
    row, col = next(
        (r, c) for r in range(5) for c in range(5) if not state["mines"][r][c]
    )

    step = engine.play("alice", "mines", 10, {"action": "reveal", "gameId": game_id, "row": row, "col": col})
    assert step.result == "pending"
    assert step.multiplier == pytest.approx(1.2)

    result = engine.play("alice", "mines", 10, {"action": "cashout", "gameId": game_id})
    assert result.result == "win"
    assert result.new_balance == pytest.approx(1002.0)


def test_rejected_action_keeps_session(engine):
    start = engine.play("alice", "mines", 10, {"action": "start"})
    game_id = start.game_data["gameId"]

    with pytest.raises(InvalidBetError):
        engine.play("alice", "mines", 10, {"action": "reveal", "gameId": game_id, "row": 9, "col": 9})
    assert engine.sessions.active_count("alice") == 1

    result = engine.play("alice", "mines", 10, {"action": "cashout", "gameId": game_id})
    assert result.game_complete is True


def test_continuing_requires_owned_game(engine):
    start = engine.play("alice", "hilo", 10, {"action": "start"})
    game_id = start.game_data["gameId"]

    with pytest.raises(GameSessionError, match="Game ID required"):
        engine.play("alice", "hilo", 10, {"action": "cashout"})
    with pytest.raises(GameSessionError, match="not your game"):
        engine.play("bob", "hilo", 10, {"action": "cashout", "gameId": game_id})

    result = engine.play("alice", "hilo", 10, {"action": "cashout", "gameId": game_id})
    assert result.result == "push"


def test_reserved_stakes_limit_new_games(engine):
    engine.wallet = Wallet(starting_balance=15.0)
    engine.play("alice", "hilo", 10, {"action": "start"})
    with pytest.raises(InsufficientFundsError):
        engine.play("alice", "mines", 10, {"action": "start"})
    with pytest.raises(InsufficientFundsError):
        engine.play("alice", "dice", 10, {"prediction": "low"})


def test_expired_session_is_forfeited(engine):
    start = engine.play("alice", "mines", 10, {"action": "start"})
    game_id = start.game_data["gameId"]

    with patch("casino_engine.core.sessions.time.time", return_value=time.time() + 120):
        assert engine.expire_sessions() == 1

    assert engine.wallet.get_balance("alice") == 990.0
    assert engine.wallet.get_available("alice") == 990.0
    record = engine.history.get_user_history("alice")[0]
    assert record.result == "loss"
    assert record.outcome == {"gameId": game_id, "expired": True}

    with pytest.raises(GameSessionError):
        engine.play("alice", "mines", 10, {"action": "cashout", "gameId": game_id})


def test_blackjack_natural_settles_on_deal(engine, deck_rng):
    engine.rng = deck_rng(["A", "5", "K", "4"])
    result = engine.play("alice", "blackjack", 10, {"action": "deal"})
    assert result.game_complete is True
    assert result.result == "win"
    assert result.win_amount == 25
    assert result.new_balance == 1015.0
    assert engine.sessions.active_count() == 0
