"""
Mines - a 5x5 grid hides `mineCount` mines.
Each safe reveal raises the multiplier to 1.2 ** safe_cells_revealed; hitting
a mine loses the stake. Cash out at any point before that, or clear every safe
cell for an automatic win.
"""

from casino_engine.core.games.base import MultiStepGame, SettlementResult
from casino_engine.core.exceptions import InvalidBetError, GameSessionError
from casino_engine.core.odds import get_game_odds
from typing import List

Grid = List[List[bool]]


class MinesGame(MultiStepGame):

    game_type = "mines"
    display_name = "Mines"

    start_action = "start"
    actions = ("start", "reveal", "cashout")

    GRID_SIZE = 5
    DEFAULT_MINES = 5
    STEP_MULTIPLIER = 1.2

    @property
    def cell_count(self) -> int:
        return self.GRID_SIZE * self.GRID_SIZE

    def _step_multiplier(self) -> float:
        return get_game_odds("mines").get("step_multiplier", self.STEP_MULTIPLIER)

    def multiplier_for(self, safe_revealed: int) -> float:
        return self._step_multiplier() ** safe_revealed

    def _empty_grid(self) -> Grid:
        return [[False] * self.GRID_SIZE for _ in range(self.GRID_SIZE)]

    def place_mines(self, mine_count: int, rng) -> Grid:
        """Place mines uniformly at random, without replacement."""
        grid = self._empty_grid()
        for cell in rng.sample(range(self.cell_count), mine_count):
            grid[cell // self.GRID_SIZE][cell % self.GRID_SIZE] = True
        return grid

    @staticmethod
    def count(grid: Grid) -> int:
        return sum(cell for row in grid for cell in row)

    def _view(self, state: dict, multiplier: float, game_over: bool, won: bool = False) -> dict:
        """Client view of the board. Mine positions are only shown once the game is over."""
        safe_revealed = self.count(state["revealed"])
        view = {
            "mineCount": state["mineCount"],
            "revealedCells": [list(row) for row in state["revealed"]],
            "safeRevealed": safe_revealed,
            "safeRemaining": self.cell_count - state["mineCount"] - safe_revealed,
            "multiplier": multiplier,
            "gameOver": game_over,
            "won": won,
        }
        if game_over:
            view["grid"] = [list(row) for row in state["mines"]]
        else:
            view["nextMultiplier"] = self.multiplier_for(safe_revealed + 1)
        return view

    def start(self, bet_amount, game_data, rng) -> SettlementResult:
        mine_count = game_data.get("mineCount", self.DEFAULT_MINES)
        if isinstance(mine_count, bool) or not isinstance(mine_count, int) or not 1 <= mine_count < self.cell_count:
            raise InvalidBetError(f"Mines: 'mineCount' must be between 1 and {self.cell_count - 1}")

        state = {
            "mineCount": mine_count,
            "mines": self.place_mines(mine_count, rng),
            "revealed": self._empty_grid(),
        }
        return self._result(
            bet_amount, 1, self._view(state, 1, game_over=False), game_complete=False, state=state
        )

    def reveal(self, bet_amount, game_data, rng, state) -> SettlementResult:
        row = self._require_int(game_data, "row", 0, self.GRID_SIZE - 1)
        col = self._require_int(game_data, "col", 0, self.GRID_SIZE - 1)

        if state["revealed"][row][col]:
            raise GameSessionError(f"Mines: cell ({row}, {col}) is already revealed")

        state = {
            "mineCount": state["mineCount"],
            "mines": state["mines"],
            "revealed": [list(r) for r in state["revealed"]],
        }

        if state["mines"][row][col]:
            view = self._view(state, 0, game_over=True)
            view["hitMine"] = {"row": row, "col": col}
            return self._result(bet_amount, 0, view)

        state["revealed"][row][col] = True
        safe_revealed = self.count(state["revealed"])
        multiplier = self.multiplier_for(safe_revealed)

        if safe_revealed == self.cell_count - state["mineCount"]:
            return self._result(bet_amount, multiplier, self._view(state, multiplier, game_over=True, won=True))

        return self._result(
            bet_amount,
            multiplier,
            self._view(state, multiplier, game_over=False),
            game_complete=False,
            state=state,
        )

    def cashout(self, bet_amount, game_data, rng, state) -> SettlementResult:
        multiplier = self.multiplier_for(self.count(state["revealed"]))
        view = self._view(state, multiplier, game_over=True, won=multiplier > 1)
        view["cashedOut"] = True
        return self._result(bet_amount, multiplier, view)


mines_game = MinesGame()
