"""Protocol repository (implemented with SQL Alchemy, mocked with a dict in the tests)"""

from typing import Iterable, Optional, Protocol

from src.core.models import GameModel
from src.core.shared_types import Platform


class GameRepository(Protocol):
    """Persistence layer orchestration"""

    def list_games(self) -> list[tuple[int, GameModel]]:
        """All stored games with their IDs."""
        ...

    def search_games(
        self, platforms: Iterable[Platform], name: Optional[str] = None
    ) -> list[tuple[int, GameModel]]:
        """Games on one of `platforms` whose name contains `name` (if given)."""
        ...

    def get_game(self, game_id: int) -> GameModel | None:
        """Get game by ID, if record exists."""
        ...

    def create_game(self, game: GameModel) -> tuple[GameModel, int]:
        """Store new game and return the stored data + newly created game ID."""
        ...

    def update_game(self, game_id: int, game: GameModel) -> GameModel | None:
        """Replace the info of an existing record."""
        ...

    def delete_game(self, game_id: int) -> GameModel | None:
        """Remove a game's record."""
        ...

    def clear_all(self) -> int:
        """Remove every record, returns the number of removed records. Raises RepositoryError on failure."""
        ...

    def bulk_insert(self, games: list[GameModel]) -> int:
        """Insert many records in one go, returns the number inserted. Raises RepositoryError on failure."""
        ...
