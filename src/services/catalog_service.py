"""Orchestration of communication from API router to the persistence layer for single game records."""

from src.api.models import (
    CreateGameRequest,
    GameResponse,
    GameSearchResponse,
    SearchGamesRequest,
    UpdateGameRequest,
)
from src.core.exceptions import GameNotFoundError
from src.core.models import GameModel
from src.core.shared_types import Platform
from src.db.repository import GameRepository

ALL_PLATFORMS = "all"


class CatalogService:
    """Plain CRUD on catalog games."""

    def __init__(self, repository: GameRepository) -> None:
        self.repo = repository

    # -- API routes logic ---
    def list_games(self) -> list[GameResponse]:
        """Show all recorded games."""
        return [
            self._create_game_response(game_id, model)
            for game_id, model in self.repo.list_games()
        ]

    def create_game(self, request: CreateGameRequest) -> GameResponse:
        """Store a single new game."""
        stored_game, game_id = self.repo.create_game(request.to_model())
        return self._create_game_response(game_id, stored_game)

    def search_games(self, request: SearchGamesRequest) -> GameSearchResponse:
        """
        Filter on platform and/or (part of the) name.
        ----
        No platform (or "all") means both platforms.
        """
        if request.platform is None or request.platform == ALL_PLATFORMS:
            platforms = list(Platform)
        else:
            platforms = [Platform(request.platform)]

        rows = [
            self._create_game_response(game_id, model)
            for game_id, model in self.repo.search_games(platforms, request.name)
        ]
        return GameSearchResponse(count=len(rows), rows=rows)

    def update_game(self, game_id: int, request: UpdateGameRequest) -> GameResponse:
        """Overwrite the fields of an existing game."""
        updated = self.repo.update_game(game_id, request.to_model())
        if updated is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return self._create_game_response(game_id, updated)

    def delete_game(self, game_id: int) -> int:
        """Handle a request to delete a Game record."""
        if self.repo.delete_game(game_id) is None:
            raise GameNotFoundError(f"Game with {game_id=} not found.")
        return game_id

    # -- Internal helpers --
    def _create_game_response(self, game_id: int, model: GameModel) -> GameResponse:
        return GameResponse(
            id=game_id,
            publisher_id=model.publisher_id,
            name=model.name,
            platform=model.platform,
            store_id=model.store_id,
            bundle_id=model.bundle_id,
            app_version=model.app_version,
            is_published=model.is_published,
        )
