"""Implementation of (Game)Repository using SQLAlchemy"""

import logging
from threading import Lock
from typing import Iterable, NoReturn, Optional

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Platform
from src.db.schema import DBGame

logger = logging.getLogger(__name__)


class SQLGameRepository:
    """
    Data stored using SQL / methods implemented using SQLAlchemy.
    ----
    A Session is not thread-safe, while populate inserts from several threads at once.
    All work on the session therefore goes through a lock.
    """

    def __init__(self, db_session: Session) -> None:
        self.db = db_session
        self._lock = Lock()

    def list_games(self) -> list[tuple[int, GameModel]]:
        """All stored games with their IDs."""
        with self._lock:
            games_db = self.db.scalars(select(DBGame).order_by(DBGame.id)).all()
            return [(game_db.id, self._to_model(game_db)) for game_db in games_db]

    def search_games(
        self, platforms: Iterable[Platform], name: Optional[str] = None
    ) -> list[tuple[int, GameModel]]:
        """Games on one of `platforms` whose name contains `name` (if given)."""
        query = select(DBGame).where(
            DBGame.platform.in_([str(platform) for platform in platforms])
        )
        if name:
            query = query.where(DBGame.name.like(f"%{name}%"))
        with self._lock:
            games_db = self.db.scalars(query.order_by(DBGame.id)).all()
            return [(game_db.id, self._to_model(game_db)) for game_db in games_db]

    def get_game(self, game_id: int) -> GameModel | None:
        """Get game by ID, if record exists."""
        with self._lock:
            game_db = self._fetch_game(game_id)
            if game_db:
                return self._to_model(game_db)
            return None

    def create_game(self, game: GameModel) -> tuple[GameModel, int]:
        """Store new game and return the stored data + newly created game ID."""
        with self._lock:
            game_db = self._to_db(game)
            self.db.add(game_db)
            self._commit("create game")
            self.db.refresh(game_db)
            return self._to_model(game_db), game_db.id

    def update_game(self, game_id: int, game: GameModel) -> GameModel | None:
        """Replace the info of an existing record."""
        with self._lock:
            game_db = self._fetch_game(game_id)
            if not game_db:
                return None
            game_db.publisher_id = game.publisher_id
            game_db.name = game.name
            game_db.platform = str(game.platform)
            game_db.store_id = game.store_id
            game_db.bundle_id = game.bundle_id
            game_db.app_version = game.app_version
            game_db.is_published = game.is_published
            self._commit(f"update game {game_id}")
            self.db.refresh(game_db)
            return self._to_model(game_db)

    def delete_game(self, game_id: int) -> GameModel | None:
        """Remove a game's record."""
        with self._lock:
            game_db = self._fetch_game(game_id)
            if not game_db:
                return None
            game_model = self._to_model(game_db)
            self.db.delete(game_db)
            self._commit(f"delete game {game_id}")
            return game_model

    def clear_all(self) -> int:
        """Remove every record. Committed before returning, so later inserts never see old rows."""
        with self._lock:
            try:
                result = self.db.execute(delete(DBGame))
            except SQLAlchemyError as exc:
                self._rollback("clear all games", exc)
            self._commit("clear all games")
            return result.rowcount

    def bulk_insert(self, games: list[GameModel]) -> int:
        """Insert many records in one transaction."""
        if not games:
            return 0
        with self._lock:
            self.db.add_all([self._to_db(game) for game in games])
            self._commit(f"insert {len(games)} games")
            return len(games)

    # -- Internal helpers --
    def _commit(self, action: str) -> None:
        try:
            self.db.commit()
        except SQLAlchemyError as exc:
            self._rollback(action, exc)

    def _rollback(self, action: str, exc: SQLAlchemyError) -> NoReturn:
        """Undo the pending transaction and re-raise as a RepositoryError."""
        self.db.rollback()
        logger.error("Database failure during %s: %s", action, exc)
        raise RepositoryError(f"Could not {action}.") from exc

    def _fetch_game(self, game_id: int) -> DBGame | None:
        query = select(DBGame).where(DBGame.id == game_id)
        return self.db.scalar(query)

    def _to_db(self, game: GameModel) -> DBGame:
        return DBGame(
            publisher_id=game.publisher_id,
            name=game.name,
            platform=str(game.platform),
            store_id=game.store_id,
            bundle_id=game.bundle_id,
            app_version=game.app_version,
            is_published=game.is_published,
        )

    def _to_model(self, game_db: DBGame) -> GameModel:
        """Convert SQLAlchemy model to data transfer model."""
        return GameModel(
            publisher_id=game_db.publisher_id,
            name=game_db.name,
            platform=Platform(game_db.platform),
            store_id=game_db.store_id,
            bundle_id=game_db.bundle_id,
            app_version=game_db.app_version,
            is_published=game_db.is_published,
        )
