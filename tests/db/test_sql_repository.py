"""Unit tests for src/db/sql_repository.py"""

from concurrent.futures import ThreadPoolExecutor
from unittest.mock import patch

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from src.core.exceptions import RepositoryError
from src.core.shared_types import Platform
from src.db.sql_repository import GameModel, SQLGameRepository


def make_game(name: str = "Candy Crush", platform: Platform = Platform.IOS) -> GameModel:
    return GameModel(
        publisher_id="42",
        name=name,
        platform=platform,
        store_id=f"store-{name}",
        bundle_id=f"com.example.{name.lower().replace(' ', '')}",
        app_version="1.0.0",
        is_published=True,
    )


def test_create_game(db_session_repo: Session) -> None:
    """Conversion from a GameModel to DBGame for a new entry to the database."""
    model = make_game()
    repo = SQLGameRepository(db_session_repo)
    record_in_db, game_id = repo.create_game(model)
    assert isinstance(record_in_db, GameModel)
    assert record_in_db == model
    assert isinstance(game_id, int)


def test_optional_fields_can_be_empty(db_session_repo: Session) -> None:
    model = GameModel(publisher_id="", name="Bare", platform=Platform.ANDROID, store_id="1")
    repo = SQLGameRepository(db_session_repo)
    record_in_db, _ = repo.create_game(model)
    assert record_in_db.bundle_id is None
    assert record_in_db.app_version is None
    assert record_in_db.is_published is False


def test_get_game_by_id(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    expected_game, game_id = repo.create_game(make_game())
    assert repo.get_game(game_id) == expected_game


def test_get_unknown_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    assert repo.get_game(1) is None

    _, game_id = repo.create_game(make_game())
    assert repo.get_game(game_id + 1) is None


def test_list_games(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    first, first_id = repo.create_game(make_game("First"))
    second, second_id = repo.create_game(make_game("Second", Platform.ANDROID))
    assert repo.list_games() == [(first_id, first), (second_id, second)]


def test_search_by_platform(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    repo.create_game(make_game("Ios game", Platform.IOS))
    _, android_id = repo.create_game(make_game("Android game", Platform.ANDROID))

    found = repo.search_games([Platform.ANDROID])
    assert [game_id for game_id, _ in found] == [android_id]
    assert len(repo.search_games(list(Platform))) == 2


def test_search_by_name(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    repo.create_game(make_game("Clash of Clans"))
    repo.create_game(make_game("Clash Royale"))
    repo.create_game(make_game("Candy Crush"))

    found = repo.search_games(list(Platform), "Clash")
    assert sorted(model.name for _, model in found) == ["Clash Royale", "Clash of Clans"]
    assert repo.search_games(list(Platform), "Minecraft") == []


def test_update_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    _, game_id = repo.create_game(make_game())

    after = make_game("Renamed", Platform.ANDROID)
    updated_game = repo.update_game(game_id, after)
    assert updated_game == after
    assert repo.get_game(game_id) == after


def test_attempt_updating_unknown_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    assert repo.update_game(99, make_game()) is None


def test_delete_game(db_session_repo: Session) -> None:
    """Record of the game should no longer exist after deletion"""
    repo = SQLGameRepository(db_session_repo)
    created_game, game_id = repo.create_game(make_game())
    assert repo.delete_game(game_id) == created_game
    assert repo.get_game(game_id) is None


def test_attempt_deleting_unknown_game(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    assert repo.delete_game(99) is None


def test_clear_all(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    for name in ["A", "B", "C"]:
        repo.create_game(make_game(name))

    assert repo.clear_all() == 3
    assert repo.list_games() == []


def test_clear_all_is_visible_to_other_sessions(
    session_factory: sessionmaker[Session],
) -> None:
    """The clear is committed, not just flushed."""
    writer = session_factory()
    reader = session_factory()
    try:
        repo = SQLGameRepository(writer)
        repo.create_game(make_game())
        repo.clear_all()
        assert SQLGameRepository(reader).list_games() == []
    finally:
        writer.close()
        reader.close()


def test_bulk_insert(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    games = [make_game(f"Game {i}") for i in range(5)]
    assert repo.bulk_insert(games) == 5
    assert [model for _, model in repo.list_games()] == games


def test_bulk_insert_nothing(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    assert repo.bulk_insert([]) == 0
    assert repo.list_games() == []


def test_concurrent_bulk_inserts(db_session_repo: Session) -> None:
    """Several threads inserting through the same repository at once."""
    repo = SQLGameRepository(db_session_repo)
    batches = [
        [make_game(f"{platform} {i}", platform) for i in range(20)]
        for platform in Platform
    ] * 3

    with ThreadPoolExecutor(max_workers=len(batches)) as pool:
        inserted = list(pool.map(repo.bulk_insert, batches))

    assert inserted == [20] * len(batches)
    assert len(repo.list_games()) == 20 * len(batches)


def test_failed_commit_raises_repository_error(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    error = OperationalError("COMMIT", {}, Exception("database is locked"))
    with patch.object(db_session_repo, "commit", side_effect=error):
        with pytest.raises(RepositoryError):
            repo.bulk_insert([make_game()])

    # Rolled back: the session is usable again and nothing was stored
    assert repo.list_games() == []


def test_failed_clear_raises_repository_error(db_session_repo: Session) -> None:
    repo = SQLGameRepository(db_session_repo)
    repo.create_game(make_game())
    error = OperationalError("DELETE", {}, Exception("no such table"))
    with patch.object(db_session_repo, "execute", side_effect=error):
        with pytest.raises(RepositoryError):
            repo.clear_all()

    assert len(repo.list_games()) == 1
