"""HTTP routes for the game catalog."""

from fastapi import APIRouter, Depends, Response

from src.api.dependencies import get_catalog_service, get_populate_service
from src.api.models import (
    CreateGameRequest,
    DeleteGameResponse,
    GameResponse,
    GameSearchResponse,
    SearchGamesRequest,
    UpdateGameRequest,
)
from src.core.exceptions import PopulateError
from src.services.catalog_service import CatalogService
from src.services.populate_service import PopulateService

FAILED_SOURCES_HEADER = "X-Populate-Failed-Sources"

router = APIRouter(prefix="/api/games", tags=["games"])


@router.get("", response_model=list[GameResponse])
def list_games(service: CatalogService = Depends(get_catalog_service)) -> list[GameResponse]:
    return service.list_games()


@router.post("", response_model=GameResponse)
def create_game(
    request: CreateGameRequest, service: CatalogService = Depends(get_catalog_service)
) -> GameResponse:
    return service.create_game(request)


@router.post("/search", response_model=GameSearchResponse)
def search_games(
    request: SearchGamesRequest, service: CatalogService = Depends(get_catalog_service)
) -> GameSearchResponse:
    return service.search_games(request)


# Must be registered before PUT /{game_id}, otherwise "populate" is taken for an ID
@router.put("/populate")
def populate_games(service: PopulateService = Depends(get_populate_service)) -> Response:
    """
    Replace the catalog with the current top 100 of every feed.
    ----
    Succeeds (empty body) as soon as the old catalog could be cleared, even if some feeds failed.
    Failed feeds are listed by platform in the X-Populate-Failed-Sources header.
    """
    report = service.populate()
    if report.failure is not None:
        raise PopulateError(report.failure.message, kind=report.failure.kind)

    headers = {}
    if report.failed_platforms:
        headers[FAILED_SOURCES_HEADER] = ",".join(report.failed_platforms)
    return Response(status_code=200, media_type="application/json", headers=headers)


@router.put("/{game_id}", response_model=GameResponse)
def update_game(
    game_id: int,
    request: UpdateGameRequest,
    service: CatalogService = Depends(get_catalog_service),
) -> GameResponse:
    return service.update_game(game_id, request)


@router.delete("/{game_id}", response_model=DeleteGameResponse)
def delete_game(
    game_id: int, service: CatalogService = Depends(get_catalog_service)
) -> DeleteGameResponse:
    return DeleteGameResponse(id=service.delete_game(game_id))
