"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from src.core.exceptions import InvalidRequestError
from src.core.models import GameModel
from src.core.shared_types import Platform

SEARCHABLE_PLATFORMS = [*Platform, "all"]


class CamelModel(BaseModel):
    """JSON uses camelCase (publisherId, storeId, ...), Python uses snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- REQUEST MODELS ---
class CreateGameRequest(CamelModel):
    publisher_id: str = ""
    name: str
    platform: Platform
    store_id: str
    bundle_id: Optional[str] = None
    app_version: Optional[str] = None
    is_published: bool = False

    @field_validator(*["name", "store_id"])
    @classmethod
    def validate_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise InvalidRequestError("name and storeId cannot be empty.")
        return value

    def to_model(self) -> GameModel:
        return GameModel(
            publisher_id=self.publisher_id,
            name=self.name,
            platform=self.platform,
            store_id=self.store_id,
            bundle_id=self.bundle_id,
            app_version=self.app_version,
            is_published=self.is_published,
        )


class UpdateGameRequest(CreateGameRequest):
    pass


class SearchGamesRequest(CamelModel):
    platform: Optional[str] = None
    name: Optional[str] = None

    @field_validator("platform")
    @classmethod
    def validate_platform(cls, value: Optional[str]) -> Optional[str]:
        if value and value not in SEARCHABLE_PLATFORMS:
            raise InvalidRequestError(f"Invalid platform: {value!r}")
        return value or None


# --- RESPONSE MODELS ---
class GameResponse(CamelModel):
    id: int
    publisher_id: str
    name: str
    platform: Platform
    store_id: str
    bundle_id: Optional[str]
    app_version: Optional[str]
    is_published: bool


class GameSearchResponse(CamelModel):
    count: int
    rows: list[GameResponse]


class DeleteGameResponse(CamelModel):
    id: int


class ErrorResponse(BaseModel):
    message: str
