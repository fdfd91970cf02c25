"""FastAPI dependencies: hand the services their collaborators from the ServiceContext."""

from typing import Generator

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from src.db.sql_repository import SQLGameRepository
from src.services.catalog_service import CatalogService
from src.services.context import ServiceContext
from src.services.populate_service import PopulateService


def get_context(request: Request) -> ServiceContext:
    return request.app.state.context


def get_db(context: ServiceContext = Depends(get_context)) -> Generator[Session, None, None]:
    db = context.session_factory()
    try:
        yield db
    finally:
        db.close()


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(SQLGameRepository(db))


def get_populate_service(
    context: ServiceContext = Depends(get_context), db: Session = Depends(get_db)
) -> PopulateService:
    return PopulateService(
        repository=SQLGameRepository(db),
        fetcher=context.fetcher(),
        sources=context.sources,
        top_n=context.top_n,
    )
