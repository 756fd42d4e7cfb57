from typing import Any

from fastapi import APIRouter, Depends, Request

from traintracker.engine.catalog import normalize_key
from traintracker.engine.query import QueryFacade
from traintracker.shared.models.enums import Catalog

router = APIRouter(prefix="/api")


def get_query(request: Request) -> QueryFacade:
    """Query facade of the engine attached to the running app."""
    return request.app.state.engine.query


@router.get("/routes")
def list_routes(query: QueryFacade = Depends(get_query)) -> list[dict[str, Any]]:
    """All train routes as ``{id, from, to}``."""
    return query.list_instruments(Catalog.ROUTES)


@router.get("/train/{route}")
def get_route(route: str, query: QueryFacade = Depends(get_query)) -> dict[str, Any]:
    """Full-history summary for one route. Lookup is case-insensitive."""
    summary = query.get_summary(Catalog.ROUTES, route)
    return {"route": normalize_key(Catalog.ROUTES, route), **summary.to_payload()}


@router.get("/trains-batch")
def get_all_routes(query: QueryFacade = Depends(get_query)) -> dict[str, Any]:
    return {
        key: summary.to_payload()
        for key, summary in query.get_all_summaries(Catalog.ROUTES).items()
    }


@router.get("/products")
def list_products(query: QueryFacade = Depends(get_query)) -> list[dict[str, Any]]:
    return query.list_instruments(Catalog.PRODUCTS)


@router.get("/tech")
def get_all_products(query: QueryFacade = Depends(get_query)) -> dict[str, Any]:
    """Every product with its history trimmed to the trailing window."""
    return {
        key: summary.to_payload()
        for key, summary in query.get_all_summaries(Catalog.PRODUCTS).items()
    }


@router.get("/tech/{product}")
def get_product(product: str, query: QueryFacade = Depends(get_query)) -> dict[str, Any]:
    """Full-history summary for one product. Lookup is case-sensitive."""
    summary = query.get_summary(Catalog.PRODUCTS, product)
    return {"product": normalize_key(Catalog.PRODUCTS, product), **summary.to_payload()}
