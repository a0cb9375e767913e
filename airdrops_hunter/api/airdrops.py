"""Airdrop API endpoints."""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Depends, HTTPException, Query, status

from airdrops_hunter.api.dependencies import get_storage, get_value_parsing
from airdrops_hunter.schemas.airdrop import AirdropCreate, AirdropResponse, AirdropUpdate
from airdrops_hunter.services.catalog import (
    FEATURED_LIMIT,
    ValueParsing,
    featured_airdrops,
    filter_airdrops,
    rank_by_value,
)
from airdrops_hunter.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/airdrops", tags=["airdrops"])


def get_airdrop_or_404(storage: Storage, airdrop_id: int) -> AirdropResponse:
    """Get an airdrop or raise 404."""
    airdrop = storage.get_airdrop(airdrop_id)
    if not airdrop:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Airdrop not found")
    return airdrop


@router.get("", response_model=list[AirdropResponse])
def list_airdrops(
    storage: Annotated[Storage, Depends(get_storage)],
    parsing: Annotated[ValueParsing, Depends(get_value_parsing)],
    status_filter: Annotated[str | None, Query(alias="status")] = None,
    category: str | None = None,
    search: str | None = None,
    sort: Literal["high_value"] | None = None,
    limit: Annotated[int | None, Query(ge=1)] = None,
):
    """List airdrops, optionally filtered, searched and ranked by value.

    ``status`` and ``category`` match exactly; "All" disables that filter.
    """
    airdrops = filter_airdrops(
        storage.get_airdrops(),
        status=status_filter,
        category=category,
        search=search,
    )
    if sort == "high_value":
        airdrops = rank_by_value(airdrops, parsing)
    return airdrops[:limit] if limit else airdrops


@router.get("/featured", response_model=list[AirdropResponse])
def list_featured_airdrops(
    storage: Annotated[Storage, Depends(get_storage)],
    parsing: Annotated[ValueParsing, Depends(get_value_parsing)],
    view: str = "All",
    limit: Annotated[int, Query(ge=1)] = FEATURED_LIMIT,
):
    """Home page selection: "All", "High Value", or a status name."""
    return featured_airdrops(storage.get_airdrops(), view=view, limit=limit, parsing=parsing)


@router.get("/status/{airdrop_status}", response_model=list[AirdropResponse])
def list_airdrops_by_status(
    airdrop_status: str,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """List airdrops with an exact status."""
    return storage.get_airdrops_by_status(airdrop_status)


@router.get("/category/{category}", response_model=list[AirdropResponse])
def list_airdrops_by_category(
    category: str,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """List airdrops in an exact category."""
    return storage.get_airdrops_by_category(category)


@router.get("/{airdrop_id}", response_model=AirdropResponse)
def get_airdrop(
    airdrop_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Get a single airdrop."""
    return get_airdrop_or_404(storage, airdrop_id)


@router.post("", response_model=AirdropResponse, status_code=status.HTTP_201_CREATED)
def create_airdrop(
    airdrop_data: AirdropCreate,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Create a new airdrop."""
    airdrop = storage.create_airdrop(airdrop_data)
    logger.info(f"Created airdrop {airdrop.id} ({airdrop.title})")
    return airdrop


@router.put("/{airdrop_id}", response_model=AirdropResponse)
def update_airdrop(
    airdrop_id: int,
    airdrop_data: AirdropUpdate,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Update an airdrop. Fields not sent keep their values."""
    airdrop = storage.update_airdrop(airdrop_id, airdrop_data)
    if not airdrop:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Airdrop not found")
    return airdrop


@router.delete("/{airdrop_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_airdrop(
    airdrop_id: int,
    storage: Annotated[Storage, Depends(get_storage)],
):
    """Delete an airdrop permanently."""
    if not storage.delete_airdrop(airdrop_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Airdrop not found")
    logger.info(f"Deleted airdrop {airdrop_id}")
