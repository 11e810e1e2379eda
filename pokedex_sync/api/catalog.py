"""Catalog, criteria and sync endpoints.

The rendering side of the service: reads the catalog and sync state,
and pushes criteria edits into the controller.
"""

from fastapi import APIRouter, Depends

from pokedex_sync.api.dependencies import get_sync_controller
from pokedex_sync.api.schemas import (
    CatalogResponse,
    CategoriesResponse,
    FilterCriteriaSchema,
    SyncStateResponse,
)
from pokedex_sync.application.sync_controller import SyncController

router = APIRouter()


# ============================================================================
# Sync
# ============================================================================


@router.get("/sync", response_model=SyncStateResponse, tags=["Sync"])
async def get_sync_state(
    controller: SyncController = Depends(get_sync_controller),
) -> SyncStateResponse:
    return SyncStateResponse.from_domain(controller.get_sync_state())


@router.post("/sync/reload", response_model=SyncStateResponse, tags=["Sync"])
async def reload_catalog(
    controller: SyncController = Depends(get_sync_controller),
) -> SyncStateResponse:
    """Reload the catalog and wait for the attempt to finish."""
    attempt = controller.request_reload()
    if attempt is not None:
        await attempt
    return SyncStateResponse.from_domain(controller.get_sync_state())


# ============================================================================
# Catalog
# ============================================================================


@router.get("/catalog", response_model=CatalogResponse, tags=["Catalog"])
async def get_catalog(
    controller: SyncController = Depends(get_sync_controller),
) -> CatalogResponse:
    return CatalogResponse.from_records(controller.get_catalog())


@router.get("/catalog/categories", response_model=CategoriesResponse, tags=["Catalog"])
async def get_categories(
    controller: SyncController = Depends(get_sync_controller),
) -> CategoriesResponse:
    return CategoriesResponse(categories=sorted(controller.get_category_catalog()))


@router.get("/catalog/filtered", response_model=CatalogResponse, tags=["Catalog"])
async def get_filtered(
    controller: SyncController = Depends(get_sync_controller),
) -> CatalogResponse:
    """Records matching the current criteria, in catalog order."""
    return CatalogResponse.from_records(controller.get_filtered())


# ============================================================================
# Criteria
# ============================================================================


@router.get("/criteria", response_model=FilterCriteriaSchema, tags=["Criteria"])
async def get_criteria(
    controller: SyncController = Depends(get_sync_controller),
) -> FilterCriteriaSchema:
    return FilterCriteriaSchema.from_domain(controller.get_criteria())


@router.put("/criteria", response_model=FilterCriteriaSchema, tags=["Criteria"])
async def set_criteria(
    body: FilterCriteriaSchema,
    controller: SyncController = Depends(get_sync_controller),
) -> FilterCriteriaSchema:
    controller.set_criteria(body.to_domain())
    return FilterCriteriaSchema.from_domain(controller.get_criteria())


@router.post(
    "/criteria/categories/{tag}/toggle",
    response_model=FilterCriteriaSchema,
    tags=["Criteria"],
)
async def toggle_category(
    tag: str,
    controller: SyncController = Depends(get_sync_controller),
) -> FilterCriteriaSchema:
    """Select ``tag`` if unselected, otherwise deselect it."""
    controller.set_criteria(controller.get_criteria().toggle_category(tag))
    return FilterCriteriaSchema.from_domain(controller.get_criteria())


@router.delete("/criteria", response_model=FilterCriteriaSchema, tags=["Criteria"])
async def clear_criteria(
    controller: SyncController = Depends(get_sync_controller),
) -> FilterCriteriaSchema:
    controller.set_criteria(controller.get_criteria().cleared())
    return FilterCriteriaSchema.from_domain(controller.get_criteria())
