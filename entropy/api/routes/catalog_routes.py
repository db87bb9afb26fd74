# catalog_routes.py
from fastapi import APIRouter, Depends

from entropy.api.dependencies import get_catalog_service
from entropy.services.catalog_service import CatalogService

router = APIRouter(prefix="/api/entropy", tags=["catalog"])


@router.get("")
def list_catalog(svc: CatalogService = Depends(get_catalog_service)):
    catalog = svc.list_catalog()
    return {"success": True, "data": catalog["data"], "totalModules": catalog["totalModules"]}


@router.get("/module/{module_id}")
def get_module(module_id: str, svc: CatalogService = Depends(get_catalog_service)):
    return {"success": True, "data": svc.get_module(module_id).to_public()}
