"""
    Inventory Service API

    This module implements a FastAPI-based service for tracking inventory items with full CRUD operations.
    It provides endpoints for creating, reading, updating, and deleting inventory items,
    plus name search, a low-stock listing and an aggregate summary, with PostgreSQL persistence.

    The service exposes:
    - CRUD, search, low-stock and summary endpoints under /inventory
    - Health endpoint: Provides service health status for monitoring and orchestration

    Error responses:
    - 400: {"detail": {"message": "Validation failed", "errors": {field: message}}}
    - 404: {"detail": "Item not found"}
    - 500: {"detail": <generic message>}; the underlying error is only logged
"""
import logging
from contextlib import asynccontextmanager, contextmanager
from typing import List

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import config, schemas
from .database import get_db, init_db
from .exceptions import ItemNotFoundError, ValidationError
from .service import InventoryService

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

ITEM_NOT_FOUND = "Item not found"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create database tables
    init_db()
    yield


app = FastAPI(title="inventory-service", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix="/inventory", tags=["inventory"])


def get_service(db: Session = Depends(get_db)) -> InventoryService:
    """Dependency that binds the inventory service to the request's session."""
    return InventoryService(db)


@contextmanager
def storage_errors(message: str):
    """Turn storage failures into a 500 carrying only ``message``."""
    try:
        yield
    except SQLAlchemyError:
        # already logged with context by the service
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)


def validation_failed(errors) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": "Validation failed", "errors": errors},
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    """
    Report malformed request bodies and parameters as 400, keyed by field name.
    """
    errors = {}
    for error in exc.errors():
        location = [str(part) for part in error["loc"] if part not in ("body", "path", "query")]
        errors[".".join(location) or "body"] = error["msg"]
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": {"message": "Validation failed", "errors": errors}},
    )


@app.get("/healthz", response_model=dict)
def health():
    """
    Health check endpoint for the inventory service.

    This endpoint is typically used by orchestrators (like Kubernetes) or load balancers
    to determine if the service is running and ready to accept requests.

    Returns:
        dict: A dictionary containing the health status of the service.
            - status (str): "healthy" if the service is operational.

    Example:
        GET /healthz
        Response: {"status": "healthy"}
    """
    return {"status": "healthy"}


@router.get("", response_model=List[schemas.InventoryItem])
def list_inventory_items(service: InventoryService = Depends(get_service)):
    """
    List all inventory items ordered by name.

    Returns:
        List of inventory item objects
    """
    with storage_errors("Error retrieving inventory items"):
        return service.list_all()


@router.get("/summary", response_model=schemas.InventorySummary)
def get_summary(service: InventoryService = Depends(get_service)):
    """
    Get inventory totals.

    Returns:
        Summary with totalItems, totalQuantity, lowStockCount and totalInventoryValue
    """
    with storage_errors("Error retrieving summary"):
        return service.summary()


@router.get("/low-stock", response_model=List[schemas.InventoryItem])
def list_low_stock_items(service: InventoryService = Depends(get_service)):
    """
    List items whose quantity is below their reorder level.

    Returns:
        List of inventory item objects ordered by name
    """
    with storage_errors("Error retrieving low stock items"):
        return service.low_stock()


@router.get("/search", response_model=List[schemas.InventoryItem])
@router.get("/search/{search_term}", response_model=List[schemas.InventoryItem])
def search_inventory_items(search_term: str = "", service: InventoryService = Depends(get_service)):
    """
    Search inventory items by name (case-insensitive substring).

    Args:
        search_term: Text to look for; empty returns every item

    Returns:
        List of matching inventory item objects ordered by name
    """
    with storage_errors("Error searching items"):
        return service.search(search_term)


@router.get("/{item_id}", response_model=schemas.InventoryItem)
def get_inventory_item(item_id: int, service: InventoryService = Depends(get_service)):
    """
    Get a single inventory item by ID.

    Args:
        item_id: ID of the inventory item to retrieve

    Returns:
        Inventory item object

    Raises:
        HTTPException: 404 if item not found
    """
    with storage_errors("Error retrieving item"):
        db_item = service.get_by_id(item_id)
    if db_item is None:
        raise HTTPException(status_code=404, detail=ITEM_NOT_FOUND)
    return db_item


@router.post("", response_model=schemas.InventoryItem, status_code=status.HTTP_201_CREATED)
def create_inventory_item(
    item: schemas.InventoryItemCreate,
    response: Response,
    service: InventoryService = Depends(get_service),
):
    """
    Create a new inventory item.

    Args:
        item: Inventory item data to create

    Returns:
        Created inventory item object, with its URL in the Location header

    Raises:
        HTTPException: 400 listing every invalid field
    """
    try:
        with storage_errors("Error creating item"):
            db_item = service.create(item)
    except ValidationError as e:
        raise validation_failed(e.errors)

    response.headers["Location"] = f"{router.prefix}/{db_item.id}"
    return db_item


@router.put("/{item_id}", response_model=schemas.InventoryItem)
def update_inventory_item(
    item_id: int,
    item: schemas.InventoryItemUpdate,
    service: InventoryService = Depends(get_service),
):
    """
    Partially update an existing inventory item.

    Only the fields present in the body with a non-null, non-blank value are changed.

    Args:
        item_id: ID of the inventory item to update
        item: Fields to change

    Returns:
        Updated inventory item object

    Raises:
        HTTPException: 400 on invalid fields, 404 if item not found
    """
    try:
        with storage_errors("Error updating item"):
            return service.update(item_id, item)
    except ValidationError as e:
        raise validation_failed(e.errors)
    except ItemNotFoundError:
        logger.info(f"Update requested for missing inventory item {item_id}")
        raise HTTPException(status_code=404, detail=ITEM_NOT_FOUND)


@router.delete("/{item_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_inventory_item(item_id: int, service: InventoryService = Depends(get_service)):
    """
    Delete an inventory item.

    Args:
        item_id: ID of the inventory item to delete

    Returns:
        None (204 No Content)

    Raises:
        HTTPException: 404 if item not found
    """
    with storage_errors("Error deleting item"):
        success = service.delete(item_id)
    if not success:
        raise HTTPException(status_code=404, detail=ITEM_NOT_FOUND)


app.include_router(router)
