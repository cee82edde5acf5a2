"""Item catalogue and running stock ledger endpoints."""

from fastapi import APIRouter, Depends, Query, Response, status

from solarbooks.api.dependencies import (
    get_create_item_use_case,
    get_delete_item_use_case,
    get_inv_item_store,
    get_inventory_valuation_use_case,
    get_record_stock_transaction_use_case,
    get_update_item_use_case,
)
from solarbooks.application.dto.mappers import entry_to_response, item_to_response
from solarbooks.application.dto.requests import (
    CreateItemRequest,
    RecordStockTransactionRequest,
    UpdateItemRequest,
)
from solarbooks.application.dto.responses import (
    CreateItemResponse,
    ErrorResponse,
    InventoryValuationResponse,
    ItemListResponse,
    ItemResponse,
    StockLedgerResponse,
    StockTransactionResponse,
)
from solarbooks.application.use_cases.manage_items import (
    CreateItemUseCase,
    DeleteItemUseCase,
    InventoryValuationUseCase,
    UpdateItemUseCase,
)
from solarbooks.application.use_cases.record_stock_transaction import (
    RecordStockTransactionUseCase,
)
from solarbooks.core.entities.inventory import ItemCategory, ItemStatus, TransactionType
from solarbooks.core.exceptions import ItemNotFoundError
from solarbooks.infrastructure.storage.sqlite import SQLiteInventoryStore

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.post(
    "/items",
    response_model=CreateItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
)
async def create_item(
    request: CreateItemRequest,
    use_case: CreateItemUseCase = Depends(get_create_item_use_case),
) -> CreateItemResponse:
    """Create an item. A positive opening stock is posted to the ledger."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/items", response_model=ItemListResponse)
async def list_items(
    category: ItemCategory | None = None,
    item_status: ItemStatus | None = Query(default=None, alias="status"),
    search: str | None = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> ItemListResponse:
    items = await store.list_items(
        category=category, status=item_status, search=search, limit=limit, offset=offset
    )
    return ItemListResponse(
        items=[item_to_response(item) for item in items],
        total=offset + len(items),
        limit=limit,
        offset=offset,
        has_more=len(items) == limit,
    )


@router.get("/items/low-stock", response_model=list[ItemResponse])
async def list_low_stock(
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> list[ItemResponse]:
    """Items at or below their reorder level."""
    items = await store.list_low_stock(limit=limit, offset=offset)
    return [item_to_response(item) for item in items]


@router.get(
    "/items/{item_id}",
    response_model=ItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_item(
    item_id: int,
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> ItemResponse:
    item = await store.get_item(item_id)
    if item is None:
        raise ItemNotFoundError(item_id)
    return item_to_response(item)


@router.patch(
    "/items/{item_id}",
    response_model=ItemResponse,
    responses={404: {"model": ErrorResponse}},
)
async def update_item(
    item_id: int,
    request: UpdateItemRequest,
    use_case: UpdateItemUseCase = Depends(get_update_item_use_case),
) -> ItemResponse:
    item = await use_case.execute(item_id, request)
    return item_to_response(item)


@router.delete(
    "/items/{item_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def delete_item(
    item_id: int,
    use_case: DeleteItemUseCase = Depends(get_delete_item_use_case),
) -> Response:
    """Delete an item that has no stock transactions."""
    await use_case.execute(item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post(
    "/transactions",
    response_model=StockTransactionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def record_transaction(
    request: RecordStockTransactionRequest,
    use_case: RecordStockTransactionUseCase = Depends(get_record_stock_transaction_use_case),
) -> StockTransactionResponse:
    """Append a stock ledger entry and move the item's current stock."""
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get("/ledger", response_model=StockLedgerResponse)
async def get_ledger(
    item_id: int | None = None,
    transaction_type: TransactionType | None = None,
    project_id: int | None = None,
    limit: int | None = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> StockLedgerResponse:
    """Ledger entries in posting order, optionally filtered."""
    entries = await store.get_ledger(
        item_id=item_id,
        transaction_type=transaction_type,
        project_id=project_id,
        limit=limit,
        offset=offset,
    )
    return StockLedgerResponse(
        entries=[entry_to_response(e) for e in entries],
        total=len(entries),
    )


@router.get(
    "/items/{item_id}/ledger",
    response_model=StockLedgerResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_item_ledger(
    item_id: int,
    store: SQLiteInventoryStore = Depends(get_inv_item_store),
) -> StockLedgerResponse:
    if await store.get_item(item_id) is None:
        raise ItemNotFoundError(item_id)
    entries = await store.get_ledger(item_id=item_id)
    return StockLedgerResponse(
        entries=[entry_to_response(e) for e in entries],
        total=await store.count_entries(item_id),
    )


@router.get("/valuation", response_model=InventoryValuationResponse)
async def inventory_valuation(
    use_case: InventoryValuationUseCase = Depends(get_inventory_valuation_use_case),
) -> InventoryValuationResponse:
    """Stock value of active items grouped by category."""
    result = await use_case.execute()
    return use_case.to_response(result)
