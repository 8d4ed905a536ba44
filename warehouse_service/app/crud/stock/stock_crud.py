# app/crud/stock/stock_crud.py
import math
from typing import Dict, Iterable, List, Optional, Tuple

from shared.utils.logger import get_logger
from ...core.exceptions import InvalidSizeError, StockReadError
from ...enum.stock_enum import CHILDREN_CATEGORY_ID, NO_COLOR_NAME, UNKNOWN_PRODUCT_NAME
from ...helpers.normalize_helper import is_children_size, normalize_color_id, normalize_size_code, sort_sizes
from ...schemas.stock.stock_schemas import (
    ArticleColorOut,
    ArticleStockRow,
    AvailableStockOut,
    PaginationOut,
    ProductStockItem,
    ProductStockOut,
    StockAvailabilityOut,
    StockByArticleOut,
    StockCheckError,
    StockCheckItem,
    StockFactRow,
    StockQueryParams,
    StockReportOut,
    StockReportRow,
    StockValidationOut,
)
from .stock_facts_repository import StockFactSource

logger = get_logger(__name__)


class StockEntry:
    """Running balance for one (product, size, color) key."""

    __slots__ = ("product_id", "size_code", "color_id", "qty", "product_name", "article",
                 "brand_name", "category_id", "category_name", "last_receipt_date")

    def __init__(self, fact: StockFactRow, color_id: Optional[int]):
        self.product_id = fact.product_id
        self.size_code = fact.size_code
        self.color_id = color_id
        self.qty = 0
        self.product_name = fact.product_name
        self.article = fact.article
        self.brand_name = fact.brand_name
        self.category_id = fact.category_id
        self.category_name = fact.category_name
        self.last_receipt_date = fact.created_at


def stock_key(product_id: int, size_code: str, color_id: Optional[int]) -> str:
    return f"{product_id}|{size_code}|{color_id}"


def color_label(color_id: Optional[int], color_names: Dict[int, str]) -> str:
    if color_id is None:
        return NO_COLOR_NAME
    return color_names.get(color_id, str(color_id))


def load_color_names(source: StockFactSource) -> Dict[int, str]:
    """Color reference is optional: a failed lookup degrades to id labels."""
    try:
        return {color_id: name for color_id, name in source.load_colors()}
    except StockReadError:
        logger.warning("Color lookup failed, falling back to color ids")
        return {}


def fold_stock(received: Iterable[StockFactRow], realized: Iterable[StockFactRow]) -> Dict[str, StockEntry]:
    """
    Sum received quantities per key, then subtract realized quantities,
    never letting a key drop below zero. Realized facts for keys that were
    never received are ignored. Zero rows are kept; callers filter them.
    """
    entries: Dict[str, StockEntry] = {}

    for fact in received:
        color_id = normalize_color_id(fact.color_id)
        key = stock_key(fact.product_id, fact.size_code, color_id)
        entry = entries.get(key)
        if entry is None:
            # First row for the key supplies the labels
            entry = entries[key] = StockEntry(fact, color_id)
        entry.qty += fact.qty or 0
        if fact.created_at and (entry.last_receipt_date is None or fact.created_at > entry.last_receipt_date):
            entry.last_receipt_date = fact.created_at

    unmatched = 0
    for fact in realized:
        key = stock_key(fact.product_id, fact.size_code,
                        normalize_color_id(fact.color_id))
        entry = entries.get(key)
        if entry is None:
            unmatched += 1
            continue
        entry.qty = max(0, entry.qty - (fact.qty or 0))

    if unmatched:
        logger.debug("Skipped %s realized rows without a matching receipt", unmatched)
    return entries


def _read_facts(source: StockFactSource, product_id: Optional[int] = None,
                size_code: Optional[str] = None) -> Tuple[List[StockFactRow], List[StockFactRow]]:
    with source.snapshot():
        received = list(source.load_received(
            product_id=product_id, size_code=size_code))
        realized = list(source.load_realized(
            product_id=product_id, size_code=size_code))
    return received, realized


# ----------------- Available stock -----------------

def compute_available_stock(source: StockFactSource) -> List[AvailableStockOut]:
    """
    Current available quantity for every stocked (product, size, color) key.

    Both fact tables are read inside one snapshot; a read failure on either
    raises StockReadError and nothing is returned. Keys at zero are omitted.
    """
    color_names = load_color_names(source)
    received, realized = _read_facts(source)
    entries = fold_stock(received, realized)

    return [
        AvailableStockOut(
            product_id=entry.product_id,
            product_name=entry.product_name or UNKNOWN_PRODUCT_NAME,
            article=entry.article or "",
            size_code=entry.size_code,
            color_id=entry.color_id,
            color_name=color_label(entry.color_id, color_names),
            qty=entry.qty,
        )
        for entry in entries.values()
        if entry.qty > 0
    ]


# ----------------- Stock report -----------------

def get_stock_report(source: StockFactSource, article_search: Optional[str] = None) -> StockReportOut:
    color_names = load_color_names(source)
    received, realized = _read_facts(source)
    entries = fold_stock(received, realized)

    rows = [
        StockReportRow(
            product_id=entry.product_id,
            product_name=entry.product_name or UNKNOWN_PRODUCT_NAME,
            article=entry.article or "",
            brand=entry.brand_name or "",
            category=entry.category_name or "",
            size_code=entry.size_code,
            color_id=entry.color_id,
            color_name=color_label(entry.color_id, color_names),
            qty=entry.qty,
            last_receipt_date=entry.last_receipt_date,
        )
        for entry in entries.values()
        if entry.qty > 0
    ]
    rows.sort(key=lambda row: (row.article, row.size_code))

    if article_search and article_search.strip():
        term = article_search.strip().lower()
        rows = [row for row in rows if term in row.article.lower()]

    return StockReportOut(
        total_products=len({row.product_id for row in rows}),
        total_items=len(rows),
        total_quantity=sum(row.qty for row in rows),
        stock=rows,
    )


# ----------------- Stock by article -----------------

def _matches_search(entry: StockEntry, color_name: str, term: str) -> bool:
    fields = (entry.article, entry.product_name, entry.brand_name, color_name)
    return any(value and term in value.lower() for value in fields)


def get_stock_by_article(source: StockFactSource, params: StockQueryParams) -> StockByArticleOut:
    """
    Warehouse grid: one row per (article, color) with quantities laid out
    against a shared size header.
    """
    color_names = load_color_names(source)
    received, realized = _read_facts(source)
    entries = fold_stock(received, realized)

    term = params.search.strip().lower() if params.search else ""
    articles: Dict[str, dict] = {}
    all_sizes = set()

    for entry in entries.values():
        if entry.qty <= 0:
            continue
        if params.category_id is not None and entry.category_id != params.category_id:
            continue
        color_name = color_label(entry.color_id, color_names)
        if term and not _matches_search(entry, color_name, term):
            continue

        all_sizes.add(entry.size_code)
        article = entry.article or ""
        group = articles.get(article)
        if group is None:
            group = articles[article] = {
                "id": entry.product_id,
                "name": entry.product_name or UNKNOWN_PRODUCT_NAME,
                "brand_name": entry.brand_name or "",
                "colors": {},
                "total": 0,
                "last_receipt_date": entry.last_receipt_date,
            }

        color = group["colors"].setdefault(entry.color_id, {
            "color_name": color_name, "sizes": {}, "total": 0})
        color["sizes"][entry.size_code] = color["sizes"].get(
            entry.size_code, 0) + entry.qty
        color["total"] += entry.qty
        group["total"] += entry.qty
        if entry.last_receipt_date and (group["last_receipt_date"] is None
                                        or entry.last_receipt_date > group["last_receipt_date"]):
            group["last_receipt_date"] = entry.last_receipt_date

    children = params.category_id == CHILDREN_CATEGORY_ID
    sorted_sizes = sort_sizes(
        (size for size in all_sizes if is_children_size(size) == children),
        children=children,
    )

    rows: List[Tuple[str, dict, Optional[int], dict]] = []
    for article in sorted(articles):
        group = articles[article]
        for color_id, color in sorted(group["colors"].items(), key=lambda item: item[1]["color_name"]):
            rows.append((article, group, color_id, color))

    total = len(rows)
    offset = (params.page - 1) * params.limit
    page_rows = rows[offset:offset + params.limit]

    if children:
        # Children grid always shows the full size run
        page_sizes = sorted_sizes
    else:
        used = {size for _, _, _, color in page_rows
                for size, qty in color["sizes"].items() if qty > 0}
        page_sizes = [size for size in sorted_sizes if size in used]

    items = [
        ArticleStockRow(
            id=group["id"],
            article=article,
            name=group["name"],
            brand_name=group["brand_name"],
            total=group["total"],
            last_receipt_date=group["last_receipt_date"],
            color=ArticleColorOut(
                color_id=color_id,
                color_name=color["color_name"],
                sizes=[color["sizes"].get(size, 0) for size in page_sizes],
                total=color["total"],
            ),
        )
        for article, group, color_id, color in page_rows
    ]

    return StockByArticleOut(
        items=items,
        sizes=page_sizes,
        pagination=PaginationOut(
            total=total,
            page=params.page,
            limit=params.limit,
            total_pages=max(1, math.ceil(total / params.limit)),
        ),
    )


# ----------------- Product stock & availability -----------------

def calculate_stock(source: StockFactSource, product_id: int, size_code: Optional[str] = None) -> ProductStockOut:
    received, realized = _read_facts(
        source, product_id=product_id, size_code=size_code)
    entries = fold_stock(received, realized)

    stock_items = [
        ProductStockItem(size_code=entry.size_code,
                         color_id=entry.color_id, qty=entry.qty)
        for entry in entries.values()
        if entry.qty > 0
    ]
    return ProductStockOut(
        product_id=product_id,
        total_quantity=sum(item.qty for item in stock_items),
        stock_items=stock_items,
    )


def normalize_stock_items(items: Iterable) -> List[StockCheckItem]:
    """Bring document lines to the stored size and color form before any stock check."""
    normalized = []
    for item in items:
        size_code = normalize_size_code(item.size_code)
        if not size_code:
            raise InvalidSizeError(f"Invalid size code: {item.size_code!r}")
        normalized.append(StockCheckItem(
            product_id=item.product_id,
            size_code=size_code,
            color_id=normalize_color_id(item.color_id),
            qty=item.qty,
        ))
    return normalized


def _find_stock_row(stock: ProductStockOut, size_code: str, color_id: Optional[int]) -> Tuple[Optional[int], int]:
    """Return the (color_id, qty) row a line draws from."""
    for item in stock.stock_items:
        if item.size_code != size_code:
            continue
        # Without a color the first row for the size decides
        if color_id is None or item.color_id == color_id:
            return item.color_id, item.qty
    return color_id, 0


def _shortage_message(product_name: Optional[str], requested_qty: int, available_qty: int) -> str:
    return (
        f'Not enough "{product_name or UNKNOWN_PRODUCT_NAME}" in stock. '
        f"Requested: {requested_qty}, available: {available_qty}"
    )


def check_stock_availability(source: StockFactSource, product_id: int, size_code: str,
                             requested_qty: int, color_id: Optional[int] = None) -> StockAvailabilityOut:
    product_name = source.get_product_name(product_id)
    stock = calculate_stock(source, product_id, size_code)
    resolved_color_id, available_qty = _find_stock_row(
        stock, size_code, normalize_color_id(color_id))
    available = available_qty >= requested_qty

    return StockAvailabilityOut(
        available=available,
        available_qty=available_qty,
        requested_qty=requested_qty,
        color_id=resolved_color_id,
        product_name=product_name,
        message="" if available else _shortage_message(
            product_name, requested_qty, available_qty),
    )


def validate_stock_for_items(source: StockFactSource, items: List[StockCheckItem]) -> StockValidationOut:
    """
    Check a whole document against current stock. Lines that hit the same
    key draw from one shared balance, so 6 + 6 against 10 fails the second line.
    A line without a color is pinned to the row it was checked against; the
    returned items carry that color and are what a realization must write.
    """
    stock_cache: Dict[Tuple[int, str], ProductStockOut] = {}
    name_cache: Dict[int, Optional[str]] = {}
    consumed: Dict[str, int] = {}
    errors: List[StockCheckError] = []
    resolved: List[StockCheckItem] = []

    for item in items:
        cache_key = (item.product_id, item.size_code)
        if cache_key not in stock_cache:
            stock_cache[cache_key] = calculate_stock(
                source, item.product_id, item.size_code)
        if item.product_id not in name_cache:
            name_cache[item.product_id] = source.get_product_name(
                item.product_id)

        color_id, stocked_qty = _find_stock_row(
            stock_cache[cache_key], item.size_code, normalize_color_id(item.color_id))
        key = stock_key(item.product_id, item.size_code, color_id)
        available_qty = max(0, stocked_qty - consumed.get(key, 0))
        consumed[key] = consumed.get(key, 0) + item.qty
        resolved.append(item.model_copy(update={"color_id": color_id}))

        if available_qty < item.qty:
            product_name = name_cache[item.product_id]
            errors.append(StockCheckError(
                product_id=item.product_id,
                size_code=item.size_code,
                color_id=color_id,
                requested_qty=item.qty,
                available_qty=available_qty,
                product_name=product_name,
                message=_shortage_message(
                    product_name, item.qty, available_qty),
            ))

    return StockValidationOut(valid=not errors, errors=errors, items=resolved)
