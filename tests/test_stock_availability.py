import pytest

from warehouse_service.app.core.exceptions import StockReadError
from warehouse_service.app.crud.stock.stock_crud import (
    calculate_stock,
    check_stock_availability,
    validate_stock_for_items,
)
from warehouse_service.app.schemas.stock.stock_schemas import StockCheckItem
from stock_fakes import FakeStockFactSource, fact


@pytest.fixture
def source():
    return FakeStockFactSource(
        received=[
            fact(1, "M", 2, 10),
            fact(1, "M", 5, 4),
            fact(1, "L", 2, 3),
            fact(2, "M", 2, 8),
        ],
        realized=[fact(1, "M", 2, 6), fact(1, "L", 2, 3)],
        products={1: "Basic tee", 2: "Hoodie"},
    )


def test_calculate_stock_for_product(source):
    stock = calculate_stock(source, 1)

    assert stock.product_id == 1
    assert stock.total_quantity == 8
    assert {(i.size_code, i.color_id, i.qty) for i in stock.stock_items} == {
        ("M", 2, 4), ("M", 5, 4)}


def test_calculate_stock_filters_by_size(source):
    stock = calculate_stock(source, 1, size_code="L")

    assert stock.total_quantity == 0
    assert stock.stock_items == []


def test_check_availability_with_color(source):
    result = check_stock_availability(source, 1, "M", 4, color_id=5)

    assert result.available is True
    assert result.available_qty == 4
    assert result.message == ""


def test_check_availability_reports_shortage(source):
    result = check_stock_availability(source, 1, "M", 5, color_id=2)

    assert result.available is False
    assert result.available_qty == 4
    assert result.product_name == "Basic tee"
    assert "Requested: 5, available: 4" in result.message


def test_check_availability_without_color_uses_first_size_row(source):
    result = check_stock_availability(source, 1, "M", 4)

    assert result.available is True
    assert result.available_qty == 4
    assert result.color_id == 2


def test_check_availability_without_color_ignores_other_colors(source):
    # Colors 2 and 5 both hold 4 in size M; only the first row counts
    result = check_stock_availability(source, 1, "M", 5)

    assert result.available is False
    assert result.available_qty == 4
    assert result.color_id == 2


def test_validate_items_share_one_balance_per_key(source):
    items = [
        StockCheckItem(product_id=2, size_code="M", color_id=2, qty=6),
        StockCheckItem(product_id=2, size_code="M", color_id=2, qty=6),
        StockCheckItem(product_id=1, size_code="M", color_id=5, qty=4),
    ]

    result = validate_stock_for_items(source, items)

    assert result.valid is False
    assert len(result.errors) == 1
    error = result.errors[0]
    assert (error.product_id, error.requested_qty, error.available_qty) == (2, 6, 2)
    assert error.product_name == "Hoodie"


def test_validate_items_for_never_received_key(source):
    result = validate_stock_for_items(
        source, [StockCheckItem(product_id=7, size_code="S", qty=1)])

    assert result.valid is False
    assert result.errors[0].available_qty == 0
    assert "Unknown product" in result.errors[0].message


def test_validate_items_propagates_read_failure():
    source = FakeStockFactSource(fail_on={"realized"})

    with pytest.raises(StockReadError):
        validate_stock_for_items(
            source, [StockCheckItem(product_id=1, size_code="M", qty=1)])


def test_validate_items_pins_colorless_line_to_stocked_color(source):
    items = [
        StockCheckItem(product_id=1, size_code="M", qty=3),
        StockCheckItem(product_id=1, size_code="M", color_id=2, qty=3),
    ]

    result = validate_stock_for_items(source, items)

    assert [(i.color_id, i.qty) for i in result.items] == [(2, 3), (2, 3)]
    assert result.valid is False
    assert len(result.errors) == 1
    error = result.errors[0]
    assert (error.color_id, error.requested_qty, error.available_qty) == (2, 3, 1)


def test_validate_items_colorless_line_without_stock_keeps_no_color(source):
    result = validate_stock_for_items(
        source, [StockCheckItem(product_id=1, size_code="L", qty=1)])

    assert result.valid is False
    assert result.items[0].color_id is None
    assert result.errors[0].available_qty == 0
