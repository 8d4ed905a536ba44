import pytest

from warehouse_service.app.core.exceptions import StockReadError
from warehouse_service.app.crud.stock.stock_crud import compute_available_stock, fold_stock, stock_key
from stock_fakes import FakeStockFactSource, fact


def rows_by_key(rows):
    return {(r.product_id, r.size_code, r.color_id): r for r in rows}


def test_receive_then_partially_realize():
    source = FakeStockFactSource(
        received=[fact(1, "L", 2, 10)],
        realized=[fact(1, "L", 2, 5)],
        colors=[(2, "Black")],
    )

    rows = compute_available_stock(source)

    assert len(rows) == 1
    assert rows[0].qty == 5
    assert rows[0].color_name == "Black"
    assert rows[0].product_name == "Product 1"
    assert rows[0].article == "A001"


def test_over_realization_is_clamped_and_row_dropped():
    source = FakeStockFactSource(
        received=[fact(1, "L", 2, 10)],
        realized=[fact(1, "L", 2, 15)],
    )

    assert compute_available_stock(source) == []
    entries = fold_stock(source.received, source.realized)
    assert entries[stock_key(1, "L", 2)].qty == 0


def test_clamp_applies_per_realized_row():
    # 10 - 15 floors at 0, then a later receipt-less 3 cannot go negative either
    source = FakeStockFactSource(
        received=[fact(1, "L", 2, 10)],
        realized=[fact(1, "L", 2, 15), fact(1, "L", 2, 3)],
    )
    entries = fold_stock(source.received, source.realized)
    assert entries[stock_key(1, "L", 2)].qty == 0


def test_receipts_for_same_key_are_summed():
    source = FakeStockFactSource(
        received=[fact(1, "M", 2, 3), fact(1, "M", 2, 4)])

    rows = compute_available_stock(source)

    assert [r.qty for r in rows] == [7]


def test_without_realizations_available_equals_received():
    received = [fact(1, "S", 2, 4), fact(1, "M", 2, 6),
                fact(2, "S", None, 1), fact(1, "S", 2, 2)]
    rows = rows_by_key(compute_available_stock(
        FakeStockFactSource(received=received)))

    assert rows[(1, "S", 2)].qty == 6
    assert rows[(1, "M", 2)].qty == 6
    assert rows[(2, "S", None)].qty == 1


def test_realization_for_unknown_key_is_ignored():
    source = FakeStockFactSource(
        received=[fact(1, "L", 2, 10)],
        realized=[fact(9, "L", 2, 4), fact(1, "XL", 2, 4), fact(1, "L", 7, 4)],
    )

    rows = compute_available_stock(source)

    assert len(rows) == 1
    assert rows[0].qty == 10


def test_unknown_color_falls_back_to_id():
    source = FakeStockFactSource(
        received=[fact(1, "L", 42, 3)],
        realized=[fact(1, "L", 42, 1)],
        colors=[(2, "Black")],
    )

    rows = compute_available_stock(source)

    assert rows[0].color_name == "42"
    assert rows[0].qty == 2


def test_missing_color_and_product_labels_have_fallbacks():
    source = FakeStockFactSource(
        received=[fact(1, "L", None, 3, product_name=None, article=None)])

    row = compute_available_stock(source)[0]

    assert row.color_name == "No color"
    assert row.product_name == "Unknown product"
    assert row.article == ""


def test_zero_color_id_is_same_key_as_no_color():
    source = FakeStockFactSource(
        received=[fact(1, "L", 0, 5)],
        realized=[fact(1, "L", None, 2)],
    )

    rows = compute_available_stock(source)

    assert rows[0].color_id is None
    assert rows[0].qty == 3


def test_first_receipt_row_supplies_labels():
    source = FakeStockFactSource(received=[
        fact(1, "L", 2, 1, product_name="Old name"),
        fact(1, "L", 2, 1, product_name="New name"),
    ])

    assert compute_available_stock(source)[0].product_name == "Old name"


def test_color_lookup_failure_does_not_abort():
    source = FakeStockFactSource(
        received=[fact(1, "L", 2, 3)], fail_on={"colors"})

    rows = compute_available_stock(source)

    assert rows[0].color_name == "2"


@pytest.mark.parametrize("table", ["received", "realized"])
def test_fact_read_failure_aborts_whole_computation(table):
    source = FakeStockFactSource(
        received=[fact(1, "L", 2, 3)], fail_on={table})

    with pytest.raises(StockReadError):
        compute_available_stock(source)


def test_fact_tables_are_read_inside_one_snapshot():
    source = FakeStockFactSource(received=[fact(1, "L", 2, 3)])

    compute_available_stock(source)

    assert source.snapshots == 1
    assert source.reads == ["colors", "received", "realized"]


def test_repeated_calls_are_identical():
    source = FakeStockFactSource(
        received=[fact(1, "L", 2, 10), fact(2, "M", 5, 4)],
        realized=[fact(1, "L", 2, 3)],
        colors=[(2, "Black"), (5, "Red")],
    )

    first = compute_available_stock(source)
    second = compute_available_stock(source)

    assert first == second
    assert [r.qty for r in source.received] == [10, 4]


def test_available_is_never_negative():
    received = [fact(p, s, 2, 5) for p in (1, 2) for s in ("S", "M")]
    realized = [fact(p, s, 2, q) for p in (1, 2)
                for s in ("S", "M") for q in (1, 4, 9)]

    entries = fold_stock(received, realized)

    assert all(entry.qty >= 0 for entry in entries.values())
