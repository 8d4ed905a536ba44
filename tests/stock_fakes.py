from contextlib import contextmanager
from datetime import datetime

from shared.core.schemas import UserToken
from warehouse_service.app.core.exceptions import StockReadError
from warehouse_service.app.schemas.stock.stock_schemas import StockFactRow


def fact(product_id, size_code, color_id, qty, **labels):
    labels.setdefault("product_name", f"Product {product_id}")
    labels.setdefault("article", f"A{product_id:03d}")
    labels.setdefault("created_at", datetime(2024, 1, 1, 10, 0))
    return StockFactRow(product_id=product_id, size_code=size_code,
                        color_id=color_id, qty=qty, **labels)


class FakeStockFactSource:
    """In-memory fact tables. `fail_on` names the reads that should blow up."""

    def __init__(self, received=(), realized=(), colors=(), products=None, fail_on=()):
        self.received = list(received)
        self.realized = list(realized)
        self.colors = list(colors)
        self.products = dict(products or {})
        self.fail_on = set(fail_on)
        self.snapshots = 0
        self.reads = []

    @contextmanager
    def snapshot(self):
        self.snapshots += 1
        yield

    def _check(self, what):
        self.reads.append(what)
        if what in self.fail_on:
            raise StockReadError(f"Failed to read {what}")

    @staticmethod
    def _filter(rows, product_id, size_code):
        return [
            row for row in rows
            if (product_id is None or row.product_id == product_id)
            and (not size_code or row.size_code == size_code)
        ]

    def load_colors(self):
        self._check("colors")
        return list(self.colors)

    def load_received(self, product_id=None, size_code=None):
        self._check("received")
        return self._filter(self.received, product_id, size_code)

    def load_realized(self, product_id=None, size_code=None):
        self._check("realized")
        return self._filter(self.realized, product_id, size_code)

    def get_product_name(self, product_id):
        self._check("products")
        return self.products.get(product_id)


STOREKEEPER = UserToken(user_id="u-1", name="Store Keeper",
                        account_type="staff", roles=["storekeeper"])
MANAGER = UserToken(user_id="u-2", name="Manager",
                    account_type="staff", roles=["manager"])
