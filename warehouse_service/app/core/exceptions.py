from shared.core.exceptions import AppException
from shared.utils.app_status_code import AppStatusCode


class StockReadError(AppException):
    """A fact table could not be read; the stock figure is abandoned as a whole."""
    http_status = 500
    status_code = AppStatusCode.STOCK_READ_FAILED


class InsufficientStockError(AppException):
    http_status = 400
    status_code = AppStatusCode.STOCK_INSUFFICIENT


class InvalidSizeError(AppException):
    http_status = 400
    status_code = AppStatusCode.STOCK_INVALID_SIZE


class ProductNotFoundError(AppException):
    http_status = 404
    status_code = AppStatusCode.NOT_FOUND
