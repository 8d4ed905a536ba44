class AppStatusCode:
    # Success
    DATA_RETRIEVED_SUCCESSFULLY = "100"
    CREATED_SUCCESSFULLY = "101"

    # Failure
    OPERATION_FAILED = "200"
    OPERATION_ERROR = "201"
    INVALID_INPUT = "202"
    REQUIRED_VALIDATION_ERROR = "203"
    NOT_FOUND = "204"

    # Stock
    STOCK_READ_FAILED = "300"
    STOCK_INSUFFICIENT = "301"
    STOCK_INVALID_SIZE = "302"

    # Authentication
    AUTHENTICATION_TOKEN_INVALID = "400"
    AUTHENTICATION_TOKEN_EXPIRED = "401"
    AUTHENTICATION_UNAUTHORIZED_ACCESS = "402"
    UNAUTHORIZED_ACTION = "403"
