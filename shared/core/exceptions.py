from shared.utils.app_status_code import AppStatusCode


class AppException(Exception):
    """Domain failure that maps straight onto a failure envelope."""

    http_status = 400
    status_code = AppStatusCode.OPERATION_FAILED

    def __init__(self, message: str, data=None):
        super().__init__(message)
        self.message = message
        self.data = data
