class VimeoAPIError(Exception):
    """
    Exception raised when a request to the Vimeo API fails.

    Attributes:
        message (str): Explanation of the error.
        status_code (int, optional): HTTP status code of the failed API response.
        body (dict, optional): Body of the failed API response, often containing additional error details.

    Args:
        message (str): Explanation of the error.
        status_code (int, optional): HTTP status code of the failed API response.
        body (dict, optional): Body of the failed API response, often containing additional error details.
    """

    def __init__(self, message, status_code=None, body=None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RequestSerializationError(ValueError):
    """Exception raised when a request cannot be built from a method, URL and parameters."""

    pass
