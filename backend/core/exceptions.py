"""
Custom exception hierarchy for the application
"""


class RelayException(Exception):
    """Base exception for chat relay errors"""
    status_code = 500
    error = "Internal server error"

    def __init__(self, message: str, status_code: int = None, model: str = None):
        super().__init__(message)
        self.message = message
        self.model = model
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(RelayException):
    """Malformed body or missing required fields"""
    status_code = 400
    error = "Bad request"


class ConfigurationError(RelayException):
    """Missing or invalid server configuration (e.g. API key)"""
    status_code = 500
    error = "API configuration error"


class UpstreamAPIError(RelayException):
    """Completion provider answered with a non-2xx status"""
    error = "Upstream API error"


class ToolExecutionError(RelayException):
    """Error calling the tool server"""
    status_code = 500
    error = "Tool execution error"
