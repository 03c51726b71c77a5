"""
Error taxonomy.

Server side: IdentifyError subclasses carry the HTTP status and the fixed
public message returned to the client. Internal detail stays in the log.

Client side: ClientError subclasses raised by the camera session and the
identify transport, turned into UI messages by the controller.
"""

# Error codes (used in log lines)
ERR_BAD_REQUEST = "BAD_REQUEST"
ERR_NOT_CONFIGURED = "NOT_CONFIGURED"
ERR_UNPROCESSABLE = "UNPROCESSABLE"
ERR_INTERNAL = "INTERNAL"


class IdentifyError(Exception):
    status_code = 500
    code = ERR_INTERNAL
    message = "Internal server error"

    def __init__(self, detail: str | None = None):
        super().__init__(detail or self.message)
        self.detail = detail or self.message


class BadRequest(IdentifyError):
    status_code = 400
    code = ERR_BAD_REQUEST
    message = "No valid image provided"


class ServiceUnavailable(IdentifyError):
    status_code = 503
    code = ERR_NOT_CONFIGURED
    message = "Service configuration error"


class UnprocessableResponse(IdentifyError):
    status_code = 422
    code = ERR_UNPROCESSABLE
    message = "Failed to process AI response"


class InternalError(IdentifyError):
    pass


class ClientError(Exception):
    message = "Something went wrong. Please try again."


class CameraUnavailable(ClientError):
    message = "Unable to access camera. Please check permissions."


class CaptureFailed(ClientError):
    message = "Failed to capture image. Please try again."


class RequestCancelled(ClientError):
    """Superseded or withdrawn request. Never shown to the user."""


class RequestFailed(ClientError):
    message = "Failed to identify dish. Please try again."

    def __init__(self, detail: str | None = None, status_code: int | None = None):
        super().__init__(detail or self.message)
        self.status_code = status_code
