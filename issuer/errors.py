"""Error taxonomy for credential issuance.

Every lower-level failure (HTTP transport, JSON-RPC, cryptography) is caught
where it happens and re-raised as one of these before it leaves its component.

All errors carry:
- message: the text that may be shown to an API caller
- detail: diagnostics for the logs only (never serialized by to_dict)
- error_code / http_status: used by the HTTP layer
"""
from __future__ import annotations

from typing import Any, Dict, Optional

class IssuanceError(Exception):
    error_code: str = "ISSUANCE_ERROR"
    http_status: int = 500
    default_message: str = "Credential issuance failed."
    # Set by the orchestrator to the IssuanceStage the error ended.
    stage: Optional[Any] = None

    def __init__(self, message: Optional[str] = None, detail: Optional[str] = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {"error": self.message, "code": self.error_code}

class ConfigurationError(IssuanceError):
    """Missing or invalid startup configuration, including undecodable key material."""
    error_code = "CONFIGURATION_ERROR"
    default_message = "Issuer is not configured correctly."

class ValidationError(IssuanceError):
    error_code = "VALIDATION_ERROR"
    http_status = 400
    default_message = "Invalid request."

class UploadError(IssuanceError):
    error_code = "UPLOAD_ERROR"
    default_message = "Failed to upload file to Walrus."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail=detail)

class TransactionError(IssuanceError):
    error_code = "TRANSACTION_ERROR"
    default_message = "Blockchain minting failed."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail=detail)
