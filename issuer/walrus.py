"""Upload credential artifacts to a Walrus publisher."""
from __future__ import annotations

import logging
from typing import Any, Optional

import requests

from issuer.errors import UploadError
from issuer.models import UploadOutcome, UploadResult

logger = logging.getLogger(__name__)

# Storage epochs every credential artifact is paid for.
STORAGE_EPOCHS = 5

def parse_upload_response(payload: Any) -> UploadResult:
    """
    Walrus answers a store with either
        {"newlyCreated": {"blobObject": {"blobId": ...}}}
    or, when identical content is already stored,
        {"alreadyCertified": {"blobId": ...}}
    Both carry the same blob id. Anything else is an UploadError.
    """
    if isinstance(payload, dict):
        if isinstance(payload.get("newlyCreated"), dict):
            blob_object = payload["newlyCreated"].get("blobObject")
            blob_id = blob_object.get("blobId") if isinstance(blob_object, dict) else None
            outcome = UploadOutcome.NEWLY_CREATED
        elif isinstance(payload.get("alreadyCertified"), dict):
            blob_id = payload["alreadyCertified"].get("blobId")
            outcome = UploadOutcome.ALREADY_CERTIFIED
        else:
            blob_id, outcome = None, None
        if outcome is not None and isinstance(blob_id, str) and blob_id:
            return UploadResult(blob_id=blob_id, outcome=outcome)
    raise UploadError("Unexpected response structure from Walrus.")

class WalrusUploader:
    def __init__(self, publisher_url: str, timeout: float = 60.0,
                 session: Optional[requests.Session] = None):
        self.publisher_url = publisher_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests

    @property
    def store_url(self) -> str:
        return f"{self.publisher_url}/v1/blobs"

    def upload(self, data: bytes, content_type: str) -> UploadResult:
        try:
            r = self.session.put(
                self.store_url,
                params={"epochs": STORAGE_EPOCHS},
                data=data,
                headers={"Content-Type": content_type or "application/octet-stream"},
                timeout=self.timeout,
            )
            r.raise_for_status()
            payload = r.json()
        except requests.RequestException as e:
            body = e.response.text if e.response is not None else None
            logger.error("Error uploading to Walrus: %s", e)
            if body:
                logger.error("Server response: %s", body)
            raise UploadError(f"{type(e).__name__}: {e}") from e
        except ValueError as e:
            logger.error("Walrus returned a non-JSON body: %s", e)
            raise UploadError("non-JSON response from Walrus") from e

        try:
            result = parse_upload_response(payload)
        except UploadError:
            logger.error("Unexpected response structure from Walrus: %s", payload)
            raise
        logger.info("Walrus store %s: blob %s (%d bytes)", result.outcome.value, result.blob_id, len(data))
        return result
