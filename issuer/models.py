from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple, Union

@dataclass(frozen=True)
class CredentialRequest:
    recipient_email: str
    recipient_name: str
    course_name: str
    issue_date: str

class UploadOutcome(str, Enum):
    NEWLY_CREATED = "newlyCreated"
    ALREADY_CERTIFIED = "alreadyCertified"

@dataclass(frozen=True)
class UploadResult:
    blob_id: str
    outcome: UploadOutcome

    @property
    def newly_stored(self) -> bool:
        return self.outcome is UploadOutcome.NEWLY_CREATED

@dataclass(frozen=True)
class PureArg:
    """A pure (non-object) move call argument. `kind` is "address" or "string"."""
    kind: str
    value: str

@dataclass(frozen=True)
class ObjectArg:
    """An on-chain object argument, resolved to a reference at submission time."""
    object_id: str

MoveArg = Union[PureArg, ObjectArg]

@dataclass(frozen=True)
class TransactionSpec:
    package_id: str
    module: str
    function: str
    arguments: Tuple[MoveArg, ...]

    @property
    def target(self) -> str:
        return f"{self.package_id}::{self.module}::{self.function}"

@dataclass(frozen=True)
class IssuanceResult:
    blob_id: str
    tx_digest: str
    walrus_url: str
    explorer_url: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "blobId": self.blob_id,
            "txDigest": self.tx_digest,
            "walrusUrl": self.walrus_url,
            "explorerUrl": self.explorer_url,
        }
