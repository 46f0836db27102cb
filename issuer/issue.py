from __future__ import annotations

import logging
from enum import Enum

from crypto.keys import SigningIdentity, load_signing_identity
from issuer.config import IssuerSettings
from issuer.errors import IssuanceError, TransactionError, UploadError
from issuer.models import CredentialRequest, IssuanceResult
from issuer.submitter import LedgerSubmitter
from issuer.sui_client import SuiClient
from issuer.transaction import ContractRefs, build_mint_transaction
from issuer.walrus import WalrusUploader

logger = logging.getLogger(__name__)

class IssuanceStage(str, Enum):
    START = "start"
    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    MINTING = "minting"
    MINTED = "minted"

def walrus_blob_url(aggregator_url: str, blob_id: str) -> str:
    return f"{aggregator_url.rstrip('/')}/v1/blobs/{blob_id}"

def explorer_tx_url(explorer_url: str, network: str, digest: str) -> str:
    return f"{explorer_url.rstrip('/')}/{network}/tx/{digest}"

class IssuanceOrchestrator:
    """
    Issues one credential per call: store the artifact on Walrus, then mint an
    on-chain record pointing at its blob id.

    Steps run strictly in order and the first failure ends the issuance. There
    is no retry and no compensation: if minting fails after a successful upload
    the blob stays stored but unreferenced.
    """

    def __init__(
        self,
        identity: SigningIdentity,
        contract: ContractRefs,
        uploader: WalrusUploader,
        submitter: LedgerSubmitter,
        network: str,
        aggregator_url: str,
        explorer_url: str,
    ):
        self.identity = identity
        self.contract = contract
        self.uploader = uploader
        self.submitter = submitter
        self.network = network
        self.aggregator_url = aggregator_url
        self.explorer_url = explorer_url

    @classmethod
    def from_settings(cls, settings: IssuerSettings) -> "IssuanceOrchestrator":
        """Startup wiring. Raises ConfigurationError if the admin key cannot be decoded."""
        identity = load_signing_identity(settings.admin_private_key.get_secret_value())
        logger.info("Admin Address: %s", identity.address)
        return cls(
            identity=identity,
            contract=ContractRefs(
                package_id=settings.sui_package_id,
                admin_cap_id=settings.sui_admin_cap_id,
                version_object_id=settings.version_object_id,
            ),
            uploader=WalrusUploader(settings.publisher_url, timeout=settings.http_timeout),
            submitter=LedgerSubmitter(
                SuiClient(settings.rpc_url, timeout=settings.http_timeout),
                gas_budget=settings.sui_gas_budget,
            ),
            network=settings.sui_network,
            aggregator_url=settings.aggregator_url,
            explorer_url=settings.explorer_url,
        )

    def issue(self, data: bytes, content_type: str, request: CredentialRequest) -> IssuanceResult:
        logger.info("Processing credential issuance for %s...", request.recipient_email)
        stage = IssuanceStage.START
        try:
            stage = IssuanceStage.UPLOADING
            upload = self.uploader.upload(data, content_type)
            if not upload.blob_id:
                raise UploadError("empty blob id")
            stage = IssuanceStage.UPLOADED
            logger.info("Storage Successful! Blob ID: %s", upload.blob_id)

            spec = build_mint_transaction(self.contract, upload.blob_id, request, self.identity)
            stage = IssuanceStage.MINTING
            logger.info("Initiating %s transaction...", spec.function)
            digest = self.submitter.submit(spec, self.identity)
            stage = IssuanceStage.MINTED
        except TransactionError as e:
            e.stage = stage
            logger.error("Minting failed: %s", e.detail)
            logger.warning("Blob %s was stored but no credential references it", upload.blob_id)
            raise
        except IssuanceError as e:
            e.stage = stage
            logger.error("Issuance failed while %s: %s", stage.value, e.detail)
            raise

        return IssuanceResult(
            blob_id=upload.blob_id,
            tx_digest=digest,
            walrus_url=walrus_blob_url(self.aggregator_url, upload.blob_id),
            explorer_url=explorer_tx_url(self.explorer_url, self.network, digest),
        )
