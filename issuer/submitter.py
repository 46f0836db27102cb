"""Sign and execute credential transactions on Sui."""
from __future__ import annotations

import logging
from typing import Any, Dict, List

import requests

from crypto.encoding import b58_decode, b64_encode, normalize_sui_address
from crypto.keys import SigningIdentity
from crypto.signing import sign_transaction
from issuer.errors import TransactionError
from issuer.models import ObjectArg, TransactionSpec
from issuer.sui_client import SuiClient, SuiRPCError
from issuer.transaction import (
    OwnedObjectRef,
    ResolvedObject,
    SharedObjectRef,
    encode_transaction_data,
)

logger = logging.getLogger(__name__)

# Sui rejects transactions with more gas coins than this.
MAX_GAS_OBJECTS = 256

def _owned_ref(data: Dict[str, Any]) -> OwnedObjectRef:
    return OwnedObjectRef(
        object_id=normalize_sui_address(data["objectId"]),
        version=int(data["version"]),
        digest=b58_decode(data["digest"]),
    )

def _effects_status(result: Dict[str, Any]) -> Dict[str, Any]:
    # Missing or non-object levels read as an unknown status.
    effects = result.get("effects")
    status = effects.get("status") if isinstance(effects, dict) else None
    return status if isinstance(status, dict) else {"status": status}

def _is_mutable_param(param: Any) -> bool:
    # Only `&T` parameters take a shared object immutably.
    return not (isinstance(param, dict) and "Reference" in param)

class LedgerSubmitter:
    def __init__(self, client: SuiClient, gas_budget: int):
        self.client = client
        self.gas_budget = gas_budget

    def submit(self, spec: TransactionSpec, identity: SigningIdentity) -> str:
        """Sign and execute `spec`; returns the transaction digest."""
        try:
            tx_bytes = self._prepare(spec, identity)
            signature = sign_transaction(tx_bytes, identity)
            result = self.client.execute_transaction_block(b64_encode(tx_bytes), [signature])
        except TransactionError:
            raise
        except SuiRPCError as e:
            logger.error("Sui Mint Error: %s", e)
            raise TransactionError(str(e)) from e
        except requests.RequestException as e:
            logger.error("Sui Mint Error: %s: %s", type(e).__name__, e)
            raise TransactionError(f"{type(e).__name__}: {e}") from e
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            logger.error("Sui Mint Error: malformed RPC response or input: %r", e)
            raise TransactionError(f"malformed response: {e!r}") from e

        if not isinstance(result, dict):
            raise TransactionError("malformed response: execution result is not an object")
        status = _effects_status(result)
        if status.get("status") != "success":
            reason = status.get("error") or f"status {status.get('status')!r}"
            logger.error("Sui Transaction Failed: %s (digest %s)", reason, result.get("digest"))
            raise TransactionError(str(reason))

        digest = result.get("digest")
        if not digest:
            raise TransactionError("successful effects without a transaction digest")
        logger.info("Mint Success! Digest: %s", digest)
        return digest

    def _prepare(self, spec: TransactionSpec, identity: SigningIdentity) -> bytes:
        resolved = self._resolve_objects(spec)
        gas_price = self.client.get_reference_gas_price()
        payment = self._select_gas(identity.address, exclude=set(resolved))
        return encode_transaction_data(
            spec,
            resolved,
            sender=identity.address,
            gas_payment=payment,
            gas_price=gas_price,
            gas_budget=self.gas_budget,
        )

    def _resolve_objects(self, spec: TransactionSpec) -> Dict[str, ResolvedObject]:
        resolved: Dict[str, ResolvedObject] = {}
        parameters = None
        for index, arg in enumerate(spec.arguments):
            if not isinstance(arg, ObjectArg) or arg.object_id in resolved:
                continue
            data = self.client.get_object(arg.object_id)
            owner = data.get("owner")
            if isinstance(owner, dict) and "Shared" in owner:
                if parameters is None:
                    fn = self.client.get_normalized_move_function(spec.package_id, spec.module, spec.function)
                    parameters = fn.get("parameters", [])
                param = parameters[index] if index < len(parameters) else None
                resolved[arg.object_id] = SharedObjectRef(
                    object_id=normalize_sui_address(data["objectId"]),
                    initial_shared_version=int(owner["Shared"]["initial_shared_version"]),
                    mutable=_is_mutable_param(param),
                )
            else:
                resolved[arg.object_id] = _owned_ref(data)
        return resolved

    def _select_gas(self, owner: str, exclude: set) -> List[OwnedObjectRef]:
        excluded = {normalize_sui_address(x) for x in exclude}
        payment: List[OwnedObjectRef] = []
        total = 0
        for coin in self.client.get_coins(owner):
            if normalize_sui_address(coin["coinObjectId"]) in excluded:
                continue
            payment.append(OwnedObjectRef(
                object_id=normalize_sui_address(coin["coinObjectId"]),
                version=int(coin["version"]),
                digest=b58_decode(coin["digest"]),
            ))
            total += int(coin["balance"])
            if total >= self.gas_budget or len(payment) >= MAX_GAS_OBJECTS:
                break
        if total < self.gas_budget:
            raise TransactionError(
                f"insufficient SUI for gas: have {total}, need {self.gas_budget}"
            )
        return payment
