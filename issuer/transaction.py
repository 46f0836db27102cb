"""Build and encode the `mint_credential_v2` move call."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Union

from crypto import canonical as bcs
from crypto.keys import SigningIdentity
from issuer.models import CredentialRequest, MoveArg, ObjectArg, PureArg, TransactionSpec

ISSUER_NAME = "EnumVerse Academy Inc."
MINT_MODULE = "cert"
MINT_FUNCTION = "mint_credential_v2"

@dataclass(frozen=True)
class ContractRefs:
    package_id: str
    admin_cap_id: str
    version_object_id: str

@dataclass(frozen=True)
class OwnedObjectRef:
    object_id: str
    version: int
    digest: bytes

@dataclass(frozen=True)
class SharedObjectRef:
    object_id: str
    initial_shared_version: int
    mutable: bool

ResolvedObject = Union[OwnedObjectRef, SharedObjectRef]

def build_mint_transaction(contract: ContractRefs, blob_id: str, request: CredentialRequest,
                           identity: SigningIdentity) -> TransactionSpec:
    # Positional; must match the on-chain function signature exactly.
    arguments = (
        ObjectArg(contract.admin_cap_id),
        ObjectArg(contract.version_object_id),
        PureArg("address", identity.address),
        PureArg("string", request.recipient_name),
        PureArg("string", request.course_name),
        PureArg("string", request.issue_date),
        PureArg("string", ISSUER_NAME),
        PureArg("string", blob_id),
    )
    return TransactionSpec(
        package_id=contract.package_id,
        module=MINT_MODULE,
        function=MINT_FUNCTION,
        arguments=arguments,
    )

# --- BCS encoding of TransactionData::V1 ----------------------------------

def _pure_value(arg: PureArg) -> bytes:
    if arg.kind == "address":
        return bcs.address(arg.value)
    if arg.kind == "string":
        return bcs.string(arg.value)
    raise ValueError(f"unsupported pure argument kind {arg.kind!r}")

def _object_ref(ref: OwnedObjectRef) -> bytes:
    return bcs.address(ref.object_id) + bcs.u64(ref.version) + bcs.byte_vector(ref.digest)

def _object_arg(ref: ResolvedObject) -> bytes:
    if isinstance(ref, OwnedObjectRef):
        return bcs.variant(0) + _object_ref(ref)
    return (
        bcs.variant(1)
        + bcs.address(ref.object_id)
        + bcs.u64(ref.initial_shared_version)
        + bcs.boolean(ref.mutable)
    )

def _call_arg(arg: MoveArg, resolved: Dict[str, ResolvedObject]) -> bytes:
    if isinstance(arg, PureArg):
        # CallArg::Pure(Vec<u8>)
        return bcs.variant(0) + bcs.byte_vector(_pure_value(arg))
    try:
        ref = resolved[arg.object_id]
    except KeyError:
        raise ValueError(f"object {arg.object_id} was not resolved") from None
    # CallArg::Object(ObjectArg)
    return bcs.variant(1) + _object_arg(ref)

def encode_move_call(spec: TransactionSpec) -> bytes:
    # Command::MoveCall, every argument is Argument::Input(i)
    return (
        bcs.variant(0)
        + bcs.address(spec.package_id)
        + bcs.string(spec.module)
        + bcs.string(spec.function)
        + bcs.sequence([], lambda t: t)
        + bcs.sequence(range(len(spec.arguments)), lambda i: bcs.variant(1) + bcs.u16(i))
    )

def encode_transaction_data(spec: TransactionSpec, resolved: Dict[str, ResolvedObject],
                            sender: str, gas_payment: List[OwnedObjectRef],
                            gas_price: int, gas_budget: int) -> bytes:
    """
    Serialize a single move call as TransactionData::V1 {
        kind: ProgrammableTransaction { inputs, commands },
        sender, gas_data: { payment, owner, price, budget }, expiration: None
    }.
    """
    kind = (
        bcs.variant(0)
        + bcs.sequence(spec.arguments, lambda a: _call_arg(a, resolved))
        + bcs.sequence([spec], encode_move_call)
    )
    gas_data = (
        bcs.sequence(gas_payment, _object_ref)
        + bcs.address(sender)
        + bcs.u64(gas_price)
        + bcs.u64(gas_budget)
    )
    return bcs.variant(0) + kind + bcs.address(sender) + gas_data + bcs.variant(0)
