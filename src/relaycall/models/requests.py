"""Request and call models flowing through the submission pipeline."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Generic, Mapping, TypeVar

Nonce = int


@dataclass(frozen=True)
class TransactionRequest:
    """The user's intended protocol action.

    Compared structurally; two requests with the same kind and payload are
    the same request as far as the queue is concerned. The payload is copied
    into a read-only mapping on construction and must be JSON-serializable.
    """

    kind: str
    payload: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))

    def __hash__(self) -> int:
        return hash((self.kind, json.dumps(dict(self.payload), sort_keys=True, default=repr)))

    def to_record(self) -> dict[str, Any]:
        return {"kind": self.kind, "payload": dict(self.payload)}

    @classmethod
    def from_record(cls, data: dict[str, Any]) -> TransactionRequest:
        return cls(kind=data["kind"], payload=dict(data.get("payload") or {}))


T = TypeVar("T", bound=TransactionRequest)


@dataclass(frozen=True)
class UnsignedProtocolCall(Generic[T]):
    """A request bound to a nonce and domain, ready to be signed."""

    request: T
    nonce: Nonce
    signer: str  # address expected to sign
    domain: str  # network the call is valid on
    deadline: int  # unix seconds

    def to_message(self) -> dict[str, Any]:
        """Canonical content covered by the signature."""
        return {
            "request": self.request.to_record(),
            "nonce": self.nonce,
            "signer": self.signer,
            "domain": self.domain,
            "deadline": self.deadline,
        }


@dataclass(frozen=True)
class SignedProtocolCall(Generic[T]):
    """An unsigned call plus the wallet's signature (hex)."""

    call: UnsignedProtocolCall[T]
    signature: str

    @property
    def request(self) -> T:
        return self.call.request

    @property
    def nonce(self) -> Nonce:
        return self.call.nonce

    def to_payload(self) -> dict[str, Any]:
        return {**self.call.to_message(), "signature": self.signature}


@dataclass(frozen=True)
class UnsignedTransaction(Generic[T]):
    """A self-funded transaction the wallet will sign and pay for."""

    request: T
    nonce: Nonce
    signer: str
    domain: str
    max_fee: int

    def to_message(self) -> dict[str, Any]:
        return {
            "request": self.request.to_record(),
            "nonce": self.nonce,
            "signer": self.signer,
            "domain": self.domain,
            "max_fee": self.max_fee,
        }


@dataclass(frozen=True)
class SignedTransaction(Generic[T]):
    """A self-funded transaction signed by its sender."""

    transaction: UnsignedTransaction[T]
    signature: str

    @property
    def request(self) -> T:
        return self.transaction.request

    def to_payload(self) -> dict[str, Any]:
        return {**self.transaction.to_message(), "signature": self.signature}
