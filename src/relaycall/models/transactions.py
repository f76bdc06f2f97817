"""Transactions known to be in flight, as held by the transaction queue."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Generic

from relaycall.models.requests import Nonce, T, TransactionRequest


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass
class BroadcastedTransaction(Generic[T]):
    """Common shape of a submitted, not yet settled transaction."""

    tx_id: str  # handle assigned by the relay or node
    request: T
    nonce: Nonce
    signer: str
    tx_hash: str | None = None
    submitted_at: str = field(default_factory=_now)

    kind = "broadcasted"

    def to_record(self) -> dict[str, Any]:
        return {
            "type": self.kind,
            "tx_id": self.tx_id,
            "request": self.request.to_record(),
            "nonce": self.nonce,
            "signer": self.signer,
            "tx_hash": self.tx_hash,
            "submitted_at": self.submitted_at,
        }

    @staticmethod
    def from_record(data: dict[str, Any]) -> BroadcastedTransaction[TransactionRequest]:
        cls = _TRANSACTION_TYPES.get(data.get("type", ""))
        if cls is None:
            raise ValueError(f"unknown transaction type: {data.get('type')!r}")
        return cls(
            tx_id=data["tx_id"],
            request=TransactionRequest.from_record(data["request"]),
            nonce=int(data["nonce"]),
            signer=data["signer"],
            tx_hash=data.get("tx_hash"),
            submitted_at=data.get("submitted_at") or _now(),
        )


@dataclass
class MetaTransaction(BroadcastedTransaction[T]):
    """A protocol call accepted by the gas-sponsoring relay."""

    kind = "meta"


@dataclass
class NativeTransaction(BroadcastedTransaction[T]):
    """A self-funded transaction broadcast by the user's wallet."""

    kind = "native"


_TRANSACTION_TYPES: dict[str, type[BroadcastedTransaction[Any]]] = {
    MetaTransaction.kind: MetaTransaction,
    NativeTransaction.kind: NativeTransaction,
}
