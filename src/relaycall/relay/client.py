"""HTTP relay client - relays signed calls and reads nonces over HTTP.

Endpoints (JSON bodies):
- POST /relay         signed protocol call  -> {"tx_id", "tx_hash"}
- POST /transactions  signed self-funded tx -> {"tx_id", "tx_hash"}
- GET  /nonces/{addr}                       -> {"nonce"}

Rejections come back as a 4xx/5xx status with {"reason": "..."}; a 402 on
/transactions means the sender cannot cover the fee.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from relaycall.models.errors import BroadcastingError, InsufficientGasError
from relaycall.models.requests import Nonce, SignedProtocolCall, SignedTransaction
from relaycall.models.results import Result, failure, success
from relaycall.models.transactions import MetaTransaction, NativeTransaction

log = logging.getLogger(__name__)

PAYMENT_REQUIRED = 402


def _reason(resp: httpx.Response) -> str:
    """Best-effort human readable rejection reason."""
    try:
        data = resp.json()
    except ValueError:
        data = None
    if isinstance(data, dict) and data.get("reason"):
        return str(data["reason"])
    return resp.text.strip() or f"relay HTTP {resp.status_code}"


class RelayClient:
    """Implements CallRelayer, TransactionBroadcaster and NonceSource."""

    def __init__(
        self,
        relay_url: str,
        timeout: int = 30,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = relay_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self._base_url,
            timeout=httpx.Timeout(self._timeout, connect=10),
            transport=self._transport,
        )

    async def _post(self, path: str, payload: dict[str, Any]) -> httpx.Response | BroadcastingError:
        try:
            async with self._client() as client:
                return await client.post(path, json=payload)
        except httpx.HTTPError as exc:
            log.error("Relay %s unreachable: %s", path, exc)
            return BroadcastingError(f"relay unreachable: {exc}")

    @staticmethod
    def _accepted(resp: httpx.Response) -> dict[str, Any] | BroadcastingError:
        try:
            data = resp.json()
            if not data.get("tx_id"):
                raise KeyError("tx_id")
        except (ValueError, KeyError, AttributeError) as exc:
            log.error("Malformed relay response: %s", exc)
            return BroadcastingError(f"malformed relay response: {exc}")
        return data

    async def relay_protocol_call(
        self, signed_call: SignedProtocolCall
    ) -> Result[MetaTransaction, BroadcastingError]:
        log.info(
            "Relaying %s call (nonce=%d)", signed_call.request.kind, signed_call.nonce,
        )
        resp = await self._post("/relay", signed_call.to_payload())
        if isinstance(resp, BroadcastingError):
            return failure(resp)
        if resp.is_error:
            reason = _reason(resp)
            log.warning("Relay rejected call: %s (HTTP %d)", reason, resp.status_code)
            return failure(BroadcastingError(reason))

        data = self._accepted(resp)
        if isinstance(data, BroadcastingError):
            return failure(data)

        return success(MetaTransaction(
            tx_id=str(data["tx_id"]),
            request=signed_call.request,
            nonce=signed_call.nonce,
            signer=signed_call.call.signer,
            tx_hash=data.get("tx_hash"),
        ))

    async def broadcast_transaction(
        self, signed: SignedTransaction
    ) -> Result[NativeTransaction, InsufficientGasError | BroadcastingError]:
        tx = signed.transaction
        log.info("Broadcasting self-funded %s (nonce=%d)", tx.request.kind, tx.nonce)
        resp = await self._post("/transactions", signed.to_payload())
        if isinstance(resp, BroadcastingError):
            return failure(resp)
        if resp.status_code == PAYMENT_REQUIRED:
            try:
                data = resp.json()
            except ValueError:
                data = {}
            if not isinstance(data, dict):
                data = {}
            log.warning("Insufficient funds for %s", tx.signer[:16])
            return failure(InsufficientGasError(
                required=data.get("required"), available=data.get("available"),
            ))
        if resp.is_error:
            reason = _reason(resp)
            log.warning("Broadcast rejected: %s (HTTP %d)", reason, resp.status_code)
            return failure(BroadcastingError(reason))

        data = self._accepted(resp)
        if isinstance(data, BroadcastingError):
            return failure(data)

        return success(NativeTransaction(
            tx_id=str(data["tx_id"]),
            request=tx.request,
            nonce=tx.nonce,
            signer=tx.signer,
            tx_hash=data.get("tx_hash"),
        ))

    async def get_nonce(self, address: str) -> Nonce:
        """Next nonce the relay expects from ``address``. Raises on any error."""
        async with self._client() as client:
            resp = await client.get(f"/nonces/{address}")
            resp.raise_for_status()
            return int(resp.json()["nonce"])
