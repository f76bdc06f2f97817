"""CLI entry point for relaycall."""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import Any

import click

from relaycall.app import RelayApp
from relaycall.config import load_config
from relaycall.models.errors import (
    BroadcastingError,
    ConfigurationError,
    InsufficientGasError,
    PendingSigningRequestError,
    UserRejectedError,
    WalletConnectionError,
)
from relaycall.models.requests import TransactionRequest
from relaycall.models.results import Failure, Success
from relaycall.storage.sqlite import SQLiteQueueStorage
from relaycall.tracking.queue import PendingTransactionQueue


def _load(ctx: click.Context):
    try:
        return load_config(ctx.obj["config_path"])
    except ConfigurationError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)


def _require_secret(cfg) -> None:
    """Exit with error if no keypair secret is configured."""
    if not cfg.keypair_secret:
        click.echo("Error: No keypair secret configured.", err=True)
        click.echo("Set RELAYCALL_SECRET env var or keypair_secret in config.", err=True)
        sys.exit(1)


def _describe_failure(error: Exception) -> str:
    match error:
        case UserRejectedError():
            return "Rejected in wallet; nothing was sent."
        case PendingSigningRequestError():
            return "Another signing request is still open; finish it and retry."
        case WalletConnectionError(reason=reason):
            return f"Wallet cannot sign ({reason.value})."
        case InsufficientGasError():
            return f"Not enough funds to pay the fee: {error}"
        case BroadcastingError(reason=reason):
            return f"Relay refused the transaction: {reason}"
        case _:
            return f"Submission failed: {error}"


@click.group()
@click.option("-c", "--config", "config_path", default=None, help="Path to config TOML file")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """relaycall - sign protocol calls and relay them."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["verbose"] = verbose

    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


# ── Info ───────────────────────────────────────────────


@cli.command()
@click.pass_context
def status(ctx: click.Context) -> None:
    """Show configuration."""
    cfg = _load(ctx)
    click.echo(f"Network:    {cfg.network}")
    click.echo(f"Relay URL:  {cfg.relay_url}")
    click.echo(f"Call TTL:   {cfg.call_ttl}s")
    click.echo(f"Max fee:    {cfg.max_fee}")
    click.echo(f"DB path:    {cfg.db_path}")
    click.echo(f"Secret:     {'***configured***' if cfg.keypair_secret else '(not set)'}")


# ── Submission ─────────────────────────────────────────


@cli.command()
@click.argument("kind")
@click.option("--payload", default="{}", help="Request payload as a JSON object")
@click.option("--self-funded", is_flag=True, help="Pay the fee from your wallet instead of the relay")
@click.option("--yes", "-y", is_flag=True, help="Sign without the confirmation prompt")
@click.pass_context
def submit(ctx: click.Context, kind: str, payload: str, self_funded: bool, yes: bool) -> None:
    """Sign a KIND request and submit it."""
    cfg = _load(ctx)
    _require_secret(cfg)

    try:
        data = json.loads(payload)
    except json.JSONDecodeError as exc:
        click.echo(f"Error: --payload is not valid JSON: {exc}", err=True)
        sys.exit(1)
    if not isinstance(data, dict):
        click.echo("Error: --payload must be a JSON object.", err=True)
        sys.exit(1)

    async def _approve(message: dict[str, Any]) -> bool:
        if yes:
            return True
        click.echo(json.dumps(message, indent=2, sort_keys=True))
        return click.confirm("Sign this request?", default=False)

    async def _submit() -> int:
        try:
            app = RelayApp(cfg, approve=_approve)
        except ConfigurationError as exc:
            click.echo(f"Error: {exc}", err=True)
            return 1
        try:
            await app.start()
            request = TransactionRequest(kind=kind, payload=data)
            result = await (app.pay(request) if self_funded else app.submit(request))
            match result:
                case Success():
                    tx = app.queue.pending()[-1]
                    click.echo(f"Submitted: {tx.tx_id}")
                    return 0
                case Failure(error=error):
                    click.echo(_describe_failure(error), err=True)
                    return 1
            return 1
        finally:
            await app.close()

    sys.exit(asyncio.run(_submit()))


# ── Queue ──────────────────────────────────────────────


async def _open_queue(db_path: str) -> tuple[SQLiteQueueStorage, PendingTransactionQueue]:
    storage = SQLiteQueueStorage(db_path)
    queue: PendingTransactionQueue = PendingTransactionQueue(storage)
    try:
        await storage.initialize()
        await queue.restore()
    except BaseException:
        await storage.close()
        raise
    return storage, queue


@cli.command()
@click.pass_context
def pending(ctx: click.Context) -> None:
    """List transactions waiting to settle, oldest first."""
    cfg = _load(ctx)

    async def _pending():
        storage, queue = await _open_queue(cfg.db_path)
        try:
            if not len(queue):
                click.echo("No pending transactions.")
                return
            for tx in queue:
                click.echo(
                    f"  {tx.tx_id} [{tx.kind}] {tx.request.kind} "
                    f"nonce={tx.nonce} signer={tx.signer[:8]}... at={tx.submitted_at}"
                )
        finally:
            await storage.close()

    asyncio.run(_pending())


@cli.command()
@click.argument("tx_id")
@click.option("--failed", is_flag=True, help="Record the transaction as failed instead of settled")
@click.pass_context
def settle(ctx: click.Context, tx_id: str, failed: bool) -> None:
    """Remove TX_ID from the pending queue."""
    cfg = _load(ctx)

    async def _settle() -> int:
        storage, queue = await _open_queue(cfg.db_path)
        try:
            entry = queue.drop(tx_id) if failed else queue.settle(tx_id)
            await queue.flush()
        finally:
            await storage.close()
        if entry is None:
            click.echo(f"No pending transaction {tx_id}", err=True)
            return 1
        click.echo(f"Removed {tx_id} ({'failed' if failed else 'settled'})")
        return 0

    sys.exit(asyncio.run(_settle()))


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
