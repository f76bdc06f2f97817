"""Result values and ResultPresenter."""

from __future__ import annotations

import pytest

from relaycall.models.errors import (
    BroadcastingError,
    InsufficientGasError,
    WalletConnectionError,
    WalletConnectionErrorReason,
)
from relaycall.models.results import Failure, Success, failure, success
from relaycall.usecases.presenter import ResultPresenter


def test_success_and_failure_shapes():
    ok = success(5)
    err = failure(BroadcastingError("nope"))

    assert ok.is_success() and not ok.is_failure()
    assert err.is_failure() and not err.is_success()
    assert ok.unwrap() == 5
    assert success() == Success(None)
    with pytest.raises(BroadcastingError):
        err.unwrap()


def test_failure_equality_uses_the_error_value():
    error = WalletConnectionError(WalletConnectionErrorReason.WRONG_ACCOUNT)

    assert failure(error) == failure(error)
    assert failure(error) != failure(BroadcastingError("x"))
    assert isinstance(failure(error), Failure)


def test_error_messages():
    assert "wrong_account" in str(WalletConnectionError(WalletConnectionErrorReason.WRONG_ACCOUNT))
    assert "insufficient liquidity" in str(BroadcastingError("insufficient liquidity"))
    assert "required=10" in str(InsufficientGasError(required=10, available=1))


async def test_presenter_resolves_result():
    presenter = ResultPresenter()

    presenter.present(success())

    assert await presenter.as_result() == success()


async def test_presenter_rejects_second_result():
    presenter = ResultPresenter()
    presenter.present(success())

    with pytest.raises(RuntimeError):
        presenter.present(failure(BroadcastingError("late")))
