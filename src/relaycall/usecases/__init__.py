"""Use cases: the relayed and self-funded submission flows."""

from relaycall.usecases.pay_transaction import PayTransaction
from relaycall.usecases.presenter import ResultPresenter
from relaycall.usecases.protocol_call import ProtocolCallUseCase

__all__ = ["ProtocolCallUseCase", "PayTransaction", "ResultPresenter"]
