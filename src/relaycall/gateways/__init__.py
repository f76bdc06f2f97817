"""Gateway implementations: nonces and call construction."""

from relaycall.gateways.calls import LocalSelfFundedGateway, LocalUnsignedCallGateway
from relaycall.gateways.nonce import PendingAwareNonceGateway

__all__ = ["PendingAwareNonceGateway", "LocalUnsignedCallGateway", "LocalSelfFundedGateway"]
