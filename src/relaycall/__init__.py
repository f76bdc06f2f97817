"""relaycall - sign, relay and track protocol calls."""

__version__ = "0.1.0"
