"""Double-entry accounting core: journal admission, balances, exchange."""

__version__ = "0.1.0"
