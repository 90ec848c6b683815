"""Exceptions raised by the savings backend."""


class BuniError(Exception):
    """Base class for errors the API knows how to report."""


class InvalidSavingsInput(BuniError, ValueError):
    """Amounts that are negative, non-numeric, NaN or infinite."""


class LedgerError(BuniError):
    """The deposit ledger could not be read from or written to."""
