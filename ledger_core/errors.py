"""
Ledger Error Taxonomy

Every rule violation in the ledger raises one of these. They mix in the
builtin exception that best describes them, so callers that only know about
ValueError or LookupError still catch them.
"""


class LedgerError(Exception):
    """Base class for all ledger failures"""


class InvalidArgument(LedgerError, ValueError):
    """Malformed input: bad amount, missing description, invalid identifier, negative balance"""


class InvalidState(LedgerError, RuntimeError):
    """Input is well-formed but not admissible now: insufficient balance, stale timestamp"""


class NotFound(LedgerError, LookupError):
    """Referenced account does not exist"""


class DuplicateEntity(LedgerError, ValueError):
    """Account identifier already registered"""
