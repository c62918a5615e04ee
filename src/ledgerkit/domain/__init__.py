"""Domain layer for ledgerkit application."""

__all__ = [
    "TransactionEngine",
    "AccountService",
    "UserService",
]

_SERVICES = {
    "TransactionEngine": "ledgerkit.domain.transaction",
    "AccountService": "ledgerkit.domain.account",
    "UserService": "ledgerkit.domain.user",
}


# Import services lazily so that utils and database can import entities and
# errors without pulling the whole domain layer in.
def __getattr__(name):
    if name in _SERVICES:
        import importlib

        return getattr(importlib.import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
