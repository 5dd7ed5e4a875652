"""Goldsmith workshop ledger.

``main`` (the CLI entry point) and ``compute_ledger`` are resolved on first
access so that importing the package does not load click or SQLAlchemy.
"""

__version__ = "0.1.0"

_LAZY_EXPORTS = {
    "main": "goldbook.cli.main",
    "compute_ledger": "goldbook.domain.ledger",
}


def __getattr__(name):
    module_name = _LAZY_EXPORTS.get(name)
    if module_name is None:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
    from importlib import import_module

    return getattr(import_module(module_name), name)
