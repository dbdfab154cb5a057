"""
Adapters — the only code that runs external commands.

Every adapter implements the protocol in :mod:`flaskinit.adapters.base`
and reports results as :class:`~flaskinit.core.models.action.Receipt`.
"""
