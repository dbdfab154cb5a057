"""
Domain models — Pydantic types for the scaffolder.

All models are re-exported here for convenient access:

    from flaskinit.core.models import OptionSet, Receipt, ProjectState
"""

from flaskinit.core.models.action import Action, Receipt
from flaskinit.core.models.options import (
    DEFAULT_HOST,
    DEFAULT_PORT,
    EnvironmentMode,
    OptionSet,
)
from flaskinit.core.models.state import ActivationState, ProjectState
from flaskinit.core.models.template import GeneratedFile

__all__ = [
    # action.py
    "Action",
    "Receipt",
    # options.py
    "DEFAULT_HOST",
    "DEFAULT_PORT",
    "EnvironmentMode",
    "OptionSet",
    # state.py
    "ActivationState",
    "ProjectState",
    # template.py
    "GeneratedFile",
]
