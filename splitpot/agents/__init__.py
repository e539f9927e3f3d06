"""
splitpot agents - action providers

The interface the engine asks for decisions, and simple bots for tests and
simulations.
"""

from splitpot.agents.base import ActionProvider, BaseAgent
from splitpot.agents.random_agent import (
    AggressiveActionProvider, CallingActionProvider, RandomActionProvider,
)

__all__ = [
    "ActionProvider",
    "BaseAgent",
    "AggressiveActionProvider",
    "CallingActionProvider",
    "RandomActionProvider",
]
