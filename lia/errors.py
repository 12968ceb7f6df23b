"""Error taxonomy for the Lia agent.

Every failure the orchestrator surfaces is one of four kinds:
- StageFailure: a pipeline stage's collaborator rejected its input or faulted
- EvolutionFailure: a step of the post-response evolution fold failed
- PersistenceFailure: the state manager could not record a snapshot or stage
- ConfigurationError: invalid configuration, raised before the agent is usable

Collaborator exceptions are chained as ``__cause__`` so the original
traceback is never lost.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from lia.schemas import Response


class LiaError(Exception):
    """Base class for all errors raised by the agent."""

    pass


class StageFailure(LiaError):
    """A named pipeline stage could not produce its output.

    Attributes:
        stage: Name of the failing stage (e.g. "context", "thought")
    """

    def __init__(self, stage: str, message: str = ""):
        self.stage = stage
        super().__init__(f"stage '{stage}' failed: {message}" if message else f"stage '{stage}' failed")


class EvolutionFailure(LiaError):
    """A step of the evolution fold failed.

    The fold runs against a staged copy of the agent's subsystems, so when
    this is raised none of the fold's effects have been committed.

    Attributes:
        step: Name of the failing fold step (e.g. "transforms", "dimensional")
    """

    def __init__(self, step: str, message: str = ""):
        self.step = step
        super().__init__(f"evolution step '{step}' failed: {message}" if message else f"evolution step '{step}' failed")


class PersistenceFailure(LiaError):
    """The state manager could not durably record agent state.

    In-memory state is already committed when this is raised. When the
    failure happened after an interaction, the produced response is attached
    so the caller does not lose it.

    Attributes:
        operation: "update_state" or "record_evolution"
        response: The response whose fold preceded the failure, if any
    """

    def __init__(self, operation: str, message: str = "", response: Optional["Response"] = None):
        self.operation = operation
        self.response = response
        super().__init__(f"persistence '{operation}' failed: {message}" if message else f"persistence '{operation}' failed")


class ConfigurationError(LiaError, ValueError):
    """Invalid configuration supplied at construction time."""

    pass
