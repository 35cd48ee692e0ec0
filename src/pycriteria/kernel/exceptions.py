"""Unified exception hierarchy for pycriteria.

All library exceptions inherit from PyCriteriaException, enabling unified
error handling across modules.

Categories:
- BusinessException: Lookups of unknown resources
- InfrastructureException: Configuration, collaborator resolution and
  adapter failures
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class PyCriteriaException(Exception):
    """Base exception for all pycriteria errors.

    Carries an optional error code and context dict for structured error data.
    Catch PyCriteriaException to handle every library error, or catch specific
    subclasses for targeted handling.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CRITERIA_NO_MODEL").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Business Exceptions
# =============================================================================


class BusinessException(PyCriteriaException):
    """Domain rule violations and business logic errors."""


class ResourceNotFoundException(BusinessException):
    """Requested resource (model, entity, column) does not exist."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(PyCriteriaException):
    """Infrastructure failures: configuration, collaborators, database."""


class ConfigurationException(InfrastructureException):
    """Structural misuse of a component, e.g. executing criteria with no model."""


class CollaboratorResolutionException(InfrastructureException):
    """A dependency context could not provide a required collaborator."""


class NotImplementedException(InfrastructureException):
    """Requested operation is not supported by the active adapter."""
