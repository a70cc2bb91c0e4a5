"""
Errors Module

This module defines the error classes used throughout the package.

There are two kinds of failures:
    - invariant violations: a programming or configuration defect (bad grid
      dimensions, an out-of-range index produced by the algorithm itself,
      growing an empty genotype). They are fatal and are never caught by
      the package itself.
    - malformed external data: a genotype document that cannot be loaded.
      These are recoverable; the caller decides whether to skip or abort.

Classes:
    EvobrainError:      Base class for all package errors
    InvariantViolation: Fatal error signalling a broken invariant
    LoadError:          Recoverable error raised when loading a genotype fails

Functions:
    check(condition, message, **context): Raise InvariantViolation unless 'condition' holds
"""

from loguru import logger


class EvobrainError(Exception):
    """Base class for all errors raised by this package."""


class InvariantViolation(EvobrainError, RuntimeError):
    """
    A broken invariant: the program (or its configuration) is wrong.

    Retrying makes no sense, the run must be stopped and the defect fixed.
    """


class LoadError(EvobrainError, ValueError):
    """
    A genotype document failed validation.

    The genotype being loaded into is left unchanged.
    """


def check(condition: bool, message: str, **context) -> None:
    """
    Verify an invariant.

    Parameters:
        condition: the invariant which must hold
        message:   description of the invariant
        context:   values to report along with the message

    Raises:
        InvariantViolation: if 'condition' is false
    """
    if condition:
        return

    details = ", ".join(f"{key}={value!r}" for key, value in context.items())
    if details:
        message = f"{message} ({details})"
    logger.critical("Invariant violation: {}", message)
    raise InvariantViolation(message)
