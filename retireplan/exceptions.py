"""
Custom exceptions for RetirePlan.

Purpose
-------
Provides a unified exception hierarchy for consistent error handling
across all RetirePlan modules. All exceptions inherit from RetirePlanError,
enabling catch-all handling when needed.

Exception Hierarchy
-------------------
RetirePlanError (base)
├── ConfigurationError - Invalid settings or request documents
└── ValidationError - Data validation failures
    ├── InvalidInputError - Structurally impossible plan/profile values
    ├── MissingInputError - Required value absent and defaults not applied
    └── AllocationConstraintError - Allocation percentages violations

Usage
-----
>>> from retireplan.exceptions import InvalidInputError
>>>
>>> # Raise specific exception
>>> raise InvalidInputError("retirement_age (60) must be greater than current_age (62)")
>>>
>>> # Catch all RetirePlan exceptions
>>> try:
...     plan = engine.project(plan)
... except RetirePlanError as e:
...     print(f"RetirePlan error: {e}")
"""

__all__ = [
    "RetirePlanError",
    "ConfigurationError",
    "ValidationError",
    "InvalidInputError",
    "MissingInputError",
    "AllocationConstraintError",
]


class RetirePlanError(Exception):
    """
    Base exception for all RetirePlan errors.

    Examples
    --------
    >>> try:
    ...     comparator.compare(plan)
    ... except RetirePlanError as e:
    ...     logger.error("comparison_failed", error=str(e))
    """
    pass


class ConfigurationError(RetirePlanError):
    """
    Invalid configuration or request document.

    Raised when settings or a loaded request file are unusable, such as:
    - Malformed JSON request files
    - Unknown schema versions
    - Unknown request kinds
    """
    pass


class ValidationError(RetirePlanError):
    """
    Data validation failures.

    Raised when input data fails validation checks. Prefer one of the
    more specific subclasses below.
    """
    pass


class InvalidInputError(ValidationError):
    """
    Structurally impossible input values.

    Raised before any computation starts when:
    - Ages are non-positive
    - retirement_age <= current_age
    - Currency or rate fields are negative

    Examples
    --------
    >>> raise InvalidInputError(
    ...     f"current_savings must be non-negative (got {value})."
    ... )
    """
    pass


class MissingInputError(ValidationError):
    """
    Required input absent.

    Raised when a request is converted into a plan or profile while a
    required field is still None and the caller did not opt into
    ``apply_defaults``.

    Examples
    --------
    >>> raise MissingInputError(
    ...     "monthly_contribution is required. "
    ...     "Pass it explicitly or opt into apply_defaults()."
    ... )
    """
    pass


class AllocationConstraintError(ValidationError):
    """
    Allocation percentage constraint violations.

    Raised when a stock/bond/cash allocation:
    - Does not sum to 100
    - Contains negative percentages

    Examples
    --------
    >>> raise AllocationConstraintError(
    ...     "Asset allocation percentages must sum to 100% (currently 95%)"
    ... )
    """
    pass
