"""Contains utility functions shared by the contributions, as well as a custom
exception class :class:`ParameterError`."""

from __future__ import annotations

from typing import Sequence, TypeVar, cast

__all__ = [
    "safe_sum",
    "ParameterError",
]


_Addable = TypeVar("_Addable")
"""A type variable representing any type supporting the + overload.

Note:
    Used in :func:`safe_sum` to state that the return value type is the same as the
    argument type.

"""


def safe_sum(x: Sequence[_Addable]) -> _Addable:
    """Safely sum the elements, without creating a first addition with 0.

    Important for dual numbers, where the first addition with 0 would allocate a
    derivative block which is immediately discarded.

    Parameters:
        x: A sequence of any objects which support the ``+`` operation.

    Returns:
        The sum of ``x``.

    """
    if len(x) >= 1:
        sum_ = x[0]
        for i in range(1, len(x)):
            sum_ = sum_ + x[i]  # type: ignore[operator]
        return sum_
    else:
        return cast(_Addable, 0)


class ParameterError(Exception):
    """Custom exception class to alert the user when a parameter set for the Mie
    fluid is inconsistent.

    Such inconsistencies include for example:

    - non-positive size or energy parameters,
    - an attractive exponent which is not strictly smaller than the repulsive exponent,
      for a component or for a combined pair,
    - parameter lists of differing lengths, or an empty parameter set,
    - invalid indices when restricting a parameter set to a subset of components.

    The error is raised when the parameter set is constructed, before any contribution
    to the Helmholtz energy is evaluated.

    """
