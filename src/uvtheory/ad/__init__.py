"""Forward-mode automatic differentiation of scalar quantities.

The Helmholtz energy formulas are written against plain arithmetic and the elementary
functions in :mod:`uvtheory.ad.functions`. Evaluating them with floats returns values,
evaluating them with :class:`~uvtheory.ad.forward_mode.DualNumber` returns values with
gradients and, for second-order numbers, Hessians.

"""

__all__ = []

from . import forward_mode, functions
from .forward_mode import *

__all__.extend(forward_mode.__all__)
