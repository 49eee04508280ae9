"""Numeric primitives and in-place block rearrangement (host and JAX)."""

from hagrid_core import bits as _bits
from hagrid_core import device as _device
from hagrid_core import facade as _facade
from hagrid_core import modes as _modes
from hagrid_core import numeric as _numeric
from hagrid_core import timing as _timing
from hagrid_core import status as _status
from hagrid_core.bits import *
from hagrid_core.device import *
from hagrid_core.modes import *
from hagrid_core.numeric import *
from hagrid_core.timing import *
from hagrid_core.status import *
from hagrid_core.block_swap import (
    block_swap_contiguous_jax,
    block_swap_disjoint_jax,
    block_swap_equal_jax,
)
from hagrid_core.ordered import float_to_ordered_jax, ordered_to_float_jax
from hagrid_core.facade import *

__all__ = []
__all__ += _bits.__all__
__all__ += _device.__all__
__all__ += _modes.__all__
__all__ += _numeric.__all__
__all__ += _timing.__all__
__all__ += _status.__all__
__all__ += [
    "block_swap_equal_jax",
    "block_swap_contiguous_jax",
    "block_swap_disjoint_jax",
    "float_to_ordered_jax",
    "ordered_to_float_jax",
]
__all__ += _facade.__all__
