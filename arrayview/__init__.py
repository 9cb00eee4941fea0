# flake8: noqa
from arrayview.config import config
from arrayview.core import ArrayView, as_view, classify, resize_view
from arrayview.creation import (array, create_view, empty, full, full_like, ones, view_of,
                                zeros, zeros_like)
from arrayview.errors import (ArityMismatchError, BoundsCheckError, CapacityExceededError,
                              InvalidViewSpecError, MutualExclusionError, NonUnitStepError,
                              OrderViolationError, SubscriptCountError, ViewResizeError)
from arrayview.storage import BackingStore, FixedStore, NDArrayStore
from arrayview.sync import ThreadSynchronizer
from arrayview.types import ArrayKind, Ownership
from arrayview.version import version as __version__

# in case setuptools scm screw up and find version to be 0.0.0
assert not __version__.startswith("0.0.0")
