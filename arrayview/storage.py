"""This module contains backing store classes for use with arrayview views.

A backing store is a rank-R block of element slots with a per-axis capacity.
Views never chain onto each other, they always address a store directly.

"""
import abc
from logging import getLogger

import numpy as np

from arrayview.config import config
from arrayview.errors import ArityMismatchError, CapacityExceededError, OrderViolationError
from arrayview.util import check_data_fits

logger = getLogger(__name__)


class BackingStore(abc.ABC):
    """Abstract base class for backing store implementations.

    Subclasses hold their elements in a numpy array and must implement
    :meth:`grow`. Growth only ever extends trailing capacity along each axis,
    so every element keeps its coordinates.

    """

    _growable = True

    def __init__(self, data, fill_value=None):
        self._data = data
        self._fill_value = fill_value

    @property
    def data(self):
        """The numpy array currently holding the elements."""
        return self._data

    @property
    def rank(self):
        return self._data.ndim

    @property
    def dtype(self):
        return self._data.dtype

    @property
    def fill_value(self):
        return self._fill_value

    def capacity(self):
        return tuple(self._data.shape)

    def is_growable(self):
        return self._growable

    def get(self, subscripts):
        return self._data[tuple(subscripts)]

    def set(self, subscripts, value):
        self._data[tuple(subscripts)] = value

    def window(self, start, fillp):
        """Return a numpy view of the region ``[start, fillp)`` (no copy)."""
        return self._data[tuple(slice(s, f) for s, f in zip(start, fillp)) + (Ellipsis,)]

    def _check_capacity(self, new_capacity):
        new_capacity = tuple(int(c) for c in new_capacity)
        if len(new_capacity) != self.rank:
            raise ArityMismatchError('capacity', self.rank, len(new_capacity))
        for axis, (new, old) in enumerate(zip(new_capacity, self.capacity())):
            if new < old:
                raise OrderViolationError(axis, 'capacity', new, old)
        return new_capacity

    @abc.abstractmethod
    def grow(self, new_capacity):
        """Extend capacity to at least `new_capacity` on every axis."""

    def __repr__(self):
        if getattr(self, "_data", None) is None:
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}(capacity={self.capacity()}, dtype={self.dtype})"


class NDArrayStore(BackingStore):
    """Growable backing store allocated and owned by arrayview.

    Parameters
    ----------
    capacity : tuple of int
        Number of element slots along each axis.
    dtype : string or dtype, optional
        NumPy dtype. Defaults to the ``view.dtype`` config value.
    fill_value : object, optional
        Value of slots never written. Defaults to the ``view.fill_value``
        config value.
    data : array_like, optional
        Initial contents, copied into the leading corner of the store (or
        broadcast over the whole store if it has a different rank).

    """

    def __init__(self, capacity, dtype=None, fill_value=None, data=None):
        capacity = tuple(int(c) for c in capacity)
        if fill_value is None:
            fill_value = config.get('view.fill_value')
        if data is not None:
            data = np.asarray(data)
            if dtype is None:
                dtype = data.dtype
            check_data_fits(data.shape, capacity)
        if dtype is None:
            dtype = config.get('view.dtype')
        arr = np.full(capacity, fill_value, dtype=dtype)
        if data is not None:
            if data.ndim == len(capacity) and all(d <= c for d, c in zip(data.shape, capacity)):
                arr[tuple(slice(0, d) for d in data.shape)] = data
            else:
                arr[...] = data
        logger.debug('allocated store with capacity %s, dtype %s', arr.shape, arr.dtype)
        super().__init__(arr, fill_value=fill_value)

    def grow(self, new_capacity):
        new_capacity = self._check_capacity(new_capacity)
        old_capacity = self.capacity()
        if new_capacity == old_capacity:
            return

        # extend trailing capacity only, existing elements keep their coordinates
        new_data = np.full(new_capacity, self._fill_value, dtype=self.dtype)
        new_data[tuple(slice(0, c) for c in old_capacity)] = self._data
        self._data = new_data
        logger.debug('grew store from capacity %s to %s', old_capacity, new_capacity)


class FixedStore(BackingStore):
    """Fixed-capacity backing store over a caller-supplied numpy array.

    The array is used in place, writes through any view are visible through
    the array and vice versa. Growing beyond the array shape raises
    :class:`arrayview.errors.CapacityExceededError`.

    """

    _growable = False

    def __init__(self, data, fill_value=None):
        if not isinstance(data, np.ndarray):
            raise TypeError(f'expected numpy array, found {type(data)!r}')
        if fill_value is None:
            fill_value = config.get('view.fill_value')
        super().__init__(data, fill_value=fill_value)

    def grow(self, new_capacity):
        new_capacity = self._check_capacity(new_capacity)
        for axis, (new, old) in enumerate(zip(new_capacity, self.capacity())):
            if new > old:
                raise CapacityExceededError(axis, new, old)


def normalize_store(store):
    """Convert a caller-supplied store argument into a :class:`BackingStore`."""
    if store is None or isinstance(store, BackingStore):
        return store
    if isinstance(store, np.ndarray):
        return FixedStore(store)
    raise TypeError(f'expected BackingStore or numpy array, found {type(store)!r}')
