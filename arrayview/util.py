import numbers
from collections import namedtuple
from textwrap import TextWrapper
from typing import Any, Optional, Tuple

import numpy as np

from arrayview.errors import (ArityMismatchError, InvalidViewSpecError, MutualExclusionError,
                              OrderViolationError)
from arrayview.types import Ownership


ViewSpec = namedtuple('ViewSpec', ('ownership', 'start', 'fillp', 'capacity'))
"""A fully checked set of view parameters.

Parameters
----------
ownership
    :class:`arrayview.types.Ownership` of the view to build.
start
    Per-axis offset into backing coordinates.
fillp
    Per-axis exclusive upper bound into backing coordinates.
capacity
    Per-axis capacity of the backing store the view addresses (the store to
    allocate, for private views).

"""


def normalize_shape(shape) -> Tuple[int, ...]:
    """Convenience function to normalize the `shape` argument."""

    if shape is None:
        raise TypeError('shape is None')

    # handle 1D convenience form
    if isinstance(shape, numbers.Integral):
        shape = (int(shape),)

    # normalize
    shape = tuple(int(s) for s in shape)
    for axis, s in enumerate(shape):
        if s < 0:
            raise OrderViolationError(axis, 'shape', s, 0)
    return shape


def normalize_vector(value, rank: int, name: str) -> Tuple[int, ...]:
    """Normalize a per-axis offset or fill-pointer argument, checking its arity."""
    if isinstance(value, numbers.Integral):
        value = (int(value),)
    value = tuple(value)
    if len(value) != rank:
        raise ArityMismatchError(name, rank, len(value))
    for v in value:
        if not isinstance(v, numbers.Integral):
            raise TypeError(f'{name} must contain integers, found {v!r}')
    return tuple(int(v) for v in value)


def check_order(start, fillp, capacity=None) -> None:
    """Check ``0 <= start <= fillp <= capacity`` along every axis.

    If `capacity` is None the upper bound is not checked, which is what a
    private view about to grow its store needs.
    """
    for axis, (s, f) in enumerate(zip(start, fillp)):
        if s < 0:
            raise OrderViolationError(axis, 'start', s, 0)
        if f < s:
            raise OrderViolationError(axis, 'fillp', f, s)
        if capacity is not None and f > capacity[axis]:
            raise OrderViolationError(axis, 'fillp', f, capacity[axis])


def check_exclusive(data=None, fill_value=None, capacity=None) -> None:
    """Aliasing an existing store excludes the fresh-allocation arguments."""
    names = [name for name, value in (('data', data), ('fill_value', fill_value),
                                      ('capacity', capacity))
             if value is not None]
    if names:
        raise MutualExclusionError(*names)


def check_data_fits(data_shape, capacity) -> None:
    """Check that initial data of `data_shape` can be written into `capacity`.

    Data of the same rank fills the leading corner of the store, data of any
    other rank is broadcast over all of it.
    """
    data_shape = tuple(data_shape)
    capacity = tuple(capacity)
    if len(data_shape) == len(capacity):
        for axis, (d, c) in enumerate(zip(data_shape, capacity)):
            if d > c:
                raise InvalidViewSpecError(
                    f'data shape {data_shape} exceeds capacity {capacity} along axis {axis}')
        return
    try:
        fits = np.broadcast_shapes(data_shape, capacity) == capacity
    except ValueError:
        fits = False
    if not fits:
        raise InvalidViewSpecError(
            f'data shape {data_shape} cannot be broadcast to capacity {capacity}')


def _normalize_window(shape, start, fillp, capacity):
    rank = len(capacity)
    if shape is not None:
        shape = normalize_shape(shape)
        if len(shape) != rank:
            raise ArityMismatchError('shape', rank, len(shape))
    start = (0,) * rank if start is None else normalize_vector(start, rank, 'start')
    if fillp is None:
        if shape is None:
            fillp = capacity
        else:
            fillp = tuple(s + n for s, n in zip(start, shape))
    else:
        fillp = normalize_vector(fillp, rank, 'fillp')
        if shape is not None:
            for axis, (s, f, n) in enumerate(zip(start, fillp, shape)):
                if f - s != n:
                    raise OrderViolationError(axis, 'fillp', f, s + n)
    check_order(start, fillp, capacity)
    return start, fillp


def normalize_view_args(shape=None, store=None, start=None, fillp=None,
                        data=None, fill_value=None, capacity=None) -> ViewSpec:
    """Validate construction arguments and return a :class:`ViewSpec`.

    Nothing is allocated or mutated here, a failure leaves no trace.

    With a `store`, the view aliases it: `start` defaults to zeros and `fillp`
    to ``start + shape`` (or the full store capacity if `shape` is omitted).
    Without a `store`, storage of `capacity` is to be allocated and the window
    inside it is resolved the same way. If `capacity` is omitted, `shape` is
    the allocation instead: `start` defaults to zeros and `fillp` to `shape`.
    """

    if store is not None:
        check_exclusive(data=data, fill_value=fill_value, capacity=capacity)
        capacity = tuple(store.capacity())
        start, fillp = _normalize_window(shape, start, fillp, capacity)
        return ViewSpec(Ownership.ALIASED, start, fillp, capacity)

    if capacity is not None:
        capacity = normalize_shape(capacity)
        start, fillp = _normalize_window(shape, start, fillp, capacity)
    else:
        if shape is None:
            if data is None:
                raise TypeError('shape is None')
            shape = np.shape(data)
        capacity = normalize_shape(shape)
        rank = len(capacity)
        start = (0,) * rank if start is None else normalize_vector(start, rank, 'start')
        fillp = capacity if fillp is None else normalize_vector(fillp, rank, 'fillp')
        check_order(start, fillp, capacity)
    if data is not None:
        check_data_fits(np.shape(data), capacity)
    return ViewSpec(Ownership.PRIVATE, start, fillp, capacity)


def normalize_resize_args(old_shape, *args):

    # normalize new shape argument
    if len(args) == 1:
        new_shape = args[0]
    else:
        new_shape = args
    if isinstance(new_shape, numbers.Integral):
        new_shape = (new_shape,)
    else:
        new_shape = tuple(new_shape)
    if len(new_shape) != len(old_shape):
        raise ArityMismatchError('shape', len(old_shape), len(new_shape))

    # handle None in new_shape
    new_shape = tuple(s if n is None else int(n)
                      for s, n in zip(old_shape, new_shape))
    for axis, n in enumerate(new_shape):
        if n < 0:
            raise OrderViolationError(axis, 'shape', n, 0)

    return new_shape


def grown_capacity(capacity, fillp, growth: str = 'exact') -> Tuple[int, ...]:
    """Capacity needed to hold `fillp`, never smaller than the current `capacity`.

    With ``growth='double'`` every axis that has to grow is at least doubled,
    which amortizes repeated small resizes.
    """
    out = []
    for c, f in zip(capacity, fillp):
        if f <= c:
            out.append(c)
        elif growth == 'double':
            out.append(max(f, 2 * c))
        else:
            out.append(f)
    return tuple(out)


def human_readable_size(size) -> str:
    if size < 2**10:
        return '%s' % size
    elif size < 2**20:
        return '%.1fK' % (size / float(2**10))
    elif size < 2**30:
        return '%.1fM' % (size / float(2**20))
    else:
        return '%.1fG' % (size / float(2**30))


def info_text_report(items) -> str:
    keys = [k for k, v in items]
    max_key_len = max(len(k) for k in keys)
    report = ''
    for k, v in items:
        wrapper = TextWrapper(width=80,
                              initial_indent=k.ljust(max_key_len) + ' : ',
                              subsequent_indent=' '*max_key_len + ' : ')
        text = wrapper.fill(str(v))
        report += text + '\n'
    return report


class InfoReporter(object):

    def __init__(self, obj):
        self.obj = obj

    def __repr__(self):
        items = self.obj.info_items()
        return info_text_report(items)


class NoLock(object):
    """A lock that doesn't lock."""

    def __enter__(self):
        pass

    def __exit__(self, *args):
        pass


nolock = NoLock()


def lock_for(synchronizer: Optional[Any], store) -> Any:
    """Lock guarding writes to `store`, or :data:`nolock` without a synchronizer."""
    if synchronizer is None:
        return nolock
    return synchronizer[store]
