import logging

import numpy as np

from arrayview.config import config, parse_growth
from arrayview.errors import ArityMismatchError, CapacityExceededError, ViewResizeError
from arrayview.indexing import (compose_selection, is_element_selection, iter_subscripts,
                                normalize_element_selection, prod,
                                replace_ellipsis, row_major_to_subscripts, shape_of,
                                to_backing_subscripts)
from arrayview.storage import normalize_store
from arrayview.types import ArrayKind, Ownership
from arrayview.util import (InfoReporter, check_order, grown_capacity, human_readable_size,
                            lock_for, normalize_resize_args, normalize_vector)

logger = logging.getLogger(__name__)

__all__ = ['ArrayView', 'resize_view', 'classify', 'as_view']


class ArrayView(object):
    """A window of fixed rank onto a backing store, with an independent start
    offset and fill-pointer along every axis.

    Views are normally obtained from :func:`arrayview.creation.create_view`.

    Parameters
    ----------
    store : BackingStore
        Store holding the elements. Never another view.
    start : tuple of int
        Offset of the window along each axis, in store coordinates.
    fillp : tuple of int
        Exclusive upper bound of the window along each axis, in store
        coordinates.
    ownership : Ownership
        PRIVATE if the view allocated `store` itself, ALIASED if the caller
        supplied it.
    synchronizer : object, optional
        Array synchronizer, e.g. :class:`arrayview.sync.ThreadSynchronizer`.

    Attributes
    ----------
    store
    start
    fillp
    ownership
    rank
    shape
    size
    dtype
    fill_value
    kind
    info

    Methods
    -------
    get
    set
    get_row_major
    set_row_major
    subview
    fill
    resize
    to_numpy

    """

    def __init__(self, store, start, fillp, ownership, synchronizer=None):
        self._store = store
        self._start = tuple(start)
        self._fillp = tuple(fillp)
        self._ownership = ownership
        self._synchronizer = synchronizer
        self._rank = len(self._start)

    @property
    def store(self):
        """The backing store the view reads and writes through."""
        return self._store

    @property
    def start(self):
        """Per-axis offset into backing store coordinates."""
        return self._start

    @property
    def fillp(self):
        """Per-axis exclusive upper bound into backing store coordinates."""
        return self._fillp

    @property
    def ownership(self):
        return self._ownership

    @property
    def synchronizer(self):
        return self._synchronizer

    @property
    def rank(self):
        """Number of axes. Fixed for the lifetime of the view."""
        return self._rank

    @property
    def ndim(self):
        return self._rank

    @property
    def shape(self):
        """Logical extent along each axis."""
        return shape_of(self)

    @property
    def size(self):
        return prod(self.shape)

    @property
    def dtype(self):
        return self._store.dtype

    @property
    def fill_value(self):
        return self._store.fill_value

    @property
    def nbytes(self):
        return self.size * self.dtype.itemsize

    @property
    def kind(self):
        if self._ownership is Ownership.PRIVATE:
            return ArrayKind.PRIVATE_VIEW
        return ArrayKind.ALIASED_VIEW

    @property
    def is_private(self):
        return self._ownership is Ownership.PRIVATE

    # element access

    def get(self, subscripts):
        """Return the element at local `subscripts`.

        Raises
        ------
        BoundsCheckError
            If a subscript is outside ``[0, shape)`` along some axis.

        """
        return self._store.get(to_backing_subscripts(self, subscripts))

    def set(self, subscripts, value):
        """Store `value` at local `subscripts`."""
        return self._write_op(self._set_nosync, subscripts, value)

    def _set_nosync(self, subscripts, value):
        self._store.set(to_backing_subscripts(self, subscripts), value)

    def get_row_major(self, index):
        """Return the element at row-major (C order) position `index`."""
        return self.get(row_major_to_subscripts(self.shape, index))

    def set_row_major(self, index, value):
        self.set(row_major_to_subscripts(self.shape, index), value)

    def items(self):
        """Iterate over ``(subscripts, value)`` pairs in row-major order."""
        for subscripts in iter_subscripts(self.shape):
            yield subscripts, self.get(subscripts)

    def __iter__(self):
        for _, value in self.items():
            yield value

    def __len__(self):
        if self.shape:
            return self.shape[0]
        else:
            # rank 0, same error message as numpy
            raise TypeError("len() of unsized object")

    def subview(self, selection):
        """Return an ALIASED view of the region picked by `selection`.

        Offsets are composed against the backing store once, the result never
        refers back to this view. Integer items select a single position but
        keep the axis.
        """
        start, fillp = compose_selection(selection, self._start, self._fillp)
        return ArrayView(self._store, start, fillp, Ownership.ALIASED,
                         synchronizer=self._synchronizer)

    def __getitem__(self, selection):
        selection = replace_ellipsis(selection, self.shape)
        if is_element_selection(selection):
            return self.get(normalize_element_selection(selection, self.shape))
        return self.subview(selection)

    def __setitem__(self, selection, value):
        self._write_op(self._setitem_nosync, selection, value)

    def _setitem_nosync(self, selection, value):
        selection = replace_ellipsis(selection, self.shape)
        if is_element_selection(selection):
            self._set_nosync(normalize_element_selection(selection, self.shape), value)
        else:
            start, fillp = compose_selection(selection, self._start, self._fillp)
            self._store.window(start, fillp)[...] = value

    def fill(self, value):
        """Set every element within the view to `value`."""
        self._write_op(self._fill_nosync, value)

    def _fill_nosync(self, value):
        self._store.window(self._start, self._fillp)[...] = value

    def to_numpy(self):
        """Return a copy of the view's elements as a numpy array."""
        return np.array(self._store.window(self._start, self._fillp), copy=True)

    def __array__(self, dtype=None, copy=None):
        a = self.to_numpy()
        if dtype is not None:
            a = a.astype(dtype)
        return a

    # resizing

    def _write_op(self, f, *args, **kwargs):
        with lock_for(self._synchronizer, self._store):
            return f(*args, **kwargs)

    def resize(self, *args, start=None, store=None, detach=False):
        """Change the shape of the view, and optionally its start offset.

        Parameters
        ----------
        *args
            New shape, as a tuple or one integer per axis. ``None`` keeps the
            current extent along that axis.
        start : tuple of int, optional
            New start offset. Defaults to the current one.
        store : BackingStore or numpy array, optional
            Store to rebind the view onto. The view becomes ALIASED.
        detach : bool, optional
            Rebind an ALIASED view onto freshly allocated private storage of
            the new shape, copying the elements common to both shapes. Cannot
            be combined with `start` or `store`, and raises
            :class:`arrayview.errors.ViewResizeError` on a PRIVATE view.

        Examples
        --------
        >>> import arrayview
        >>> v = arrayview.create_view((8, 8), fillp=(4, 4))
        >>> v.shape
        (4, 4)
        >>> v.resize(6, 6)
        >>> v.shape
        (6, 6)

        Notes
        -----
        A PRIVATE view whose new window fits the current capacity only moves
        its start offset and fill-pointer. Otherwise the store is grown first,
        which extends trailing capacity and leaves every element at its
        coordinates, so values at previously valid local subscripts survive.

        An ALIASED view never grows the caller's store. A window beyond the
        store capacity raises :class:`arrayview.errors.CapacityExceededError`
        unless a replacement `store` is given or `detach` is set.

        Either every field of the view is updated or none is.

        """
        return self._write_op(self._resize_nosync, *args, start=start, store=store,
                              detach=detach)

    def _resize_nosync(self, *args, start=None, store=None, detach=False):
        from arrayview.creation import create_view  # avoid circular import

        if detach:
            if self._ownership is not Ownership.ALIASED:
                raise ViewResizeError("detach only applies to aliased views")
            if start is not None:
                raise ViewResizeError("a detached view always starts at the origin")
            if store is not None:
                raise ViewResizeError("detach and store are mutually exclusive")

        new_shape = normalize_resize_args(self.shape, *args)
        store = normalize_store(store)

        if store is not None:
            # explicit rebind onto the caller's store
            other = create_view(new_shape, store=store, start=start)
            self._rebind(other)
            return

        if start is None:
            start = self._start
        else:
            start = normalize_vector(start, self._rank, 'start')
        fillp = tuple(s + n for s, n in zip(start, new_shape))
        check_order(start, fillp)

        if self._ownership is Ownership.ALIASED:
            if detach:
                other = create_view(new_shape, dtype=self.dtype, fill_value=self.fill_value)
                common = tuple(min(a, b) for a, b in zip(self.shape, new_shape))
                zeros = (0,) * self._rank
                other.store.window(zeros, common)[...] = self._store.window(
                    self._start, tuple(s + n for s, n in zip(self._start, common)))
                self._rebind(other)
                return
            for axis, (f, c) in enumerate(zip(fillp, self._store.capacity())):
                if f > c:
                    raise CapacityExceededError(axis, f, c)
            other = create_view(new_shape, store=self._store, start=start)
            self._rebind(other)
            return

        capacity = self._store.capacity()
        needed = grown_capacity(capacity, fillp, parse_growth(config.get('view.growth')))
        if needed != capacity:
            self._store.grow(needed)
        self._start = start
        self._fillp = fillp
        logger.debug('resized private view to start=%s fillp=%s', start, fillp)

    def _rebind(self, other):
        if other.rank != self._rank:
            raise ArityMismatchError('shape', self._rank, other.rank)
        self._store = other._store
        self._start = other._start
        self._fillp = other._fillp
        self._ownership = other._ownership
        logger.debug('rebound %s view to %r start=%s fillp=%s',
                     self._ownership.value, self._store, self._start, self._fillp)

    # informational

    def info_items(self):
        items = [
            ('Type', f'{type(self).__module__}.{type(self).__name__}'),
            ('Ownership', self._ownership.value),
            ('Rank', self._rank),
            ('Shape', self.shape),
            ('Start', self._start),
            ('Fill pointer', self._fillp),
            ('Capacity', self._store.capacity()),
            ('Data type', self.dtype),
            ('No. bytes', f'{self.nbytes} ({human_readable_size(self.nbytes)})'),
            ('Store type', f'{type(self._store).__module__}.{type(self._store).__name__}'),
        ]
        if self._synchronizer is not None:
            items.append(('Synchronizer type', type(self._synchronizer).__name__))
        return items

    @property
    def info(self):
        """Report some diagnostic information about the view.

        Examples
        --------
        >>> import arrayview
        >>> v = arrayview.zeros((8, 8))
        >>> v.info
        Type         : arrayview.core.ArrayView
        Ownership    : private
        Rank         : 2
        Shape        : (8, 8)
        Start        : (0, 0)
        Fill pointer : (8, 8)
        Capacity     : (8, 8)
        Data type    : float64
        No. bytes    : 512 (512)
        Store type   : arrayview.storage.NDArrayStore
        <BLANKLINE>

        """
        return InfoReporter(self)

    def __repr__(self):
        return (f'<arrayview.{type(self).__name__} {self._ownership.value} '
                f'shape={self.shape} start={self._start} dtype={self.dtype}>')


def resize_view(view, shape, start=None, store=None, detach=False):
    """Resize `view` in place, see :meth:`ArrayView.resize`."""
    view.resize(shape, start=start, store=store, detach=detach)


def classify(obj):
    """Return the :class:`arrayview.types.ArrayKind` of an array-like object."""
    if isinstance(obj, ArrayView):
        return obj.kind
    if isinstance(obj, np.ndarray):
        return ArrayKind.PLAIN
    raise TypeError(f'expected ArrayView or numpy array, found {type(obj)!r}')


def as_view(obj):
    """Return `obj` as an :class:`ArrayView` covering all of it.

    A plain numpy array is aliased in place, views are returned unchanged.
    """
    kind = classify(obj)
    if kind is ArrayKind.PLAIN:
        from arrayview.creation import create_view  # avoid circular import
        return create_view(store=obj)
    elif kind in (ArrayKind.PRIVATE_VIEW, ArrayKind.ALIASED_VIEW):
        return obj
    raise TypeError(f'unhandled array kind {kind!r}')  # pragma: no cover
