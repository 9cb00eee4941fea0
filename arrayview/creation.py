import logging

import numpy as np

from arrayview.core import ArrayView, as_view
from arrayview.storage import NDArrayStore, normalize_store
from arrayview.types import Ownership
from arrayview.util import normalize_view_args

logger = logging.getLogger(__name__)


def create_view(shape=None, fill_value=None, data=None, store=None, start=None, fillp=None,
                dtype=None, capacity=None, synchronizer=None):
    """Create a view, allocating private storage or aliasing an existing store.

    Parameters
    ----------
    shape : int or tuple of ints, optional
        Without `store` or `capacity`, the shape of the storage to allocate.
        Otherwise the logical shape of the view. May be omitted when it can be
        derived from `data`, `fillp`, `capacity` or `store`.
    fill_value : object, optional
        Value of freshly allocated slots. Defaults to the ``view.fill_value``
        config value. Cannot be combined with `store`.
    data : array_like, optional
        Initial contents of freshly allocated storage. Cannot be combined with
        `store`.
    store : BackingStore or numpy array, optional
        Existing store to alias. A numpy array is used in place, wrapped in a
        :class:`arrayview.storage.FixedStore`.
    start : tuple of ints, optional
        Offset of the view along each axis. Defaults to zeros.
    fillp : tuple of ints, optional
        Exclusive upper bound of the view along each axis. Without `store` a
        fill-pointer smaller than `shape` leaves spare capacity the view can
        later grow into without reallocating.
    dtype : string or dtype, optional
        NumPy dtype of freshly allocated storage.
    capacity : int or tuple of ints, optional
        Capacity of the storage to allocate. When given, `shape` is the
        logical shape of the view rather than the allocation, so
        ``create_view((4, 4), capacity=(8, 8))`` is equivalent to
        ``create_view((8, 8), fillp=(4, 4))``. Cannot be combined with
        `store`.
    synchronizer : object, optional
        Array synchronizer.

    Returns
    -------
    v : arrayview.core.ArrayView

    Raises
    ------
    arrayview.errors.InvalidViewSpecError
        If the arguments do not describe a valid view. Nothing is allocated.

    Examples
    --------
    Allocate a 4x4 view with room to grow to 8x8::

        >>> import arrayview
        >>> v = arrayview.create_view((8, 8), fillp=(4, 4))
        >>> v.shape, v.store.capacity()
        ((4, 4), (8, 8))

    Alias the centre of an existing numpy array::

        >>> import numpy as np
        >>> a = np.zeros((8, 8))
        >>> v = arrayview.create_view((4, 4), store=a, start=(2, 2))
        >>> v.fill(1)
        >>> int(a.sum())
        16

    """

    store = normalize_store(store)
    spec = normalize_view_args(shape=shape, store=store, start=start, fillp=fillp,
                               data=data, fill_value=fill_value, capacity=capacity)

    if spec.ownership is Ownership.ALIASED:
        logger.debug('aliasing %r with start=%s fillp=%s', store, spec.start, spec.fillp)
    else:
        store = NDArrayStore(spec.capacity, dtype=dtype, fill_value=fill_value, data=data)

    return ArrayView(store, spec.start, spec.fillp, spec.ownership, synchronizer=synchronizer)


def zeros(shape, **kwargs):
    """Create a private view, with zero being used as the initial value.

    For parameter definitions see :func:`arrayview.creation.create_view`.

    """
    return create_view(shape=shape, fill_value=0, **kwargs)


def empty(shape, **kwargs):
    """Create a private view whose initial contents are not defined.

    For parameter definitions see :func:`arrayview.creation.create_view`.

    Notes
    -----
    Slots are currently initialized with the ``view.fill_value`` config value,
    which is also used for capacity added by later growth. Do not rely on it.

    """
    return create_view(shape=shape, fill_value=None, **kwargs)


def ones(shape, **kwargs):
    """Create a private view, with one being used as the initial value.

    For parameter definitions see :func:`arrayview.creation.create_view`.

    """
    return create_view(shape=shape, fill_value=1, **kwargs)


def full(shape, fill_value, **kwargs):
    """Create a private view, with `fill_value` being used as the initial value.

    For parameter definitions see :func:`arrayview.creation.create_view`.

    Examples
    --------
    >>> import arrayview
    >>> v = arrayview.full((3, 3), fill_value=42, dtype='i4')
    >>> int(v[0, 0])
    42

    """
    return create_view(shape=shape, fill_value=fill_value, **kwargs)


def array(data, **kwargs):
    """Create a private view holding a copy of `data`.

    The `data` argument should be a NumPy array or array-like object. For
    other parameter definitions see :func:`arrayview.creation.create_view`.

    """

    # ensure data is array-like
    if not hasattr(data, "shape") or not hasattr(data, "dtype"):
        data = np.asanyarray(data)
    kwargs.setdefault("dtype", data.dtype)
    kwargs.setdefault("shape", data.shape)

    return create_view(data=data, **kwargs)


def _like_args(a, kwargs):
    kwargs.setdefault("shape", a.shape)
    kwargs.setdefault("dtype", a.dtype)


def zeros_like(a, **kwargs):
    """Create a private view of zeros like `a`."""
    _like_args(a, kwargs)
    return zeros(**kwargs)


def full_like(a, **kwargs):
    """Create a filled private view like `a`."""
    _like_args(a, kwargs)
    if isinstance(a, ArrayView):
        kwargs.setdefault("fill_value", a.fill_value)
    return full(**kwargs)


def view_of(view, selection):
    """Return an ALIASED view of the region of `view` picked by `selection`.

    `view` may also be a plain numpy array, which is aliased in place. Offsets
    are composed against the backing store, so the result does not depend on
    `view` staying alive or unchanged.

    Examples
    --------
    >>> import arrayview
    >>> v = arrayview.zeros((6, 6))
    >>> w = arrayview.view_of(v, (slice(1, 3), slice(2, None)))
    >>> w.shape, w.start
    ((2, 4), (1, 2))

    """
    return as_view(view).subview(selection)
