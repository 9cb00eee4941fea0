import itertools
import numbers
from functools import reduce
import operator

from arrayview.errors import (BoundsCheckError, NonUnitStepError, SubscriptCountError,
                              err_too_many_indices)


def is_integer(x):
    return isinstance(x, numbers.Integral)


def ensure_tuple(v):
    if isinstance(v, list):
        v = tuple(v)
    elif not isinstance(v, tuple):
        v = (v,)
    return v


def prod(values):
    return reduce(operator.mul, values, 1)


def shape_of(view):
    """Logical shape of `view`, i.e., ``fillp - start`` along every axis."""
    return tuple(f - s for s, f in zip(view.start, view.fillp))


def to_backing_subscripts(view, subscripts):
    """Translate local `subscripts` of `view` into coordinates of its backing store.

    Parameters
    ----------
    view : ArrayView
        View whose coordinate space the subscripts are expressed in.
    subscripts : tuple of int
        One non-negative integer per axis, each less than the view's extent
        along that axis.

    Returns
    -------
    tuple of int

    Raises
    ------
    SubscriptCountError
        If the number of subscripts differs from the view's rank.
    BoundsCheckError
        If a subscript falls outside ``[0, shape)`` on some axis.

    """
    subscripts = ensure_tuple(subscripts)
    if len(subscripts) != view.rank:
        raise SubscriptCountError(view.rank, len(subscripts))
    out = []
    for axis, (sub, s, f) in enumerate(zip(subscripts, view.start, view.fillp)):
        dim_len = f - s
        if not is_integer(sub) or sub < 0 or sub >= dim_len:
            raise BoundsCheckError(axis, sub, dim_len)
        out.append(s + int(sub))
    return tuple(out)


def row_major_weights(shape):
    """Weight of each axis in C order, i.e., the product of all trailing extents."""
    weights = [1] * len(shape)
    for i in range(len(shape) - 2, -1, -1):
        weights[i] = weights[i + 1] * shape[i + 1]
    return tuple(weights)


def row_major_to_subscripts(shape, index):
    """Convert a row-major (C order) `index` into per-axis subscripts for `shape`."""
    size = prod(shape)
    if not is_integer(index) or index < 0 or index >= size:
        raise BoundsCheckError(None, index, size)
    subscripts = []
    remainder = int(index)
    for weight in row_major_weights(shape):
        sub, remainder = divmod(remainder, weight)
        subscripts.append(sub)
    return tuple(subscripts)


def subscripts_to_row_major(shape, subscripts):
    """Convert per-axis `subscripts` into a row-major (C order) index for `shape`."""
    subscripts = ensure_tuple(subscripts)
    if len(subscripts) != len(shape):
        raise SubscriptCountError(len(shape), len(subscripts))
    for axis, (sub, dim_len) in enumerate(zip(subscripts, shape)):
        if not is_integer(sub) or sub < 0 or sub >= dim_len:
            raise BoundsCheckError(axis, sub, dim_len)
    return sum(int(s) * w for s, w in zip(subscripts, row_major_weights(shape)))


def iter_subscripts(shape):
    """Iterate over every subscript tuple within `shape` in row-major order."""
    return itertools.product(*(range(n) for n in shape))


def normalize_integer_selection(dim_sel, dim_len, axis=None):

    # normalize type to int
    dim_sel = int(dim_sel)

    # handle wraparound
    if dim_sel < 0:
        dim_sel = dim_len + dim_sel

    # handle out of bounds
    if dim_sel >= dim_len or dim_sel < 0:
        raise BoundsCheckError(axis, dim_sel, dim_len)

    return dim_sel


def normalize_slice_selection(dim_sel, dim_len):
    start, stop, step = dim_sel.indices(dim_len)
    if step != 1:
        raise NonUnitStepError(step)
    return start, max(start, stop)


def replace_ellipsis(selection, shape):

    selection = ensure_tuple(selection)

    # count number of ellipsis present
    n_ellipsis = sum(1 for i in selection if i is Ellipsis)

    if n_ellipsis > 1:
        # more than 1 is an error
        raise IndexError("an index can only have a single ellipsis ('...')")

    elif n_ellipsis == 1:
        # locate the ellipsis, count how many items to left and right
        n_items_l = selection.index(Ellipsis)  # items to left of ellipsis
        n_items_r = len(selection) - (n_items_l + 1)  # items to right of ellipsis
        n_items = len(selection) - 1  # all non-ellipsis items

        if n_items >= len(shape):
            # ellipsis does nothing, just remove it
            selection = tuple(i for i in selection if i is not Ellipsis)

        else:
            # replace ellipsis with as many slices are needed for number of dims
            new_item = selection[:n_items_l] + ((slice(None),) * (len(shape) - n_items))
            if n_items_r:
                new_item += selection[-n_items_r:]
            selection = new_item

    # fill out selection if not completely specified
    if len(selection) < len(shape):
        selection += (slice(None),) * (len(shape) - len(selection))

    # check selection not too long
    if len(selection) > len(shape):
        err_too_many_indices(selection, shape)

    return selection


def is_element_selection(selection):
    return all(is_integer(s) for s in selection)


def compose_selection(selection, start, fillp):
    """Resolve a basic `selection` made against a window ``[start, fillp)`` into a new
    window in the same backing coordinates.

    Integers select a single position but keep the axis (rank never changes),
    slices must have step 1.

    """
    selection = replace_ellipsis(selection, start)
    new_start = []
    new_fillp = []
    for axis, (dim_sel, s, f) in enumerate(zip(selection, start, fillp)):
        dim_len = f - s
        if is_integer(dim_sel):
            i = normalize_integer_selection(dim_sel, dim_len, axis=axis)
            new_start.append(s + i)
            new_fillp.append(s + i + 1)
        elif isinstance(dim_sel, slice):
            lo, hi = normalize_slice_selection(dim_sel, dim_len)
            new_start.append(s + lo)
            new_fillp.append(s + hi)
        else:
            raise IndexError(f"unsupported selection item for view; got {dim_sel!r}")
    return tuple(new_start), tuple(new_fillp)


def normalize_element_selection(selection, shape):
    """Normalize a tuple of integers (negative values wrap around) into subscripts."""
    return tuple(normalize_integer_selection(s, n, axis=axis)
                 for axis, (s, n) in enumerate(zip(selection, shape)))
