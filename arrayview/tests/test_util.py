import numpy as np
import pytest

from arrayview.errors import (ArityMismatchError, InvalidViewSpecError, MutualExclusionError,
                              OrderViolationError)
from arrayview.storage import FixedStore
from arrayview.types import Ownership
from arrayview.sync import ThreadSynchronizer
from arrayview.util import (check_data_fits, check_exclusive, check_order, grown_capacity,
                            human_readable_size, info_text_report, lock_for, nolock,
                            normalize_resize_args, normalize_shape, normalize_vector,
                            normalize_view_args)


def test_normalize_shape():
    assert (100,) == normalize_shape((100,))
    assert (100,) == normalize_shape([100])
    assert (100,) == normalize_shape(100)
    assert () == normalize_shape(())
    with pytest.raises(TypeError):
        normalize_shape(None)
    with pytest.raises(ValueError):
        normalize_shape('foo')
    with pytest.raises(OrderViolationError):
        normalize_shape((4, -1))


def test_normalize_vector():
    assert (1, 2) == normalize_vector((1, 2), 2, 'start')
    assert (1, 2) == normalize_vector([np.int64(1), 2], 2, 'start')
    assert (3,) == normalize_vector(3, 1, 'fillp')
    assert () == normalize_vector((), 0, 'fillp')
    with pytest.raises(ArityMismatchError) as e:
        normalize_vector((1, 2, 3), 2, 'fillp')
    assert 'fillp' == e.value.name
    assert 2 == e.value.rank
    assert 3 == e.value.got
    with pytest.raises(TypeError):
        normalize_vector((1.5, 2), 2, 'start')


def test_check_order():
    check_order((0, 0), (4, 4), (4, 4))
    check_order((2, 2), (2, 2), (4, 4))
    check_order((0,), (100,))
    check_order((), (), ())

    with pytest.raises(OrderViolationError) as e:
        check_order((0, -1), (4, 4), (4, 4))
    assert (1, 'start', -1, 0) == (e.value.axis, e.value.name, e.value.requested,
                                   e.value.allowed)
    with pytest.raises(OrderViolationError) as e:
        check_order((3, 0), (2, 4), (4, 4))
    assert (0, 'fillp', 2, 3) == (e.value.axis, e.value.name, e.value.requested,
                                  e.value.allowed)
    with pytest.raises(OrderViolationError) as e:
        check_order((0, 0), (4, 5), (4, 4))
    assert (1, 'fillp', 5, 4) == (e.value.axis, e.value.name, e.value.requested,
                                  e.value.allowed)


def test_check_exclusive():
    check_exclusive()
    with pytest.raises(MutualExclusionError) as e:
        check_exclusive(data=np.zeros(3))
    assert ('data',) == e.value.names
    with pytest.raises(MutualExclusionError) as e:
        check_exclusive(data=[1], fill_value=0)
    assert ('data', 'fill_value') == e.value.names
    with pytest.raises(MutualExclusionError) as e:
        check_exclusive(capacity=(4, 4))
    assert ('capacity',) == e.value.names


def test_check_data_fits():
    check_data_fits((2, 2), (4, 4))
    check_data_fits((4, 4), (4, 4))
    check_data_fits((), (4, 4))
    check_data_fits((4,), (3, 4))
    check_data_fits((1, 4), (3, 4))
    with pytest.raises(InvalidViewSpecError):
        check_data_fits((5, 4), (4, 4))
    with pytest.raises(InvalidViewSpecError):
        check_data_fits((3,), (3, 4))
    with pytest.raises(InvalidViewSpecError):
        check_data_fits((2, 3, 4), (3, 4))


def test_normalize_view_args_private():
    spec = normalize_view_args(shape=(4, 4))
    assert Ownership.PRIVATE == spec.ownership
    assert (0, 0) == spec.start
    assert (4, 4) == spec.fillp
    assert (4, 4) == spec.capacity

    spec = normalize_view_args(shape=(8, 8), fillp=(4, 4))
    assert Ownership.PRIVATE == spec.ownership
    assert (4, 4) == spec.fillp
    assert (8, 8) == spec.capacity

    spec = normalize_view_args(data=np.zeros((2, 3)))
    assert (2, 3) == spec.capacity

    with pytest.raises(TypeError):
        normalize_view_args()
    with pytest.raises(OrderViolationError):
        normalize_view_args(shape=(4, 4), fillp=(5, 4))
    with pytest.raises(ArityMismatchError):
        normalize_view_args(shape=(4, 4), fillp=(1, 2, 3))
    with pytest.raises(InvalidViewSpecError):
        normalize_view_args(shape=(2, 2), data=np.zeros((3, 3)))


def test_normalize_view_args_capacity():
    spec = normalize_view_args(shape=(4, 4), capacity=(8, 8))
    assert Ownership.PRIVATE == spec.ownership
    assert (0, 0) == spec.start
    assert (4, 4) == spec.fillp
    assert (8, 8) == spec.capacity

    spec = normalize_view_args(shape=(2, 2), start=(3, 3), capacity=8)
    assert (8,) == spec.capacity
    assert ((3,), (5,)) == (spec.start, spec.fillp)


def test_normalize_view_args_aliased():
    store = FixedStore(np.zeros((8, 8)))

    spec = normalize_view_args(shape=(4, 4), store=store, start=(2, 2))
    assert Ownership.ALIASED == spec.ownership
    assert (2, 2) == spec.start
    assert (6, 6) == spec.fillp
    assert (8, 8) == spec.capacity

    spec = normalize_view_args(store=store)
    assert (0, 0) == spec.start
    assert (8, 8) == spec.fillp

    spec = normalize_view_args(store=store, start=(1, 1), fillp=(3, 7))
    assert (1, 1) == spec.start
    assert (3, 7) == spec.fillp

    with pytest.raises(ArityMismatchError):
        normalize_view_args(shape=(4,), store=store)
    with pytest.raises(OrderViolationError):
        normalize_view_args(shape=(4, 4), store=store, start=(2, 2), fillp=(6, 5))
    with pytest.raises(OrderViolationError):
        normalize_view_args(shape=(4, 4), store=store, start=(5, 0))
    with pytest.raises(MutualExclusionError):
        normalize_view_args(shape=(4, 4), store=store, fill_value=1)

    # all are construction errors
    with pytest.raises(InvalidViewSpecError):
        normalize_view_args(shape=(4, 4), store=store, data=np.ones((4, 4)))


def test_normalize_resize_args():

    # 1D
    assert (200,) == normalize_resize_args((100,), 200)
    assert (200,) == normalize_resize_args((100,), (200,))

    # 2D
    assert (200, 100) == normalize_resize_args((100, 100), (200, 100))
    assert (200, 100) == normalize_resize_args((100, 100), (200, None))
    assert (200, 100) == normalize_resize_args((100, 100), 200, 100)
    assert (200, 100) == normalize_resize_args((100, 100), 200, None)

    with pytest.raises(ArityMismatchError):
        normalize_resize_args((100,), (200, 100))
    with pytest.raises(OrderViolationError):
        normalize_resize_args((100,), -1)


def test_grown_capacity():
    assert (8, 8) == grown_capacity((8, 8), (6, 6))
    assert (8, 10) == grown_capacity((8, 8), (6, 10))
    assert (8, 16) == grown_capacity((8, 8), (6, 10), 'double')
    assert (8, 40) == grown_capacity((8, 8), (6, 40), 'double')
    assert (1,) == grown_capacity((0,), (1,), 'double')
    assert () == grown_capacity((), ())


def test_human_readable_size():
    assert '100' == human_readable_size(100)
    assert '1.0K' == human_readable_size(2**10)
    assert '1.0M' == human_readable_size(2**20)
    assert '1.0G' == human_readable_size(2**30)


def test_info_text_report():
    report = info_text_report([('Rank', 2), ('Fill pointer', (4, 4))])
    assert 'Rank         : 2\nFill pointer : (4, 4)\n' == report


def test_lock_for():
    store = FixedStore(np.zeros(2))
    assert nolock is lock_for(None, store)
    sync = ThreadSynchronizer()
    assert sync[store] is lock_for(sync, store)
