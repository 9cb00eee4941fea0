import numpy as np
import pytest
from numpy.testing import assert_array_equal

from arrayview.config import config
from arrayview.errors import (ArityMismatchError, CapacityExceededError, InvalidViewSpecError,
                              OrderViolationError)
from arrayview.storage import BackingStore, FixedStore, NDArrayStore, normalize_store


class TestNDArrayStore:

    def test_init(self):
        store = NDArrayStore((2, 3), dtype='i4', fill_value=7)
        assert (2, 3) == store.capacity()
        assert 2 == store.rank
        assert np.dtype('i4') == store.dtype
        assert 7 == store.fill_value
        assert store.is_growable()
        assert_array_equal(np.full((2, 3), 7, dtype='i4'), store.data)

    def test_init_defaults(self):
        store = NDArrayStore((3,))
        assert np.dtype(config.get('view.dtype')) == store.dtype
        assert config.get('view.fill_value') == store.fill_value

    def test_init_data(self):
        store = NDArrayStore((3, 3), data=np.ones((2, 2), dtype='i2'))
        assert np.dtype('i2') == store.dtype
        expect = np.zeros((3, 3), dtype='i2')
        expect[:2, :2] = 1
        assert_array_equal(expect, store.data)

        # scalar data is broadcast
        store = NDArrayStore((2, 2), data=5)
        assert_array_equal(np.full((2, 2), 5), store.data)

        # data is copied
        a = np.arange(4)
        store = NDArrayStore((4,), data=a)
        store.set((0,), 42)
        assert 0 == a[0]

    def test_init_data_does_not_fit(self):
        with pytest.raises(InvalidViewSpecError):
            NDArrayStore((2, 2), data=np.ones((3, 3)))
        with pytest.raises(InvalidViewSpecError):
            NDArrayStore((2, 2), data=np.ones(3))

    def test_repr(self):
        store = NDArrayStore((2, 3), dtype='i4')
        assert 'NDArrayStore(capacity=(2, 3), dtype=int32)' == repr(store)

        # a store that failed part way through construction
        store = NDArrayStore.__new__(NDArrayStore)
        assert 'NDArrayStore()' == repr(store)

    def test_get_set(self):
        store = NDArrayStore((2, 3), dtype='i4')
        store.set((1, 2), 5)
        assert 5 == store.get((1, 2))
        assert 0 == store.get([0, 0])

    def test_window(self):
        store = NDArrayStore((4, 4), data=np.arange(16).reshape(4, 4))
        w = store.window((1, 2), (3, 4))
        assert_array_equal(np.array([[6, 7], [10, 11]]), w)
        # a window is a numpy view onto the store, not a copy
        w[...] = -1
        assert -1 == store.get((1, 2))

        # 0-d store
        store = NDArrayStore((), data=3)
        w = store.window((), ())
        w[...] = 4
        assert 4 == store.get(())

    def test_grow(self):
        store = NDArrayStore((2, 3), dtype='i4', fill_value=7)
        store.set((1, 2), 5)
        store.grow((4, 3))
        assert (4, 3) == store.capacity()
        assert 5 == store.get((1, 2))
        assert 7 == store.get((3, 0))
        assert 7 == store.get((3, 2))

        store.grow((4, 6))
        assert (4, 6) == store.capacity()
        assert 5 == store.get((1, 2))
        assert 7 == store.get((1, 5))

    def test_grow_preserves_coordinates(self):
        a = np.arange(12).reshape(3, 4)
        store = NDArrayStore((3, 4), data=a)
        store.grow((5, 9))
        assert_array_equal(a, store.data[:3, :4])
        assert (store.data[3:, :] == 0).all()
        assert (store.data[:, 4:] == 0).all()

    def test_grow_same_capacity(self):
        store = NDArrayStore((2, 2))
        data = store.data
        store.grow((2, 2))
        assert data is store.data

    def test_grow_errors(self):
        store = NDArrayStore((2, 2))
        with pytest.raises(OrderViolationError):
            store.grow((1, 4))
        with pytest.raises(ArityMismatchError):
            store.grow((4, 4, 4))
        assert (2, 2) == store.capacity()


class TestFixedStore:

    def test_init(self):
        a = np.zeros((3, 4))
        store = FixedStore(a)
        assert a is store.data
        assert (3, 4) == store.capacity()
        assert not store.is_growable()
        with pytest.raises(TypeError):
            FixedStore([1, 2, 3])

    def test_aliases_array(self):
        a = np.zeros((3, 4))
        store = FixedStore(a)
        store.set((1, 1), 9)
        assert 9 == a[1, 1]
        a[2, 3] = 8
        assert 8 == store.get((2, 3))

    def test_grow(self):
        store = FixedStore(np.zeros((3, 4)))
        store.grow((3, 4))
        with pytest.raises(CapacityExceededError) as e:
            store.grow((3, 5))
        assert 1 == e.value.axis
        assert 5 == e.value.requested
        assert 4 == e.value.allowed
        assert (3, 4) == store.capacity()


def test_normalize_store():
    assert normalize_store(None) is None
    store = NDArrayStore((2,))
    assert store is normalize_store(store)
    a = np.zeros(2)
    fixed = normalize_store(a)
    assert isinstance(fixed, FixedStore)
    assert a is fixed.data
    with pytest.raises(TypeError):
        normalize_store([1, 2])


def test_abstract():
    with pytest.raises(TypeError):
        BackingStore(np.zeros(2))
