import weakref
from threading import Lock


class ThreadSynchronizer(object):
    """Provides synchronization using thread locks, one lock per backing store.

    Views never lock on their own. Pass a synchronizer to
    :func:`arrayview.creation.create_view` to have writes and resizes through
    that view serialized against other views given the same synchronizer.

    Locks are keyed on the store object itself and only weakly referenced
    stores are tracked, so a lock is dropped along with its store.

    """

    def __init__(self):
        self.mutex = Lock()
        self.locks = weakref.WeakKeyDictionary()

    def __getitem__(self, store):
        with self.mutex:
            lock = self.locks.get(store)
            if lock is None:
                lock = self.locks[store] = Lock()
            return lock
