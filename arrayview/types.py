import enum


class Ownership(enum.Enum):
    """Who owns the backing store of a view."""

    #: the view allocated its store and may grow it on resize
    PRIVATE = 'private'
    #: the store was supplied by the caller and is never grown implicitly
    ALIASED = 'aliased'


class ArrayKind(enum.Enum):
    """Closed set of array-like kinds accepted by :func:`arrayview.core.classify`."""

    PLAIN = 'plain'
    PRIVATE_VIEW = 'private_view'
    ALIASED_VIEW = 'aliased_view'
