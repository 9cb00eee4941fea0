class _BaseViewError(ValueError):
    _msg = ""

    def __init__(self, *args):
        super().__init__(self._msg.format(*args))


class _BaseViewIndexError(IndexError):
    _msg = ""

    def __init__(self, *args):
        super().__init__(self._msg.format(*args))


class InvalidViewSpecError(_BaseViewError):
    """Invalid shape/offset specification for constructing or resizing a view."""
    _msg = "invalid shape/offset specification: {0}"


class ArityMismatchError(InvalidViewSpecError):
    _msg = "{0} must have length {1} to match rank; got {2}"

    def __init__(self, name, rank, got):
        super().__init__(name, rank, got)
        self.name = name
        self.rank = rank
        self.got = got


class OrderViolationError(InvalidViewSpecError):
    _msg = "axis {0}: {1} {2} violates 0 <= start <= fillp <= capacity (allowed {3})"

    def __init__(self, axis, name, requested, allowed):
        super().__init__(axis, name, requested, allowed)
        self.axis = axis
        self.name = name
        self.requested = requested
        self.allowed = allowed


class MutualExclusionError(InvalidViewSpecError):
    _msg = "cannot alias an existing store and also supply {0} for fresh allocation"

    def __init__(self, *names):
        super().__init__(", ".join(names))
        self.names = names


class BoundsCheckError(_BaseViewIndexError):
    _msg = "index {1} out of bounds for axis {0} with length {2}"

    def __init__(self, axis, index, length):
        super().__init__(axis, index, length)
        self.axis = axis
        self.index = index
        self.length = length


class SubscriptCountError(_BaseViewIndexError):
    _msg = "expected {0} subscripts for a view of rank {0}, got {1}"

    def __init__(self, rank, got):
        super().__init__(rank, got)
        self.rank = rank
        self.got = got


class NonUnitStepError(_BaseViewIndexError):
    _msg = "only slices with step 1 are supported; got step {0}"

    def __init__(self, step):
        super().__init__(step)
        self.step = step


class ViewResizeError(_BaseViewError):
    _msg = "cannot resize view: {0}"


class CapacityExceededError(ViewResizeError):
    _msg = "axis {0}: requested capacity {1} exceeds fixed capacity {2}"

    def __init__(self, axis, requested, allowed):
        super().__init__(axis, requested, allowed)
        self.axis = axis
        self.requested = requested
        self.allowed = allowed


def err_too_many_indices(selection, shape):
    raise IndexError(f"too many indices for view; expected {len(shape)}, got {len(selection)}")
