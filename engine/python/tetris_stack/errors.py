"""Exceptions raised by the piece containers and the game controller."""


class ContainerError(Exception):
    """Base class for bounded container conditions."""
    pass


class EmptyError(ContainerError):
    """Removal attempted on a container holding no pieces."""
    pass


class FullError(ContainerError):
    """Insertion attempted on a container already at capacity."""
    pass


class QueueEmpty(EmptyError):
    """The next-piece queue has nothing to dequeue."""
    pass


class QueueFull(FullError):
    """The next-piece queue cannot accept another piece."""
    pass


class StackEmpty(EmptyError):
    """The reserve stack has nothing to pop."""
    pass


class StackFull(FullError):
    """The reserve stack cannot accept another piece."""
    pass


class ReserveUnavailable(Exception):
    """Reserve operations were requested on a controller without a reserve stack."""
    pass
