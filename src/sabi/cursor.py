""" Position tracking view over a scene's statements """

from typing import Optional, Sequence, Protocol, TypeVar, Generic


class HasKind(Protocol):
    @property
    def kind(self) -> int: ...


T = TypeVar("T", bound=HasKind)


class Cursor(Generic[T]):
    """ Walks forward and backward over a fixed sequence.

    pos is -1 before the first element and len(data) once exhausted, it never
    leaves that range. """

    def __init__(self, data:Optional[Sequence[T]]=None) -> None:
        self.data:tuple[T, ...] = tuple(data) if data is not None else ()
        self.pos = -1

    def __len__(self) -> int:
        return len(self.data)

    def current(self) -> Optional[T]:
        if 0 <= self.pos < len(self.data):
            return self.data[self.pos]
        return None

    def next(self) -> Optional[T]:
        """ advance and return the element there, None once exhausted """
        self.pos = min(self.pos + 1, len(self.data))
        return self.current()

    def prev(self) -> Optional[T]:
        """ step back and return the element there

        at the first element (or before it) there's nothing to go back to and
        the cursor doesn't move. """
        if self.pos <= 0:
            return None
        self.pos -= 1
        return self.current()

    def find_previous(self) -> Optional[T]:
        """ nearest element before pos with the same kind as the one at pos

        doesn't move the cursor. """
        item = self.current()
        if item is None:
            return None
        for idx in range(self.pos - 1, -1, -1):
            if self.data[idx].kind == item.kind:
                return self.data[idx]
        return None
