from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Awaitable, Callable, ClassVar, Generic, Iterable, Literal, ParamSpec, TypeVar

from typing_extensions import TypeIs

from eitherway._log import logger

if TYPE_CHECKING:
    from eitherway.either import Either

T = TypeVar("T")  # Held value
U = TypeVar("U")  # Mapped value
F = TypeVar("F")  # Failure reason, for to_either
P = ParamSpec("P")


class Maybe(ABC, Generic[T]):
    """An optional value: either Present(value) or Absent.

    Every combinator returns a new container (or the receiver itself, since
    containers are immutable) and never calls its function on Absent.
    """

    __slots__ = ()

    @abstractmethod
    def is_present(self) -> bool: ...

    def is_absent(self) -> bool:
        return not self.is_present()

    def map(self, fn: Callable[[T], U]) -> Maybe[U]:
        if isinstance(self, Present):
            return Present(fn(self.value))
        return ABSENT

    def bind(self, fn: Callable[[T], Maybe[U]]) -> Maybe[U]:
        return fn(self.value) if isinstance(self, Present) else ABSENT

    def fold(self, on_absent: U, fn: Callable[[T], U]) -> U:
        """Apply fn to the held value, or return on_absent."""
        return fn(self.value) if isinstance(self, Present) else on_absent

    def otherwise(self, default: T) -> T:
        return self.value if isinstance(self, Present) else default

    def recover(self, fn: Callable[[], Maybe[T]]) -> Maybe[T]:
        """Replace Absent with the Maybe produced by fn."""
        return self if isinstance(self, Present) else fn()

    def filter(self, predicate: Callable[[T], object]) -> Maybe[T]:
        if isinstance(self, Present) and predicate(self.value):
            return self
        return ABSENT

    def on_present(self, fn: Callable[[T], Any]) -> Maybe[T]:
        """Run fn on the held value for side effects, return self unchanged."""
        if isinstance(self, Present):
            fn(self.value)
        return self

    def on_absent(self, fn: Callable[[], Any]) -> Maybe[T]:
        """Run fn if there is no value, return self unchanged."""
        if self.is_absent():
            fn()
        return self

    def to_either(self, reason: F) -> Either[F, T]:
        """Convert to Either, using reason as the Failure payload when Absent."""
        from eitherway.either import Failure, Success

        if isinstance(self, Present):
            return Success(self.value)
        return Failure(reason)

    async def map_async(self, fn: Callable[[T], Awaitable[U]]) -> Maybe[U]:
        if isinstance(self, Present):
            return Present(await fn(self.value))
        return ABSENT

    async def bind_async(self, fn: Callable[[T], Awaitable[Maybe[U]]]) -> Maybe[U]:
        return await fn(self.value) if isinstance(self, Present) else ABSENT

    async def fold_async(self, on_absent: U, fn: Callable[[T], Awaitable[U]]) -> U:
        """Await fn on the held value, or return on_absent without calling fn."""
        return await fn(self.value) if isinstance(self, Present) else on_absent


class Present(Maybe[T]):
    __slots__ = ("_value",)
    __match_args__ = ("value",)

    def __init__(self, value: T) -> None:
        self._value = value

    @property
    def value(self) -> T:
        return self._value

    def __repr__(self) -> str:
        return f"Present({self._value!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Present) and self._value == other._value

    def __hash__(self) -> int:
        return hash(("Present", self._value))

    def is_present(self) -> Literal[True]:
        return True

    def is_absent(self) -> Literal[False]:
        return False


class Absent(Maybe[Any]):
    """The empty variant. Absent() always returns the ABSENT singleton."""

    __slots__ = ()
    _instance: ClassVar[Absent | None] = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "Absent"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Absent)

    def __hash__(self) -> int:
        return hash("Absent")

    def __reduce__(self) -> str:
        return "ABSENT"

    def is_present(self) -> Literal[False]:
        return False

    def is_absent(self) -> Literal[True]:
        return True


ABSENT = Absent()


def is_present(maybe: Maybe[T]) -> TypeIs[Present[T]]:
    return maybe.is_present()


def is_absent(maybe: Maybe[T]) -> TypeIs[Absent]:
    return maybe.is_absent()


def maybe_from_nullable(value: T | None) -> Maybe[T]:
    """Present(value) unless value is None. Falsy values are still present."""
    return ABSENT if value is None else Present(value)


def maybe_from_try(fn: Callable[P, T], /, *args: P.args, **kwargs: P.kwargs) -> Maybe[T]:
    """Call fn, turning any raised Exception into Absent.

    The exception itself is dropped; use either_from_try to keep a reason.
    """
    try:
        return Present(fn(*args, **kwargs))
    except Exception:
        logger.debug("maybe_from_try: %r raised, returning Absent", fn, exc_info=True)
        return ABSENT


async def maybe_from_awaitable(awaitable: Awaitable[T]) -> Maybe[T]:
    """Await awaitable, turning any raised Exception into Absent."""
    try:
        return Present(await awaitable)
    except Exception:
        logger.debug("maybe_from_awaitable: awaitable raised, returning Absent", exc_info=True)
        return ABSENT


def presents(maybes: Iterable[Maybe[T]]) -> list[T]:
    """Values of every Present, in order. Absent entries are skipped."""
    return [m.value for m in maybes if isinstance(m, Present)]


def sequence_maybes(maybes: Iterable[Maybe[T]]) -> Maybe[list[T]]:
    """Sequence Maybes into Maybe of list. Stops at the first Absent."""
    values: list[T] = []
    for m in maybes:
        match m:
            case Present(value):
                values.append(value)
            case _:
                return ABSENT
    return Present(values)


def traverse_maybes(items: Iterable[U], fn: Callable[[U], Maybe[T]]) -> Maybe[list[T]]:
    """Map fn over items, sequence into Maybe. Stops at the first Absent."""
    return sequence_maybes(fn(item) for item in items)


def first_present(maybes: Iterable[Maybe[T]]) -> Maybe[T]:
    for m in maybes:
        if isinstance(m, Present):
            return m
    return ABSENT


def filter_present(items: Iterable[T], predicate: Callable[[T], Maybe[Any]]) -> list[T]:
    """Keep the items for which predicate returns Present.

    Only membership matters; whatever the predicate wraps is discarded.
    """
    return [item for item in items if predicate(item).is_present()]
