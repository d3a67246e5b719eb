from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Callable, Generic, Iterable, Literal, ParamSpec, TypeVar, cast

from typing_extensions import TypeIs

from eitherway._log import logger
from eitherway.maybe import ABSENT, Maybe, Present

F = TypeVar("F")  # Failure reason
S = TypeVar("S")  # Success value
U = TypeVar("U")  # Mapped success / folded result
G = TypeVar("G")  # Mapped failure
P = ParamSpec("P")


class Either(ABC, Generic[F, S]):
    """A disjoint result: either Success(value) or Failure(reason).

    Failure is the first type parameter, Success the second. Success-side
    combinators pass a Failure through untouched without calling their
    function, and vice versa for map_failure and recover.
    """

    __slots__ = ()

    @abstractmethod
    def is_success(self) -> bool: ...

    def is_failure(self) -> bool:
        return not self.is_success()

    def map(self, fn: Callable[[S], U]) -> Either[F, U]:
        if isinstance(self, Success):
            return Success(fn(self.value))
        return cast(Either[F, U], self)

    def map_failure(self, fn: Callable[[F], G]) -> Either[G, S]:
        if isinstance(self, Failure):
            return Failure(fn(self.reason))
        return cast(Either[G, S], self)

    def bind(self, fn: Callable[[S], Either[F, U]]) -> Either[F, U]:
        return fn(self.value) if isinstance(self, Success) else cast(Either[F, U], self)

    def recover(self, fn: Callable[[F], Either[G, S]]) -> Either[G, S]:
        """Replace a Failure with the Either fn builds from its reason."""
        return fn(self.reason) if isinstance(self, Failure) else cast(Either[G, S], self)

    def fold(self, on_failure: Callable[[F], U], on_success: Callable[[S], U]) -> U:
        """Collapse both branches into one value."""
        if isinstance(self, Success):
            return on_success(self.value)
        return on_failure(cast(Failure[F], self).reason)

    def fold_or(self, default: U, on_success: Callable[[S], U]) -> U:
        """Like fold, but a Failure yields default without looking at the reason."""
        return on_success(self.value) if isinstance(self, Success) else default

    def otherwise(self, default: S) -> S:
        return self.value if isinstance(self, Success) else default

    from_success = otherwise

    def from_failure(self, default: F) -> F:
        return self.reason if isinstance(self, Failure) else default

    def on_success(self, fn: Callable[[S], Any]) -> Either[F, S]:
        """Run fn on the Success value for side effects, return self unchanged."""
        if isinstance(self, Success):
            fn(self.value)
        return self

    def on_failure(self, fn: Callable[[F], Any]) -> Either[F, S]:
        """Run fn on the Failure reason for side effects, return self unchanged."""
        if isinstance(self, Failure):
            fn(self.reason)
        return self

    def to_maybe(self) -> Maybe[S]:
        """Present(value) for a Success; Absent for a Failure, dropping the reason."""
        return Present(self.value) if isinstance(self, Success) else ABSENT

    async def map_async(self, fn: Callable[[S], Awaitable[U]]) -> Either[F, U]:
        if isinstance(self, Success):
            return Success(await fn(self.value))
        return cast(Either[F, U], self)

    async def bind_async(self, fn: Callable[[S], Awaitable[Either[F, U]]]) -> Either[F, U]:
        if isinstance(self, Success):
            return await fn(self.value)
        return cast(Either[F, U], self)

    async def fold_async(self, on_failure: Callable[[F], U], on_success: Callable[[S], Awaitable[U]]) -> U:
        """Await on_success on a Success. on_failure is a plain function."""
        if isinstance(self, Success):
            return await on_success(self.value)
        return on_failure(cast(Failure[F], self).reason)

    async def fold_or_async(self, default: U, on_success: Callable[[S], Awaitable[U]]) -> U:
        return await on_success(self.value) if isinstance(self, Success) else default


class Success(Either[Any, S]):
    __slots__ = ("_value",)
    __match_args__ = ("value",)

    def __init__(self, value: S) -> None:
        self._value = value

    @property
    def value(self) -> S:
        return self._value

    def __repr__(self) -> str:
        return f"Success({self._value!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Success) and self._value == other._value

    def __hash__(self) -> int:
        return hash(("Success", self._value))

    def is_success(self) -> Literal[True]:
        return True

    def is_failure(self) -> Literal[False]:
        return False


class Failure(Either[F, Any]):
    __slots__ = ("_reason",)
    __match_args__ = ("reason",)

    def __init__(self, reason: F) -> None:
        self._reason = reason

    @property
    def reason(self) -> F:
        return self._reason

    def __repr__(self) -> str:
        return f"Failure({self._reason!r})"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Failure) and self._reason == other._reason

    def __hash__(self) -> int:
        return hash(("Failure", self._reason))

    def is_success(self) -> Literal[False]:
        return False

    def is_failure(self) -> Literal[True]:
        return True


def is_success(either: Either[F, S]) -> TypeIs[Success[S]]:
    return either.is_success()


def is_failure(either: Either[F, S]) -> TypeIs[Failure[F]]:
    return either.is_failure()


def either_from_nullable(value: S | None, reason: F) -> Either[F, S]:
    """Success(value) unless value is None, in which case Failure(reason)."""
    return Failure(reason) if value is None else Success(value)


def either_from_try(fn: Callable[P, S], reason: F, /, *args: P.args, **kwargs: P.kwargs) -> Either[F, S]:
    """Call fn, turning any raised Exception into Failure(reason).

    The reason is always the one supplied here, never the raised exception.
    """
    try:
        return Success(fn(*args, **kwargs))
    except Exception:
        logger.debug("either_from_try: %r raised, returning Failure(%r)", fn, reason, exc_info=True)
        return Failure(reason)


async def either_from_awaitable(awaitable: Awaitable[S]) -> Either[Exception, S]:
    """Await awaitable. A raised Exception becomes the Failure reason."""
    try:
        return Success(await awaitable)
    except Exception as exc:
        logger.debug("either_from_awaitable: awaitable raised %r", exc, exc_info=True)
        return Failure(exc)


def successes(eithers: Iterable[Either[F, S]]) -> list[S]:
    return [e.value for e in eithers if isinstance(e, Success)]


def failures(eithers: Iterable[Either[F, S]]) -> list[F]:
    return [e.reason for e in eithers if isinstance(e, Failure)]


def successes_or(eithers: Iterable[Either[F, S]], reason: F) -> Either[F, list[S]]:
    """Success of every success value, as long as there is at least one.

    Failures are dropped. Failure(reason) only when nothing succeeded.
    """
    values = successes(eithers)
    if not values:
        return Failure(reason)
    return Success(values)


def sequence_eithers(eithers: Iterable[Either[F, S]]) -> Either[F, list[S]]:
    """Sequence Eithers into Either of list. Returns the first Failure as-is."""
    values: list[S] = []
    for e in eithers:
        match e:
            case Success(value):
                values.append(value)
            case _:
                return e
    return Success(values)


def traverse_eithers(items: Iterable[U], fn: Callable[[U], Either[F, S]]) -> Either[F, list[S]]:
    """Map fn over items, sequence into Either. Fails fast on first Failure."""
    return sequence_eithers(fn(item) for item in items)


def first_success(eithers: Iterable[Either[F, S]], reason: F) -> Either[F, S]:
    for e in eithers:
        if isinstance(e, Success):
            return e
    return Failure(reason)
