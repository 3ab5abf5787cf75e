from dataclasses import dataclass


class UnwrapError(Exception):
    """Raised when unwrap() is called on an Err."""


@dataclass(frozen=True, slots=True)
class Ok[T]:
    value: T

    def is_ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value


@dataclass(frozen=True, slots=True)
class Err[E]:
    error: E

    def is_ok(self) -> bool:
        return False

    def unwrap(self) -> object:
        raise UnwrapError(f"Called unwrap on Err value: {self.error}")


type Result[T, E] = Ok[T] | Err[E]
