from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


class StateCell(Generic[T]):
    """Holds the latest value of one output and notifies observers on every write."""

    def __init__(self, value: T = None):
        self._value = value
        self._observers: list[Callable[[T], Any]] = []

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, value: T):
        self._value = value
        for observer in list(self._observers):
            observer(value)

    def subscribe(self, observer: Callable[[T], Any]) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe():
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe
