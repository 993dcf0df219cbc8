# ordering.py
#
# The ordering predicate and the sequence model shared by all three engines.
from enum import Enum


class _ParsableEnum(Enum):

    @classmethod
    def parse(cls, value):
        """Accept a member, its value or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.name.lower()) or text in member.aliases():
                return member
        raise ValueError(f"Unknown {cls.__name__}: {value!r}")

    def aliases(self):
        return ()


class OrderDirection(_ParsableEnum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def aliases(self):
        return ("ascending",) if self is OrderDirection.ASCENDING else ("descending",)


class ConvergenceDirection(_ParsableEnum):
    """Which end of the sequence the settled region grows from."""
    LEFT = "left"
    RIGHT = "right"


def precedes(a, b, order: OrderDirection = OrderDirection.ASCENDING) -> bool:
    """True when `a` must come strictly before `b` under `order`. Equal values never precede."""
    if order is OrderDirection.ASCENDING:
        return a < b
    return a > b


def is_ordered(values, order: OrderDirection = OrderDirection.ASCENDING) -> bool:
    return all(
        a == b or precedes(a, b, order)
        for a, b in zip(values, values[1:])
    )


class SortSequence:
    """
    The mutable values of one quiz session plus the two policies that decide
    what "sorted" means for it. Engines own their SortSequence exclusively and
    mutate it only through `swap` and `move`.
    """

    def __init__(self, values, order=OrderDirection.ASCENDING, convergence=ConvergenceDirection.RIGHT):
        self.values = list(values)
        self.order = OrderDirection.parse(order)
        self.convergence = ConvergenceDirection.parse(convergence)

    def __len__(self):
        return len(self.values)

    def __getitem__(self, index):
        return self.values[index]

    def __iter__(self):
        return iter(self.values)

    def __repr__(self):
        return f"SortSequence({self.values!r}, order={self.order.value}, convergence={self.convergence.value})"

    @property
    def converges_left(self) -> bool:
        return self.convergence is ConvergenceDirection.LEFT

    def precedes(self, a, b) -> bool:
        return precedes(a, b, self.order)

    def swap(self, i: int, j: int):
        self.values[i], self.values[j] = self.values[j], self.values[i]

    def move(self, from_index: int, to_index: int) -> int:
        """
        Remove the value at `from_index` and reinsert it so that it lands in front
        of whatever currently sits at insertion position `to_index`. Returns the
        index the value ends up at.
        """
        value = self.values.pop(from_index)
        if to_index > from_index:
            to_index -= 1
        self.values.insert(to_index, value)
        return to_index

    def is_ordered(self) -> bool:
        return is_ordered(self.values, self.order)

    def snapshot(self) -> tuple:
        return tuple(self.values)
