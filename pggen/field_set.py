"""A set of field positions used to select a subset of a record's fields."""

from __future__ import annotations

from collections.abc import Iterator


class FieldSet:
    """A growable bitset that names a subset of fields by position.

    A FieldSet is mutable and shared by reference. Use :meth:`clone` for an
    independent copy.
    """

    __slots__ = ("_bits",)

    def __init__(self, length_hint: int = 0) -> None:
        if length_hint < 0:
            raise ValueError(f"length hint must not be negative: {length_hint}")
        self._bits = 0

    @classmethod
    def filled(cls, length: int) -> FieldSet:
        """Return a field set with the first ``length`` bits set."""
        fs = cls(length)
        fs._bits = (1 << length) - 1
        return fs

    def clone(self) -> FieldSet:
        """Return a deep copy of this field set."""
        copy = FieldSet()
        copy._bits = self._bits
        return copy

    def set(self, bit: int, value: bool) -> FieldSet:
        """Set the bit at position ``bit`` to ``value``. Returns self for chaining."""
        if bit < 0:
            raise ValueError(f"bit position must not be negative: {bit}")
        if value:
            self._bits |= 1 << bit
        else:
            self._bits &= ~(1 << bit)
        return self

    def test(self, bit: int) -> bool:
        """Return the value of the given bit."""
        if bit < 0:
            return False
        return bool((self._bits >> bit) & 1)

    def count_set_bits(self) -> int:
        """Return the number of bits set to one."""
        return bin(self._bits).count("1")

    def intersection(self, other: FieldSet) -> FieldSet:
        """Return a new field set holding the bits set in both sets."""
        result = FieldSet()
        result._bits = self._bits & other._bits
        return result

    def __iter__(self) -> Iterator[int]:
        bits, position = self._bits, 0
        while bits:
            if bits & 1:
                yield position
            bits >>= 1
            position += 1

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FieldSet):
            return NotImplemented
        return self._bits == other._bits

    def __hash__(self) -> int:
        return hash(self._bits)

    def __repr__(self) -> str:
        return f"FieldSet({sorted(self)})"