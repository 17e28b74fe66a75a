import collections.abc
import contextlib
import reprlib

from .locks import ReadWriteLock


__all__ = ('Set',)


# Members live in a dict mapping each value to None.  Every method that
# reads the dict holds the set's lock in shared mode, every method that
# changes it holds the lock in exclusive mode.  Methods taking a second
# Set read-lock both operands, in id() order, before touching either.


def _contains_all(members, values):
    for value in values:
        if value not in members:
            return False
    return True


def _not_implemented(self, other):
    return NotImplemented


class Set(collections.abc.Set):

    def __init__(self, col=None):
        self.__members = {}
        self.__lock = ReadWriteLock()

        if col is not None:
            self.__members = dict.fromkeys(col)

    @classmethod
    def _new(cls, members):
        s = cls.__new__(cls)
        s.__members = members
        s.__lock = ReadWriteLock()
        return s

    @contextlib.contextmanager
    def _reading(self, other):
        if not isinstance(other, Set):
            raise TypeError(
                'expected a {} operand, got {}'.format(
                    Set.__name__, type(other).__name__))

        if other is self:
            with self.__lock.shared():
                yield
            return

        first, second = self, other
        if id(first) > id(second):
            first, second = second, first

        with first.__lock.shared(), second.__lock.shared():
            yield

    # Mutation

    def insert(self, *values):
        with self.__lock.exclusive():
            members = self.__members
            for value in values:
                members[value] = None

    def delete(self, *values):
        with self.__lock.exclusive():
            members = self.__members
            for value in values:
                members.pop(value, None)

    def clear(self):
        with self.__lock.exclusive():
            self.__members.clear()

    def pop_any(self):
        """Remove some member and return ``(member, True)``.

        Which member is removed is up to the implementation; it is neither
        random nor stable across calls.  An empty set returns
        ``(None, False)``.
        """
        with self.__lock.exclusive():
            if not self.__members:
                return None, False
            value, _ = self.__members.popitem()
            return value, True

    # Queries

    def has(self, value):
        with self.__lock.shared():
            return value in self.__members

    __contains__ = has

    def has_all(self, *values):
        with self.__lock.shared():
            return _contains_all(self.__members, values)

    def has_any(self, *values):
        with self.__lock.shared():
            members = self.__members
            for value in values:
                if value in members:
                    return True
            return False

    def __len__(self):
        with self.__lock.shared():
            return len(self.__members)

    def values(self):
        """Return a new list holding every member, in no particular order."""
        with self.__lock.shared():
            return list(self.__members)

    def __iter__(self):
        return iter(self.values())

    # Algebra

    def clone(self):
        with self.__lock.shared():
            return self._new(dict(self.__members))

    __copy__ = clone

    def union(self, other):
        with self._reading(other):
            members = dict(self.__members)
            members.update(other.__members)
        return self._new(members)

    def intersection(self, other):
        with self._reading(other):
            walk, probe = self.__members, other.__members
            if len(walk) > len(probe):
                walk, probe = probe, walk
            members = {value: None for value in walk if value in probe}
        return self._new(members)

    def difference(self, other):
        with self._reading(other):
            exclude = other.__members
            members = {value: None for value in self.__members
                       if value not in exclude}
        return self._new(members)

    def symmetric_difference(self, other):
        with self._reading(other):
            left, right = self.__members, other.__members
            members = {value: None for value in left if value not in right}
            members.update(
                (value, None) for value in right if value not in left)
        return self._new(members)

    def is_superset(self, other):
        with self._reading(other):
            members, values = self.__members, other.__members
            if len(values) > len(members):
                return False
            return _contains_all(members, values)

    def is_subset(self, other):
        with self._reading(other):
            members, values = other.__members, self.__members
            if len(values) > len(members):
                return False
            return _contains_all(members, values)

    def is_disjoint(self, other):
        with self._reading(other):
            walk, probe = self.__members, other.__members
            if len(walk) > len(probe):
                walk, probe = probe, walk
            for value in walk:
                if value in probe:
                    return False
            return True

    def isdisjoint(self, other):
        if isinstance(other, Set):
            return self.is_disjoint(other)

        values = list(other)
        with self.__lock.shared():
            members = self.__members
            for value in values:
                if value in members:
                    return False
            return True

    def equal(self, other):
        with self._reading(other):
            members, values = self.__members, other.__members
            return (len(members) == len(values) and
                    _contains_all(members, values))

    # Operators accept Set operands only.

    def __or__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return self.union(other)

    def __and__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return self.intersection(other)

    def __sub__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return self.difference(other)

    def __xor__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return self.symmetric_difference(other)

    __ror__ = __rand__ = __rsub__ = __rxor__ = _not_implemented

    def __eq__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return self.equal(other)

    __hash__ = None

    def __le__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return self.is_subset(other)

    def __lt__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        with self._reading(other):
            members, values = other.__members, self.__members
            return (len(values) < len(members) and
                    _contains_all(members, values))

    def __ge__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        return self.is_superset(other)

    def __gt__(self, other):
        if not isinstance(other, Set):
            return NotImplemented
        with self._reading(other):
            members, values = self.__members, other.__members
            return (len(values) < len(members) and
                    _contains_all(members, values))

    # Display and pickling

    @reprlib.recursive_repr('{...}')
    def __str__(self):
        return '{{{}}}'.format(', '.join(repr(v) for v in self.values()))

    def __repr__(self):
        return '<syncset.Set({}) at 0x{:0x}>'.format(str(self), id(self))

    def __reduce__(self):
        return (type(self), (self.values(),))

    def __class_getitem__(cls, item):
        return cls
