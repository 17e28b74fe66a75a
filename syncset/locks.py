import contextlib
import threading


__all__ = ('ReadWriteLock',)


class ReadWriteLock:
    """Shared/exclusive lock: any number of readers or a single writer.

    The lock is not reentrant.  A thread holding it in either mode must
    not try to acquire it again, in any mode.  Ownership is not tracked,
    so any thread may release a mode that some thread acquired.
    """

    __slots__ = ('_cond', '_state')

    def __init__(self):
        self._cond = threading.Condition()
        # Number of readers holding the lock, or -1 while a writer does.
        self._state = 0

    @property
    def readers(self):
        return max(self._state, 0)

    @property
    def writer(self):
        return self._state < 0

    def acquire_read(self):
        with self._cond:
            self._cond.wait_for(lambda: self._state >= 0)
            self._state += 1

    def release_read(self):
        with self._cond:
            if self._state <= 0:
                raise RuntimeError('release_read() without acquire_read()')
            self._state -= 1
            if self._state == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._cond.wait_for(lambda: self._state == 0)
            self._state = -1

    def release_write(self):
        with self._cond:
            if self._state != -1:
                raise RuntimeError('release_write() without acquire_write()')
            self._state = 0
            self._cond.notify_all()

    @contextlib.contextmanager
    def shared(self):
        self.acquire_read()
        try:
            yield self
        finally:
            self.release_read()

    @contextlib.contextmanager
    def exclusive(self):
        self.acquire_write()
        try:
            yield self
        finally:
            self.release_write()

    def __repr__(self):
        state = self._state
        if state < 0:
            desc = 'writing'
        elif state:
            desc = 'reading({})'.format(state)
        else:
            desc = 'unlocked'
        return '<syncset.ReadWriteLock {} at 0x{:0x}>'.format(desc, id(self))
