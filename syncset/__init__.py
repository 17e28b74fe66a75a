from .locks import ReadWriteLock
from .set import Set


__all__ = ('Set', 'ReadWriteLock')

__version__ = '0.1.0'
