# -*- coding: utf-8 -*-

# Copyright 2006 Joe Wreschnig
#           2014 Ben Ockmore
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License version 2 as
# published by the Free Software Foundation.

"""Utility classes for id3kit.

You should not rely on the interfaces here being stable. They are
intended for internal use in id3kit only.
"""

from collections.abc import MutableSequence


class ListProxy(MutableSequence):
    """A list-like base class.

    Subclasses can override `_convert` to normalize every item that is
    stored, whether through assignment, insert, append or extend.
    """

    def __init__(self, items=()):
        self.__list = []
        self.extend(items)

    def _convert(self, value):
        return value

    def __getitem__(self, index):
        return self.__list[index]

    def __setitem__(self, index, value):
        if isinstance(index, slice):
            self.__list[index] = [self._convert(v) for v in value]
        else:
            self.__list[index] = self._convert(value)

    def __delitem__(self, index):
        del(self.__list[index])

    def __len__(self):
        return len(self.__list)

    def insert(self, index, value):
        self.__list.insert(index, self._convert(value))

    def __eq__(self, other):
        if not isinstance(other, (ListProxy, list)):
            return NotImplemented
        return list(self) == list(other)

    __hash__ = None

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, self.__list)


def lock(fileobj):
    """Lock a file object 'safely'.

    That means a failure to lock because the platform doesn't
    support fcntl or filesystem locks is not considered a
    failure. This call does block.

    Returns whether or not the lock was successful, or
    raises an exception in more extreme circumstances (full
    lock table, invalid file).
    """

    try:
        import fcntl
    except ImportError:
        return False
    else:
        try:
            fcntl.lockf(fileobj, fcntl.LOCK_EX)
        except IOError:
            return False
        else:
            return True


def unlock(fileobj):
    """Unlock a file object.

    Don't call this on a file object unless a call to lock()
    returned true.
    """

    import fcntl
    fcntl.lockf(fileobj, fcntl.LOCK_UN)


def insert_bytes(fobj, size, offset, BUFFER_SIZE=2**16):
    """Insert size bytes of empty space starting at offset.

    fobj must be an open file object, open rb+ or equivalent. The data
    after offset is moved back to front in BUFFER_SIZE chunks.
    """

    assert 0 < size
    assert 0 <= offset
    locked = lock(fobj)
    try:
        fobj.seek(0, 2)
        filesize = fobj.tell()
        movesize = filesize - offset
        if movesize < 0:
            raise ValueError("offset {} past the end of the file".format(
                             offset))
        fobj.write(b'\x00' * size)

        end = filesize
        while movesize:
            chunk = min(BUFFER_SIZE, movesize)
            end -= chunk
            fobj.seek(end)
            data = fobj.read(chunk)
            fobj.seek(end + size)
            fobj.write(data)
            movesize -= chunk
        fobj.flush()
    finally:
        if locked:
            unlock(fobj)


def delete_bytes(fobj, size, offset, BUFFER_SIZE=2**16):
    """Delete size bytes of data starting at offset.

    fobj must be an open file object, open rb+ or equivalent.
    """

    assert 0 < size
    assert 0 <= offset
    locked = lock(fobj)
    try:
        fobj.seek(0, 2)
        filesize = fobj.tell()
        assert 0 <= filesize - offset - size

        fobj.seek(offset + size)
        buf = fobj.read(BUFFER_SIZE)
        while buf:
            fobj.seek(offset)
            fobj.write(buf)
            offset += len(buf)
            fobj.seek(offset + size)
            buf = fobj.read(BUFFER_SIZE)
        fobj.truncate(filesize - size)
        fobj.flush()
    finally:
        if locked:
            unlock(fobj)
