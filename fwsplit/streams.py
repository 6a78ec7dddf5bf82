import io
import logging
import os

from .exceptions import StreamException


logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096


class Stream(object):
    '''This is a simple wrapper around path/bytes/file object to
    uniform its properties: mainly we need to move chunks of bytes
    from and to it, updating a digest along the way.

    Any OSError from the underlying object is raised as StreamException.'''
    def __init__(self, obj, flags='rb'):
        '''Here we normalize the object in order to be accessed as a normal file object'''
        if isinstance(obj, os.PathLike):
            obj = os.fspath(obj)

        self.flags = flags
        self.obj = obj
        self.name = obj if isinstance(obj, str) else getattr(obj, 'name', obj.__class__.__name__)

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, self.init_file)

        init_method()

    def __getattr__(self, name):
        return getattr(self.obj, name)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        self.obj.close()

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\' (%s)' % (self.obj, self.flags))
        try:
            self.obj = open(self.obj, self.flags)
        except OSError as e:
            raise StreamException(f'cannot open \'{self.name}\': {e}') from e

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = io.BytesIO(self.obj)

    def init_file(self):
        '''Already a file-like object'''
        pass

    def seek(self, offset):
        if not isinstance(offset, int):
            raise ValueError('\'%s\' is the wrong kind of offset to use' % offset.__class__.__name__)

        try:
            self.obj.seek(offset)
        except (OSError, OverflowError, ValueError) as e:
            raise StreamException(f'cannot seek \'{self.name}\' at 0x{offset:x}: {e}') from e

        return self

    def read(self, size=-1):
        try:
            return self.obj.read(size)
        except OSError as e:
            raise StreamException(f'cannot read from \'{self.name}\': {e}') from e

    def write(self, data):
        try:
            return self.obj.write(data)
        except OSError as e:
            raise StreamException(f'cannot write to \'{self.name}\': {e}') from e

    def truncate(self, size):
        try:
            return self.obj.truncate(size)
        except (OSError, OverflowError, ValueError) as e:
            raise StreamException(f'cannot resize \'{self.name}\' to 0x{size:x}: {e}') from e

    def copy_to(self, dst, size=None, digest=None, chunk_size=CHUNK_SIZE):
        '''Copy at most size bytes (all the remaining ones if None) from the actual
        position to the destination. It stops at the end of the stream without
        complaining; it returns the number of bytes copied.'''
        copied = 0
        while size is None or copied < size:
            to_read = chunk_size if size is None else min(size - copied, chunk_size)
            data = self.read(to_read)
            if not data:
                break

            dst.write(data)
            if digest is not None:
                digest.update(data)
            copied += len(data)

        return copied

    def fill(self, byte, size, digest=None, chunk_size=CHUNK_SIZE):
        '''Write size times the given byte from the actual position.'''
        chunk = bytes([byte]) * chunk_size
        remaining = size
        while remaining > 0:
            data = chunk[:min(remaining, chunk_size)]
            self.write(data)
            if digest is not None:
                digest.update(data)
            remaining -= len(data)

        return max(size, 0)
