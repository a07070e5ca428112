import abc
import bz2
import gzip
import io
import os

# Magic numbers of the compressed formats accepted for annotation files
_compressed_formats = (
    (b"\x1f\x8b\x08", ".gz", gzip.open),
    (b"\x42\x5a\x68", ".bz2", bz2.open),
)


def open_annotation(filename):
    """
    Open an annotation file in text mode, decompressing it on the fly if it is
    gzip- or bzip2-compressed. Compression is recognised from the extension or
    from the first bytes of the file.

    :param filename: name of the file
    :type filename: (str|bytes|os.PathLike)
    :rtype: io.TextIOBase
    """

    filename = os.fsdecode(filename)
    if not os.path.exists(filename):
        raise FileNotFoundError("File not found: {0}".format(filename))
    with open(filename, "rb") as raw:
        start = raw.read(max(len(magic) for magic, _, _ in _compressed_formats))
    for magic, extension, opener in _compressed_formats:
        if filename.endswith(extension) or start.startswith(magic):
            return opener(filename, "rt")
    return open(filename, "rt", buffering=1)


class Parser(metaclass=abc.ABCMeta):
    """Generic iterator over the lines of an annotation file. Base parser class."""

    def __init__(self, handle):
        self.__closed = False
        if not isinstance(handle, io.IOBase):
            handle = open_annotation(handle)
        self._handle = handle

    def __iter__(self):
        return self

    @abc.abstractmethod
    def __next__(self):
        pass

    def __enter__(self):
        if self.closed is True:
            raise ValueError('I/O operation on closed file.')
        return self

    def __exit__(self, *args):
        _ = args
        self._handle.close()
        self.closed = True

    def close(self):
        """
        Alias for __exit__
        """
        self.__exit__()

    @property
    def name(self):
        """
        Name of the file being parsed, None for anonymous handles.
        """
        return getattr(self._handle, "name", None)

    @property
    def closed(self):
        """
        Boolean flag. If True, the file has been closed already.
        """
        return self.__closed

    @closed.setter
    def closed(self, value):
        if not isinstance(value, bool):
            raise TypeError("Invalid value: {0}".format(value))
        self.__closed = value
