# -*- coding: utf-8 -*-
import os
import sys

from subshift.constants import RESYNC_SUFFIX


class open_file:
    """
    Context manager that opens a filename and closes it on exit, but does
    nothing for file-like objects. A filename of None means stdin / stdout.
    """

    def __init__(self, filename, *args, **kwargs) -> None:
        self.closing = kwargs.pop('closing', False)
        if filename is None:
            mode = args[0] if args else kwargs.get('mode', 'r')
            stream = sys.stdout if 'w' in mode else sys.stdin
            self.fh = open(stream.fileno(), *args, closefd=False, **kwargs)
            self.closing = True
        elif isinstance(filename, (str, os.PathLike)):
            self.fh = open(filename, *args, **kwargs)
            self.closing = True
        else:
            self.fh = filename

    def __enter__(self):
        return self.fh

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.closing:
            self.fh.close()

        return False


def make_resync_filename(fname: str) -> str:
    """movie.srt -> movie-resync.srt"""
    root, ext = os.path.splitext(fname)
    return '{}{}{}'.format(root, RESYNC_SUFFIX, ext)
