"""Common routines for alnio that fit nowhere else."""

__author__  = "Tamas Nepusz"
__email__   = "tamas@cs.rhul.ac.uk"
__copyright__ = "Copyright (c) 2010, Tamas Nepusz"
__license__ = "GPL"

__all__ = ["compression_suffix", "is_stdio", "open_anything", "sidecar_path"]

import bz2
import io
import gzip
import lzma
import os
import sys

#: Maps file name suffixes to the functions opening compressed files
COMPRESSORS = {
    ".bz2": bz2.open,
    ".gz": gzip.open,
    ".xz": lzma.open,
}

URL_PREFIXES = ("http://", "https://", "ftp://")


def is_stdio(fname):
    """Returns whether `fname` denotes the standard input or output."""
    return fname == "-"


def compression_suffix(fname):
    """Returns the suffix of `fname` that selects transparent compression,
    or an empty string if the file is not compressed."""
    for suffix in COMPRESSORS:
        if fname.endswith(suffix):
            return suffix
    return ""


def open_anything(fname, mode="r", **kwds):
    """Opens the given file. The file may be given as a file object
    or a filename. If the filename ends in ``.bz2``, ``.gz`` or ``.xz``,
    it will automatically be (de)compressed on the fly. If the filename
    starts with ``http://``, ``https://`` or ``ftp://`` and the file is
    opened for reading, the remote URL will be opened. A single dash in
    place of the filename means the standard input (when reading) or the
    standard output (when writing).

    Files are opened in text mode unless `mode` contains ``b``, in which
    case the returned object yields bytes. Extra keyword arguments
    (``encoding``, ``newline`` and so on) are passed on to the underlying
    opener. `IOError` is raised if the file cannot be opened.
    """
    if not isinstance(fname, (str, bytes, os.PathLike)):
        return fname

    fname = os.fsdecode(fname)
    binary = "b" in mode
    reading = "r" in mode

    if is_stdio(fname):
        stream = sys.stdin if reading else sys.stdout
        return stream.buffer if binary else stream

    if reading and fname.startswith(URL_PREFIXES):
        from urllib.request import urlopen
        infile = urlopen(fname)
        if binary:
            return infile
        return io.TextIOWrapper(infile, **kwds)

    opener = COMPRESSORS.get(compression_suffix(fname))
    if opener is not None:
        if not binary and "t" not in mode:
            mode += "t"
        return opener(fname, mode, **kwds)

    return open(fname, mode, **kwds)


def sidecar_path(fname, suffix=".csv"):
    """Returns the name of the companion file of `fname` that shares its
    base name but has the given suffix. A compression suffix of `fname`
    is carried over to the companion file::

        >>> sidecar_path("aligned.fasta")
        'aligned.csv'
        >>> sidecar_path("out/aligned.fa.gz")
        'out/aligned.csv.gz'
    """
    fname = os.fsdecode(fname)
    compressed = compression_suffix(fname)
    if compressed:
        fname = fname[:-len(compressed)]
    base, _ = os.path.splitext(fname)
    return base + suffix + compressed
