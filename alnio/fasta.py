"""This module contains routines for parsing and writing FASTA files.

The parser understands the usual FASTA framing (a ``>`` title line followed
by sequence lines) extended with ``;key=value`` comment lines right after
the title, which are turned into attributes of the parsed `SeqRecord`.
It can also be restricted to a byte range of the input file, which makes
it possible to split one large file among several independent readers.

The writer emits aligned sequences with their attributes either in the
title line, in comment lines, in a CSV file next to the FASTA output, or
not at all.
"""

__author__  = "Tamas Nepusz"
__email__   = "tamas@cs.rhul.ac.uk"
__copyright__ = "Copyright (c) 2010, Tamas Nepusz"
__license__ = "GPL"

__all__ = ["FastaOptions", "MetaFormat", "Parser", "Writer"]

import os

from collections import namedtuple
from enum import Enum

from alnio import csvfile
from alnio.config import ConfigurationError
from alnio.log import get_logger
from alnio.sequence import (SeqRecord, InvalidCharacterError, format_value,
                            FAMILY, FULL_NAME)
from alnio.tray import Tray
from alnio.utils import is_stdio, open_anything, sidecar_path


class MetaFormat(Enum):
    """Formats in which the FASTA writer can emit the attributes of a
    sequence."""

    NONE = "none"
    HEADER = "header"
    COMMENT = "comment"
    CSV = "csv"

    @classmethod
    def parse(cls, value):
        """Returns the format with the given name (case insensitive).
        Raises `ConfigurationError` for unknown names."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ConfigurationError("meta data format must be one of 'none', "
                                     "'header', 'comment' or 'csv', got %r"
                                     % (value, ))

    def __str__(self):
        return self.value


class FastaOptions(namedtuple("FastaOptions",
        "meta_format line_length min_identity write_dna use_dots "
        "block_size block_index")):
    """Immutable set of options for the FASTA reader and writer.

    - ``meta_format``: how the writer emits attributes (a `MetaFormat`)
    - ``line_length``: wrap sequence lines at this width; zero or a
      negative number means no wrapping
    - ``min_identity``: the writer skips sequences whose identity score
      is below this value
    - ``write_dna``: write ``T`` instead of ``U``
    - ``use_dots``: write dots instead of dashes outside the aligned region
    - ``block_size``, ``block_index``: restrict the reader to the sequences
      starting in the given block of the input file
    """

    __slots__ = ()

    def __new__(cls, meta_format=MetaFormat.NONE, line_length=0,
                min_identity=0.0, write_dna=False, use_dots=False,
                block_size=0, block_index=0):
        return super(FastaOptions, cls).__new__(cls,
                MetaFormat.parse(meta_format), int(line_length),
                float(min_identity), bool(write_dna), bool(use_dots),
                int(block_size), int(block_index))

    @classmethod
    def from_options(cls, options):
        """Creates an instance from command line options parsed by
        `alnio.scripts.reformat.FastaReformatApp`."""
        return cls(meta_format=options.meta_format,
                   line_length=options.line_length,
                   min_identity=options.min_identity,
                   write_dna=options.write_dna,
                   use_dots=options.use_dots,
                   block_size=options.block_size,
                   block_index=options.block_index)


def _is_seekable(handle):
    seekable = getattr(handle, "seekable", None)
    return bool(seekable and seekable())


class Parser(object):
    """Parser for FASTA files.

    Usage example::

        parser = Parser("test.fasta")
        for record in parser:
            print(record.name, record.bases)
        parser.close()

    When `block_size` is positive, the parser reads only those sequences
    whose title line starts in the byte range ``[block_size*block_index,
    block_size*(block_index+1))`` of the file. The last sequence is always
    read completely, even if it extends beyond the end of the block. Running
    parsers for blocks 0, 1, 2... of the same file therefore yields every
    sequence of the file exactly once. Blocks require a seekable input;
    offsets refer to the uncompressed data of compressed files.

    Sequences with invalid characters are skipped with a warning; the
    caller only ever sees valid sequences.
    """

    def __init__(self, handle, block_size=0, block_index=0, logger=None):
        if block_size < 0 or block_index < 0:
            raise ConfigurationError("block size and block index must not "
                                     "be negative")
        if block_size > 0 and isinstance(handle, str) and is_stdio(handle):
            raise ConfigurationError("cannot read blocks from the "
                                     "standard input")

        self.log = logger or get_logger(__name__)
        self._owns_handle = isinstance(handle, (str, bytes, os.PathLike)) \
                and not is_stdio(os.fsdecode(handle))
        self.handle = open_anything(handle, "rb")

        self.lineno = 0
        self.seqno = 0
        self.rejected = 0
        self.offset = 0
        self.upper_bound = None
        self._pushback = None
        self._finished = False
        self._closed = False

        if block_size > 0:
            if not _is_seekable(self.handle):
                self._close_handle()
                raise ConfigurationError("cannot read blocks from a "
                                         "non-seekable input")
            self.upper_bound = block_size * (block_index + 1)
            lower_bound = block_size * block_index
            if lower_bound > 0:
                # Drop the partial line the block starts in
                self.handle.seek(lower_bound - 1)
                self.handle.readline()
        if _is_seekable(self.handle):
            self.offset = self.handle.tell()

    @classmethod
    def with_options(cls, handle, options, logger=None):
        """Creates a parser using the block settings of the given
        `FastaOptions`."""
        return cls(handle, options.block_size, options.block_index,
                   logger=logger)

    @property
    def produced(self):
        """The number of sequences returned to the caller so far"""
        return self.seqno - self.rejected

    def _read_line(self):
        """Returns the next line of the input with its offset. The line
        is an empty string at the end of the input."""
        if self._pushback is not None:
            result, self._pushback = self._pushback, None
            return result

        offset = self.offset
        line = self.handle.readline()
        if not line:
            return offset, ""
        self.offset += len(line)
        self.lineno += 1
        if isinstance(line, bytes):
            line = line.decode("utf-8", "replace")
        return offset, line

    def _unread_line(self, offset, line):
        self._pushback = (offset, line)

    def _position(self):
        if self._pushback is not None:
            return self._pushback[0]
        return self.offset

    def _beyond_block(self, offset):
        return self.upper_bound is not None and offset >= self.upper_bound

    def _parse_record(self):
        """Parses the next sequence from the input. Returns ``None`` at
        the end of the input or of the block. Raises
        `InvalidCharacterError` if the sequence data is invalid; the rest
        of the sequence is skipped with the next call in this case."""
        if self._beyond_block(self._position()):
            return None

        # Skip everything up to the next title line
        offset, line = self._read_line()
        while line and line[0] != ">":
            offset, line = self._read_line()
        if not line or self._beyond_block(offset):
            return None

        self.seqno += 1
        title = line.rstrip("\n")
        if title.endswith("\r"):
            title = title[:-1]
        blank = title.find(" ")
        if blank < 0:
            record = SeqRecord(title[1:])
        else:
            record = SeqRecord(title[1:blank])
            record.set_attr(FULL_NAME, title[blank+1:])

        # Comments right after the title may carry attributes
        offset, line = self._read_line()
        while line and line[0] == ";":
            equal_sign = line.find("=")
            if equal_sign >= 0:
                key = line[1:equal_sign].strip()
                if key:
                    record.set_attr(key, line[equal_sign+1:].strip())
            offset, line = self._read_line()

        # Everything up to the next title line is sequence data
        while line and line[0] != ">":
            try:
                record.append(line)
            except InvalidCharacterError as ex:
                ex.record = record
                ex.lineno = self.lineno
                ex.offset = offset
                ex.line = line.rstrip("\r\n")
                raise
            offset, line = self._read_line()
        if line:
            self._unread_line(offset, line)

        return record

    def read(self):
        """Returns the next valid sequence of the input as a `SeqRecord`,
        or ``None`` if there are no more sequences."""
        while not self._finished:
            try:
                record = self._parse_record()
            except InvalidCharacterError as ex:
                self.rejected += 1
                self.log.warning("Line %d (byte %d, sequence %d, '%s') "
                        "contains invalid character %r, skipping sequence: "
                        "%s", ex.lineno, ex.offset, self.seqno,
                        ex.record.name, ex.character, ex.line)
                continue
            if record is None:
                self._finished = True
            return record
        return None

    def sequences(self):
        """Returns a generator that iterates over all the sequences
        in the FASTA file. The generator will yield `SeqRecord`
        objects.
        """
        while True:
            record = self.read()
            if record is None:
                return
            yield record

    def trays(self):
        """Returns a generator that yields a `Tray` for each sequence
        in the FASTA file."""
        for record in self.sequences():
            yield Tray(record)

    def __iter__(self):
        return self.sequences()

    def _close_handle(self):
        if self._owns_handle:
            self.handle.close()

    def close(self):
        """Reports the number of sequences read and closes the input if
        the parser opened it."""
        if self._closed:
            return
        self._closed = True
        self.log.info("FASTA input: %d sequences, %d lines, %d rejected",
                      self.produced, self.lineno, self.rejected)
        self._close_handle()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


class Writer(object):
    """Writes aligned sequences in FASTA format to a given file.

    `handle` is a file name (``-`` means the standard output) or a text
    file object; `options` is a `FastaOptions` instance. When the
    attributes are written in CSV format, they go into a file next to the
    FASTA output; see `alnio.utils.sidecar_path`.
    """

    def __init__(self, handle, options=None, logger=None):
        self.options = options or FastaOptions()
        self.log = logger or get_logger(__name__)
        self.written = 0
        self.excluded = 0
        self.sidecar = None
        self._closed = False

        meta_format = self.options.meta_format
        self._format_meta = {
            MetaFormat.NONE: self._format_meta_none,
            MetaFormat.HEADER: self._format_meta_header,
            MetaFormat.COMMENT: self._format_meta_comment,
            MetaFormat.CSV: self._format_meta_csv,
        }[meta_format]

        if meta_format is MetaFormat.CSV:
            fname = handle
            if not isinstance(fname, (str, bytes, os.PathLike)):
                fname = getattr(handle, "name", None)
            if not isinstance(fname, (str, bytes, os.PathLike)) or \
                    is_stdio(os.fsdecode(fname)) or \
                    os.fsdecode(fname).startswith("<"):
                raise ConfigurationError("CSV meta data needs a named output "
                                         "file to place the CSV file next to")
            csv_fname = sidecar_path(fname)

        self._owns_handle = isinstance(handle, (str, bytes, os.PathLike)) \
                and not is_stdio(os.fsdecode(handle))
        self.handle = open_anything(handle, "w", encoding="utf-8", newline="")

        if meta_format is MetaFormat.CSV:
            try:
                self.sidecar = csvfile.Writer(csv_fname,
                        csvfile.CsvOptions(crlf=True), excluded=(FAMILY, ),
                        logger=self.log)
            except Exception:
                self._close_handle()
                raise

    def _format_meta_none(self, record):
        return "\n"

    def _format_meta_header(self, record):
        parts = [" [%s=%s]" % (key, format_value(value))
                 for key, value in record.attributes.items()
                 if key != FAMILY and key != FULL_NAME]
        parts.append("\n")
        return "".join(parts)

    def _format_meta_comment(self, record):
        parts = ["\n"]
        parts.extend("; %s=%s\n" % (key, format_value(value))
                     for key, value in record.attributes.items()
                     if key != FAMILY)
        return "".join(parts)

    def _format_meta_csv(self, record):
        self.sidecar.write_record(record)
        return "\n"

    def write(self, tray):
        """Writes the aligned sequence of the given `Tray` unless it has
        to be excluded. Returns the tray.

        Raises `ProtocolError` if the tray has no input sequence.
        """
        tray.require_input("FASTA writer")
        name = tray.input_sequence.name

        if tray.aligned_sequence is None:
            self.excluded += 1
            self.log.info("Sequence %s was not aligned. Nothing to write "
                          "to FASTA output.", name)
            tray.log_message("not aligned, excluded from FASTA output")
            return tray

        min_identity = self.options.min_identity
        identity = tray.aligned_sequence.identity
        if min_identity > 0 and identity < min_identity:
            self.excluded += 1
            self.log.info("Sequence %s was below identity threshold %s at %s "
                          "and excluded from FASTA output.", name,
                          min_identity, identity)
            tray.log_message("identity %s below threshold %s, excluded from "
                             "FASTA output", identity, min_identity)
            return tray

        self.write_record(tray.aligned_sequence)
        return tray

    def write_record(self, record):
        """Writes the given sequence record to the file handle passed
        at construction time.
        """
        options = self.options
        parts = [">", record.name]
        full_name = record.full_name
        if full_name:
            parts.append(" ")
            parts.append(full_name)
        parts.append(self._format_meta(record))

        seq = record.get_aligned(use_dots=options.use_dots,
                                 dna=options.write_dna)
        width = options.line_length
        if width > 0:
            for start in range(0, len(seq), width):
                parts.append(seq[start:start+width])
                parts.append("\n")
        else:
            parts.append(seq)
            parts.append("\n")

        self.handle.write("".join(parts))
        self.written += 1

    __call__ = write

    def _close_handle(self):
        if self._owns_handle:
            self.handle.close()
        else:
            self.handle.flush()

    def close(self):
        """Reports the number of exported and excluded sequences, then
        closes the CSV file and the FASTA output if the writer opened it."""
        if self._closed:
            return
        self._closed = True
        self.log.info("FASTA output: %d exported, %d excluded",
                      self.written, self.excluded)
        try:
            if self.sidecar is not None:
                self.sidecar.close()
        finally:
            self._close_handle()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
