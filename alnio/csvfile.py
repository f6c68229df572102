"""Writes the attributes of aligned sequences as CSV files.

The output follows RFC 4180: the first row contains the column names, the
first column is the name of the sequence, and fields containing commas,
double quotes or line breaks are quoted.
"""

__author__  = "Tamas Nepusz"
__email__   = "tamas@cs.rhul.ac.uk"
__copyright__ = "Copyright (c) 2010, Tamas Nepusz"
__license__ = "GPL"

__all__ = ["CsvOptions", "Writer", "escape_field"]

import os
import re

from collections import namedtuple

from alnio.log import get_logger
from alnio.sequence import format_value, FULL_NAME
from alnio.utils import is_stdio, open_anything

_NEEDS_QUOTES = re.compile('[",\r\n]')


def escape_field(text):
    """Escapes a single CSV field.

    Fields containing a double quote, a comma or a line break are
    enclosed in double quotes, and the double quotes within them are
    doubled. Everything else is returned unchanged::

        >>> escape_field("plain")
        'plain'
        >>> escape_field('say "hi", then leave')
        '"say ""hi"", then leave"'
    """
    if _NEEDS_QUOTES.search(text) is None:
        return text
    return '"%s"' % text.replace('"', '""')


class CsvOptions(namedtuple("CsvOptions", "fields crlf")):
    """Immutable set of options for the CSV writer.

    - ``fields``: the attributes to write, in this order. If empty (or if
      it consists of the full name attribute only), the columns are taken
      from the first record written.
    - ``crlf``: whether rows are terminated by CRLF instead of LF
    """

    __slots__ = ()

    def __new__(cls, fields=(), crlf=False):
        if fields is None:
            fields = ()
        elif isinstance(fields, str):
            fields = [field.strip() for field in fields.split(",")]
        fields = tuple(field for field in fields if field)
        return super(CsvOptions, cls).__new__(cls, fields, bool(crlf))

    @classmethod
    def from_options(cls, options):
        """Creates an instance from command line options parsed by
        `alnio.scripts.reformat.FastaReformatApp`."""
        return cls(fields=options.csv_fields, crlf=options.csv_crlf)

    @property
    def line_end(self):
        """The row terminator"""
        return "\r\n" if self.crlf else "\n"


class Writer(object):
    """Writes the attributes of aligned sequences to a CSV file.

    `handle` is a file name or a text file object. File names ending in
    ``.gz`` (and the other suffixes known to `alnio.utils.open_anything`)
    are compressed on the fly. Attributes listed in `excluded` never
    become columns unless they are requested explicitly in the options.
    By default the full name is excluded since it is not an attribute
    of the alignment.

    The column set is fixed when the first record is written; attributes
    missing from a later record are written as empty fields, attributes
    not among the columns are not written at all.
    """

    def __init__(self, handle, options=None, excluded=(FULL_NAME, ),
                 logger=None):
        self.options = options or CsvOptions()
        self.excluded = frozenset(excluded)
        self.log = logger or get_logger(__name__)
        self.written = 0
        self._columns = None
        self._closed = False

        self._owns_handle = isinstance(handle, (str, bytes, os.PathLike)) \
                and not is_stdio(os.fsdecode(handle))
        self.handle = open_anything(handle, "w", encoding="utf-8", newline="")

    @property
    def columns(self):
        """The attribute columns of the file (not including the name),
        or ``None`` if nothing has been written yet."""
        return self._columns

    def _select_columns(self, record):
        fields = self.options.fields
        if not fields or fields == (FULL_NAME, ):
            return tuple(key for key in record.attributes
                         if key not in self.excluded)
        return fields

    def write(self, tray):
        """Writes the aligned sequence of the given `Tray`. Trays without
        an aligned sequence are skipped. Returns the tray."""
        if tray.aligned_sequence is not None:
            self.write_record(tray.aligned_sequence)
        return tray

    __call__ = write

    def write_record(self, record):
        """Writes a row for the given `SeqRecord`, preceded by the header
        row if this is the first record."""
        line_end = self.options.line_end
        rows = []

        if self._columns is None:
            self._columns = self._select_columns(record)
            header = ["name"]
            header.extend(escape_field(column) for column in self._columns)
            rows.append(",".join(header))
            self.log.debug("CSV columns: %s", ", ".join(self._columns))

        attributes = record.attributes
        row = [escape_field(record.name)]
        for column in self._columns:
            value = attributes.get(column)
            if value is None:
                row.append("")
            else:
                row.append(escape_field(format_value(value)))
        rows.append(",".join(row))
        rows.append("")

        self.handle.write(line_end.join(rows))
        self.written += 1

    def close(self):
        """Closes the output if the writer opened it."""
        if self._closed:
            return
        self._closed = True
        self.log.debug("CSV output: %d rows", self.written)
        if self._owns_handle:
            self.handle.close()
        else:
            self.handle.flush()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()
