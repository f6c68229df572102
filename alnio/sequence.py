"""This module contains the `SeqRecord` (sequence record) class used
throughout alnio. A `SeqRecord` encapsulates a (possibly gapped) nucleotide
sequence together with a name and an ordered map of named attributes.

Attributes are restricted to a small closed set of value types (strings,
integers and floats); `format_value` turns any of them into the text that
ends up in FASTA headers, comment lines or CSV cells.
"""

__author__  = "Tamas Nepusz"
__email__   = "tamas@cs.rhul.ac.uk"
__copyright__ = "Copyright (c) 2010, Tamas Nepusz"
__license__ = "GPL"

__all__ = ["SeqRecord", "InvalidCharacterError", "format_value",
           "FULL_NAME", "FAMILY", "IDENTITY"]

#: Attribute holding everything after the first space of a FASTA title
FULL_NAME = "full_name"

#: Attribute holding the reference sequences used by the aligner
FAMILY = "family"

#: Attribute holding the identity score of the alignment
IDENTITY = "align_ident_slv"

#: IUPAC nucleotide codes accepted in sequence data
RESIDUES = frozenset("ACGTURYKMSWBDHVNacgturykmswbdhvn")

#: Symbols denoting gaps in an aligned sequence
GAPS = frozenset("-.")

ALPHABET = RESIDUES | GAPS

_TO_DNA = str.maketrans("Uu", "Tt")
_TO_RNA = str.maketrans("Tt", "Uu")


class InvalidCharacterError(ValueError):
    """Raised when sequence data contains a symbol that is not a
    nucleotide code or a gap."""

    def __init__(self, character, data=None):
        super(InvalidCharacterError, self).__init__(
            "invalid character in sequence data: %r" % character)
        self.character = character
        self.data = data


def format_value(value):
    """Converts an attribute value to its string form.

    Strings are returned verbatim, integers in decimal notation and
    floats in the shortest notation that reads back to the same value.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        raise TypeError("boolean attribute values are not supported")
    if isinstance(value, int):
        return "%d" % value
    if isinstance(value, float):
        return repr(value)
    raise TypeError("unsupported attribute value type: %s" %
                    type(value).__name__)


class SeqRecord(object):
    """A nucleotide sequence with its associated metadata.

    The class has the following fields:

    - ``name``: the identifier of the sequence, i.e. the first word of
      its FASTA title line.
    - ``attributes``: a dict mapping attribute names to values. The
      insertion order is significant; writers use it as the default
      column order.
    - ``bases``: the sequence data as a string. It may contain gaps
      (``-`` or ``.``) once the sequence has been aligned.
    """

    __slots__ = ("name", "attributes", "bases")

    def __init__(self, name, bases="", attributes=None):
        self.name = name
        self.attributes = {}
        self.bases = ""
        if bases:
            self.append(bases)
        if attributes:
            for key, value in attributes.items():
                self.set_attr(key, value)

    def append(self, data):
        """Appends the given sequence data to the record.

        Whitespace is ignored. Raises `InvalidCharacterError` if `data`
        contains anything else that is not a nucleotide code or a gap
        symbol; the record is left unchanged in this case.
        """
        data = "".join(data.split())
        for char in data:
            if char not in ALPHABET:
                raise InvalidCharacterError(char, data)
        self.bases += data

    def set_attr(self, key, value):
        """Sets the attribute with the given key. A string, an integer
        or a float is expected as a value."""
        if isinstance(value, bool) or not isinstance(value, (str, int, float)):
            raise TypeError("attribute %r: unsupported value type %s" %
                            (key, type(value).__name__))
        self.attributes[key] = value

    def get_attr(self, key, default=None):
        """Returns the value of the given attribute or `default` if the
        record has no such attribute."""
        return self.attributes.get(key, default)

    def has_attr(self, key):
        """Returns whether the record has the given attribute."""
        return key in self.attributes

    @property
    def full_name(self):
        """The description part of the title line, or an empty string"""
        return format_value(self.attributes.get(FULL_NAME, ""))

    @property
    def identity(self):
        """The identity score of the record as a float. Records without
        a (numeric) identity score are treated as having zero identity."""
        value = self.attributes.get(IDENTITY)
        if value is None:
            return 0.0
        try:
            return float(value)
        except ValueError:
            return 0.0

    @property
    def aligned_length(self):
        """The width of the sequence including gaps"""
        return len(self.bases)

    def get_aligned(self, use_dots=False, dna=False):
        """Returns the sequence data as a string.

        Gaps within the aligned region are always rendered as dashes.
        Gaps before the first and after the last residue fall outside the
        alignment span; they are rendered as dots if `use_dots` is ``True``
        to tell missing data apart from indels, and as dashes otherwise.
        `dna` selects ``T`` (``True``) or ``U`` (``False``) for thymine and
        uracil.
        """
        bases = self.bases
        first, last = None, None
        for idx, char in enumerate(bases):
            if char not in GAPS:
                if first is None:
                    first = idx
                last = idx

        outside = "." if use_dots else "-"
        if first is None:
            result = outside * len(bases)
        else:
            inner = bases[first:last+1].replace(".", "-")
            result = outside*first + inner + outside*(len(bases)-last-1)

        if dna:
            return result.translate(_TO_DNA)
        return result.translate(_TO_RNA)

    def copy(self):
        """Returns an independent copy of this record"""
        result = SeqRecord(self.name)
        result.bases = self.bases
        result.attributes = dict(self.attributes)
        return result

    def __len__(self):
        return sum(1 for char in self.bases if char not in GAPS)

    def __repr__(self):
        return "%s(%r, %r)" % (self.__class__.__name__, self.name, self.bases)
