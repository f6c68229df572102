"""The `Tray` class, i.e. the unit of work passed between the stages of an
alignment pipeline.
"""

__author__  = "Tamas Nepusz"
__email__   = "tamas@cs.rhul.ac.uk"
__copyright__ = "Copyright (c) 2010, Tamas Nepusz"
__license__ = "GPL"

__all__ = ["Tray", "ProtocolError"]

from io import StringIO


class ProtocolError(RuntimeError):
    """Raised when a pipeline stage receives a tray that violates the
    contract of the stages before it."""
    pass


class Tray(object):
    """Carries one sequence through the pipeline.

    - ``input_sequence``: the raw `SeqRecord` as read from the input
    - ``aligned_sequence``: the aligned `SeqRecord`, or ``None`` if no
      alignment was produced for the input
    - ``log``: a text stream collecting diagnostics about this sequence
    """

    __slots__ = ("input_sequence", "aligned_sequence", "log")

    def __init__(self, input_sequence=None, aligned_sequence=None):
        self.input_sequence = input_sequence
        self.aligned_sequence = aligned_sequence
        self.log = StringIO()

    def is_aligned(self):
        """Returns whether the tray holds an aligned sequence."""
        return self.aligned_sequence is not None

    def log_message(self, message, *args):
        """Appends a line to the diagnostic log of the tray."""
        if args:
            message = message % args
        print(message, file=self.log)

    def require_input(self, stage):
        """Raises `ProtocolError` if the tray has no input sequence.
        `stage` is the name of the stage used in the error message."""
        if self.input_sequence is None:
            raise ProtocolError("received a tray without input sequence "
                                "in %s" % stage)
