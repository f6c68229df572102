import pytest

from alnio.sequence import SeqRecord
from alnio.tray import Tray, ProtocolError


def test_empty_tray():
    tray = Tray()
    assert tray.input_sequence is None
    assert not tray.is_aligned()
    with pytest.raises(ProtocolError):
        tray.require_input("test stage")


def test_aligned_tray():
    record = SeqRecord("seq", "ACGU")
    tray = Tray(record, record.copy())
    assert tray.is_aligned()
    tray.require_input("test stage")


def test_log_message():
    tray = Tray(SeqRecord("seq"))
    tray.log_message("first")
    tray.log_message("value %d of %s", 3, "x")
    assert tray.log.getvalue() == "first\nvalue 3 of x\n"
