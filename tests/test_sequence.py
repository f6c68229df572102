import pytest

from alnio.sequence import (SeqRecord, InvalidCharacterError, format_value,
                            FULL_NAME, IDENTITY)


def test_append_ignores_whitespace():
    record = SeqRecord("seq")
    record.append("AC GU\r\n")
    record.append("\tnn-.")
    assert record.bases == "ACGUnn-."


def test_append_rejects_invalid_character_and_keeps_record():
    record = SeqRecord("seq", "ACGU")
    with pytest.raises(InvalidCharacterError) as info:
        record.append("ACXG")
    assert info.value.character == "X"
    assert record.bases == "ACGU"


def test_set_attr_last_write_wins_and_keeps_position():
    record = SeqRecord("seq")
    record.set_attr("a", "1")
    record.set_attr("b", 2)
    record.set_attr("a", 3.5)
    assert list(record.attributes) == ["a", "b"]
    assert record.get_attr("a") == 3.5
    assert record.get_attr("missing") is None
    assert record.get_attr("missing", "x") == "x"
    assert record.has_attr("b")


@pytest.mark.parametrize("value", [True, None, [1], {"a": 1}])
def test_set_attr_rejects_other_value_types(value):
    with pytest.raises(TypeError):
        SeqRecord("seq").set_attr("key", value)


def test_format_value():
    assert format_value("text") == "text"
    assert format_value(42) == "42"
    assert format_value(-7) == "-7"
    assert format_value(0.5) == "0.5"
    assert format_value(0.1) == "0.1"
    with pytest.raises(TypeError):
        format_value(object())


def test_attributes_are_case_sensitive():
    record = SeqRecord("seq", attributes={"Key": "a", "key": "b"})
    assert record.get_attr("Key") == "a"
    assert record.get_attr("key") == "b"


def test_identity():
    assert SeqRecord("seq").identity == 0.0
    assert SeqRecord("seq", attributes={IDENTITY: "0.95"}).identity == 0.95
    assert SeqRecord("seq", attributes={IDENTITY: 0.8}).identity == 0.8
    assert SeqRecord("seq", attributes={IDENTITY: "n/a"}).identity == 0.0


def test_full_name():
    assert SeqRecord("seq").full_name == ""
    record = SeqRecord("seq", attributes={FULL_NAME: "some description"})
    assert record.full_name == "some description"


def test_get_aligned_gap_rendering():
    record = SeqRecord("seq", "--AC.GU..")
    assert record.get_aligned() == "--AC-GU--"
    assert record.get_aligned(use_dots=True) == "..AC-GU.."
    assert record.get_aligned(dna=True) == "--AC-GT--"
    assert record.get_aligned(use_dots=True, dna=True) == "..AC-GT.."


def test_get_aligned_converts_between_dna_and_rna():
    record = SeqRecord("seq", "ACGTacgu")
    assert record.get_aligned() == "ACGUacgu"
    assert record.get_aligned(dna=True) == "ACGTacgt"


def test_get_aligned_all_gaps():
    record = SeqRecord("seq", "-.-")
    assert record.get_aligned() == "---"
    assert record.get_aligned(use_dots=True) == "..."


def test_lengths():
    record = SeqRecord("seq", "--AC-GU..")
    assert len(record) == 4
    assert record.aligned_length == 9


def test_copy_is_independent():
    record = SeqRecord("seq", "ACGU", {"a": "1"})
    other = record.copy()
    other.set_attr("b", "2")
    other.append("GG")
    assert record.bases == "ACGU"
    assert list(record.attributes) == ["a"]
    assert other.name == "seq"
    assert other.bases == "ACGUGG"
