import csv
import gzip
import io

import pytest

from alnio.csvfile import CsvOptions, Writer, escape_field
from alnio.fasta import Parser
from alnio.sequence import FULL_NAME, SeqRecord
from alnio.tray import Tray


def write_records(records, **options):
    handle = io.StringIO()
    writer = Writer(handle, CsvOptions(**options))
    for record in records:
        writer.write(Tray(record, record))
    writer.close()
    return writer, handle.getvalue()


@pytest.mark.parametrize("text", ["", "plain", "with space", "semi;colon",
                                  "it's"])
def test_fields_without_special_characters_are_unchanged(text):
    assert escape_field(text) == text


@pytest.mark.parametrize("text, expected", [
    ("a,b", '"a,b"'),
    ('say "hi"', '"say ""hi"""'),
    ('"a,b"', '"""a,b"""'),
    ("two\nlines", '"two\nlines"'),
    ("carriage\rreturn", '"carriage\rreturn"'),
])
def test_escaping(text, expected):
    assert escape_field(text) == expected


@pytest.mark.parametrize("text", ["a,b", '"a,b"', 'x "y", z', "l1\r\nl2"])
def test_escaped_fields_parse_back(text):
    line = ",".join([escape_field(text), escape_field("next")]) + "\r\n"
    assert next(csv.reader(io.StringIO(line, newline=""))) == [text, "next"]


def test_options():
    assert CsvOptions().fields == ()
    assert CsvOptions(None).fields == ()
    assert CsvOptions("a, b,,c").fields == ("a", "b", "c")
    assert CsvOptions(["x", "y"]).fields == ("x", "y")
    assert CsvOptions().line_end == "\n"
    assert CsvOptions(crlf=True).line_end == "\r\n"


def test_concrete_example():
    text = b">seq1 desc one\n;note=hello\nACGU\n>seq2\nACGT"
    handle = io.StringIO()
    writer = Writer(handle)
    for tray in Parser(io.BytesIO(text)).trays():
        tray.aligned_sequence = tray.input_sequence
        writer.write(tray)
    writer.close()
    assert handle.getvalue() == "name,note\nseq1,hello\nseq2,\n"


def test_columns_are_fixed_by_first_record():
    first = SeqRecord("a", attributes={"x": "1"})
    second = SeqRecord("b", attributes={"y": "2", "x": "3"})
    writer, output = write_records([first, second])
    assert writer.columns == ("x", )
    assert output == "name,x\na,1\nb,3\n"


def test_inferred_columns_keep_insertion_order():
    record = SeqRecord("a", attributes={"z": 1, "a": 2.5, "m": "t"})
    _, output = write_records([record])
    assert output == "name,z,a,m\na,1,2.5,t\n"


def test_explicit_fields():
    records = [SeqRecord("a", attributes={"x": "1", "y": "2"}),
               SeqRecord("b", attributes={"z": "3"})]
    writer, output = write_records(records, fields="y,missing,x")
    assert writer.columns == ("y", "missing", "x")
    assert output == "name,y,missing,x\na,2,,1\nb,,,\n"


def test_explicit_fields_may_include_full_name():
    record = SeqRecord("a", attributes={FULL_NAME: "desc", "x": "1"})
    _, output = write_records([record], fields=[FULL_NAME, "x"])
    assert output == "name,full_name,x\na,desc,1\n"


def test_full_name_alone_means_all_fields():
    record = SeqRecord("a", attributes={FULL_NAME: "desc", "x": "1"})
    writer, output = write_records([record], fields=[FULL_NAME])
    assert writer.columns == ("x", )
    assert output == "name,x\na,1\n"


def test_crlf():
    records = [SeqRecord("a", attributes={"x": "1"}), SeqRecord("b")]
    _, output = write_records(records, crlf=True)
    assert output == "name,x\r\na,1\r\nb,\r\n"


def test_values_are_escaped():
    record = SeqRecord("name,with,commas",
                       attributes={"taxonomy": "Bacteria;Firmicutes",
                                   "comment": 'a "quoted", text'})
    _, output = write_records([record])
    assert output == ('name,taxonomy,comment\n'
                      '"name,with,commas",Bacteria;Firmicutes,'
                      '"a ""quoted"", text"\n')


def test_unaligned_trays_are_passed_through():
    handle = io.StringIO()
    writer = Writer(handle)
    tray = Tray(SeqRecord("a", attributes={"x": "1"}))
    assert writer.write(tray) is tray
    assert writer.columns is None
    assert handle.getvalue() == ""
    assert writer.written == 0


def test_header_written_once_and_columns_survive_unaligned_trays():
    handle = io.StringIO()
    writer = Writer(handle)
    writer.write(Tray(SeqRecord("skip", attributes={"q": "0"})))
    record = SeqRecord("a", attributes={"x": "1"})
    writer.write(Tray(record, record))
    writer.write(Tray(record, record))
    assert handle.getvalue() == "name,x\na,1\na,1\n"


def test_gzip_output(tmp_path):
    fname = str(tmp_path / "out.csv.gz")
    record = SeqRecord("a", attributes={"x": "1"})
    with Writer(fname, CsvOptions(crlf=True)) as writer:
        writer.write(Tray(record, record))
    assert writer.handle.closed
    with gzip.open(fname, "rb") as handle:
        assert handle.read() == b"name,x\r\na,1\r\n"
