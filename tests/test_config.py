import pytest

from alnio.config import ConfigurableOptionParser


@pytest.fixture
def parser():
    parser = ConfigurableOptionParser()
    parser.add_option("--line-length", dest="line_length", type=int,
                      default=0, config_key="fasta/line_length")
    parser.add_option("--meta-fmt", dest="meta_format", default="none",
                      config_key="meta_format")
    parser.add_option("--dots", dest="use_dots", action="store_true",
                      default=False, config_key="fasta/write_dots")
    parser.add_option("--plain", dest="plain", default="x")
    return parser


def test_without_config_file(parser):
    options, args = parser.parse_args(["--line-length", "60", "input.fa"])
    assert options.line_length == 60
    assert options.meta_format == "none"
    assert not options.use_dots
    assert args == ["input.fa"]
    assert parser.config is None


def test_values_from_config_file(parser, tmp_path):
    config = tmp_path / "alnio.cfg"
    config.write_text("[DEFAULT]\nmeta_format = comment\n\n"
                      "[fasta]\nline_length = 70\nwrite_dots = yes\n")
    options, _ = parser.parse_args(["-c", str(config)])
    assert options.line_length == 70
    assert options.meta_format == "comment"
    assert options.use_dots
    assert options.plain == "x"
    assert parser.config is not None


def test_command_line_overrides_config_file(parser, tmp_path):
    config = tmp_path / "alnio.cfg"
    config.write_text("[fasta]\nline_length = 70\nwrite_dots = no\n")
    options, _ = parser.parse_args(["-c", str(config), "--line-length", "10"])
    assert options.line_length == 10
    assert not options.use_dots


def test_invalid_config_value(parser, tmp_path):
    config = tmp_path / "alnio.cfg"
    config.write_text("[fasta]\nline_length = wide\n")
    with pytest.raises(SystemExit):
        parser.parse_args(["-c", str(config)])


def test_missing_config_file(parser, tmp_path):
    with pytest.raises(SystemExit):
        parser.parse_args(["-c", str(tmp_path / "missing.cfg")])
