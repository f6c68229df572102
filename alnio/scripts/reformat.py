#!/usr/bin/env python
"""FASTA reformatting application"""

import sys

from alnio import csvfile, fasta
from alnio.config import ConfigurationError
from alnio.scripts import CommandLineApp

__author__  = "Tamas Nepusz"
__email__   = "tamas@cs.rhul.ac.uk"
__copyright__ = "Copyright (c) 2010, Tamas Nepusz"
__license__ = "GPL"

__all__ = ["FastaReformatApp"]

class FastaReformatApp(CommandLineApp):
    """\
    Usage: %prog [options] [sequences_file]

    Reads aligned sequences from the given FASTA file (or the standard
    input) and writes them to FASTA and/or CSV output, filtering them by
    their identity score and emitting their attributes in the requested
    meta data format.

    Attributes are read from comment lines of the form ``;key=value``
    following the title line of each sequence. The identity score is
    taken from the ``align_ident_slv`` attribute.
    """

    short_name = "reformat"

    def create_parser(self):
        """Creates the command line parser"""
        parser = super(FastaReformatApp, self).create_parser()

        parser.add_option("-o", "--out", dest="output", metavar="FILE",
                default=None, config_key="reformat/output",
                help="write FASTA output to FILE (default: standard output "
                     "unless --csv-out is given)")
        parser.add_option("--csv-out", dest="csv_output", metavar="FILE",
                default=None, config_key="reformat/csv_output",
                help="write the attributes of the sequences to FILE "
                     "in CSV format")
        parser.add_option("--meta-fmt", dest="meta_format", metavar="FORMAT",
                default="none", config_key="fasta/meta_format",
                help="write meta data in FORMAT (none, header, comment "
                     "or csv)")
        parser.add_option("--line-length", dest="line_length", type=int,
                metavar="N", default=0, config_key="fasta/line_length",
                help="wrap output sequences at N characters (default: "
                     "unlimited)")
        parser.add_option("--min-idty", dest="min_identity", type=float,
                metavar="X", default=0.0, config_key="fasta/min_identity",
                help="only write sequences with identity score of at "
                     "least X")
        parser.add_option("--fasta-write-dna", dest="write_dna",
                action="store_true", default=False,
                config_key="fasta/write_dna",
                help="write DNA sequences (default: RNA)")
        parser.add_option("--fasta-write-dots", dest="use_dots",
                action="store_true", default=False,
                config_key="fasta/write_dots",
                help="use dots instead of dashes to distinguish unknown "
                     "sequence data from indels")
        parser.add_option("--fasta-block", dest="block_size", type=int,
                metavar="BYTES", default=0, config_key="fasta/block_size",
                help="length of the blocks of the input file")
        parser.add_option("--fasta-idx", dest="block_index", type=int,
                metavar="N", default=0, config_key="fasta/block_index",
                help="process only sequences beginning in block N")
        parser.add_option("--csv-fields", dest="csv_fields", metavar="LIST",
                default=None, config_key="csv/fields",
                help="comma-separated list of attributes to write in CSV "
                     "output (default: those of the first sequence)")
        parser.add_option("--csv-crlf", dest="csv_crlf",
                action="store_true", default=False, config_key="csv/crlf",
                help="write CSV using CRLF line ends (as RFC 4180 demands)")

        return parser

    def run_real(self):
        """Runs the application and returns the exit code"""
        if len(self.args) > 1:
            self.parser.print_help()
            return 1
        infile = self.args[0] if self.args else "-"

        try:
            fasta_options = fasta.FastaOptions.from_options(self.options)
            csv_options = csvfile.CsvOptions.from_options(self.options)
        except ConfigurationError as ex:
            self.error(str(ex))

        outfile = self.options.output
        if outfile is None and self.options.csv_output is None:
            outfile = "-"

        try:
            self.process_file(infile, outfile, self.options.csv_output,
                              fasta_options, csv_options)
        except ConfigurationError as ex:
            self.error(str(ex))
        return 0

    def create_stages(self, outfile, csv_outfile, fasta_options, csv_options):
        """Creates the writers of the pipeline. Returns a list of stages,
        i.e. objects with a ``write`` method accepting a `Tray` and a
        ``close`` method."""
        stages = []
        try:
            if outfile is not None:
                stages.append(fasta.Writer(outfile, fasta_options,
                                           logger=self.log))
            if csv_outfile is not None:
                stages.append(csvfile.Writer(csv_outfile, csv_options,
                                             logger=self.log))
        except Exception:
            for stage in stages:
                stage.close()
            raise
        return stages

    def align(self, tray):
        """Fills the aligned slot of the tray. The input sequences of this
        application are already aligned, so they are taken as they are."""
        tray.aligned_sequence = tray.input_sequence.copy()
        return tray

    def process_file(self, infile, outfile, csv_outfile, fasta_options,
                     csv_options):
        """Reads the sequences from `infile` and passes them through the
        writers."""
        self.log.info("Processing input file: %s..." % infile)

        parser = fasta.Parser.with_options(infile, fasta_options,
                                           logger=self.log)
        try:
            stages = self.create_stages(outfile, csv_outfile,
                                        fasta_options, csv_options)
            try:
                for tray in parser.trays():
                    tray = self.align(tray)
                    for stage in stages:
                        tray = stage.write(tray)
            finally:
                for stage in stages:
                    stage.close()
        finally:
            parser.close()


if __name__ == "__main__":
    sys.exit(FastaReformatApp().run())
