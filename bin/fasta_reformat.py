#!/usr/bin/env python
"""Usage: %prog [options] [sequences_file]

Reads aligned sequences from a FASTA file and writes them to FASTA and/or
CSV output, filtering them by their identity score.
"""

from alnio.scripts.reformat import FastaReformatApp
import sys

if __name__ == "__main__":
    sys.exit(FastaReformatApp().run())
