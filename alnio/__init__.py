"""This is the main module of alnio, the sequence I/O layer of an alignment
pipeline.

On its own, this module contains nothing, all the functionality is implemented
in one of the following submodules:

:mod:`alnio.config`
  An extension of Python's built-in :mod:`optparse` module to allow supplying
  default values for command line options from a configuration file.

:mod:`alnio.csvfile`
  Writes the attributes of aligned sequences as RFC 4180 CSV files.

:mod:`alnio.fasta`
  A parser and emitter for the FASTA sequence format, including attributes
  in comment lines and block-wise reading of large files.

:mod:`alnio.log`
  Logging helpers shared by the library modules and the scripts.

:mod:`alnio.scripts`
  Command line utilities. Each submodule of this module can be executed on
  its own as a command-line utility.

:mod:`alnio.sequence`
  The ``SeqRecord`` class, i.e. a named sequence with its attributes.

:mod:`alnio.tray`
  The ``Tray`` class, i.e. the unit of work passed between pipeline stages.

:mod:`alnio.utils`
  Various utility routines that did not fit anywhere else.

General comments that apply for the whole alnio API:

- Routines that accept files usually accept either filenames or file-like
  objects. If the filename ends in ``.bz2``, ``.gz`` or ``.xz``, it will be
  (de)compressed on-the-fly. A single dash means the standard input or
  output. This is achieved by `alnio.utils.open_anything`, which is called
  whenever a filename or a file-like object is passed into a function.
"""

__author__  = "Tamas Nepusz"
__email__   = "tamas@cs.rhul.ac.uk"
__copyright__ = "Copyright (c) 2010, Tamas Nepusz"
__license__ = "GPL"

__version__ = "1.0"
