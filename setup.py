#!/usr/bin/env python
"""alnio -- installer script"""

__author__  = "Tamas Nepusz"
__email__   = "tamas@cs.rhul.ac.uk"
__copyright__ = "Copyright (c) 2010-2015, Tamas Nepusz"
__license__ = "GPL"

from setuptools import setup, find_packages

params = {}
params["name"] = "alnio"
params["version"] = "1.0"
params["description"] = "Sequence record I/O for alignment pipelines"

params["packages"] = find_packages(exclude=["tests", "tests.*"])
params["scripts"] = ["bin/fasta_reformat.py"]
params["python_requires"] = ">=3.7"
params["extras_require"] = {"test": ["pytest"]}

setup(**params)
