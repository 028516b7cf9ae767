#!/usr/bin/python
# This file is Copyright (c) 2010 by the GPSD project
# BSD terms apply: see the file COPYING in the distribution root for details.
#
# The decoder is pure Python; there are no extensions to build.

import os
import re

from setuptools import setup

with open(os.path.join(os.path.dirname(__file__) or os.curdir,
                       "aivdm", "__init__.py")) as fp:
    version = re.search(r"^__version__ = '([^']*)'", fp.read(), re.M).group(1)

setup( name="aivdm",
       version=version,
       description='Python decoder for AIVDM/AIVDO marine AIS sentences',
       author='the GPSD project',
       license="BSD",
       packages = ['aivdm'],
       scripts = ['aisdecode'],
       python_requires='>=3.6',
       extras_require={'test': ['pytest']},
     )
