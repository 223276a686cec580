#!/usr/bin/env python

"""Set up the pyoci8pdo package.

(C) Copyright 2025 The pyoci8pdo Developers.  All Rights Reserved.

This software is licensed under a BSD 3-Clause License.
See the LICENSE file provided with this software.

This package can be installed using pip as follows:

    pip install pyoci8pdo

To install with the test requirements:

    pip install 'pyoci8pdo[test]'

python-oracledb is used in its default thin mode, so no Oracle client
libraries are needed.
"""

import os
import re

from setuptools import setup

with open(os.path.join(os.path.dirname(__file__), 'pyoci8pdo', '__init__.py')) as v:
    m = re.search(r"^ *__version__ *= *'(.*?)'", v.read(), re.M)
    if m is None:
        raise RuntimeError("Cannot detect version in pyoci8pdo/__init__.py")
    VERSION = m.group(1)

readme = os.path.join(os.path.dirname(__file__), 'README.rst')

setup(
    name='pyoci8pdo',
    version=VERSION,
    author='pyoci8pdo developers',
    description='PDO-style Oracle database interface for Python',
    keywords='oracle pdo oci8 database',
    packages=['pyoci8pdo'],
    license='BSD License',
    long_description=open(readme).read(),
    python_requires='>=3.8',
    install_requires=['oracledb>=2.0', 'tzlocal>=4.0'],
    extras_require=dict(test=['pytest']),
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'License :: OSI Approved :: BSD License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: SQL',
        'Topic :: Database :: Front-Ends',
    ],
)
