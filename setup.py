# Licensed to the Apache Software Foundation (ASF) under one or more
# contributor license agreements.  See the NOTICE file distributed with
# this work for additional information regarding copyright ownership.
# The ASF licenses this file to You under the Apache License, Version 2.0
# (the "License"); you may not use this file except in compliance with
# the License.  You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import os
import re

from setuptools import setup

# NOTE: Kept in-line so setup.py doesn't import bucketdemo (and with it
# boto3) before the dependencies are installed.


def get_packages(dname, pkgname=None, results=None):
    """
    Get all packages which are under dname.
    """
    bname = os.path.basename(dname)
    if results is None:
        results = []
    if pkgname is None:
        pkgname = []
    subfiles = os.listdir(dname)
    abssubfiles = [os.path.join(dname, x) for x in subfiles]

    if '__init__.py' in subfiles:
        results.append(pkgname + [bname])
        for subdir in filter(os.path.isdir, abssubfiles):
            get_packages(subdir, pkgname=pkgname + [bname],
                         results=results)
    res = ['.'.join(result) for result in results]
    return res


INSTALL_REQUIREMENTS = [
    'boto3>=1.9.0',
]

TEST_REQUIREMENTS = [
    'mock',
    'pytest',
] + INSTALL_REQUIREMENTS


def read_version_string():
    version = None
    cwd = os.path.dirname(os.path.abspath(__file__))
    version_file = os.path.join(cwd, 'bucketdemo/__init__.py')

    with open(version_file) as fp:
        content = fp.read()

    match = re.search(r"^__version__ = ['\"]([^'\"]*)['\"]",
                      content, re.M)

    if match:
        version = match.group(1)
        return version

    raise Exception('Cannot find version in bucketdemo/__init__.py')


def read_long_description():
    cwd = os.path.dirname(os.path.abspath(__file__))
    with open(os.path.join(cwd, 'README.rst')) as fp:
        return fp.read()


setup(
    name='bucketdemo',
    version=read_version_string(),
    description='Walks an object storage bucket through its whole life '
                'cycle: list, create, upload, list objects and delete.',
    long_description=read_long_description(),
    install_requires=INSTALL_REQUIREMENTS,
    extras_require={
        'test': TEST_REQUIREMENTS,
    },
    python_requires=">=3.6, <4",
    packages=get_packages('bucketdemo'),
    package_dir={
        'bucketdemo': 'bucketdemo',
    },
    entry_points={
        'console_scripts': [
            'bucketdemo = bucketdemo.cli:main',
        ],
    },
    license='Apache License (2.0)',
    zip_safe=False,
    classifiers=[
        'Development Status :: 4 - Beta',
        'Environment :: Console',
        'Intended Audience :: Developers',
        'Intended Audience :: System Administrators',
        'License :: OSI Approved :: Apache Software License',
        'Operating System :: OS Independent',
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Topic :: System :: Archiving',
    ]
)
