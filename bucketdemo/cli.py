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

import sys
import argparse
import logging

from bucketdemo import __version__
from bucketdemo.config import Config
from bucketdemo.common.types import ArgumentError
from bucketdemo.common.types import BucketDemoError
from bucketdemo.common.types import ConfigurationError
from bucketdemo.orchestrator import Orchestrator
from bucketdemo.storage.providers import get_driver

__all__ = [
    'get_parser',
    'parse_args',
    'main'
]

logger = logging.getLogger(__name__)

PROG = 'bucketdemo'

USAGE = ('Usage: %(prog)s <the bucket name> <the file name>\n'
         'Example: %(prog)s my-test-bucket my-upload-file\n')


class ArgumentParser(argparse.ArgumentParser):
    """
    Parser which raises instead of exiting so the caller decides on the
    exit status.
    """

    def error(self, message):
        raise ArgumentError(value=message, usage=USAGE % {'prog': self.prog})


def get_parser():
    parser = ArgumentParser(prog=PROG,
                            usage='%(prog)s [--copy-to BUCKET] bucket file',
                            allow_abbrev=False,
                            description='Create a bucket, upload a file to '
                                        'it, list it and delete it again.')
    parser.add_argument('--copy-to', dest='copy_to', metavar='BUCKET',
                        default=None,
                        help='Existing bucket the uploaded object is copied '
                             'to before the teardown')
    parser.add_argument('--version', action='version',
                        version='%(prog)s ' + __version__)
    return parser


def parse_args(argv):
    """
    Split ``argv`` into the options and the two positional arguments.

    Only the first two positional arguments are used, anything after them
    is ignored. Arguments which look like options but aren't known to the
    parser count as positional arguments.

    :return: ``(container_name, file_path, copy_to)``
    :rtype: ``tuple``
    """
    parser = get_parser()
    options, positional = parser.parse_known_args(argv)

    if len(positional) < 2:
        raise ArgumentError(value='Expected a bucket name and a file name',
                            usage=USAGE % {'prog': parser.prog})

    if len(positional) > 2:
        logger.debug('Ignoring extra arguments: %s', positional[2:])

    return positional[0], positional[1], options.copy_to


def _create_driver(config):
    try:
        cls = get_driver(config.provider)
    except AttributeError as e:
        raise ConfigurationError(value=str(e), key='provider') from e

    return cls(config)


def main(argv=None, driver=None, environ=None, stdout=None, stderr=None):
    """
    Command line entry point.

    :param argv: Arguments without the program name, defaults to
                 ``sys.argv[1:]``.
    :param driver: Storage driver to use instead of the configured one.
    :param environ: Environment to read the configuration from.

    :return: Process exit status.
    :rtype: ``int``
    """
    if argv is None:
        argv = sys.argv[1:]
    stdout = stdout or sys.stdout
    stderr = stderr or sys.stderr

    try:
        container_name, file_path, copy_to = parse_args(argv)
    except ArgumentError as e:
        stderr.write(e.usage)
        return 1

    try:
        config = Config.from_env(environ)

        if driver is None:
            driver = _create_driver(config)

        orchestrator = Orchestrator(driver, config=config, stream=stdout)
        orchestrator.run(container_name, file_path, copy_to=copy_to)
    except BucketDemoError as e:
        logger.debug('Run aborted', exc_info=True)
        stderr.write('%s\n' % (e))
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
