# -*- coding: utf-8 -*-

import glob
import os
import shutil
import sys
import tempfile
import unittest
import warnings

from unittest import TestCase as _TestCase

from id3kit._id3util import ID3Warning

suites = []
add = suites.append


class TestCase(_TestCase):
    """TestCase with a scratch directory and strict ID3 warnings."""

    def mkdtemp(self):
        path = tempfile.mkdtemp(prefix="id3kit-")
        self.addCleanup(shutil.rmtree, path, True)
        return path

    def run(self, result=None):
        with warnings.catch_warnings():
            warnings.simplefilter('error', ID3Warning)
            return super(TestCase, self).run(result)


def write_file(path, data):
    with open(path, "wb") as h:
        h.write(data)
    return path


def read_file(path):
    with open(path, "rb") as h:
        return h.read()


def unit(run=[]):
    """Run the registered test cases; return (count, failures)."""

    for filename in sorted(glob.glob(os.path.join(
            os.path.dirname(__file__), "test_*.py"))):
        name = os.path.basename(filename)[:-3]
        __import__("tests." + name)

    loader = unittest.defaultTestLoader
    suite = unittest.TestSuite()
    for case in suites:
        if not run or case.__name__ in run:
            suite.addTest(loader.loadTestsFromTestCase(case))

    result = unittest.TextTestRunner(verbosity=1).run(suite)
    return result.testsRun, len(result.failures) + len(result.errors)


if __name__ == "__main__":
    count, failures = unit(sys.argv[1:])
    sys.exit(bool(failures))
