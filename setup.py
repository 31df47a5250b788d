#!/usr/bin/env python
# Copyright 2005-2009,2011 Joe Wreschnig
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of the GNU General Public License version 2 as
# published by the Free Software Foundation.

import os
import re
import shutil

from setuptools import setup, Command


class clean(Command):
    description = "remove build output, pyc and backup files"
    user_options = []

    def initialize_options(self):
        pass

    def finalize_options(self):
        pass

    def run(self):
        # remove pyc and pyo and backup files from the source tree

        def should_remove(filename):
            if (filename.lower()[-4:] in [".pyc", ".pyo"] or
                    filename.endswith("~") or
                    (filename.startswith("#") and filename.endswith("#"))):
                return True
            else:
                return False
        for pathname, dirs, files in os.walk(os.path.dirname(__file__)):
            for filename in files:
                if should_remove(filename):
                    try:
                        os.unlink(os.path.join(pathname, filename))
                    except EnvironmentError as err:
                        print(str(err))

        for base in ["build", "dist"]:
            path = os.path.join(os.path.dirname(__file__), base)
            if os.path.isdir(path):
                shutil.rmtree(path)


class test_cmd(Command):
    description = "run automated tests"
    user_options = [
        ("to-run=", None, "list of tests to run (default all)"),
    ]

    def initialize_options(self):
        self.to_run = []

    def finalize_options(self):
        if self.to_run:
            self.to_run = self.to_run.split(",")

    def run(self):
        import tests

        count, failures = tests.unit(self.to_run)
        if failures:
            print("%d out of %d failed" % (failures, count))
            raise SystemExit("Test failures are listed above.")
        else:
            print("All tests passed")


def get_version():
    path = os.path.join(os.path.dirname(__file__), "id3kit", "__init__.py")
    with open(path) as h:
        match = re.search(r"^version = \((\d+), (\d+), (\d+)\)", h.read(), re.M)
    return ".".join(match.groups())


if __name__ == "__main__":
    cmd_classes = {
        "clean": clean,
        "test": test_cmd,
    }

    setup(cmdclass=cmd_classes,
          name="id3kit", version=get_version(),
          description="an object model for ID3v1 and ID3v2 tags",
          license="GNU GPL v2",
          classifiers=[
            'Development Status :: 4 - Beta',
            'Intended Audience :: Developers',
            'License :: OSI Approved :: GNU General Public License v2 (GPLv2)',
            'Operating System :: OS Independent',
            'Programming Language :: Python',
            'Programming Language :: Python :: 3',
            'Topic :: Multimedia :: Sound/Audio'
          ],
          packages=["id3kit"],
          long_description="""\
id3kit reads and writes ID3v1 and ID3v2 tags of audio files. A tag is
an ordered list of frames, each holding named fields checked against a
registry of the standard ID3 frames. Common frames are available as
plain properties (title, artist, album, track, ...). ID3v2.2, 2.3 and
2.4 tags are read; ID3v2.4 and ID3v1.1 tags are written.
"""
    )
