# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.


"""id3kit is an object model for ID3v1 and ID3v2 tags.

::

    from id3kit.tag import Tag
    tag = Tag(filename)
    tag.title = "Shy Boy"
    tag.commit()

A `Tag` is an ordered list of `Frame` objects. Each frame holds a set of
named fields (``text``, ``textenc``, ``data``, ...) whose allowed names are
given by the frame registry in :mod:`id3kit.info`. The actual bytes are read
and written by a tag engine (:mod:`id3kit.engine`); the object model only
talks to it through a small interface.
"""

version = (0, 9, 0)
"""Version tuple."""

version_string = '.'.join(str(v) for v in version)
"""Version string."""


# Tag version scopes. These are bitmasks and are used with Tag(),
# Tag.commit, Tag.strip and Tag.has_tag_type.

V_NONE = 0
"""No tag type."""

V1 = 1
"""ID3v1 (the 128 byte trailer)."""

V2 = 2
"""ID3v2 (the frame based header)."""

V_BOTH = V1 | V2
"""Both ID3 versions."""

V_ALL = 0xFF
"""All tag types."""
