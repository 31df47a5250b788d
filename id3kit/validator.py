# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.

"""Find frames a tag could not write."""


def invalid_frames(frames):
    """Return the invalid frames among frames.

    Each entry is [frame_id] for an unknown frame id, or [frame_id,
    field, ...] listing the fields the frame may not hold::

        invalid_frames(tag)  #=> [["XXXX"], ["TIT2", "data"]]
    """

    invalid = []
    for frame in frames:
        if frame.definition is None:
            invalid.append([frame.id])
            continue
        bad = [f for f in frame.fields if f not in frame.allowed_fields]
        if bad:
            invalid.append([frame.id] + bad)
    return invalid
