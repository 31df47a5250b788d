# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.

"""The ID3 tag of one file as an ordered list of frames.

::

    tag = Tag("song.mp3")
    tag.frame("title")             #=> TIT2(textenc=0, text='Shy Boy')
    tag.set_text("album", "Love")
    tag.append({"id": "TLAN", "textenc": 0, "text": "en"})
    tag.commit()                   #=> 3 (V1 | V2 written)

Changes are only written by commit(). Frames keep the order they were
read in, followed by frames in the order they were added.
"""

import logging

from collections.abc import Mapping

from id3kit import V_NONE, V_ALL
from id3kit import validator
from id3kit._id3util import error, ID3LinkError, TypeMismatchError
from id3kit._util import ListProxy
from id3kit.accessors import Accessors
from id3kit.engine import ID3Engine
from id3kit.frame import Frame

log = logging.getLogger(__name__)


class Tag(ListProxy, Accessors):
    """The ID3 tags of a file.

    Arguments:
    filename -- the file to read; it does not need to exist yet
    scope -- which tag types to read and, by default, write
    engine -- a TagEngine, an ID3Engine by default

    Raises ID3LinkError if the file exists but cannot be read.
    """

    def __init__(self, filename, scope=V_ALL, engine=None):
        self.filename = filename
        self.scope = scope
        self.padding = True
        self.engine = engine if engine is not None else ID3Engine()
        super(Tag, self).__init__()
        self.__link()
        self.extend(Frame.from_raw(self.engine, raw)
                    for raw in self.engine.iterate_frames())

    def __link(self):
        if not self.engine.link(self.filename, self.scope):
            raise ID3LinkError("{}: cannot read tags".format(self.filename))

    def _convert(self, value):
        if isinstance(value, Frame):
            return value
        elif isinstance(value, Mapping):
            return Frame.from_dict(value)
        raise TypeError("Tag items must be frames or mappings, not {}".format(
                        type(value).__name__))

    def frame(self, id_or_name):
        """Return the first frame with the given id, or None."""
        frame_id = self.resolve(id_or_name)
        for frame in self:
            if frame.id == frame_id:
                return frame
        return None

    def getall(self, id_or_name):
        """Return all frames with the given id (the list may be empty)."""
        frame_id = self.resolve(id_or_name)
        return [frame for frame in self if frame.id == frame_id]

    def remove_frame(self, id_or_name):
        """Delete all frames with the given id."""
        frame_id = self.resolve(id_or_name)
        self[:] = [frame for frame in self if frame.id != frame_id]

    def set_frame(self, id_or_name, builder=None):
        """Replace all frames with the given id by a new frame.

        builder, if given, is called with the new frame before any frame
        is removed, so the tag is unchanged if it raises. Returns the new
        frame.
        """

        frame = Frame(self.resolve(id_or_name))
        if builder is not None:
            builder(frame)
        self.remove_frame(frame.id)
        self.append(frame)
        return frame

    def text(self, id_or_name):
        """Return the text of the first frame with the given id, or None."""
        frame = self.frame(id_or_name)
        if frame is None:
            return None
        return frame.text

    def set_text(self, id_or_name, value):
        """Replace the frames with the given id by one holding value.

        The text is stored as ISO-8859-1 if possible and as UTF-16
        otherwise. None removes the frames.
        """

        if value is None:
            self.remove_frame(id_or_name)
            return

        value = str(value)

        def build(frame):
            if "textenc" in frame.allowed_fields:
                try:
                    value.encode('latin1')
                except UnicodeEncodeError:
                    frame.set("textenc", 1)
                else:
                    frame.set("textenc", 0)
            frame.set("text", value)

        self.set_frame(id_or_name, build)

    def __sync(self):
        engine = self.engine
        engine.clear_frames()
        for frame in self:
            try:
                raw = frame.to_raw(engine)
            except TypeMismatchError:
                raise
            except error as err:
                log.debug("%s: dropping %s frame: %s",
                          self.filename, frame.id, err)
                continue
            engine.add_frame(raw)
        engine.set_padding(self.padding)

    def commit(self, scope=None):
        """Write the frames to the file.

        scope defaults to the scope the tag was read with. Frames with
        unknown ids are left out. Returns the bitmask of the tag types
        written, or None if nothing could be written.
        """

        if scope is None:
            scope = self.scope
        self.__sync()
        written = self.engine.update(scope)
        if not written:
            log.warning("%s: no tags written", self.filename)
            return None
        return written

    def strip(self, scope=V_ALL):
        """Remove tags from the file and empty this tag.

        Returns the bitmask of the tag types removed.
        """

        stripped = self.engine.strip(scope)
        del self[:]
        self.engine.clear_frames()
        self.__link()
        return stripped

    def has_tag(self):
        """Whether the file had a tag of the read scope when last read."""
        return self.engine.has_tag_type(self.scope)

    def has_tag_type(self, scope):
        return self.engine.has_tag_type(scope)

    @property
    def size(self):
        """The size in bytes the ID3v2 tag would have if committed."""
        self.__sync()
        return self.engine.estimate_size()

    def invalid_frames(self):
        """See validator.invalid_frames."""
        return validator.invalid_frames(self)


def strip(filename, scope=V_ALL):
    """Remove tags from a file without reading them.

    Returns the bitmask of the tag types removed.
    """

    engine = ID3Engine()
    if not engine.link(filename, V_NONE):
        raise ID3LinkError("{}: cannot read tags".format(filename))
    return engine.strip(scope)
