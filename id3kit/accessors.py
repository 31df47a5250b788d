# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.

"""Friendly names for common frames.

`Accessors` is mixed into `id3kit.tag.Tag`; every name in ACCESSORS
becomes a property::

    tag.title = "Shy Boy"        # sets the TIT2 text
    tag.track = [5, 12]          # TRCK "5/12"
    tag.track                    #=> [5, 12]
    tag.year = None              # removes TYER

The host class provides text(frame_id), set_text(frame_id, value),
remove_frame(frame_id) and getall(frame_id).
"""

from id3kit import info


def _decode_part(text):
    try:
        return [int(part) for part in text.split("/")]
    except ValueError:
        return text


def _encode_part(value):
    if isinstance(value, (int, str)):
        return str(value)
    return "/".join(str(part) for part in value)


def _decode_year(text):
    try:
        return int(text)
    except ValueError:
        return text


# name: (frame id, decode, encode); None means plain text
ACCESSORS = {
    "title": ("TIT2", None, None),
    "performer": ("TPE1", None, None),
    "artist": ("TPE1", None, None),
    "album": ("TALB", None, None),
    "genre": ("TCON", None, None),
    "content_type": ("TCON", None, None),
    "year": ("TYER", _decode_year, str),
    "track": ("TRCK", _decode_part, _encode_part),
    "part_of_set": ("TPOS", _decode_part, _encode_part),
    "disc": ("TPOS", _decode_part, _encode_part),
    "comment": ("COMM", None, None),
    "composer": ("TCOM", None, None),
    "grouping": ("TIT1", None, None),
    "bpm": ("TBPM", None, None),
    "subtitle": ("TIT3", None, None),
    "date": ("TDAT", None, None),
    "time": ("TIME", None, None),
    "language": ("TLAN", None, None),
    "lyrics": ("USLT", None, None),
    "lyricist": ("TEXT", None, None),
    "band": ("TPE2", None, None),
    "conductor": ("TPE3", None, None),
    "interpreted_by": ("TPE4", None, None),
    "remixed_by": ("TPE4", None, None),
    "publisher": ("TPUB", None, None),
    "encoded_by": ("TENC", None, None),
}


def resolve(id_or_name):
    """Return the frame id for a friendly name, frame id or frame number."""

    if isinstance(id_or_name, int):
        definition = info.frame(id_or_name)
        return definition.id if definition is not None else id_or_name
    try:
        return ACCESSORS[id_or_name][0]
    except (KeyError, TypeError):
        return id_or_name


def _accessor(frame_id, decode, encode):

    def getter(self):
        text = self.text(frame_id)
        if text is None or decode is None:
            return text
        return decode(text)

    def setter(self, value):
        if value is None:
            self.remove_frame(frame_id)
        else:
            self.set_text(frame_id, encode(value) if encode else value)

    return property(getter, setter,
                    doc="{} frame text".format(info.frame(frame_id).id))


class Accessors(object):
    """Properties for the frames in ACCESSORS."""

    comment_frames = property(lambda s: s.getall("COMM"),
                              doc="All comment frames")
    genres = property(lambda s: info.parse_genres(s.text("TCON")),
                      doc="The parsed genres of the content type frame")

    def resolve(self, id_or_name):
        return resolve(id_or_name)


for _name, _args in ACCESSORS.items():
    setattr(Accessors, _name, _accessor(*_args))
del _name, _args
