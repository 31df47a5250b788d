# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.

"""Information about ID3 frames, fields and genres.

Frames and fields are known by a number (stable, used by the tag engine)
and by a symbolic id::

    info.frame("TIT2")
    #=> FrameDefinition(num=47, id='TIT2',
    #       description='Title/songname/content description',
    #       fields=('textenc', 'text'))

    info.frame(47) is info.frame("TIT2")   #=> True

    info.field("text")
    #=> FieldDefinition(num=2, id='text', description='Text field',
    #       kind=<FieldKind.TEXT: 2>)

    info.genre_index("Pop")    #=> 13

The tables are built once at import time and never change afterwards.
"""

import enum
import re

from collections import namedtuple
from types import MappingProxyType

from id3kit._constants import GENRES


class FieldKind(enum.IntEnum):
    """How the value of a field is serialized."""

    INTEGER = 0
    BINARY = 1
    TEXT = 2


FieldDefinition = namedtuple(
    "FieldDefinition", ["num", "id", "description", "kind"])

FrameDefinition = namedtuple(
    "FrameDefinition", ["num", "id", "description", "fields"])


I, B, T = FieldKind.INTEGER, FieldKind.BINARY, FieldKind.TEXT

_FIELDS = [
    (0, "nofield", "No field", I),
    (1, "textenc", "Text encoding (unicode or ASCII)", I),
    (2, "text", "Text field", T),
    (3, "url", "A URL", T),
    (4, "data", "Data field", B),
    (5, "description", "Description field", T),
    (6, "owner", "Owner field", T),
    (7, "email", "Email field", T),
    (8, "rating", "Rating field", I),
    (9, "filename", "Filename field", T),
    (10, "language", "Language field", T),
    (11, "picturetype", "Picture type field", I),
    (12, "imageformat", "Image format field", T),
    (13, "mimetype", "Mimetype field", T),
    (14, "counter", "Counter field", I),
    (15, "identifier", "Identifier/Symbol field", B),
    (16, "volumeadj", "Volume adjustment field", I),
    (17, "numbits", "Number of bits field", I),
    (18, "volchgright", "Volume change on the right channel", I),
    (19, "volchgleft", "Volume change on the left channel", I),
    (20, "peakvolright", "Peak volume on the right channel", I),
    (21, "peakvolleft", "Peak volume on the left channel", I),
    (22, "timestampformat", "SYLT Timestamp Format", I),
    (23, "contenttype", "SYLT content type", I),
]

del I, B, T

_TEXT = ("textenc", "text")
_URL = ("url",)
_DATA = ("data",)

_FRAMES = [
    # Special frames
    (0, "____", "No known frame", ()),
    (1, "AENC", "Audio encryption", ("owner", "data")),
    (2, "APIC", "Attached picture",
     ("textenc", "mimetype", "picturetype", "description", "data")),
    (3, "ASPI", "Audio seek point index", _DATA),
    (4, "COMM", "Comments", ("textenc", "language", "description", "text")),
    (5, "COMR", "Commercial frame", _DATA),
    (6, "ENCR", "Encryption method registration",
     ("owner", "identifier", "data")),
    (7, "EQU2", "Equalisation (2)", _DATA),
    (8, "EQUA", "Equalization", _DATA),
    (9, "ETCO", "Event timing codes", _DATA),
    (10, "GEOB", "General encapsulated object",
     ("textenc", "mimetype", "filename", "description", "data")),
    (11, "GRID", "Group identification registration",
     ("owner", "identifier", "data")),
    (12, "IPLS", "Involved people list", _TEXT),
    (13, "LINK", "Linked information", ("identifier", "url", "text")),
    (14, "MCDI", "Music CD identifier", _DATA),
    (15, "MLLT", "MPEG location lookup table", _DATA),
    (16, "OWNE", "Ownership frame", _DATA),
    (17, "PRIV", "Private frame", ("owner", "data")),
    (18, "PCNT", "Play counter", ("counter",)),
    (19, "POPM", "Popularimeter", ("email", "rating", "counter")),
    (20, "POSS", "Position synchronisation frame", _DATA),
    (21, "RBUF", "Recommended buffer size", _DATA),
    (22, "RVA2", "Relative volume adjustment (2)", _DATA),
    (23, "RVAD", "Relative volume adjustment", _DATA),
    (24, "RVRB", "Reverb", _DATA),
    (25, "SEEK", "Seek frame", _DATA),
    (26, "SIGN", "Signature frame", _DATA),
    (27, "SYLT", "Synchronized lyric/text",
     ("textenc", "language", "timestampformat", "contenttype",
      "description", "data")),
    (28, "SYTC", "Synchronized tempo codes", ("timestampformat", "data")),
    # Text information frames
    (29, "TALB", "Album/Movie/Show title", _TEXT),
    (30, "TBPM", "BPM (beats per minute)", _TEXT),
    (31, "TCOM", "Composer", _TEXT),
    (32, "TCON", "Content type", _TEXT),
    (33, "TCOP", "Copyright message", _TEXT),
    (34, "TDAT", "Date", _TEXT),
    (35, "TDEN", "Encoding time", _TEXT),
    (36, "TDLY", "Playlist delay", _TEXT),
    (37, "TDOR", "Original release time", _TEXT),
    (38, "TDRC", "Recording time", _TEXT),
    (39, "TDRL", "Release time", _TEXT),
    (40, "TDTG", "Tagging time", _TEXT),
    (41, "TIPL", "Involved people list", _TEXT),
    (42, "TENC", "Encoded by", _TEXT),
    (43, "TEXT", "Lyricist/Text writer", _TEXT),
    (44, "TFLT", "File type", _TEXT),
    (45, "TIME", "Time", _TEXT),
    (46, "TIT1", "Content group description", _TEXT),
    (47, "TIT2", "Title/songname/content description", _TEXT),
    (48, "TIT3", "Subtitle/Description refinement", _TEXT),
    (49, "TKEY", "Initial key", _TEXT),
    (50, "TLAN", "Language(s)", _TEXT),
    (51, "TLEN", "Length", _TEXT),
    (52, "TMCL", "Musician credits list", _TEXT),
    (53, "TMED", "Media type", _TEXT),
    (54, "TMOO", "Mood", _TEXT),
    (55, "TOAL", "Original album/movie/show title", _TEXT),
    (56, "TOFN", "Original filename", _TEXT),
    (57, "TOLY", "Original lyricist(s)/text writer(s)", _TEXT),
    (58, "TOPE", "Original artist(s)/performer(s)", _TEXT),
    (59, "TORY", "Original release year", _TEXT),
    (60, "TOWN", "File owner/licensee", _TEXT),
    (61, "TPE1", "Lead performer(s)/Soloist(s)", _TEXT),
    (62, "TPE2", "Band/orchestra/accompaniment", _TEXT),
    (63, "TPE3", "Conductor/performer refinement", _TEXT),
    (64, "TPE4", "Interpreted, remixed, or otherwise modified by", _TEXT),
    (65, "TPOS", "Part of a set", _TEXT),
    (66, "TPRO", "Produced notice", _TEXT),
    (67, "TPUB", "Publisher", _TEXT),
    (68, "TRCK", "Track number/Position in set", _TEXT),
    (69, "TRDA", "Recording dates", _TEXT),
    (70, "TRSN", "Internet radio station name", _TEXT),
    (71, "TRSO", "Internet radio station owner", _TEXT),
    (72, "TSIZ", "Size", _TEXT),
    (73, "TSOA", "Album sort order", _TEXT),
    (74, "TSOP", "Performer sort order", _TEXT),
    (75, "TSOT", "Title sort order", _TEXT),
    (76, "TSRC", "ISRC (international standard recording code)", _TEXT),
    (77, "TSSE", "Software/Hardware and settings used for encoding", _TEXT),
    (78, "TSST", "Set subtitle", _TEXT),
    (79, "TXXX", "User defined text information",
     ("textenc", "description", "text")),
    (80, "TYER", "Year", _TEXT),
    # Special frames again
    (81, "UFID", "Unique file identifier", ("owner", "data")),
    (82, "USER", "Terms of use", ("textenc", "language", "text")),
    (83, "USLT", "Unsynchronized lyric/text transcription",
     ("textenc", "language", "description", "text")),
    # URL link frames
    (84, "WCOM", "Commercial information", _URL),
    (85, "WCOP", "Copyright/Legal information", _URL),
    (86, "WOAF", "Official audio file webpage", _URL),
    (87, "WOAR", "Official artist/performer webpage", _URL),
    (88, "WOAS", "Official audio source webpage", _URL),
    (89, "WORS", "Official internet radio station homepage", _URL),
    (90, "WPAY", "Payment", _URL),
    (91, "WPUB", "Official publisher webpage", _URL),
    (92, "WXXX", "User defined URL link", ("textenc", "description", "url")),
]


class Registry(object):
    """Read-only catalogue of frame and field definitions and genres.

    Lookups accept either the number or the symbolic id and return None
    for unknown keys; it is up to the caller to decide whether that is
    an error.
    """

    def __init__(self, frames, fields, genres):
        self.__fields = tuple(FieldDefinition(*f) for f in fields)
        self.__frames = tuple(FrameDefinition(*f) for f in frames)
        self.__genres = tuple(genres)

        by_key = {}
        for definition in self.__fields:
            by_key[definition.num] = by_key[definition.id] = definition
        self.__fields_by_key = MappingProxyType(by_key)

        by_key = {}
        for definition in self.__frames:
            for field_id in definition.fields:
                if field_id not in self.__fields_by_key:
                    raise ValueError("{}: unknown field {!r}".format(
                                     definition.id, field_id))
            if len(set(definition.fields)) != len(definition.fields):
                raise ValueError("{}: duplicate fields".format(definition.id))
            by_key[definition.num] = by_key[definition.id] = definition
        self.__frames_by_key = MappingProxyType(by_key)

        self.__genre_indexes = MappingProxyType(
            {name: i for i, name in reversed(list(enumerate(genres)))})

    frames = property(lambda s: s.__frames,
                      doc="All frame definitions, ordered by number")
    fields = property(lambda s: s.__fields,
                      doc="All field definitions, ordered by number")
    genres = property(lambda s: s.__genres, doc="The genre names")

    def frame(self, key):
        """Return the FrameDefinition for a frame number or id, or None."""
        try:
            return self.__frames_by_key.get(key)
        except TypeError:
            return None

    def field(self, key):
        """Return the FieldDefinition for a field number or id, or None."""
        try:
            return self.__fields_by_key.get(key)
        except TypeError:
            return None

    def genre_index(self, name):
        """Return the index of a genre name, or None."""
        try:
            return self.__genre_indexes.get(name)
        except TypeError:
            return None

    def genre_name(self, index):
        """Return the genre name with the given index, or None."""
        if isinstance(index, int) and 0 <= index < len(self.__genres):
            return self.__genres[index]
        return None


REGISTRY = Registry(_FRAMES, _FIELDS, GENRES)

frame = REGISTRY.frame
field = REGISTRY.field
genre_index = REGISTRY.genre_index
genre_name = REGISTRY.genre_name


_GENRE_RE = re.compile(r"((?:\((?P<id>[0-9]+|RX|CR)\))*)(?P<str>.+)?")


def _genre_code(code):
    if code.isdigit():
        return genre_name(int(code)) or "Unknown"
    elif code == "CR":
        return "Cover"
    elif code == "RX":
        return "Remix"
    return "Unknown"


def parse_genres(text):
    """Return the list of genres described by a content type (TCON) text.

    ID3 has several ways genres can be represented: plain names, bare
    numbers, "(NN)" references to the ID3v1 list (possibly several
    followed by a refinement), "CR"/"RX" for Cover and Remix, "((" to
    escape a name starting with a parenthesis, and NUL-separated values.
    """

    genres = []
    for value in (text or "").split("\x00"):
        if value.isdigit() or value in ("CR", "RX"):
            genres.append(_genre_code(value))
        elif value:
            newgenres = []
            genreid, dummy, genrename = _GENRE_RE.match(value).groups()

            if genreid:
                for gid in genreid[1:-1].split(")("):
                    newgenres.append(_genre_code(gid))

            if genrename:
                # "Unescaping" the first parenthesis
                if genrename.startswith("(("):
                    genrename = genrename[1:]
                if genrename not in newgenres:
                    newgenres.append(genrename)

            genres.extend(newgenres)

    return genres
