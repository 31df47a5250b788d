# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.

"""Tag engines read and write the bytes of a tag.

The object model in :mod:`id3kit.frame` and :mod:`id3kit.tag` only talks
to an engine through the `TagEngine` interface and the `RawFrame` and
`RawField` objects it hands out. `ID3Engine` is the file backed
implementation: it reads ID3v2.2, 2.3, 2.4 and ID3v1/v1.1 and writes
ID3v2.4 and ID3v1.1.
"""

import errno
import logging
import os.path
import struct
import zlib

from warnings import warn

from id3kit import V_NONE, V1, V2, V_ALL
from id3kit import info
from id3kit._id3util import (
    error, BitPaddedInt, unsynch, is_valid_frame_id, UnknownFrameIdError,
    TypeMismatchError, InvalidValueError, ID3NoHeaderError, ID3BadUnsynchData,
    ID3BadCompressedData, ID3UnsupportedVersionError,
    ID3EncryptionUnsupportedError, ID3JunkFrameError, ID3Warning)
from id3kit._specs import EncodedTextSpec, PIC_LAYOUT, get_layout
from id3kit._util import insert_bytes, delete_bytes
from id3kit.info import FieldKind

log = logging.getLogger(__name__)


class RawField(object):
    """One field of a RawFrame.

    Setters check the Python type of the value against the field kind and
    raise TypeMismatchError on a mismatch.
    """

    def __init__(self, frame, spec):
        self.__frame = frame
        self.spec = spec
        self.definition = info.field(spec.name)
        self.value = spec.default

    num = property(lambda s: s.definition.num)
    kind = property(lambda s: s.spec.kind)

    def __check(self, kind, value, types):
        if self.kind != kind:
            raise TypeMismatchError("{}: {} field, not {}".format(
                self.spec.name, self.kind.name.lower(), kind.name.lower()))
        if not isinstance(value, types):
            raise TypeMismatchError("{}: expected {}, got {}".format(
                self.spec.name, types[0].__name__, type(value).__name__))

    def get_integer(self):
        return self.value

    def set_integer(self, value):
        self.__check(FieldKind.INTEGER, value, (int,))
        self.value = self.spec.validate(self.__frame, value)

    def get_binary(self):
        return self.value

    def set_binary(self, value):
        self.__check(FieldKind.BINARY, value, (bytes, bytearray))
        self.value = self.spec.validate(self.__frame, value)

    def get_ascii_text(self):
        return self.value

    def set_ascii_text(self, value):
        """Store ISO-8859-1 text; other characters become '?'."""
        self.__check(FieldKind.TEXT, value, (str,))
        value = value.encode('latin1', 'replace').decode('latin1')
        self.value = self.spec.validate(self.__frame, value)

    def get_wide_text(self):
        return self.value

    def set_wide_text(self, value):
        self.__check(FieldKind.TEXT, value, (str,))
        self.value = self.spec.validate(self.__frame, value)

    def get_encoding(self):
        if isinstance(self.spec, EncodedTextSpec):
            return self.__frame.encoding
        return 0

    def set_encoding(self, encoding):
        """Set the text encoding used for this field.

        Encoded fields share the encoding of their frame, so this updates
        the frame's textenc field.
        """

        if not isinstance(encoding, int):
            raise TypeMismatchError("encoding: expected int, got {}".format(
                                    type(encoding).__name__))
        if not 0 <= encoding <= 3:
            raise InvalidValueError(
                "Invalid Encoding: {!r}".format(encoding))
        if isinstance(self.spec, EncodedTextSpec):
            textenc = self.__frame.field(info.field("textenc").num)
            if textenc is not None:
                textenc.value = encoding

    def __repr__(self):
        return "<RawField {}={!r}>".format(self.spec.name, self.value)


class RawFrame(object):
    """An engine side frame: a frame number and its fields.

    Frames with number 0 are frames the registry has no definition for;
    they keep their original id and body and are written back as they
    were read.
    """

    def __init__(self, num, frame_id=None, body=b''):
        definition = info.frame(num)
        if definition is None:
            raise UnknownFrameIdError(num)
        self.num = num
        self.frame_id = frame_id or definition.id
        self.body = body
        if num:
            self.layout = get_layout(definition)
            self.fields = [RawField(self, spec) for spec in self.layout]
        else:
            self.layout = None
            self.fields = []

    @classmethod
    def from_values(cls, definition, values):
        frame = cls(definition.num)
        for field in frame.fields:
            if field.spec.name in values:
                field.value = values[field.spec.name]
        return frame

    def field(self, field_num):
        for field in self.fields:
            if field.num == field_num:
                return field
        return None

    def values(self):
        return dict((f.spec.name, f.value) for f in self.fields)

    @property
    def encoding(self):
        for field in self.fields:
            if field.spec.name == 'textenc':
                return field.value
        return 0

    def render(self):
        if self.layout is None:
            return self.body
        return self.layout.write(self.values())

    def __repr__(self):
        return "<RawFrame {} {!r}>".format(self.frame_id, self.values())


class TagEngine(object):
    """The interface between the object model and a tag engine.

    Scopes are the V_* bitmasks from :mod:`id3kit`.
    """

    def link(self, filename, scope=V_ALL):
        """Read the tags in scope from a file; return True on success."""
        raise NotImplementedError

    def iterate_frames(self):
        """Return the engine's frames in tag order."""
        raise NotImplementedError

    def new_frame(self, num):
        """Return a new RawFrame for a frame number, not yet added."""
        raise NotImplementedError

    def add_frame(self, raw):
        raise NotImplementedError

    def remove_frame(self, raw):
        raise NotImplementedError

    def clear_frames(self):
        raise NotImplementedError

    def get_field(self, raw, field_num):
        """Return the RawField of a frame, or None if it has no such field."""
        raise NotImplementedError

    def set_padding(self, padding):
        raise NotImplementedError

    def estimate_size(self):
        raise NotImplementedError

    def has_tag_type(self, scope):
        raise NotImplementedError

    def strip(self, scope=V_ALL):
        """Remove tags from the file; return the bitmask of removed tags."""
        raise NotImplementedError

    def update(self, scope=V_ALL):
        """Write tags to the file; return the bitmask of written tags."""
        raise NotImplementedError


# ID3v2.2 frame ids and their ID3v2.3 counterparts. LNK and CRM are too
# different to carry over.
FRAMES_2_2 = {
    "UFI": "UFID", "TT1": "TIT1", "TT2": "TIT2", "TT3": "TIT3",
    "TP1": "TPE1", "TP2": "TPE2", "TP3": "TPE3", "TP4": "TPE4",
    "TCM": "TCOM", "TXT": "TEXT", "TLA": "TLAN", "TCO": "TCON",
    "TAL": "TALB", "TPA": "TPOS", "TRK": "TRCK", "TRC": "TSRC",
    "TYE": "TYER", "TDA": "TDAT", "TIM": "TIME", "TRD": "TRDA",
    "TMT": "TMED", "TFT": "TFLT", "TBP": "TBPM", "TCR": "TCOP",
    "TPB": "TPUB", "TEN": "TENC", "TSS": "TSSE", "TOF": "TOFN",
    "TLE": "TLEN", "TSI": "TSIZ", "TDY": "TDLY", "TKE": "TKEY",
    "TOT": "TOAL", "TOA": "TOPE", "TOL": "TOLY", "TOR": "TORY",
    "TXX": "TXXX", "WAF": "WOAF", "WAR": "WOAR", "WAS": "WOAS",
    "WCM": "WCOM", "WCP": "WCOP", "WPB": "WPUB", "WXX": "WXXX",
    "IPL": "IPLS", "MCI": "MCDI", "ETC": "ETCO", "MLL": "MLLT",
    "STC": "SYTC", "ULT": "USLT", "SLT": "SYLT", "COM": "COMM",
    "REV": "RVRB", "PIC": "APIC", "GEO": "GEOB", "CNT": "PCNT",
    "POP": "POPM", "BUF": "RBUF", "CRA": "AENC",
}

_PIC_MIMES = {"PNG": "image/png", "JPG": "image/jpeg"}

_KNOWN_IDS = frozenset(d.id for d in info.REGISTRY.frames if d.num)


def _fullread(fileobj, size):
    if size < 0:
        raise ValueError("Requested bytes ({}) less than zero".format(size))
    data = fileobj.read(size)
    if len(data) != size:
        raise EOFError("Read: {:d} Requested: {:d}".format(len(data), size))
    return data


class ID3Engine(TagEngine):
    """Reads and writes ID3v1 and ID3v2 tags of one file."""

    PEDANTIC = True

    FLAG23_COMPRESS = 0x0080
    FLAG23_ENCRYPT = 0x0040

    FLAG24_COMPRESS = 0x0008
    FLAG24_ENCRYPT = 0x0004
    FLAG24_UNSYNCH = 0x0002
    FLAG24_DATALEN = 0x0001

    def __init__(self):
        self.filename = None
        self.version = None
        self.__frames = []
        self.__found = V_NONE
        self.__flags = 0
        self.__padding = True
        # size of the existing ID3v2 tag without its header, -10 if none
        self.__insize = -10

    f_unsynch = property(lambda s: bool(s.__flags & 0x80))
    f_extended = property(lambda s: bool(s.__flags & 0x40))

    def link(self, filename, scope=V_ALL):
        self.filename = filename
        self.version = None
        self.__frames = []
        self.__found = V_NONE
        self.__flags = 0
        self.__insize = -10

        # nothing to read yet; update() will create the file
        if not os.path.isfile(filename):
            return True

        try:
            fileobj = open(filename, 'rb')
        except EnvironmentError as err:
            log.debug("cannot open %r: %s", filename, err)
            return False

        v2frames = []
        v1frames = []
        with fileobj:
            try:
                v2frames = self.__load_v2(fileobj, scope & V2)
            except (ID3NoHeaderError, EOFError):
                pass
            except (ValueError, NotImplementedError) as err:
                warn("{}: ignoring ID3v2 tag: {}".format(filename, err),
                     ID3Warning)
            else:
                if scope & V2:
                    self.__found |= V2

            if scope & V1:
                v1frames = self.__load_v1(fileobj)
                if v1frames is not None:
                    self.__found |= V1

        seen = set(f.frame_id for f in v2frames)
        self.__frames = v2frames + [f for f in (v1frames or [])
                                    if f.frame_id not in seen]
        return True

    def __load_v1(self, fileobj):
        try:
            fileobj.seek(-128, 2)
        except EnvironmentError:
            return None
        return ParseID3v1(fileobj.read(128))

    def __load_v2(self, fileobj, read_frames):
        fileobj.seek(0)
        data = _fullread(fileobj, 10)
        id3, vmaj, vrev, flags, size = struct.unpack('>3sBBB4s', data)
        if id3 != b'ID3':
            raise ID3NoHeaderError("'{}' doesn't start with an ID3 tag".format(
                                   self.filename))
        if vmaj not in (2, 3, 4):
            raise ID3UnsupportedVersionError("'{}' ID3v2.{} not supported".format(
                                             self.filename, vmaj))

        self.__flags = flags
        self.__insize = size = BitPaddedInt(size)
        self.version = (2, vmaj, vrev)

        if self.PEDANTIC:
            if ((2, 4, 0) <= self.version) and (flags & 0x0f):
                raise ValueError("'{}' has invalid flags {:#02x}".format(
                                 self.filename, flags))
            elif ((2, 3, 0) <= self.version < (2, 4, 0)) and (flags & 0x1f):
                raise ValueError("'{}' has invalid flags {:#02x}".format(
                                 self.filename, flags))

        if not read_frames:
            return []

        if self.f_extended and (2, 3, 0) <= self.version:
            extsize = _fullread(fileobj, 4)
            if extsize.decode('latin1') in _KNOWN_IDS:
                # Some tagger sets the extended header flag but
                # doesn't write an extended header; in this case, the
                # ID3 data follows immediately. Since no extended
                # header is going to be long enough to actually match
                # a frame, and if it's *not* a frame we're going to be
                # completely lost anyway, this seems to be the most
                # correct check.
                self.__flags ^= 0x40
                fileobj.seek(-4, 1)
            else:
                if self.version >= (2, 4, 0):
                    # the size covers the whole extended header
                    extsize = BitPaddedInt(extsize) - 4
                else:
                    # the size excludes itself
                    extsize = struct.unpack('>L', extsize)[0]
                _fullread(fileobj, extsize)
                size -= extsize + 4

        data = _fullread(fileobj, size)
        return list(self.__read_frames(data))

    def __determine_bpi(self, data, EMPTY=b"\x00" * 10):
        if self.version < (2, 4, 0):
            return int
        # have to special case whether to use bitpaddedints here
        # ID3v2.4 says to use them, but iTunes has it wrong

        # count number of tags found as BitPaddedInt and how far past
        o = 0
        asbpi = 0
        while o < len(data) - 10:
            part = data[o:o + 10]
            if part == EMPTY:
                bpioff = -((len(data) - o) % 10)
                break
            name, size, flags = struct.unpack('>4sLH', part)
            size = BitPaddedInt(size)
            o += 10 + size
            if name.decode('latin1') in _KNOWN_IDS:
                asbpi += 1
        else:
            bpioff = o - len(data)

        # count number of tags found as int and how far past
        o = 0
        asint = 0
        while o < len(data) - 10:
            part = data[o:o + 10]
            if part == EMPTY:
                intoff = -((len(data) - o) % 10)
                break
            name, size, flags = struct.unpack('>4sLH', part)
            o += 10 + size
            if name.decode('latin1') in _KNOWN_IDS:
                asint += 1
        else:
            intoff = o - len(data)

        # if more tags as int, or equal and bpi is past and int is not
        if asint > asbpi or (asint == asbpi and (bpioff >= 1 and intoff <= 1)):
            return int
        return BitPaddedInt

    def __read_frames(self, data):
        if self.version < (2, 4, 0) and self.f_unsynch:
            try:
                data = unsynch.decode(data)
            except ValueError:
                pass

        if (2, 3, 0) <= self.version:
            bpi = self.__determine_bpi(data)
            while data:
                header = data[:10]
                try:
                    name, size, flags = struct.unpack('>4sLH', header)
                except struct.error:
                    return  # not enough header
                if name.strip(b'\x00') == b'':
                    return

                name = name.decode('latin1')

                size = bpi(size)
                framedata = data[10:10 + size]
                data = data[10 + size:]
                if size == 0 or not is_valid_frame_id(name):
                    continue  # drop empty and junk frames

                try:
                    framedata = self.__load_framedata(flags, framedata)
                    frame = self.__load_frame(name, framedata)
                except error as err:
                    warn("{}: dropping {} frame: {}".format(
                         self.filename, name, err), ID3Warning)
                else:
                    yield frame

        elif (2, 2, 0) <= self.version:
            while data:
                header = data[0:6]
                try:
                    name, size = struct.unpack('>3s3s', header)
                except struct.error:
                    return  # not enough header

                size = struct.unpack('>L', b'\x00' + size)[0]

                if name.strip(b'\x00') == b'':
                    return

                name = name.decode('latin1')

                framedata = data[6:6 + size]
                data = data[6 + size:]

                if size == 0 or name not in FRAMES_2_2:
                    continue

                try:
                    yield self.__load_frame_2_2(name, framedata)
                except ID3JunkFrameError as err:
                    warn("{}: dropping {} frame: {}".format(
                         self.filename, name, err), ID3Warning)

    def __load_framedata(self, tflags, data):
        """Undo unsynchronisation and compression of a frame body."""

        if (2, 4, 0) <= self.version:
            if tflags & (self.FLAG24_COMPRESS | self.FLAG24_DATALEN):
                # The data length int is syncsafe in 2.4 (but not 2.3).
                # Only the raw bytes are kept, for writers that left
                # the length out of compressed frames.
                datalen_bytes = data[:4]
                data = data[4:]
            if tflags & self.FLAG24_UNSYNCH or self.f_unsynch:
                try:
                    data = unsynch.decode(data)
                except ValueError as err:
                    if self.PEDANTIC:
                        raise ID3BadUnsynchData('{}: {!r}'.format(err, data))
            if tflags & self.FLAG24_ENCRYPT:
                raise ID3EncryptionUnsupportedError("encrypted frame")
            if tflags & self.FLAG24_COMPRESS:
                try:
                    data = zlib.decompress(data)
                except zlib.error as err:
                    # the 4 bytes were compressed data after all
                    data = datalen_bytes + data
                    try:
                        data = zlib.decompress(data)
                    except zlib.error as err:
                        raise ID3BadCompressedData('{}: {!r}'.format(
                                                   err, data))

        else:
            if tflags & self.FLAG23_COMPRESS:
                data = data[4:]
            if tflags & self.FLAG23_ENCRYPT:
                raise ID3EncryptionUnsupportedError("encrypted frame")
            if tflags & self.FLAG23_COMPRESS:
                try:
                    data = zlib.decompress(data)
                except zlib.error as err:
                    raise ID3BadCompressedData('{}: {!r}'.format(err, data))

        return data

    def __load_frame(self, name, data):
        definition = info.frame(name)
        if definition is None:
            return RawFrame(0, frame_id=name, body=data)
        return RawFrame.from_values(
            definition, get_layout(definition).read(data))

    def __load_frame_2_2(self, name, data):
        definition = info.frame(FRAMES_2_2[name])
        if name == "PIC":
            values = PIC_LAYOUT.read(data)
            mime = values.get('mimetype', '')
            values['mimetype'] = _PIC_MIMES.get(mime.upper(), mime)
        else:
            values = get_layout(definition).read(data)
        return RawFrame.from_values(definition, values)

    def iterate_frames(self):
        return list(self.__frames)

    def new_frame(self, num):
        if not num or info.frame(num) is None:
            raise UnknownFrameIdError(num)
        return RawFrame(num)

    def add_frame(self, raw):
        self.__frames.append(raw)

    def remove_frame(self, raw):
        for i, frame in enumerate(self.__frames):
            if frame is raw:
                del self.__frames[i]
                return

    def clear_frames(self):
        del self.__frames[:]

    def get_field(self, raw, field_num):
        return raw.field(field_num)

    def set_padding(self, padding):
        self.__padding = bool(padding)

    def has_tag_type(self, scope):
        return bool(self.__found & scope)

    def __outsize(self, framesize, insize):
        if not self.__padding:
            return framesize
        if insize >= framesize:
            return insize
        return (framesize + 1024) & ~0x3FF

    def estimate_size(self):
        """Return the size in bytes an ID3v2 tag of the frames would take."""

        framesize = sum(len(self.__save_frame(f)) for f in self.__frames)
        if not framesize:
            return 0
        return 10 + self.__outsize(framesize, self.__insize)

    def __save_frame(self, frame):
        framedata = frame.render()
        datasize = BitPaddedInt.to_bytes(len(framedata), width=4)
        header = struct.pack('>4s4sH', frame.frame_id.encode('latin1'),
                             datasize, 0)
        return header + framedata

    def __open(self):
        try:
            return open(self.filename, 'rb+')
        except IOError as err:
            if err.errno != errno.ENOENT:
                raise
            with open(self.filename, 'ab'):  # create, then reopen
                pass
            return open(self.filename, 'rb+')

    def update(self, scope=V_ALL):
        written = V_NONE
        if scope & V2:
            try:
                self.__save_v2()
            except EnvironmentError as err:
                log.warning("%s: writing ID3v2 tag failed: %s",
                            self.filename, err)
            else:
                written |= V2
        if scope & V1:
            try:
                self.__save_v1()
            except EnvironmentError as err:
                log.warning("%s: writing ID3v1 tag failed: %s",
                            self.filename, err)
            else:
                written |= V1
        return written

    def __save_v2(self):
        f_data = b''.join(self.__save_frame(f) for f in self.__frames)
        if not f_data:
            try:
                delete(self.filename, V2)
            except EnvironmentError as err:
                if err.errno != errno.ENOENT:
                    raise
            self.__insize = -10
            return

        framesize = len(f_data)
        with self.__open() as f:
            idata = f.read(10)
            try:
                id3, vmaj, vrev, flags, insize = struct.unpack('>3sBBB4s',
                                                               idata)
            except struct.error:
                id3, insize = b'', 0

            insize = BitPaddedInt(insize)
            if id3 != b'ID3':
                insize = -10

            outsize = self.__outsize(framesize, insize)
            f_data += b'\x00' * (outsize - framesize)

            framesize = BitPaddedInt.to_bytes(outsize, width=4)
            header = struct.pack('>3sBBB4s', b'ID3', 4, 0, 0, framesize)

            if insize < outsize:
                insert_bytes(f, outsize - insize, insize + 10)
            elif insize > outsize:
                delete_bytes(f, insize - outsize, outsize + 10)

            f.seek(0)
            f.write(header + f_data)

        self.__insize = outsize

    def __save_v1(self):
        with self.__open() as f:
            try:
                f.seek(-128, 2)
            except IOError as err:
                # If the file is too small, that's OK - it just means
                # we're certain it doesn't have a v1 tag.
                if err.errno != errno.EINVAL:
                    # If we failed to see for some other reason, bail out.
                    raise
                f.seek(0, 2)

            data = f.read(128)
            if len(data) == 128 and data[:3] == b"TAG":
                f.seek(-128, 2)
            else:
                f.seek(0, 2)

            if self.__frames:
                f.write(MakeID3v1(self.__frames))
            f.truncate()

    def strip(self, scope=V_ALL):
        try:
            return delete(self.filename, scope)
        except EnvironmentError as err:
            log.warning("%s: stripping tags failed: %s", self.filename, err)
            return V_NONE


def delete(filename, scope=V_ALL):
    """Remove tags from a file.

    Returns the bitmask of the tag types that were removed.
    """

    removed = V_NONE
    with open(filename, 'rb+') as f:
        if scope & V1:
            try:
                f.seek(-128, 2)
            except IOError:
                pass
            else:
                if f.read(3) == b'TAG':
                    f.seek(-128, 2)
                    f.truncate()
                    removed |= V1

        # technically an insize=0 tag is invalid, but we delete it anyway
        # (primarily because we used to write it)
        if scope & V2:
            f.seek(0, 0)
            idata = f.read(10)
            try:
                id3, vmaj, vrev, flags, insize = struct.unpack('>3sBBB4s',
                                                               idata)
            except struct.error:
                id3, insize = b'', -1
            insize = BitPaddedInt(insize)

            if id3 == b'ID3' and insize >= 0:
                delete_bytes(f, insize + 10, 0)
                removed |= V2

    return removed


# ID3v1.1 support.
def ParseID3v1(data):
    """Parse an ID3v1 tag, returning a list of RawFrames or None."""

    if len(data) != 128 or data[:3] != b"TAG":
        return None

    tag, title, artist, album, year, comment, track, genre = struct.unpack(
        "3s30s30s30s4s29sBB", data)

    def fix(data):
        return data.split(b'\x00')[0].strip().decode('latin1')

    title, artist, album, year, comment = map(
        fix, [title, artist, album, year, comment])

    def text_frame(frame_id, text):
        return RawFrame.from_values(info.frame(frame_id),
                                    {'textenc': 0, 'text': text})

    frames = []
    if title:
        frames.append(text_frame('TIT2', title))
    if artist:
        frames.append(text_frame('TPE1', artist))
    if album:
        frames.append(text_frame('TALB', album))
    if year:
        frames.append(text_frame('TYER', year))
    if comment:
        frames.append(RawFrame.from_values(info.frame('COMM'), {
            'textenc': 0, 'language': 'eng', 'description': "ID3v1 Comment",
            'text': comment}))

    # Don't read a track number if it looks like the comment was
    # padded with spaces instead of nulls (thanks, WinAmp).
    if track and (track != 32 or data[-3] == 0):
        frames.append(text_frame('TRCK', str(track)))

    if genre != 255:
        frames.append(text_frame('TCON', "({})".format(genre)))

    return frames


def MakeID3v1(frames):
    """Return an ID3v1.1 tag string from a list of RawFrames."""

    def text(frame_id):
        for frame in frames:
            if frame.frame_id == frame_id:
                value = frame.values().get('text', '')
                return value.split('\x00')[0]
        return None

    v1 = {}

    for v2id, name in {"TIT2": "title", "TPE1": "artist",
                       "TALB": "album"}.items():
        value = (text(v2id) or "").encode('latin1', 'replace')[:30]
        v1[name] = value + (b'\x00' * (30 - len(value)))

    cmnt = (text("COMM") or "").encode('latin1', 'replace')[:28]
    v1['comment'] = cmnt + (b'\x00' * (29 - len(cmnt)))

    try:
        track = int((text("TRCK") or "").split('/')[0])
    except ValueError:
        track = 0
    v1['track'] = bytes((track if 0 <= track <= 255 else 0,))

    genre = 255
    genres = info.parse_genres(text("TCON"))
    if genres:
        index = info.genre_index(genres[0])
        if index is not None:
            genre = index
    v1['genre'] = bytes((genre,))

    year = text("TYER") or text("TDRC") or ""
    v1['year'] = (year.encode('latin1', 'replace') + b'\x00\x00\x00\x00')[:4]

    return (b'TAG' + v1['title'] + v1['artist'] + v1['album'] + v1['year'] +
            v1['comment'] + v1['track'] + v1['genre'])
