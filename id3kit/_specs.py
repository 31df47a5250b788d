# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.

"""Byte layout of ID3v2 frame bodies.

Every field of a frame body is read and written by a Spec. A Spec's
read(frame, data) returns (value, remaining data) and its write(frame,
value) returns the bytes for the value. validate(frame, value) returns a
value suitable for write or raises.
"""

from id3kit._id3util import (
    BitPaddedInt, ID3JunkFrameError, InvalidValueError)
from id3kit.info import FieldKind


class Spec(object):

    kind = FieldKind.BINARY
    default = b""

    def __init__(self, name):
        self.name = name

    def __hash__(self):
        raise TypeError("Spec objects are unhashable")

    def __repr__(self):
        return "{}({!r})".format(type(self).__name__, self.name)


class ByteSpec(Spec):

    kind = FieldKind.INTEGER
    default = 0

    def read(self, frame, data):
        return data[0], data[1:]

    def write(self, frame, value):
        return bytes([value])

    def validate(self, frame, value):
        if not 0 <= value <= 255:
            raise InvalidValueError("Invalid byte value: {!r}".format(value))
        return value


class IntegerSpec(Spec):
    """A big-endian counter taking all remaining data, at least 4 bytes
    when written."""

    kind = FieldKind.INTEGER
    default = 0

    def read(self, frame, data):
        return int(BitPaddedInt(data, bits=8)), b''

    def write(self, frame, value):
        return BitPaddedInt.to_bytes(value, bits=8, width=-1)

    def validate(self, frame, value):
        if value < 0:
            raise InvalidValueError(
                "Invalid counter value: {!r}".format(value))
        return value


class EncodingSpec(ByteSpec):

    def read(self, frame, data):
        enc, data = super(EncodingSpec, self).read(frame, data)
        if enc < 16:
            return enc, data
        else:
            return 0, bytes([enc]) + data

    def validate(self, frame, value):
        if 0 <= value <= 3:
            return value

        raise InvalidValueError("Invalid Encoding: {!r}".format(value))


class BinaryDataSpec(Spec):

    def read(self, frame, data):
        return data, b''

    def write(self, frame, value):
        return bytes(value)

    def validate(self, frame, value):
        return bytes(value)


class FixedBinarySpec(Spec):
    """Exactly `length` bytes, padded with NULs when written."""

    def __init__(self, name, length):
        super(FixedBinarySpec, self).__init__(name)
        self.length = length

    def read(self, frame, data):
        return data[:self.length], data[self.length:]

    def write(self, frame, value):
        return (bytes(value) + b'\x00' * self.length)[:self.length]

    def validate(self, frame, value):
        value = bytes(value)
        if len(value) > self.length:
            raise InvalidValueError(
                "Invalid FixedBinarySpec[{}] data: {!r}".format(
                    self.length, value))
        return value


class FixedWidthStringSpec(Spec):

    kind = FieldKind.TEXT
    default = ""

    def __init__(self, name, length):
        super(FixedWidthStringSpec, self).__init__(name)
        self.length = length

    def read(self, frame, data):
        return (data[:self.length].decode('latin1').rstrip('\x00'),
                data[self.length:])

    def write(self, frame, value):
        return (value.encode('latin1', 'replace') +
                b'\x00' * self.length)[:self.length]

    def validate(self, frame, value):
        return value[:self.length]


class Latin1TextSpec(Spec):
    """ISO-8859-1 text, NUL terminated unless it is the last field."""

    kind = FieldKind.TEXT
    default = ""

    def __init__(self, name, terminated=True):
        super(Latin1TextSpec, self).__init__(name)
        self.terminated = terminated

    def read(self, frame, data):
        if not self.terminated:
            return data.decode('latin1').rstrip('\x00'), b''
        if b"\x00" in data:
            data, ret = data.split(b'\x00', 1)
        else:
            ret = b""
        return data.decode('latin1'), ret

    def write(self, frame, value):
        data = value.encode('latin1', 'replace')
        if self.terminated:
            data += b'\x00'
        return data

    def validate(self, frame, value):
        return value.encode('latin1', 'replace').decode('latin1')


class EncodedTextSpec(Spec):
    """Text in the encoding given by the frame's textenc field.

    With multiple=True the field takes the rest of the frame; its values
    are separated by terminators on disk and by NUL characters in Python.
    """

    kind = FieldKind.TEXT
    default = ""

    # Okay, seriously. This is private and defined explicitly and
    # completely by the ID3 specification. You can't just add
    # encodings here however you want.
    _encodings = (('latin1', b'\x00'), ('utf16', b'\x00\x00'),
                  ('utf_16_be', b'\x00\x00'), ('utf8', b'\x00'))

    def __init__(self, name, multiple=False):
        super(EncodedTextSpec, self).__init__(name)
        self.multiple = multiple

    @classmethod
    def _split(cls, data, term):
        if len(term) == 1:
            if term in data:
                return data.split(term, 1)
            return data, None

        offset = -1
        try:
            while True:
                offset = data.index(term, offset + 1)
                if offset & 1:
                    continue
                return data[0:offset], data[offset + 2:]
        except ValueError:
            return data, None

    @classmethod
    def _decode(cls, data, encoding):
        enc = cls._encodings[encoding][0]
        if enc == 'utf16':
            # a single BOM selects the byte order, anything after it
            # belongs to the text
            if data[:2] == b'\xff\xfe':
                data, enc = data[2:], 'utf_16_le'
            elif data[:2] == b'\xfe\xff':
                data, enc = data[2:], 'utf_16_be'
            else:
                enc = 'utf_16_le'
        try:
            return data.decode(enc)
        except UnicodeDecodeError:
            raise ID3JunkFrameError("undecodable {} text".format(enc))

    @classmethod
    def _encode(cls, value, encoding):
        enc, term = cls._encodings[encoding]
        if enc == 'utf16':
            return b'\xff\xfe' + value.encode('utf_16_le') + term
        return value.encode(enc, 'replace') + term

    def read(self, frame, data):
        encoding = frame.encoding
        term = self._encodings[encoding][1]

        if not self.multiple:
            data, ret = self._split(data, term)
            return self._decode(data, encoding), ret or b""

        values = []
        while data:
            value, data = self._split(data, term)
            values.append(self._decode(value, encoding))
            if data is None:
                break
        return '\x00'.join(values), b""

    def write(self, frame, value):
        encoding = frame.encoding
        if not self.multiple:
            return self._encode(value, encoding)
        return b''.join(self._encode(v, encoding)
                        for v in value.split('\x00'))

    def validate(self, frame, value):
        return value


class _Body(object):
    """What the specs of one frame body share while reading or writing."""

    def __init__(self, encoding=0):
        self.encoding = encoding


class Layout(object):
    """The ordered specs making up one frame body."""

    def __init__(self, *specs):
        self.specs = specs

    def __iter__(self):
        return iter(self.specs)

    def read(self, data):
        """Parse data into a {field name: value} dict.

        Fields beyond the end of the data are left out; a body that is
        empty or cannot be decoded is junk.
        """

        if not data:
            raise ID3JunkFrameError("empty frame body")

        body = _Body()
        values = {}
        for spec in self.specs:
            if not data:
                break
            try:
                value, data = spec.read(body, data)
            except (IndexError, UnicodeDecodeError) as err:
                raise ID3JunkFrameError(str(err))
            values[spec.name] = value
            if spec.name == 'textenc':
                body.encoding = value
        return values

    def write(self, values):
        body = _Body(values.get('textenc', 0))
        return b''.join(spec.write(body, values.get(spec.name, spec.default))
                        for spec in self.specs)


_TEXT = Layout(EncodingSpec('textenc'),
               EncodedTextSpec('text', multiple=True))
_URL = Layout(Latin1TextSpec('url', terminated=False))
_DATA = Layout(BinaryDataSpec('data'))

_LAYOUTS = {
    "AENC": Layout(Latin1TextSpec('owner'), BinaryDataSpec('data')),
    "APIC": Layout(EncodingSpec('textenc'), Latin1TextSpec('mimetype'),
                   ByteSpec('picturetype'), EncodedTextSpec('description'),
                   BinaryDataSpec('data')),
    "COMM": Layout(EncodingSpec('textenc'),
                   FixedWidthStringSpec('language', 3),
                   EncodedTextSpec('description'),
                   EncodedTextSpec('text', multiple=True)),
    "ENCR": Layout(Latin1TextSpec('owner'), FixedBinarySpec('identifier', 1),
                   BinaryDataSpec('data')),
    "GEOB": Layout(EncodingSpec('textenc'), Latin1TextSpec('mimetype'),
                   EncodedTextSpec('filename'),
                   EncodedTextSpec('description'), BinaryDataSpec('data')),
    "GRID": Layout(Latin1TextSpec('owner'), FixedBinarySpec('identifier', 1),
                   BinaryDataSpec('data')),
    "LINK": Layout(FixedBinarySpec('identifier', 4), Latin1TextSpec('url'),
                   Latin1TextSpec('text', terminated=False)),
    "PCNT": Layout(IntegerSpec('counter')),
    "POPM": Layout(Latin1TextSpec('email'), ByteSpec('rating'),
                   IntegerSpec('counter')),
    "PRIV": Layout(Latin1TextSpec('owner'), BinaryDataSpec('data')),
    "SYLT": Layout(EncodingSpec('textenc'),
                   FixedWidthStringSpec('language', 3),
                   ByteSpec('timestampformat'), ByteSpec('contenttype'),
                   EncodedTextSpec('description'), BinaryDataSpec('data')),
    "SYTC": Layout(ByteSpec('timestampformat'), BinaryDataSpec('data')),
    "TXXX": Layout(EncodingSpec('textenc'), EncodedTextSpec('description'),
                   EncodedTextSpec('text', multiple=True)),
    "UFID": Layout(Latin1TextSpec('owner'), BinaryDataSpec('data')),
    "USER": Layout(EncodingSpec('textenc'),
                   FixedWidthStringSpec('language', 3),
                   EncodedTextSpec('text', multiple=True)),
    "USLT": Layout(EncodingSpec('textenc'),
                   FixedWidthStringSpec('language', 3),
                   EncodedTextSpec('description'),
                   EncodedTextSpec('text', multiple=True)),
    "WXXX": Layout(EncodingSpec('textenc'), EncodedTextSpec('description'),
                   Latin1TextSpec('url', terminated=False)),
}

# ID3v2.2 attached pictures store a three letter image format
# ("PNG", "JPG") where later versions have a MIME type.
PIC_LAYOUT = Layout(EncodingSpec('textenc'),
                    FixedWidthStringSpec('mimetype', 3),
                    ByteSpec('picturetype'), EncodedTextSpec('description'),
                    BinaryDataSpec('data'))


def get_layout(definition):
    """Return the Layout for a FrameDefinition."""

    try:
        return _LAYOUTS[definition.id]
    except KeyError:
        pass

    if definition.fields == ('textenc', 'text'):
        return _TEXT
    elif definition.fields == ('url',):
        return _URL
    elif definition.fields == ('data',):
        return _DATA
    raise ValueError("no layout for {}".format(definition.id))
