# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#               2013  Christoph Reiter
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.


class error(Exception):
    pass


class UnknownFrameIdError(error, KeyError):
    pass


class UnknownFieldIdError(error, KeyError):
    pass


class InvalidFieldError(error, ValueError):
    pass


class TypeMismatchError(error, TypeError):
    pass


class InvalidValueError(error, ValueError):
    pass


class ID3LinkError(error, IOError):
    pass


class ID3NoHeaderError(error, ValueError):
    pass


class ID3BadUnsynchData(error, ValueError):
    pass


class ID3BadCompressedData(error, ValueError):
    pass


class ID3UnsupportedVersionError(error, NotImplementedError):
    pass


class ID3EncryptionUnsupportedError(error, NotImplementedError):
    pass


class ID3JunkFrameError(error, ValueError):
    pass


class ID3Warning(error, UserWarning):
    pass


def is_valid_frame_id(frame_id):
    return frame_id.isalnum() and frame_id.isupper()


class unsynch(object):
    """Decoding of the ID3v2 unsynchronisation scheme.

    Writers insert a 0x00 after every 0xFF byte that is followed by 0x00
    or by something that could be mistaken for an MPEG sync (>= 0xE0).
    Tags are never written unsynchronised.
    """

    @staticmethod
    def decode(value):
        output = bytearray()
        safe = True
        for val in bytearray(value):
            if safe:
                output.append(val)
                safe = (val != 0xFF)
            else:
                if val >= 0xE0:
                    raise ValueError('invalid sync-safe string')
                elif val != 0x00:
                    output.append(val)
                safe = True
        if not safe:
            raise ValueError('string ended unsafe')
        return bytes(output)


class BitPaddedInt(int):
    """An integer stored using only the low `bits` bits of every byte.

    With the default of 7 bits this is the ID3v2 "synchsafe" integer.
    """

    def __new__(cls, value, bits=7, bigendian=True):
        mask = (1 << bits) - 1
        if isinstance(value, int):
            groups = []
            while value:
                groups.append(value & mask)
                value >>= 8
        elif isinstance(value, (bytes, bytearray)):
            groups = [b & mask for b in bytearray(value)]
            if bigendian:
                groups.reverse()
        else:
            raise TypeError("BitPaddedInt needs an int or bytes")

        numeric_value = 0
        for shift, group in enumerate(groups):
            numeric_value |= group << (shift * bits)

        self = int.__new__(cls, numeric_value)
        self.bits = bits
        self.bigendian = bigendian
        return self

    @staticmethod
    def to_bytes(value, bits=7, bigendian=True, width=4, minwidth=4):
        bits = getattr(value, 'bits', bits)
        bigendian = getattr(value, 'bigendian', bigendian)
        value = int(value)
        mask = (1 << bits) - 1

        groups = bytearray()
        while value:
            groups.append(value & mask)
            value >>= bits

        if width == -1:
            # PCNT and POPM use growing counters of at least minwidth bytes
            width = max(minwidth, len(groups))
        elif len(groups) > width:
            raise ValueError('Value too wide (>%d bytes)' % width)
        groups.extend(b'\x00' * (width - len(groups)))

        if bigendian:
            groups.reverse()
        return bytes(groups)

