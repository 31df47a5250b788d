# -*- coding: utf-8 -*-

# Copyright (C) 2005  Michael Urman
#
# This program is free software; you can redistribute it and/or modify
# it under the terms of version 2 of the GNU General Public License as
# published by the Free Software Foundation.

"""A single ID3 frame: a frame id and a map of field values."""

from warnings import warn

from id3kit import info
from id3kit._id3util import (
    UnknownFrameIdError, UnknownFieldIdError, InvalidFieldError, ID3Warning)
from id3kit.info import FieldKind

# Text fields that follow the frame's textenc field. Every other text
# field is always ISO-8859-1.
ENCODED_FIELDS = ("text", "description", "filename")


class Frame(object):
    """Fundamental unit of ID3 data.

    A frame has an id ("TIT2", "COMM", ...) and a set of named fields.
    Which fields a frame may hold is given by its definition in the frame
    registry::

        frame = Frame("COMM", textenc=0, language="eng", text="Hello")
        frame.text            #=> "Hello"
        frame["description"]  #=> None
        frame["url"] = "x"    # raises InvalidFieldError

    Values are ints, bytes or strings depending on the field kind.
    Multiple values of a text field are separated by NUL characters.
    """

    def __init__(self, frame_id, **fields):
        self.definition = info.frame(frame_id)
        if self.definition is None:
            raise UnknownFrameIdError(frame_id)
        self._id = self.definition.id
        self._fields = {}
        self._raw = None
        self._dirty = True
        for field_id, value in fields.items():
            self.set(field_id, value)

    @classmethod
    def from_raw(cls, engine, raw):
        """Construct a frame from an engine frame."""

        self = cls(raw.num)
        textenc = None
        field_ids = list(self.definition.fields)
        if "textenc" in field_ids:
            field_ids.remove("textenc")
            field_ids.insert(0, "textenc")

        for field_id in field_ids:
            definition = info.field(field_id)
            raw_field = engine.get_field(raw, definition.num)
            if raw_field is None:
                warn("{}: engine frame has no {} field".format(
                     self._id, field_id), ID3Warning)
                continue

            if definition.kind == FieldKind.INTEGER:
                value = raw_field.get_integer()
            elif definition.kind == FieldKind.BINARY:
                value = raw_field.get_binary()
            elif textenc:
                value = raw_field.get_wide_text()
            else:
                value = raw_field.get_ascii_text()

            if field_id == "textenc":
                textenc = value
            self._fields[field_id] = value

        if "text" in self.definition.fields:
            self._fields.setdefault("text", "")

        self._raw = raw
        self._dirty = False
        return self

    @classmethod
    def from_dict(cls, mapping):
        """Construct a frame from a {"id": frame id, field: value} mapping.

        Unknown frame ids and fields are kept as they are so invalid
        frames can be reported instead of rejected.
        """

        mapping = dict(mapping)
        frame_id = mapping.pop("id")
        self = cls.__new__(cls)
        self.definition = info.frame(frame_id)
        self._id = self.definition.id if self.definition else frame_id
        self._fields = mapping
        self._raw = None
        self._dirty = True
        return self

    id = property(lambda s: s._id, doc="The four character frame id")

    @property
    def allowed_fields(self):
        if self.definition is None:
            return ()
        return self.definition.fields

    @property
    def fields(self):
        """A copy of the field map."""
        return dict(self._fields)

    @property
    def dirty(self):
        """Whether the frame changed since it was last read or written."""
        return self._dirty

    def get(self, field_id):
        return self._fields.get(field_id)

    def set(self, field_id, value):
        if info.field(field_id) is None:
            raise UnknownFieldIdError(field_id)
        if field_id not in self.allowed_fields:
            raise InvalidFieldError(
                "{} frames have no {!r} field".format(self._id, field_id))
        self._fields[field_id] = value
        self._dirty = True

    __getitem__ = get
    __setitem__ = set

    def __delitem__(self, field_id):
        del self._fields[field_id]
        self._dirty = True

    def __contains__(self, field_id):
        return field_id in self._fields

    def _get_text(self):
        return self._fields.get("text") or ""

    def _set_text(self, value):
        self.set("text", value)

    text = property(_get_text, _set_text)

    @property
    def genres(self):
        """The genres of a content type frame, see info.parse_genres."""
        return info.parse_genres(self.text)

    def as_dict(self):
        result = {"id": self._id}
        result.update(self._fields)
        return result

    def to_raw(self, engine):
        """Return an engine frame with the values of this frame.

        If nothing changed since the frame was read or last converted, the
        engine frame from then is returned as is; otherwise a new one is
        made.
        """

        if not self._dirty and self._raw is not None:
            return self._raw
        if self.definition is None or not self.definition.num:
            raise UnknownFrameIdError(self._id)

        raw = engine.new_frame(self.definition.num)

        textenc = self._fields.get("textenc")
        field_ids = [f for f in self._fields if f in self.definition.fields]
        if "textenc" in field_ids:
            field_ids.remove("textenc")
            field_ids.insert(0, "textenc")

        for field_id in field_ids:
            value = self._fields[field_id]
            definition = info.field(field_id)
            raw_field = engine.get_field(raw, definition.num)
            if raw_field is None or value is None:
                continue

            if definition.kind == FieldKind.INTEGER:
                raw_field.set_integer(value)
            elif definition.kind == FieldKind.BINARY:
                raw_field.set_binary(value)
            elif field_id in ENCODED_FIELDS and textenc:
                raw_field.set_encoding(textenc)
                raw_field.set_wide_text(value)
            else:
                raw_field.set_ascii_text(value)

        self._raw = raw
        self._dirty = False
        return raw

    def __eq__(self, other):
        if isinstance(other, Frame):
            return self._id == other._id and self._fields == other._fields
        try:
            return self.as_dict() == dict(other)
        except (TypeError, ValueError):
            return NotImplemented

    def __hash__(self):
        raise TypeError("Frame objects are unhashable")

    def __str__(self):
        return self.text

    def __repr__(self):
        """Python representation of a frame.

        The string returned is a valid Python expression to construct
        a copy of this frame.
        """
        kw = ["{}={!r}".format(k, v) for k, v in self._fields.items()]
        return "{}({})".format(self._id, ', '.join(kw))
