from id3kit import info
from id3kit._id3util import ID3JunkFrameError, InvalidValueError
from id3kit._specs import (
    ByteSpec, EncodingSpec, IntegerSpec, BinaryDataSpec, FixedBinarySpec,
    FixedWidthStringSpec, Latin1TextSpec, EncodedTextSpec, Layout,
    get_layout)
from tests import TestCase, add


class Body(object):
    def __init__(self, encoding):
        self.encoding = encoding


class SpecSanityChecks(TestCase):

    def test_bytespec(self):
        s = ByteSpec('name')
        self.assertEqual((97, b'bcdefg'), s.read(None, b'abcdefg'))
        self.assertEqual(b'a', s.write(None, 97))
        self.assertRaises(InvalidValueError, s.validate, None, 256)

    def test_encodingspec(self):
        s = EncodingSpec('name')
        self.assertEqual((0, b'abcdefg'), s.read(None, b'abcdefg'))
        self.assertEqual((3, b'abcdefg'), s.read(None, b'\x03abcdefg'))
        self.assertEqual(b'\x00', s.write(None, 0))
        self.assertRaises(InvalidValueError, s.validate, None, 4)

    def test_integerspec(self):
        s = IntegerSpec('name')
        self.assertEqual((258, b''), s.read(None, b'\x00\x00\x01\x02'))
        self.assertEqual(b'\x00\x00\x00\x05', s.write(None, 5))
        self.assertEqual(5, len(s.write(None, 2 ** 32)))

    def test_binarydataspec(self):
        s = BinaryDataSpec('name')
        self.assertEqual((b'abcdefg', b''), s.read(None, b'abcdefg'))
        self.assertEqual(b'ab', s.write(None, bytearray(b'ab')))

    def test_fixedbinaryspec(self):
        s = FixedBinarySpec('name', 1)
        self.assertEqual((b'a', b'bc'), s.read(None, b'abc'))
        self.assertEqual(b'\x00', s.write(None, b''))
        self.assertRaises(InvalidValueError, s.validate, None, b'ab')

    def test_fixedwidthstringspec(self):
        s = FixedWidthStringSpec('name', 3)
        self.assertEqual(('abc', b'defg'), s.read(None, b'abcdefg'))
        self.assertEqual(b'abc', s.write(None, 'abcdefg'))
        self.assertEqual(b'\x00\x00\x00', s.write(None, ''))
        self.assertEqual(b'a\x00\x00', s.write(None, 'a'))
        self.assertEqual(('a', b''), s.read(None, b'a\x00\x00'))

    def test_latin1textspec(self):
        s = Latin1TextSpec('name')
        self.assertEqual(('abcd', b'fg'), s.read(None, b'abcd\x00fg'))
        self.assertEqual(b'ab\x00', s.write(None, 'ab'))
        self.assertEqual(b'a?\x00', s.write(None, 'a\u1234'))
        last = Latin1TextSpec('name', terminated=False)
        self.assertEqual(('http://x', b''), last.read(None, b'http://x'))
        self.assertEqual(b'http://x', last.write(None, 'http://x'))

    def test_encodedtextspec(self):
        s = EncodedTextSpec('name')
        f = Body(0)
        self.assertEqual(('abcd', b'fg'), s.read(f, b'abcd\x00fg'))
        self.assertEqual(b'abcdefg\x00', s.write(f, 'abcdefg'))

    def test_encodedtextspec_utf16(self):
        s = EncodedTextSpec('name')
        f = Body(1)
        self.assertEqual(b'\xff\xfea\x00\x00\x00', s.write(f, 'a'))
        self.assertEqual(('a', b'x'), s.read(f, b'\xff\xfea\x00\x00\x00x'))
        self.assertEqual(('a', b''), s.read(f, b'\xfe\xff\x00a\x00\x00'))
        # no BOM means little endian
        self.assertEqual(('a', b''), s.read(f, b'a\x00\x00\x00'))

    def test_encodedtextspec_leading_bom_kept(self):
        s = EncodedTextSpec('name')
        f = Body(1)
        data = s.write(f, '\ufeffab')
        self.assertEqual(data[:4], b'\xff\xfe\xff\xfe')
        self.assertEqual(('\ufeffab', b''), s.read(f, data))

    def test_encodedtextspec_odd_terminator(self):
        s = EncodedTextSpec('name')
        f = Body(2)
        # the first 00 00 pair is not aligned and does not terminate
        data = b'\x01\x00\x00\x41\x00\x00'
        self.assertEqual(('\u0100A', b''), s.read(f, data))

    def test_encodedtextspec_multiple(self):
        s = EncodedTextSpec('name', multiple=True)
        f = Body(0)
        self.assertEqual(('a\x00b', b''), s.read(f, b'a\x00b\x00'))
        self.assertEqual(('a\x00b', b''), s.read(f, b'a\x00b'))
        self.assertEqual(b'a\x00b\x00', s.write(f, 'a\x00b'))
        f = Body(3)
        self.assertEqual(b'\xc3\xa4\x00', s.write(f, '\xe4'))
        self.assertEqual(('\xe4', b''), s.read(f, b'\xc3\xa4\x00'))

    def test_encodedtextspec_junk(self):
        s = EncodedTextSpec('name')
        self.assertRaises(ID3JunkFrameError, s.read, Body(3), b'\xff\x00')

    def test_unhashable(self):
        self.assertRaises(TypeError, hash, ByteSpec('name'))

add(SpecSanityChecks)


class TLayout(TestCase):

    def test_read_text_frame(self):
        layout = get_layout(info.frame("TIT2"))
        self.assertEqual(layout.read(b'\x00Title'),
                         {'textenc': 0, 'text': 'Title'})
        self.assertEqual(layout.read(b'\x01\xff\xfeT\x00i\x00\x00\x00'),
                         {'textenc': 1, 'text': 'Ti'})
        self.assertEqual(layout.read(b'\x01T\x00i\x00\x00\x00'),
                         {'textenc': 1, 'text': 'Ti'})

    def test_write_text_frame(self):
        layout = get_layout(info.frame("TIT2"))
        self.assertEqual(layout.write({'textenc': 0, 'text': 'Title'}),
                         b'\x00Title\x00')
        self.assertEqual(layout.write({'textenc': 2, 'text': 'T'}),
                         b'\x02\x00T\x00\x00')

    def test_comm(self):
        layout = get_layout(info.frame("COMM"))
        values = {'textenc': 0, 'language': 'eng', 'description': 'd',
                  'text': 'Hello'}
        data = layout.write(values)
        self.assertEqual(data, b'\x00engd\x00Hello\x00')
        self.assertEqual(layout.read(data), values)

    def test_short_body(self):
        layout = get_layout(info.frame("POPM"))
        self.assertEqual(layout.read(b'a@b\x00\x05'),
                         {'email': 'a@b', 'rating': 5})

    def test_empty_body_is_junk(self):
        layout = get_layout(info.frame("TIT2"))
        self.assertRaises(ID3JunkFrameError, layout.read, b'')

    def test_every_frame_has_a_layout(self):
        for definition in info.REGISTRY.frames[1:]:
            layout = get_layout(definition)
            self.assertTrue(isinstance(layout, Layout))
            self.assertEqual(sorted(s.name for s in layout),
                             sorted(definition.fields))
            for spec in layout:
                self.assertEqual(spec.kind, info.field(spec.name).kind)

add(TLayout)
