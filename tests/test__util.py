import random
import tempfile

from id3kit._util import ListProxy, insert_bytes, delete_bytes
from id3kit._id3util import BitPaddedInt, unsynch, is_valid_frame_id
from tests import TestCase, add
from tests.test_engine import unsynchronise


class TListProxy(TestCase):

    class Upper(ListProxy):
        def _convert(self, value):
            return value.upper()

    def test_list_ops(self):
        p = ListProxy([1, 2])
        p.append(3)
        p.insert(0, 0)
        self.assertEqual(list(p), [0, 1, 2, 3])
        del p[1]
        self.assertEqual(p, [0, 2, 3])
        self.assertEqual(len(p), 3)
        self.assertEqual(p[-1], 3)

    def test_convert(self):
        p = self.Upper(["a"])
        p.append("b")
        p.extend(["c"])
        p[0] = "x"
        p[1:2] = ["y", "z"]
        self.assertEqual(list(p), ["X", "Y", "Z", "C"])

    def test_unhashable(self):
        self.assertRaises(TypeError, hash, ListProxy())

    def test_eq(self):
        self.assertEqual(ListProxy([1]), ListProxy([1]))
        self.assertNotEqual(ListProxy([1]), [2])
        self.assertNotEqual(ListProxy([1]), (1,))

add(TListProxy)


class FileHandling(TestCase):
    def file(self, contents):
        temp = tempfile.TemporaryFile()
        self.addCleanup(temp.close)
        temp.write(contents)
        temp.flush()
        temp.seek(0)
        return temp

    def read(self, fobj):
        fobj.seek(0, 0)
        return fobj.read()

    def test_insert_into_empty(self):
        o = self.file(b'')
        insert_bytes(o, 8, 0)
        self.assertEqual(b'\x00' * 8, self.read(o))

    def test_insert_before_one(self):
        o = self.file(b'a')
        insert_bytes(o, 8, 0)
        self.assertEqual(b'a' + b'\x00' * 7 + b'a', self.read(o))

    def test_insert_after_one(self):
        o = self.file(b'a')
        insert_bytes(o, 8, 1)
        self.assertEqual(b'a' + b'\x00' * 8, self.read(o))

    def test_smaller_than_file_middle(self):
        o = self.file(b'abcdefghij')
        insert_bytes(o, 4, 4)
        self.assertEqual(b'abcdefghefghij', self.read(o))

    def test_smaller_than_file_across_end(self):
        o = self.file(b'abcdefghij')
        insert_bytes(o, 4, 8)
        self.assertEqual(b'abcdefghij\x00\x00ij', self.read(o))

    def test_smaller_than_file_at_beginning(self):
        o = self.file(b'abcdefghij')
        insert_bytes(o, 3, 0)
        self.assertEqual(b'abcabcdefghij', self.read(o))

    def test_zero(self):
        o = self.file(b'abcdefghij')
        self.assertRaises(AssertionError, insert_bytes, o, 0, 1)

    def test_negative(self):
        o = self.file(b'abcdefghij')
        self.assertRaises(AssertionError, insert_bytes, o, 8, -1)

    def test_delete_one(self):
        o = self.file(b'a')
        delete_bytes(o, 1, 0)
        self.assertEqual(b'', self.read(o))

    def test_delete_second_of_two(self):
        o = self.file(b'ab')
        delete_bytes(o, 1, 1)
        self.assertEqual(b'a', self.read(o))

    def test_delete_third_of_two(self):
        o = self.file(b'ab')
        self.assertRaises(AssertionError, delete_bytes, o, 1, 2)

    def test_delete_middle(self):
        o = self.file(b'abcdefg')
        delete_bytes(o, 3, 2)
        self.assertEqual(b'abfg', self.read(o))

    def test_delete_across_end(self):
        o = self.file(b'abcdefg')
        self.assertRaises(AssertionError, delete_bytes, o, 4, 8)

    def test_insert_delete_small_buffer(self):
        data = "".join(map(str, range(2000))).encode("ascii")
        o = self.file(data)
        insert_bytes(o, 611, 79, BUFFER_SIZE=7)
        self.assertEqual(data[:611 + 79] + data[79:], self.read(o))
        delete_bytes(o, 611, 79, BUFFER_SIZE=13)
        self.assertEqual(data, self.read(o))

    def test_many_changes(self, num_changes=50):
        data = b"ABCDEFGHIJKLMNOPQRSTUVWXYZ" * 64
        fobj = self.file(data)
        filesize = len(data)
        changes = []
        for i in range(num_changes):
            change_size = random.randrange(50, 100)
            change_offset = random.randrange(0, filesize)
            filesize += change_size
            changes.append((change_offset, change_size))

        for offset, size in changes:
            insert_bytes(fobj, size, offset,
                         BUFFER_SIZE=random.randrange(1, 200))
        fobj.seek(0, 2)
        self.assertEqual(fobj.tell(), filesize)

        changes.reverse()
        for offset, size in changes:
            delete_bytes(fobj, size, offset,
                         BUFFER_SIZE=random.randrange(1, 200))
        self.assertEqual(self.read(fobj), data)

add(FileHandling)


class BitPaddedIntTest(TestCase):

    def test_zero(self):
        self.assertEqual(BitPaddedInt(b'\x00\x00\x00\x00'), 0)

    def test_1(self):
        self.assertEqual(BitPaddedInt(b'\x00\x00\x00\x01'), 1)

    def test_1l(self):
        self.assertEqual(
            BitPaddedInt(b'\x01\x00\x00\x00', bigendian=False), 1)

    def test_129(self):
        self.assertEqual(BitPaddedInt(b'\x00\x00\x01\x01'), 0x81)

    def test_129b(self):
        self.assertEqual(BitPaddedInt(b'\x00\x00\x01\x81'), 0x81)

    def test_65(self):
        self.assertEqual(BitPaddedInt(b'\x00\x00\x01\x81', 6), 0x41)

    def test_32b(self):
        self.assertEqual(BitPaddedInt(b'\xFF\xFF\xFF\xFF', bits=8),
                         0xFFFFFFFF)

    def test_32bi(self):
        self.assertEqual(BitPaddedInt(0xFFFFFFFF, bits=8), 0xFFFFFFFF)

    def test_s0(self):
        self.assertEqual(BitPaddedInt.to_bytes(0), b'\x00\x00\x00\x00')

    def test_s129(self):
        self.assertEqual(BitPaddedInt.to_bytes(129), b'\x00\x00\x01\x01')

    def test_s1l(self):
        self.assertEqual(BitPaddedInt.to_bytes(1, bigendian=False),
                         b'\x01\x00\x00\x00')

    def test_w129(self):
        self.assertEqual(BitPaddedInt.to_bytes(129, width=2), b'\x01\x01')

    def test_wsmall(self):
        self.assertRaises(ValueError, BitPaddedInt.to_bytes, 129, width=1)

    def test_varwidth(self):
        self.assertEqual(len(BitPaddedInt.to_bytes(100)), 4)
        self.assertEqual(len(BitPaddedInt.to_bytes(100, width=-1)), 4)
        self.assertEqual(
            len(BitPaddedInt.to_bytes(2 ** 32, bits=8, width=-1)), 5)

    def test_bad_type(self):
        self.assertRaises(TypeError, BitPaddedInt, "1234")

add(BitPaddedIntTest)


class TUnsynch(TestCase):

    def test_unsync_decode_roundtrip(self):
        for d in (b'\xff\xff\xff\xff', b'\xff\xf0\x0f\x00', b'\xff\x00\x0f\xf0'):
            self.assertEqual(d, unsynch.decode(unsynchronise(d)))
            self.assertNotEqual(d, unsynchronise(d))
        self.assertEqual(b'\xff\x44', unsynchronise(b'\xff\x44'))
        self.assertEqual(b'\xff\x00\x00', unsynchronise(b'\xff\x00'))

    def test_unsync_decode(self):
        self.assertRaises(ValueError, unsynch.decode, b'\xff\xff\xff\xff')
        self.assertRaises(ValueError, unsynch.decode, b'\xff\xf0\x0f\x00')
        self.assertEqual(b'\xff\x44', unsynch.decode(b'\xff\x44'))
        self.assertEqual(b'\xff\x00', unsynch.decode(b'\xff\x00\x00'))

add(TUnsynch)


class FrameIDValidate(TestCase):

    def test_valid(self):
        self.assertTrue(is_valid_frame_id("APIC"))
        self.assertTrue(is_valid_frame_id("TPE2"))

    def test_invalid(self):
        self.assertFalse(is_valid_frame_id("MP3e"))
        self.assertFalse(is_valid_frame_id("+ABC"))
        self.assertFalse(is_valid_frame_id("____"))

add(FrameIDValidate)
