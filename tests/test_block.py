import copy
import unittest

from aesblock.block_core import Block, block_to_decimal
from aesblock.field import gf_multiply
from aesblock.sbox import SubstitutionBox


class TestConstruction(unittest.TestCase):

    def test_from_size_is_all_zero(self):
        block = Block.from_size(5)
        self.assertEqual(block.length, 5)
        self.assertEqual(block.bits, (False,) * 5)

    def test_from_size_rejects_negative(self):
        with self.assertRaises(ValueError):
            Block.from_size(-1)

    def test_from_value_is_msb_first(self):
        self.assertEqual(Block.from_value(8, 0x57).to_bit_string(), "01010111")
        self.assertEqual(Block.from_value(10, 5).to_bit_string(), "0000000101")

    def test_from_value_truncates_high_bits(self):
        self.assertEqual(Block.from_value(4, 0x1F).to_bit_string(), "1111")

    def test_from_value_rejects_negative(self):
        with self.assertRaises(ValueError):
            Block.from_value(8, -3)

    def test_bit_string_round_trip(self):
        for bit_string in ("", "0", "1", "1010", "0001110100101", "1" * 33):
            self.assertEqual(Block.from_bit_string(bit_string).to_bit_string(), bit_string)

    def test_bit_string_rejects_invalid_characters(self):
        with self.assertRaises(ValueError):
            Block.from_bit_string("10x1")

    def test_bit_string_permissive_mode(self):
        self.assertEqual(Block.from_bit_string("10x1", strict=False).to_bit_string(), "1001")

    def test_from_bits_copies_input(self):
        bits = [True, False, True]
        block = Block.from_bits(bits)
        bits[0] = False
        self.assertEqual(block.to_bit_string(), "101")

    def test_strings_are_not_bit_sequences(self):
        with self.assertRaises(TypeError):
            Block("1010")
        with self.assertRaises(TypeError):
            Block.from_bits("0000")
        with self.assertRaises(TypeError):
            Block(b"\x01")

    def test_from_concatenation(self):
        block = Block.from_concatenation([Block.from_value(4, 0xA), Block.from_value(4, 0x5)])
        self.assertEqual(block.length, 8)
        self.assertEqual(block.to_decimal(), 0xA5)

    def test_from_concatenation_rejects_non_blocks(self):
        with self.assertRaises(TypeError):
            Block.from_concatenation([Block.from_size(4), "1010"])

    def test_from_bytes(self):
        block = Block.from_bytes(b"\x01\xff")
        self.assertEqual(block.to_bit_string(), "0000000111111111")
        self.assertEqual(block.to_bytes(), b"\x01\xff")

    def test_from_hex_string(self):
        block = Block.from_hex_string("09cf4F3C")
        self.assertEqual(block.length, 32)
        self.assertEqual(block.to_hex_string(), "09CF4F3C")

    def test_from_hex_string_rejects_invalid_digit(self):
        with self.assertRaises(ValueError):
            Block.from_hex_string("0G")

    def test_from_hex_string_rejects_non_ascii_digits(self):
        with self.assertRaises(ValueError):
            Block.from_hex_string("\u0663")
        with self.assertRaises(ValueError):
            Block.from_hex_string("\uff11")

    def test_clone_is_equal_and_independent(self):
        block = Block.from_value(8, 0x3C)
        for duplicate in (block.clone(), copy.copy(block), copy.deepcopy(block)):
            self.assertEqual(duplicate, block)
            self.assertIsNot(duplicate, block)

    def test_length_is_read_only(self):
        block = Block.from_size(8)
        with self.assertRaises(AttributeError):
            block.length = 4


class TestConversion(unittest.TestCase):

    def test_hex_string(self):
        self.assertEqual(Block.from_bit_string("1010").to_hex_string(), "A")
        self.assertEqual(Block.from_value(16, 0xBEEF).to_hex_string(), "BEEF")

    def test_hex_string_requires_nibbles(self):
        with self.assertRaises(ValueError):
            Block.from_bit_string("101010").to_hex_string()

    def test_to_decimal_is_width_safe(self):
        value = 2 ** 99 + 1
        self.assertEqual(Block.from_value(100, value).to_decimal(), value)

    def test_to_decimal_ceiling(self):
        with self.assertRaises(ValueError):
            Block.from_size(65).to_decimal(max_bits=64)
        self.assertEqual(Block.from_value(64, 7).to_decimal(max_bits=64), 7)

    def test_to_bytes_requires_whole_bytes(self):
        with self.assertRaises(ValueError):
            Block.from_size(7).to_bytes()

    def test_block_to_decimal(self):
        self.assertEqual(block_to_decimal(Block.from_bit_string("1101")), 13)

    def test_str_and_repr(self):
        block = Block.from_value(8, 0xA5)
        self.assertEqual(str(block), "10100101")
        self.assertEqual(repr(block), "Block(length=8, hex=A5)")
        self.assertEqual(repr(Block.from_bit_string("101")), "Block(length=3, bits='101')")


class TestSegmentXorShift(unittest.TestCase):

    def test_segment(self):
        block = Block.from_hex_string("A5C3")
        self.assertEqual(block.segment(4, 2).to_hex_string(), "C")
        self.assertEqual([s.to_hex_string() for s in block.segments(2)], ["A5", "C3"])

    def test_segment_preconditions(self):
        block = Block.from_size(16)
        with self.assertRaises(ValueError):
            block.segment(3, 0)
        with self.assertRaises(ValueError):
            block.segment(4, 4)
        with self.assertRaises(ValueError):
            block.segment(4, -1)
        with self.assertRaises(ValueError):
            block.segment(0, 0)

    def test_xor(self):
        a = Block.from_bit_string("1100")
        b = Block.from_bit_string("1010")
        self.assertEqual(a.xor(b).to_bit_string(), "0110")
        self.assertEqual(a ^ b, a.xor(b))

    def test_xor_length_mismatch(self):
        with self.assertRaises(ValueError):
            Block.from_size(8).xor(Block.from_size(7))

    def test_xor_algebra(self):
        a = Block.from_value(16, 0x1234)
        b = Block.from_value(16, 0xF00F)
        c = Block.from_value(16, 0x0FF0)
        zero = Block.from_size(16)

        self.assertEqual(a.xor(a.xor(b)), b)
        self.assertEqual(a.xor(b), b.xor(a))
        self.assertEqual(a.xor(b).xor(c), a.xor(b.xor(c)))
        self.assertEqual(a.xor(a), zero)

    def test_left_shift(self):
        block = Block.from_bit_string("10110001")
        self.assertEqual(block.left_shift().to_bit_string(), "01100010")
        self.assertEqual(block.to_bit_string(), "10110001")

    def test_left_shift_eight_times_clears(self):
        for value in (0x01, 0x80, 0xFF, 0x57):
            block = Block.from_value(8, value)
            for _ in range(8):
                block = block.left_shift()
            self.assertEqual(block, Block.from_size(8))

    def test_left_shift_of_empty_block(self):
        self.assertEqual(Block().left_shift(), Block())


class TestModularArithmetic(unittest.TestCase):

    def test_xtime_without_reduction(self):
        result = Block.from_value(8, 0x57).modular_multiply_by_x()
        self.assertEqual(result.to_bit_string(), "10101110")
        self.assertEqual(result.to_decimal(), 0xAE)

    def test_xtime_with_reduction(self):
        self.assertEqual(Block.from_value(8, 0x80).modular_multiply_by_x().to_decimal(), 0x1B)
        self.assertEqual(Block.from_value(8, 0xAE).modular_multiply_by_x().to_decimal(), 0x47)
        self.assertEqual(Block.from_value(8, 0x8E).modular_multiply_by_x().to_decimal(), 0x07)

    def test_known_products(self):
        a = Block.from_value(8, 0x57)
        self.assertEqual(a.modular_multiply(Block.from_value(8, 0x83)).to_decimal(), 0xC1)
        self.assertEqual(a.modular_multiply(Block.from_value(8, 0x13)).to_decimal(), 0xFE)
        self.assertEqual((a * Block.from_value(8, 0x83)).to_decimal(), 0xC1)

    def test_identity_and_zero(self):
        one = Block.from_value(8, 1)
        zero = Block.from_size(8)
        for value in range(256):
            a = Block.from_value(8, value)
            self.assertEqual(a.modular_multiply(one), a)
            self.assertEqual(a.modular_multiply(zero), zero)

    def test_matches_integer_reference(self):
        for x in range(0, 256, 7):
            for y in range(0, 256, 11):
                product = Block.from_value(8, x).modular_multiply(Block.from_value(8, y))
                self.assertEqual(product.to_decimal(), gf_multiply(x, y))

    def test_other_field_degree(self):
        # x^4 + x + 1
        block = Block.from_value(4, 0x9)
        self.assertEqual(block.modular_multiply_by_x().to_decimal(), 0x1)
        self.assertEqual(block.modular_multiply_by_x(0x13).to_decimal(), 0x1)

    def test_polynomial_degree_must_match(self):
        with self.assertRaises(ValueError):
            Block.from_value(8, 1).modular_multiply_by_x(0x13)

    def test_reducible_polynomial_is_rejected(self):
        block = Block.from_value(8, 0x80)
        with self.assertRaises(ValueError):
            block.modular_multiply_by_x(0x100)
        with self.assertRaises(ValueError):
            block.modular_multiply(Block.from_value(8, 0x02), 0x11A)

    def test_length_mismatch(self):
        with self.assertRaises(ValueError):
            Block.from_value(8, 3).modular_multiply(Block.from_value(4, 3))


class TestGTransformation(unittest.TestCase):

    def test_identity_substitution_rotates_segments(self):
        word = Block.from_hex_string("09CF4F3C")
        result = word.g(lambda segment: segment, Block.from_size(32))
        self.assertEqual(result.to_hex_string(), "CF4F3C09")
        for i in range(4):
            self.assertEqual(result.segment(4, i), word.segment(4, (i + 1) % 4))

    def test_aes_key_expansion_step(self):
        word = Block.from_hex_string("09CF4F3C")
        round_constant = Block.from_hex_string("01000000")
        result = word.g(SubstitutionBox.aes(), round_constant)
        self.assertEqual(result.to_hex_string(), "8B84EB01")

    def test_input_is_unchanged(self):
        word = Block.from_hex_string("2B7E1516")
        word.g(SubstitutionBox.identity(), Block.from_hex_string("FFFFFFFF"))
        self.assertEqual(word.to_hex_string(), "2B7E1516")

    def test_round_constant_length_mismatch(self):
        with self.assertRaises(ValueError):
            Block.from_size(32).g(SubstitutionBox.identity(), Block.from_size(8))

    def test_length_not_divisible_into_four(self):
        with self.assertRaises(ValueError):
            Block.from_size(30).g(lambda segment: segment, Block.from_size(30))

    def test_substitution_must_preserve_length(self):
        with self.assertRaises(ValueError):
            Block.from_size(32).g(lambda segment: Block.from_size(4), Block.from_size(32))


class TestValueSemantics(unittest.TestCase):

    def test_equality_includes_length(self):
        self.assertEqual(Block.from_value(8, 3), Block.from_bit_string("00000011"))
        self.assertNotEqual(Block.from_bit_string("0"), Block.from_bit_string("00"))

    def test_hashable(self):
        blocks = {Block.from_value(8, 3), Block.from_bit_string("00000011"), Block.from_size(8)}
        self.assertEqual(len(blocks), 2)

    def test_sequence_protocol(self):
        block = Block.from_bit_string("1001")
        self.assertEqual(len(block), 4)
        self.assertEqual(list(block), [True, False, False, True])
        self.assertTrue(block[0])
        self.assertFalse(block[1])
        self.assertEqual(block[1:3], Block.from_bit_string("00"))


if __name__ == "__main__":
    unittest.main()
