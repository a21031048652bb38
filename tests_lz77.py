import unittest
import contextlib
import dataclasses
import io
import os
import random
import shutil
import stat
import sys
import tempfile
from unittest import mock

from lz77_compressor import (
    LZ77Compressor, LZ77Config, TokenEncoder, MatchFinder, CompressionStats,
    Literal, Reference, InvalidData, ConfigurationError, AllocationFailure,
    find_match, compress, decompress, decompress_to_string, encode_tokens,
    decode_tokens, compress_to_binary, decompress_binary,
)
from format_lz77 import ContainerHeader, ContainerFormat, HEADER_SIZE
from archiver_lz77 import Archiver
from main_lz77 import main


def naive_find_match(data, pos, window_size, min_match, max_match):
    best_offset, best_length = 0, 0
    limit = min(max_match, len(data) - pos)
    if limit < min_match:
        return 0, 0

    for i in range(max(0, pos - window_size), pos):
        length = 0
        while length < limit and data[i + length] == data[pos + length]:
            length += 1
        if length >= min_match and length > best_length:
            best_offset, best_length = pos - i, length
            if length == limit:
                break

    return best_offset, best_length


class TestLZ77Compression(unittest.TestCase):
    def setUp(self):
        self.compressor = LZ77Compressor()

    def assertRoundTrip(self, data):
        tokens = self.compressor.compress(data)
        decompressed = self.compressor.decompress(tokens)
        self.assertEqual(data, decompressed)

    def test_simple_text(self):
        self.assertRoundTrip(b"Hello Hello Hello")

    def test_repeated_pattern(self):
        self.assertRoundTrip(b"abcabcabcabc")

    def test_empty_data(self):
        self.assertEqual(self.compressor.compress(b""), [])
        self.assertRoundTrip(b"")

    def test_single_byte(self):
        self.assertEqual(self.compressor.compress(b"A"), [Literal(0x41)])
        self.assertRoundTrip(b"A")

    def test_all_byte_values(self):
        data = bytes(range(256))
        tokens = self.compressor.compress(data)
        self.assertTrue(all(isinstance(t, Literal) for t in tokens))
        self.assertRoundTrip(data)

    def test_repeated_byte_values(self):
        self.assertRoundTrip(bytes(range(256)) * 10)

    def test_random_data(self):
        rng = random.Random(42)
        data = bytes(rng.randint(0, 255) for _ in range(1000))
        self.assertRoundTrip(data)

    def test_small_alphabet(self):
        rng = random.Random(7)
        data = bytes(rng.choice(b"ab") for _ in range(2000))
        self.assertRoundTrip(data)

    def test_unicode_string(self):
        text = "Привет, мир! Привет, мир! Hello 世界!"
        tokens = compress(text)
        self.assertEqual(decompress_to_string(tokens), text)

    def test_bytes_like_input(self):
        data = b"abcabcabcabc"
        expected = self.compressor.compress(data)
        self.assertEqual(self.compressor.compress(bytearray(data)), expected)
        self.assertEqual(self.compressor.compress(memoryview(data)), expected)

    def test_known_tokens(self):
        tokens = self.compressor.compress(b"abcabcabc")
        self.assertEqual(tokens, [
            Literal(ord('a')),
            Literal(ord('b')),
            Literal(ord('c')),
            Reference(offset=3, length=6),
        ])

    def test_run_of_single_byte(self):
        tokens = self.compressor.compress(b"A" * 10)
        self.assertEqual(tokens, [Literal(0x41), Reference(offset=1, length=9)])

    def test_max_match_truncation(self):
        tokens = self.compressor.compress(b"A" * 300)
        self.assertEqual(tokens, [
            Literal(0x41),
            Reference(offset=1, length=258),
            Reference(offset=259, length=41),
        ])

    def test_match_followed_by_match(self):
        tokens = self.compressor.compress(b"abcdabcdXYZWXYZWabcd")
        references = [t for t in tokens if isinstance(t, Reference)]
        self.assertEqual(len(references), 3)
        self.assertIsInstance(tokens[-1], Reference)

    def test_deterministic(self):
        data = b"the quick brown fox jumps over the lazy dog. " * 20
        first = LZ77Compressor().compress(data)
        second = LZ77Compressor().compress(data)
        self.assertEqual(first, second)
        self.assertEqual(encode_tokens(first), encode_tokens(second))

    def test_repetition_compresses(self):
        data = b"abcdefgh" * 100
        encoded = encode_tokens(compress(data))
        self.assertLess(len(encoded), len(data))

    def test_offsets_within_bounds(self):
        config = LZ77Config(window_size=16, min_match=3, max_match=10)
        data = b"she sells sea shells by the sea shore, she sells sea shells" * 3
        pos = 0
        for token in compress(data, config):
            if isinstance(token, Reference):
                self.assertGreaterEqual(token.offset, 1)
                self.assertLessEqual(token.offset, pos)
                self.assertLessEqual(token.offset, config.window_size)
                self.assertGreaterEqual(token.length, config.min_match)
                self.assertLessEqual(token.length, config.max_match)
                pos += token.length
            else:
                pos += 1
        self.assertEqual(pos, len(data))
        self.assertEqual(decompress(compress(data, config)), data)

    def test_custom_window_round_trip(self):
        data = b"the cat sat on the mat and the cat sat on the hat"
        compressor = LZ77Compressor(window_size=1024)
        self.assertEqual(compressor.decompress(compressor.compress(data)), data)


class TestMatchFinder(unittest.TestCase):
    def test_no_match(self):
        self.assertEqual(find_match(b"abcdef", 3, 4096, 3, 258), (0, 0))

    def test_position_at_end(self):
        self.assertEqual(find_match(b"abc", 3, 4096, 3, 258), (0, 0))

    def test_remaining_shorter_than_min_match(self):
        self.assertEqual(find_match(b"abcab", 3, 4096, 3, 258), (0, 0))

    def test_zero_window(self):
        self.assertEqual(find_match(b"abcabc", 3, 0, 3, 258), (0, 0))

    def test_tie_prefers_most_distant(self):
        self.assertEqual(find_match(b"xyzQxyzRxyz", 8, 4096, 3, 258), (8, 3))

    def test_longer_match_wins_over_distance(self):
        self.assertEqual(find_match(b"abcXabcdYabcd", 9, 4096, 3, 258), (5, 4))

    def test_memoryview_input(self):
        data = b"abcXabcdYabcd"
        self.assertEqual(find_match(memoryview(data), 9, 4096, 3, 258), (5, 4))
        self.assertEqual(find_match(bytearray(data), 9, 4096, 3, 258), (5, 4))

    def test_overlapping_match(self):
        self.assertEqual(find_match(b"abababab", 2, 4096, 3, 258), (2, 6))

    def test_capped_at_max_match(self):
        self.assertEqual(find_match(b"A" * 50, 1, 4096, 3, 10), (1, 10))

    def test_window_boundary(self):
        data = b"abcdeabc"
        self.assertEqual(find_match(data, 5, 5, 3, 258), (5, 3))
        self.assertEqual(find_match(data, 5, 4, 3, 258), (0, 0))

    def test_agrees_with_forward_scan(self):
        rng = random.Random(1234)
        for alphabet, window_size, min_match, max_match in (
                (b"ab", 32, 3, 20),
                (b"abc", 7, 2, 5),
                (b"a", 16, 3, 258),
                (bytes(range(8)), 64, 1, 4)):
            data = bytes(rng.choice(alphabet) for _ in range(300))
            for pos in range(len(data) + 1):
                self.assertEqual(
                    find_match(data, pos, window_size, min_match, max_match),
                    naive_find_match(data, pos, window_size, min_match, max_match),
                    msg=f"pos={pos} window={window_size}")

    def test_does_not_mutate_input(self):
        data = bytearray(b"abcabcabcabc")
        snapshot = bytes(data)
        find_match(data, 6, 4096, 3, 258)
        self.assertEqual(bytes(data), snapshot)

    def test_match_finder_uses_config(self):
        finder = MatchFinder(b"abcdabc", LZ77Config(window_size=3))
        self.assertEqual(finder.find(4), (0, 0))
        finder = MatchFinder(b"abcdabc", LZ77Config(window_size=4))
        self.assertEqual(finder.find(4), (4, 3))


class TestWindowBoundary(unittest.TestCase):
    def test_pattern_exactly_window_apart_is_matched(self):
        tokens = compress(b"abcdabc", LZ77Config(window_size=4))
        self.assertEqual(tokens[-1], Reference(offset=4, length=3))

    def test_pattern_beyond_window_is_not_matched(self):
        data = b"abcdeabc"
        tokens = compress(data, LZ77Config(window_size=4))
        self.assertEqual(tokens, [Literal(b) for b in data])


class TestLZ77Config(unittest.TestCase):
    def test_defaults(self):
        config = LZ77Config()
        self.assertEqual((config.window_size, config.min_match, config.max_match), (4096, 3, 258))

    def test_frozen(self):
        config = LZ77Config()
        with self.assertRaises(dataclasses.FrozenInstanceError):
            config.window_size = 10

    def test_invalid_values(self):
        for kwargs in (
                {'max_match': 2},
                {'min_match': 0},
                {'window_size': 0},
                {'window_size': 65536},
                {'max_match': 65536},
                {'window_size': 3.5},
                {'min_match': True}):
            with self.assertRaises(ConfigurationError, msg=str(kwargs)):
                LZ77Config(**kwargs)

    def test_upper_limits_accepted(self):
        config = LZ77Config(window_size=65535, max_match=65535)
        self.assertEqual(config.max_match, 65535)

    def test_compressor_rejects_bad_config(self):
        with self.assertRaises(ConfigurationError):
            LZ77Compressor(min_match=5, max_match=4)

    def test_compressor_rejects_config_with_overrides(self):
        with self.assertRaises(ConfigurationError):
            LZ77Compressor(window_size=1024, config=LZ77Config())
        compressor = LZ77Compressor(config=LZ77Config(window_size=1024))
        self.assertEqual(compressor.window_size, 1024)
        self.assertEqual(LZ77Compressor(max_match=100).config, LZ77Config(max_match=100))

    def test_configuration_error_is_value_error(self):
        self.assertTrue(issubclass(ConfigurationError, ValueError))


class TestDecompressor(unittest.TestCase):
    def test_overlapping_copy(self):
        tokens = [Literal(ord('a')), Reference(offset=1, length=5)]
        self.assertEqual(decompress(tokens), b"aaaaaa")

    def test_overlapping_pattern(self):
        tokens = [Literal(ord('a')), Literal(ord('b')), Reference(offset=2, length=5)]
        self.assertEqual(decompress(tokens), b"abababa")

    def test_reference_before_output(self):
        with self.assertRaises(InvalidData):
            decompress([Reference(offset=1, length=1)])

    def test_zero_offset(self):
        with self.assertRaises(InvalidData):
            decompress([Literal(1), Reference(offset=0, length=1)])

    def test_offset_past_start(self):
        with self.assertRaises(InvalidData):
            decompress([Literal(1), Reference(offset=2, length=1)])

    def test_zero_length_reference(self):
        self.assertEqual(decompress([Literal(ord('a')), Reference(offset=1, length=0)]), b"a")

    def test_not_a_token(self):
        with self.assertRaises(InvalidData):
            decompress([(0, 0, 65)])

    def test_literal_out_of_byte_range(self):
        with self.assertRaises(InvalidData):
            decompress([Literal(300)])
        with self.assertRaises(InvalidData):
            decompress([Literal(-1)])

    def test_negative_reference_length(self):
        with self.assertRaises(InvalidData):
            decompress([Literal(97), Reference(offset=1, length=-3)])

    def test_invalid_data_is_value_error(self):
        with self.assertRaises(ValueError):
            decompress([Reference(offset=1, length=1)])


class TestTokenEncoder(unittest.TestCase):
    def test_wire_format(self):
        encoded = encode_tokens([Literal(0x41), Reference(offset=0x0102, length=0x0304)])
        self.assertEqual(encoded, b"\x00\x41\x01\x01\x02\x03\x04")

    def test_token_encoder(self):
        tokens = [
            Literal(65),
            Reference(offset=5, length=10),
            Literal(66),
        ]
        encoded = TokenEncoder.encode_tokens(tokens)
        self.assertEqual(len(encoded), 2 + 5 + 2)
        self.assertEqual(TokenEncoder.decode_tokens(encoded), tokens)

    def test_empty_stream(self):
        self.assertEqual(encode_tokens([]), b"")
        self.assertEqual(decode_tokens(b""), [])

    def test_unknown_tag(self):
        with self.assertRaises(InvalidData):
            decode_tokens(bytes([0x02]))

    def test_unknown_tag_after_valid_records(self):
        with self.assertRaises(InvalidData) as ctx:
            decode_tokens(b"\x00a\x00b\xff")
        self.assertIn("position 4", str(ctx.exception))

    def test_truncated_literal(self):
        with self.assertRaises(InvalidData):
            decode_tokens(b"\x00")

    def test_truncated_reference(self):
        with self.assertRaises(InvalidData):
            decode_tokens(b"\x00a\x01\x00\x01\x00")

    def test_unrepresentable_tokens(self):
        for token in (Literal(256), Reference(offset=70000, length=1), Reference(offset=1, length=-1)):
            with self.assertRaises(InvalidData, msg=repr(token)):
                encode_tokens([token])

    def test_binary_round_trip(self):
        for data in (b"", b"x", bytes(range(256)), b"abracadabra" * 30):
            tokens = compress(data)
            self.assertEqual(decode_tokens(encode_tokens(tokens)), tokens)
            self.assertEqual(decompress_binary(encode_tokens(tokens)), data)
            self.assertEqual(decompress_binary(compress_to_binary(data)), data)

    def test_decompress_binary_rejects_bad_offset(self):
        with self.assertRaises(InvalidData):
            decompress_binary(b"\x01\x00\x01\x00\x01")


class TestAllocationFailure(unittest.TestCase):
    def test_compress_out_of_memory(self):
        with mock.patch.object(MatchFinder, 'find', side_effect=MemoryError):
            with self.assertRaises(AllocationFailure) as ctx:
                compress(b"abcabc")
        self.assertIsInstance(ctx.exception, MemoryError)
        self.assertIsInstance(ctx.exception.__cause__, MemoryError)

    def test_decompress_out_of_memory(self):
        def tokens():
            yield Literal(97)
            raise MemoryError

        with self.assertRaises(AllocationFailure) as ctx:
            decompress(tokens())
        self.assertIsInstance(ctx.exception.__cause__, MemoryError)

    def test_decompress_binary_out_of_memory(self):
        def tokens(data):
            yield Literal(97)
            raise MemoryError

        with mock.patch.object(TokenEncoder, 'iter_tokens', side_effect=tokens):
            with self.assertRaises(AllocationFailure) as ctx:
                decompress_binary(b"\x00a")
        self.assertIsInstance(ctx.exception.__cause__, MemoryError)


class TestCompressionStats(unittest.TestCase):
    def test_counts(self):
        data = b"abcabcabc"
        tokens = compress(data)
        stats = CompressionStats(tokens, len(data))

        self.assertEqual(stats.literal_count, 3)
        self.assertEqual(stats.reference_count, 1)
        self.assertEqual(stats.total_reference_length, 6)
        self.assertEqual(stats.average_reference_length, 6.0)
        self.assertEqual(stats.encoded_size, len(encode_tokens(tokens)))
        self.assertAlmostEqual(stats.compression_ratio, 11 / 9 * 100)

    def test_empty(self):
        stats = CompressionStats([], 0)
        self.assertEqual(stats.compression_ratio, 0)
        self.assertEqual(stats.average_reference_length, 0.0)
        self.assertEqual(stats.summary(), "0 -> 0 bytes (0.0%)")

    def test_print_stats(self):
        stats = CompressionStats(compress(b"Hello Hello Hello"), 17)
        out = io.StringIO()
        stats.print_stats(out)
        self.assertIn("References:", out.getvalue())
        self.assertIn("Compression ratio:", out.getvalue())


class TestContainerFormat(unittest.TestCase):
    def test_header_layout(self):
        header = ContainerHeader(4096, 258)
        self.assertEqual(header.serialize(), b"LZ77R1\x10\x00\x01\x02")
        self.assertEqual(len(header.serialize()), HEADER_SIZE)

    def test_header_round_trip(self):
        header = ContainerHeader.from_config(LZ77Config(window_size=1024, max_match=100))
        self.assertEqual(ContainerHeader.deserialize(header.serialize()), header)

    def test_header_hashable(self):
        headers = {ContainerHeader(4096, 258), ContainerHeader(4096, 258), ContainerHeader(64, 16)}
        self.assertEqual(len(headers), 2)

    def test_truncated_header(self):
        with self.assertRaises(InvalidData):
            ContainerHeader.deserialize(b"LZ77R1\x10")

    def test_bad_magic(self):
        with self.assertRaises(InvalidData):
            ContainerHeader.deserialize(b"LZ77R2\x10\x00\x01\x02")

    def test_detection(self):
        payload = compress_to_binary(b"hello hello hello")
        wrapped = ContainerFormat.wrap(LZ77Config(), payload)
        self.assertFalse(ContainerFormat.has_header(payload))
        self.assertTrue(ContainerFormat.has_header(wrapped))

        header, unwrapped = ContainerFormat.unwrap(wrapped)
        self.assertEqual(unwrapped, payload)
        self.assertEqual(header.window_size, 4096)

    def test_decompress(self):
        data = b"the quick brown fox jumps over the lazy dog " * 10
        wrapped = ContainerFormat.wrap(LZ77Config(), compress_to_binary(data))
        self.assertEqual(ContainerFormat.decompress(wrapped), data)

    def test_offset_beyond_recorded_window(self):
        config = LZ77Config(window_size=2, min_match=1, max_match=5)
        payload = encode_tokens([Literal(1), Literal(2), Literal(3), Reference(offset=3, length=1)])
        with self.assertRaises(InvalidData):
            ContainerFormat.decompress(ContainerFormat.wrap(config, payload))

    def test_length_beyond_recorded_max_match(self):
        config = LZ77Config(window_size=2, min_match=1, max_match=5)
        payload = encode_tokens([Literal(1), Reference(offset=1, length=10)])
        with self.assertRaises(InvalidData):
            ContainerFormat.decompress(ContainerFormat.wrap(config, payload))


class TestArchiver(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()
        self.log = io.StringIO()
        self.archiver = Archiver(log_file=self.log)

    def tearDown(self):
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def _write(self, name, data):
        path = os.path.join(self.temp_dir, name)
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def _read(self, path):
        with open(path, 'rb') as f:
            return f.read()

    def test_compress_decompress_file(self):
        data = b"Hello World! " * 100
        source = self._write("test.txt", data)
        compressed = os.path.join(self.temp_dir, "test.lz77")
        restored = os.path.join(self.temp_dir, "restored.txt")

        self.archiver.compress_file(source, compressed)
        self.assertLess(os.path.getsize(compressed), len(data))
        self.assertEqual(self._read(compressed), compress_to_binary(data))

        self.archiver.decompress_file(compressed, restored)
        self.assertEqual(self._read(restored), data)
        self.assertIn("Compressed test.txt", self.log.getvalue())
        self.assertIn("Decompressed test.lz77", self.log.getvalue())

    def test_header_output(self):
        data = b"Content of file 1\n" * 50
        archiver = Archiver(use_header=True, log_file=self.log)
        compressed = archiver.compress_bytes(data)
        self.assertTrue(compressed.startswith(b"LZ77R1"))
        self.assertEqual(self.archiver.decompress_bytes(compressed), data)

    def test_stdin_stdout(self):
        data = b"piped data, piped data, piped data"
        stdout = io.BytesIO()
        archiver = Archiver(stdin=io.BytesIO(data), stdout=stdout, log_file=self.log)
        archiver.run()
        self.assertEqual(stdout.getvalue(), compress_to_binary(data))
        self.assertEqual(self.log.getvalue(), "")

        restored = io.BytesIO()
        archiver = Archiver(stdin=io.BytesIO(stdout.getvalue()), stdout=restored, log_file=self.log)
        archiver.run(decompress=True)
        self.assertEqual(restored.getvalue(), data)

    def test_string_input(self):
        stdout = io.BytesIO()
        archiver = Archiver(stdout=stdout, log_file=self.log)
        result = archiver.run(text="hello hello hello")
        self.assertEqual(result, compress_to_binary("hello hello hello"))
        self.assertEqual(stdout.getvalue(), result)

    def test_both_inputs_rejected(self):
        with self.assertRaises(ValueError):
            self.archiver.read_input(path="a.txt", text="a")

    def test_invalid_input_leaves_no_output(self):
        source = self._write("broken.lz77", b"\x00a\x02")
        target = os.path.join(self.temp_dir, "out.txt")

        with self.assertRaises(InvalidData):
            self.archiver.decompress_file(source, target)

        self.assertFalse(os.path.exists(target))
        self.assertEqual(os.listdir(self.temp_dir), ["broken.lz77"])

    def test_existing_output_kept_on_failure(self):
        source = self._write("broken.lz77", b"\x01\x00\x05\x00\x01")
        target = self._write("out.txt", b"previous")

        with self.assertRaises(InvalidData):
            self.archiver.decompress_file(source, target)

        self.assertEqual(self._read(target), b"previous")

    @unittest.skipUnless(os.name == 'posix', "POSIX file modes")
    def test_output_file_follows_umask(self):
        target = os.path.join(self.temp_dir, "out.lz77")
        old_umask = os.umask(0o022)
        try:
            self.archiver.write_output(b"\x00a", target)
        finally:
            os.umask(old_umask)
        self.assertEqual(stat.S_IMODE(os.stat(target).st_mode), 0o644)

    @unittest.skipUnless(os.name == 'posix', "POSIX file modes")
    def test_existing_output_mode_kept(self):
        target = self._write("out.lz77", b"previous")
        os.chmod(target, 0o640)
        self.archiver.write_output(b"\x00a", target)
        self.assertEqual(stat.S_IMODE(os.stat(target).st_mode), 0o640)
        self.assertEqual(self._read(target), b"\x00a")

    def test_verbose_statistics(self):
        archiver = Archiver(verbose=True, log_file=self.log)
        archiver.compress_bytes(b"abcabcabc")
        self.assertIn("LZ77 Compression Statistics", self.log.getvalue())


class TestCommandLine(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = self.temp_dir.name
        self.stderr = io.StringIO()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _main(self, *argv):
        with contextlib.redirect_stderr(self.stderr):
            main(list(argv))

    def test_string_round_trip(self):
        compressed = os.path.join(self.temp_path, "hello.lz77")
        restored = os.path.join(self.temp_path, "hello.txt")

        self._main('-s', 'hello hello hello', '-o', compressed)
        self._main('-d', '-i', compressed, '-o', restored)

        with open(restored, 'rb') as f:
            self.assertEqual(f.read(), b"hello hello hello")

    def test_custom_parameters_and_header(self):
        source = os.path.join(self.temp_path, "input.txt")
        compressed = os.path.join(self.temp_path, "input.lz77")
        restored = os.path.join(self.temp_path, "output.txt")
        data = b"Lorem ipsum dolor sit amet " * 40
        with open(source, 'wb') as f:
            f.write(data)

        self._main('-i', source, '-o', compressed, '-w', '64', '-m', '16', '--header', '-v')
        with open(compressed, 'rb') as f:
            self.assertTrue(f.read().startswith(b"LZ77R1\x00\x40\x00\x10"))

        self._main('-d', '-i', compressed, '-o', restored)
        with open(restored, 'rb') as f:
            self.assertEqual(f.read(), data)
        self.assertIn("LZ77 Compression Statistics", self.stderr.getvalue())

    def test_invalid_data_exit_code(self):
        target = os.path.join(self.temp_path, "out.txt")
        with self.assertRaises(SystemExit) as ctx:
            self._main('-d', '-s', 'x', '-o', target)
        self.assertEqual(ctx.exception.code, 1)
        self.assertIn("Error:", self.stderr.getvalue())
        self.assertFalse(os.path.exists(target))

    def test_configuration_error_exit_code(self):
        target = os.path.join(self.temp_path, "out.lz77")
        with self.assertRaises(SystemExit) as ctx:
            self._main('-s', 'abc', '-n', '5', '-m', '4', '-o', target)
        self.assertEqual(ctx.exception.code, 1)
        self.assertFalse(os.path.exists(target))

    def test_missing_input_file(self):
        with self.assertRaises(SystemExit) as ctx:
            self._main('-i', os.path.join(self.temp_path, 'missing.txt'), '-o',
                       os.path.join(self.temp_path, 'out.lz77'))
        self.assertEqual(ctx.exception.code, 1)

    def test_conflicting_inputs(self):
        with self.assertRaises(SystemExit) as ctx:
            self._main('-i', 'a.txt', '-s', 'b')
        self.assertEqual(ctx.exception.code, 2)


def run_tests():
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    for case in (TestLZ77Compression, TestMatchFinder, TestWindowBoundary,
                 TestLZ77Config, TestDecompressor, TestTokenEncoder,
                 TestAllocationFailure, TestCompressionStats,
                 TestContainerFormat, TestArchiver, TestCommandLine):
        suite.addTests(loader.loadTestsFromTestCase(case))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    return 0 if result.wasSuccessful() else 1


if __name__ == '__main__':
    sys.exit(run_tests())
