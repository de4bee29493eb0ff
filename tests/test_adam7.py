import pytest

from pngcodec.adam7 import (
    Adam7Info,
    adam7_passes,
    expand_adam7_bits,
    expand_pass,
    subbyte_pixels,
)


def create_adam7_info_for_tests(pass_, line, img_width):
    width = next(i.width for i in adam7_passes(img_width, 8) if i.pass_ == pass_)
    return Adam7Info(pass_, line, width)


def test_adam7():
    passes = list(adam7_passes(4, 4))
    assert passes == [
        Adam7Info(1, 0, 1),
        Adam7Info(4, 0, 1),
        Adam7Info(5, 0, 2),
        Adam7Info(6, 0, 2),
        Adam7Info(6, 1, 2),
        Adam7Info(7, 0, 4),
        Adam7Info(7, 1, 4),
    ]


def test_adam7_empty_image():
    assert list(adam7_passes(0, 0)) == []


def test_subbyte_pixels():
    pixels = list(subbyte_pixels([0b10101010, 0b10101010], 1))
    assert len(pixels) == 16
    assert pixels == [1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0, 1, 0]


def test_subbyte_pixels_rejects_byte_sizes():
    with pytest.raises(ValueError):
        list(subbyte_pixels([0], 8))


def test_info_validation():
    with pytest.raises(ValueError):
        Adam7Info(0, 0, 1)
    with pytest.raises(ValueError):
        Adam7Info(8, 0, 1)
    with pytest.raises(ValueError):
        Adam7Info(1, 0, 0)


def test_expand_adam7_bits():
    width = 32
    bits_pp = 1
    stride = width // 8

    def info(pass_, line, img_width):
        return create_adam7_info_for_tests(pass_, line, img_width)

    def expected(offset, step, count):
        return [step * i + offset for i in range(count)]

    for line_no in range(8):
        start = 8 * line_no * width
        assert list(expand_adam7_bits(stride, info(1, line_no, width), bits_pp)) == expected(start, 8, 4)
        start = start + 4
        assert list(expand_adam7_bits(stride, info(2, line_no, width), bits_pp)) == expected(start, 8, 4)
        start = (8 * line_no + 4) * width
        assert list(expand_adam7_bits(stride, info(3, line_no, width), bits_pp)) == expected(start, 4, 8)

    for line_no in range(16):
        start = 4 * line_no * width + 2
        assert list(expand_adam7_bits(stride, info(4, line_no, width), bits_pp)) == expected(start, 4, 8)
        start = (4 * line_no + 2) * width
        assert list(expand_adam7_bits(stride, info(5, line_no, width), bits_pp)) == expected(start, 2, 16)

    for line_no in range(32):
        start = 2 * line_no * width + 1
        assert list(expand_adam7_bits(stride, info(6, line_no, width), bits_pp)) == expected(start, 2, 16)
        start = (2 * line_no + 1) * width
        assert list(expand_adam7_bits(stride, info(7, line_no, width), bits_pp)) == expected(start, 1, 32)


def test_expand_adam7_bits_independent_row_stride():
    info = create_adam7_info_for_tests(1, 1, 32)
    assert list(expand_adam7_bits(32, info, 8)) == [2048, 2112, 2176, 2240]
    assert list(expand_adam7_bits(10000, info, 8)) == [640000, 640064, 640128, 640192]


def test_expand_pass_doc_example():
    info = Adam7Info(5, 0, 4)
    img = bytearray(8 * 8)
    expand_pass(img, 8, bytes([1, 2, 3, 4]), info, 8)
    expected = bytearray(64)
    expected[16:24] = bytes([1, 0, 2, 0, 3, 0, 4, 0])
    assert img == expected


def test_expand_pass_out_of_bounds():
    img = bytearray(4)
    with pytest.raises(IndexError):
        expand_pass(img, 8, bytes([1, 2, 3, 4]), Adam7Info(5, 0, 4), 8)


def test_expand_pass_subbyte():
    img = bytearray(8)
    width = 8
    stride = width // 8
    info = create_adam7_info_for_tests

    steps = [
        ([0b10000000], (1, 0), [0b10000000, 0, 0, 0, 0, 0, 0, 0]),
        ([0b10000000], (2, 0), [0b10001000, 0, 0, 0, 0, 0, 0, 0]),
        ([0b11000000], (3, 0), [0b10001000, 0, 0, 0, 0b10001000, 0, 0, 0]),
        ([0b11000000], (4, 0), [0b10101010, 0, 0, 0, 0b10001000, 0, 0, 0]),
        ([0b11000000], (4, 1), [0b10101010, 0, 0, 0, 0b10101010, 0, 0, 0]),
        ([0b11110000], (5, 0), [0b10101010, 0, 0b10101010, 0, 0b10101010, 0, 0, 0]),
        ([0b11110000], (5, 1), [0b10101010, 0, 0b10101010, 0, 0b10101010, 0, 0b10101010, 0]),
        ([0b11110000], (6, 0), [0b11111111, 0, 0b10101010, 0, 0b10101010, 0, 0b10101010, 0]),
        ([0b11110000], (6, 1), [0b11111111, 0, 0b11111111, 0, 0b10101010, 0, 0b10101010, 0]),
        ([0b11110000], (6, 2), [0b11111111, 0, 0b11111111, 0, 0b11111111, 0, 0b10101010, 0]),
        ([0b11110000], (6, 3), [0b11111111, 0, 0b11111111, 0, 0b11111111, 0, 0b11111111, 0]),
        (
            [0b11111111],
            (7, 0),
            [0b11111111, 0b11111111, 0b11111111, 0, 0b11111111, 0, 0b11111111, 0],
        ),
        (
            [0b11111111],
            (7, 1),
            [0b11111111, 0b11111111, 0b11111111, 0b11111111, 0b11111111, 0, 0b11111111, 0],
        ),
        (
            [0b11111111],
            (7, 2),
            [0b11111111, 0b11111111, 0b11111111, 0b11111111, 0b11111111, 0b11111111, 0b11111111, 0],
        ),
        ([0b11111111], (7, 3), [0b11111111] * 8),
    ]

    for row, (pass_, line), expected in steps:
        expand_pass(img, stride, bytes(row), info(pass_, line, width), 1)
        assert list(img) == expected, (pass_, line)