from shoveltool.r1b import Image1, Image32, Xform

RED = 0xFF0000FF
BLUE = 0xFFFF0000
BACK = 7


def _filled(img):
    return [(i % img.stridewords, i // img.stridewords) for i, v in enumerate(img.pixels) if v]


def _row(w, byte, fill=BACK):
    dst = Image32(w, 1)
    dst.fill_rect(0, 0, w, 1, fill)
    src = Image1(8, 1, bytes([byte]))
    return dst, src


def test_fill_rect_clips_negative_origin():
    img = Image32(4, 4)
    img.fill_rect(-2, -2, 4, 4, RED)
    assert _filled(img) == [(0, 0), (1, 0), (0, 1), (1, 1)]
    assert img.pixels[0] == RED


def test_fill_rect_clips_far_edges():
    img = Image32(4, 4)
    img.fill_rect(3, 3, 10, 10, RED)
    assert _filled(img) == [(3, 3)]


def test_fill_rect_zero_colour_is_noop():
    img = Image32(3, 3)
    img.fill_rect(0, 0, 3, 3, 0)
    assert img.pixels == [0] * 9


def test_fill_rect_respects_stride():
    img = Image32(2, 2, stridewords=3)
    img.fill_rect(0, 0, 2, 2, RED)
    assert img.pixels == [RED, RED, 0, RED, RED, 0]


def test_blit_zero_colour_is_transparent():
    dst, src = _row(8, 0b10100000)
    dst.blit_img1(src, 0, 0, 0, 0, 8, 1, 0, RED, Xform.NONE)
    assert dst.pixels == [RED, BACK, RED, BACK, BACK, BACK, BACK, BACK]


def test_blit_both_colours():
    dst, src = _row(8, 0b10000001)
    dst.blit_img1(src, 0, 0, 0, 0, 8, 1, BLUE, RED, Xform.NONE)
    assert dst.pixels == [RED] + [BLUE] * 6 + [RED]


def test_blit_both_transparent_is_noop():
    dst, src = _row(8, 0xFF)
    dst.blit_img1(src, 0, 0, 0, 0, 8, 1, 0, 0, Xform.NONE)
    assert dst.pixels == [BACK] * 8


def test_blit_xrev_mirrors_output():
    plain, src = _row(8, 0b11010000)
    plain.blit_img1(src, 0, 0, 0, 0, 8, 1, BLUE, RED, Xform.NONE)
    flipped, _ = _row(8, 0b11010000)
    flipped.blit_img1(src, 0, 0, 0, 0, 8, 1, BLUE, RED, Xform.XREV)
    assert flipped.pixels == list(reversed(plain.pixels))


def test_blit_yrev_flips_rows():
    src = Image1(1, 2, bytes([0x80, 0x00]))
    dst = Image32(1, 2)
    dst.blit_img1(src, 0, 0, 0, 0, 1, 2, BLUE, RED, Xform.YREV)
    assert dst.pixels == [BLUE, RED]


def test_blit_negative_dstx_crops_source_start():
    dst, src = _row(8, 0b00100000)
    dst.blit_img1(src, -2, 0, 0, 0, 8, 1, 0, RED, Xform.NONE)
    assert dst.pixels[0] == RED
    assert dst.pixels.count(RED) == 1


def test_blit_negative_srcx_shifts_destination():
    dst, src = _row(8, 0b10000000)
    dst.blit_img1(src, 0, 0, -1, 0, 8, 1, 0, RED, Xform.NONE)
    assert dst.pixels[1] == RED
    assert dst.pixels.count(RED) == 1


def test_blit_outside_destination_is_noop():
    dst, src = _row(8, 0xFF)
    dst.blit_img1(src, 8, 0, 0, 0, 8, 1, BLUE, RED, Xform.NONE)
    assert dst.pixels == [BACK] * 8


def test_image1_default_stride_pads_to_bytes():
    img = Image1(9, 2)
    assert img.stride == 2
    assert len(img.pixels) == img.stride * img.h


def test_to_rgbx_stores_red_first():
    img = Image32(1, 1, pixels=[0x000000FF])
    assert img.to_rgbx() == b"\xff\x00\x00\x00"


def test_to_rgbx_skips_stride_padding():
    img = Image32(1, 2, pixels=[1, 99, 2, 99], stridewords=2)
    assert img.to_rgbx() == (1).to_bytes(4, "little") + (2).to_bytes(4, "little")