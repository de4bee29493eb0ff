from pngcodec.adam7 import Adam7Info
from pngcodec.interlace import NullInfo, adam7_info, interlace_infos, line_number


def test_null():
    lines = [line_number(info) for info in interlace_infos(8, 8, False)]
    assert lines == [0, 1, 2, 3, 4, 5, 6, 7]


def test_adam7():
    lines = [line_number(info) for info in interlace_infos(8, 8, True)]
    assert lines == [
        0,  # pass 1
        0,  # pass 2
        0,  # pass 3
        0, 1,  # pass 4
        0, 1,  # pass 5
        0, 1, 2, 3,  # pass 6
        0, 1, 2, 3,  # pass 7
    ]


def test_empty():
    assert [line_number(info) for info in interlace_infos(0, 0, False)] == []


def test_null_rows_have_no_adam7_info():
    infos = list(interlace_infos(3, 2, False))
    assert infos == [NullInfo(0), NullInfo(1)]
    assert all(adam7_info(info) is None for info in infos)


def test_adam7_rows_expose_adam7_info():
    infos = list(interlace_infos(4, 4, True))
    assert adam7_info(infos[0]) == Adam7Info(1, 0, 1)
    assert [adam7_info(info).pass_ for info in infos] == [1, 4, 5, 6, 6, 7, 7]