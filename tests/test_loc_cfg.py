import pytest

from matissehal.loc_cfg import (
    LOC_MAX_PARAM_LINE,
    LOC_MAX_PARAM_STRING,
    LOGGER_PARAMS,
    ConfigParam,
    ConfigValue,
    ParamType,
    parse_line,
    read_conf,
    trim_space,
)
from matissehal.log_util import DEFAULT_DEBUG_LEVEL, get_logger, loc_logger_init


@pytest.fixture(autouse=True)
def _reset_logger():
    yield
    LOGGER_PARAMS[0].value = DEFAULT_DEBUG_LEVEL
    LOGGER_PARAMS[1].value = 0
    loc_logger_init(DEFAULT_DEBUG_LEVEL, 0)


def _write(tmp_path, text):
    path = tmp_path / "gps.conf"
    path.write_bytes(text.encode("latin-1"))
    return path


@pytest.mark.parametrize(
    "text, expected",
    [
        ("  abc  ", "abc"),
        ("\tfoo bar\n", "foo bar"),
        ("plain", "plain"),
        ("", ""),
        ("   ", "   "),
    ],
)
def test_trim_space(text, expected):
    assert trim_space(text) == expected


def test_parse_line_decimal():
    value = parse_line("DEBUG_LEVEL = 3\n")
    assert value.name == "DEBUG_LEVEL"
    assert value.str_value == "3"
    assert value.int_value == 3
    assert value.float_value == 3.0


def test_parse_line_hex_sets_only_int():
    value = parse_line("MASK=0x1F\n")
    assert value.int_value == 0x1F
    assert value.float_value == 0.0


def test_parse_line_float():
    value = parse_line("RATIO = 2.5")
    assert value.float_value == 2.5
    assert value.int_value == 2


def test_parse_line_skips_repeated_separators():
    value = parse_line("A==B=C")
    assert (value.name, value.str_value) == ("A", "B")


def test_apply_string_null_clears():
    param = ConfigParam("SERVER", ParamType.STRING, "old")
    assert param.apply(ConfigValue("SERVER", "NULL"))
    assert param.value == ""
    assert param.is_set


def test_apply_string_truncates():
    param = ConfigParam("SERVER", ParamType.STRING)
    param.apply(ConfigValue("SERVER", "x" * 200))
    assert param.value == "x" * LOC_MAX_PARAM_STRING


def test_apply_number_and_float():
    number = ConfigParam("N", ParamType.NUMBER)
    real = ConfigParam("F", ParamType.FLOAT)
    number.apply(ConfigValue("N", "7", 7, 7.0))
    real.apply(ConfigValue("F", "7.5", 7, 7.5))
    assert number.value == 7
    assert real.value == 7.5


def test_apply_other_name_is_ignored():
    param = ConfigParam("N", ParamType.NUMBER, 5)
    assert not param.apply(ConfigValue("M", "9", 9, 9.0))
    assert param.value == 5
    assert not param.is_set


def test_bad_param_type_rejected():
    with pytest.raises(ValueError):
        ConfigParam("N", "q")


def test_read_conf_fills_table(tmp_path):
    path = _write(
        tmp_path,
        "# location settings\nINTERMEDIATE_POS = 1\nSUPL_HOST = supl.example.com\n"
        "ACCURACY_THRES=0x10\nSCALE = 1.25\n",
    )
    table = [
        ConfigParam("INTERMEDIATE_POS", ParamType.NUMBER, 0),
        ConfigParam("SUPL_HOST", ParamType.STRING, ""),
        ConfigParam("ACCURACY_THRES", ParamType.NUMBER, 0),
        ConfigParam("SCALE", ParamType.FLOAT, 0.0),
        ConfigParam("MISSING", ParamType.NUMBER, 42, is_set=True),
    ]
    assert read_conf(path, table)
    assert [p.value for p in table] == [1, "supl.example.com", 0x10, 1.25, 42]
    assert [p.is_set for p in table] == [True, True, True, True, False]


def test_read_conf_missing_file(tmp_path):
    param = ConfigParam("N", ParamType.NUMBER, 5, is_set=True)
    assert read_conf(tmp_path / "absent.conf", [param]) is False
    assert param.value == 5
    assert param.is_set


def test_read_conf_configures_logger(tmp_path):
    path = _write(tmp_path, "DEBUG_LEVEL = 3\nTIMESTAMP = 1\n")
    assert read_conf(path)
    logger = get_logger()
    assert (logger.debug_level, logger.timestamp) == (3, 1)


def test_read_conf_long_line_is_split(tmp_path):
    path = _write(tmp_path, "LONG=" + "a" * 100 + "\n")
    param = ConfigParam("LONG", ParamType.STRING)
    read_conf(path, [param])
    assert param.value == "a" * (LOC_MAX_PARAM_LINE - 1 - len("LONG="))


def test_read_conf_crlf_lines(tmp_path):
    path = _write(tmp_path, "A = 4\r\nB = five\r\n")
    a = ConfigParam("A", ParamType.NUMBER)
    b = ConfigParam("B", ParamType.STRING)
    read_conf(path, [a, b])
    assert (a.value, b.value) == (4, "five")