import io
from contextlib import redirect_stdout

import numpy as np
from colorama import Fore, Style

from clue.common.utils import (
    color_text,
    format_quantity,
    log_analysis,
    log_error,
    log_warn,
)


def test_color_text_wraps_with_codes():
    text = color_text("hello", Fore.RED, Style.BRIGHT)

    assert text.startswith(Style.BRIGHT + Fore.RED)
    assert text.endswith(Style.RESET_ALL)
    assert "hello" in text


def test_format_quantity_adapts_precision():
    assert format_quantity(123.456) == "123.46"
    assert format_quantity(0.1234) == "0.1234"
    assert format_quantity(0.001234) == "0.001234"
    assert format_quantity(0.00001234) == "0.00001234"


def test_format_quantity_special_values():
    assert format_quantity(None) == "N/A"
    assert format_quantity(np.nan) == "N/A"
    assert format_quantity(np.inf) == "inf"
    assert format_quantity(-np.inf) == "-inf"


def test_log_functions_print_message():
    buf = io.StringIO()

    with redirect_stdout(buf):
        log_warn("tile overflow")
        log_error("bad config")
        log_analysis("3 clusters")

    output = buf.getvalue()
    assert "tile overflow" in output
    assert "bad config" in output
    assert "3 clusters" in output
    assert Fore.YELLOW in output
