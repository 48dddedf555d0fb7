from datetime import date, datetime

import pytest

from equipcare.utils.dates import add_months, as_date, contract_end_date
from equipcare.utils.sanitization import clean_text, sanitize_string


@pytest.mark.parametrize(
    "start, months, expected",
    [
        (date(2024, 1, 15), 3, date(2024, 4, 15)),
        (date(2024, 1, 31), 1, date(2024, 2, 29)),
        (date(2023, 1, 31), 1, date(2023, 2, 28)),
        (date(2024, 8, 31), 6, date(2025, 2, 28)),
        (date(2023, 11, 15), 12, date(2024, 11, 15)),
    ],
)
def test_add_months_clamps_to_month_end(start, months, expected):
    assert add_months(start, months) == expected


def test_contract_end_date_needs_a_start():
    assert contract_end_date(None, 12) is None
    assert contract_end_date(date(2023, 6, 1), 24) == date(2025, 6, 1)


def test_as_date():
    assert as_date(datetime(2024, 3, 9, 23, 59)) == date(2024, 3, 9)
    assert as_date(date(2024, 3, 9)) == date(2024, 3, 9)
    assert as_date(None) is None


def test_clean_text():
    assert clean_text("  Beko \x00") == "Beko"
    assert clean_text("   ") is None
    assert clean_text(None) is None
    with pytest.raises(ValueError):
        clean_text("x" * 11, max_length=10)


def test_sanitize_string_escapes_html():
    assert sanitize_string('<script>"x"</script>') == "&lt;script&gt;&quot;x&quot;&lt;/script&gt;"
    assert sanitize_string(None) is None
