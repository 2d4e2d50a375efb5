import pytest

from resume_ai.resume_pipeline.date_normalizer import is_present, normalize_date, normalize_date_tagged


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("March 2022", "2022-03"),
        ("март 2020", "2020-03"),
        ("настоящее время", "present"),
        ("2022-03", "2022-03"),
    ],
)
def test_reference_dates(raw, expected):
    assert normalize_date(raw) == expected


def test_canonical_is_idempotent():
    once = normalize_date("Sept. 2019")
    assert once == "2019-09"
    assert normalize_date(once) == once
    assert normalize_date_tagged(once).status == "canonical"


def test_month_forms_and_order():
    assert normalize_date("мая 2018") == "2018-05"
    assert normalize_date("2020 март") == "2020-03"
    assert normalize_date("Jan, 2021") == "2021-01"
    assert normalize_date("  march   2022 ") == "2022-03"
    assert normalize_date("ДЕК. 2019") == "2019-12"


def test_present_literals_both_languages():
    for raw in ("Present", "currently", "to date", "по настоящее время", "н.в.", "Сейчас"):
        result = normalize_date_tagged(raw)
        assert result == ("present", "present"), raw


def test_unmatched_input_is_returned_unchanged_and_tagged():
    for raw in ("Q3 2021", "Summer 2020", "2021/05", "soon"):
        result = normalize_date_tagged(raw)
        assert result.value == raw
        assert result.status == "unchanged"
        assert not result.changed


def test_normalized_status_marks_change():
    result = normalize_date_tagged("April 2017")
    assert result.status == "normalized"
    assert result.changed


def test_none_is_unchanged():
    assert normalize_date_tagged(None).status == "unchanged"


def test_is_present():
    assert is_present("Present")
    assert is_present(" present ")
    assert not is_present("2020-01")
    assert not is_present(None)
