"""
Unit tests for date, string and URL helpers.
"""

from datetime import datetime, timedelta

import pytest

from qa_suite.utils import (
    days_diff,
    format_date,
    get_domain,
    is_ge_domain,
    is_today,
    is_valid_url,
    remove_accents,
    to_slug,
    truncate,
)


def test_format_date():
    assert format_date(datetime(2024, 3, 7, 9, 5)) == "07/03/2024 09:05"


def test_is_today():
    now = datetime(2024, 3, 7, 23, 59)

    assert is_today(datetime(2024, 3, 7, 0, 1), now=now)
    assert not is_today(datetime(2024, 3, 6, 23, 59), now=now)


@pytest.mark.parametrize(
    "delta,expected",
    [
        (timedelta(days=2), 2),
        (timedelta(days=-2), 2),
        (timedelta(hours=25), 2),
        (timedelta(0), 0),
    ],
)
def test_days_diff(delta, expected):
    start = datetime(2024, 1, 1)

    assert days_diff(start, start + delta) == expected


def test_remove_accents():
    assert remove_accents("Grêmio São Paulo Atlético") == "Gremio Sao Paulo Atletico"


@pytest.mark.parametrize(
    "text,slug",
    [
        ("São Paulo", "sao-paulo"),
        ("  Atlético-MG  ", "atletico-mg"),
        ("Red Bull Bragantino!", "red-bull-bragantino"),
        ("vasco_da__gama", "vasco-da-gama"),
    ],
)
def test_to_slug(text, slug):
    assert to_slug(text) == slug


def test_truncate_on_word_boundary():
    assert truncate("Flamengo vence o clássico no Maracanã", 20) == "Flamengo vence o..."


def test_truncate_short_text_unchanged():
    assert truncate("Gol!", 10) == "Gol!"


def test_truncate_single_long_word():
    assert truncate("Paralelepípedo", 5) == "Paral..."


def test_urls():
    assert is_valid_url("https://ge.globo.com/futebol/")
    assert not is_valid_url("ge.globo.com")
    assert get_domain("https://ge.globo.com/futebol/") == "ge.globo.com"
    assert get_domain("not a url") == ""


def test_is_ge_domain():
    assert is_ge_domain("https://ge.globo.com/futebol/times/flamengo/")
    assert is_ge_domain("https://globoesporte.globo.com/")
    assert not is_ge_domain("https://www.lance.com.br/")
