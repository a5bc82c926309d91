"""
Tests for the Russian city directory
"""
import pytest

import cities
from cities import POPULAR_CITIES, RUSSIAN_CITIES


def test_empty_query_returns_nothing():
    assert cities.search("") == []
    assert cities.search("   ") == []
    assert cities.search(None) == []


def test_prefix_match_is_case_insensitive():
    assert cities.search("моск") == ["Москва"]
    assert cities.search("МОСК") == ["Москва"]
    assert cities.search("  моск ") == ["Москва"]


def test_word_matches_follow_prefix_matches():
    results = cities.search("нов")
    assert results[0] == "Новосибирск"
    assert "Нижний Новгород" in results
    prefix_part = [c for c in results if c.lower().startswith("нов")]
    assert results[:len(prefix_part)] == prefix_part
    assert results.index("Нижний Новгород") >= len(prefix_part)


def test_word_matches_split_on_hyphen():
    results = cities.search("на")
    assert "Ростов-на-Дону" in results
    assert "Комсомольск-на-Амуре" in results
    assert results[0] == "Набережные Челны"


def test_many_prefix_matches_skip_word_search():
    results = cities.search("с")
    assert len(results) == cities.MAX_RESULTS
    assert all(c.lower().startswith("с") for c in results)
    assert "Южно-Сахалинск" not in results


def test_results_are_limited():
    assert len(cities.search("к")) == 15


@pytest.mark.parametrize("name", RUSSIAN_CITIES)
def test_full_name_is_found(name):
    assert name in cities.search(name.lower())


def test_yo_letter_is_matched():
    assert "Орёл" in cities.search("орё")
    assert cities.is_valid("КОРОЛЁВ")
    # е + combining diaeresis
    assert cities.is_valid("Оре\u0308л")


def test_is_valid_in_any_case():
    for name in RUSSIAN_CITIES:
        assert cities.is_valid(name)
        assert cities.is_valid(name.lower())
        assert cities.is_valid(name.upper())


@pytest.mark.parametrize("name", ["", "м", "а", "Моск", "Moscow", "Москва-сити"])
def test_is_valid_rejects_partial_names(name):
    assert not cities.is_valid(name)


def test_suggest_prefers_prefix():
    assert cities.suggest("Моск") == "Москва"
    assert cities.suggest("ниж") == "Нижний Новгород"


def test_suggest_falls_back_to_substring():
    assert cities.suggest("бург") == "Санкт-Петербург"


def test_suggest_returns_none():
    assert cities.suggest("zzz") is None
    assert cities.suggest("") is None


def test_popular_cities():
    popular = cities.popular_cities()
    assert len(popular) == 15
    assert popular == list(POPULAR_CITIES)
    assert all(cities.is_valid(c) for c in popular)


@pytest.mark.parametrize("name", RUSSIAN_CITIES)
def test_full_name_ranks_by_directory_order(name):
    term = name.lower()
    earliest = next(c for c in RUSSIAN_CITIES if c.lower().startswith(term))
    assert cities.search(term)[0] == earliest


def test_exact_name_comes_first():
    assert cities.search("курган")[0] == "Курган"
    assert cities.search("орск")[0] == "Орск"
