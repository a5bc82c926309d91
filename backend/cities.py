"""
Справочник российских городов: поиск, проверка и подсказка ближайшего города.

Справочник неизменяем и загружается один раз при импорте модуля, поэтому
его можно читать из любых запросов без синхронизации.
"""
import re
import unicodedata
from typing import List, Optional, Tuple

RUSSIAN_CITIES: Tuple[str, ...] = (
    "Москва", "Санкт-Петербург", "Новосибирск", "Екатеринбург", "Казань",
    "Нижний Новгород", "Челябинск", "Самара", "Омск", "Ростов-на-Дону",
    "Уфа", "Красноярск", "Воронеж", "Пермь", "Волгоград",
    "Краснодар", "Саратов", "Тюмень", "Тольятти", "Ижевск",
    "Барнаул", "Ульяновск", "Иркутск", "Хабаровск", "Ярославль",
    "Владивосток", "Махачкала", "Томск", "Оренбург", "Кемерово",
    "Новокузнецк", "Рязань", "Астрахань", "Набережные Челны", "Пенза",
    "Липецк", "Киров", "Чебоксары", "Тула", "Калининград",
    "Балашиха", "Курск", "Севастополь", "Сочи", "Ставрополь",
    "Улан-Удэ", "Тверь", "Магнитогорск", "Иваново", "Брянск",
    "Белгород", "Сургут", "Владимир", "Нижний Тагил", "Архангельск",
    "Чита", "Калуга", "Симферополь", "Смоленск", "Волжский",
    "Саранск", "Череповец", "Курган", "Орёл", "Вологда",
    "Якутск", "Подольск", "Стерлитамак", "Грозный", "Владикавказ",
    "Мурманск", "Тамбов", "Петрозаводск", "Кострома", "Нижневартовск",
    "Новороссийск", "Йошкар-Ола", "Химки", "Таганрог", "Комсомольск-на-Амуре",
    "Сыктывкар", "Нальчик", "Шахты", "Дзержинск", "Орск",
    "Братск", "Энгельс", "Ангарск", "Королёв", "Псков",
    "Бийск", "Прокопьевск", "Рыбинск", "Балаково", "Армавир",
    "Южно-Сахалинск", "Северодвинск", "Абакан", "Норильск", "Люберцы",
    "Мытищи", "Миасс", "Новочеркасск", "Каменск-Уральский", "Златоуст",
    "Электросталь", "Альметьевск", "Салават", "Копейск", "Пятигорск",
    "Рубцовск", "Березники", "Коломна", "Майкоп", "Одинцово",
    "Ковров", "Кисловодск", "Железнодорожный", "Новомосковск", "Серпухов",
    "Новошахтинск", "Нефтеюганск", "Первоуральск", "Дербент", "Черкесск",
    "Орехово-Зуево", "Нефтекамск", "Красногорск", "Димитровград", "Батайск",
    "Муром", "Гатчина", "Сергиев Посад", "Новотроицк", "Воскресенск",
    "Елец", "Евпатория", "Реутов", "Арзамас", "Бердск",
    "Элиста", "Ногинск", "Домодедово", "Обнинск", "Каспийск",
    "Кызыл", "Назрань", "Раменское", "Находка", "Уссурийск",
)

POPULAR_CITIES: Tuple[str, ...] = (
    "Москва", "Санкт-Петербург", "Новосибирск", "Екатеринбург", "Казань",
    "Нижний Новгород", "Челябинск", "Самара", "Омск", "Ростов-на-Дону",
    "Уфа", "Красноярск", "Воронеж", "Пермь", "Волгоград",
)

MAX_RESULTS = 15
# столько совпадений с начала названия достаточно, поиск по словам не нужен
ENOUGH_PREFIX_MATCHES = 10

_WORD_SEPARATORS = re.compile(r"[-\s]+")


def fold(text: str) -> str:
    """Приводит строку к виду для сравнения без учета регистра."""
    return unicodedata.normalize("NFC", text).casefold()


# (название, название для сравнения, слова названия для сравнения)
_INDEX: Tuple[Tuple[str, str, Tuple[str, ...]], ...] = tuple(
    (name, fold(name), tuple(_WORD_SEPARATORS.split(fold(name))))
    for name in RUSSIAN_CITIES
)
_FOLDED_NAMES = frozenset(folded for _, folded, _ in _INDEX)


def search(query: Optional[str]) -> List[str]:
    """
    Ищет города по началу названия, а если таких мало, то и по началу
    отдельных слов названия (через пробел или дефис).

    Пустой запрос дает пустой список, чтобы вызывающий мог показать
    популярные города.
    """
    term = fold(query.strip()) if query else ""
    if not term:
        return []

    prefix_matches = [name for name, folded, _ in _INDEX if folded.startswith(term)]
    results = prefix_matches
    if len(prefix_matches) < ENOUGH_PREFIX_MATCHES:
        already = set(prefix_matches)
        word_matches = [
            name for name, _, words in _INDEX
            if name not in already and any(word.startswith(term) for word in words)
        ]
        results = prefix_matches + word_matches

    return results[:MAX_RESULTS]


def popular_cities() -> List[str]:
    return list(POPULAR_CITIES)


def is_valid(name: Optional[str]) -> bool:
    if not name:
        return False
    return fold(name) in _FOLDED_NAMES


def suggest(name: Optional[str]) -> Optional[str]:
    """Первый город, начинающийся с name, иначе первый, содержащий name."""
    term = fold(name) if name else ""
    if not term:
        return None

    for city, folded, _ in _INDEX:
        if folded.startswith(term):
            return city
    for city, folded, _ in _INDEX:
        if term in folded:
            return city
    return None
