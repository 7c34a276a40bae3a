import pytest

from durata.extraction.duration import DurationScanner
from durata.extraction.lexicon import LexicalEntry, Lexicon, TokenCategory, UnitKind
from durata.extraction.options import DurationAnnotatorOptions
from durata.extraction.tokens import tokenize


@pytest.fixture(scope="module")
def scanner() -> DurationScanner:
    options = DurationAnnotatorOptions(
        day_expressions=["day", "days"],
        hour_expressions=["hour", "hours"],
        minute_expressions=["minute", "minutes"],
        second_expressions=["second", "seconds"],
        filler_expressions=["and", "a", "an", "one"],
        half_expressions=["half"],
    )
    return DurationScanner(Lexicon.from_options(options))


def _lex(scanner: DurationScanner, text: str):
    return scanner.lex(tokenize(text))


def test_lex_strips_punctuation_only_on_miss(scanner: DurationScanner) -> None:
    lexed = _lex(scanner, "wait 2.5 hours, ok?")
    assert [item.category for item in lexed] == [
        TokenCategory.UNRECOGNIZED,
        TokenCategory.NUMBER_LITERAL,
        TokenCategory.UNIT,
        TokenCategory.UNRECOGNIZED,
    ]
    assert lexed[1].token.value == "2.5"
    assert lexed[2].token.span == (9, 14)


@pytest.mark.parametrize(
    "text, quantity, unit, half, span",
    [
        ("15 minutes", 15.0, UnitKind.MINUTE, False, (0, 10)),
        ("an hour", 1.0, UnitKind.HOUR, False, (3, 7)),
        ("hour", 1.0, UnitKind.HOUR, False, (0, 4)),
        ("half an hour", 0.5, UnitKind.HOUR, True, (0, 12)),
        ("3 and half minutes", 3.5, UnitKind.MINUTE, True, (0, 18)),
        ("1 hour and a half", 1.5, UnitKind.HOUR, True, (0, 17)),
        ("2 days half", 2.5, UnitKind.DAY, True, (0, 11)),
    ],
)
def test_scan_group(scanner: DurationScanner, text: str, quantity: float, unit: UnitKind, half: bool, span) -> None:
    lexed = _lex(scanner, text)
    group = scanner.scan_group(lexed, 0)
    assert group is not None
    assert group.quantity == pytest.approx(quantity)
    assert group.unit is unit
    assert group.has_half_adjustment is half
    assert group.span == span
    assert group.first_token == 0
    assert group.last_token == len(lexed) - 1


@pytest.mark.parametrize(
    "text",
    ["half", "and 5 minutes", "ok minutes", "a a 10 minutes", "3 and and half minutes", "5 and minutes"],
)
def test_scan_group_rejects(scanner: DurationScanner, text: str) -> None:
    assert scanner.scan_group(_lex(scanner, text), 0) is None


def test_scan_group_leaves_unmatched_suffix(scanner: DurationScanner) -> None:
    lexed = _lex(scanner, "3 hours and 5 seconds")
    group = scanner.scan_group(lexed, 0)
    assert group.last_token == 1
    assert group.quantity == 3.0


def test_suffix_half_not_taken_from_following_group(scanner: DurationScanner) -> None:
    lexed = _lex(scanner, "10 minutes and half an hour")
    group = scanner.scan_group(lexed, 0)
    assert group.quantity == 10.0
    assert group.last_token == 1


def test_compose_merges_across_fillers(scanner: DurationScanner) -> None:
    lexed = _lex(scanner, "3 hours and 5 seconds and more")
    match = scanner.compose_at(lexed, 0)
    assert match is not None
    assert [group.unit for group in match.groups] == [UnitKind.HOUR, UnitKind.SECOND]
    assert match.total_ms == 3 * 3_600_000 + 5_000
    assert match.span == (0, 21)
    assert match.last_token == 4


def test_compose_stops_at_unrecognized_token(scanner: DurationScanner) -> None:
    lexed = _lex(scanner, "3 hours then 5 seconds")
    match = scanner.compose_at(lexed, 0)
    assert len(match.groups) == 1
    assert match.span == (0, 7)


def test_compose_rounds_only_the_total(scanner: DurationScanner) -> None:
    lexed = _lex(scanner, "0.0004 seconds and 0.0004 seconds")
    match = scanner.compose_at(lexed, 0)
    assert match.total_ms == 1


def test_dangling_quantity() -> None:
    options = DurationAnnotatorOptions(
        hour_expressions=["hours"],
        minute_expressions=["minutes"],
        filler_expressions=["and"],
        enable_dangling_quantity_interpretation=True,
    )
    scanner = DurationScanner(Lexicon.from_options(options), interpret_dangling_quantity=True)
    lexed = scanner.lex(tokenize("2 hours and 15"))
    match = scanner.compose_at(lexed, 0)
    assert match.total_ms == 2 * 3_600_000 + 15 * 60_000
    assert match.span == (0, 14)
    assert match.last_token == 3


def test_lex_keeps_sign_on_numbers(scanner: DurationScanner) -> None:
    lexed = _lex(scanner, "-5 -minutes")
    assert lexed[0].category is TokenCategory.UNRECOGNIZED
    assert lexed[0].token.value == "-5"
    assert lexed[1].category is TokenCategory.UNIT
    assert lexed[1].token.span == (4, 11)


@pytest.mark.parametrize(
    "entries, text",
    [
        ({"minutes": LexicalEntry(TokenCategory.UNIT)}, "5 minutes"),
        (
            {
                "a": LexicalEntry(TokenCategory.QUANTITY_WORD),
                "hour": LexicalEntry(TokenCategory.UNIT, unit=UnitKind.HOUR),
            },
            "a hour",
        ),
    ],
)
def test_incomplete_entries_yield_no_group(entries, text: str) -> None:
    scanner = DurationScanner(Lexicon(entries))
    assert scanner.compose_at(scanner.lex(tokenize(text)), 0) is None


def test_dangling_number_without_value_is_ignored() -> None:
    entries = {
        "hours": LexicalEntry(TokenCategory.UNIT, unit=UnitKind.HOUR),
        "x": LexicalEntry(TokenCategory.NUMBER_LITERAL),
    }
    scanner = DurationScanner(Lexicon(entries), interpret_dangling_quantity=True)
    match = scanner.compose_at(scanner.lex(tokenize("2 hours x")), 0)
    assert match.total_ms == 2 * 3_600_000
    assert match.last_token == 1
