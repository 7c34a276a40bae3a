from durata.extraction.tokens import Token, split_at, strip_boundary, tokenize


def test_tokenize_keeps_offsets() -> None:
    text = "Wake me  up in 15 minutes ok?"
    tokens = tokenize(text)
    assert [token.value for token in tokens] == ["Wake", "me", "up", "in", "15", "minutes", "ok?"]
    for token in tokens:
        assert text[token.start:token.end] == token.value
    assert tokenize("   ") == []


def test_strip_boundary() -> None:
    assert strip_boundary(Token("minutes,", 10, 18)) == Token("minutes", 10, 17)
    assert strip_boundary(Token("(2", 3, 5)) == Token("2", 4, 5)
    token = Token("hour", 0, 4)
    assert strip_boundary(token) is token
    assert strip_boundary(Token("?!", 7, 9)) == Token("", 7, 7)


def test_split_at_cuts_straddling_tokens() -> None:
    tokens = tokenize("Wake me up in15 minutesok?")
    pieces = split_at(tokens, (13, 23))
    assert [piece.value for piece in pieces] == ["Wake", "me", "up", "in", "15", "minutes", "ok?"]
    assert [piece.span for piece in pieces][3:6] == [(11, 13), (13, 15), (16, 23)]


def test_split_at_ignores_boundaries_between_tokens() -> None:
    tokens = tokenize("in 15 minutes")
    assert split_at(tokens, (3, 13)) == tokens
