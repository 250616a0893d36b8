from utils import bracketed, finish_sentence, itemize


def test_itemize():
    assert itemize([]) == ""
    assert itemize(["a"]) == "a"
    assert itemize(["a", "b"]) == "a and b"
    assert itemize(["a", "b", "c"]) == "a, b, and c"
    assert itemize(["a", "b", "c", "d"]) == "a, b, c, and d"


def test_itemize_accepts_generators():
    assert itemize(x for x in ("x", "y")) == "x and y"


def test_bracketed():
    assert bracketed("Int") == "`Int`"
    assert bracketed("nil", mark="*") == "*nil*"


def test_finish_sentence():
    assert finish_sentence("function named `foo`, ") == "Function named `foo`."
    assert finish_sentence(" , returns no output.") == "Returns no output."
    assert finish_sentence("`x` is here") == "`x` is here."


def test_finish_sentence_empty_stays_empty():
    assert finish_sentence("") == ""
    assert finish_sentence(" ,, ") == ""
