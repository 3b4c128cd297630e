import pytest

JP101_CSV = (
    "Greetings,,,Numbers,,\n"
    "word,translation,kanji,word,translation,kanji\n"
    "hello,konnichiwa,こんにちは,one,ichi,一\n"
    ",,,two,ni,二\n"
)


@pytest.fixture
def jp101_rows():
    return [
        ["Greetings", "", "", "Numbers", "", ""],
        ["word", "translation", "kanji", "word", "translation", "kanji"],
        ["hello", "konnichiwa", "こんにちは", "one", "ichi", "一"],
        ["", "", "", "two", "ni", "二"],
    ]


@pytest.fixture
def jp101_csv(tmp_path):
    path = tmp_path / "jp101.csv"
    path.write_text(JP101_CSV, encoding="utf-8")
    return path
