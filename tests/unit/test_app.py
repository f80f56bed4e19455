import pytest

from mender import app


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MENDER_CONFIG", raising=False)
    monkeypatch.delenv("GROQ_API_KEY", raising=False)


def test_parser_joins_intent_words():
    args = app.build_parser().parse_args(["prog.py", "add", "two", "numbers"])
    assert args.target == "prog.py"
    assert " ".join(args.intent) == "add two numbers"


def test_intent_is_optional():
    assert app.build_parser().parse_args(["prog.py"]).intent == []


def test_missing_target_exits_fatal(tmp_path):
    assert app.main([str(tmp_path / "absent.py")]) == 2


def test_missing_api_key_exits_fatal(tmp_path):
    target = tmp_path / "prog.py"
    target.write_text("print('hi')\n")
    assert app.main([str(target)]) == 2
