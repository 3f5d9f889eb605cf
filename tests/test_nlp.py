from types import SimpleNamespace

from theme_extraction import nlp as nlp_mod


def test_model_load_failure_is_logged_once(monkeypatch, capsys):
    calls = []

    def fake_load(name, **kwargs):
        calls.append(name)
        raise ValueError("incompatible model config")

    monkeypatch.setattr(nlp_mod, "_HAS_SPACY", True)
    monkeypatch.setattr(nlp_mod, "spacy", SimpleNamespace(load=fake_load), raising=False)
    monkeypatch.setattr(nlp_mod, "_NLP_CACHE", {})

    assert nlp_mod.get_default_nlp("broken_model") is None
    assert nlp_mod.get_default_nlp("broken_model") is None
    assert calls == ["broken_model"]
    assert "[nlp] load error for broken_model" in capsys.readouterr().err


def test_loaded_pipeline_is_cached(monkeypatch):
    pipeline = object()
    monkeypatch.setattr(nlp_mod, "_HAS_SPACY", True)
    monkeypatch.setattr(nlp_mod, "spacy", SimpleNamespace(load=lambda name, **kw: pipeline), raising=False)
    monkeypatch.setattr(nlp_mod, "_NLP_CACHE", {})

    assert nlp_mod.get_default_nlp("en_test") is pipeline
    assert nlp_mod.get_default_nlp("en_test") is pipeline
