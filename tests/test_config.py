from stubforge import config


def test_env_int_reads_whole_numbers(monkeypatch):
    monkeypatch.setenv("STUBFORGE_JAVAC_TIMEOUT", " 45 ")
    assert config.env_int("STUBFORGE_JAVAC_TIMEOUT", 300) == 45


def test_env_int_falls_back_on_unset_or_bad_values(monkeypatch, caplog):
    monkeypatch.delenv("STUBFORGE_JAVAC_TIMEOUT", raising=False)
    assert config.env_int("STUBFORGE_JAVAC_TIMEOUT", 300) == 300

    monkeypatch.setenv("STUBFORGE_JAVAC_TIMEOUT", "five minutes")
    assert config.env_int("STUBFORGE_JAVAC_TIMEOUT", 300) == 300
    assert "STUBFORGE_JAVAC_TIMEOUT" in caplog.text
