from skykit import version


def test_default_version_string():
    assert version.version_string() == "dev (commit none, built unknown)"


def test_version_string_reflects_values(monkeypatch):
    monkeypatch.setattr(version, "VERSION", "v1")
    monkeypatch.setattr(version, "COMMIT", "abc")
    monkeypatch.setattr(version, "DATE", "today")
    result = version.version_string()
    assert result.startswith("v1 ")
    assert "commit abc" in result
    assert result.endswith("built today)")