import pytest

from skykit.filekind import Kind
from skykit.linter.driver import Driver, is_starlark_file
from skykit.linter.registry import Registry
from skykit.linter.rule import Finding, Rule, RuleConfig, Severity


def _reporting_rule(name="my-rule", **kwargs):
    def run(p):
        p.report(Finding(line=1, rule=name, message="found", severity=Severity.WARNING))

    return Rule(name=name, run=run, **kwargs)


def _driver(*rules):
    registry = Registry()
    registry.register(*rules)
    return Driver(registry), registry


@pytest.mark.parametrize(
    "name",
    ["BUILD", "BUILD.bazel", "WORKSPACE", "MODULE.bazel", "BUCK", "Tiltfile",
     "defs.bzl", "q.bxl", "a.star", "t.skyi", "r.plz", "c.mpconf"],
)
def test_is_starlark_file_true(name):
    assert is_starlark_file(name) is True


@pytest.mark.parametrize("name", ["README.md", "build", "BUILD.old", "script.py", ""])
def test_is_starlark_file_false(name):
    assert is_starlark_file(name) is False


def test_run_file_sets_path_on_findings(tmp_path):
    path = tmp_path / "a.star"
    path.write_text("x = 1\n")
    driver, _ = _driver(_reporting_rule())
    findings = driver.run_file(str(path))
    assert len(findings) == 1
    assert findings[0].file_path == str(path)
    assert findings[0].severity is Severity.WARNING


def test_pass_receives_parsed_tree_and_kind(tmp_path):
    path = tmp_path / "BUILD"
    path.write_text("cc_library(name = 'foo')\n")

    def run(p):
        message = "|".join(
            [type(p.file).__name__, "build" if p.file_kind is Kind.BUILD else "other", p.content.decode()]
        )
        p.report(Finding(line=1, rule="inspect", message=message))

    driver, _ = _driver(Rule(name="inspect", run=run))
    findings = driver.run_file(str(path))
    assert [f.message for f in findings] == ["Module|build|cc_library(name = 'foo')\n"]


def test_config_severity_overrides_finding(tmp_path):
    path = tmp_path / "a.star"
    path.write_text("x = 1\n")
    driver, registry = _driver(_reporting_rule())
    registry.set_config("my-rule", RuleConfig(severity=Severity.ERROR))
    findings = driver.run_file(str(path))
    assert [f.severity for f in findings] == [Severity.ERROR]


def test_suppressed_findings_are_filtered(tmp_path):
    path = tmp_path / "a.star"
    path.write_text("x = 1  # skylint: disable=my-rule\n")
    driver, _ = _driver(_reporting_rule())
    assert driver.run_file(str(path)) == []


def test_rule_not_applicable_to_file_kind(tmp_path):
    path = tmp_path / "a.star"
    path.write_text("x = 1\n")
    driver, _ = _driver(_reporting_rule(file_kinds=[Kind.BUILD]))
    assert driver.run_file(str(path)) == []


def test_disabled_rule_does_not_run(tmp_path):
    path = tmp_path / "a.star"
    path.write_text("x = 1\n")
    driver, registry = _driver(_reporting_rule())
    registry.disable("my-rule")
    assert driver.run_file(str(path)) == []


def test_dependent_rule_sees_result(tmp_path):
    path = tmp_path / "a.star"
    path.write_text("x = 1\n")
    base = Rule(name="base", run=lambda p: "shared")

    def run_dependent(p):
        p.report(Finding(line=2, rule="dependent", message=p.result_of(base)))

    dependent = Rule(name="dependent", requires=[base], run=run_dependent)
    driver, _ = _driver(dependent, base)
    findings = driver.run_file(str(path))
    assert [f.message for f in findings] == ["shared"]


def test_run_file_missing_raises(tmp_path):
    driver, _ = _driver(_reporting_rule())
    with pytest.raises(OSError):
        driver.run_file(str(tmp_path / "missing.star"))


def test_run_collects_parse_errors(tmp_path):
    bad = tmp_path / "bad.bzl"
    bad.write_text("def foo(: return\n")
    driver, _ = _driver(_reporting_rule())
    result = driver.run([str(bad)])
    assert result.files == 1
    assert result.findings == []
    assert [e.path for e in result.errors] == [str(bad)]
    assert str(result.errors[0].error).startswith("parsing file")


def test_run_collects_rule_errors(tmp_path):
    path = tmp_path / "a.star"
    path.write_text("x = 1\n")

    def run(p):
        raise ValueError("broken")

    driver, _ = _driver(Rule(name="boom", run=run))
    result = driver.run([str(path)])
    assert len(result.errors) == 1
    assert str(result.errors[0].error).startswith("rule boom:")


def test_run_walks_directory_skipping_hidden_and_other_files(tmp_path):
    (tmp_path / "BUILD").write_text("x = 1\n")
    (tmp_path / "pkg").mkdir()
    (tmp_path / "pkg" / "defs.bzl").write_text("y = 2\n")
    (tmp_path / "pkg" / "notes.txt").write_text("hello\n")
    (tmp_path / ".hidden").mkdir()
    (tmp_path / ".hidden" / "a.star").write_text("z = 3\n")
    driver, _ = _driver(_reporting_rule())
    result = driver.run([str(tmp_path)])
    assert result.files == 2
    paths = sorted(f.file_path for f in result.findings)
    assert paths == sorted([str(tmp_path / "BUILD"), str(tmp_path / "pkg" / "defs.bzl")])
    assert result.errors == []


def test_run_deduplicates_paths(tmp_path):
    path = tmp_path / "a.star"
    path.write_text("x = 1\n")
    driver, _ = _driver(_reporting_rule())
    result = driver.run([str(tmp_path), str(path)])
    assert result.files == 1
    assert len(result.findings) == 1


def test_run_missing_path_raises(tmp_path):
    driver, _ = _driver(_reporting_rule())
    with pytest.raises(FileNotFoundError):
        driver.run([str(tmp_path / "nope")])