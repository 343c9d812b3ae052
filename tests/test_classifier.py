import pytest

from skykit.classifier import (
    ChainClassifier,
    Classification,
    Classifier,
    DefaultClassifier,
    FunctionClassifier,
)
from skykit.filekind import Kind


CLASSIFY_CASES = [
    ("BUILD", "bazel", Kind.BUILD),
    ("BUILD.bazel", "bazel", Kind.BUILD),
    ("pkg/foo/BUILD", "bazel", Kind.BUILD),
    ("pkg/bar/BUILD.bazel", "bazel", Kind.BUILD),
    ("/workspace/pkg/BUILD", "bazel", Kind.BUILD),
    ("defs.bzl", "bazel", Kind.BZL),
    ("tools/build_defs.bzl", "bazel", Kind.BZL),
    ("/workspace/third_party/rules.bzl", "bazel", Kind.BZL),
    ("WORKSPACE", "bazel", Kind.WORKSPACE),
    ("WORKSPACE.bazel", "bazel", Kind.WORKSPACE),
    ("external/repo/WORKSPACE", "bazel", Kind.WORKSPACE),
    ("MODULE.bazel", "bazel", Kind.MODULE),
    ("external/mod/MODULE.bazel", "bazel", Kind.MODULE),
    ("BUCK", "buck2", Kind.BUCK),
    ("src/app/BUCK", "buck2", Kind.BUCK),
    ("/workspace/lib/BUCK", "buck2", Kind.BUCK),
    ("script.star", "starlark", Kind.STARLARK),
    ("scripts/build.star", "starlark", Kind.STARLARK),
    ("/home/user/config.star", "starlark", Kind.STARLARK),
    ("types.skyi", "starlark", Kind.SKYI),
    ("stubs/bazel.skyi", "starlark", Kind.SKYI),
    ("config.sky", "starlark", Kind.STARLARK),
    ("copy.bara.sky", "starlark", Kind.STARLARK),
    ("rules.axl", "starlark", Kind.STARLARK),
    ("config/app.axl", "starlark", Kind.STARLARK),
    ("Tiltfile", "starlark", Kind.STARLARK),
    ("services/web/Tiltfile", "starlark", Kind.STARLARK),
    ("deploy.ipd", "starlark", Kind.STARLARK),
    ("rules.plz", "starlark", Kind.BUILD),
    (".drone.star", "starlark", Kind.STARLARK),
    (".cirrus.star", "starlark", Kind.STARLARK),
    ("queries.bxl", "buck2", Kind.BZL_BUCK),
    ("config.pconf", "starlark", Kind.STARLARK),
    ("helpers.pinc", "starlark", Kind.STARLARK),
    ("mutable.mpconf", "starlark", Kind.STARLARK),
    ("script.starlark", "starlark", Kind.STARLARK),
    ("README.md", "starlark", Kind.UNKNOWN),
    ("somefile", "starlark", Kind.UNKNOWN),
    ("script.py", "starlark", Kind.UNKNOWN),
    ("", "starlark", Kind.UNKNOWN),
    ("build", "starlark", Kind.UNKNOWN),
    ("workspace", "starlark", Kind.UNKNOWN),
    ("buck", "starlark", Kind.UNKNOWN),
    ("BUILD_INFO", "starlark", Kind.UNKNOWN),
    ("WORKSPACE_CONFIG", "starlark", Kind.UNKNOWN),
    ("prebuck", "starlark", Kind.UNKNOWN),
    ("config.build.bzl", "bazel", Kind.BZL),
    ("BUILD.old", "starlark", Kind.UNKNOWN),
]


@pytest.mark.parametrize("path, dialect, kind", CLASSIFY_CASES)
def test_default_classify(path, dialect, kind):
    got = DefaultClassifier().classify(path)
    assert got.dialect == dialect
    assert got.file_kind is kind


@pytest.mark.parametrize(
    "dialect, want",
    [
        ("bazel", True),
        ("buck2", True),
        ("starlark", True),
        ("python", False),
        ("", False),
    ],
)
def test_default_supports_dialect(dialect, want):
    assert DefaultClassifier().supports_dialect(dialect) is want


def test_default_classifier_fresh_instance_works():
    got = DefaultClassifier().classify("BUILD")
    assert got == Classification(dialect="bazel", file_kind=Kind.BUILD)


def test_function_classifier():
    fixed = Classification(dialect="bazel", file_kind=Kind.BZL, config_path="MODULE.bazel")
    classifier = FunctionClassifier(lambda path: fixed)
    assert classifier.classify("anything") == fixed
    assert classifier.supports_dialect("whatever") is True


def _failing(message):
    def fn(path):
        raise LookupError(message)

    return FunctionClassifier(fn)


def test_chain_empty_defaults_to_unknown():
    got = ChainClassifier().classify("BUILD")
    assert got == Classification(dialect="starlark", file_kind=Kind.UNKNOWN)


def test_chain_first_success_wins():
    chain = ChainClassifier(_failing("first"), DefaultClassifier())
    assert chain.classify("defs.bzl").file_kind is Kind.BZL


def test_chain_raises_last_error():
    chain = ChainClassifier(_failing("first"), _failing("second"))
    with pytest.raises(LookupError, match="second"):
        chain.classify("BUILD")


class _OnlyBuck(Classifier):
    def classify(self, path):
        return Classification(dialect="buck2", file_kind=Kind.BUCK)

    def supports_dialect(self, dialect):
        return dialect == "buck2"


def test_chain_supports_dialect():
    chain = ChainClassifier(_OnlyBuck())
    assert chain.supports_dialect("buck2") is True
    assert chain.supports_dialect("bazel") is False
    assert ChainClassifier().supports_dialect("buck2") is False