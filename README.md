# skykit

Building blocks for Starlark tooling: recognising Starlark files, describing
dialects and type modes, validating files, resolving `load()` statements, and
running configurable lint rules with suppression comments and several report
formats. The package has no dependencies outside the standard library.

## Classifying files

`skykit.classifier.DefaultClassifier` works out the dialect and file kind from
the file name alone:

```python
from skykit.classifier import DefaultClassifier
from skykit.filekind import Kind

c = DefaultClassifier().classify("pkg/foo/BUILD.bazel")
assert c.dialect == "bazel"
assert c.file_kind is Kind.BUILD
```

Recognised names are `BUILD`, `BUILD.bazel`, `WORKSPACE`, `WORKSPACE.bazel`,
`MODULE.bazel`, `BUCK` and `Tiltfile`. Recognised extensions are `.bzl`,
`.bxl`, `.plz`, `.star`, `.starlark`, `.sky`, `.skyi`, `.axl`, `.ipd`,
`.pconf`, `.pinc` and `.mpconf`. Matching is case-sensitive; anything else is
`Kind.UNKNOWN` in the `starlark` dialect.

`ChainClassifier` tries several classifiers in turn and returns the first
result that does not raise (re-raising the last error if all fail).
`FunctionClassifier` wraps a plain function.

`skykit.filekind.Kind` has `is_top_level()`, `is_extension()`, `is_bazel()`
and `is_buck()`; `all_kinds()` lists every kind.

## Dialects and type modes

`skykit.dialect` provides `standard()`, `bazel()` and `buck2()` presets. Each
`Dialect` carries a `Features` set, the file kinds it handles and a type mode;
`Dialect.to_dict()` gives a JSON-ready mapping.

`skykit.typemode.parse` reads a type mode: `""` or `disabled`, `parse_only`
(also `parse-only`, `parseonly`), or `enabled`. Anything else raises
`ValueError`.

## Validation and load resolution

`skykit.validator` defines `Severity`, `Diagnostic`, `Context` and the
`Validator` interface. `FunctionValidator` wraps a callable, and `Runner` runs
each validator whose supported kinds include the context's file kind (or that
supports all kinds) and collects the diagnostics.

`skykit.resolver` defines the `LoadResolver` interface and a `Resolution`
result, whose `ok()` is true when there is no error and at least one
candidate. `FunctionResolver` wraps a callable; without one it returns a
resolution whose error is `NO_RESOLVER`.

## Linting

Rules are `skykit.linter.rule.Rule` objects. A rule's `run` callable receives
a `Pass` and reports `Finding`s through `Pass.report`; whatever it returns is
available to rules that list it in `requires` through `Pass.result_of`.

A `skykit.linter.registry.Registry` holds the rules. Rule names must be
lowercase kebab-case or snake_case. Rules are enabled on registration and can
be enabled or disabled by name, by category, by glob pattern such as
`native-*`, or with `all`. `enabled_rules()` returns them with every rule after
the rules it requires; `validate()` raises `RegistryError` on a dependency
cycle or an unknown requirement.

`skykit.linter.driver.Driver` runs the enabled rules over files and
directories and returns a `LintResult`. Directories are walked recursively,
skipping hidden directories and keeping only Starlark file names. A file that
cannot be read, parsed or linted is recorded in `LintResult.errors` and
linting goes on. Sources are parsed with Python's `ast` module, since Starlark
shares Python's surface syntax, so `Pass.file` is an `ast.Module`.

Findings can be silenced with comments in the linted source:

```
# skylint: disable=rule-name            (this line)
code()  # skylint: disable=rule1,rule2  (inline)
# skylint: disable-next-line=all        (the following line)
```

An empty rule list or `all` silences every rule.

### Configuration

`skykit.linter.config.load_config` reads a `.skylint.json` file. With no path
it searches the current directory and its parents, and returns an empty
`Config` if none is found:

```json
{
  "enable": ["all"],
  "disable": ["native-*"],
  "warnings_as_errors": true,
  "rules": {
    "unused-variable": {"severity": "error"}
  }
}
```

`Config.apply_to_registry` applies it to a registry. Unknown rules, unknown
severities and unreadable or malformed files raise `ConfigError`.

### Reports

Each reporter's `report(out, result)` writes to a text stream.

- `TextReporter` – readable output grouped by file, with a summary line.
  `FileReporter` behaves the same.
- `CompactReporter` – one `file:line:column: severity: message (rule)` line per finding.
- `GitHubReporter` – GitHub Actions workflow annotations.
- `JSONReporter` – a JSON document with per-file findings and summary counts;
  `build_output` returns the same structure as a dictionary.

`skykit.version.version_string()` gives the version, commit and build date.

## What it does not do

skykit ships no lint rules of its own: rules are supplied by the caller. It
has no source formatter and no command-line program; it is used as a library.

## Tests

The tests use pytest, available through the `test` extra.