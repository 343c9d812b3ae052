"""Configurable Starlark linter: rules, registry, driver, suppression comments and reporters."""