"""Unit tests for package metadata in pyproject.toml."""

import tomllib
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[2]


@pytest.fixture(scope="module")
def pyproject():
    return tomllib.loads((REPO_ROOT / "pyproject.toml").read_text())


def test_readme_is_not_a_requirements_document(pyproject):
    assert pyproject["project"].get("readme") not in {"SPEC_FULL.md", "spec.md"}


def test_package_discovery_includes_namespace_packages(pyproject):
    find = pyproject["tool"]["setuptools"]["packages"]["find"]
    assert find["namespaces"] is True
    for package in ("aml_registrar/core", "aml_registrar/persistence", "cli"):
        assert not (REPO_ROOT / package / "__init__.py").exists()


def test_console_scripts_point_at_existing_modules(pyproject):
    for target in pyproject["project"]["scripts"].values():
        module, _, _ = target.partition(":")
        assert (REPO_ROOT / (module.replace(".", "/") + ".py")).is_file()
