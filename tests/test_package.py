"""Tests for package layout and metadata."""

import importlib

import pytest

import pokefilter


def test_version():
    assert pokefilter.__version__ == "0.1.0"


@pytest.mark.parametrize(
    "module_name",
    [
        "pokefilter.cli.app",
        "pokefilter.cli.commands.catalog",
        "pokefilter.cli.commands.pokemon",
        "pokefilter.cli.ui.displays",
        "pokefilter.core.filter_engine",
        "pokefilter.data.pokeapi",
        "pokefilter.utils.logging",
        "pokefilter.server",
    ],
)
def test_subpackages_import_without_init_files(module_name):
    assert importlib.import_module(module_name) is not None
