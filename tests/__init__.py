"""Tests for pokefilter."""
