"""Bundled data files for editorscan."""
