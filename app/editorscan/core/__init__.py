"""Core modules for editorscan.

Host platform detection, user configuration, theming and editor launch
command construction.
"""
