"""Root-level conftest.py - make the working tree's scylla package importable.

Tests import ``scylla`` and ``tests.fakes`` from the repository root. Having
this file at the root puts the root on sys.path, so the checked-out package
is used even when an older copy is installed.
"""
