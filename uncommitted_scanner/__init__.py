"""
Uncommitted Changes Scanner

Walks a directory tree, finds every git repository with staged, unstaged
or untracked files and prints a boxed terminal report with an aggregate
summary. Read-only: no repository is ever modified.
"""

__version__ = "0.1.0"
__author__ = "Uncommitted Scanner Team"
