"""
GitHub PR Rules Checker

Inspects pull request metadata in CI and posts advisory review comments
when a pull request breaks the team's conventions.
"""

__version__ = "1.0.0"
__author__ = "Development Team"
__email__ = "dev@example.com"
