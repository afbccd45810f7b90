"""gitver: repository state, describe-based versions and changelogs for build tooling."""

__version__ = "0.1.0"
