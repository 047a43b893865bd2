"""Class-level dependency extraction and graph analysis for Ruby codebases."""

__version__ = "0.1.0"
