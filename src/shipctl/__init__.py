"""shipctl - interactive helm and kubectl companion for release checks and context switching."""

__version__ = "0.1.0"
