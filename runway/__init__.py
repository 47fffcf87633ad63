"""runway - recurring expense timeline and net income tracker."""

__version__ = "0.1.0"
