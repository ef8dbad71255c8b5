"""Project health checklist: expected files, property-test labels and build setup."""

__version__ = "0.1.0"
