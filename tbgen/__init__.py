"""Thunderbird add-on compatibility reports and enterprise policy documentation helpers."""

__version__ = "0.1.0"
