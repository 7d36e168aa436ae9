"""Quiz and exam session assembly for DCF certification study."""

__version__ = "0.1.0"
