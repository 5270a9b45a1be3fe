"""Adapters connecting the library to the outside world."""
