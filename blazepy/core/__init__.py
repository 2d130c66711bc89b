"""Core building blocks of blazepy."""
