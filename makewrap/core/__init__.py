"""Core build-output processing for makewrap."""
