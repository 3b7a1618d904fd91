"""Code generator reference implementations used by the test suite."""
