"""
Tests for the greeting helper.
"""

from calc_studio.example import Example


class TestExample:

    def test_greet_returns_greeting(self):
        assert Example().greet("World") == "Hello, World!"

    def test_greet_keeps_name_verbatim(self):
        assert Example().greet("Ada Lovelace") == "Hello, Ada Lovelace!"
