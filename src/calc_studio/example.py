"""Greeting helper used by the demo page."""


class Example:
    def greet(self, name: str) -> str:
        return f"Hello, {name}!"
