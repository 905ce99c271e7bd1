from __future__ import annotations

from typing import Any, Mapping


class RecordingTemplateEngine:
    """Template renderer that records every call."""

    def __init__(self, output: str = "<!DOCTYPE html><html></html>") -> None:
        self.output = output
        self.calls: list[tuple[str, Mapping[str, Any]]] = []

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        self.calls.append((template_name, context))
        return self.output


class RecordingEncoder:
    """JSON encoder wrapper that counts calls."""

    def __init__(self) -> None:
        from litestar.serialization import encode_json

        self._encode = encode_json
        self.calls = 0

    def __call__(self, value: Any) -> bytes:
        self.calls += 1
        return self._encode(value)
