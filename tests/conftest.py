# ============================================================================
# FILE: tests/conftest.py
# ============================================================================
"""
Pytest configuration and shared fixtures for testing.
"""

import asyncio
import json

import pytest

from core.service.settings_service import EnvSettingsService


LABERGE_MESSAGE = (
    "DR LABERGE PATIENT NAME REDACTED. ,§713-854-9439,,DOB:06/30/1993NOT OB"
    "CONCERNS FOR MASTITIST,SEVEREPAIN ,POST PARTUM 1WKS,--"
)


class FakeOllamaClient:
    """Stands in for ollama.AsyncClient; records chat calls."""

    def __init__(self, content=None, list_error=None, chat_error=None, delay=0.0):
        self.content = content
        self.list_error = list_error
        self.chat_error = chat_error
        self.delay = delay
        self.list_calls = 0
        self.chat_calls = []

    async def list(self):
        self.list_calls += 1
        if self.list_error:
            raise self.list_error
        return {"models": []}

    async def chat(self, model, messages, format=None, options=None):
        self.chat_calls.append({"model": model, "messages": messages, "format": format})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.chat_error:
            raise self.chat_error
        return {"message": {"role": "assistant", "content": self.content}}


@pytest.fixture
def laberge_message():
    """The answering-service message used throughout the docs"""
    return LABERGE_MESSAGE


@pytest.fixture
def enabled_settings():
    return EnvSettingsService({"LLM_ENABLED": "1", "OLLAMA_MODEL": "test-model", "LLM_TIMEOUT_S": "5"})


@pytest.fixture
def disabled_settings():
    return EnvSettingsService({"LLM_ENABLED": "0"})


@pytest.fixture
def fake_client_factory():
    """Build a FakeOllamaClient; dict content is serialized to JSON"""
    def _make(content=None, **kwargs):
        if isinstance(content, dict):
            content = json.dumps(content)
        return FakeOllamaClient(content=content, **kwargs)
    return _make
