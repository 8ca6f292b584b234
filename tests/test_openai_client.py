"""Tests for the OpenAI completion adapter."""

import asyncio

from diet_assistant.adapters.openai_completion_client import OpenAICompletionClient


class _FakeCompletions:
    def __init__(self, content: str | None) -> None:
        self.content = content
        self.last_payload: dict[str, object] | None = None

    async def create(self, **kwargs):  # type: ignore[no-untyped-def]
        self.last_payload = kwargs
        message = type("Message", (), {"content": self.content})()
        choice = type("Choice", (), {"message": message})()
        return type("Resp", (), {"choices": [choice]})()


class _FakeChat:
    def __init__(self, completions: _FakeCompletions) -> None:
        self.completions = completions


class _FakeOpenAI:
    def __init__(self, content: str | None = '{"name": "Toast"}') -> None:
        self.completions = _FakeCompletions(content)
        self.chat = _FakeChat(self.completions)
        self.closed = False

    async def close(self) -> None:
        self.closed = True


def test_complete_sends_image_with_system_prompt() -> None:
    fake = _FakeOpenAI()
    client = OpenAICompletionClient(client=fake)

    result = asyncio.run(
        client.complete(
            model="gpt-4o",
            system_prompt="You are a nutritionist",
            user_prompt="Analyze this meal",
            image_data_url="data:image/jpeg;base64,ZmFrZQ==",
            max_tokens=2000,
            temperature=0.1,
        )
    )

    assert result == '{"name": "Toast"}'
    payload = fake.completions.last_payload
    assert payload is not None
    assert payload["model"] == "gpt-4o"
    assert payload["max_tokens"] == 2000
    system, user = payload["messages"]
    assert system == {"role": "system", "content": "You are a nutritionist"}
    assert user["content"][0] == {"type": "text", "text": "Analyze this meal"}
    assert user["content"][1]["image_url"] == {
        "url": "data:image/jpeg;base64,ZmFrZQ==",
        "detail": "high",
    }


def test_complete_text_only_and_empty_content() -> None:
    fake = _FakeOpenAI(content=None)
    client = OpenAICompletionClient(client=fake)

    result = asyncio.run(
        client.complete(
            model="gpt-4o",
            system_prompt=None,
            user_prompt="Generate a menu",
            image_data_url=None,
            max_tokens=2000,
            temperature=0.7,
        )
    )

    assert result == ""
    assert fake.completions.last_payload["messages"] == [
        {"role": "user", "content": "Generate a menu"}
    ]
    asyncio.run(client.close())
    assert fake.closed
