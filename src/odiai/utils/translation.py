"""
Odia translation over the OpenAI Chat Completions API.

Stateless adapter: every call is one independent request, nothing is cached.

Failure policy:
- Empty input        → "" without calling the API
- Empty/odd response → "Translation failed." (soft failure, still a result)
- Transport failure  → TranslationTransportError (network, auth, quota, no key)
"""

from dataclasses import dataclass

import openai
from openai import AsyncOpenAI

from odiai import config
from odiai.languages import Language, TARGET_LANGUAGE

PLACEHOLDER = "Translation failed."

SYSTEM_PROMPT = """You are an expert English-Hindi-Odia translator.
Your task: Translate the input text to fluent, natural Odia.
- If source is "Auto-Detect", identify if it's English or Hindi.
- Return ONLY the translated Odia text.
- Do not add notes, explanations, or quotes."""

TRANSLATE_PROMPT = 'Source Language setting: {source}. Target: {target}. Text to translate: "{text}"'

DETECT_PROMPT = 'Return only the word "Hindi" or "English" for this text: "{text}"'

# Minimum randomness: same input, same phrasing
TEMPERATURE = 0


class TranslationTransportError(Exception):
    """The translation service could not be reached or refused the request."""


@dataclass(frozen=True)
class TranslationResult:
    text: str
    status: str  # "ok" | "empty" | "placeholder"

    @property
    def is_placeholder(self) -> bool:
        return self.status == "placeholder"


class TranslationClient:
    """Sends text plus a source-language hint to the LLM and returns Odia text."""

    def __init__(self, client: AsyncOpenAI | None = None, model: str | None = None, api_key: str | None = None):
        self._client = client
        self.model = model or config.OPENAI_TRANSLATE_MODEL
        self._api_key = api_key or config.OPENAI_API_KEY

    def _get_client(self) -> AsyncOpenAI:
        if self._client is None:
            if not self._api_key:
                raise TranslationTransportError("OPENAI_API_KEY not configured")
            self._client = AsyncOpenAI(api_key=self._api_key)
        return self._client

    async def translate(self, text: str, source_language: Language = Language.AUTO) -> str:
        result = await self.translate_result(text, source_language)
        return result.text

    async def translate_result(self, text: str, source_language: Language = Language.AUTO) -> TranslationResult:
        if not text.strip():
            return TranslationResult(text="", status="empty")

        client = self._get_client()
        short = text[:40] + "..." if len(text) > 40 else text
        print(f"🌐 Translate [{source_language.value} → {TARGET_LANGUAGE.value}]: \"{short}\"")

        try:
            response = await client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {
                        "role": "user",
                        "content": TRANSLATE_PROMPT.format(
                            source=source_language.value,
                            target=TARGET_LANGUAGE.value,
                            text=text,
                        ),
                    },
                ],
                temperature=TEMPERATURE,
            )
        except openai.OpenAIError as e:
            print(f"❌ Translation request failed: {type(e).__name__}: {e}")
            raise TranslationTransportError(str(e)) from e

        translated = _response_text(response)
        if not translated:
            print("⚠️ Empty translation response, using placeholder")
            return TranslationResult(text=PLACEHOLDER, status="placeholder")

        print(f"✅ Translated: \"{translated[:40]}\"")
        return TranslationResult(text=translated, status="ok")

    async def detect_language(self, text: str) -> Language:
        """
        Classify text as English or Hindi. Falls back to English on any failure.

        Empty input is the one exception: it returns AUTO without a request.
        """
        if not text.strip():
            return Language.AUTO

        try:
            client = self._get_client()
            response = await client.chat.completions.create(
                model=self.model,
                messages=[{"role": "user", "content": DETECT_PROMPT.format(text=text)}],
                temperature=TEMPERATURE,
            )
        except (openai.OpenAIError, TranslationTransportError) as e:
            print(f"⚠️ Language detection failed, assuming English: {e}")
            return Language.ENGLISH

        result = _response_text(response).lower()
        if "hindi" in result:
            return Language.HINDI
        return Language.ENGLISH


def _response_text(response) -> str:
    """Pull the first choice's content out of a chat completion, "" if there is none."""
    try:
        content = response.choices[0].message.content
    except (AttributeError, IndexError, TypeError):
        return ""
    if not isinstance(content, str):
        return ""
    return content.strip()
