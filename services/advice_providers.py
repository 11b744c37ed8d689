"""
Text-generation providers for general (non-wellness) assistant questions.

Each provider exposes ``generate(query) -> Optional[str]`` and returns None
instead of raising when the remote API is unavailable. ``ProviderChain``
tries them in order and ends with a canned reply, so a caller always gets
text back.
"""
import logging
from typing import Callable, Iterable, List, Optional, Tuple

import requests

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a friendly, Gen Z wellness coach chatbot. Respond in Gen Z style "
    "(use slang like \"bestie\", \"fr\", \"no cap\", \"that's valid\", \"I felt that\") "
    "but still be helpful. Keep responses conversational, relatable, and under "
    "200 words. Use emojis sparingly."
)


def build_prompt(query: str) -> str:
    return f"{SYSTEM_PROMPT}\n\nQuestion: {query}\n\nResponse:"


class AdviceProvider:
    """Base class for remote text generators."""

    name = 'provider'
    url = ''

    def __init__(self, api_key: Optional[str] = None, timeout: float = 10, session=None):
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    def headers(self) -> dict:
        headers = {'Content-Type': 'application/json'}
        if self.api_key:
            headers['Authorization'] = f'Bearer {self.api_key}'
        return headers

    def payload(self, query: str) -> dict:
        raise NotImplementedError

    def parse(self, data) -> Optional[str]:
        raise NotImplementedError

    def generate(self, query: str) -> Optional[str]:
        if not self.available:
            return None

        try:
            response = self.session.post(
                self.url, headers=self.headers(), json=self.payload(query), timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning(f"{self.name} request failed: {str(e)}")
            return None

        if response.status_code != 200:
            logger.warning(f"{self.name} API error {response.status_code}: {response.text[:200]}")
            return None

        try:
            text = self.parse(response.json())
        except (ValueError, KeyError, IndexError, TypeError) as e:
            logger.warning(f"{self.name} returned an unexpected payload: {str(e)}")
            return None
        return text.strip() if text and text.strip() else None


class OpenAIProvider(AdviceProvider):
    name = 'openai'
    url = 'https://api.openai.com/v1/chat/completions'

    def __init__(self, api_key=None, timeout=10, session=None, model='gpt-3.5-turbo'):
        super().__init__(api_key, timeout, session)
        self.model = model

    def payload(self, query):
        return {
            'model': self.model,
            'messages': [
                {'role': 'system', 'content': SYSTEM_PROMPT},
                {'role': 'user', 'content': query},
            ],
            'max_tokens': 200,
            'temperature': 0.7,
        }

    def parse(self, data):
        return data['choices'][0]['message']['content']


class CohereProvider(AdviceProvider):
    name = 'cohere'
    url = 'https://api.cohere.ai/v1/generate'

    def __init__(self, api_key=None, timeout=10, session=None, model='command'):
        super().__init__(api_key, timeout, session)
        self.model = model

    def payload(self, query):
        return {
            'model': self.model,
            'prompt': build_prompt(query),
            'max_tokens': 200,
            'temperature': 0.7,
            'stop_sequences': ['\n\n'],
        }

    def parse(self, data):
        return data['generations'][0]['text']


class HuggingFaceProvider(AdviceProvider):
    """Hugging Face inference API; usable without a token on public models."""

    name = 'huggingface'

    def __init__(self, api_key=None, timeout=10, session=None, model='gpt2'):
        super().__init__(api_key, timeout, session)
        self.url = f'https://api-inference.huggingface.co/models/{model}'

    @property
    def available(self):
        return True

    def payload(self, query):
        return {
            'inputs': build_prompt(query),
            'parameters': {
                'max_new_tokens': 100,
                'temperature': 0.7,
                'return_full_text': False,
            },
        }

    def parse(self, data):
        text = data[0]['generated_text'].strip()
        if 'Response:' in text:
            text = text.split('Response:', 1)[1].strip() or text
        return text


class ProviderChain:
    """Try providers in order; the first non-empty reply wins."""

    def __init__(self, providers: Iterable[AdviceProvider], fallback: Callable[[str], str]):
        self.providers: List[AdviceProvider] = list(providers)
        self.fallback = fallback

    def generate(self, query: str) -> Tuple[str, str]:
        """Return ``(text, source)`` where source is a provider name or 'fallback'."""
        for provider in self.providers:
            try:
                text = provider.generate(query)
            except Exception as e:
                logger.error(f"Provider {getattr(provider, 'name', provider)} raised: {str(e)}", exc_info=True)
                continue
            if text:
                return text, getattr(provider, 'name', 'provider')
        return self.fallback(query), 'fallback'


def build_default_providers(config) -> List[AdviceProvider]:
    """OpenAI, then Cohere, then Hugging Face, configured from the app config."""
    timeout = config.get('ADVICE_PROVIDER_TIMEOUT', 10)
    providers = [
        OpenAIProvider(config.get('OPENAI_API_KEY'), timeout=timeout),
        CohereProvider(config.get('COHERE_API_KEY'), timeout=timeout),
    ]
    if config.get('HUGGINGFACE_ENABLED', True):
        providers.append(HuggingFaceProvider(config.get('HUGGINGFACE_API_TOKEN'), timeout=timeout))
    return providers
