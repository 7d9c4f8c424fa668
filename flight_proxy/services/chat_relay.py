"""
Chat relay - forwards short prompts to Gemini.

Without a GEMINI_API_KEY the relay runs in stub mode and echoes the
input back without any network call. With a key, upstream failures are
logged in full but reported to callers only as a generic RelayFailure.
"""

import logging
import threading
from typing import Any, Optional

import requests

from flight_proxy.config import ChatConfig
from flight_proxy.errors import RelayFailure, ValidationError
from flight_proxy.models import PROVIDER_GEMINI, PROVIDER_STUB, ChatResponse

logger = logging.getLogger(__name__)

MAX_INPUT_CHARS = 4000
STUB_PREFIX = '(stub reply) '


def extract_candidate_text(data: Any) -> str:
    """Text of the first candidate's first part, or '' for any other shape."""
    try:
        text = data['candidates'][0]['content']['parts'][0]['text']
    except (KeyError, IndexError, TypeError):
        return ''
    return text if isinstance(text, str) else ''


class ChatRelay:
    """Credential-gated relay to the Gemini generateContent endpoint."""

    def __init__(
        self,
        chat: ChatConfig,
        session: Optional[requests.Session] = None,
    ):
        self.config = chat
        self._session = session
        self._local = threading.local()

        if not chat.is_configured:
            logger.warning('GEMINI_API_KEY not configured - chat relay running in stub mode')

    @property
    def session(self) -> requests.Session:
        """Injected session, or one requests.Session per calling thread."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, 'session', None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    @property
    def is_live(self) -> bool:
        return self.config.is_configured

    def converse(self, input_text: Any, system: Optional[Any] = None) -> ChatResponse:
        """
        Relay one prompt.

        Raises:
            ValidationError if the input is empty after truncation
            RelayFailure if the live provider fails
        """
        text = ('' if input_text is None else str(input_text))[:MAX_INPUT_CHARS]
        if not text.strip():
            raise ValidationError('input required')

        preamble = '' if system is None else str(system)

        if not self.is_live:
            return ChatResponse(provider=PROVIDER_STUB, text=f'{STUB_PREFIX}{text}')

        return ChatResponse(provider=PROVIDER_GEMINI, text=self._generate(text, preamble))

    def _generate(self, text: str, preamble: str) -> str:
        url = f'{self.config.base_url.rstrip("/")}/models/{self.config.model}:generateContent'

        contents = []
        if preamble:
            contents.append({'role': 'user', 'parts': [{'text': preamble}]})
        contents.append({'role': 'user', 'parts': [{'text': text}]})

        try:
            response = self.session.post(
                url,
                json={'contents': contents},
                headers={'x-goog-api-key': self.config.api_key},
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.HTTPError as e:
            body = e.response.text if e.response is not None else ''
            logger.error(f'Chat provider error: {e}: {body}')
            raise RelayFailure('chat failed') from e
        except requests.RequestException as e:
            logger.error(f'Chat request failed: {e}')
            raise RelayFailure('chat failed') from e
        except ValueError as e:
            logger.error(f'Chat provider returned a non-JSON body: {e}')
            raise RelayFailure('chat failed') from e

        return extract_candidate_text(data)
