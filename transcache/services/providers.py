"""External translation providers (DeepL, OpenAI).

Every provider takes already-masked text and returns the translated masked
text. Any failure raises ProviderError; nothing here retries.
"""
import logging

import requests
from flask import current_app

from transcache.errors import ProviderError

logger = logging.getLogger(__name__)

OPENAI_SYSTEM_PROMPT = (
    "You are a professional translator for website content. Translate the user's "
    "text from {source} to {target}. STRICT RULES: keep every placeholder of the "
    "form __TOK0__, __TOK1__ ... exactly as written and in a sensible position; "
    "keep HTML tags, URLs and punctuation; do not add explanations or quotes. "
    "Return only the translation."
)

# DeepL rejects the bare variants of these as target languages
DEEPL_TARGET_VARIANTS = {
    'EN': 'EN-US',
    'PT': 'PT-PT',
}

# OpenAI client (lazy initialization)
_openai_client = None


def deepl_translate(text: str, source_lang: str, target_lang: str) -> str:
    """Translate using the DeepL API."""
    config = current_app.config
    deepl_key = config.get('DEEPL_API_KEY')
    if not deepl_key:
        raise ProviderError('deepl', 'DEEPL_API_KEY missing')

    target = target_lang.upper()
    target = DEEPL_TARGET_VARIANTS.get(target, target)

    headers = {'Authorization': f'DeepL-Auth-Key {deepl_key}'}
    data = {
        'text': text,
        'source_lang': source_lang.upper().split('-')[0],
        'target_lang': target,
    }

    try:
        response = requests.post(
            config['DEEPL_API_URL'], headers=headers, data=data,
            timeout=config['PROVIDER_TIMEOUT'],
        )
    except requests.Timeout:
        logger.warning("DeepL timeout")
        raise ProviderError('deepl', 'timeout')
    except requests.RequestException as e:
        logger.warning(f"DeepL error: {e}")
        raise ProviderError('deepl', str(e))

    if response.status_code == 456:
        raise ProviderError('deepl', 'quota exceeded')
    if not response.ok:
        raise ProviderError('deepl', f'{response.status_code} {response.text[:200]}')

    try:
        translations = response.json()['translations']
        translated = translations[0]['text']
    except (ValueError, KeyError, IndexError, TypeError):
        raise ProviderError('deepl', 'unexpected response format')

    if not translated:
        raise ProviderError('deepl', 'empty translation')
    return translated


def get_openai_client():
    """Get or create the OpenAI client."""
    global _openai_client

    if _openai_client is not None:
        return _openai_client

    api_key = current_app.config.get('OPENAI_API_KEY')
    if not api_key:
        raise ProviderError('openai', 'OPENAI_API_KEY missing')

    from openai import OpenAI
    _openai_client = OpenAI(api_key=api_key, timeout=current_app.config['PROVIDER_TIMEOUT'], max_retries=0)
    return _openai_client


def openai_translate(text: str, source_lang: str, target_lang: str) -> str:
    """Translate using an OpenAI chat model."""
    import openai

    client = get_openai_client()
    prompt = OPENAI_SYSTEM_PROMPT.format(source=source_lang, target=target_lang)

    try:
        completion = client.chat.completions.create(
            model=current_app.config['OPENAI_TRANSLATION_MODEL'],
            temperature=0,
            messages=[
                {'role': 'system', 'content': prompt},
                {'role': 'user', 'content': text},
            ],
        )
    except openai.OpenAIError as e:
        logger.warning(f"OpenAI error: {e}")
        raise ProviderError('openai', str(e))

    try:
        translated = (completion.choices[0].message.content or '').strip()
    except (AttributeError, IndexError):
        raise ProviderError('openai', 'unexpected response format')

    if not translated:
        raise ProviderError('openai', 'empty translation')
    return translated


PROVIDERS = {
    'deepl': deepl_translate,
    'openai': openai_translate,
}


def translate(provider: str, text: str, source_lang: str, target_lang: str) -> str:
    """Translate ``text`` with the named provider."""
    func = PROVIDERS.get(provider)
    if func is None:
        raise ProviderError(provider or 'unknown', 'provider not configured')
    logger.info(f"Calling {provider} for {source_lang}->{target_lang} ({len(text)} chars)")
    return func(text, source_lang, target_lang)
