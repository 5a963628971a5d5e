"""
Gemini text-generation client used for advisory suggestions.
Each call is a single JSON POST to ``generateContent``; nothing is retried.
"""
import os
import re
import requests
import logging
from typing import Optional, Dict, Any
from django.conf import settings

from organizer.core.exceptions import MissingCredential, UpstreamError, EmptyResponse

logger = logging.getLogger(__name__)

GEMINI_API_BASE = getattr(
    settings,
    'GEMINI_API_BASE',
    os.getenv('GEMINI_API_BASE', 'https://generativelanguage.googleapis.com/v1beta')
)

GEMINI_MODEL = getattr(
    settings,
    'GEMINI_MODEL',
    os.getenv('GEMINI_MODEL', 'gemini-1.5-flash-latest')
)

GEMINI_TIMEOUT = getattr(
    settings,
    'GEMINI_TIMEOUT',
    int(os.getenv('GEMINI_TIMEOUT', '30'))
)

PRIORITY_LEVELS = ('urgent', 'high', 'medium', 'low')
DEFAULT_PRIORITY = 'medium'

_PRIORITY_PATTERN = re.compile(rf"\b({'|'.join(PRIORITY_LEVELS)})\b", re.IGNORECASE)

DESCRIPTION_PROMPT = """Generate a concise, helpful description for an inventory item with the following details:
Name: {name}
Category: {category}

Please provide a 1-2 sentence description that would help someone identify and understand this item. Focus on key characteristics, typical uses, or distinguishing features."""

PRIORITY_PROMPT = """Analyze the following task and suggest an appropriate priority level:

Title: {title}
Description: {description}

Based on the content, suggest ONE of these priority levels:
- urgent: Time-sensitive, critical tasks that need immediate attention
- high: Important tasks that should be completed soon
- medium: Regular tasks with moderate importance
- low: Tasks that can be done when time permits

Respond with only the priority level (urgent, high, medium, or low) and a brief 1-sentence explanation."""


def get_generate_url(model: Optional[str] = None) -> str:
    return f"{GEMINI_API_BASE.rstrip('/')}/models/{model or GEMINI_MODEL}:generateContent"


def extract_text(payload: Dict[str, Any]) -> Optional[str]:
    """Pull ``candidates[0].content.parts[0].text`` out of a response body"""
    try:
        text = payload['candidates'][0]['content']['parts'][0]['text']
    except (KeyError, IndexError, TypeError):
        return None
    return text if isinstance(text, str) and text.strip() else None


def extract_priority(text: str) -> str:
    """First priority keyword in ``text`` (case-insensitive), else ``medium``"""
    match = _PRIORITY_PATTERN.search(text or '')
    return match.group(1).lower() if match else DEFAULT_PRIORITY


def generate_text(api_key: str, prompt: str) -> str:
    """
    Send one prompt and return the generated text, trimmed.

    Raises:
        MissingCredential: no API key configured
        UpstreamError: transport failure, non-2xx status or non-JSON body
        EmptyResponse: success without a text candidate
    """
    if not api_key:
        raise MissingCredential()

    body = {'contents': [{'parts': [{'text': prompt}]}]}
    try:
        response = requests.post(
            get_generate_url(),
            params={'key': api_key},
            json=body,
            headers={'Content-Type': 'application/json'},
            timeout=GEMINI_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        logger.error(f"Gemini request failed: {str(e)}")
        raise UpstreamError()

    if not response.ok:
        logger.error(f"Gemini API error: {response.status_code}")
        raise UpstreamError()

    try:
        payload = response.json()
    except ValueError:
        logger.error("Gemini returned a non-JSON body")
        raise UpstreamError()

    text = extract_text(payload)
    if text is None:
        logger.warning("Gemini response had no text candidate")
        raise EmptyResponse()
    return text.strip()


def suggest_item_description(api_key: str, name: str, category: str) -> str:
    return generate_text(api_key, DESCRIPTION_PROMPT.format(name=name, category=category))


def suggest_task_priority(api_key: str, title: str, description: Optional[str] = None) -> Dict[str, str]:
    text = generate_text(api_key, PRIORITY_PROMPT.format(
        title=title,
        description=description or 'No description provided',
    ))
    return {
        'priority': extract_priority(text),
        'explanation': text,
    }
