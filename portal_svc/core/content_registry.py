"""
Static health-resource content registry.

This module provides:
- YAML-based loading and validation of content.yaml
- Read-only access to emergency, physical-health and assistant content

YAML access is encapsulated here - no other module should read content.yaml
directly.

Usage:
    from core.content_registry import get_emergency_content, get_assistant_topics

    emergency = get_emergency_content()
    for topic in get_assistant_topics():
        ...
"""
import copy
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Tuple

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssistantTopic:
    """Canned assistant reply selected when any keyword appears in a message."""
    name: str
    keywords: Tuple[str, ...]
    reply: str


# =============================================================================
# YAML CONFIGURATION LOADING & VALIDATION
# =============================================================================

def _get_config_path() -> Path:
    """Get the path to the content file."""
    return Path(__file__).parent / 'content.yaml'


def _load_yaml_config() -> Dict[str, Any]:
    """
    Load and parse the YAML content file.

    Raises:
        FileNotFoundError: If content.yaml is not found
        yaml.YAMLError: If YAML parsing fails
    """
    config_path = _get_config_path()
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f)
    except FileNotFoundError:
        logger.error("Content file not found", extra={'path': str(config_path)})
        raise
    except yaml.YAMLError as e:
        logger.error("Failed to parse content file", extra={'path': str(config_path), 'error': str(e)})
        raise


def _require(section: Dict[str, Any], keys: Tuple[str, ...], where: str) -> None:
    for key in keys:
        if key not in section or section[key] in (None, '', []):
            raise ValueError(f"Content section '{where}' is missing required field: '{key}'")


def _validate(config: Dict[str, Any]) -> None:
    """
    Validate the content structure.

    Raises:
        ValueError: If a required section or field is missing
    """
    if not isinstance(config, dict):
        raise ValueError("Content file must contain a mapping at the top level")

    _require(config, ('emergency', 'physical', 'assistant'), 'root')
    _require(config['emergency'], ('contacts', 'hospitals', 'first_aid'), 'emergency')
    _require(config['emergency']['first_aid'], ('cpr_steps', 'common_emergencies'), 'emergency.first_aid')
    _require(config['physical'], ('daily_routine', 'nutrition', 'health_tips'), 'physical')
    _require(config['assistant'], ('topics', 'fallback', 'emergency_assist'), 'assistant')

    for i, contact in enumerate(config['emergency']['contacts']):
        _require(contact, ('name', 'number'), f'emergency.contacts[{i}]')
    for i, hospital in enumerate(config['emergency']['hospitals']):
        _require(hospital, ('name', 'address', 'phone', 'distance'), f'emergency.hospitals[{i}]')
    for i, topic in enumerate(config['assistant']['topics']):
        _require(topic, ('name', 'keywords', 'reply'), f'assistant.topics[{i}]')


@lru_cache(maxsize=1)
def _load_content() -> Dict[str, Any]:
    """
    Load and cache the validated content.

    Cached so content.yaml is read exactly once per process.
    """
    config = _load_yaml_config()
    _validate(config)
    logger.debug("Content registry loaded", extra={'path': str(_get_config_path())})
    return config


# =============================================================================
# PUBLIC API
# =============================================================================

def get_emergency_content() -> Dict[str, Any]:
    """Emergency contacts, nearby hospitals and first-aid steps (a copy)."""
    return copy.deepcopy(_load_content()['emergency'])


def get_physical_content() -> Dict[str, Any]:
    """Daily routine, nutrition guidelines and health tips (a copy)."""
    return copy.deepcopy(_load_content()['physical'])


@lru_cache(maxsize=1)
def get_assistant_topics() -> Tuple[AssistantTopic, ...]:
    """Assistant topics in match priority order."""
    return tuple(
        AssistantTopic(
            name=raw['name'],
            keywords=tuple(str(k).lower() for k in raw['keywords']),
            reply=raw['reply'],
        )
        for raw in _load_content()['assistant']['topics']
    )


def get_fallback_reply() -> str:
    return _load_content()['assistant']['fallback']


def get_emergency_assist_reply() -> str:
    return _load_content()['assistant']['emergency_assist']
