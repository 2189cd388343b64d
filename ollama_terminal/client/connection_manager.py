"""
Connection management for Ollama server communication.

This module handles the read-only side of the Ollama API:
- Health checks against /api/tags
- Model discovery via /api/tags
- Connection pooling through a shared requests.Session

Neither operation raises. An unreachable server is an ordinary outcome
reported as False, and a model list that cannot be read is reported as
an empty list.
"""

import json
import logging
import requests
from typing import List

from .config import ChatConfig


logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages HTTP connections to the Ollama server.

    Uses requests.Session so the health check and model listing reuse the
    same TCP connection to the local server.
    """

    def __init__(self, config: ChatConfig, session: requests.Session = None):
        """Initialize the connection manager.

        Args:
            config: ChatConfig object with server connection settings
            session: Optional pre-built HTTP session (tests pass a mock)
        """
        self.config = config
        self.session = session if session is not None else requests.Session()

    @property
    def tags_url(self) -> str:
        return f"{self.config.base_url}/api/tags"

    def check_connection(self) -> bool:
        """Test whether the Ollama server answers on its model listing endpoint.

        Returns:
            bool: True if the server responded successfully, False otherwise
        """
        try:
            response = self.session.get(self.tags_url, timeout=self.config.health_timeout)
        except requests.exceptions.RequestException as e:
            logger.debug("Health check against %s failed: %s", self.tags_url, e)
            return False

        if not response.ok:
            logger.debug("Health check got HTTP %s from %s", response.status_code, self.tags_url)
        return response.ok

    def list_models(self) -> List[str]:
        """Query Ollama for the models installed locally.

        API Response Format:
        {
            "models": [
                {"name": "llama3.2:latest", "size": 2019393189, ...},
                {"name": "codellama:latest", ...}
            ]
        }

        Returns:
            List[str]: Model names in server order, or an empty list if the
            server is unreachable or the response cannot be read
        """
        try:
            response = self.session.get(self.tags_url, timeout=self.config.models_timeout)
        except requests.exceptions.RequestException as e:
            logger.debug("Could not fetch models: %s", e)
            return []

        if response.status_code != 200:
            logger.debug("Could not fetch models: HTTP %s", response.status_code)
            return []

        return parse_model_list(response.text)


def parse_model_list(body: str) -> List[str]:
    """Extract model names from an /api/tags response body.

    Entries without a ``name`` are skipped. Anything that is not the
    expected shape yields an empty list.
    """
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        logger.debug("Model list is not valid JSON: %s", e)
        return []

    if not isinstance(data, dict):
        return []
    models = data.get('models', [])
    if not isinstance(models, list):
        return []

    return [
        model['name'] for model in models
        if isinstance(model, dict) and isinstance(model.get('name'), str)
    ]
