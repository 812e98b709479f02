"""
LLM Provider Configuration for the report agents.

Same .env format for every agent:
- [AGENT]_PROVIDER: "openrouter" or "openai"
- [AGENT]_API_KEY: API key for the selected provider
- [AGENT]_MODEL: Model identifier
- [AGENT]_TEMPERATURE: (optional) Temperature setting

Agents: "classifier" (check-in type extraction) and "analyst"
(per-member productivity analysis).
"""

import os
import logging
from enum import Enum
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

logger = logging.getLogger(__name__)

AGENT_NAMES = ["classifier", "analyst"]


class Provider(str, Enum):
    """Available LLM providers."""
    OPENROUTER = "openrouter"
    OPENAI = "openai"


@dataclass
class AgentModelConfig:
    """Configuration for a single agent's LLM."""

    agent_name: str
    provider: Provider
    model_name: str
    api_key: str
    temperature: float
    base_url: str


class ProviderManager:
    """
    Manages LLM provider configuration for all agents.

    Loads from .env:
    - ANALYST_PROVIDER=openrouter
    - ANALYST_API_KEY=sk-or-...
    - ANALYST_MODEL=deepseek/deepseek-chat-v3.1:free
    - ANALYST_TEMPERATURE=0.4 (optional)
    """

    DEFAULT_TEMPERATURES = {
        "classifier": 0.0,   # Single label, keep it deterministic
        "analyst": 0.4       # Narrative summaries
    }

    PROVIDER_BASE_URLS = {
        Provider.OPENROUTER: "https://openrouter.ai/api/v1",
        Provider.OPENAI: "https://api.openai.com/v1"
    }

    DEFAULT_MODELS = {
        Provider.OPENROUTER: "deepseek/deepseek-chat-v3.1:free",
        Provider.OPENAI: "gpt-4o-mini"
    }

    def __init__(self):
        """Initialize provider manager."""
        self._configs = {}

    def get_agent_config(self, agent_name: str) -> AgentModelConfig:
        """
        Get LLM configuration for a specific agent.

        Args:
            agent_name: "classifier" or "analyst"

        Returns:
            AgentModelConfig with provider settings

        Raises:
            ValueError: If configuration is invalid or missing
        """
        if agent_name in self._configs:
            return self._configs[agent_name]

        agent_upper = agent_name.upper()

        provider_str = os.getenv(f"{agent_upper}_PROVIDER", "openrouter").lower()

        try:
            provider = Provider(provider_str)
        except ValueError:
            raise ValueError(
                f"Invalid {agent_upper}_PROVIDER: '{provider_str}'. "
                f"Must be 'openrouter' or 'openai'"
            )

        api_key = os.getenv(f"{agent_upper}_API_KEY")
        if not api_key:
            raise ValueError(
                f"Missing {agent_upper}_API_KEY in .env file. "
                f"Get key at: https://openrouter.ai/ or https://platform.openai.com/"
            )

        model_name = os.getenv(f"{agent_upper}_MODEL") or self.DEFAULT_MODELS[provider]

        temperature_str = os.getenv(f"{agent_upper}_TEMPERATURE")
        if temperature_str:
            try:
                temperature = float(temperature_str)
            except ValueError:
                raise ValueError(
                    f"Invalid {agent_upper}_TEMPERATURE: '{temperature_str}'. Must be a number"
                )
        else:
            temperature = self.DEFAULT_TEMPERATURES.get(agent_name, 0.1)

        config = AgentModelConfig(
            agent_name=agent_name,
            provider=provider,
            model_name=model_name,
            api_key=api_key,
            temperature=temperature,
            base_url=self.PROVIDER_BASE_URLS[provider]
        )

        logger.info(
            f"Configured {agent_name}: provider={provider.value}, "
            f"model={model_name}, temperature={temperature}"
        )

        self._configs[agent_name] = config
        return config

    def get_model(self, agent_name: str):
        """
        Get initialized LLM model instance for an agent.

        Returns:
            Pydantic AI compatible model instance
        """
        config = self.get_agent_config(agent_name)
        return self._create_model_instance(config)

    @staticmethod
    def _create_model_instance(config: AgentModelConfig):
        """
        Create Pydantic AI model instance from config.

        OpenRouter speaks the OpenAI chat API, so both providers go through
        OpenAIChatModel with the provider's base URL and the agent's own key.
        """
        from pydantic_ai.models.openai import OpenAIChatModel
        from pydantic_ai.providers.openai import OpenAIProvider

        return OpenAIChatModel(
            config.model_name,
            provider=OpenAIProvider(base_url=config.base_url, api_key=config.api_key)
        )

    def get_model_info(self, agent_name: str) -> dict:
        """Get human-readable info about agent's configured model."""
        config = self.get_agent_config(agent_name)

        return {
            "agent": agent_name,
            "provider": config.provider.value,
            "model": config.model_name,
            "temperature": config.temperature,
            "base_url": config.base_url
        }

    def validate_all_agents(self) -> dict:
        """
        Validate configuration for all agents.

        Returns:
            Dictionary with validation results
        """
        results = {}

        for agent in AGENT_NAMES:
            try:
                config = self.get_agent_config(agent)
                results[agent] = {
                    "status": "valid",
                    "provider": config.provider.value,
                    "model": config.model_name,
                    "error": None
                }
            except ValueError as e:
                results[agent] = {
                    "status": "invalid",
                    "provider": None,
                    "model": None,
                    "error": str(e)
                }

        return results


# Global instance - use throughout the application
provider_manager = ProviderManager()
