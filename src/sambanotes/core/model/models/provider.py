from enum import Enum


class ProviderFamily(str, Enum):
    """
    Closed set of provider families. Each family shares one request/response convention.
    OPENAI, GOOGLE and PERPLEXITY speak the OpenAI chat-completions dialect (inline system
    messages, documents interpolated as text); ANTHROPIC uses the Messages API (hoisted
    system prompt, typed document blocks).
    """

    OPENAI = "openai"
    ANTHROPIC = "anthropic"
    GOOGLE = "google"
    PERPLEXITY = "perplexity"
