from sambanotes.core.clients.openai.payload import OpenAIPayload
from sambanotes.core.clients.google.payload import GooglePayload
from sambanotes.core.clients.perplexity.payload import PerplexityPayload
from sambanotes.core.clients.anthropic.payload import AnthropicPayload

Payload = AnthropicPayload | GooglePayload | PerplexityPayload | OpenAIPayload
