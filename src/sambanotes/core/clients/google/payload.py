from sambanotes.core.clients.openai.payload import OpenAIPayload


class GooglePayload(OpenAIPayload):
    """
    Gemini through its OpenAI-compatible endpoint.
    Same fields as OpenAI; a separate type so a payload still says which family it is for.
    """

    pass
