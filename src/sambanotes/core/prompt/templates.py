"""
Prompt templates for samba notation analysis.
"""

from sambanotes.core.prompt.prompt import Prompt

DEFAULT_ANALYSIS_PROMPT = (
    "Analyze this samba notation and provide mnemonics for the patterns."
)

# Appended to every document instruction so the normalizer has something to extract.
RESPONSE_FORMAT_INSTRUCTIONS = Prompt(
    """
Respond with a JSON object in a ```json code block, shaped like:
{"summary": "<overview of the piece>", "mnemonics": [{"mnemonic": "<vocal phrase>", "pattern": "<instrument or section>", "description": "<what it helps remember>"}]}
"""
)

TRUNCATION_NOTICE = Prompt(
    """
Note: the document was too large and has been cut to its first {{ kept }} of {{ original }} characters. Base your answer only on the part you received and say so where it matters.
"""
)

INLINE_DOCUMENT = Prompt(
    """
{{ instruction }}
{% if filename %}
File name: {{ filename }}
{% endif %}
{% if encoding == "base64" %}
Base64 PDF content: {{ content }}
{% else %}
Document content:
{{ content }}
{% endif %}
"""
)

MNEMONICS_SYSTEM_PROMPT = (
    "You are an expert samba percussion teacher who creates helpful vocal mnemonics. "
    "Return ONLY valid JSON arrays in your responses."
)

MNEMONICS_PROMPT = Prompt(
    """
Based on this context about samba notation:

"{{ summary }}"

Create {{ count }} helpful vocal mnemonics that would help a musician remember common samba rhythm patterns.
A mnemonic is a verbal or spoken pattern that helps remember the rhythm.

For example:
- For a simple surdo pattern: "BUM-pause-BUM-pause"
- For a caixa pattern: "chi-chi-chi-CHI-chi-chi-CHI"

Return ONLY a JSON array of strings with {{ count }} different vocal mnemonics for different
common samba instruments (surdo, caixa, repinique, tamborim, agogo).
"""
)
